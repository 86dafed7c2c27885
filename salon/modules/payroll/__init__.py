# -*- coding: utf-8 -*-
from __future__ import annotations

import io
import logging
import threading
from datetime import date

from flask import Blueprint, abort, current_app, flash, jsonify, redirect, request, send_file, url_for
from flask_login import current_user, login_required

from ...payroll import bundle_to_wire, compute_payslip, validate_bonus
from ...payroll.remote import PayslipClient, SelectionGuard
from ...payroll.report import MONEY_KEYS, export_xlsx, month_summary, payslip_lines
from ...security import ADMIN, MANAGER, roles_required
from ...stores import AttendanceStore, BonusStore, EmployeeStore, SaleStore
from ...utils import month_bounds, month_label, to_decimal, to_text

bp = Blueprint("payroll", __name__, url_prefix="/payroll")
log = logging.getLogger(__name__)

_guards: dict[int, SelectionGuard] = {}
_guards_lock = threading.Lock()


# ------------ helpers ---------------------------------------------------------
def _client() -> PayslipClient:
    client = current_app.extensions.get("payslip_client")
    if client is None:
        client = PayslipClient(current_app.config.get("PAYSLIP_API_URL"), current_app.config.get("PAYSLIP_API_TIMEOUT", 5.0))
        current_app.extensions["payslip_client"] = client
    return client


def _guard_for(user_id: int) -> SelectionGuard:
    with _guards_lock:
        return _guards.setdefault(user_id, SelectionGuard())


def _period(src) -> tuple[int, int]:
    """month (с нуля) и year из запроса; по умолчанию — текущий месяц."""
    today = date.today()
    try:
        month = int(src.get("month", today.month - 1))
        year = int(src.get("year", today.year))
    except (TypeError, ValueError):
        return today.month - 1, today.year
    if not 0 <= month <= 11:
        return today.month - 1, today.year
    return month, year


def _bundle(employee, month: int, year: int, server=None):
    return compute_payslip(
        employee,
        AttendanceStore.for_month(month, year, employee.id),
        SaleStore.for_month(month, year),
        BonusStore.for_month(month, year, employee.id),
        month,
        year,
        server=server,
    )


def _employee_or_redirect(employee_id):
    e = EmployeeStore.get(employee_id)
    if e is None:
        flash("Сотрудник не найден.", "warning")
    return e


def _summary(m: str | None) -> dict:
    _, _, month, year = month_bounds(m)
    client = _client()
    server_for = (lambda e: client.fetch(e.id, month, year)) if client.enabled else None
    return month_summary(
        EmployeeStore.active(),
        AttendanceStore.for_month(month, year),
        SaleStore.for_month(month, year),
        BonusStore.for_month(month, year),
        month,
        year,
        server_for=server_for,
    )


# ------------ list ------------------------------------------------------------
@bp.route("/", methods=["GET"])
@login_required
def index():
    summary = _summary(request.args.get("m"))
    rows = [
        {**r, **{k: float(r[k]) for k in MONEY_KEYS}, "overtime_hours": float(r["overtime_hours"])}
        for r in summary["rows"]
    ]
    return jsonify({
        "ok": True,
        "month": summary["month"],
        "year": summary["year"],
        "label": summary["label"],
        "rows": rows,
        "totals": {k: float(v) for k, v in summary["totals"].items()},
    })


@bp.route("/export", methods=["GET"])
@login_required
def export():
    summary = _summary(request.args.get("m"))
    data = export_xlsx(summary)
    name = f"payroll_{summary['year']}_{summary['month'] + 1:02d}.xlsx"
    return send_file(
        io.BytesIO(data),
        mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        as_attachment=True,
        download_name=name,
    )


# ------------ payslip ---------------------------------------------------------
@bp.route("/<int:employee_id>", methods=["GET"])
@login_required
def payslip(employee_id: int):
    employee = _employee_or_redirect(employee_id)
    if employee is None:
        return redirect(url_for("payroll.index"))
    month, year = _period(request.args)

    server = None
    client = _client()
    if client.enabled:
        guard = _guard_for(current_user.id)
        ticket = guard.select(employee.id, month, year)
        server = client.fetch(employee.id, month, year)
        if not guard.resolve(ticket, server):
            # пока ждали ответ, пользователь выбрал другой месяц/сотрудника
            return jsonify({"ok": False, "error": "stale_selection"}), 409

    bundle = _bundle(employee, month, year, server=server)
    return jsonify({
        "ok": True,
        "employee": {"id": employee.id, "name": employee.name, "position": employee.position or ""},
        "month": month,
        "year": year,
        "label": month_label(month, year),
        "payslip": bundle_to_wire(bundle),
    })


@bp.route("/<int:employee_id>/report", methods=["GET"])
@login_required
def report(employee_id: int):
    employee = _employee_or_redirect(employee_id)
    if employee is None:
        return redirect(url_for("payroll.index"))
    month, year = _period(request.args)
    client = _client()
    server = client.fetch(employee.id, month, year) if client.enabled else None
    bundle = _bundle(employee, month, year, server=server)
    return jsonify({
        "ok": True,
        "employee": employee.name,
        "label": month_label(month, year),
        "lines": payslip_lines(bundle, employee),
    })


# ------------ manual bonuses --------------------------------------------------
@bp.route("/<int:employee_id>/bonuses", methods=["POST"])
@roles_required(ADMIN, MANAGER)
def add_bonus(employee_id: int):
    employee = EmployeeStore.get(employee_id)
    if employee is None:
        abort(404)
    data = request.get_json(silent=True) or request.form
    amount, reason = data.get("amount"), data.get("reason")
    err = validate_bonus(amount, reason)
    if err:
        return jsonify({"ok": False, "error": err}), 400
    month, year = _period(data)

    b = BonusStore.add(
        employee_id=employee.id,
        employee_name=employee.name,
        month=month,
        year=year,
        amount=to_decimal(amount),
        reason=to_text(reason),
        added_by=current_user.display_name,
    )
    bundle = _bundle(employee, month, year)
    return jsonify({
        "ok": True,
        "id": b.id,
        "bonusesTotal": float(bundle.bonuses_total),
        "netSalaryWithBonuses": float(bundle.net_salary_with_bonuses),
    }), 201


@bp.route("/bonuses/<int:bonus_id>/delete", methods=["POST"])
@roles_required(ADMIN, MANAGER)
def delete_bonus(bonus_id: int):
    b = BonusStore.delete(bonus_id)
    if b is None:
        abort(404)
    return jsonify({"ok": True, "id": bonus_id})
