# -*- coding: utf-8 -*-
from __future__ import annotations

import logging

from flask import Blueprint, abort, jsonify, request
from flask_login import current_user, login_required

from ...security import ADMIN, MANAGER
from ...shifts import closing_fields, compare_cash, parse_cash, summarize_shift, validate_close
from ...stores import ExpenseStore, SaleStore, ShiftAlreadyOpen, ShiftStore
from ...utils import ZERO, month_bounds, to_text

bp = Blueprint("shifts", __name__, url_prefix="/shifts")
log = logging.getLogger(__name__)


# ------------ helpers ---------------------------------------------------------
def _f(v):
    return None if v is None else float(v)


def _shift_json(s) -> dict:
    return {
        "id": s.id,
        "cashier": s.cashier,
        "user_id": s.user_id,
        "status": s.status,
        "start_time": s.start_time.isoformat() if s.start_time else None,
        "end_time": s.end_time.isoformat() if s.end_time else None,
        "starting_cash": _f(s.starting_cash),
        "total_sales": _f(s.total_sales),
        "final_cash": _f(s.final_cash),
        "cash_difference": _f(s.cash_difference),
        "note": s.note or "",
    }


def _summary_json(summary) -> dict:
    return {
        "opening_balance": float(summary.opening_balance),
        "total_sales": float(summary.total_sales),
        "discounts": float(summary.discounts),
        "net_sales": float(summary.net_sales),
        "cash_payments": float(summary.cash_payments),
        "card_payments": float(summary.card_payments),
        "instapay_payments": float(summary.instapay_payments),
        "services_sales": float(summary.services_sales),
        "products_sales": float(summary.products_sales),
        "transactions_count": summary.transactions_count,
        "cash_expenses": float(summary.cash_expenses),
        "expected_cash": float(summary.expected_cash),
        "from_shift": sorted(summary.from_shift),
    }


def _load(shift_id: int):
    s = ShiftStore.get(shift_id)
    if s is None:
        abort(404)
    # кассир видит только свои смены
    if current_user.role not in (ADMIN, MANAGER) and s.user_id != current_user.id:
        abort(403)
    return s


def _summarize(s):
    return summarize_shift(s, SaleStore.for_shift(s), ExpenseStore.since(s.start_time, s.end_time))


# ------------ list ------------------------------------------------------------
@bp.route("/", methods=["GET"])
@login_required
def index():
    status = (request.args.get("status") or "").strip() or None
    start = end = None
    if request.args.get("m"):
        start, end, _, _ = month_bounds(request.args.get("m"))
    shifts = ShiftStore.listing(status=status, start=start, end=end)
    if current_user.role not in (ADMIN, MANAGER):
        shifts = [s for s in shifts if s.user_id == current_user.id]

    totals = {"total_sales": ZERO, "cash_difference": ZERO}
    for s in shifts:
        totals["total_sales"] += s.total_sales or ZERO
        totals["cash_difference"] += s.cash_difference or ZERO
    return jsonify({
        "ok": True,
        "shifts": [_shift_json(s) for s in shifts],
        "totals": {k: float(v) for k, v in totals.items()},
    })


# ------------ open ------------------------------------------------------------
@bp.route("/open", methods=["POST"])
@login_required
def open_shift():
    data = request.get_json(silent=True) or request.form
    raw = data.get("starting_cash")
    starting_cash = ZERO if raw in (None, "") else parse_cash(raw)
    if starting_cash is None or starting_cash < 0:
        return jsonify({"ok": False, "error": "bad_starting_cash"}), 400
    try:
        s = ShiftStore.open(current_user, starting_cash)
    except ShiftAlreadyOpen:
        return jsonify({"ok": False, "error": "shift_already_open"}), 400
    return jsonify({"ok": True, "shift": _shift_json(s)}), 201


# ------------ summary / close -------------------------------------------------
@bp.route("/<int:shift_id>/summary", methods=["GET"])
@login_required
def summary(shift_id: int):
    s = _load(shift_id)
    summ = _summarize(s)
    out = {"ok": True, "shift": _shift_json(s), "summary": _summary_json(summ)}
    actual = parse_cash(request.args.get("actual_cash"))
    if actual is not None:
        cmp_ = compare_cash(summ, actual)
        out["comparison"] = {
            "expected_cash": float(cmp_.expected_cash),
            "actual_cash": float(cmp_.actual_cash),
            "difference": float(cmp_.difference),
            "status": cmp_.status,
        }
    return jsonify(out)


@bp.route("/<int:shift_id>/close", methods=["POST"])
@login_required
def close(shift_id: int):
    s = _load(shift_id)
    data = request.get_json(silent=True) or request.form
    actual_raw = data.get("actual_cash")
    reason = to_text(data.get("reason"))

    summ = _summarize(s)
    err = validate_close(s, actual_raw, reason, summ)
    if err:
        return jsonify({"ok": False, "error": err}), 400

    fields = closing_fields(summ, parse_cash(actual_raw), reason=reason, note=s.note or "")
    ShiftStore.update(s, fields)
    log.info(
        "shift closed id=%s user=%s expected=%s actual=%s diff=%s",
        s.id, s.user_id, summ.expected_cash, s.final_cash, s.cash_difference,
    )
    return jsonify({"ok": True, "shift": _shift_json(s), "summary": _summary_json(summ)})
