# -*- coding: utf-8 -*-
from __future__ import annotations

from datetime import date

from flask import Blueprint, abort, current_app, jsonify, request

from ...attendance_times import late_minutes_for, work_hours_between
from ...payroll.attendance import ABSENT, LATE, LEAVE, PRESENT, normalize_status
from ...security import ADMIN, MANAGER, roles_required
from ...stores import AttendanceStore, EmployeeStore
from ...utils import to_date, to_decimal, to_text

bp = Blueprint("attendance", __name__, url_prefix="/attendance")

KNOWN_STATUSES = {PRESENT, LATE, ABSENT, LEAVE}


@bp.route("/", methods=["POST"])
@roles_required(ADMIN, MANAGER)
def record():
    data = request.get_json(silent=True) or request.form
    employee = EmployeeStore.get(data.get("employee_id"))
    if employee is None:
        abort(404)

    day = to_date(data.get("date")) if data.get("date") else date.today()
    if day is None:
        return jsonify({"ok": False, "error": "bad_date"}), 400
    status = normalize_status(data.get("status"))
    if status not in KNOWN_STATUSES:
        return jsonify({"ok": False, "error": "bad_status"}), 400

    check_in = to_text(data.get("check_in"))
    check_out = to_text(data.get("check_out"))
    work_hours = to_text(data.get("work_hours"))
    if not work_hours:
        derived = work_hours_between(check_in, check_out)
        work_hours = f"{derived:.2f}" if derived is not None else None
    advance = data.get("advance")

    rec = AttendanceStore.add(
        employee_id=employee.id,
        date=day,
        status=status,
        check_in=check_in,
        check_out=check_out,
        work_hours=work_hours,
        late_minutes=late_minutes_for(status, check_in, data.get("late_minutes"), current_app.config.get("WORK_START_TIME")),
        advance=to_decimal(advance) if advance not in (None, "") else None,
        notes=to_text(data.get("notes")),
    )
    return jsonify({
        "ok": True,
        "id": rec.id,
        "status": rec.status,
        "work_hours": rec.work_hours,
        "late_minutes": rec.late_minutes,
    }), 201
