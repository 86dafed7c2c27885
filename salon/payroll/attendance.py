# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from ..utils import ZERO, in_month, to_decimal, to_text

PRESENT = "present"
LATE = "late"
ABSENT = "absent"
LEAVE = "leave"

# подписи статусов из старых данных (арабский интерфейс)
STATUS_ALIASES = {
    "حاضر": PRESENT,
    "تأخير": LATE,
    "متأخر": LATE,
    "غائب": ABSENT,
    "إجازة": LEAVE,
}


# опоздание не может быть больше суток
MAX_LATE_MINUTES = 24 * 60


def late_minutes(v) -> int:
    x = to_decimal(v)
    if x <= 0:
        return 0
    return int(min(x, MAX_LATE_MINUTES))


def normalize_status(status) -> str:
    s = to_text(status)
    return STATUS_ALIASES.get(s, s.lower())


@dataclass(frozen=True)
class AttendanceSummary:
    present_days: int = 0
    late_days: int = 0
    absent_days: int = 0
    leave_days: int = 0
    total_work_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    total_late_minutes: int = 0


def same_id(a, b) -> bool:
    return a is not None and b is not None and str(a) == str(b)


def month_records(records: Iterable, employee_id, month: int, year: int) -> list:
    """Записи сотрудника за месяц (month с нуля), в исходном порядке."""
    return [
        r for r in records
        if same_id(getattr(r, "employee_id", None), employee_id)
        and in_month(getattr(r, "date", None), month, year)
    ]


def aggregate_attendance(records: Iterable, employee, month: int, year: int) -> AttendanceSummary:
    rows = month_records(records, getattr(employee, "id", None), month, year)
    shift_hours = to_decimal(getattr(employee, "shift_hours", None))

    present = late = absent = leave = 0
    work_hours = overtime = ZERO
    late_total = 0
    for r in rows:
        status = normalize_status(getattr(r, "status", None))
        if status in (PRESENT, LATE):
            present += 1
        if status == LATE:
            late += 1
            late_total += late_minutes(getattr(r, "late_minutes", None))
        elif status == ABSENT:
            absent += 1
        elif status == LEAVE:
            leave += 1

        hours = to_decimal(getattr(r, "work_hours", None))
        work_hours += hours
        # переработка считается по каждому дню отдельно
        if hours > shift_hours:
            overtime += hours - shift_hours

    return AttendanceSummary(
        present_days=present,
        late_days=late,
        absent_days=absent,
        leave_days=leave,
        total_work_hours=work_hours,
        overtime_hours=overtime,
        total_late_minutes=late_total,
    )
