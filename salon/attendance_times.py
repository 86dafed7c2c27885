# -*- coding: utf-8 -*-
from __future__ import annotations

from decimal import Decimal

from .payroll.attendance import LATE, late_minutes, normalize_status


def time_to_minutes(s) -> int | None:
    """'HH:MM', 'HH:MM:SS' или ISO с 'T' -> минуты от полуночи."""
    if not isinstance(s, str) or not s.strip():
        return None
    part = s.strip()
    if "T" in part:
        part = part.split("T", 1)[1].split(".")[0]
    try:
        hh, mm = (int(p) for p in part.split(":")[:2])
    except ValueError:
        return None
    if not (0 <= hh <= 23 and 0 <= mm <= 59):
        return None
    return hh * 60 + mm


def late_minutes_for(status, check_in, given, work_start: str | None) -> int:
    """Явно указанное опоздание важнее; иначе считаем от времени прихода, если статус «опоздал»."""
    given = late_minutes(given)
    if given > 0:
        return given
    if normalize_status(status) != LATE:
        return 0
    came = time_to_minutes(check_in)
    start = time_to_minutes(work_start)
    if came is None or start is None:
        return 0
    return max(0, came - start)


def work_hours_between(check_in, check_out) -> Decimal | None:
    came = time_to_minutes(check_in)
    left = time_to_minutes(check_out)
    if came is None or left is None or left < came:
        return None
    return Decimal(left - came) / Decimal(60)
