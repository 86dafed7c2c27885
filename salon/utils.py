# -*- coding: utf-8 -*-
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

MONTHS_RU = [
    "Январь","Февраль","Март","Апрель","Май","Июнь",
    "Июль","Август","Сентябрь","Октябрь","Ноябрь","Декабрь"
]

ZERO = Decimal("0")


def to_decimal(v: Any) -> Decimal:
    """Число из чего угодно; мусор, пустое и None дают 0."""
    if v is None or isinstance(v, bool):
        return ZERO
    if isinstance(v, Decimal):
        return v if v.is_finite() else ZERO
    try:
        x = Decimal(str(v).strip().replace(",", "."))
    except (InvalidOperation, ValueError):
        return ZERO
    return x if x.is_finite() else ZERO


def parse_decimal(v: Any) -> Decimal | None:
    """Как to_decimal, но мусор и пустое дают None, а не 0."""
    if v is None or isinstance(v, bool):
        return None
    if is_number(v):
        return to_decimal(v)
    s = str(v).strip()
    if not s:
        return None
    try:
        x = Decimal(s.replace(",", "."))
    except InvalidOperation:
        return None
    return x if x.is_finite() else None


def to_text(v: Any) -> str:
    """Строка без пробелов по краям; None даёт пустую строку, число превращается в текст."""
    return "" if v is None else str(v).strip()


def is_number(v: Any) -> bool:
    return isinstance(v, (int, float, Decimal)) and not isinstance(v, bool)


def to_date(x) -> date | None:
    if x in (None, ""):
        return None
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    try:
        y, m, d = map(int, str(x)[:10].split("-"))
        return date(y, m, d)
    except (TypeError, ValueError):
        return None


def to_datetime(x) -> datetime | None:
    if x in (None, ""):
        return None
    if isinstance(x, datetime):
        return x
    if isinstance(x, date):
        return datetime(x.year, x.month, x.day)
    try:
        return datetime.fromisoformat(str(x).replace("Z", ""))
    except ValueError:
        d = to_date(x)
        return to_datetime(d) if d else None


def in_month(value, month: int, year: int) -> bool:
    """month — с нуля (0 = январь)."""
    d = to_date(value)
    return bool(d) and d.month == month + 1 and d.year == year


def month_bounds(qs: str | None) -> tuple[date, date, int, int]:
    """'YYYY-MM' -> (первый день, первый день следующего, месяц с нуля, год)."""
    today = date.today()
    try:
        y, m = map(int, (qs or "").split("-"))
        first = date(y, m, 1)
    except ValueError:
        first = date(today.year, today.month, 1)
    end = date(first.year + (1 if first.month == 12 else 0), 1 if first.month == 12 else first.month + 1, 1)
    return first, end, first.month - 1, first.year


def month_label(month: int, year: int) -> str:
    return f"{MONTHS_RU[month % 12]} {year}"
