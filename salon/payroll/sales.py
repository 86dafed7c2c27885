# -*- coding: utf-8 -*-
from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from ..utils import ZERO, in_month, to_decimal
from .attendance import same_id


def sale_date(sale):
    return getattr(sale, "date", None) or getattr(sale, "created_at", None)


def sale_value(sale) -> Decimal:
    total = getattr(sale, "total", None)
    return to_decimal(total if total is not None else getattr(sale, "amount", None))


def attributed_to(sale, employee) -> bool:
    """По id мастера; старые продажи без id — по точному совпадению имени."""
    sid = getattr(sale, "specialist_id", None)
    if sid is not None:
        return same_id(sid, getattr(employee, "id", None))
    name = getattr(employee, "name", None)
    return bool(name) and getattr(sale, "specialist", None) == name


def attributed_sales_total(sales: Iterable, employee, month: int, year: int) -> Decimal:
    total = ZERO
    for s in sales:
        if attributed_to(s, employee) and in_month(sale_date(s), month, year):
            total += sale_value(s)
    return total
