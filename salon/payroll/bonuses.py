# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable

from ..utils import ZERO, to_date, to_decimal, to_text
from .attendance import same_id


@dataclass(frozen=True)
class ManualBonus:
    """Премия, выданная вручную. Складывается поверх расчёта."""
    id: int | None
    employee_id: int | str
    month: int
    year: int
    amount: Decimal
    reason: str
    added_by: str = ""
    date: date | None = None

    @classmethod
    def from_record(cls, r) -> "ManualBonus":
        return cls(
            id=getattr(r, "id", None),
            employee_id=getattr(r, "employee_id", None),
            month=int(getattr(r, "month", 0) or 0),
            year=int(getattr(r, "year", 0) or 0),
            amount=to_decimal(getattr(r, "amount", None)),
            reason=getattr(r, "reason", "") or "",
            added_by=getattr(r, "added_by", "") or "",
            date=to_date(getattr(r, "date", None)),
        )


def validate_bonus(amount, reason) -> str | None:
    if amount in (None, "") or to_decimal(amount) <= 0:
        return "no_amount"
    if not to_text(reason):
        return "no_reason"
    return None


class BonusLedger:
    def __init__(self, bonuses: Iterable = ()):
        self._items = [b if isinstance(b, ManualBonus) else ManualBonus.from_record(b) for b in bonuses]

    def for_month(self, employee_id, month: int, year: int) -> list[ManualBonus]:
        return [
            b for b in self._items
            if same_id(b.employee_id, employee_id) and b.month == month and b.year == year
        ]

    def total(self, employee_id, month: int, year: int) -> Decimal:
        return sum((b.amount for b in self.for_month(employee_id, month, year)), ZERO)
