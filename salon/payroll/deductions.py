# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable

from ..utils import ZERO, to_date, to_decimal
from .attendance import AttendanceSummary


@dataclass(frozen=True)
class AdvanceEntry:
    date: date | None
    amount: Decimal


@dataclass(frozen=True)
class Deductions:
    late_deduction: Decimal = ZERO
    absent_deduction: Decimal = ZERO
    custom_deductions: Decimal = ZERO
    advances: Decimal = ZERO
    advance_details: list[AdvanceEntry] = field(default_factory=list)

    @property
    def total_deductions(self) -> Decimal:
        return self.late_deduction + self.absent_deduction + self.custom_deductions + self.advances


def collect_advances(month_records: Iterable) -> tuple[Decimal, list[AdvanceEntry]]:
    """Авансы из записей посещаемости месяца; в деталях только записи с авансом > 0."""
    total = ZERO
    details: list[AdvanceEntry] = []
    for r in month_records:
        amount = to_decimal(getattr(r, "advance", None))
        total += amount
        if amount > 0:
            details.append(AdvanceEntry(date=to_date(getattr(r, "date", None)), amount=amount))
    return total, details


def calculate_deductions(employee, att: AttendanceSummary, month_records: Iterable) -> Deductions:
    late_rate = to_decimal(getattr(employee, "late_penalty_per_minute", None))
    absence_rate = to_decimal(getattr(employee, "absence_penalty_per_day", None))
    advances, details = collect_advances(month_records)
    return Deductions(
        late_deduction=att.total_late_minutes * late_rate,
        absent_deduction=att.absent_days * absence_rate,
        custom_deductions=to_decimal(getattr(employee, "custom_deductions", None)),
        advances=advances,
        advance_details=details,
    )
