# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..utils import ZERO, to_decimal, to_text
from .attendance import AttendanceSummary

MONTHLY = "monthly"
DAILY = "daily"
HOURLY = "hourly"

SALARY_TYPE_ALIASES = {
    "شهري": MONTHLY,
    "يومي": DAILY,
    "بالساعة": HOURLY,
}

OVERTIME_MULTIPLIER = Decimal("1.5")
HUNDRED = Decimal("100")


def normalize_salary_type(v) -> str:
    s = to_text(v)
    s = SALARY_TYPE_ALIASES.get(s, s.lower())
    return s if s in (DAILY, HOURLY) else MONTHLY


def _div(a: Decimal, b: Decimal) -> Decimal:
    return a / b if b else ZERO


def _num(x: Decimal) -> str:
    return f"{x.normalize():f}" if x == x.to_integral_value() else f"{x:.2f}"


@dataclass(frozen=True)
class ComputedIncentive:
    """Начисляется системой: комиссия с продаж и переработка. Не путать с ручной премией."""
    commission: Decimal = ZERO
    overtime_pay: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.commission + self.overtime_pay


@dataclass(frozen=True)
class Earnings:
    base_salary: Decimal
    salary_note: str
    hourly_rate: Decimal
    overtime_hours: Decimal
    total_sales_amount: Decimal
    incentive: ComputedIncentive

    @property
    def commission(self) -> Decimal:
        return self.incentive.commission

    @property
    def overtime_pay(self) -> Decimal:
        return self.incentive.overtime_pay

    @property
    def total_earnings(self) -> Decimal:
        return self.base_salary + self.incentive.commission + self.incentive.overtime_pay


def base_salary(employee, att: AttendanceSummary) -> tuple[Decimal, str]:
    kind = normalize_salary_type(getattr(employee, "salary_type", None))
    base = to_decimal(getattr(employee, "base_salary", None))
    if kind == DAILY:
        work_days = to_decimal(getattr(employee, "work_days", None))
        amount = _div(base, work_days) * att.present_days
        return amount, f"дневной оклад: {_num(base)} ÷ {_num(work_days)} дн. × {att.present_days} дн. присутствия"
    if kind == HOURLY:
        rate = to_decimal(getattr(employee, "hourly_rate", None))
        amount = rate * att.total_work_hours
        return amount, f"почасовая оплата: {_num(rate)} × {att.total_work_hours:.2f} ч"
    return base, "фиксированный месячный оклад"


def effective_hourly_rate(employee) -> Decimal:
    if normalize_salary_type(getattr(employee, "salary_type", None)) == HOURLY:
        return to_decimal(getattr(employee, "hourly_rate", None))
    base = to_decimal(getattr(employee, "base_salary", None))
    hours = to_decimal(getattr(employee, "work_days", None)) * to_decimal(getattr(employee, "shift_hours", None))
    return _div(base, hours)


def commission_rate(employee) -> Decimal:
    return to_decimal(getattr(employee, "commission", None))


def calculate_earnings(employee, att: AttendanceSummary, total_sales_amount: Decimal = ZERO) -> Earnings:
    base, note = base_salary(employee, att)
    rate = effective_hourly_rate(employee)
    overtime_pay = att.overtime_hours * rate * OVERTIME_MULTIPLIER

    pct = commission_rate(employee)
    commission = total_sales_amount * pct / HUNDRED if pct > 0 else ZERO

    return Earnings(
        base_salary=base,
        salary_note=note,
        hourly_rate=rate,
        overtime_hours=att.overtime_hours,
        total_sales_amount=total_sales_amount,
        incentive=ComputedIncentive(commission=commission, overtime_pay=overtime_pay),
    )
