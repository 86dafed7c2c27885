# -*- coding: utf-8 -*-
"""
Расчётный лист сотрудника за месяц.

Локальный расчёт (посещаемость, продажи, оклад, удержания) собирается в
``PayslipResult``; если сервер прислал свой расчёт, его поля перекрывают
локальные по одному, а не целиком. Ручные премии добавляются в самом конце,
независимо от того, откуда взялись базовые суммы.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, Mapping

from ..overlay import overlay
from ..utils import ZERO, parse_decimal, to_date, to_decimal
from .attendance import aggregate_attendance, month_records
from .bonuses import BonusLedger
from .deductions import AdvanceEntry, calculate_deductions
from .earnings import calculate_earnings, commission_rate
from .sales import attributed_sales_total


@dataclass(frozen=True)
class PayslipResult:
    base_salary: Decimal = ZERO
    salary_note: str = ""
    commission: Decimal = ZERO
    total_sales_amount: Decimal = ZERO
    overtime_pay: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    total_earnings: Decimal = ZERO
    late_deduction: Decimal = ZERO
    absent_deduction: Decimal = ZERO
    custom_deductions: Decimal = ZERO
    advances: Decimal = ZERO
    advance_details: list[AdvanceEntry] = field(default_factory=list)
    total_deductions: Decimal = ZERO
    net_salary: Decimal = ZERO
    present_days: int = 0
    late_days: int = 0
    absent_days: int = 0
    leave_days: int = 0
    total_work_hours: Decimal = ZERO
    total_late_minutes: int = 0
    # поля, пришедшие с сервера
    server_fields: frozenset = frozenset()

    @property
    def from_server(self) -> bool:
        return bool(self.server_fields)


# snake_case <-> camelCase ответа сервера
WIRE_NAMES = {
    "base_salary": "baseSalary",
    "salary_note": "salaryNote",
    "commission": "commission",
    "total_sales_amount": "totalSalesAmount",
    "overtime_pay": "overtimePay",
    "overtime_hours": "overtimeHours",
    "total_earnings": "totalEarnings",
    "late_deduction": "lateDeduction",
    "absent_deduction": "absentDeduction",
    "custom_deductions": "customDeductions",
    "advances": "advances",
    "advance_details": "advanceDetails",
    "total_deductions": "totalDeductions",
    "net_salary": "netSalary",
    "present_days": "presentDays",
    "late_days": "lateDays",
    "absent_days": "absentDays",
    "leave_days": "leaveDays",
    "total_work_hours": "totalWorkHours",
    "total_late_minutes": "totalLateMinutes",
}

COUNT_FIELDS = {"present_days", "late_days", "absent_days", "leave_days", "total_late_minutes"}
MAX_COUNT = 100_000

# net_salary всегда пересчитывается из итогов
OVERLAY_FIELDS = [f for f in WIRE_NAMES if f != "net_salary"]


def _accept(v: Any) -> bool:
    return v is not None


def _advance_details(v) -> list[AdvanceEntry]:
    out = []
    for it in v or []:
        if isinstance(it, Mapping):
            out.append(AdvanceEntry(date=to_date(it.get("date")), amount=to_decimal(it.get("amount"))))
    return out


def _convert(name: str, v: Any) -> Any:
    if name == "salary_note":
        return str(v)
    if name == "advance_details":
        return _advance_details(v)
    if name in COUNT_FIELDS:
        return int(to_decimal(v))
    return to_decimal(v)


def _wire_valid(name: str, v: Any) -> bool:
    if v is None:
        return False
    if name == "salary_note":
        return isinstance(v, str)
    if name == "advance_details":
        return isinstance(v, list)
    # суммы могут прийти строкой ("1500.00")
    x = parse_decimal(v)
    if x is None:
        return False
    return name not in COUNT_FIELDS or abs(x) <= MAX_COUNT


def parse_server_payslip(payload: Mapping[str, Any] | None) -> dict[str, Any]:
    """Ответ сервера -> поля PayslipResult; нечисловой мусор отбрасывается."""
    if not isinstance(payload, Mapping):
        return {}
    out = {}
    for name, wire in WIRE_NAMES.items():
        v = payload.get(wire, payload.get(name))
        if _wire_valid(name, v):
            out[name] = v
    return out


def reconcile(local: PayslipResult, server: Mapping[str, Any] | None) -> PayslipResult:
    derived = {f.name: getattr(local, f.name) for f in dataclasses.fields(local)}
    merged, taken = overlay(
        derived,
        parse_server_payslip(server),
        fields=OVERLAY_FIELDS,
        accept=_accept,
        convert=_convert,
    )
    merged["net_salary"] = merged["total_earnings"] - merged["total_deductions"]
    merged["server_fields"] = frozenset(taken)
    return PayslipResult(**merged)


def local_payslip(employee, attendance: Iterable, sales: Iterable, month: int, year: int) -> PayslipResult:
    attendance = list(attendance)
    att = aggregate_attendance(attendance, employee, month, year)
    rows = month_records(attendance, getattr(employee, "id", None), month, year)

    total_sales = ZERO
    if commission_rate(employee) > 0:
        total_sales = attributed_sales_total(sales, employee, month, year)

    earn = calculate_earnings(employee, att, total_sales)
    ded = calculate_deductions(employee, att, rows)

    return PayslipResult(
        base_salary=earn.base_salary,
        salary_note=earn.salary_note,
        commission=earn.commission,
        total_sales_amount=earn.total_sales_amount,
        overtime_pay=earn.overtime_pay,
        overtime_hours=earn.overtime_hours,
        total_earnings=earn.total_earnings,
        late_deduction=ded.late_deduction,
        absent_deduction=ded.absent_deduction,
        custom_deductions=ded.custom_deductions,
        advances=ded.advances,
        advance_details=ded.advance_details,
        total_deductions=ded.total_deductions,
        net_salary=earn.total_earnings - ded.total_deductions,
        present_days=att.present_days,
        late_days=att.late_days,
        absent_days=att.absent_days,
        leave_days=att.leave_days,
        total_work_hours=att.total_work_hours,
        total_late_minutes=att.total_late_minutes,
    )


@dataclass(frozen=True)
class PayslipWithBonuses:
    payslip: PayslipResult
    bonuses: list = field(default_factory=list)
    bonuses_total: Decimal = ZERO

    @property
    def total_earnings_with_bonuses(self) -> Decimal:
        return self.payslip.total_earnings + self.bonuses_total

    @property
    def net_salary_with_bonuses(self) -> Decimal:
        return self.total_earnings_with_bonuses - self.payslip.total_deductions


def with_bonuses(result: PayslipResult, ledger: BonusLedger, employee_id, month: int, year: int) -> PayslipWithBonuses:
    return PayslipWithBonuses(
        payslip=result,
        bonuses=ledger.for_month(employee_id, month, year),
        bonuses_total=ledger.total(employee_id, month, year),
    )


def compute_payslip(
    employee,
    attendance: Iterable,
    sales: Iterable,
    bonuses: Iterable,
    month: int,
    year: int,
    server: Mapping[str, Any] | None = None,
) -> PayslipWithBonuses:
    result = reconcile(local_payslip(employee, attendance, sales, month, year), server)
    return with_bonuses(result, BonusLedger(bonuses), getattr(employee, "id", None), month, year)


def _wire_value(v):
    if isinstance(v, Decimal):
        return float(v)
    if isinstance(v, list):
        return [
            {"date": e.date.isoformat() if e.date else None, "amount": float(e.amount)}
            for e in v
        ]
    return v


def to_wire(result: PayslipResult) -> dict[str, Any]:
    return {wire: _wire_value(getattr(result, name)) for name, wire in WIRE_NAMES.items()}


def bundle_to_wire(bundle: PayslipWithBonuses) -> dict[str, Any]:
    out = to_wire(bundle.payslip)
    out.update({
        "source": "server" if bundle.payslip.from_server else "local",
        "serverFields": sorted(WIRE_NAMES[f] for f in bundle.payslip.server_fields),
        "bonuses": [
            {
                "id": b.id,
                "amount": float(b.amount),
                "reason": b.reason,
                "addedBy": b.added_by,
                "date": b.date.isoformat() if b.date else None,
            }
            for b in bundle.bonuses
        ],
        "bonusesTotal": float(bundle.bonuses_total),
        "totalEarningsWithBonuses": float(bundle.total_earnings_with_bonuses),
        "netSalaryWithBonuses": float(bundle.net_salary_with_bonuses),
    })
    return out
