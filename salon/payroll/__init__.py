# -*- coding: utf-8 -*-
from .attendance import AttendanceSummary, aggregate_attendance, month_records, normalize_status
from .bonuses import BonusLedger, ManualBonus, validate_bonus
from .deductions import AdvanceEntry, Deductions, calculate_deductions
from .earnings import ComputedIncentive, Earnings, calculate_earnings, effective_hourly_rate
from .payslip import (
    PayslipResult,
    PayslipWithBonuses,
    bundle_to_wire,
    compute_payslip,
    local_payslip,
    reconcile,
    with_bonuses,
)
from .sales import attributed_sales_total

__all__ = [
    "AdvanceEntry",
    "AttendanceSummary",
    "BonusLedger",
    "ComputedIncentive",
    "Deductions",
    "Earnings",
    "ManualBonus",
    "PayslipResult",
    "PayslipWithBonuses",
    "aggregate_attendance",
    "attributed_sales_total",
    "bundle_to_wire",
    "calculate_deductions",
    "calculate_earnings",
    "compute_payslip",
    "effective_hourly_rate",
    "local_payslip",
    "month_records",
    "normalize_status",
    "reconcile",
    "validate_bonus",
    "with_bonuses",
]
