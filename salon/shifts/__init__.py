# -*- coding: utf-8 -*-
from .reconcile import (
    BALANCED,
    OVERAGE,
    SHORTAGE,
    CashComparison,
    ShiftCashSummary,
    classify,
    closing_fields,
    compare_cash,
    parse_cash,
    summarize_shift,
    validate_close,
)

__all__ = [
    "BALANCED",
    "OVERAGE",
    "SHORTAGE",
    "CashComparison",
    "ShiftCashSummary",
    "classify",
    "closing_fields",
    "compare_cash",
    "parse_cash",
    "summarize_shift",
    "validate_close",
]
