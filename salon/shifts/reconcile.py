# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable, Mapping

from ..overlay import overlay
from ..utils import ZERO, is_number, parse_decimal, to_datetime, to_decimal, to_text

CASH = "cash"
CARD = "card"
INSTAPAY = "instapay"

PAYMENT_ALIASES = {
    "نقدي": CASH,
    "بطاقة": CARD,
}

OVERAGE = "overage"
SHORTAGE = "shortage"
BALANCED = "balanced"


def payment_method(v) -> str:
    s = to_text(v)
    return PAYMENT_ALIASES.get(s, s.lower())


@dataclass(frozen=True)
class ShiftCashSummary:
    opening_balance: Decimal = ZERO
    total_sales: Decimal = ZERO
    discounts: Decimal = ZERO
    net_sales: Decimal = ZERO
    cash_payments: Decimal = ZERO
    card_payments: Decimal = ZERO
    instapay_payments: Decimal = ZERO
    services_sales: Decimal = ZERO
    products_sales: Decimal = ZERO
    transactions_count: int = 0
    cash_expenses: Decimal = ZERO
    # какие суммы взяты из самой смены, а не посчитаны по чекам
    from_shift: frozenset = frozenset()

    @property
    def expected_cash(self) -> Decimal:
        return self.opening_balance + self.cash_payments - self.cash_expenses


@dataclass(frozen=True)
class CashComparison:
    expected_cash: Decimal
    actual_cash: Decimal
    difference: Decimal
    status: str


def opening_balance(shift) -> Decimal:
    v = getattr(shift, "starting_cash", None)
    if v is None:
        v = getattr(shift, "opening_balance", None)
    return to_decimal(v)


def derive_from_sales(sales: Iterable) -> dict[str, Any]:
    sales = list(sales)
    by_method = {CASH: ZERO, CARD: ZERO, INSTAPAY: ZERO}
    services = products = discounts = ZERO
    for s in sales:
        amount = to_decimal(getattr(s, "amount", None))
        if getattr(s, "has_items", False):
            products += amount
        else:
            services += amount
        m = payment_method(getattr(s, "payment_method", None))
        if m in by_method:
            by_method[m] += amount
        subtotal = getattr(s, "subtotal", None)
        if getattr(s, "discount", None) and subtotal:
            discounts += to_decimal(subtotal) - amount
    return {
        "total_sales": services + products,
        "discounts": discounts,
        "cash_payments": by_method[CASH],
        "card_payments": by_method[CARD],
        "instapay_payments": by_method[INSTAPAY],
        "services_sales": services,
        "products_sales": products,
        "transactions_count": len(sales),
    }


def cash_expenses_since(expenses: Iterable, start, end=None) -> Decimal:
    """Наличные расходы с начала смены, у закрытой смены только до её конца."""
    start, end = to_datetime(start), to_datetime(end)
    if start is None:
        return ZERO
    total = ZERO
    for e in expenses:
        when = to_datetime(getattr(e, "date", None))
        if when is None or when < start or (end is not None and when > end):
            continue
        if payment_method(getattr(e, "payment_method", None)) == CASH:
            total += to_decimal(getattr(e, "amount", None))
    return total


def shift_totals(shift) -> dict[str, Any]:
    """Итоги, записанные в самой смене (если есть)."""
    details = getattr(shift, "sales_details", None) or {}
    if not isinstance(details, Mapping):
        details = {}
    return {
        "total_sales": getattr(shift, "total_sales", None),
        "cash_payments": details.get(CASH),
        "card_payments": details.get(CARD),
        "instapay_payments": details.get(INSTAPAY),
        "cash_expenses": getattr(shift, "total_expenses", None),
    }


def summarize_shift(shift, sales: Iterable, expenses: Iterable = ()) -> ShiftCashSummary:
    derived = derive_from_sales(sales)
    derived["cash_expenses"] = cash_expenses_since(
        expenses, getattr(shift, "start_time", None), getattr(shift, "end_time", None)
    )
    merged, taken = overlay(
        derived,
        shift_totals(shift),
        fields=["total_sales", "cash_payments", "card_payments", "instapay_payments", "cash_expenses"],
        accept=is_number,
        convert=lambda _, v: to_decimal(v),
    )
    if getattr(shift, "status", None) == "closed" and "total_sales" in taken:
        # при закрытии в смену записана сумма уже за вычетом скидок
        net_sales = merged["total_sales"]
        merged["total_sales"] = net_sales + merged["discounts"]
    else:
        net_sales = merged["total_sales"] - merged["discounts"]
    return ShiftCashSummary(
        opening_balance=opening_balance(shift),
        net_sales=net_sales,
        from_shift=frozenset(taken),
        **merged,
    )


def parse_cash(v) -> Decimal | None:
    return parse_decimal(v)


def classify(difference: Decimal) -> str:
    if difference > 0:
        return OVERAGE
    if difference < 0:
        return SHORTAGE
    return BALANCED


def compare_cash(summary: ShiftCashSummary, actual_cash: Decimal) -> CashComparison:
    diff = actual_cash - summary.expected_cash
    return CashComparison(
        expected_cash=summary.expected_cash,
        actual_cash=actual_cash,
        difference=diff,
        status=classify(diff),
    )


def validate_close(shift, actual_cash, reason, summary: ShiftCashSummary) -> str | None:
    """Код ошибки для пользователя или None, если смену можно закрыть."""
    if getattr(shift, "status", "open") == "closed":
        return "shift_closed"
    actual = parse_cash(actual_cash)
    if actual is None:
        return "no_actual_cash"
    if compare_cash(summary, actual).difference != 0 and not to_text(reason):
        return "no_difference_reason"
    return None


def closing_fields(summary: ShiftCashSummary, actual_cash: Decimal, reason: str = "", note: str = "", now: datetime | None = None) -> dict[str, Any]:
    cmp_ = compare_cash(summary, actual_cash)
    fields = {
        "end_time": now or datetime.utcnow(),
        "status": "closed",
        "final_cash": actual_cash,
        "total_sales": summary.net_sales,
        "sales_cash": summary.cash_payments,
        "sales_card": summary.card_payments,
        "sales_instapay": summary.instapay_payments,
        "total_expenses": summary.cash_expenses,
        "cash_difference": cmp_.difference,
        "note": note or "",
    }
    if cmp_.difference != 0:
        extra = f"\n[Δ={cmp_.difference:+}]"
        if to_text(reason):
            extra += f" причина: {to_text(reason)}"
        fields["note"] = (fields["note"] + extra).strip()
    return fields
