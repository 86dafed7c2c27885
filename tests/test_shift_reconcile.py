# -*- coding: utf-8 -*-
from datetime import datetime
from decimal import Decimal

from conftest import ns

from salon.shifts import (
    BALANCED,
    OVERAGE,
    SHORTAGE,
    closing_fields,
    compare_cash,
    parse_cash,
    summarize_shift,
    validate_close,
)

START = datetime(2024, 3, 5, 9, 0)


def shift(**kw):
    base = dict(
        id=1,
        status="open",
        start_time=START,
        starting_cash=Decimal("500"),
        total_sales=None,
        total_expenses=None,
        sales_details={"cash": None, "card": None, "instapay": None},
    )
    base.update(kw)
    return ns(**base)


def sale(amount, method="cash", **kw):
    base = dict(amount=amount, payment_method=method, has_items=False, discount=None, subtotal=None)
    base.update(kw)
    return ns(**base)


def expense(amount, method="cash", when=START):
    return ns(amount=amount, payment_method=method, date=when)


def test_expected_cash_shortage_scenario():
    s = shift()
    summary = summarize_shift(s, [sale(700), sale(500), sale(300, "card")], [expense(200)])
    assert summary.cash_payments == Decimal("1200")
    assert summary.cash_expenses == Decimal("200")
    assert summary.expected_cash == Decimal("1500")

    cmp_ = compare_cash(summary, Decimal("1480"))
    assert cmp_.difference == Decimal("-20")
    assert cmp_.status == SHORTAGE

    assert validate_close(s, "1480", "", summary) == "no_difference_reason"
    assert validate_close(s, "1480", "   ", summary) == "no_difference_reason"
    assert validate_close(s, "1480", "сдача клиенту", summary) is None


def test_classification():
    summary = summarize_shift(shift(), [sale(100)])
    assert compare_cash(summary, Decimal("600")).status == BALANCED
    assert compare_cash(summary, Decimal("650")).status == OVERAGE
    assert validate_close(shift(), "600", "", summary) is None


def test_breakdown_from_sales():
    sales = [
        sale(90, "cash", discount=10, subtotal=100),
        sale(200, "بطاقة"),
        sale(50, "instapay", has_items=True),
        sale(40, "نقدي", has_items=True),
    ]
    summary = summarize_shift(shift(), sales)
    assert summary.total_sales == Decimal("380")
    assert summary.discounts == Decimal("10")
    assert summary.net_sales == Decimal("370")
    assert summary.cash_payments == Decimal("130")
    assert summary.card_payments == Decimal("200")
    assert summary.instapay_payments == Decimal("50")
    assert summary.services_sales == Decimal("290")
    assert summary.products_sales == Decimal("90")
    assert summary.transactions_count == 4
    assert summary.from_shift == frozenset()


def test_only_cash_expenses_after_start_count():
    expenses = [
        expense(100),
        expense(70, "card"),
        expense(30, when=datetime(2024, 3, 5, 8, 59)),
        expense(20, when="2024-03-05T12:00:00Z"),
    ]
    summary = summarize_shift(shift(), [], expenses)
    assert summary.cash_expenses == Decimal("120")
    assert summarize_shift(shift(start_time=None), [], expenses).cash_expenses == 0


def test_shift_totals_override_numeric_fields_only():
    s = shift(
        total_sales=Decimal("1000"),
        total_expenses="garbage",
        sales_details={"cash": Decimal("800"), "card": None, "instapay": Decimal("0")},
    )
    summary = summarize_shift(s, [sale(100), sale(50, "card")], [expense(10)])
    assert summary.total_sales == Decimal("1000")
    assert summary.cash_payments == Decimal("800")
    assert summary.card_payments == Decimal("50")
    assert summary.instapay_payments == Decimal("0")
    assert summary.cash_expenses == Decimal("10")
    assert summary.from_shift == {"total_sales", "cash_payments", "instapay_payments"}
    assert summary.expected_cash == Decimal("1290")


def test_validate_close_errors():
    summary = summarize_shift(shift(), [])
    assert validate_close(shift(status="closed"), "500", "", summary) == "shift_closed"
    assert validate_close(shift(), None, "", summary) == "no_actual_cash"
    assert validate_close(shift(), "", "", summary) == "no_actual_cash"
    assert validate_close(shift(), "много", "", summary) == "no_actual_cash"


def test_parse_cash():
    assert parse_cash("1 480") is None
    assert parse_cash("1480,50") == Decimal("1480.50")
    assert parse_cash(0) == Decimal("0")
    assert parse_cash("NaN") is None
    assert parse_cash(True) is None


def test_closing_fields_snapshot():
    summary = summarize_shift(shift(), [sale(1200), sale(300, "card", discount=20, subtotal=320)], [expense(200)])
    now = datetime(2024, 3, 5, 21, 0)
    fields = closing_fields(summary, Decimal("1480"), reason="сдача клиенту", note="смена", now=now)
    assert fields["status"] == "closed"
    assert fields["end_time"] == now
    assert fields["final_cash"] == Decimal("1480")
    assert fields["total_sales"] == summary.net_sales == Decimal("1480")
    assert fields["sales_cash"] == Decimal("1200")
    assert fields["sales_card"] == Decimal("300")
    assert fields["cash_difference"] == Decimal("-20")
    assert fields["note"] == "смена\n[Δ=-20] причина: сдача клиенту"

    balanced = closing_fields(summary, Decimal("1500"), now=now)
    assert balanced["note"] == ""
    assert balanced["cash_difference"] == 0


def test_closed_shift_summary_is_stable():
    sales = [sale(90, discount=10, subtotal=100)]
    now = datetime(2024, 3, 5, 21, 0)
    at_close = summarize_shift(shift(), sales, [expense(20)])
    assert at_close.net_sales == Decimal("80")
    assert at_close.expected_cash == Decimal("570")

    fields = closing_fields(at_close, Decimal("570"), now=now)
    assert fields["total_expenses"] == Decimal("20")
    closed = shift(
        status="closed",
        end_time=fields["end_time"],
        total_sales=fields["total_sales"],
        total_expenses=fields["total_expenses"],
        sales_details={"cash": fields["sales_cash"], "card": fields["sales_card"], "instapay": fields["sales_instapay"]},
    )
    later = [expense(20), expense(300, when=datetime(2024, 3, 5, 22, 0))]
    after = summarize_shift(closed, sales, later)
    assert after.net_sales == Decimal("80")
    assert after.total_sales == Decimal("90")
    assert after.cash_expenses == Decimal("20")
    assert after.expected_cash == Decimal("570")


def test_expenses_after_shift_end_are_ignored():
    end = datetime(2024, 3, 5, 18, 0)
    expenses = [expense(50), expense(300, when=datetime(2024, 3, 5, 19, 0))]
    summary = summarize_shift(shift(end_time=end), [], expenses)
    assert summary.cash_expenses == Decimal("50")


def test_numeric_reason_is_accepted():
    summary = summarize_shift(shift(), [sale(1000)])
    assert validate_close(shift(), "1490", 42, summary) is None
    fields = closing_fields(summary, Decimal("1490"), reason=42)
    assert fields["note"] == "[Δ=-10] причина: 42"
