# -*- coding: utf-8 -*-
from decimal import Decimal

from conftest import day, employee, ns

from salon.payroll.attendance import AttendanceSummary, aggregate_attendance
from salon.payroll.deductions import calculate_deductions
from salon.payroll.earnings import (
    ComputedIncentive,
    calculate_earnings,
    effective_hourly_rate,
    normalize_salary_type,
)
from salon.payroll.sales import attributed_sales_total

MARCH = 2


def test_daily_salary_scenario():
    e = employee(salary_type="daily", base_salary=2600, work_days=26)
    earn = calculate_earnings(e, AttendanceSummary(present_days=20))
    assert earn.base_salary == Decimal("2000")
    assert "дневной оклад" in earn.salary_note


def test_monthly_salary_ignores_attendance():
    e = employee(salary_type="monthly", base_salary=6000)
    earn = calculate_earnings(e, AttendanceSummary(present_days=3))
    assert earn.base_salary == Decimal("6000")
    assert earn.salary_note == "фиксированный месячный оклад"


def test_hourly_salary():
    e = employee(salary_type="hourly", hourly_rate=40)
    earn = calculate_earnings(e, AttendanceSummary(total_work_hours=Decimal("100.5")))
    assert earn.base_salary == Decimal("4020")
    assert effective_hourly_rate(e) == Decimal("40")


def test_overtime_scenario():
    e = employee(salary_type="monthly", base_salary=4160, work_days=26, shift_hours=8)
    att = aggregate_attendance([day(work_hours="10")], e, MARCH, 2024)
    earn = calculate_earnings(e, att)
    rate = Decimal("4160") / (26 * 8)
    assert att.overtime_hours == Decimal("2")
    assert earn.overtime_pay == 2 * rate * Decimal("1.5")
    assert earn.overtime_pay == Decimal("60")


def test_commission_scenario():
    e = employee(commission=10)
    earn = calculate_earnings(e, AttendanceSummary(), Decimal("5000"))
    assert earn.commission == Decimal("500")
    assert earn.total_earnings == Decimal("500")
    assert earn.incentive == ComputedIncentive(commission=Decimal("500"), overtime_pay=Decimal("0"))


def test_zero_denominators_give_zero():
    e = employee(salary_type="daily", base_salary=2600, work_days=0, shift_hours=0)
    earn = calculate_earnings(e, AttendanceSummary(present_days=20, overtime_hours=Decimal("2")))
    assert earn.base_salary == 0
    assert earn.hourly_rate == 0
    assert earn.overtime_pay == 0


def test_salary_type_aliases_and_default():
    assert normalize_salary_type("يومي") == "daily"
    assert normalize_salary_type("بالساعة") == "hourly"
    assert normalize_salary_type("شهري") == "monthly"
    assert normalize_salary_type(None) == "monthly"
    assert normalize_salary_type("weekly") == "monthly"


def test_sales_attribution_by_id_then_name():
    e = employee(id=7, name="Сара")
    sales = [
        ns(specialist_id=7, specialist="старое имя", amount=100, total=None, date="2024-03-02"),
        ns(specialist_id=None, specialist="Сара", amount=50, total=45, date="2024-03-03"),
        ns(specialist_id=8, specialist="Сара", amount=999, total=None, date="2024-03-03"),
        ns(specialist_id=None, specialist="сара", amount=999, total=None, date="2024-03-03"),
        ns(specialist_id=7, specialist="", amount=999, total=None, date="2024-04-01"),
    ]
    assert attributed_sales_total(sales, e, MARCH, 2024) == Decimal("145")


def test_deductions_sum_and_advances():
    e = employee(late_penalty_per_minute=2, absence_penalty_per_day=200, custom_deductions=150)
    records = [
        day(d="2024-03-01", status="late", late_minutes=15, advance=300),
        day(d="2024-03-02", status="absent"),
        day(d="2024-03-03", advance="oops"),
        day(d="2024-03-04", advance=200),
    ]
    att = aggregate_attendance(records, e, MARCH, 2024)
    ded = calculate_deductions(e, att, records)
    assert ded.late_deduction == Decimal("30")
    assert ded.absent_deduction == Decimal("200")
    assert ded.custom_deductions == Decimal("150")
    assert ded.advances == Decimal("500")
    assert [a.amount for a in ded.advance_details] == [Decimal("300"), Decimal("200")]
    assert ded.total_deductions == Decimal("880")


def test_hourly_overtime_without_shift_length():
    e = employee(salary_type="hourly", hourly_rate=40, shift_hours=0)
    att = aggregate_attendance([day(work_hours="5")], e, MARCH, 2024)
    earn = calculate_earnings(e, att)
    assert earn.base_salary == Decimal("200")
    assert earn.overtime_pay == Decimal("300")
