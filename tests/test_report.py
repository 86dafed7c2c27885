# -*- coding: utf-8 -*-
import io
from decimal import Decimal

from openpyxl import load_workbook

from conftest import day, employee, ns

from salon.payroll import compute_payslip
from salon.payroll.report import export_xlsx, money, money_or_none, month_summary, payslip_lines

MARCH = 2


def test_money_rounds_only_at_render():
    assert money(Decimal("1234.565")) == "1 234.57"
    assert money(Decimal("2000")) == "2 000.00"
    assert money(Decimal("-20")) == "-20.00"
    assert money_or_none(Decimal("0")) == "нет"
    assert money_or_none(Decimal("15.5")) == "15.50"


def test_payslip_lines_sections():
    e = employee(base_salary=6000, commission=10, absence_penalty_per_day=200)
    attendance = [day(status="absent", advance=300)]
    sales = [ns(specialist_id=1, specialist="", amount=1000, total=None, date="2024-03-02")]
    bonuses = [ns(id=1, employee_id=1, month=MARCH, year=2024, amount=100, reason="за отзывы", added_by="admin", date=None)]
    bundle = compute_payslip(e, attendance, sales, bonuses, MARCH, 2024)
    rows = payslip_lines(bundle, e)
    by_label = {r["label"]: r for r in rows}
    assert by_label["Комиссия с продаж"]["value"] == "100.00"
    assert by_label["Штраф за опоздания"]["value"] == "нет"
    assert by_label["Штраф за отсутствие"]["value"] == "200.00"
    assert by_label["Авансы"]["note"] == "2024-03-05: 300.00"
    assert by_label["за отзывы"]["section"] == "bonuses"
    # 6100 начислено + 100 премия - 500 удержано
    assert rows[-1] == {"section": "total", "label": "К выплате", "value": "5 700.00", "note": ""}


def test_month_summary_and_export():
    a = employee(id=1, name="Мона", position="стилист", base_salary=6000)
    b = employee(id=2, name="Сара", position="мастер", salary_type="daily", base_salary=2600, work_days=26)
    attendance = [day(employee_id=2, d=f"2024-03-{i:02d}") for i in range(1, 11)]
    summary = month_summary([a, b], attendance, [], [], MARCH, 2024)
    assert summary["label"] == "Март 2024"
    assert [r["base_salary"] for r in summary["rows"]] == [Decimal("6000"), Decimal("1000")]
    assert summary["totals"]["net_salary"] == Decimal("7000")

    wb = load_workbook(io.BytesIO(export_xlsx(summary)))
    ws = wb.active
    assert ws.title == "Март 2024"
    assert ws.cell(row=1, column=1).value == "Сотрудник"
    assert ws.cell(row=3, column=1).value == "Сара"
    assert ws.cell(row=4, column=1).value == "Итого"
    assert ws.cell(row=4, column=8).value == 7000.0
