# -*- coding: utf-8 -*-
"""
Представление расчётов: округление до копеек только здесь, при выводе.
"""
from __future__ import annotations

import io
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from openpyxl import Workbook
from openpyxl.styles import Font

from ..utils import ZERO, month_label
from .payslip import PayslipWithBonuses, compute_payslip

CENT = Decimal("0.01")
NONE_LABEL = "нет"


def money(v) -> str:
    x = Decimal(v).quantize(CENT, rounding=ROUND_HALF_UP)
    return f"{x:,.2f}".replace(",", " ")


def money_or_none(v) -> str:
    return money(v) if v else NONE_LABEL


def payslip_lines(bundle: PayslipWithBonuses, employee) -> list[dict]:
    """Строки печатного расчётного листа: (раздел, подпись, значение, пояснение)."""
    p = bundle.payslip
    rows: list[dict] = []

    def add(section, label, value, note=""):
        rows.append({"section": section, "label": label, "value": value, "note": note})

    add("attendance", "Дней присутствия", str(p.present_days))
    add("attendance", "Дней с опозданием", str(p.late_days), f"{p.total_late_minutes} мин всего")
    add("attendance", "Дней отсутствия", str(p.absent_days))
    add("attendance", "Дней отпуска", str(p.leave_days))
    add("attendance", "Отработано часов", f"{p.total_work_hours:.2f}")
    add("attendance", "Часов переработки", f"{p.overtime_hours:.2f}")

    pct = getattr(employee, "commission", 0) or 0
    add("earnings", "Оклад", money(p.base_salary), p.salary_note)
    if p.commission:
        add("earnings", "Комиссия с продаж", money(p.commission), f"{pct}% от {money(p.total_sales_amount)}")
    if p.overtime_pay:
        add("earnings", "Переработка", money(p.overtime_pay), f"{p.overtime_hours:.2f} ч")
    add("earnings", "Итого начислено", money(p.total_earnings))

    add("deductions", "Штраф за опоздания", money_or_none(p.late_deduction))
    add("deductions", "Штраф за отсутствие", money_or_none(p.absent_deduction))
    add("deductions", "Прочие удержания", money_or_none(p.custom_deductions))
    add("deductions", "Авансы", money_or_none(p.advances),
        ", ".join(f"{e.date.isoformat() if e.date else '—'}: {money(e.amount)}" for e in p.advance_details))
    add("deductions", "Итого удержано", money(p.total_deductions))

    for b in bundle.bonuses:
        add("bonuses", b.reason, money(b.amount), b.added_by)
    if bundle.bonuses_total:
        add("bonuses", "Итого премий", money(bundle.bonuses_total))

    add("total", "К выплате", money(bundle.net_salary_with_bonuses))
    return rows


SUMMARY_COLUMNS = [
    ("name", "Сотрудник"),
    ("position", "Должность"),
    ("base_salary", "Оклад"),
    ("commission", "Комиссия"),
    ("overtime_pay", "Переработка"),
    ("bonuses", "Премии"),
    ("total_deductions", "Удержания"),
    ("net_salary", "К выплате"),
]
MONEY_KEYS = [k for k, _ in SUMMARY_COLUMNS[2:]]


def month_summary(employees: Iterable, attendance, sales, bonuses, month: int, year: int, server_for=None) -> dict:
    """Сводка по всем сотрудникам за месяц, с итоговой строкой."""
    attendance, sales, bonuses = list(attendance), list(sales), list(bonuses)
    rows = []
    totals = {k: ZERO for k in MONEY_KEYS}
    for e in employees:
        server = server_for(e) if server_for else None
        b = compute_payslip(e, attendance, sales, bonuses, month, year, server=server)
        p = b.payslip
        row = {
            "employee_id": e.id,
            "name": e.name,
            "position": getattr(e, "position", "") or "",
            "base_salary": p.base_salary,
            "commission": p.commission,
            "overtime_pay": p.overtime_pay,
            "bonuses": b.bonuses_total,
            "total_deductions": p.total_deductions,
            "net_salary": b.net_salary_with_bonuses,
            "present_days": p.present_days,
            "absent_days": p.absent_days,
            "overtime_hours": p.overtime_hours,
        }
        for k in MONEY_KEYS:
            totals[k] += row[k]
        rows.append(row)
    return {"month": month, "year": year, "label": month_label(month, year), "rows": rows, "totals": totals}


def export_xlsx(summary: dict) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = summary["label"][:31]
    ws.append([title for _, title in SUMMARY_COLUMNS])
    for c in ws[1]:
        c.font = Font(bold=True)
    for r in summary["rows"]:
        ws.append([r["name"], r["position"]] + [float(Decimal(r[k]).quantize(CENT, rounding=ROUND_HALF_UP)) for k in MONEY_KEYS])
    t = summary["totals"]
    ws.append(["Итого", ""] + [float(Decimal(t[k]).quantize(CENT, rounding=ROUND_HALF_UP)) for k in MONEY_KEYS])
    for c in ws[ws.max_row]:
        c.font = Font(bold=True)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()
