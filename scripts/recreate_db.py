# -*- coding: utf-8 -*-
"""
Полный ресет SQLite-БД и демо-наполнение салона с подробными логами.

Запуск из корня проекта:
  python scripts/recreate_db.py
"""

from __future__ import annotations
import sys, traceback
from datetime import date, datetime, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Optional
from sqlalchemy import text

# --- путь к проекту ---
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

print(f"[recreate] ROOT={ROOT}")
if not (ROOT / "salon" / "__init__.py").exists():
    raise SystemExit("[recreate] ошибка: salon/__init__.py не найден рядом со scripts/")

print("[recreate] импорт приложения…")
from salon import create_app  # noqa: E402
from salon.extensions import db  # noqa: E402
from salon.models import AttendanceRecord, Bonus, Employee, Expense, Sale, Shift, User  # noqa: E402


def _db_path_from_uri(uri: str) -> Optional[Path]:
    if uri.startswith("sqlite:///"):
        return Path(uri.replace("sqlite:///", "")).resolve()
    return None


def _cnt(table: str) -> int:
    return int(db.session.execute(text(f'SELECT COUNT(*) FROM "{table}"')).scalar() or 0)


def _users() -> list[User]:
    out = []
    for username, role, name in [
        ("admin", "admin", "Администратор"),
        ("manager", "manager", "Управляющая"),
        ("cashier", "cashier", "Кассир"),
    ]:
        u = User(username=username, role=role, full_name=name)
        u.set_password(username)
        out.append(u)
    return out


def _employees() -> list[Employee]:
    return [
        Employee(name="Мона", position="стилист", salary_type="monthly", base_salary=Decimal("6000"),
                 work_days=26, shift_hours=Decimal("8"), commission=Decimal("10"),
                 late_penalty_per_minute=Decimal("2"), absence_penalty_per_day=Decimal("200")),
        Employee(name="Сара", position="мастер маникюра", salary_type="daily", base_salary=Decimal("300"),
                 work_days=26, shift_hours=Decimal("8"), commission=Decimal("5")),
        Employee(name="Нур", position="ассистент", salary_type="hourly", hourly_rate=Decimal("40"),
                 shift_hours=Decimal("8"), custom_deductions=Decimal("100")),
    ]


def _attendance(employees: list[Employee], first: date) -> list[AttendanceRecord]:
    rows = []
    for e in employees:
        for i in range(10):
            d = first + timedelta(days=i)
            status = "late" if i == 3 else "absent" if i == 7 else "present"
            rows.append(AttendanceRecord(
                employee_id=e.id, date=d, status=status,
                check_in="09:20" if status == "late" else "09:00",
                check_out="" if status == "absent" else "18:00",
                work_hours=None if status == "absent" else ("9" if i == 5 else "8"),
                late_minutes=20 if status == "late" else None,
                advance=Decimal("500") if i == 4 else None,
            ))
    return rows


def main() -> int:
    print("[recreate] create_app()…")
    app = create_app()
    with app.app_context():
        uri = app.config.get("SQLALCHEMY_DATABASE_URI", "")
        print(f"[recreate] SQLALCHEMY_DATABASE_URI = {uri}")

        db_path = _db_path_from_uri(uri)
        if db_path:
            db_path.parent.mkdir(parents=True, exist_ok=True)
            if db_path.exists():
                print(f"[recreate] удаляю файл БД: {db_path}")
                db_path.unlink()
        else:
            print("[recreate] БД не sqlite, пропускаю удаление файла")

        print("[recreate] создаю таблицы по моделям…")
        db.create_all()

        users = _users()
        db.session.add_all(users)
        employees = _employees()
        db.session.add_all(employees)
        db.session.commit()
        print(f"[recreate] user rows={_cnt('user')}  employee rows={_cnt('employee')}")

        today = date.today()
        first = date(today.year, today.month, 1)
        db.session.add_all(_attendance(employees, first))

        cashier = users[2]
        start = datetime.combine(first, datetime.min.time()) + timedelta(hours=9)
        shift = Shift(user_id=cashier.id, cashier=cashier.full_name, start_time=start,
                      starting_cash=Decimal("500"), status="open")
        db.session.add(shift)
        db.session.commit()

        db.session.add_all([
            Sale(shift_id=shift.id, service="стрижка", amount=Decimal("300"), payment_method="cash",
                 specialist_id=employees[0].id, specialist=employees[0].name, date=start + timedelta(hours=1)),
            Sale(shift_id=shift.id, service="окрашивание", amount=Decimal("900"), subtotal=Decimal("1000"),
                 discount=Decimal("100"), payment_method="card",
                 specialist_id=employees[0].id, specialist=employees[0].name, date=start + timedelta(hours=2)),
            Sale(shift_id=shift.id, service="маникюр", amount=Decimal("250"), payment_method="instapay",
                 specialist_id=employees[1].id, specialist=employees[1].name, date=start + timedelta(hours=3)),
            Sale(shift_id=shift.id, service="шампунь", amount=Decimal("120"), payment_method="cash",
                 has_items=True, date=start + timedelta(hours=4)),
            Expense(description="вода", amount=Decimal("50"), payment_method="cash", date=start + timedelta(hours=5)),
            Bonus(employee_id=employees[0].id, employee_name=employees[0].name, month=first.month - 1,
                  year=first.year, amount=Decimal("250"), reason="лучший мастер месяца", added_by="Администратор"),
        ])
        db.session.commit()
        print(f"[recreate] attendance rows={_cnt('attendance_record')}  sale rows={_cnt('sale')}  shift rows={_cnt('shift')}")

        print("\n[recreate] Готово.")
        print("Логины:")
        for u in users:
            print(f"  {u.username:<8} / {u.username}")
        if db_path:
            print(f"\nФайл БД: {db_path}")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except Exception:
        print("\n[recreate] ОШИБКА:")
        traceback.print_exc()
        sys.exit(1)
