# -*- coding: utf-8 -*-
"""
Доступ к данным для расчётов: по маленькому хранилищу на сущность.
Расчётный код получает отсюда только то, что ему нужно.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

from sqlalchemy.exc import IntegrityError

from .extensions import db
from .models import AttendanceRecord, Bonus, Employee, Expense, Sale, Shift
from .utils import to_datetime

log = logging.getLogger(__name__)


class ShiftAlreadyOpen(Exception):
    """У кассира уже есть открытая смена."""


def _month_range(month: int, year: int) -> tuple[date, date]:
    first = date(year, month + 1, 1)
    end = date(year + (1 if month == 11 else 0), 1 if month == 11 else month + 2, 1)
    return first, end


class EmployeeStore:
    @staticmethod
    def get(employee_id) -> Employee | None:
        try:
            return db.session.get(Employee, int(employee_id))
        except (TypeError, ValueError):
            return None

    @staticmethod
    def active() -> list[Employee]:
        return Employee.query.filter(Employee.status == "active").order_by(Employee.name.asc()).all()


class AttendanceStore:
    @staticmethod
    def for_month(month: int, year: int, employee_id=None) -> list[AttendanceRecord]:
        first, end = _month_range(month, year)
        q = AttendanceRecord.query.filter(AttendanceRecord.date >= first, AttendanceRecord.date < end)
        if employee_id is not None:
            q = q.filter(AttendanceRecord.employee_id == employee_id)
        return q.order_by(AttendanceRecord.date.asc(), AttendanceRecord.id.asc()).all()

    @staticmethod
    def add(**fields: Any) -> AttendanceRecord:
        rec = AttendanceRecord(**fields)
        db.session.add(rec)
        db.session.commit()
        return rec


class SaleStore:
    @staticmethod
    def for_month(month: int, year: int) -> list[Sale]:
        first, end = _month_range(month, year)
        return (
            Sale.query.filter(Sale.date >= datetime.combine(first, datetime.min.time()),
                              Sale.date < datetime.combine(end, datetime.min.time()))
            .order_by(Sale.date.asc())
            .all()
        )

    @staticmethod
    def for_shift(shift: Shift) -> list[Sale]:
        return Sale.query.filter(Sale.shift_id == shift.id).order_by(Sale.date.asc()).all()


class ExpenseStore:
    @staticmethod
    def since(start, end=None) -> list[Expense]:
        start, end = to_datetime(start), to_datetime(end)
        if start is None:
            return []
        q = Expense.query.filter(Expense.date >= start)
        if end is not None:
            q = q.filter(Expense.date <= end)
        return q.order_by(Expense.date.asc()).all()


class BonusStore:
    @staticmethod
    def add(**fields: Any) -> Bonus:
        b = Bonus(**fields)
        db.session.add(b)
        db.session.commit()
        log.info("bonus added id=%s employee=%s %s/%s amount=%s", b.id, b.employee_id, b.month, b.year, b.amount)
        return b

    @staticmethod
    def delete(bonus_id) -> Bonus | None:
        b = db.session.get(Bonus, bonus_id)
        if b is None:
            return None
        db.session.delete(b)
        db.session.commit()
        log.info("bonus deleted id=%s employee=%s", bonus_id, b.employee_id)
        return b

    @staticmethod
    def for_month(month: int, year: int, employee_id=None) -> list[Bonus]:
        q = Bonus.query.filter(Bonus.month == month, Bonus.year == year)
        if employee_id is not None:
            q = q.filter(Bonus.employee_id == employee_id)
        return q.order_by(Bonus.date.asc(), Bonus.id.asc()).all()


class ShiftStore:
    @staticmethod
    def get(shift_id) -> Shift | None:
        return db.session.get(Shift, shift_id)

    @staticmethod
    def open_for_user(user_id) -> Shift | None:
        return Shift.query.filter_by(user_id=user_id, status="open").first()

    @staticmethod
    def open(user, starting_cash, now: datetime | None = None) -> Shift:
        if ShiftStore.open_for_user(user.id) is not None:
            raise ShiftAlreadyOpen(user.id)
        shift = Shift(
            user_id=user.id,
            cashier=getattr(user, "display_name", "") or user.username,
            start_time=now or datetime.utcnow(),
            starting_cash=starting_cash,
            status="open",
        )
        db.session.add(shift)
        try:
            db.session.commit()
        except IntegrityError:
            # параллельное открытие: сработал частичный уникальный индекс
            db.session.rollback()
            raise ShiftAlreadyOpen(user.id)
        log.info("shift opened id=%s user=%s starting_cash=%s", shift.id, user.id, starting_cash)
        return shift

    @staticmethod
    def update(shift: Shift, fields: dict[str, Any]) -> Shift:
        for k, v in fields.items():
            setattr(shift, k, v)
        db.session.commit()
        return shift

    @staticmethod
    def listing(status: str | None = None, start: date | None = None, end: date | None = None) -> list[Shift]:
        q = Shift.query
        if status:
            q = q.filter(Shift.status == status)
        if start:
            q = q.filter(Shift.start_time >= datetime.combine(start, datetime.min.time()))
        if end:
            q = q.filter(Shift.start_time < datetime.combine(end, datetime.min.time()))
        return q.order_by(Shift.start_time.desc()).all()
