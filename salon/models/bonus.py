from datetime import date
from ..extensions import db


class Bonus(db.Model):
    """Ручная премия сотруднику за месяц (month с нуля)."""
    id = db.Column(db.Integer, primary_key=True)
    employee_id = db.Column(db.Integer, db.ForeignKey("employee.id"), nullable=False, index=True)
    employee_name = db.Column(db.String(128), default="")
    month = db.Column(db.Integer, nullable=False)
    year = db.Column(db.Integer, nullable=False)
    amount = db.Column(db.Numeric(12, 2), nullable=False)
    reason = db.Column(db.String(255), nullable=False)
    added_by = db.Column(db.String(128), default="")
    date = db.Column(db.Date, default=date.today)

    __table_args__ = (db.Index("ix_bonus_period", "employee_id", "year", "month"),)
