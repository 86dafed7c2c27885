from datetime import date
from ..extensions import db


class Employee(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False, index=True)
    phone = db.Column(db.String(32), default="")
    position = db.Column(db.String(64), default="")
    hire_date = db.Column(db.Date, default=date.today)
    status = db.Column(db.String(16), default="active")  # active|suspended

    # модель оплаты
    salary_type = db.Column(db.String(16), nullable=False, default="monthly")  # monthly|daily|hourly
    base_salary = db.Column(db.Numeric(12, 2), default=0)
    work_days = db.Column(db.Integer, default=26)       # дней в месяце для дневного оклада
    shift_hours = db.Column(db.Numeric(6, 2), default=8)  # часов в смене, сверх — переработка
    hourly_rate = db.Column(db.Numeric(12, 2), nullable=True)
    commission = db.Column(db.Numeric(5, 2), default=0)  # % с продаж, 0 — без комиссии

    # удержания
    late_penalty_per_minute = db.Column(db.Numeric(12, 2), default=0)
    absence_penalty_per_day = db.Column(db.Numeric(12, 2), default=0)
    custom_deductions = db.Column(db.Numeric(12, 2), default=0)

    __table_args__ = (
        db.CheckConstraint("commission >= 0 AND commission <= 100", name="ck_employee_commission"),
    )
