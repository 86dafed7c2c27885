from datetime import datetime
from ..extensions import db


class Sale(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    shift_id = db.Column(db.Integer, db.ForeignKey("shift.id"), nullable=True, index=True)
    customer = db.Column(db.String(128), default="")
    service = db.Column(db.String(128), default="")
    amount = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    subtotal = db.Column(db.Numeric(12, 2), nullable=True)
    discount = db.Column(db.Numeric(12, 2), nullable=True)
    total = db.Column(db.Numeric(12, 2), nullable=True)
    payment_method = db.Column(db.String(16), default="cash")  # cash|card|instapay
    has_items = db.Column(db.Boolean, default=False)  # продажа товаров, а не услуги

    # мастер: id — для начисления комиссии, имя — снимок на момент продажи
    specialist_id = db.Column(db.Integer, db.ForeignKey("employee.id"), nullable=True, index=True)
    specialist = db.Column(db.String(128), default="")

    date = db.Column(db.DateTime, default=datetime.utcnow, index=True)


class Expense(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    description = db.Column(db.String(255), default="")
    amount = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    payment_method = db.Column(db.String(16), default="cash")
    category = db.Column(db.String(64), default="")
