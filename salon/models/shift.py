from ..extensions import db


class Shift(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)
    cashier = db.Column(db.String(128), default="")
    start_time = db.Column(db.DateTime, nullable=False)
    end_time = db.Column(db.DateTime, nullable=True)
    starting_cash = db.Column(db.Numeric(12, 2), default=0)
    status = db.Column(db.String(16), nullable=False, default="open")  # open|closed

    # итоги смены; если пусто, считаем по чекам
    total_sales = db.Column(db.Numeric(12, 2), nullable=True)
    total_expenses = db.Column(db.Numeric(12, 2), nullable=True)
    sales_cash = db.Column(db.Numeric(12, 2), nullable=True)
    sales_card = db.Column(db.Numeric(12, 2), nullable=True)
    sales_instapay = db.Column(db.Numeric(12, 2), nullable=True)

    final_cash = db.Column(db.Numeric(12, 2), nullable=True)
    cash_difference = db.Column(db.Numeric(12, 2), nullable=True)
    note = db.Column(db.Text, default="")

    user = db.relationship("User", backref="shifts", lazy="joined", foreign_keys=[user_id])

    # не больше одной открытой смены на кассира
    __table_args__ = (
        db.Index(
            "uq_shift_open_per_user",
            "user_id",
            unique=True,
            sqlite_where=db.text("status = 'open'"),
            postgresql_where=db.text("status = 'open'"),
        ),
    )

    @property
    def sales_details(self) -> dict:
        return {"cash": self.sales_cash, "card": self.sales_card, "instapay": self.sales_instapay}

    @property
    def is_open(self) -> bool:
        return self.status == "open"
