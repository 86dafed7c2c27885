from ..extensions import db


class AttendanceRecord(db.Model):
    __tablename__ = "attendance_record"

    id = db.Column(db.Integer, primary_key=True)
    employee_id = db.Column(db.Integer, db.ForeignKey("employee.id"), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, index=True)
    status = db.Column(db.String(16), nullable=False, default="present")  # present|late|absent|leave
    check_in = db.Column(db.String(8), default="")
    check_out = db.Column(db.String(8), default="")
    work_hours = db.Column(db.String(16), nullable=True)  # десятичная строка, как вводится
    late_minutes = db.Column(db.Integer, nullable=True)
    advance = db.Column(db.Numeric(12, 2), nullable=True)  # аванс в счёт зарплаты
    notes = db.Column(db.Text)
