# -*- coding: utf-8 -*-
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from salon import create_app
from salon.extensions import db
from salon.models import Employee, User


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "SECRET_KEY": "test",
        "PAYSLIP_API_URL": "",
        "WORK_START_TIME": "09:00",
    })
    with app.app_context():
        db.create_all()
        for username, role in [("admin", "admin"), ("manager", "manager"), ("cashier", "cashier"), ("cashier2", "cashier")]:
            u = User(username=username, role=role, full_name=username.title())
            u.set_password("pw")
            db.session.add(u)
        db.session.commit()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, username):
    resp = client.post("/login", data={"username": username, "password": "pw"})
    assert resp.status_code == 200, resp.get_json()
    return client


@pytest.fixture
def as_manager(client):
    return login(client, "manager")


@pytest.fixture
def as_cashier(client):
    return login(client, "cashier")


@pytest.fixture
def stylist(app):
    e = Employee(
        name="Мона",
        position="стилист",
        salary_type="monthly",
        base_salary=Decimal("6000"),
        work_days=26,
        shift_hours=Decimal("8"),
        commission=Decimal("10"),
        late_penalty_per_minute=Decimal("2"),
        absence_penalty_per_day=Decimal("200"),
        custom_deductions=Decimal("0"),
        hire_date=date(2023, 1, 1),
    )
    db.session.add(e)
    db.session.commit()
    return e


def ns(**kw):
    return SimpleNamespace(**kw)


def employee(**kw):
    base = dict(
        id=1,
        name="Мона",
        salary_type="monthly",
        base_salary=0,
        work_days=26,
        shift_hours=8,
        hourly_rate=None,
        commission=0,
        late_penalty_per_minute=0,
        absence_penalty_per_day=0,
        custom_deductions=0,
    )
    base.update(kw)
    return SimpleNamespace(**base)


def day(employee_id=1, d="2024-03-05", status="present", **kw):
    return SimpleNamespace(employee_id=employee_id, date=d, status=status, **kw)
