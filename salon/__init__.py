# -*- coding: utf-8 -*-
import logging
from datetime import date, datetime

from flask import Flask, jsonify
from flask_login import current_user, login_required

from .config import Config, ensure_instance
from .extensions import db, login_manager, migrate
from .payroll.report import money
from .utils import MONTHS_RU

# блюпринты
from .auth import auth_bp
from .modules.attendance import bp as attendance_bp
from .modules.payroll import bp as payroll_bp
from .modules.shifts import bp as shifts_bp

# модели нужны до create_all / миграций
from . import models  # noqa: F401


def create_app(overrides=None):
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)
    ensure_instance(app)

    logging.basicConfig(
        level=getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO),
        format="%(levelname)s:%(name)s:%(message)s",
    )

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    # --- jinja-фильтры (для печатных форм) ---
    @app.template_filter("fmt_date")
    def fmt_date(value, fmt="%d.%m.%Y"):
        if value in (None, ""):
            return ""
        if isinstance(value, (datetime, date)):
            return value.strftime(fmt)
        try:
            return datetime.fromisoformat(str(value)).strftime(fmt)
        except ValueError:
            return str(value)

    @app.template_filter("fmt_money")
    def fmt_money(v):
        try:
            return money(v)
        except (ArithmeticError, TypeError, ValueError):
            return str(v)

    @app.template_filter("month_ru")
    def month_ru(value):
        if not isinstance(value, (datetime, date)):
            return str(value or "")
        return f"{MONTHS_RU[value.month - 1]} {value.year}"

    # --- блюпринты ---
    app.register_blueprint(auth_bp)
    app.register_blueprint(payroll_bp)
    app.register_blueprint(shifts_bp)
    app.register_blueprint(attendance_bp)

    # --- главная ---
    @app.route("/")
    @login_required
    def home():
        return jsonify({
            "ok": True,
            "user": current_user.username,
            "role": current_user.role,
            "sections": ["payroll", "shifts", "attendance"],
        })

    return app
