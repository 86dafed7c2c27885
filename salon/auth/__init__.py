# -*- coding: utf-8 -*-

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user
from ..models.user import User
from ..utils import to_text

auth_bp = Blueprint("auth", __name__)


def _form():
    return request.get_json(silent=True) or request.form


@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "GET":
        if current_user.is_authenticated:
            return jsonify({"ok": True, "user": current_user.username, "role": current_user.role})
        return jsonify({"ok": False, "error": "login_required"}), 401
    data = _form()
    username = to_text(data.get("username"))
    password = to_text(data.get("password"))
    u = User.query.filter_by(username=username).first()
    if not u or not u.is_active or not u.check_password(password):
        return jsonify({"ok": False, "error": "bad_credentials"}), 401
    login_user(u, remember=True)
    return jsonify({"ok": True, "user": u.username, "role": u.role})


@auth_bp.route("/logout")
@login_required
def logout():
    logout_user()
    return jsonify({"ok": True})
