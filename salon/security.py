# -*- coding: utf-8 -*-
from functools import wraps
from flask import jsonify
from flask_login import current_user

ADMIN = "admin"
MANAGER = "manager"
CASHIER = "cashier"


def roles_required(*roles):
    """
    Не залогинен -> 401 {"error": "login_required"}.
    Роли нет в списке -> 403 {"error": "forbidden"}.
    """
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            if not current_user.is_authenticated:
                return jsonify({"ok": False, "error": "login_required"}), 401
            if current_user.role not in roles:
                return jsonify({"ok": False, "error": "forbidden"}), 403
            return f(*args, **kwargs)
        return wrapper
    return decorator
