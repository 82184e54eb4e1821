from __future__ import annotations

from functools import wraps
from typing import Callable, Any

from flask import jsonify
from flask_login import current_user

from blog_crm.extensions import login_manager
from blog_crm.services.auth import current_admin_session


def admin_required(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Gate a view behind an admin sign-in and pass the ``AdminSession`` as first argument.

    Anonymous callers are sent to the login view; signed-in non-admins get 403.
    """

    @wraps(fn)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated:
            return login_manager.unauthorized()
        admin_session = current_admin_session()
        if admin_session is None:
            return jsonify({"error": "forbidden", "message": "admin required"}), 403
        return fn(admin_session, *args, **kwargs)

    return wrapper
