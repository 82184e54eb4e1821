from __future__ import annotations

from flask import jsonify, request, url_for
from flask_wtf.csrf import generate_csrf
from pydantic import ValidationError

from blog_crm.services import auth as auth_svc
from blog_crm.schemas.auth import LoginRequest
from blog_crm.extensions import limiter

from blog_crm.blueprints.auth import bp


@bp.get("/login")
def login_form():
    """Auth entry point: tells the client where to post credentials and hands out a CSRF token."""
    admin_session = auth_svc.current_admin_session()
    return jsonify(
        {
            "authenticated": admin_session is not None,
            "email": admin_session.email if admin_session else None,
            "login_url": url_for("auth.login"),
            "admin_url": url_for("admin.dashboard"),
            "csrf_token": generate_csrf(),
        }
    )


@bp.post("/login")
@limiter.limit("5 per minute; 20 per hour")
def login():
    data = request.get_json(silent=True) or request.form.to_dict()
    try:
        payload = LoginRequest.model_validate(data)
    except ValidationError:
        return jsonify({"error": "bad_request", "message": "Email and password are required"}), 400

    user, error_message = auth_svc.authenticate(payload.email, payload.password)
    if not user:
        return jsonify({"error": "unauthorized", "message": error_message or "Invalid credentials"}), 401

    admin_session = auth_svc.sign_in(user)
    return jsonify(
        {
            "success": True,
            "email": admin_session.email,
            "redirect": url_for("admin.dashboard"),
        }
    )
