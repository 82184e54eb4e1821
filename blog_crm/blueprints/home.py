from __future__ import annotations

from flask import Blueprint, current_app, jsonify, url_for

bp = Blueprint("home", __name__)


@bp.get("/")
def index():
    """Landing payload with the links into the admin area."""
    return jsonify(
        {
            "name": current_app.config.get("SITE_NAME", "Blog CRM"),
            "description": "Manage your blog content with ease",
            "links": {
                "auth": url_for("auth.login_form"),
                "admin": url_for("admin.dashboard"),
            },
        }
    )
