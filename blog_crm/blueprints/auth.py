from __future__ import annotations

from flask import Blueprint

bp = Blueprint("auth", __name__)

# Import auth view routes
import blog_crm.blueprints.view.auth  # noqa: E402,F401
