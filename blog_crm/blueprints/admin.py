from __future__ import annotations

from flask import Blueprint

bp = Blueprint("admin", __name__)

# Import routes to register them with the admin blueprint
import blog_crm.blueprints.view.admin  # noqa: E402,F401
import blog_crm.blueprints.api.admin.blog  # noqa: E402,F401
import blog_crm.blueprints.api.admin.categories  # noqa: E402,F401
