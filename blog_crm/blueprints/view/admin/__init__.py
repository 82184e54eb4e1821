from __future__ import annotations

# Import routes to register them with the existing admin blueprint
# Each module imports `bp` from blog_crm.blueprints.admin
from blog_crm.blueprints.view.admin import panel  # noqa: E402,F401
