from __future__ import annotations

from blog_crm.blueprints.view.auth import login  # noqa: E402,F401
from blog_crm.blueprints.view.auth import logout  # noqa: E402,F401
