from __future__ import annotations

from pydantic import BaseModel

from blog_crm.services.admin import Tab


class TabSelection(BaseModel):
    tab: Tab
