from __future__ import annotations

from typing import Any

from flask import current_app, jsonify, request, session
from pydantic import ValidationError

from blog_crm.decorators import admin_required
from blog_crm.extensions import limiter
from blog_crm.schemas.admin import TabSelection
from blog_crm.services.admin import AdminPanel, Tab
from blog_crm.services.auth import AdminSession
from blog_crm.blueprints.serializers import (
    category_to_dict,
    post_row_to_dict,
    post_to_dict,
    result_response,
)

from blog_crm.blueprints.admin import bp

PANEL_STATE_KEY = "admin_panel"


def load_panel(admin_session: AdminSession) -> AdminPanel:
    return AdminPanel.from_state(
        admin_session,
        session.get(PANEL_STATE_KEY),
        default_author=current_app.config.get("DEFAULT_POST_AUTHOR", ""),
    )


def store_panel(panel: AdminPanel) -> None:
    session[PANEL_STATE_KEY] = panel.to_state()


def _panel_state(panel: AdminPanel) -> dict[str, Any]:
    return {
        "active_tab": panel.active_tab.value,
        "editing": panel.editing,
        "editor_title": panel.editor_title,
        "tabs": [tab.value for tab in Tab],
    }


def _tab_data(panel: AdminPanel) -> tuple[dict[str, Any], dict[str, str] | None]:
    if panel.active_tab is Tab.BLOGS:
        result = panel.load_posts()
        data = {"posts": [post_row_to_dict(p) for p in result.records or []]}
    elif panel.active_tab is Tab.CATEGORIES:
        result = panel.load_categories()
        data = {"categories": [category_to_dict(c) for c in result.records or []]}
    else:
        result = panel.open_editor()
        editor = result.record
        data = {
            "post": post_to_dict(editor.post) if editor and editor.post else None,
            "draft": editor.draft if editor else panel.blank_draft(),
            "categories": [{"id": c.hex_id, "name": c.name} for c in (editor.categories if editor else [])],
        }
    return data, result.toast.as_dict() if result.toast else None


def _panel_response(panel: AdminPanel):
    data, toast = _tab_data(panel)
    body: dict[str, Any] = {
        "header": {
            "title": current_app.config.get("SITE_NAME", "Blog CRM"),
            "email": panel.session.email,
        },
        "state": _panel_state(panel),
        "data": data,
    }
    if toast:
        body["toast"] = toast
    return jsonify(body)


@bp.get("/")
@admin_required
def dashboard(admin_session: AdminSession):
    """Panel state plus a fresh snapshot of the active tab's data."""
    return _panel_response(load_panel(admin_session))


@bp.post("/tab")
@admin_required
def select_tab(admin_session: AdminSession):
    data = request.get_json(silent=True) or {}
    try:
        payload = TabSelection.model_validate(data)
    except ValidationError:
        return jsonify({"error": "bad_request", "message": "unknown tab"}), 400
    panel = load_panel(admin_session)
    panel.select_tab(payload.tab)
    store_panel(panel)
    return _panel_response(panel)


@bp.post("/blogs/new")
@admin_required
def new_blog(admin_session: AdminSession):
    panel = load_panel(admin_session)
    panel.new_blog()
    store_panel(panel)
    return _panel_response(panel)


@bp.post("/blogs/<string:post_id>/edit")
@admin_required
def edit_blog(admin_session: AdminSession, post_id: str):
    panel = load_panel(admin_session)
    panel.edit_blog(post_id)
    store_panel(panel)
    return _panel_response(panel)


@bp.post("/editor/save")
@limiter.limit("30 per minute")
@admin_required
def save_editor(admin_session: AdminSession):
    panel = load_panel(admin_session)
    result = panel.save_blog(request.get_json(silent=True) or {})
    store_panel(panel)
    return result_response(result, state=_panel_state(panel))


@bp.post("/editor/cancel")
@admin_required
def cancel_editor(admin_session: AdminSession):
    panel = load_panel(admin_session)
    panel.cancel_edit()
    store_panel(panel)
    return _panel_response(panel)
