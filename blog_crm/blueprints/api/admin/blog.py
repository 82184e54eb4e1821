from __future__ import annotations

from flask import current_app, jsonify, request
from pydantic import ValidationError

from blog_crm.decorators import admin_required
from blog_crm.errors import AdminError, NotFoundError
from blog_crm.extensions import limiter
from blog_crm.repositories.blog import get_post
from blog_crm.schemas.posts import PublishedToggle
from blog_crm.services.admin import AdminPanel
from blog_crm.services.auth import AdminSession
from blog_crm.blueprints.serializers import post_row_to_dict, post_to_dict, result_response

from blog_crm.blueprints.admin import bp


def _panel(admin_session: AdminSession) -> AdminPanel:
    return AdminPanel(admin_session, default_author=current_app.config.get("DEFAULT_POST_AUTHOR", ""))


@bp.route("/api/posts", methods=["GET"])
@admin_required
@limiter.limit("60 per minute")
def list_blog_posts(admin_session: AdminSession):
    """List all blog posts, newest first"""
    panel = _panel(admin_session)
    result = panel.load_posts()
    if not result.ok:
        return result_response(result)
    return jsonify({"success": True, "posts": [post_row_to_dict(p) for p in result.records]})


@bp.route("/api/posts/<string:post_id>", methods=["GET"])
@admin_required
@limiter.limit("60 per minute")
def get_blog_post(admin_session: AdminSession, post_id: str):
    """Get single blog post for editing"""
    try:
        post = get_post(post_id)
    except NotFoundError as e:
        return jsonify({"success": False, "error": e.message}), 404
    except AdminError as e:
        current_app.logger.error(f"Get blog post error: {e.message}")
        return jsonify({"success": False, "error": e.message}), 400
    return jsonify({"success": True, "post": post_to_dict(post)})


@bp.route("/api/posts", methods=["POST"])
@admin_required
@limiter.limit("10 per minute")
def create_blog_post(admin_session: AdminSession):
    """Create new blog post"""
    panel = _panel(admin_session)
    panel.new_blog()
    result = panel.save_blog(request.get_json(silent=True) or {})
    return result_response(result, success_status=201)


@bp.route("/api/posts/<string:post_id>", methods=["PATCH", "PUT"])
@admin_required
@limiter.limit("10 per minute")
def update_blog_post(admin_session: AdminSession, post_id: str):
    """Update existing blog post with the fields present in the body"""
    panel = _panel(admin_session)
    panel.edit_blog(post_id)
    result = panel.save_blog(request.get_json(silent=True) or {})
    return result_response(result)


@bp.route("/api/posts/<string:post_id>/published", methods=["POST"])
@admin_required
@limiter.limit("30 per minute")
def publish_blog_post(admin_session: AdminSession, post_id: str):
    """Set the published flag, or flip it when the body names no value"""
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "bad_request", "message": "Request body must be a JSON object"}), 400
    panel = _panel(admin_session)
    if "published" not in data:
        return result_response(panel.toggle_published(post_id))
    try:
        payload = PublishedToggle.model_validate(data)
    except ValidationError:
        return jsonify({"error": "bad_request", "message": "published must be a boolean"}), 400
    return result_response(panel.set_published(post_id, payload.published))


@bp.route("/api/posts/<string:post_id>", methods=["DELETE"])
@admin_required
@limiter.limit("10 per minute")
def delete_blog_post(admin_session: AdminSession, post_id: str):
    """Delete blog post"""
    return result_response(_panel(admin_session).delete_blog(post_id))
