from __future__ import annotations

from flask import jsonify, request

from blog_crm.decorators import admin_required
from blog_crm.errors import AdminError, NotFoundError
from blog_crm.extensions import limiter
from blog_crm.repositories.category import get_category
from blog_crm.services.admin import AdminPanel
from blog_crm.services.auth import AdminSession
from blog_crm.blueprints.serializers import category_to_dict, result_response

from blog_crm.blueprints.admin import bp


@bp.route("/api/categories", methods=["GET"])
@admin_required
@limiter.limit("60 per minute")
def list_blog_categories(admin_session: AdminSession):
    """List categories by name"""
    result = AdminPanel(admin_session).load_categories()
    if not result.ok:
        return result_response(result)
    return jsonify({"success": True, "categories": [category_to_dict(c) for c in result.records]})


@bp.route("/api/categories/<string:category_id>", methods=["GET"])
@admin_required
@limiter.limit("60 per minute")
def get_blog_category(admin_session: AdminSession, category_id: str):
    try:
        cat = get_category(category_id)
    except NotFoundError as e:
        return jsonify({"success": False, "error": e.message}), 404
    except AdminError as e:
        return jsonify({"success": False, "error": e.message}), 400
    return jsonify({"success": True, "category": category_to_dict(cat)})


@bp.route("/api/categories", methods=["POST"])
@admin_required
@limiter.limit("10 per minute; 150 per hour")
def create_blog_category(admin_session: AdminSession):
    result = AdminPanel(admin_session).save_category(request.get_json(silent=True) or {})
    return result_response(result, success_status=201)


@bp.route("/api/categories/<string:category_id>", methods=["PATCH", "PUT"])
@admin_required
@limiter.limit("10 per minute; 150 per hour")
def update_blog_category(admin_session: AdminSession, category_id: str):
    result = AdminPanel(admin_session).save_category(request.get_json(silent=True) or {}, category_id)
    return result_response(result)


@bp.route("/api/categories/<string:category_id>", methods=["DELETE"])
@admin_required
@limiter.limit("10 per minute; 150 per hour")
def delete_blog_category(admin_session: AdminSession, category_id: str):
    """Delete a category; posts pointing at it keep their reference"""
    return result_response(AdminPanel(admin_session).delete_category(category_id))
