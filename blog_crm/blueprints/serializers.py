from __future__ import annotations

from typing import Any

from flask import jsonify

from blog_crm.errors import NotFoundError, OperationInProgress
from blog_crm.models.blog import BlogPost, Category
from blog_crm.services.admin import ActionResult


def _iso(value) -> str | None:
    return value.isoformat() if value else None


def category_to_dict(cat: Category) -> dict[str, Any]:
    return {
        "id": cat.hex_id,
        "name": cat.name,
        "slug": cat.slug,
        "description": cat.description,
        "created_at": _iso(cat.created_at),
    }


def post_row_to_dict(post: BlogPost) -> dict[str, Any]:
    """List row: the columns the blogs table shows plus the joined category name."""
    return {
        "id": post.hex_id,
        "title": post.title,
        "author": post.author,
        "published": post.published,
        "created_at": _iso(post.created_at),
        "category_id": post.category_id,
        "category_name": post.category_name,
    }


def post_to_dict(post: BlogPost) -> dict[str, Any]:
    return {
        "id": post.hex_id,
        "title": post.title,
        "slug": post.slug,
        "content": post.content,
        "excerpt": post.excerpt,
        "author": post.author,
        "published": post.published,
        "category_id": post.category_id,
        "category_name": post.category_name,
        "meta_description": post.meta_description,
        "meta_keywords": post.meta_keywords,
        "featured_image_url": post.featured_image_url,
        "created_at": _iso(post.created_at),
        "updated_at": _iso(post.updated_at),
    }


def serialize(record: Any) -> Any:
    if isinstance(record, BlogPost):
        return post_to_dict(record)
    if isinstance(record, Category):
        return category_to_dict(record)
    return record


def error_status(result: ActionResult) -> int:
    if isinstance(result.error, NotFoundError):
        return 404
    if isinstance(result.error, OperationInProgress):
        return 409
    return 400


def result_response(result: ActionResult, *, success_status: int = 200, **extra: Any):
    """JSON response for a panel operation: the toast plus whatever the operation returned."""
    body: dict[str, Any] = {"success": result.ok}
    if result.toast is not None:
        body["toast"] = result.toast.as_dict()
    if not result.ok:
        body["error"] = result.error.message if result.error else "request failed"
        body.update(extra)
        return jsonify(body), error_status(result)
    if result.record is not None:
        body["record"] = serialize(result.record)
    body.update(extra)
    return jsonify(body), success_status
