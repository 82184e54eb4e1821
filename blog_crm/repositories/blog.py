from __future__ import annotations

from typing import Any, Mapping

import structlog
from sqlalchemy.orm import joinedload

from blog_crm.errors import ValidationError
from blog_crm.models.blog import BlogPost
from blog_crm.schemas.validation import parse_fields
from blog_crm.repositories.category import category_exists
from blog_crm.schemas.posts import PostCreate, PostUpdate
from blog_crm.store import Table
from blog_crm.utils.slug import slugify

TITLE_CONTENT_REQUIRED = "Title and content are required"
SLUG_UNAVAILABLE = "Slug could not be generated from the title"

posts: Table[BlogPost] = Table(BlogPost, not_found_message="Blog not found")

log = structlog.get_logger(__name__)


def _check_category(category_id: str | None) -> None:
    if category_id and not category_exists(category_id):
        raise ValidationError("Selected category does not exist")


def _slug_from(title: str) -> str:
    slug = slugify(title)
    if not slug:
        raise ValidationError(SLUG_UNAVAILABLE)
    return slug


def list_posts() -> list[BlogPost]:
    """All posts, newest first, with the category row joined in for ``category_name``."""
    return posts.select(
        order_by="created_at",
        descending=True,
        options=(joinedload(BlogPost.category),),
    )


def get_post(post_id: str) -> BlogPost:
    return posts.get(post_id, options=(joinedload(BlogPost.category),))


def create_post(fields: Mapping[str, Any]) -> BlogPost:
    payload = parse_fields(
        PostCreate, fields, required=("title", "content"), required_message=TITLE_CONTENT_REQUIRED
    )
    _check_category(payload.category_id)
    values = payload.model_dump()
    values["slug"] = payload.slug or _slug_from(payload.title)
    post = posts.insert(values)
    log.info("post_created", id=post.hex_id, slug=post.slug)
    return post


def update_post(post_id: str, fields: Mapping[str, Any]) -> BlogPost:
    payload = parse_fields(
        PostUpdate, fields, required=("title", "content"), required_message=TITLE_CONTENT_REQUIRED
    )
    changes = payload.model_dump(exclude_unset=True)
    if "published" in changes and changes["published"] is None:
        del changes["published"]
    if "category_id" in changes:
        _check_category(changes["category_id"])
    if "slug" in changes and not changes["slug"]:
        title = changes.get("title") or get_post(post_id).title
        changes["slug"] = _slug_from(title)
    post = posts.update(post_id, changes)
    log.info("post_updated", id=post_id, fields=sorted(changes))
    return post


def set_published(post_id: str, value: bool) -> BlogPost:
    post = posts.update(post_id, {"published": bool(value)})
    log.info("post_published" if value else "post_unpublished", id=post_id)
    return post


def delete_post(post_id: str) -> None:
    posts.delete(post_id)
    log.info("post_deleted", id=post_id)
