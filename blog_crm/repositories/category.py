from __future__ import annotations

from typing import Any, Mapping

import structlog

from blog_crm.errors import ValidationError
from blog_crm.models.blog import Category
from blog_crm.schemas.validation import parse_fields
from blog_crm.schemas.categories import CategoryCreate, CategoryUpdate
from blog_crm.store import Table
from blog_crm.utils.slug import slugify

NAME_REQUIRED = "Category name is required"
SLUG_UNAVAILABLE = "Slug could not be generated from the name"

categories: Table[Category] = Table(Category, not_found_message="Category not found")

log = structlog.get_logger(__name__)


def _slug_from(name: str) -> str:
    slug = slugify(name)
    if not slug:
        raise ValidationError(SLUG_UNAVAILABLE)
    return slug


def list_categories() -> list[Category]:
    return categories.select(order_by="name")


def get_category(category_id: str) -> Category:
    return categories.get(category_id)


def category_exists(category_id: str) -> bool:
    return categories.exists(category_id)


def create_category(fields: Mapping[str, Any]) -> Category:
    payload = parse_fields(CategoryCreate, fields, required=("name",), required_message=NAME_REQUIRED)
    cat = categories.insert(
        {
            "name": payload.name,
            "slug": payload.slug or _slug_from(payload.name),
            "description": payload.description,
        }
    )
    log.info("category_created", id=cat.hex_id, slug=cat.slug)
    return cat


def update_category(category_id: str, fields: Mapping[str, Any]) -> Category:
    payload = parse_fields(CategoryUpdate, fields, required=("name",), required_message=NAME_REQUIRED)
    changes = payload.model_dump(exclude_unset=True)
    if "slug" in changes and not changes["slug"]:
        name = changes.get("name") or get_category(category_id).name
        changes["slug"] = _slug_from(name)
    cat = categories.update(category_id, changes)
    log.info("category_updated", id=category_id, fields=sorted(changes))
    return cat


def delete_category(category_id: str) -> None:
    # Posts keep whatever category_id they hold; see BlogPost.category_id
    categories.delete(category_id)
    log.info("category_deleted", id=category_id)
