from __future__ import annotations

# Re-export common schema classes for convenient imports
from .categories import CategoryCreate, CategoryUpdate  # noqa: F401
from .posts import PostCreate, PostUpdate, PublishedToggle  # noqa: F401
from .auth import LoginRequest  # noqa: F401

__all__ = [
    # categories
    "CategoryCreate",
    "CategoryUpdate",
    # posts
    "PostCreate",
    "PostUpdate",
    "PublishedToggle",
    # auth
    "LoginRequest",
]
