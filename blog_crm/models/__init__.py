from __future__ import annotations

import secrets


def generate_hex_id(length: int = 32) -> str:
    """Generate a secure random hex string of specified length."""
    return secrets.token_hex(length // 2)


# Import all models so the metadata is complete for create_all and migrations
from blog_crm.models.user import User
from blog_crm.models.blog import Category, BlogPost

__all__ = [
    "generate_hex_id",
    "User",
    "Category",
    "BlogPost",
]
