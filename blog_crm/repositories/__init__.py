# Re-export repository functions for convenient imports
from blog_crm.repositories.user import (
    get_user_by_email,
    get_user_by_hex_id,
)
from blog_crm.repositories.category import (
    list_categories,
    get_category,
    create_category,
    update_category,
    delete_category,
)
from blog_crm.repositories.blog import (
    list_posts,
    get_post,
    create_post,
    update_post,
    set_published,
    delete_post,
)

__all__ = [
    # User repositories
    "get_user_by_email",
    "get_user_by_hex_id",
    # Category repositories
    "list_categories",
    "get_category",
    "create_category",
    "update_category",
    "delete_category",
    # Blog repositories
    "list_posts",
    "get_post",
    "create_post",
    "update_post",
    "set_published",
    "delete_post",
]
