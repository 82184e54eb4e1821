from __future__ import annotations

from typing import Optional

from flask import current_app
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from blog_crm.extensions import db
from blog_crm.repositories.user import get_admin_user


def ensure_admin_user() -> Optional[str]:
    """
    Check if an admin user exists in the database.

    Admin users are created with the 'flask create-admin' CLI command. Any
    database problem during the check is logged and does not stop startup.

    Returns:
        Status message if no admin user exists, None if admin exists or on error
    """
    try:
        # Skip check if the users table doesn't exist yet (e.g., during initial migrations)
        if not inspect(db.engine).has_table("users"):
            current_app.logger.info("Users table not found yet; skipping admin check")
            return None

        existing_admin = get_admin_user()
        if existing_admin:
            current_app.logger.info(f"Admin user found: {existing_admin.email}")
            return None

        current_app.logger.warning(
            "No admin user exists. Create one using: flask create-admin"
        )
        return "No admin user found. Use 'flask create-admin' to create one."

    except SQLAlchemyError as e:
        current_app.logger.error(f"Error checking for admin user: {str(e)}")
        current_app.logger.info("Continuing application startup without admin check")
        return None
