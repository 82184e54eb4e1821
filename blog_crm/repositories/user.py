from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from blog_crm.extensions import db
from blog_crm.models.user import User


def get_user_by_hex_id(hex_id: str) -> Optional[User]:
    return db.session.execute(db.select(User).filter_by(hex_id=hex_id)).scalar_one_or_none()


def get_user_by_email(email: str) -> Optional[User]:
    return db.session.execute(db.select(User).filter_by(email=email.strip().lower())).scalar_one_or_none()


def get_admin_user() -> Optional[User]:
    return db.session.execute(db.select(User).filter_by(is_admin=True).limit(1)).scalar_one_or_none()


def create_user(*, email: str, password_hash: str, is_admin: bool = False) -> User:
    user = User(email=email.strip().lower(), password_hash=password_hash, is_admin=is_admin)
    db.session.add(user)
    db.session.commit()
    return user


def record_login(user: User) -> None:
    user.last_login = datetime.now(timezone.utc)
    db.session.commit()
