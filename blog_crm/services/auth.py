"""
Authentication gate for the admin panel.

The signed-in principal is handed around as an ``AdminSession``: acquired by
``sign_in`` after a successful ``authenticate``, rebuilt per request by
``current_admin_session`` and invalidated by ``sign_out``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Tuple

import structlog
from flask import session
from flask_login import current_user, login_user, logout_user

from blog_crm.errors import AuthenticationRequired
from blog_crm.models.user import User
from blog_crm.repositories.user import get_user_by_email, record_login
from blog_crm.utils.crypto import verify_password

LOGIN_TIME_KEY = "_login_time"

log = structlog.get_logger(__name__)


@dataclass
class AdminSession:
    principal: User
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    active: bool = True

    @property
    def email(self) -> str:
        return self.principal.email

    def require_active(self) -> None:
        if not self.active:
            raise AuthenticationRequired("Session has ended, please sign in again")

    def invalidate(self) -> None:
        self.active = False


def authenticate(email: str, password: str) -> Tuple[User | None, str | None]:
    """
    Check credentials.
    Returns (user, error_message) tuple.
    """
    user = get_user_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        log.info("login_failed", email=email)
        return None, "Invalid email or password"
    if not user.is_admin:
        log.info("login_refused", email=email, reason="not_admin")
        return None, "This account cannot access the admin panel"
    return user, None


def sign_in(user: User) -> AdminSession:
    login_user(user, remember=False)
    record_login(user)
    admin_session = AdminSession(principal=user)
    session[LOGIN_TIME_KEY] = int(admin_session.started_at.timestamp())
    log.info("signed_in", user=user.hex_id)
    return admin_session


def current_admin_session() -> AdminSession | None:
    if not current_user.is_authenticated or not getattr(current_user, "is_admin", False):
        return None
    started = session.get(LOGIN_TIME_KEY)
    if isinstance(started, int):
        return AdminSession(principal=current_user._get_current_object(),
                            started_at=datetime.fromtimestamp(started, timezone.utc))
    return AdminSession(principal=current_user._get_current_object())


def sign_out(admin_session: AdminSession) -> None:
    log.info("signed_out", user=admin_session.principal.hex_id)
    logout_user()
    session.clear()
    admin_session.invalidate()
