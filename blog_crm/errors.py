"""
Error hierarchy shared by the store, the repositories and the admin panel.

Every error carries the message shown to the administrator. Store errors keep
the database's own text so constraint violations read the same as they do in
the database logs.
"""

from __future__ import annotations


class AdminError(Exception):
    """Base class for failures surfaced to the administrator."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AdminError):
    """Input rejected locally, before any store call."""


class StoreError(AdminError):
    """Failure reported by the data store."""


class NotFoundError(StoreError):
    """The requested row does not exist."""


class AuthenticationRequired(AdminError):
    """No active admin session."""


class OperationInProgress(AdminError):
    """An operation guarded by the same in-flight flag has not settled yet."""
