"""Service error taxonomy.

Every error here is a caller-input problem. Each carries the HTTP status it
maps to and a human-readable message; the handlers registered in ``main``
turn them into ``{"error": ..., "message": ...}`` JSON responses.
"""

from __future__ import annotations

from typing import Optional


class ServiceError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ConflictError(ServiceError):
    """A user with the requested username already exists."""

    status_code = 400
    default_message = "Username already exists"


class IdentityNotFoundError(ServiceError):
    """The identity header is missing or names no registered user."""

    status_code = 404
    default_message = "User not found"


class NotFoundError(ServiceError):
    """The todo id does not exist for the resolved user."""

    status_code = 404
    default_message = "Todo not found"
