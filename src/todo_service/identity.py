from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request

from .errors import IdentityNotFoundError
from .repositories import Repository

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def get_repository_from_app(request: Request) -> Repository:
    """Return the store owned by the running application."""
    return request.app.state.repository


# PUBLIC_INTERFACE
def get_identity_dependency(header_name: Optional[str] = None):
    """
    Return a FastAPI dependency callable that resolves the acting username from a
    request header.

    Behavior:
    - Reads the username from `header_name` (default: the running app's
      settings.identity_header, looked up per request).
    - If the header is missing/empty or no user has that username, raises
      IdentityNotFoundError; the route handler is never invoked.
    - Otherwise returns the username. Handlers pass it to the repository,
      which owns the user record.

    The header value is trusted as-is. This is an identity lookup, not
    authentication.

    Usage:
        from .identity import get_identity_dependency
        current_user = get_identity_dependency()
        @router.get("/todos")
        def list_todos(username: str = Depends(current_user)) ...
    """

    def _resolve(request: Request, repo: Repository = Depends(get_repository_from_app)) -> str:
        """
        Resolve the identity header to a registered user.

        Raises:
            IdentityNotFoundError if the header is absent or unknown.
        """
        header = header_name or request.app.state.settings.identity_header
        username = request.headers.get(header)
        if not username:
            logger.warning("Identity header missing", extra={"header": header, "path": request.url.path})
            raise IdentityNotFoundError()

        if not repo.exists(username):
            logger.warning("Identity not resolved", extra={"username": username, "path": request.url.path})
            raise IdentityNotFoundError()
        return username

    return _resolve
