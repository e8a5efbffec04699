"""Shared route dependencies.

- ``current_user``: resolves the ``X-Session-Token`` header to a user (401 otherwise)
- ``http_error``: translates a domain error into an ``HTTPException``
"""

from typing import Optional

from fastapi import Header, HTTPException

from api.services.data_context import resolve_session
from core.errors import (
    AccessDeniedError,
    InvalidTransitionError,
    NotFoundError,
    PortalError,
    ValidationError,
)
from core.observability import bind_correlation

SESSION_HEADER = "X-Session-Token"

STATUS_CODES = {
    NotFoundError: 404,
    AccessDeniedError: 403,
    InvalidTransitionError: 409,
    ValidationError: 422,
}


def http_error(exc: PortalError) -> HTTPException:
    """Map a domain error to its HTTP status; unknown subclasses become 400."""
    for error_type, status_code in STATUS_CODES.items():
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=exc.message)
    return HTTPException(status_code=400, detail=exc.message)


async def session_token(
    x_session_token: Optional[str] = Header(None, alias=SESSION_HEADER),
) -> Optional[str]:
    return x_session_token


async def current_user(
    x_session_token: Optional[str] = Header(None, alias=SESSION_HEADER),
):
    """Resolve the signed-in user or reject the request with 401."""
    user = resolve_session(x_session_token)
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    # Tag the rest of this request's logs with who is acting
    bind_correlation(user_id=user.id, role=user.role)
    return user
