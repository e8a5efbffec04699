"""Authentication Routes (stub).

Implements:
- POST /api/auth/login - Sign in by e-mail, returns a session token
- POST /api/auth/logout - Drop the current session
- POST /api/auth/switch/{user_id} - Demo helper: become another user
- GET /api/auth/me - Current user and their role-tagged data context

There is no password check; any known e-mail signs in. Sessions live in
process memory and expire after ``PORTAL_SESSION_TTL_MINUTES``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path

from api.dependencies import current_user, http_error, session_token
from api.services.data_context import (
    get_data_for_user,
    login,
    logout,
    switch_user,
)
from api.services.store import get_store
from core.errors import PortalError
from core.validation import is_valid_email
from models.api_responses import (
    LoginRequest,
    OperationResult,
    MeResponse,
    SessionResponse,
)

router = APIRouter(prefix="/auth")


@router.post("/login", response_model=SessionResponse)
async def sign_in(body: LoginRequest) -> SessionResponse:
    """Sign in with an e-mail address.

    **Demo accounts:**
    - sarah@propertymanagement.com (property manager)
    - mike.chen@email.com (tenant)
    - contact@abcplumbing.com (service provider)
    """
    if not is_valid_email(body.email):
        raise HTTPException(status_code=422, detail="Please enter a valid email address")

    session = login(body.email)
    if session is None:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    return SessionResponse(
        session_token=session.token,
        expires_at=session.expires_at,
        user=get_store().get_user(session.user_id),
    )


@router.post("/logout", response_model=OperationResult)
async def sign_out(token: Optional[str] = Depends(session_token)) -> OperationResult:
    """Drop the current session. Signing out twice is harmless."""
    success = bool(token) and logout(token)
    return OperationResult(
        success=success,
        message="Signed out" if success else "No active session",
    )


@router.post("/switch/{user_id}", response_model=SessionResponse)
async def switch(
    user_id: str = Path(..., description="User to become"),
    token: Optional[str] = Depends(session_token),
    user=Depends(current_user),
) -> SessionResponse:
    """Re-point the current session at another user (demo only)."""
    try:
        session = switch_user(token, user_id)
    except PortalError as exc:
        raise http_error(exc) from exc

    return SessionResponse(
        session_token=session.token,
        expires_at=session.expires_at,
        user=get_store().get_user(session.user_id),
    )


@router.get("/me", response_model=MeResponse)
async def me(user=Depends(current_user)) -> MeResponse:
    """The signed-in user and their data context."""
    return MeResponse(user=user, data=get_data_for_user(user))
