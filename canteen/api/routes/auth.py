"""Auth Routes — admin PIN login, logout and session check.

Invariants:
    - The PIN is compared in constant time against ADMIN_PASSWORD
    - Successful login sets an HttpOnly, SameSite=strict cookie (secure in
      production) and also returns the token for Bearer use
    - Logout is idempotent and always clears the cookie
"""

import hmac
import logging

from fastapi import APIRouter, Depends, Request, Response

from canteen.api.dependencies import SESSION_COOKIE, get_session_gate, presented_token
from canteen.config import Settings, get_settings
from canteen.core.errors import UnauthorizedError
from canteen.schemas.auth import LoginRequest, LoginResponse, SessionStatus
from canteen.services.session_gate import SessionGate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    response: Response,
    gate: SessionGate = Depends(get_session_gate),
    settings: Settings = Depends(get_settings),
):
    if not hmac.compare_digest(body.pin.encode(), settings.admin_password.encode()):
        logger.warning("Admin login rejected")
        raise UnauthorizedError("Incorrect PIN")
    token = await gate.issue()
    response.set_cookie(
        SESSION_COOKIE, token,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        samesite="strict",
        secure=settings.secure_cookies,
        path="/",
    )
    return LoginResponse(token=token, expires_in=settings.session_ttl_seconds)


@router.post("/logout")
async def logout(
    request: Request, response: Response,
    gate: SessionGate = Depends(get_session_gate),
):
    await gate.destroy(presented_token(request))
    response.delete_cookie(SESSION_COOKIE, path="/")
    return {"success": True}


@router.get("/session", response_model=SessionStatus)
async def session_status(
    request: Request, gate: SessionGate = Depends(get_session_gate),
):
    return SessionStatus(authenticated=await gate.verify(presented_token(request)))
