# =============================================================================
# app/auth/routes.py - Session Routes
# =============================================================================
# API endpoints that write and clear the logout flag.
#
# Note: Credential checks happen client-side against the auth provider.
# These routes only record the outcome so the gate middleware and the
# browser guards agree about the session.
# =============================================================================

import logging

from fastapi import APIRouter

from app.auth.dependencies import LogoutFlagStoreDep
from app.auth.models import LogoutRequest, SessionConfigResponse, SessionStateResponse
from app.config import settings
from app.exceptions import LogoutFailedError
from core.routes import LOGIN_PATH, SESSION_EXPIRED_REDIRECT
from core.session.flags import SESSION_TIMEOUT_REASON, LogoutFlagWriteError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/logout", response_model=SessionStateResponse)
async def logout(
    store: LogoutFlagStoreDep,
    request: LogoutRequest | None = None,
) -> SessionStateResponse:
    """
    Record an explicit logout.

    Sets the `auth_logged_out` cookie and returns the flag the browser
    should store alongside it.

    Raises:
        500: If the flag could not be recorded
    """
    reason = request.reason if request else LogoutRequest().reason

    try:
        flag = store.mark_logged_out(reason)
    except LogoutFlagWriteError as e:
        raise LogoutFailedError(reason, e.message)

    return SessionStateResponse(flag=flag, redirect_to=LOGIN_PATH)


@router.post("/session-expired", response_model=SessionStateResponse)
async def session_expired(store: LogoutFlagStoreDep) -> SessionStateResponse:
    """
    Record a forced logout after inactivity.

    Called by the browser's inactivity timer.
    """
    try:
        flag = store.mark_session_expired()
    except LogoutFlagWriteError as e:
        raise LogoutFailedError(SESSION_TIMEOUT_REASON, e.message)

    return SessionStateResponse(flag=flag, redirect_to=SESSION_EXPIRED_REDIRECT)


@router.post("/login", response_model=SessionStateResponse)
async def login(store: LogoutFlagStoreDep) -> SessionStateResponse:
    """
    Acknowledge a successful fresh login.

    Clears the logout cookie so protected pages are served again.
    """
    store.clear_logout_flags()
    logger.info("Fresh login recorded")
    return SessionStateResponse(flag=store.snapshot(), redirect_to="/dashboard")


@router.get("/session", response_model=SessionStateResponse)
async def session_state(store: LogoutFlagStoreDep) -> SessionStateResponse:
    """
    Report the logout flag as the server sees it (cookie only).
    """
    flag = store.snapshot()
    return SessionStateResponse(
        flag=flag,
        redirect_to=SESSION_EXPIRED_REDIRECT if flag.logged_out else None,
    )


@router.get("/session-config", response_model=SessionConfigResponse)
async def session_config() -> SessionConfigResponse:
    """
    Inactivity timer settings for the browser.
    """
    return SessionConfigResponse(
        timeout_minutes=settings.SESSION_TIMEOUT_MINUTES,
        warning_minutes=settings.SESSION_WARNING_MINUTES,
        forced_logout_endpoint="/api/v1/auth/session-expired",
    )
