# =============================================================================
# app/auth/models.py - Session Endpoint Models
# =============================================================================
# Pydantic models for the logout/login session endpoints.
# =============================================================================

from pydantic import BaseModel, Field

from core.models.session import LogoutFlag


class LogoutRequest(BaseModel):
    """
    Body of an explicit logout.

    The reason is shown on the login page, with underscores as spaces.
    """
    reason: str = Field(
        default="user_logout",
        min_length=1,
        max_length=100,
        pattern=r"^[A-Za-z0-9_\- ]+$",
        description="Why the session ended (e.g. user_logout, password_changed)"
    )


class SessionStateResponse(BaseModel):
    """Logout flag plus where the client should go next."""
    flag: LogoutFlag
    redirect_to: str | None = Field(
        default=None,
        description="Where the client should navigate, if anywhere"
    )


class SessionConfigResponse(BaseModel):
    """Settings the browser-side inactivity timer needs."""
    timeout_minutes: int
    warning_minutes: int
    forced_logout_endpoint: str
