# =============================================================================
# core/models/session.py - Logout Session Schemas
# =============================================================================
# These models describe the logout flag shared by the client guards and the
# gate middleware:
# - LogoutFlag: Snapshot of "was this session ended, and why"
# - GuardState: State of a single session guard
# - LoginBanner: Message the login page shows after a logout
# =============================================================================

from enum import Enum

from pydantic import BaseModel, Field


class GuardState(str, Enum):
    """
    State of a session guard.

    State machine:
        idle -> checking -> idle
        checking -> redirecting -> idle

    A redirecting guard goes back to idle once it sees a public path, once
    the flag reads clear, or when it is restarted on a new page mount.

    - idle: Nothing to do, protected content may show
    - checking: Mount-time check in progress, render is held back
    - redirecting: Stale view detected, navigation to login issued
    """
    IDLE = "idle"
    CHECKING = "checking"
    REDIRECTING = "redirecting"


class LogoutFlag(BaseModel):
    """
    Snapshot of the persisted logout flag.

    Example:
        {
            "logged_out": true,
            "reason": "user_logout",
            "session_expired": false
        }
    """

    logged_out: bool = Field(
        default=False,
        description="Session was explicitly ended"
    )

    reason: str | None = Field(
        default=None,
        description="Why the session was ended (e.g. user_logout, session_timeout)"
    )

    # Only set by the forced (inactivity) logout path
    session_expired: bool = Field(
        default=False,
        description="Session ended because of inactivity"
    )

    model_config = {"frozen": True}


class LoginBanner(BaseModel):
    """Alert shown above the login form."""
    title: str
    message: str
