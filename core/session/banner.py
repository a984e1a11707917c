# =============================================================================
# core/session/banner.py - Login Page Banner
# =============================================================================
# Picks the message the login page shows after a session ended.
# =============================================================================

from core.models.session import LoginBanner, LogoutFlag
from lib.utils import humanize_key

EXPIRED_QUERY_VALUE = "expired"

SESSION_EXPIRED_MESSAGE = "Your session has expired due to inactivity. Please log in again."


def login_banner(session: str | None = None, flag: LogoutFlag | None = None) -> LoginBanner | None:
    """
    Choose the login page banner.

    An explicit logout with a recorded reason wins over the query marker, so
    a user who clicked "log out" is not told their session timed out. The
    gate middleware only knows the cookie, not the reason, so a request that
    arrives with just `?session=expired` gets the inactivity message.

    Args:
        session: Value of the `session` query parameter
        flag: Client-side logout flag, when available

    Returns:
        LoginBanner, or None when there is nothing to say
    """
    if flag is not None and flag.logged_out and flag.reason and not flag.session_expired:
        return LoginBanner(
            title="Logged Out",
            message=f"You have been logged out: {humanize_key(flag.reason)}.",
        )

    if session == EXPIRED_QUERY_VALUE or (flag is not None and flag.session_expired):
        return LoginBanner(title="Session Expired", message=SESSION_EXPIRED_MESSAGE)

    return None
