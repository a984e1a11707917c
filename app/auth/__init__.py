# =============================================================================
# app/auth/__init__.py - Session Module
# =============================================================================
# Endpoints and dependencies for the logout flag.
#
# Usage:
#   from app.auth import LogoutFlagStoreDep
#
#   @router.get("/something")
#   async def handler(store: LogoutFlagStoreDep):
#       return store.snapshot()
# =============================================================================

from app.auth.dependencies import (
    LogoutFlagStoreDep,
    ResponseCookieStorage,
    get_logout_flag_store,
)
from app.auth.models import LogoutRequest, SessionConfigResponse, SessionStateResponse

__all__ = [
    "LogoutFlagStoreDep",
    "ResponseCookieStorage",
    "get_logout_flag_store",
    "LogoutRequest",
    "SessionConfigResponse",
    "SessionStateResponse",
]
