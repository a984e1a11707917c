# =============================================================================
# app/auth/dependencies.py - Logout Flag Dependencies
# =============================================================================
# Provides a request-scoped LogoutFlagStore whose cookie half reads the
# request's cookies and writes Set-Cookie headers on the response.
#
# On the server only the cookie is visible; the client-side half of the flag
# lives in the browser, so each request gets a fresh MemoryStorage for it and
# the endpoints return the flag in their body for the browser to mirror.
#
# Usage:
#   from app.auth import LogoutFlagStoreDep
#
#   @router.post("/logout")
#   async def logout(store: LogoutFlagStoreDep):
#       return store.mark_logged_out("user_logout")
# =============================================================================

import logging
from typing import Annotated, Mapping

from fastapi import Depends, Request, Response

from app.config import settings
from core.session.flags import LogoutFlagStore
from core.session.storage import MemoryStorage

logger = logging.getLogger(__name__)


class ResponseCookieStorage:
    """
    KeyValueStorage over an HTTP request/response pair.

    Reads come from the request's cookies, overlaid with whatever this
    request has already set or deleted; writes become Set-Cookie headers.
    """

    def __init__(
        self,
        request_cookies: Mapping[str, str],
        response: Response,
        secure: bool = False,
        samesite: str = "lax",
    ):
        self.request_cookies = request_cookies
        self.response = response
        self.secure = secure
        self.samesite = samesite
        # key -> value written, or None if deleted during this request
        self._pending: dict[str, str | None] = {}

    def get(self, key: str) -> str | None:
        if key in self._pending:
            return self._pending[key]
        return self.request_cookies.get(key)

    def set(self, key: str, value: str) -> None:
        # Not HttpOnly: the browser-side guards read it too
        self.response.set_cookie(
            key,
            value,
            path="/",
            httponly=False,
            secure=self.secure,
            samesite=self.samesite,
        )
        self._pending[key] = value

    def delete(self, key: str) -> None:
        if self.get(key) is None:
            return
        self.response.delete_cookie(key, path="/", secure=self.secure, samesite=self.samesite)
        self._pending[key] = None


def get_logout_flag_store(request: Request, response: Response) -> LogoutFlagStore:
    """
    Build the flag store for the current request.

    Headers set on `response` are merged into whatever the endpoint returns.
    """
    cookies = ResponseCookieStorage(
        request.cookies,
        response,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
    )
    return LogoutFlagStore(storage=MemoryStorage(), cookies=cookies)


# Type alias for dependency injection
LogoutFlagStoreDep = Annotated[LogoutFlagStore, Depends(get_logout_flag_store)]
