# =============================================================================
# app/middleware.py - Logout Gate Middleware
# =============================================================================
# Runs before any page handler. A request for a protected page that carries
# the logout cookie is redirected to /login?session=expired, and the redirect
# response deletes the cookie so the next request is not redirected again.
#
# Public pages always pass through untouched, whatever the cookie says.
# The API, docs and static assets are not gated at all, so the auth
# endpoints stay reachable after a logout.
# =============================================================================

import logging

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from app.config import settings
from core.routes import (
    LOGOUT_COOKIE_NAME,
    LOGOUT_COOKIE_VALUE,
    PUBLIC_ROUTES,
    SESSION_EXPIRED_REDIRECT,
    is_public_route,
)

logger = logging.getLogger(__name__)

# Path prefixes the gate never looks at
GATE_EXEMPT_PREFIXES: tuple[str, ...] = (
    "/api",
    "/static",
    "/images",
    "/favicon.ico",
    "/docs",
    "/redoc",
    "/openapi.json",
)


def is_gate_exempt(path: str) -> bool:
    """Check whether a path bypasses the gate entirely."""
    return any(
        path == prefix or path.startswith(prefix.rstrip("/") + "/")
        for prefix in GATE_EXEMPT_PREFIXES
    )


class LogoutGateMiddleware(BaseHTTPMiddleware):
    """
    Server-side checkpoint for the logout cookie.

    Uses the shared PUBLIC_ROUTES so it can never disagree with the
    client-side guards about which pages are public.
    """

    def __init__(self, app: ASGIApp, redirect_url: str = SESSION_EXPIRED_REDIRECT):
        super().__init__(app)
        self.redirect_url = redirect_url
        self.public_routes = PUBLIC_ROUTES

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path

        if is_gate_exempt(path) or is_public_route(path, self.public_routes):
            return await call_next(request)

        if request.cookies.get(LOGOUT_COOKIE_NAME) == LOGOUT_COOKIE_VALUE:
            logger.info(f"Logout cookie present on {path}, redirecting to {self.redirect_url}")
            response = RedirectResponse(url=self.redirect_url, status_code=307)
            response.delete_cookie(
                LOGOUT_COOKIE_NAME,
                path="/",
                secure=settings.COOKIE_SECURE,
                samesite=settings.COOKIE_SAMESITE,
            )
            return response

        return await call_next(request)
