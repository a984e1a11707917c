# =============================================================================
# core/routes.py - Public/Protected Route Partition
# =============================================================================
# The one place that decides which URL paths are public. The gate middleware,
# the three client-side session guards and the login page all import
# PUBLIC_ROUTES from here; nothing else may keep its own copy.
#
# Usage:
#   from core.routes import is_public_route, SESSION_EXPIRED_REDIRECT
#
#   if not is_public_route(request.url.path):
#       ...
# =============================================================================

from urllib.parse import urlsplit

# Paths anyone may visit. Every other path is protected.
PUBLIC_ROUTES: tuple[str, ...] = (
    "/",
    "/login",
    "/register",
    "/forgot-password",
    "/about",
)

LOGIN_PATH = "/login"

# Where a stale authenticated view is sent
SESSION_EXPIRED_REDIRECT = f"{LOGIN_PATH}?session=expired"

# Cookie the gate middleware reads before any page code runs
LOGOUT_COOKIE_NAME = "auth_logged_out"
LOGOUT_COOKIE_VALUE = "true"


def _normalize_path(path: str) -> str:
    """Strip query/fragment and any trailing slash (except for the root)."""
    path = urlsplit(path).path or "/"
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def is_public_route(path: str, routes: tuple[str, ...] = PUBLIC_ROUTES) -> bool:
    """
    Check whether a path belongs to the public route set.

    Matching is exact or by path segment: "/about" covers "/about" and
    "/about/team" but not "/aboutus". The root "/" only matches itself,
    otherwise every path would be public.

    Args:
        path: Request path, optionally with query string
        routes: Route set to match against (defaults to PUBLIC_ROUTES)

    Returns:
        True if the path is public
    """
    path = _normalize_path(path)

    for route in routes:
        if route == "/":
            if path == "/":
                return True
            continue
        if path == route or path.startswith(route + "/"):
            return True

    return False
