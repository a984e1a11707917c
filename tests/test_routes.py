# =============================================================================
# tests/test_routes.py - Route Partition Tests
# =============================================================================
# The gate middleware, the client guards and the login page must agree on
# which paths are public. These tests pin the partition and check every
# checkpoint uses the one shared constant.
#
# Run with: pytest tests/test_routes.py -v
# =============================================================================

import pytest

from app.middleware import LogoutGateMiddleware, is_gate_exempt
from core.routes import (
    PUBLIC_ROUTES,
    SESSION_EXPIRED_REDIRECT,
    is_public_route,
)
from core.session.guards import MountGuard, NavigationWatcher, PageEvents, VisibilityWatcher


class TestPublicRoutes:
    """Test is_public_route()."""

    def test_route_list(self):
        """The public set is fixed."""
        assert PUBLIC_ROUTES == ("/", "/login", "/register", "/forgot-password", "/about")

    @pytest.mark.parametrize("path", [
        "/",
        "/login",
        "/login?session=expired",
        "/register",
        "/register/",
        "/forgot-password",
        "/about",
        "/about/team",
    ])
    def test_public(self, path):
        """Exact and segment-prefix matches are public."""
        assert is_public_route(path) is True

    @pytest.mark.parametrize("path", [
        "/dashboard",
        "/dashboard/products",
        "/dashboard/orders/ord-1",
        "/aboutus",
        "/login-help",
        "/website/edit/shop",
        "/seed",
    ])
    def test_protected(self, path):
        """Everything else is protected; the root does not prefix-match."""
        assert is_public_route(path) is False

    def test_redirect_target(self):
        """Redirect target carries the session marker."""
        assert SESSION_EXPIRED_REDIRECT == "/login?session=expired"
        assert is_public_route(SESSION_EXPIRED_REDIRECT)


class TestSharedPartition:
    """Every checkpoint holds the same PUBLIC_ROUTES object."""

    def test_middleware_uses_shared_routes(self):
        """The gate middleware."""
        middleware = LogoutGateMiddleware(app=lambda scope, receive, send: None)
        assert middleware.public_routes is PUBLIC_ROUTES
        assert middleware.redirect_url == SESSION_EXPIRED_REDIRECT

    def test_guards_use_shared_routes(self, flag_store, navigator):
        """All three client guards."""
        events = PageEvents()
        guards = [
            NavigationWatcher(flag_store, navigator, events),
            VisibilityWatcher(flag_store, navigator, events),
            MountGuard(flag_store, navigator),
        ]
        for guard in guards:
            assert guard.public_routes is PUBLIC_ROUTES
            assert guard.redirect_url == SESSION_EXPIRED_REDIRECT


class TestGateExempt:
    """Paths the gate never inspects."""

    @pytest.mark.parametrize("path", ["/api/v1/auth/login", "/docs", "/openapi.json", "/static/app.js"])
    def test_exempt(self, path):
        assert is_gate_exempt(path) is True

    @pytest.mark.parametrize("path", ["/dashboard", "/apiary", "/documents"])
    def test_not_exempt(self, path):
        assert is_gate_exempt(path) is False
