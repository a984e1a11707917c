# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Provides flag stores, a fake router and page events for guard tests
# - Provides a FastAPI TestClient for HTTP tests
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SESSION_TIMEOUT_MINUTES", "60")
os.environ.setdefault("SESSION_WARNING_MINUTES", "5")

import pytest

from core.session.flags import LogoutFlagStore
from core.session.guards import PageEvents
from core.session.storage import MemoryStorage


# =============================================================================
# Fakes
# =============================================================================

class FakeNavigator:
    """Router stand-in that records every push."""

    def __init__(self, pathname: str = "/dashboard"):
        self.pathname = pathname
        self.pushed: list[str] = []

    def push(self, url: str) -> None:
        self.pushed.append(url)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def local_storage():
    """Client-side storage (browser local storage stand-in)."""
    return MemoryStorage()


@pytest.fixture
def cookie_jar():
    """Server-readable cookie jar stand-in."""
    return MemoryStorage()


@pytest.fixture
def flag_store(local_storage, cookie_jar):
    """LogoutFlagStore over in-memory storage."""
    return LogoutFlagStore(storage=local_storage, cookies=cookie_jar)


@pytest.fixture
def navigator():
    """Router currently on a protected page."""
    return FakeNavigator("/dashboard/orders")


@pytest.fixture
def page_events():
    """Page event source."""
    return PageEvents()


@pytest.fixture
def client():
    """HTTP client for the FastAPI app."""
    from fastapi.testclient import TestClient

    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_orders():
    """Order documents covering every tab plus an unknown status."""
    return [
        {"id": "ord-1", "status": "settle payment", "total": 1200},
        {"id": "ord-2", "status": "payment sent"},
        {"id": "ord-3", "status": "preparing"},
        {"id": "ord-4", "status": "in transit", "is_pickup": False, "out_of_delivery": True},
        {"id": "ord-5", "status": "in_transit", "is_pickup": True},
        {"id": "ord-6", "status": "ready for pickup"},
        {"id": "ord-7", "status": "order received"},
        {"id": "ord-8", "status": "completed"},
        {"id": "ord-9", "status": "cancelled"},
        {"id": "ord-10", "status": "on hold"},
    ]
