# =============================================================================
# app/routers/pages.py - Page Endpoints
# =============================================================================
# Page descriptors for the dashboard shell. Public pages are served to
# anyone; everything under /dashboard is protected and is only reached when
# the gate middleware has let the request through.
#
# Protected pages are sent with no-store cache headers so the browser's
# back button cannot show a cached copy after logout.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Query, Response
from pydantic import BaseModel, Field

from app.auth import LogoutFlagStoreDep
from core.models.session import LoginBanner
from core.routes import LOGIN_PATH, is_public_route
from core.session.banner import login_banner

logger = logging.getLogger(__name__)

router = APIRouter()

NO_STORE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


# =============================================================================
# Response Models
# =============================================================================

class PageResponse(BaseModel):
    """What the shell needs to render a page."""
    page: str = Field(..., examples=["dashboard/orders"])
    path: str = Field(..., examples=["/dashboard/orders"])
    public: bool
    banner: LoginBanner | None = None


def _page(path: str, banner: LoginBanner | None = None) -> PageResponse:
    return PageResponse(
        page=path.strip("/") or "home",
        path=path,
        public=is_public_route(path),
        banner=banner,
    )


# =============================================================================
# Public Pages
# =============================================================================

@router.get("/", response_model=PageResponse)
async def home():
    """Landing page."""
    return _page("/")


@router.get(LOGIN_PATH, response_model=PageResponse)
async def login_page(
    store: LogoutFlagStoreDep,
    session: Annotated[str | None, Query(description="'expired' after a forced redirect")] = None,
):
    """
    Login page.

    Shows the session-expired banner when redirected with ?session=expired
    and consumes any leftover logout cookie.
    """
    flag = store.snapshot()
    store.clear_logout_flags()
    return _page(LOGIN_PATH, banner=login_banner(session=session, flag=flag))


@router.get("/register", response_model=PageResponse)
async def register_page():
    return _page("/register")


@router.get("/forgot-password", response_model=PageResponse)
async def forgot_password_page():
    return _page("/forgot-password")


@router.get("/about", response_model=PageResponse)
async def about_page():
    return _page("/about")


# =============================================================================
# Protected Pages
# =============================================================================

@router.get("/dashboard", response_model=PageResponse)
async def dashboard_home(response: Response):
    """Dashboard landing page."""
    response.headers.update(NO_STORE_HEADERS)
    return _page("/dashboard")


@router.get("/dashboard/{section:path}", response_model=PageResponse)
async def dashboard_section(section: str, response: Response):
    """Any dashboard section (products, orders, chat, website, ...)."""
    response.headers.update(NO_STORE_HEADERS)
    return _page(f"/dashboard/{section}")
