# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Sellah dashboard API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.auth import routes as auth_routes
from app.config import settings
from app.exceptions import SellahException, sellah_exception_handler
from app.middleware import LogoutGateMiddleware
from app.routers import health, orders, pages
from core.routes import PUBLIC_ROUTES

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs the configuration the gate runs with on startup.
    """
    logger.info(f"Starting Sellah API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Public routes: {', '.join(PUBLIC_ROUTES)}")

    yield

    logger.info("Shutting down Sellah API")


# Create FastAPI application
app = FastAPI(
    title="Sellah Dashboard API",
    description="""
## Seller Dashboard Backend

Serves the Sellah seller dashboard: page gating after logout, session
endpoints, and order status display mapping.

### Logout Flow

1. **Logout** - `POST /api/v1/auth/logout` sets the `auth_logged_out` cookie
2. **Gate** - any protected page request with that cookie is redirected to
   `/login?session=expired` and the cookie is removed
3. **Login** - `POST /api/v1/auth/login` clears the flag after a fresh sign-in
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Record logouts, forced logouts and fresh logins",
        },
        {
            "name": "Pages",
            "description": "Public and protected page descriptors",
        },
        {
            "name": "Orders",
            "description": "Order status badges, tabs and counts",
        },
        {
            "name": "Health",
            "description": "API health and liveness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# Logout gate - must see every page request before the handlers do
app.add_middleware(LogoutGateMiddleware)

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(SellahException)
async def handle_sellah_exception(request: Request, exc: SellahException):
    """Handle custom Sellah exceptions."""
    return await sellah_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Session endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Order status endpoints
app.include_router(
    orders.router,
    prefix="/api/v1/orders",
    tags=["Orders"]
)

# Page descriptors (public and /dashboard)
app.include_router(
    pages.router,
    tags=["Pages"]
)
