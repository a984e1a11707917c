# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - pages.py: Public and protected page descriptors
# - orders.py: Order status mapping, tab counts and filtering
#
# Session endpoints live in app/auth/routes.py.
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import orders
from . import pages

__all__ = [
    "health",
    "orders",
    "pages",
]
