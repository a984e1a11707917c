# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - order.py: Order status enums, mapping table rows, display results
# - session.py: Logout flag, guard state, login banner
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Order Models - Status display mapping
# -----------------------------------------------------------------------------
from .order import (
    BackendStatus,
    DisplayStatus,
    Order,
    ShippingStatusDisplay,
    StatusBreakdown,
    StatusCounts,
    StatusDisplay,
    StatusMapping,
)

# -----------------------------------------------------------------------------
# Session Models - Logout flag
# -----------------------------------------------------------------------------
from .session import (
    GuardState,
    LoginBanner,
    LogoutFlag,
)

__all__ = [
    # Order
    "BackendStatus",
    "DisplayStatus",
    "Order",
    "ShippingStatusDisplay",
    "StatusBreakdown",
    "StatusCounts",
    "StatusDisplay",
    "StatusMapping",
    # Session
    "GuardState",
    "LoginBanner",
    "LogoutFlag",
]
