# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .status_service import (
    STATUS_ALIASES,
    STATUS_MAPPINGS,
    display_bucket,
    get_order_display_status,
    get_orders_by_display_status,
    get_shipping_status_display,
    get_status_counts,
    get_status_display,
    normalize_status,
    status_breakdown,
)

__all__ = [
    "STATUS_ALIASES",
    "STATUS_MAPPINGS",
    "display_bucket",
    "get_order_display_status",
    "get_orders_by_display_status",
    "get_shipping_status_display",
    "get_status_counts",
    "get_status_display",
    "normalize_status",
    "status_breakdown",
]
