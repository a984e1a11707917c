# =============================================================================
# core/services/status_service.py - Order Status Normalization & Display
# =============================================================================
# Maps the raw, sometimes inconsistent status strings found on order documents
# to the dashboard's display buckets (tabs), badge labels and colors.
#
# Every function here is pure. Unknown statuses never raise: they land in the
# "unknown" bucket with neutral styling so they stay visible in the UI.
#
# Usage:
#   from core.services.status_service import get_status_display
#
#   badge = get_status_display(order["status"])
#   print(badge.label, badge.display_status)
# =============================================================================

import logging
from collections import Counter
from typing import Any, Iterable, Mapping

from core.models.order import (
    BackendStatus,
    DisplayStatus,
    Order,
    ShippingStatusDisplay,
    StatusBreakdown,
    StatusCounts,
    StatusDisplay,
    StatusMapping,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Reference Data
# =============================================================================

UNPAID_COLOR = "text-red-600 bg-red-50"
TO_SHIP_COLOR = "text-blue-600 bg-blue-50"
SHIPPING_COLOR = "text-purple-600 bg-purple-50"
COMPLETED_COLOR = "text-green-600 bg-green-50"
NEUTRAL_COLOR = "text-gray-600 bg-gray-50"

# Returned by normalize_status() for a missing status
EMPTY_STATUS = "pending"
UNKNOWN_LABEL = "Unknown"

STATUS_MAPPINGS: tuple[StatusMapping, ...] = (
    StatusMapping(
        db_status=BackendStatus.SETTLE_PAYMENT,
        display_status=DisplayStatus.UNPAID,
        display_label="Unpaid",
        color=UNPAID_COLOR,
    ),
    StatusMapping(
        db_status=BackendStatus.PAYMENT_SENT,
        display_status=DisplayStatus.UNPAID,
        display_label="Unpaid",
        color=UNPAID_COLOR,
    ),
    StatusMapping(
        db_status=BackendStatus.PREPARING,
        display_status=DisplayStatus.TO_SHIP,
        display_label="To Ship",
        color=TO_SHIP_COLOR,
    ),
    StatusMapping(
        db_status=BackendStatus.IN_TRANSIT,
        display_status=DisplayStatus.SHIPPING,
        display_label="Shipping",
        color=SHIPPING_COLOR,
    ),
    StatusMapping(
        db_status=BackendStatus.READY_FOR_PICKUP,
        display_status=DisplayStatus.COMPLETED,
        display_label="Completed",
        color=COMPLETED_COLOR,
    ),
    StatusMapping(
        db_status=BackendStatus.ORDER_RECEIVED,
        display_status=DisplayStatus.COMPLETED,
        display_label="Completed",
        color=COMPLETED_COLOR,
    ),
    StatusMapping(
        db_status=BackendStatus.COMPLETED,
        display_status=DisplayStatus.COMPLETED,
        display_label="Completed",
        color=COMPLETED_COLOR,
    ),
    StatusMapping(
        db_status=BackendStatus.CANCELLED,
        display_status=DisplayStatus.CANCELLED,
        display_label="Cancelled",
        color=NEUTRAL_COLOR,
    ),
)

# Spellings seen in stored documents, keyed by their lower-cased form
STATUS_ALIASES: dict[str, str] = {
    "to_transit": BackendStatus.IN_TRANSIT.value,
    "in_transit": BackendStatus.IN_TRANSIT.value,
    "ready_for_pickup": BackendStatus.READY_FOR_PICKUP.value,
    "payment_sent": BackendStatus.PAYMENT_SENT.value,
    "settle_payment": BackendStatus.SETTLE_PAYMENT.value,
    "order_received": BackendStatus.ORDER_RECEIVED.value,
    "cancelled": BackendStatus.CANCELLED.value,
}


def _index_mappings(
    mappings: Iterable[StatusMapping],
) -> dict[BackendStatus, StatusMapping]:
    """
    Index the table by backend status and check it is total and unambiguous.

    Raises:
        ValueError: If a status is mapped twice or not at all
    """
    index: dict[BackendStatus, StatusMapping] = {}
    for mapping in mappings:
        if mapping.db_status in index:
            raise ValueError(f"Duplicate status mapping for '{mapping.db_status.value}'")
        index[mapping.db_status] = mapping

    missing = [status.value for status in BackendStatus if status not in index]
    if missing:
        raise ValueError(f"No status mapping for: {', '.join(missing)}")

    return index


_MAPPINGS_BY_STATUS = _index_mappings(STATUS_MAPPINGS)


# =============================================================================
# Normalization
# =============================================================================

def normalize_status(raw: str | None) -> str:
    """
    Rewrite known alias spellings of a status to the canonical form.

    The input is lower-cased and trimmed only for the alias lookup; a string
    that is not an alias is returned exactly as given. Missing or empty
    input becomes "pending". Applying the function twice gives the same
    result as applying it once.

    Args:
        raw: Status string from an order document (may be None)

    Returns:
        Canonical status string, or the input unchanged

    Example:
        normalize_status("in_transit")   # "in transit"
        normalize_status("cancelled")    # "CANCELLED"
        normalize_status("On Hold")      # "On Hold"
    """
    if not raw:
        return EMPTY_STATUS

    folded = raw.lower().strip()
    return STATUS_ALIASES.get(folded, raw)


def resolve_status(raw: str | None) -> BackendStatus | None:
    """Normalize a raw status and resolve it to a BackendStatus, if known."""
    return BackendStatus.lookup(normalize_status(raw))


def display_bucket(status: BackendStatus) -> DisplayStatus:
    """Display bucket of a known backend status. Total over BackendStatus."""
    return _MAPPINGS_BY_STATUS[status].display_status


def get_status_mapping(raw: str | None) -> StatusMapping | None:
    """Table row for a raw status, or None if the status is unmapped."""
    status = resolve_status(raw)
    if status is None:
        return None
    return _MAPPINGS_BY_STATUS[status]


# =============================================================================
# Display Mapping
# =============================================================================

def get_status_display(raw: str | None) -> StatusDisplay:
    """
    Get the badge label, color and bucket for a raw status.

    Unmapped statuses fall back to the raw text (or "Unknown" when empty),
    neutral gray, and the "unknown" bucket.

    Args:
        raw: Status string from an order document

    Returns:
        StatusDisplay for the status
    """
    mapping = get_status_mapping(raw)

    if mapping is not None:
        return StatusDisplay(
            label=mapping.display_label,
            color=mapping.color,
            display_status=mapping.display_status,
        )

    logger.debug(f"Unmapped order status: {raw!r}")
    return StatusDisplay(
        label=raw or UNKNOWN_LABEL,
        color=NEUTRAL_COLOR,
        display_status=DisplayStatus.UNKNOWN,
    )


def _as_order(order: Order | Mapping[str, Any]) -> Order:
    if isinstance(order, Order):
        return order
    return Order.model_validate(dict(order))


def get_order_display_status(order: Order | Mapping[str, Any]) -> DisplayStatus:
    """
    Get the tab an order belongs to.

    The bucket only depends on the status. Delivery orders that are out for
    delivery stay in "shipping"; the difference is only visible through
    get_shipping_status_display().

    Args:
        order: Order model or raw order document

    Returns:
        DisplayStatus bucket (UNKNOWN for unmapped statuses)
    """
    order = _as_order(order)
    return get_status_display(order.status).display_status


def get_shipping_status_display(order: Order | Mapping[str, Any]) -> ShippingStatusDisplay:
    """
    Get the secondary label for an order card in the shipping tab.

    Args:
        order: Order model or raw order document

    Returns:
        ShippingStatusDisplay with label and color
    """
    order = _as_order(order)

    if order.is_pickup is False and order.out_of_delivery is True:
        return ShippingStatusDisplay(
            label="out for delivery",
            color="bg-purple-100 text-purple-800",
        )

    if order.is_pickup is True:
        return ShippingStatusDisplay(
            label="waiting for pick-up",
            color="bg-blue-100 text-blue-800",
        )

    return ShippingStatusDisplay(
        label="preparing for delivery",
        color="bg-orange-100 text-orange-800",
    )


# =============================================================================
# Tabs
# =============================================================================

def get_orders_by_display_status(
    orders: Iterable[Order | Mapping[str, Any]],
    display_status: DisplayStatus | str,
) -> list[Order]:
    """
    Filter orders down to one dashboard tab.

    Uses the same bucket function as get_status_counts(), so a tab always
    lists exactly the number of orders its badge shows.

    Args:
        orders: Orders or raw order documents
        display_status: Tab to keep (enum member or its value)

    Returns:
        Orders in that tab, in input order

    Raises:
        ValueError: If display_status is not a DisplayStatus value
    """
    bucket = DisplayStatus(display_status)
    return [
        parsed
        for parsed in (_as_order(order) for order in orders)
        if get_order_display_status(parsed) is bucket
    ]


def get_status_counts(orders: Iterable[Order | Mapping[str, Any]]) -> StatusCounts:
    """
    Count orders per tab.

    Args:
        orders: Orders or raw order documents

    Returns:
        StatusCounts with one field per bucket plus `all`
    """
    buckets = Counter(get_order_display_status(order) for order in orders)

    return StatusCounts(
        all=sum(buckets.values()),
        **{bucket.value: buckets.get(bucket, 0) for bucket in DisplayStatus},
    )


def status_breakdown(orders: Iterable[Order | Mapping[str, Any]]) -> StatusBreakdown:
    """
    Tally raw statuses and their display buckets.

    Used to spot statuses the table does not cover. Logs a short summary
    at debug level.
    """
    parsed = [_as_order(order) for order in orders]

    db_statuses = Counter(order.status or "undefined" for order in parsed)
    display_statuses = Counter(
        get_status_display(order.status).display_status.value for order in parsed
    )

    logger.debug(f"Database status breakdown: {dict(db_statuses)}")
    logger.debug(f"Display status breakdown: {dict(display_statuses)}")
    for order in parsed[:5]:
        badge = get_status_display(order.status)
        logger.debug(
            f"Order {order.id}: {order.status!r} -> {badge.label!r} ({badge.display_status.value})"
        )

    return StatusBreakdown(
        db_statuses=dict(db_statuses),
        display_statuses=dict(display_statuses),
    )
