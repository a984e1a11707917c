# =============================================================================
# app/routers/orders.py - Order Status Endpoints
# =============================================================================
# Exposes the status mapping so the dashboard tabs, badges and counts all
# come from one place. Orders themselves live in the document database; the
# client posts the documents it already holds.
# =============================================================================

from typing import Annotated, Any

from fastapi import APIRouter, Path, Query
from pydantic import BaseModel, Field

from app.exceptions import InvalidDisplayStatusError
from core.models.order import (
    DisplayStatus,
    Order,
    ShippingStatusDisplay,
    StatusBreakdown,
    StatusCounts,
    StatusDisplay,
    StatusMapping,
)
from core.services.status_service import (
    STATUS_MAPPINGS,
    get_order_display_status,
    get_orders_by_display_status,
    get_shipping_status_display,
    get_status_counts,
    get_status_display,
    normalize_status,
    status_breakdown,
)

router = APIRouter()


# =============================================================================
# Request/Response Models
# =============================================================================

class OrdersRequest(BaseModel):
    """A batch of order documents."""
    orders: list[Order] = Field(
        default_factory=list,
        description="Order documents (extra fields are passed through)"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "orders": [
                    {"id": "ord-1", "status": "in transit", "is_pickup": False, "out_of_delivery": True},
                    {"id": "ord-2", "status": "settle payment"},
                ]
            }
        }
    }


class StatusLookupResponse(BaseModel):
    """Display info for one raw status."""
    raw: str
    normalized: str
    display: StatusDisplay


class OrderDisplay(BaseModel):
    """Display info for one order."""
    id: str | None
    status: str | None
    display_status: DisplayStatus
    badge: StatusDisplay
    # Only set for orders in the shipping tab
    shipping: ShippingStatusDisplay | None = None


class OrdersSummaryResponse(BaseModel):
    """Per-order display info plus tab counts."""
    orders: list[OrderDisplay]
    counts: StatusCounts
    breakdown: StatusBreakdown


class OrdersFilterResponse(BaseModel):
    """Orders in one tab."""
    display_status: DisplayStatus
    count: int
    orders: list[dict[str, Any]]


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/statuses", response_model=list[StatusMapping])
async def list_statuses():
    """
    The status mapping table.
    """
    return list(STATUS_MAPPINGS)


@router.get("/statuses/{raw}", response_model=StatusLookupResponse)
async def lookup_status(
    raw: Annotated[str, Path(description="Raw status string, URL-encoded")],
):
    """
    Badge label, color and tab for a raw status.

    Unknown statuses are returned with display_status "unknown", never an error.
    """
    return StatusLookupResponse(
        raw=raw,
        normalized=normalize_status(raw),
        display=get_status_display(raw),
    )


@router.post("/summary", response_model=OrdersSummaryResponse)
async def summarize_orders(request: OrdersRequest):
    """
    Display info for each order, tab counts and a status breakdown.
    """
    displays = []
    for order in request.orders:
        bucket = get_order_display_status(order)
        displays.append(OrderDisplay(
            id=order.id,
            status=order.status,
            display_status=bucket,
            badge=get_status_display(order.status),
            shipping=get_shipping_status_display(order) if bucket is DisplayStatus.SHIPPING else None,
        ))

    return OrdersSummaryResponse(
        orders=displays,
        counts=get_status_counts(request.orders),
        breakdown=status_breakdown(request.orders),
    )


@router.post("/filter", response_model=OrdersFilterResponse)
async def filter_orders(
    request: OrdersRequest,
    display_status: Annotated[str, Query(description="Tab to keep (unpaid, to_ship, ...)")],
):
    """
    Orders belonging to one tab, as the documents were sent.

    Raises:
        400: If display_status is not a known tab
    """
    try:
        bucket = DisplayStatus(display_status)
    except ValueError:
        raise InvalidDisplayStatusError(display_status, [status.value for status in DisplayStatus])

    matched = get_orders_by_display_status(request.orders, bucket)
    return OrdersFilterResponse(
        display_status=bucket,
        count=len(matched),
        orders=[order.to_document() for order in matched],
    )
