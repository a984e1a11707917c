# =============================================================================
# core/models/order.py - Order Status Schemas
# =============================================================================
# These models define the contract for order status display:
# - BackendStatus: Every status string the order backend writes
# - DisplayStatus: The dashboard tab an order is shown under
# - StatusMapping: One row of the backend -> display reference table
# - StatusDisplay: What the UI renders for a single status badge
# - Order: The slice of an order document the status layer looks at
#
# Flow:
#   raw string -> normalize_status() -> BackendStatus -> StatusMapping
#   unmapped string -> DisplayStatus.UNKNOWN
# =============================================================================

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class BackendStatus(str, Enum):
    """
    Canonical order statuses as stored by the backend.

    The values are the exact strings the order documents hold, including
    the upper-case "CANCELLED" the cancellation flow writes.
    """
    SETTLE_PAYMENT = "settle payment"
    PAYMENT_SENT = "payment sent"
    PREPARING = "preparing"
    IN_TRANSIT = "in transit"
    READY_FOR_PICKUP = "ready for pickup"
    ORDER_RECEIVED = "order received"
    COMPLETED = "completed"
    CANCELLED = "CANCELLED"

    @classmethod
    def lookup(cls, value: str) -> "BackendStatus | None":
        """Case-insensitive lookup; None when the string is not a known status."""
        folded = value.strip().lower()
        for member in cls:
            if member.value.lower() == folded:
                return member
        return None


class DisplayStatus(str, Enum):
    """
    Dashboard tab (display bucket) an order is listed under.

    - unpaid: Waiting for the buyer's payment
    - to_ship: Paid, seller is preparing the order
    - shipping: Handed to delivery / in transit
    - completed: Received, picked up or closed
    - cancelled: Cancelled by either party
    - unknown: Status the table does not recognize (rendered, never hidden)
    """
    UNPAID = "unpaid"
    TO_SHIP = "to_ship"
    SHIPPING = "shipping"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"

    @classmethod
    def tabs(cls) -> list["DisplayStatus"]:
        """The five buckets that have a dashboard tab."""
        return [status for status in cls if status is not cls.UNKNOWN]


class StatusMapping(BaseModel):
    """
    One row of the status reference table.

    Example:
        {
            "db_status": "in transit",
            "display_status": "shipping",
            "display_label": "Shipping",
            "color": "text-purple-600 bg-purple-50"
        }
    """

    db_status: BackendStatus = Field(
        ...,
        description="Status string as stored by the backend"
    )

    display_status: DisplayStatus = Field(
        ...,
        description="Tab the status is listed under"
    )

    display_label: str = Field(
        ...,
        description="Badge text"
    )

    # Tailwind classes, passed straight through to the client
    color: str = Field(
        ...,
        description="CSS classes for the badge"
    )

    model_config = {"frozen": True}


class StatusDisplay(BaseModel):
    """What the UI renders for a status badge."""
    label: str
    color: str
    display_status: DisplayStatus

    model_config = {"frozen": True}


class ShippingStatusDisplay(BaseModel):
    """Secondary label shown on cards in the shipping tab."""
    label: str
    color: str

    model_config = {"frozen": True}


class Order(BaseModel):
    """
    The fields of an order document the status layer reads.

    Other fields are kept as-is so callers can pass whole documents
    and get them back from the filter endpoint unchanged.
    """

    id: str | None = Field(
        default=None,
        description="Order document ID"
    )

    status: str | None = Field(
        default=None,
        description="Raw status string as stored (may be malformed)"
    )

    # Delivery orders have is_pickup=False
    is_pickup: bool | None = Field(
        default=None,
        description="Whether the buyer collects the order in person"
    )

    out_of_delivery: bool | None = Field(
        default=None,
        description="Courier has the parcel on the last leg"
    )

    model_config = {"extra": "allow"}

    def to_document(self) -> dict[str, Any]:
        """Dump back to the original document shape."""
        return self.model_dump(exclude_none=True)


class StatusCounts(BaseModel):
    """
    Order counts per dashboard tab.

    `all` counts every order, including ones in the unknown bucket.
    """
    all: int = Field(default=0, ge=0)
    unpaid: int = Field(default=0, ge=0)
    to_ship: int = Field(default=0, ge=0)
    shipping: int = Field(default=0, ge=0)
    completed: int = Field(default=0, ge=0)
    cancelled: int = Field(default=0, ge=0)
    unknown: int = Field(default=0, ge=0)


class StatusBreakdown(BaseModel):
    """Diagnostic tallies of raw statuses and the buckets they land in."""

    # Raw status string -> number of orders ("undefined" for missing)
    db_statuses: dict[str, int] = Field(default_factory=dict)

    # Display bucket -> number of orders
    display_statuses: dict[str, int] = Field(default_factory=dict)
