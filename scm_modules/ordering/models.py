"""
Ordering Domain Models (``scm_modules.ordering.models``).

Responsibility
--------------
Frozen value objects for the order lifecycle: statuses, the command used to
place an order, and the read-side order / order-line snapshots.

Architecture position
---------------------
**Modules layer** -- pure data definitions.  No I/O, no database.  These
objects flow *into* ``OrderService`` and *out of* it as immutable
snapshots.

Invariants enforced
-------------------
* All monetary fields use ``Decimal`` (never ``float``).
* All dataclasses are ``frozen=True``.
* ``PlaceOrderLine.__post_init__`` rejects non-positive quantities and
  non-positive unit prices.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID


class OrderStatus(Enum):
    """Order lifecycle states."""
    CONFIRMED = "confirmed"
    DISPATCHED = "dispatched"
    SHIPPED = "shipped"
    PICKUP_COURIER = "pickup_courier"
    ON_THE_WAY = "on_the_way"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


# Only these states release stock on cancellation.
CANCELLABLE_STATUSES = frozenset({OrderStatus.CONFIRMED, OrderStatus.DISPATCHED})
TERMINAL_STATUSES = frozenset({OrderStatus.CANCELLED, OrderStatus.COMPLETED})


class PaymentStatus(Enum):
    """Payment states."""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class PaymentMethod(Enum):
    """How the customer pays."""
    COD = "cod"  # cash on delivery


TRACKING_MESSAGES: dict[OrderStatus, str] = {
    OrderStatus.SHIPPED: "Your order has been shipped from logistics.",
    OrderStatus.CONFIRMED: "Your order has been confirmed and is being prepared.",
    OrderStatus.DISPATCHED: "Your order has been dispatched and is on its way to the courier.",
    OrderStatus.PICKUP_COURIER: "Your order is with the courier for pickup.",
    OrderStatus.ON_THE_WAY: "Your order is on the way.",
    OrderStatus.OUT_FOR_DELIVERY: "Your order is out for delivery.",
    OrderStatus.DELIVERED: "Your order has been delivered.",
    OrderStatus.CANCELLED: "Your order has been canceled.",
    OrderStatus.COMPLETED: "Your order has been completed.",
}


@dataclass(frozen=True)
class PlaceOrderLine:
    """One requested line of a new order."""
    item_id: int
    sku: int
    item_name: str
    quantity: int
    unit_price: Decimal

    def __post_init__(self):
        if self.quantity <= 0:
            raise ValueError(
                f"quantity must be positive for SKU {self.sku}, got {self.quantity}"
            )
        if self.unit_price <= 0:
            raise ValueError(
                f"unit_price must be positive for SKU {self.sku}, got {self.unit_price}"
            )

    @property
    def amount(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class PlaceOrderCommand:
    """Everything needed to place an order for one customer."""
    customer_id: int
    shipping_zipcode: int
    lines: tuple[PlaceOrderLine, ...]
    payment_method: PaymentMethod = PaymentMethod.COD
    shipping_address: str | None = None

    @property
    def total_amount(self) -> Decimal:
        return sum((line.amount for line in self.lines), Decimal("0"))

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity for line in self.lines)


@dataclass(frozen=True)
class OrderLineInfo:
    """Snapshot of a persisted order line."""
    item_id: int
    sku: int
    item_name: str
    quantity: int
    unit_price: Decimal


@dataclass(frozen=True)
class OrderInfo:
    """Snapshot of a persisted order."""
    order_id: UUID
    customer_id: int
    shipping_zipcode: int
    status: OrderStatus
    payment_status: PaymentStatus
    payment_method: PaymentMethod
    total_amount: Decimal
    total_quantity: int
    estimated_delivery_date: date
    order_date: datetime
    shipping_address: str | None = None
    lines: tuple[OrderLineInfo, ...] = field(default_factory=tuple)
