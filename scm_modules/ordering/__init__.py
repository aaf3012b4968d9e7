"""
Ordering Module (``scm_modules.ordering``).

Responsibility
--------------
Order lifecycle for the storefront: placing orders against multi-warehouse
stock, cancellation with stock reversal, status tracking and history.

Architecture
------------
Layer: **Modules**.  ``OrderService`` composes the inventory engines and
owns the transaction that spans stock mutations and order rows.

Invariants
----------
- Each service method owns its transaction boundary (commit / rollback).
- Cancelled and completed orders are terminal.
"""

from scm_modules.ordering.models import (
    OrderInfo,
    OrderLineInfo,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    PlaceOrderCommand,
    PlaceOrderLine,
)
from scm_modules.ordering.service import OrderService

__all__ = [
    "OrderInfo",
    "OrderLineInfo",
    "OrderStatus",
    "PaymentMethod",
    "PaymentStatus",
    "PlaceOrderCommand",
    "PlaceOrderLine",
    "OrderService",
]
