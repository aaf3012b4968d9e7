"""
Ordering ORM Models (``scm_modules.ordering.orm``).

Responsibility
--------------
SQLAlchemy persistence models for orders and their lines.  Maps the frozen
``OrderInfo`` / ``OrderLineInfo`` dataclasses from ``models.py`` to tables.

Architecture position
---------------------
**Modules layer** -- persistence.  Imports from ``scm_kernel.db.base`` and
sibling ``models.py``.  MUST NOT be imported by ``scm_kernel``.
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scm_kernel.db.base import TrackedBase


# ---------------------------------------------------------------------------
# 1. OrderModel
# ---------------------------------------------------------------------------


class OrderModel(TrackedBase):
    """
    ORM model for a customer order.

    Guarantees:
        - status / payment_status / payment_method stored as string enum
          values.
        - Lines are owned by the order (delete-orphan cascade).
    """

    __tablename__ = "orders"

    __table_args__ = (
        CheckConstraint("total_quantity > 0", name="ck_orders_total_quantity_positive"),
        Index("idx_orders_customer_id", "customer_id"),
        Index("idx_orders_status", "status"),
    )

    customer_id: Mapped[int] = mapped_column(nullable=False)
    shipping_zipcode: Mapped[int] = mapped_column(nullable=False)
    shipping_address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="confirmed")
    payment_status: Mapped[str] = mapped_column(String(30), nullable=False, default="pending")
    payment_method: Mapped[str] = mapped_column(String(30), nullable=False, default="cod")
    total_amount: Mapped[Decimal] = mapped_column(nullable=False)
    total_quantity: Mapped[int] = mapped_column(nullable=False)
    order_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    estimated_delivery_date: Mapped[date] = mapped_column(Date, nullable=False)

    lines: Mapped[list["OrderItemModel"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.line_number",
    )

    def to_dto(self):
        """Convert ORM model to frozen dataclass."""
        from scm_modules.ordering.models import (
            OrderInfo,
            OrderStatus,
            PaymentMethod,
            PaymentStatus,
        )

        return OrderInfo(
            order_id=self.id,
            customer_id=self.customer_id,
            shipping_zipcode=self.shipping_zipcode,
            status=OrderStatus(self.status),
            payment_status=PaymentStatus(self.payment_status),
            payment_method=PaymentMethod(self.payment_method),
            total_amount=self.total_amount,
            total_quantity=self.total_quantity,
            estimated_delivery_date=self.estimated_delivery_date,
            order_date=self.order_date,
            shipping_address=self.shipping_address,
            lines=tuple(line.to_dto() for line in self.lines),
        )

    def __repr__(self) -> str:
        return f"<OrderModel {self.id} customer={self.customer_id} status={self.status}>"


# ---------------------------------------------------------------------------
# 2. OrderItemModel
# ---------------------------------------------------------------------------


class OrderItemModel(TrackedBase):
    """
    ORM model for one order line.  Each line belongs to exactly one
    OrderModel.
    """

    __tablename__ = "order_items"

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_items_quantity_positive"),
        Index("idx_order_items_order_id", "order_id"),
        Index("idx_order_items_sku", "sku"),
    )

    order_id: Mapped[UUID] = mapped_column(ForeignKey("orders.id"), nullable=False)
    line_number: Mapped[int] = mapped_column(nullable=False)
    item_id: Mapped[int] = mapped_column(nullable=False)
    sku: Mapped[int] = mapped_column(nullable=False)
    item_name: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(nullable=False)

    order: Mapped["OrderModel"] = relationship(
        back_populates="lines",
    )

    def to_dto(self):
        """Convert ORM model to frozen dataclass."""
        from scm_modules.ordering.models import OrderLineInfo

        return OrderLineInfo(
            item_id=self.item_id,
            sku=self.sku,
            item_name=self.item_name,
            quantity=self.quantity,
            unit_price=self.unit_price,
        )
