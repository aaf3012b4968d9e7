"""
Ordering Module Service (``scm_modules.ordering.service``).

Responsibility
--------------
Drives the inventory engines through the order lifecycle: placing an order
(estimate -> reserve -> persist -> confirm), cancelling it (revert), status
tracking and updates, and order history.

Architecture
------------
Layer: **Modules** -- stateful orchestration wrapper.  Uses the engines
exposed by ``InventoryService`` directly so that the inventory mutations
and the order rows share one transaction.

Invariants
----------
- Each public mutating method owns its transaction boundary:
  ``session.commit()`` on success, ``session.rollback()`` on any failure.
  A shortage on any line therefore leaves every counter untouched.
- Only CONFIRMED and DISPATCHED orders can be cancelled.  CANCELLED and
  COMPLETED are terminal.
- Returns frozen DTOs (``OrderInfo``), never ORM rows.

Failure Modes
-------------
- ``InvalidOrderIdError`` / ``InvalidCustomerIdError`` /
  ``OrderValidationError`` before anything is touched.
- ``OutOfStockError`` when the reservation reports a shortage.
- ``WarehouseNotFoundError`` / ``InventoryNotFoundError`` from the engines.
- ``OrderNotFoundError`` / ``OrderCancellationError`` on lifecycle calls.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from scm_kernel.domain.clock import Clock, SystemClock
from scm_kernel.exceptions import (
    OrderCancellationError,
    OrderNotFoundError,
    OutOfStockError,
)
from scm_kernel.logging_config import LogContext, get_logger
from scm_modules.inventory.config import InventoryConfig
from scm_modules.inventory.models import DemandLine
from scm_modules.inventory.service import InventoryService
from scm_modules.ordering.models import (
    CANCELLABLE_STATUSES,
    TRACKING_MESSAGES,
    OrderInfo,
    OrderStatus,
    PaymentStatus,
    PlaceOrderCommand,
)
from scm_modules.ordering.orm import OrderItemModel, OrderModel
from scm_modules.ordering.validation import (
    parse_order_id,
    validate_customer_id,
    validate_place_order,
)

logger = get_logger("modules.ordering.service")


class OrderService:
    """
    Order lifecycle over the inventory engines.

    Transaction boundary: this service commits on success, rolls back on
    failure.  The inventory engines only flush.
    """

    def __init__(
        self,
        session: Session,
        inventory_config: InventoryConfig | None = None,
        clock: Clock | None = None,
    ):
        self._session = session
        self._clock = clock or SystemClock()
        self._inventory = InventoryService(session, inventory_config, self._clock)

    # =========================================================================
    # Placement
    # =========================================================================

    def place_order(self, command: PlaceOrderCommand) -> OrderInfo:
        """
        Place an order: reserve its stock, persist it, confirm the hold.

        Preconditions:
            - ``command`` passes ``validate_place_order``.

        Postconditions:
            - Order persisted as CONFIRMED with payment PENDING.
            - Ordered quantity moved from available to on-order; on-hold
              cleared by the confirmation step.
            - Estimated delivery is the latest of the per-line estimates,
              taken before any stock is reserved.

        Raises:
            OutOfStockError: Any line could not be covered.
        """
        validate_place_order(command)
        zipcode = command.shipping_zipcode

        with LogContext.bind(zipcode=zipcode):
            try:
                estimated = max(
                    self._inventory.delivery.estimate(line.sku, zipcode)
                    for line in command.lines
                )

                outcome = self._inventory.reservation_engine.reserve(
                    [DemandLine(sku=line.sku, quantity=line.quantity) for line in command.lines],
                    zipcode,
                )
                if not outcome.fully_reserved:
                    raise OutOfStockError(outcome.shortages())

                order = OrderModel(
                    customer_id=command.customer_id,
                    shipping_zipcode=zipcode,
                    shipping_address=command.shipping_address,
                    status=OrderStatus.CONFIRMED.value,
                    payment_status=PaymentStatus.PENDING.value,
                    payment_method=command.payment_method.value,
                    total_amount=command.total_amount,
                    total_quantity=command.total_quantity,
                    order_date=self._clock.now(),
                    estimated_delivery_date=estimated,
                    lines=[
                        OrderItemModel(
                            line_number=number,
                            item_id=line.item_id,
                            sku=line.sku,
                            item_name=line.item_name,
                            quantity=line.quantity,
                            unit_price=line.unit_price,
                        )
                        for number, line in enumerate(command.lines, start=1)
                    ],
                )
                self._session.add(order)
                self._session.flush()

                self._inventory.confirmation.confirm(
                    list(dict.fromkeys(line.sku for line in command.lines))
                )
                self._session.commit()
            except Exception:
                logger.warning(
                    "order_placement_rolled_back",
                    extra={"customer_id": command.customer_id},
                )
                self._session.rollback()
                raise

        logger.info(
            "order_placed",
            extra={
                "order_id": order.id,
                "customer_id": command.customer_id,
                "total_quantity": command.total_quantity,
                "estimated_delivery_date": estimated,
            },
        )
        return order.to_dto()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def cancel_order(self, order_id: UUID | str) -> str:
        """
        Cancel a CONFIRMED or DISPATCHED order and return its stock.

        Raises:
            OrderNotFoundError: Unknown order.
            OrderCancellationError: Already cancelled, completed, or past
                the cancellable states.
        """
        oid = parse_order_id(order_id)

        with LogContext.bind(order_id=oid):
            try:
                order = self._load(oid, f"Order ID: {oid} does not exist")
                status = OrderStatus(order.status)

                if status is OrderStatus.CANCELLED:
                    raise OrderCancellationError(
                        str(oid), status.value, f"Order ID: {oid} is already cancelled.",
                    )
                if status is OrderStatus.COMPLETED:
                    raise OrderCancellationError(
                        str(oid), status.value,
                        f"Order ID: {oid} is already completed and cannot be cancelled.",
                    )
                if status not in CANCELLABLE_STATUSES:
                    raise OrderCancellationError(
                        str(oid), status.value,
                        f"Order with ID {oid} has been shipped or is in a non-cancellable state.",
                    )

                order.status = OrderStatus.CANCELLED.value
                order.payment_status = PaymentStatus.CANCELLED.value
                self._session.flush()

                self._inventory.reversal_engine.revert(
                    [DemandLine(sku=line.sku, quantity=line.quantity) for line in order.lines],
                    order.shipping_zipcode,
                )
                self._session.commit()
            except Exception:
                logger.warning("order_cancellation_rolled_back", extra={"order_id": oid})
                self._session.rollback()
                raise

            logger.info("order_cancelled", extra={"previous_status": status.value})
        return f"Order with ID {oid} cancelled successfully."

    def update_order_status(self, order_id: UUID | str, status: OrderStatus) -> OrderInfo:
        """
        Move an order to ``status``.

        COMPLETED also completes the payment.  Moving to CANCELLED goes
        through ``cancel_order`` so stock is returned.

        Raises:
            OrderNotFoundError: Unknown order.
            OrderCancellationError: The order is already cancelled or
                completed.
        """
        oid = parse_order_id(order_id)
        if status is OrderStatus.CANCELLED:
            self.cancel_order(oid)
            return self.get_order(oid)

        try:
            order = self._load(oid, f"Order id : {oid} does not exist")
            current = OrderStatus(order.status)
            if current is OrderStatus.CANCELLED:
                raise OrderCancellationError(
                    str(oid), current.value, f"Order ID: {oid} is already cancelled.",
                )
            if current is OrderStatus.COMPLETED:
                raise OrderCancellationError(
                    str(oid), current.value,
                    f"Order ID: {oid} is already completed and cannot be cancelled.",
                )

            order.status = status.value
            if status is OrderStatus.COMPLETED:
                order.payment_status = PaymentStatus.COMPLETED.value
            else:
                order.payment_status = PaymentStatus.PENDING.value
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "order_status_updated",
            extra={"order_id": oid, "from_status": current.value, "to_status": status.value},
        )
        return order.to_dto()

    # =========================================================================
    # Queries
    # =========================================================================

    def get_order(self, order_id: UUID | str) -> OrderInfo:
        oid = parse_order_id(order_id)
        return self._load(oid, f"Order with ID {oid} does not exist").to_dto()

    def list_orders(self) -> list[OrderInfo]:
        stmt = select(OrderModel).order_by(OrderModel.order_date, OrderModel.created_at)
        return [o.to_dto() for o in self._session.execute(stmt).scalars()]

    def order_history(self, customer_id: int) -> list[OrderInfo]:
        """All orders of one customer, oldest first."""
        validate_customer_id(customer_id)
        stmt = (
            select(OrderModel)
            .where(OrderModel.customer_id == customer_id)
            .order_by(OrderModel.order_date, OrderModel.created_at)
        )
        orders = self._session.execute(stmt).scalars().all()
        if not orders:
            logger.warning("order_history_empty", extra={"customer_id": customer_id})
            raise OrderNotFoundError(
                str(customer_id), f"No orders found for customer with ID: {customer_id}",
            )
        return [o.to_dto() for o in orders]

    def track_order_status(self, order_id: UUID | str) -> str:
        oid = parse_order_id(order_id)
        order = self._load(oid, f"Order with ID {oid} does not exist")
        return TRACKING_MESSAGES.get(
            OrderStatus(order.status), "Your order is in an undefined state.",
        )

    def _load(self, order_id: UUID, not_found_message: str) -> OrderModel:
        order = self._session.get(OrderModel, order_id)
        if order is None:
            logger.warning("order_not_found", extra={"order_id": order_id})
            raise OrderNotFoundError(str(order_id), not_found_message)
        return order
