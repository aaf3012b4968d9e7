"""Order payload and identifier validation."""

from uuid import UUID

from scm_kernel.exceptions import (
    InvalidCustomerIdError,
    InvalidOrderIdError,
    OrderValidationError,
)
from scm_kernel.logging_config import get_logger
from scm_modules.ordering.models import PlaceOrderCommand

logger = get_logger("modules.ordering.validation")


def parse_order_id(order_id: UUID | str | None) -> UUID:
    """Normalise an order id, rejecting blank or malformed values."""
    if isinstance(order_id, UUID):
        return order_id
    if order_id is None or not str(order_id).strip():
        raise InvalidOrderIdError(order_id)
    try:
        return UUID(str(order_id).strip())
    except ValueError:
        raise InvalidOrderIdError(order_id) from None


def validate_customer_id(customer_id: int | None) -> int:
    if customer_id is None or customer_id <= 0:
        logger.error("invalid_customer_id", extra={"customer_id": customer_id})
        raise InvalidCustomerIdError(customer_id)
    return customer_id


def validate_place_order(command: PlaceOrderCommand) -> None:
    """
    Check a new order before any stock is touched.

    Line-level quantity and price rules are enforced by ``PlaceOrderLine``
    itself; this covers the order as a whole.

    Raises:
        InvalidCustomerIdError: customer_id missing or not positive.
        OrderValidationError: no lines, missing ZIP, or non-positive total.
    """
    validate_customer_id(command.customer_id)

    if not command.lines:
        logger.error("order_validation_failed", extra={"field": "lines"})
        raise OrderValidationError("lines", "Order items cannot be null or empty")

    if not command.shipping_zipcode or command.shipping_zipcode <= 0:
        logger.error("order_validation_failed", extra={"field": "shipping_zipcode"})
        raise OrderValidationError("shipping_zipcode", "Shipping ZIP code cannot be null")

    if command.total_amount <= 0:
        logger.error("order_validation_failed", extra={"field": "total_amount"})
        raise OrderValidationError("total_amount", "Total Amount must be greater than 0")
