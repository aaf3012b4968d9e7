"""
Typed Exception Hierarchy for the Supply-Chain Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of the inventory core (the order-management layer, an HTTP adapter,
batch jobs) must tell "no warehouse serves this ZIP" apart from "this SKU has
no stock anywhere" without parsing message strings.  Every error therefore:
  1. Has a TYPED exception class (catch by type, not message)
  2. Has a CODE attribute (machine-readable, API-safe)
  3. Carries structured DATA (sku, zipcode, order_id, ...)

Example:
    try:
        outcome = inventory.reserve(lines, customer_zipcode)
    except WarehouseNotFoundError as e:
        respond(404, code=e.code, zipcode=e.zipcode)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    ScmError (base)
    |
    +-- WarehouseError
    |   +-- WarehouseNotFoundError
    |   +-- WarehouseAlreadyExistsError
    |   +-- WarehouseRangeOverlapError
    |   +-- InvalidZipcodeRangeError
    |
    +-- InventoryError
    |   +-- InventoryNotFoundError
    |   +-- InventoryRecordNotFoundError
    |   +-- InventoryRecordAlreadyExistsError
    |
    +-- OrderError
        +-- OrderNotFoundError
        +-- InvalidOrderIdError
        +-- InvalidCustomerIdError
        +-- OrderValidationError
        +-- OrderCancellationError
        +-- OutOfStockError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category   | Code                           | When Raised
-----------|--------------------------------|----------------------------------
Warehouse  | WAREHOUSE_NOT_FOUND            | No range covers ZIP / unknown id
           | WAREHOUSE_ALREADY_EXISTS       | Duplicate warehouse id
           | WAREHOUSE_RANGE_OVERLAP        | ZIP range intersects another
           | INVALID_ZIPCODE_RANGE          | start > end or out of bounds
-----------|--------------------------------|----------------------------------
Inventory  | INVENTORY_NOT_FOUND            | No usable stock anywhere for SKU
           | INVENTORY_RECORD_NOT_FOUND     | No (sku, warehouse) record
           | INVENTORY_RECORD_ALREADY_EXISTS| Duplicate (sku, warehouse)
-----------|--------------------------------|----------------------------------
Order      | ORDER_NOT_FOUND                | Unknown order / empty history
           | INVALID_ORDER_ID               | Blank or malformed order id
           | INVALID_CUSTOMER_ID            | Customer id <= 0
           | ORDER_VALIDATION_FAILED        | Bad order payload
           | ORDER_CANCELLATION_REJECTED    | Order not in a cancellable state
           | OUT_OF_STOCK                   | Reservation reported a shortage

A stock *shortage* during reservation is NOT an exception at the engine
level: it is recorded per SKU in the ReservationOutcome so that the rest of
the batch is still processed.  Only the order layer escalates it to
OutOfStockError.
"""


class ScmError(Exception):
    """
    Base exception for all supply-chain kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "SCM_ERROR"


# Warehouse-related exceptions


class WarehouseError(ScmError):
    """Base exception for warehouse-related errors."""

    code: str = "WAREHOUSE_ERROR"


class WarehouseNotFoundError(WarehouseError):
    """No warehouse covers the given ZIP code, or the id is unknown."""

    code: str = "WAREHOUSE_NOT_FOUND"

    def __init__(
        self,
        zipcode: int | None = None,
        warehouse_id: str | None = None,
        message: str | None = None,
    ):
        self.zipcode = zipcode
        self.warehouse_id = warehouse_id
        if message is None:
            if warehouse_id is not None:
                message = f"No Warehouse found with id: {warehouse_id}"
            else:
                message = f"No Warehouse found for the zipcode: {zipcode}"
        super().__init__(message)


class WarehouseAlreadyExistsError(WarehouseError):
    """A warehouse with this id is already registered."""

    code: str = "WAREHOUSE_ALREADY_EXISTS"

    def __init__(self, warehouse_id: str):
        self.warehouse_id = warehouse_id
        super().__init__(f"Warehouse already exists: {warehouse_id}")


class WarehouseRangeOverlapError(WarehouseError):
    """The proposed ZIP range intersects an existing warehouse's range."""

    code: str = "WAREHOUSE_RANGE_OVERLAP"

    def __init__(
        self,
        warehouse_id: str,
        zipcode_start: int,
        zipcode_end: int,
        conflicting_warehouse_id: str,
    ):
        self.warehouse_id = warehouse_id
        self.zipcode_start = zipcode_start
        self.zipcode_end = zipcode_end
        self.conflicting_warehouse_id = conflicting_warehouse_id
        super().__init__(
            f"Zipcode range {zipcode_start}-{zipcode_end} for warehouse "
            f"{warehouse_id} overlaps warehouse {conflicting_warehouse_id}"
        )


class InvalidZipcodeRangeError(WarehouseError):
    """ZIP range is inverted or outside the allowed bounds."""

    code: str = "INVALID_ZIPCODE_RANGE"

    def __init__(self, zipcode_start: int, zipcode_end: int, reason: str):
        self.zipcode_start = zipcode_start
        self.zipcode_end = zipcode_end
        self.reason = reason
        super().__init__(
            f"Invalid zipcode range {zipcode_start}-{zipcode_end}: {reason}"
        )


# Inventory-related exceptions


class InventoryError(ScmError):
    """Base exception for inventory-related errors."""

    code: str = "INVENTORY_ERROR"


class InventoryNotFoundError(InventoryError):
    """
    No usable inventory exists for a SKU.

    Raised when a SKU has no stock in any warehouse (reservation, delivery
    estimation), no on-hold stock (confirmation), or when a reversal cannot
    restore the full requested quantity.
    """

    code: str = "INVENTORY_NOT_FOUND"

    def __init__(self, sku: int | None, message: str):
        self.sku = sku
        super().__init__(message)


class InventoryRecordNotFoundError(InventoryError):
    """No inventory record exists for the (sku, warehouse) pair."""

    code: str = "INVENTORY_RECORD_NOT_FOUND"

    def __init__(self, sku: int, warehouse_id: str):
        self.sku = sku
        self.warehouse_id = warehouse_id
        super().__init__(
            f"No inventory found for SKU: {sku} in warehouse: {warehouse_id}"
        )


class InventoryRecordAlreadyExistsError(InventoryError):
    """An inventory record already exists for the (sku, warehouse) pair."""

    code: str = "INVENTORY_RECORD_ALREADY_EXISTS"

    def __init__(self, sku: int, warehouse_id: str):
        self.sku = sku
        self.warehouse_id = warehouse_id
        super().__init__(
            f"Inventory for SKU: {sku} already exists in warehouse: {warehouse_id}"
        )


# Order-related exceptions


class OrderError(ScmError):
    """Base exception for order-related errors."""

    code: str = "ORDER_ERROR"


class OrderNotFoundError(OrderError):
    """Order was not found."""

    code: str = "ORDER_NOT_FOUND"

    def __init__(self, order_id: str, message: str | None = None):
        self.order_id = order_id
        super().__init__(message or f"Order with ID {order_id} does not exist")


class InvalidOrderIdError(OrderError):
    """Order id is blank or not a valid identifier."""

    code: str = "INVALID_ORDER_ID"

    def __init__(self, order_id: object):
        self.order_id = order_id
        super().__init__(f"Invalid or null order ID: {order_id}")


class InvalidCustomerIdError(OrderError):
    """Customer id is missing or not positive."""

    code: str = "INVALID_CUSTOMER_ID"

    def __init__(self, customer_id: object):
        self.customer_id = customer_id
        super().__init__(f"Invalid or null customer ID: {customer_id}")


class OrderValidationError(OrderError):
    """Order payload failed validation."""

    code: str = "ORDER_VALIDATION_FAILED"

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class OrderCancellationError(OrderError):
    """Order is not in a state that allows the requested transition."""

    code: str = "ORDER_CANCELLATION_REJECTED"

    def __init__(self, order_id: str, status: str, message: str):
        self.order_id = order_id
        self.status = status
        super().__init__(message)


class OutOfStockError(OrderError):
    """Reservation could not cover one or more order lines."""

    code: str = "OUT_OF_STOCK"

    def __init__(self, shortages: dict[int, str]):
        self.shortages = shortages
        skus = ", ".join(str(sku) for sku in sorted(shortages))
        super().__init__(f"Not enough stock to fulfill the order for SKU(s): {skus}")
