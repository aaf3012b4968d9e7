"""
Inventory Module Service (``scm_modules.inventory.service``).

Responsibility
--------------
Transactional facade over the inventory engines.  Composes the warehouse
locator, the reservation / reversal / confirmation engines, delivery
estimation, stock administration and reporting over one SQLAlchemy
session.  It contains no allocation rules of its own.

Architecture
------------
Layer: **Modules** -- stateful orchestration wrapper.

1. ``SqlInventoryRecordStore`` / ``SqlWarehouseStore`` wrap the session.
2. Engines receive the stores and an injected ``Clock``; they flush, never
   commit.
3. This service commits once per public mutating call.

Invariants
----------
- Each public mutating method owns its transaction boundary:
  ``session.commit()`` on success, ``session.rollback()`` on any failure.
  A multi-warehouse reservation is therefore all-or-nothing even though
  every record is flushed individually.
- Callers that need several engine calls inside one transaction (the order
  lifecycle) use the engine attributes directly and commit themselves.

Failure Modes
-------------
- ``WarehouseNotFoundError`` / ``InventoryNotFoundError`` propagate after
  rollback.
- A shortage is not a failure: it is reported in the ``ReservationOutcome``
  and the reservations of the other SKUs in the batch are committed.

Usage::

    service = InventoryService(session, clock=clock)
    outcome = service.reserve(
        [DemandLine(sku=1276, quantity=15)], customer_zipcode=400500,
    )
    outcome.messages()   # {1276: "Inventory updated with stock reservation"}
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date

from sqlalchemy.orm import Session

from scm_kernel.domain.clock import Clock, SystemClock
from scm_kernel.logging_config import get_logger
from scm_modules.inventory.config import InventoryConfig
from scm_modules.inventory.confirmation import ReservationConfirmation
from scm_modules.inventory.delivery import DeliveryEstimator
from scm_modules.inventory.locator import WarehouseLocator
from scm_modules.inventory.models import (
    DemandLine,
    InventoryRecordInfo,
    ReservationOutcome,
    SkuStockSummary,
    StockReplenishment,
    WarehouseInfo,
    WarehouseInventoryDetail,
    WarehouseStockSummary,
)
from scm_modules.inventory.reporting import InventoryReportSelector
from scm_modules.inventory.reservation import StockReservationEngine
from scm_modules.inventory.reversal import StockReversalEngine
from scm_modules.inventory.stock import StockAdministration
from scm_modules.inventory.store import SqlInventoryRecordStore, SqlWarehouseStore

logger = get_logger("modules.inventory.service")


class InventoryService:
    """
    Orchestrates inventory operations through the allocation engines.

    Contract
    --------
    Every public method accepts plain domain values and returns frozen DTOs
    (never ORM rows).  Mutating methods commit on success and roll back on
    failure; read methods leave the transaction untouched.

    Engine composition:
    - StockReservationEngine: nearest-first, greedy multi-warehouse fill
    - StockReversalEngine: on-order back to available
    - ReservationConfirmation: clears on-hold
    - DeliveryEstimator: near / fallback delivery dates
    - StockAdministration: registration, replenishment, totals
    - InventoryReportSelector: read-only aggregates
    """

    def __init__(
        self,
        session: Session,
        config: InventoryConfig | None = None,
        clock: Clock | None = None,
    ):
        self._session = session
        self._config = config or InventoryConfig.with_defaults()
        self._clock = clock or SystemClock()

        self._records = SqlInventoryRecordStore(session, lock_rows=self._config.lock_rows)
        self._warehouses = SqlWarehouseStore(session)
        self._locator = WarehouseLocator(self._warehouses)

        # Engines (share session for atomicity)
        self.reservation_engine = StockReservationEngine(self._records, self._locator, self._clock)
        self.reversal_engine = StockReversalEngine(self._records, self._locator, self._clock)
        self.confirmation = ReservationConfirmation(self._records)
        self.delivery = DeliveryEstimator(self._records, self._locator, self._config, self._clock)
        self._admin = StockAdministration(self._records, self._warehouses, self._config, self._clock)

        # Read side
        self._reports = InventoryReportSelector(session)

    def _in_transaction(self, operation: str, fn, *args):
        try:
            result = fn(*args)
            self._session.commit()
            return result
        except Exception:
            logger.warning("inventory_operation_rolled_back", extra={"operation": operation})
            self._session.rollback()
            raise

    # =========================================================================
    # Allocation
    # =========================================================================

    def reserve(
        self, demand_lines: Iterable[DemandLine], customer_zipcode: int,
    ) -> ReservationOutcome:
        """
        Reserve stock for every line against the customer's ZIP.

        Postconditions:
            - Reserved SKUs moved from available into on-order and on-hold.
            - SKUs in shortage are untouched and reported in the outcome.
            - Session committed on success, rolled back on failure.

        Raises:
            WarehouseNotFoundError: No warehouse serves the ZIP.
            InventoryNotFoundError: A SKU has no stock in any warehouse.
        """
        return self._in_transaction(
            "reserve", self.reservation_engine.reserve, list(demand_lines), customer_zipcode,
        )

    def revert(self, demand_lines: Iterable[DemandLine], customer_zipcode: int) -> None:
        """
        Release reserved stock back to available.

        Raises:
            WarehouseNotFoundError: No warehouse serves the ZIP.
            InventoryNotFoundError: Not enough on-order stock to revert.
        """
        self._in_transaction(
            "revert", self.reversal_engine.revert, list(demand_lines), customer_zipcode,
        )

    def confirm(self, skus: Iterable[int]) -> None:
        """Zero on-hold for every record of each SKU."""
        self._in_transaction("confirm", self.confirmation.confirm, list(skus))

    def estimate_delivery(self, sku: int, zipcode: int) -> date:
        return self.delivery.estimate(sku, zipcode)

    # =========================================================================
    # Administration
    # =========================================================================

    def register_warehouse(
        self,
        warehouse_id: str,
        name: str,
        location: str,
        zipcode_start: int,
        zipcode_end: int,
    ) -> WarehouseInfo:
        return self._in_transaction(
            "register_warehouse", self._admin.register_warehouse,
            warehouse_id, name, location, zipcode_start, zipcode_end,
        )

    def register_inventory(
        self,
        sku: int,
        item_id: int,
        warehouse_id: str,
        quantity_available: int = 0,
    ) -> InventoryRecordInfo:
        return self._in_transaction(
            "register_inventory", self._admin.register_inventory,
            sku, item_id, warehouse_id, quantity_available,
        )

    def add_stock(self, replenishment: StockReplenishment) -> InventoryRecordInfo:
        return self._in_transaction("add_stock", self._admin.add_stock, replenishment)

    def add_stock_bulk(
        self, replenishments: Iterable[StockReplenishment],
    ) -> list[InventoryRecordInfo]:
        """All replenishments commit together or not at all."""
        return self._in_transaction(
            "add_stock_bulk", self._admin.add_stock_bulk, list(replenishments),
        )

    def list_warehouses(self) -> list[WarehouseInfo]:
        return self._admin.list_warehouses()

    def check_sku_quantity(self, skus: Sequence[int]) -> list[int]:
        return self._admin.check_sku_quantity(skus)

    def quantity_by_sku(self, sku: int) -> int:
        return self._admin.quantity_by_sku(sku)

    def quantity_by_item_id(self, item_id: int) -> int:
        return self._admin.quantity_by_item_id(item_id)

    def records_for_sku(self, sku: int) -> list[InventoryRecordInfo]:
        return self._admin.records_for_sku(sku)

    def records_for_warehouse(self, warehouse_id: str) -> list[InventoryRecordInfo]:
        return self._admin.records_for_warehouse(warehouse_id)

    # =========================================================================
    # Reporting
    # =========================================================================

    def inventory_report(self) -> list[WarehouseStockSummary]:
        return self._reports.inventory_report()

    def all_inventories(self) -> list[SkuStockSummary]:
        return self._reports.all_inventories()

    def all_warehouse_inventory_details(self) -> list[WarehouseInventoryDetail]:
        return self._reports.all_warehouse_inventory_details()
