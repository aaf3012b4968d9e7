"""
Module: scm_modules.inventory.stock
Responsibility: Administrative stock operations around the allocation core:
    warehouse and inventory registration, replenishment, and stock totals by
    SKU or item.

Invariants enforced:
    - Registered warehouse ranges are inside the configured ZIP bounds,
      ordered, and disjoint from every existing range, which keeps the
      locator's answer unique.
    - A new inventory record starts with zero on-hold and on-order stock.
    - Replenishment only ever increases quantity_available.

Failure modes:
    - InvalidZipcodeRangeError / WarehouseRangeOverlapError /
      WarehouseAlreadyExistsError on warehouse registration.
    - WarehouseNotFoundError / InventoryRecordAlreadyExistsError on
      inventory registration.
    - InventoryRecordNotFoundError when replenishing a missing pair.
    - InventoryNotFoundError for totals of an unknown SKU or item.
"""

from collections.abc import Iterable, Sequence

from scm_kernel.domain.clock import Clock, SystemClock
from scm_kernel.exceptions import (
    InvalidZipcodeRangeError,
    InventoryNotFoundError,
    InventoryRecordAlreadyExistsError,
    InventoryRecordNotFoundError,
    WarehouseAlreadyExistsError,
    WarehouseNotFoundError,
    WarehouseRangeOverlapError,
)
from scm_kernel.logging_config import get_logger
from scm_modules.inventory.config import InventoryConfig
from scm_modules.inventory.models import (
    InventoryRecordInfo,
    StockReplenishment,
    WarehouseInfo,
)
from scm_modules.inventory.orm import InventoryRecordModel, WarehouseModel
from scm_modules.inventory.store import InventoryRecordStore, WarehouseStore

logger = get_logger("modules.inventory.stock")


class StockAdministration:
    """Registration, replenishment and stock totals.  Flushes, never commits."""

    def __init__(
        self,
        records: InventoryRecordStore,
        warehouses: WarehouseStore,
        config: InventoryConfig,
        clock: Clock | None = None,
    ):
        self._records = records
        self._warehouses = warehouses
        self._config = config
        self._clock = clock or SystemClock()

    # ------------------------------------------------------------------
    # Warehouses
    # ------------------------------------------------------------------

    def register_warehouse(
        self,
        warehouse_id: str,
        name: str,
        location: str,
        zipcode_start: int,
        zipcode_end: int,
    ) -> WarehouseInfo:
        if zipcode_start > zipcode_end:
            raise InvalidZipcodeRangeError(
                zipcode_start, zipcode_end, "start must not exceed end",
            )
        if zipcode_start < self._config.zipcode_min or zipcode_end > self._config.zipcode_max:
            raise InvalidZipcodeRangeError(
                zipcode_start, zipcode_end,
                f"must lie within {self._config.zipcode_min}-{self._config.zipcode_max}",
            )
        if self._warehouses.find_by_id(warehouse_id) is not None:
            raise WarehouseAlreadyExistsError(warehouse_id)

        overlapping = self._warehouses.find_overlapping(zipcode_start, zipcode_end)
        if overlapping:
            raise WarehouseRangeOverlapError(
                warehouse_id, zipcode_start, zipcode_end, overlapping[0].warehouse_id,
            )

        warehouse = self._warehouses.save(WarehouseModel(
            warehouse_id=warehouse_id,
            name=name,
            location=location,
            zipcode_start=zipcode_start,
            zipcode_end=zipcode_end,
        ))
        logger.info(
            "warehouse_registered",
            extra={
                "warehouse_id": warehouse_id,
                "zipcode_start": zipcode_start,
                "zipcode_end": zipcode_end,
            },
        )
        return warehouse.to_dto()

    def list_warehouses(self) -> list[WarehouseInfo]:
        return [w.to_dto() for w in self._warehouses.find_all()]

    # ------------------------------------------------------------------
    # Inventory records
    # ------------------------------------------------------------------

    def register_inventory(
        self,
        sku: int,
        item_id: int,
        warehouse_id: str,
        quantity_available: int = 0,
    ) -> InventoryRecordInfo:
        if quantity_available < 0:
            raise ValueError(
                f"quantity_available cannot be negative, got {quantity_available}"
            )
        if self._warehouses.find_by_id(warehouse_id) is None:
            raise WarehouseNotFoundError(warehouse_id=warehouse_id)
        if self._records.find_by_sku_and_warehouse(sku, warehouse_id) is not None:
            raise InventoryRecordAlreadyExistsError(sku, warehouse_id)

        record = self._records.save(InventoryRecordModel(
            sku=sku,
            item_id=item_id,
            warehouse_id=warehouse_id,
            quantity_available=quantity_available,
            quantity_on_hold=0,
            quantity_on_order=0,
            last_updated_date=self._clock.today(),
        ))
        logger.info(
            "inventory_registered",
            extra={
                "sku": sku,
                "item_id": item_id,
                "warehouse_id": warehouse_id,
                "quantity_available": quantity_available,
            },
        )
        return record.to_dto()

    def add_stock(self, replenishment: StockReplenishment) -> InventoryRecordInfo:
        record = self._records.find_by_sku_and_warehouse(
            replenishment.sku, replenishment.warehouse_id,
        )
        if record is None:
            raise InventoryRecordNotFoundError(replenishment.sku, replenishment.warehouse_id)

        record.quantity_available += replenishment.quantity
        record.last_updated_date = self._clock.today()
        self._records.save(record)
        logger.info(
            "stock_added",
            extra={
                "sku": replenishment.sku,
                "warehouse_id": replenishment.warehouse_id,
                "quantity": replenishment.quantity,
                "quantity_available": record.quantity_available,
            },
        )
        return record.to_dto()

    def add_stock_bulk(
        self, replenishments: Iterable[StockReplenishment],
    ) -> list[InventoryRecordInfo]:
        return [self.add_stock(r) for r in replenishments]

    # ------------------------------------------------------------------
    # Totals
    # ------------------------------------------------------------------

    def check_sku_quantity(self, skus: Sequence[int]) -> list[int]:
        """Total available per SKU, in input order; 0 for unknown SKUs."""
        return [
            sum(r.quantity_available for r in self._records.find_by_sku(sku))
            for sku in skus
        ]

    def quantity_by_sku(self, sku: int) -> int:
        records = self._records.find_by_sku(sku)
        if not records:
            raise InventoryNotFoundError(sku, f"No inventory found for SKU: {sku}")
        return sum(r.quantity_available for r in records)

    def quantity_by_item_id(self, item_id: int) -> int:
        records = self._records.find_by_item_id(item_id)
        if not records:
            raise InventoryNotFoundError(None, f"No inventory found for item: {item_id}")
        return sum(r.quantity_available for r in records)

    def records_for_sku(self, sku: int) -> list[InventoryRecordInfo]:
        return [r.to_dto() for r in self._records.find_by_sku(sku)]

    def records_for_warehouse(self, warehouse_id: str) -> list[InventoryRecordInfo]:
        return [r.to_dto() for r in self._records.find_by_warehouse_id(warehouse_id)]
