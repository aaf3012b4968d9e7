"""
Stock Reversal Engine (``scm_modules.inventory.reversal``).

Releases previously reserved stock back to *available*, the inverse of
``StockReservationEngine``.  Used when an order is cancelled.

The ZIP's own warehouse is drained of on-order stock first; any remainder
is taken from the other warehouses that still carry on-order stock for the
SKU, largest available first (the same ordering reservation used, so an
immediate reserve/revert pair restores every counter it touched).

Only the on-order counter is moved.  On-hold is left alone: by the time an
order can be cancelled its reservation has been confirmed and on-hold is
already zero.

Raises ``InventoryNotFoundError`` when the reserved stock on record cannot
cover the quantity to revert; the caller's transaction rollback discards
any partial release.
"""

from collections.abc import Iterable

from scm_kernel.domain.clock import Clock, SystemClock
from scm_kernel.exceptions import InventoryNotFoundError
from scm_kernel.logging_config import LogContext, get_logger
from scm_modules.inventory.locator import WarehouseLocator
from scm_modules.inventory.models import DemandLine
from scm_modules.inventory.orm import InventoryRecordModel
from scm_modules.inventory.store import InventoryRecordStore

logger = get_logger("modules.inventory.reversal")


class StockReversalEngine:
    """Return on-order stock to available for a batch of demand lines."""

    def __init__(
        self,
        records: InventoryRecordStore,
        locator: WarehouseLocator,
        clock: Clock | None = None,
    ):
        self._records = records
        self._locator = locator
        self._clock = clock or SystemClock()

    def revert(self, demand_lines: Iterable[DemandLine], customer_zipcode: int) -> None:
        with LogContext.bind(zipcode=customer_zipcode):
            for line in demand_lines:
                with LogContext.bind(sku=line.sku):
                    self._revert_line(line, customer_zipcode)

    def _revert_line(self, line: DemandLine, customer_zipcode: int) -> None:
        warehouse = self._locator.find_warehouse_for_zip(customer_zipcode)
        remaining = line.quantity

        nearest = self._records.find_by_sku_and_warehouse(line.sku, warehouse.warehouse_id)
        if nearest is not None and nearest.quantity_on_order > 0:
            remaining -= self._release(nearest, min(nearest.quantity_on_order, remaining))

        if remaining > 0:
            others = self._records.find_by_sku_with_on_order_above_zero_excluding_warehouse(
                line.sku, warehouse.warehouse_id,
            )
            for record in others:
                if remaining == 0:
                    break
                remaining -= self._release(record, min(record.quantity_on_order, remaining))

        if remaining > 0:
            logger.warning(
                "stock_revert_incomplete",
                extra={
                    "sku": line.sku,
                    "requested": line.quantity,
                    "unreverted": remaining,
                },
            )
            raise InventoryNotFoundError(
                line.sku,
                f"Not enough reserved stock available to revert for SKU: {line.sku}",
            )

        logger.info(
            "stock_reverted",
            extra={"sku": line.sku, "quantity": line.quantity},
        )

    def _release(self, record: InventoryRecordModel, quantity: int) -> int:
        record.quantity_on_order -= quantity
        record.quantity_available += quantity
        record.last_updated_date = self._clock.today()
        self._records.save(record)
        logger.debug(
            "inventory_record_released",
            extra={
                "sku": record.sku,
                "warehouse_id": record.warehouse_id,
                "quantity": quantity,
            },
        )
        return quantity
