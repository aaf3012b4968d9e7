"""
Stock Reservation Engine (``scm_modules.inventory.reservation``).

Responsibility
--------------
Allocates order demand across warehouses, preferring the warehouse that
serves the customer's ZIP, and moves the allocated quantity from
*available* into *on-order* and *on-hold*.

Algorithm (per demand line)
---------------------------
1. Resolve the nearest warehouse for the ZIP.
2. Use its record for the SKU; when it has none, substitute the record of
   another warehouse with the most available stock.
3. If that record alone covers the demand, take it all from there.
4. Otherwise, if the SKU's total available stock cannot cover the demand,
   record a shortage and touch nothing.  If it can, drain the nearest
   record and fill the rest greedily from the other warehouses, largest
   available first.

Invariants
----------
- No counter ever goes negative: the greedy fill only starts once the
  total available stock, read with the SKU's rows locked, is known to
  cover the demand.
- A line is reported as reserved only when its full quantity was taken.
- Every mutated record is stamped with the clock's date and flushed
  individually.  The engine never commits.
- The outcome covers every input SKU exactly once.  A shortage recorded for
  a SKU is never overwritten by a later "reserved" for the same SKU.

Failure Modes
-------------
- ``WarehouseNotFoundError``: no warehouse serves the ZIP.
- ``InventoryNotFoundError``: the SKU has no record with available stock in
  any warehouse.  A mere shortage is not an error.
- ``OutOfStockError``: the greedy fill ran out of candidates before
  covering the line.  Counters already taken for the call are left dirty
  in the session; the caller's rollback discards them.
"""

from collections.abc import Iterable

from scm_kernel.domain.clock import Clock, SystemClock
from scm_kernel.exceptions import InventoryNotFoundError, OutOfStockError
from scm_kernel.logging_config import LogContext, get_logger
from scm_modules.inventory.locator import WarehouseLocator
from scm_modules.inventory.models import (
    DemandLine,
    ReservationOutcome,
    SkuReservation,
    shortage_message,
)
from scm_modules.inventory.orm import InventoryRecordModel
from scm_modules.inventory.store import InventoryRecordStore

logger = get_logger("modules.inventory.reservation")


class StockReservationEngine:
    """Reserve stock for a batch of demand lines against one customer ZIP."""

    def __init__(
        self,
        records: InventoryRecordStore,
        locator: WarehouseLocator,
        clock: Clock | None = None,
    ):
        self._records = records
        self._locator = locator
        self._clock = clock or SystemClock()

    def reserve(
        self,
        demand_lines: Iterable[DemandLine],
        customer_zipcode: int,
    ) -> ReservationOutcome:
        results: dict[int, SkuReservation] = {}

        with LogContext.bind(zipcode=customer_zipcode):
            for line in demand_lines:
                with LogContext.bind(sku=line.sku):
                    reserved = self._reserve_line(line, customer_zipcode)
                if reserved:
                    results.setdefault(line.sku, SkuReservation.reserved(line.sku))
                else:
                    results[line.sku] = SkuReservation.shortage(line.sku)

        outcome = ReservationOutcome(results=results)
        logger.info(
            "reservation_completed",
            extra={
                "zipcode": customer_zipcode,
                "sku_count": len(outcome),
                "shortage_count": len(outcome.shortages()),
            },
        )
        return outcome

    def _reserve_line(self, line: DemandLine, customer_zipcode: int) -> bool:
        """Reserve one line.  Returns False on shortage."""
        warehouse = self._locator.find_warehouse_for_zip(customer_zipcode)
        nearest = self._records.find_by_sku_and_warehouse(line.sku, warehouse.warehouse_id)

        if nearest is None:
            candidates = self._records.find_by_sku_with_available_above_zero_excluding_warehouse(
                line.sku, warehouse.warehouse_id,
            )
            if not candidates:
                logger.warning(
                    "inventory_not_found",
                    extra={"sku": line.sku, "nearest_warehouse_id": warehouse.warehouse_id},
                )
                raise InventoryNotFoundError(
                    line.sku, f"No inventory found for SKU: {line.sku} in any warehouse.",
                )
            nearest = candidates[0]

        if nearest.quantity_available >= line.quantity:
            self._take(nearest, line.quantity)
            logger.info(
                "stock_reserved_nearest",
                extra={
                    "sku": line.sku,
                    "warehouse_id": nearest.warehouse_id,
                    "quantity": line.quantity,
                },
            )
            return True

        total_available = sum(
            r.quantity_available for r in self._records.find_by_sku_for_update(line.sku)
        )
        if total_available < line.quantity:
            logger.warning(
                "stock_shortage",
                extra={
                    "sku": line.sku,
                    "requested": line.quantity,
                    "total_available": total_available,
                },
            )
            return False

        remaining = line.quantity - nearest.quantity_available
        if nearest.quantity_available > 0:
            self._take(nearest, nearest.quantity_available)

        # Excludes the ZIP's own warehouse; a substituted nearest record is
        # already drained and drops out of the available > 0 filter.
        others = self._records.find_by_sku_with_available_above_zero_excluding_warehouse(
            line.sku, warehouse.warehouse_id,
        )
        for record in others:
            if remaining == 0:
                break
            taken = min(record.quantity_available, remaining)
            self._take(record, taken)
            remaining -= taken

        if remaining > 0:
            logger.error(
                "stock_split_incomplete",
                extra={"sku": line.sku, "requested": line.quantity, "unfilled": remaining},
            )
            raise OutOfStockError({line.sku: shortage_message(line.sku)})

        logger.info(
            "stock_reserved_split",
            extra={
                "sku": line.sku,
                "quantity": line.quantity,
                "nearest_warehouse_id": nearest.warehouse_id,
            },
        )
        return True

    def _take(self, record: InventoryRecordModel, quantity: int) -> None:
        record.quantity_available -= quantity
        record.quantity_on_order += quantity
        record.quantity_on_hold += quantity
        record.last_updated_date = self._clock.today()
        self._records.save(record)
        logger.debug(
            "inventory_record_reserved",
            extra={
                "sku": record.sku,
                "warehouse_id": record.warehouse_id,
                "quantity": quantity,
                "quantity_available": record.quantity_available,
            },
        )
