"""Reservation Confirmation: clears on-hold stock once an order is durable."""

from collections.abc import Iterable

from scm_kernel.exceptions import InventoryNotFoundError
from scm_kernel.logging_config import get_logger
from scm_modules.inventory.store import InventoryRecordStore

logger = get_logger("modules.inventory.confirmation")


class ReservationConfirmation:
    """
    Zero the on-hold counter for every record of the given SKUs.

    On-order is untouched; it keeps representing stock committed to orders
    that have not shipped.  ``last_updated_date`` is not stamped.
    """

    def __init__(self, records: InventoryRecordStore):
        self._records = records

    def confirm(self, skus: Iterable[int]) -> None:
        for sku in skus:
            held = self._records.find_by_sku_with_on_hold_above_zero(sku)
            if not held:
                logger.warning("no_stock_on_hold", extra={"sku": sku})
                raise InventoryNotFoundError(
                    sku, f"No inventory found with stock on hold for SKU: {sku}",
                )
            released = 0
            for record in held:
                released += record.quantity_on_hold
                record.quantity_on_hold = 0
                self._records.save(record)
            logger.info(
                "reservation_confirmed",
                extra={"sku": sku, "records": len(held), "quantity": released},
            )
