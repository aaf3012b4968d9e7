"""Delivery Estimation: promise date for one SKU shipped to one ZIP."""

from datetime import date, timedelta

from scm_kernel.domain.clock import Clock, SystemClock
from scm_kernel.exceptions import InventoryNotFoundError
from scm_kernel.logging_config import get_logger
from scm_modules.inventory.config import InventoryConfig
from scm_modules.inventory.locator import WarehouseLocator
from scm_modules.inventory.store import InventoryRecordStore

logger = get_logger("modules.inventory.delivery")


class DeliveryEstimator:
    """
    Today + ``near_delivery_days`` when the ZIP's own warehouse has the SKU
    in stock, today + ``fallback_delivery_days`` when only another warehouse
    does.
    """

    def __init__(
        self,
        records: InventoryRecordStore,
        locator: WarehouseLocator,
        config: InventoryConfig,
        clock: Clock | None = None,
    ):
        self._records = records
        self._locator = locator
        self._config = config
        self._clock = clock or SystemClock()

    def estimate(self, sku: int, zipcode: int) -> date:
        warehouse = self._locator.find_warehouse_for_zip(
            zipcode, not_found_message=f"Delivery not available for the zipcode: {zipcode}",
        )
        today = self._clock.today()

        local = self._records.find_by_sku_and_warehouse(sku, warehouse.warehouse_id)
        if local is not None and local.quantity_available > 0:
            days = self._config.near_delivery_days
            source = local.warehouse_id
        else:
            # First record in insertion order with stock.
            fallback = next(
                (r for r in self._records.find_by_sku(sku) if r.quantity_available > 0),
                None,
            )
            if fallback is None:
                logger.warning(
                    "delivery_estimate_no_stock",
                    extra={"sku": sku, "zipcode": zipcode},
                )
                raise InventoryNotFoundError(
                    sku, f"No stock available for the SKU: {sku} in any inventory.",
                )
            days = self._config.fallback_delivery_days
            source = fallback.warehouse_id

        estimated = today + timedelta(days=days)
        logger.info(
            "delivery_estimated",
            extra={
                "sku": sku,
                "zipcode": zipcode,
                "warehouse_id": source,
                "estimated_delivery_date": estimated,
            },
        )
        return estimated
