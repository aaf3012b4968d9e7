"""Warehouse Locator: resolves a customer ZIP code to its serving warehouse."""

from scm_kernel.exceptions import WarehouseNotFoundError
from scm_kernel.logging_config import get_logger
from scm_modules.inventory.orm import WarehouseModel
from scm_modules.inventory.store import WarehouseStore

logger = get_logger("modules.inventory.locator")


class WarehouseLocator:
    """
    "Nearest" warehouse lookup by ZIP range ownership.

    Proximity is range membership only: the nearest warehouse for a ZIP is
    the one whose inclusive [zipcode_start, zipcode_end] contains it.
    """

    def __init__(self, warehouses: WarehouseStore):
        self._warehouses = warehouses

    def find_warehouse_for_zip(
        self,
        zipcode: int,
        not_found_message: str | None = None,
    ) -> WarehouseModel:
        """
        Return the warehouse whose range covers ``zipcode``.

        Raises:
            WarehouseNotFoundError: No range contains the ZIP.
        """
        warehouse = self._warehouses.find_by_zip_in_range(zipcode)
        if warehouse is None:
            logger.warning("warehouse_not_found_for_zip", extra={"zipcode": zipcode})
            raise WarehouseNotFoundError(zipcode=zipcode, message=not_found_message)
        return warehouse
