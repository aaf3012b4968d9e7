"""Tests for DeliveryEstimator through InventoryService.estimate_delivery()."""

from datetime import date

import pytest

from scm_kernel.exceptions import InventoryNotFoundError, WarehouseNotFoundError
from scm_modules.inventory.config import InventoryConfig
from scm_modules.inventory.service import InventoryService


class TestEstimateDelivery:

    def test_local_stock_is_two_days(self, inventory_service, two_warehouses, make_inventory):
        make_inventory(1276, "W1", available=1)

        assert inventory_service.estimate_delivery(1276, 400500) == date(2024, 1, 3)

    def test_stock_only_elsewhere_is_five_days(
        self, inventory_service, two_warehouses, make_inventory,
    ):
        make_inventory(1276, "W1", available=0, on_order=4)
        make_inventory(1276, "W2", available=3)

        assert inventory_service.estimate_delivery(1276, 400500) == date(2024, 1, 6)

    def test_no_local_record_falls_back(self, inventory_service, two_warehouses, make_inventory):
        make_inventory(1277, "W2", available=3)

        assert inventory_service.estimate_delivery(1277, 400500) == date(2024, 1, 6)

    def test_no_stock_anywhere_raises(self, inventory_service, two_warehouses, make_inventory):
        make_inventory(1278, "W1", available=0)
        make_inventory(1278, "W2", available=0)

        with pytest.raises(InventoryNotFoundError) as exc_info:
            inventory_service.estimate_delivery(1278, 400500)

        assert str(exc_info.value) == "No stock available for the SKU: 1278 in any inventory."

    def test_uncovered_zip_is_delivery_not_available(self, inventory_service, two_warehouses):
        with pytest.raises(WarehouseNotFoundError) as exc_info:
            inventory_service.estimate_delivery(1276, 452001)

        assert str(exc_info.value) == "Delivery not available for the zipcode: 452001"

    def test_follows_clock(self, inventory_service, deterministic_clock, two_warehouses, make_inventory):
        make_inventory(1276, "W1", available=1)
        deterministic_clock.advance_days(30)

        assert inventory_service.estimate_delivery(1276, 400500) == date(2024, 2, 2)

    def test_configured_windows(self, session, deterministic_clock, two_warehouses, make_inventory):
        make_inventory(1276, "W1", available=1)
        make_inventory(1279, "W2", available=1)
        service = InventoryService(
            session,
            InventoryConfig(near_delivery_days=1, fallback_delivery_days=3),
            deterministic_clock,
        )

        assert service.estimate_delivery(1276, 400500) == date(2024, 1, 2)
        assert service.estimate_delivery(1279, 400500) == date(2024, 1, 4)
