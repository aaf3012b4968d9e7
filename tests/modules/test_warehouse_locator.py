"""Tests for WarehouseLocator."""

import pytest

from scm_kernel.exceptions import WarehouseNotFoundError
from scm_modules.inventory.locator import WarehouseLocator
from scm_modules.inventory.store import SqlWarehouseStore


@pytest.fixture
def locator(session):
    return WarehouseLocator(SqlWarehouseStore(session))


class TestWarehouseLocator:

    def test_finds_owning_warehouse(self, locator, two_warehouses):
        assert locator.find_warehouse_for_zip(560050).warehouse_id == "W2"

    def test_boundaries_are_inclusive(self, locator, two_warehouses):
        assert locator.find_warehouse_for_zip(400001).warehouse_id == "W1"
        assert locator.find_warehouse_for_zip(400706).warehouse_id == "W1"

    def test_uncovered_zip_default_message(self, locator, two_warehouses):
        with pytest.raises(WarehouseNotFoundError) as exc_info:
            locator.find_warehouse_for_zip(452001)

        assert str(exc_info.value) == "No Warehouse found for the zipcode: 452001"
        assert exc_info.value.code == "WAREHOUSE_NOT_FOUND"

    def test_custom_not_found_message(self, locator, two_warehouses):
        with pytest.raises(WarehouseNotFoundError) as exc_info:
            locator.find_warehouse_for_zip(452001, "Delivery not available for the zipcode: 452001")

        assert str(exc_info.value) == "Delivery not available for the zipcode: 452001"

    def test_no_warehouses_at_all(self, locator):
        with pytest.raises(WarehouseNotFoundError):
            locator.find_warehouse_for_zip(400001)

    def test_miss_is_logged(self, locator, two_warehouses, captured_logs):
        with pytest.raises(WarehouseNotFoundError):
            locator.find_warehouse_for_zip(452001)

        misses = [r for r in captured_logs() if r["message"] == "warehouse_not_found_for_zip"]
        assert misses[0]["level"] == "WARNING"
        assert misses[0]["zipcode"] == 452001
