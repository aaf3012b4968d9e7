"""
Tests for warehouse / inventory registration, replenishment and stock totals.
"""

from datetime import date

import pytest

from scm_kernel.exceptions import (
    InvalidZipcodeRangeError,
    InventoryNotFoundError,
    InventoryRecordAlreadyExistsError,
    InventoryRecordNotFoundError,
    WarehouseAlreadyExistsError,
    WarehouseNotFoundError,
    WarehouseRangeOverlapError,
)
from scm_modules.inventory.models import StockReplenishment, WarehouseInfo


class TestRegisterWarehouse:

    def test_register_and_list(self, inventory_service):
        info = inventory_service.register_warehouse(
            "W1", "Mumbai Central", "Mumbai", 400001, 400706,
        )

        assert info == WarehouseInfo("W1", "Mumbai Central", "Mumbai", 400001, 400706)
        assert inventory_service.list_warehouses() == [info]

    def test_list_is_sorted_by_id(self, inventory_service):
        inventory_service.register_warehouse("W2", "B", "Bengaluru", 560001, 560100)
        inventory_service.register_warehouse("W1", "A", "Mumbai", 400001, 400706)

        assert [w.warehouse_id for w in inventory_service.list_warehouses()] == ["W1", "W2"]

    def test_single_zip_range_allowed(self, inventory_service):
        info = inventory_service.register_warehouse("W1", "Tiny", "Pune", 411001, 411001)

        assert info.zipcode_start == info.zipcode_end == 411001

    def test_inverted_range_rejected(self, inventory_service):
        with pytest.raises(InvalidZipcodeRangeError) as exc_info:
            inventory_service.register_warehouse("W1", "A", "Mumbai", 400706, 400001)

        assert exc_info.value.code == "INVALID_ZIPCODE_RANGE"
        assert inventory_service.list_warehouses() == []

    @pytest.mark.parametrize("start,end", [(99999, 400000), (900000, 1000000)])
    def test_out_of_bounds_range_rejected(self, inventory_service, start, end):
        with pytest.raises(InvalidZipcodeRangeError):
            inventory_service.register_warehouse("W1", "A", "Nowhere", start, end)

    def test_duplicate_id_rejected(self, inventory_service):
        inventory_service.register_warehouse("W1", "A", "Mumbai", 400001, 400706)

        with pytest.raises(WarehouseAlreadyExistsError):
            inventory_service.register_warehouse("W1", "B", "Pune", 411001, 411099)

    @pytest.mark.parametrize("start,end", [
        (400706, 400800),
        (399000, 400001),
        (400100, 400200),
        (300000, 500000),
    ])
    def test_overlapping_range_rejected(self, inventory_service, start, end):
        inventory_service.register_warehouse("W1", "A", "Mumbai", 400001, 400706)

        with pytest.raises(WarehouseRangeOverlapError) as exc_info:
            inventory_service.register_warehouse("W9", "X", "Elsewhere", start, end)

        assert exc_info.value.conflicting_warehouse_id == "W1"
        assert len(inventory_service.list_warehouses()) == 1

    def test_adjacent_range_accepted(self, inventory_service):
        inventory_service.register_warehouse("W1", "A", "Mumbai", 400001, 400706)
        inventory_service.register_warehouse("W2", "B", "Mumbai East", 400707, 400999)

        assert len(inventory_service.list_warehouses()) == 2


class TestRegisterInventory:

    def test_new_record_starts_with_zero_reserved(self, inventory_service, two_warehouses):
        info = inventory_service.register_inventory(1276, 12760, "W1", 45)

        assert info.quantity_available == 45
        assert info.quantity_on_hold == 0
        assert info.quantity_on_order == 0
        assert info.last_updated_date == date(2024, 1, 1)

    def test_unknown_warehouse_rejected(self, inventory_service, two_warehouses):
        with pytest.raises(WarehouseNotFoundError) as exc_info:
            inventory_service.register_inventory(1276, 12760, "W9", 1)

        assert exc_info.value.warehouse_id == "W9"

    def test_duplicate_pair_rejected(self, inventory_service, two_warehouses):
        inventory_service.register_inventory(1276, 12760, "W1", 1)

        with pytest.raises(InventoryRecordAlreadyExistsError):
            inventory_service.register_inventory(1276, 12760, "W1", 5)

    def test_same_sku_in_another_warehouse_allowed(self, inventory_service, two_warehouses):
        inventory_service.register_inventory(1276, 12760, "W1", 1)
        inventory_service.register_inventory(1276, 12760, "W2", 2)

        assert inventory_service.quantity_by_sku(1276) == 3

    def test_negative_quantity_rejected(self, inventory_service, two_warehouses):
        with pytest.raises(ValueError):
            inventory_service.register_inventory(1276, 12760, "W1", -1)


class TestAddStock:

    def test_add_increases_available(
        self, inventory_service, deterministic_clock, two_warehouses, make_inventory,
    ):
        make_inventory(1276, "W1", available=10, on_hold=2, on_order=2)
        deterministic_clock.advance_days(3)

        info = inventory_service.add_stock(StockReplenishment(1276, "W1", 5))

        assert info.quantity_available == 15
        assert info.quantity_on_hold == 2
        assert info.last_updated_date == date(2024, 1, 4)

    def test_missing_pair_rejected(self, inventory_service, two_warehouses):
        with pytest.raises(InventoryRecordNotFoundError):
            inventory_service.add_stock(StockReplenishment(1276, "W1", 5))

    def test_non_positive_quantity_rejected(self):
        with pytest.raises(ValueError):
            StockReplenishment(1276, "W1", 0)

    def test_bulk_is_all_or_nothing(self, inventory_service, two_warehouses, make_inventory):
        make_inventory(1276, "W1", available=10)

        with pytest.raises(InventoryRecordNotFoundError):
            inventory_service.add_stock_bulk([
                StockReplenishment(1276, "W1", 5),
                StockReplenishment(1276, "W2", 5),
            ])

        assert inventory_service.quantity_by_sku(1276) == 10

    def test_bulk_applies_every_line(self, inventory_service, two_warehouses, make_inventory):
        make_inventory(1276, "W1", available=10)
        make_inventory(1276, "W2", available=1)

        infos = inventory_service.add_stock_bulk([
            StockReplenishment(1276, "W1", 5),
            StockReplenishment(1276, "W2", 4),
        ])

        assert [i.quantity_available for i in infos] == [15, 5]


class TestStockTotals:

    def test_check_sku_quantity_in_input_order(
        self, inventory_service, two_warehouses, make_inventory,
    ):
        make_inventory(1, "W1", available=4)
        make_inventory(1, "W2", available=6)
        make_inventory(2, "W1", available=3, on_hold=9)

        assert inventory_service.check_sku_quantity([2, 404, 1]) == [3, 0, 10]

    def test_quantity_by_sku_unknown(self, inventory_service):
        with pytest.raises(InventoryNotFoundError) as exc_info:
            inventory_service.quantity_by_sku(404)

        assert str(exc_info.value) == "No inventory found for SKU: 404"

    def test_quantity_by_item_id(self, inventory_service, two_warehouses, make_inventory):
        make_inventory(1, "W1", available=4, item_id=77)
        make_inventory(2, "W2", available=6, item_id=77)

        assert inventory_service.quantity_by_item_id(77) == 10

    def test_quantity_by_item_id_unknown(self, inventory_service):
        with pytest.raises(InventoryNotFoundError) as exc_info:
            inventory_service.quantity_by_item_id(77)

        assert exc_info.value.sku is None

    def test_records_for_sku_and_warehouse(
        self, inventory_service, two_warehouses, make_inventory,
    ):
        make_inventory(9, "W1", available=1)
        make_inventory(3, "W1", available=2)
        make_inventory(9, "W2", available=5)

        assert [r.warehouse_id for r in inventory_service.records_for_sku(9)] == ["W1", "W2"]
        assert [r.sku for r in inventory_service.records_for_warehouse("W1")] == [3, 9]
        assert inventory_service.records_for_warehouse("W9") == []
