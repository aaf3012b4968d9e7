"""Tests for ReservationConfirmation through InventoryService.confirm()."""

import pytest

from scm_kernel.exceptions import InventoryNotFoundError
from scm_modules.inventory.models import DemandLine


def _counters(session, record):
    session.refresh(record)
    return (record.quantity_available, record.quantity_on_hold, record.quantity_on_order)


class TestConfirm:

    def test_zeroes_on_hold_for_every_held_record(
        self, session, inventory_service, two_warehouses, make_inventory,
    ):
        near = make_inventory(2001, "W1", available=0, on_hold=30, on_order=30)
        far = make_inventory(2001, "W2", available=10, on_hold=10, on_order=10)

        inventory_service.confirm([2001])

        assert _counters(session, near) == (0, 0, 30)
        assert _counters(session, far) == (10, 0, 10)

    def test_records_without_hold_are_left_alone(
        self, session, inventory_service, two_warehouses, make_inventory,
    ):
        held = make_inventory(2002, "W1", available=5, on_hold=5, on_order=5)
        idle = make_inventory(2002, "W2", available=9)

        inventory_service.confirm([2002])

        assert _counters(session, held) == (5, 0, 5)
        assert _counters(session, idle) == (9, 0, 0)

    def test_confirm_after_reserve_keeps_on_order(
        self, session, inventory_service, make_warehouse, make_inventory,
    ):
        make_warehouse("W1", 400001, 400706)
        record = make_inventory(1276, "W1", available=45)

        inventory_service.reserve([DemandLine(sku=1276, quantity=15)], 400500)
        inventory_service.confirm([1276])

        assert _counters(session, record) == (30, 0, 15)

    def test_no_held_stock_raises(self, inventory_service, make_warehouse, make_inventory):
        make_warehouse("W1", 400001, 400706)
        make_inventory(3001, "W1", available=10)

        with pytest.raises(InventoryNotFoundError) as exc_info:
            inventory_service.confirm([3001])

        assert str(exc_info.value) == "No inventory found with stock on hold for SKU: 3001"

    def test_failure_rolls_back_earlier_skus(
        self, session, inventory_service, make_warehouse, make_inventory,
    ):
        make_warehouse("W1", 400001, 400706)
        held = make_inventory(3002, "W1", available=0, on_hold=4, on_order=4)

        with pytest.raises(InventoryNotFoundError):
            inventory_service.confirm([3002, 3003])

        assert _counters(session, held) == (0, 4, 4)

    def test_confirmation_logged(
        self, inventory_service, make_warehouse, make_inventory, captured_logs,
    ):
        make_warehouse("W1", 400001, 400706)
        make_inventory(3004, "W1", on_hold=6, on_order=6)

        inventory_service.confirm([3004])

        confirmed = [r for r in captured_logs() if r["message"] == "reservation_confirmed"]
        assert confirmed[0]["quantity"] == 6
        assert confirmed[0]["records"] == 1
