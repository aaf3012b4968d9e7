"""
Tests for StockReversalEngine through InventoryService.revert().

Covers:
- Reversal from the ZIP's own warehouse
- Spill-over to other warehouses carrying on-order stock
- Reserve-then-revert restores available and on-order (example + property)
- Failure when reserved stock cannot cover the reversal, with rollback
"""

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st
from sqlalchemy import delete

from scm_kernel.exceptions import InventoryNotFoundError, WarehouseNotFoundError
from scm_modules.inventory.models import DemandLine
from scm_modules.inventory.orm import InventoryRecordModel


def _counters(session, record):
    session.refresh(record)
    return (record.quantity_available, record.quantity_on_hold, record.quantity_on_order)


class TestRevertFromNearestWarehouse:

    def test_revert_moves_on_order_back_to_available(
        self, session, inventory_service, make_warehouse, make_inventory,
    ):
        make_warehouse("W1", 400001, 400706)
        record = make_inventory(1276, "W1", available=30, on_hold=0, on_order=15)

        inventory_service.revert([DemandLine(sku=1276, quantity=15)], 400500)

        assert _counters(session, record) == (45, 0, 0)

    def test_partial_revert_leaves_remaining_on_order(
        self, session, inventory_service, make_warehouse, make_inventory,
    ):
        make_warehouse("W1", 400001, 400706)
        record = make_inventory(1276, "W1", available=30, on_order=15)

        inventory_service.revert([DemandLine(sku=1276, quantity=5)], 400500)

        assert _counters(session, record) == (35, 0, 10)

    def test_on_hold_is_not_touched(
        self, session, inventory_service, make_warehouse, make_inventory,
    ):
        make_warehouse("W1", 400001, 400706)
        record = make_inventory(1276, "W1", available=0, on_hold=8, on_order=8)

        inventory_service.revert([DemandLine(sku=1276, quantity=8)], 400500)

        assert _counters(session, record) == (8, 8, 0)


class TestRevertAcrossWarehouses:

    def test_remainder_taken_from_other_warehouses(
        self, session, inventory_service, two_warehouses, make_inventory,
    ):
        near = make_inventory(2001, "W1", available=0, on_order=30)
        far = make_inventory(2001, "W2", available=10, on_order=10)

        inventory_service.revert([DemandLine(sku=2001, quantity=40)], 400500)

        assert _counters(session, near) == (30, 0, 0)
        assert _counters(session, far) == (20, 0, 0)

    def test_missing_nearest_record_reverts_from_others(
        self, session, inventory_service, two_warehouses, make_inventory,
    ):
        far = make_inventory(2002, "W2", available=5, on_order=7)

        inventory_service.revert([DemandLine(sku=2002, quantity=7)], 400500)

        assert _counters(session, far) == (12, 0, 0)

    def test_other_warehouse_with_zero_available_still_reverted(
        self, session, inventory_service, two_warehouses, make_inventory,
    ):
        near = make_inventory(2003, "W1", available=0, on_order=4)
        drained = make_inventory(2003, "W2", available=0, on_order=6)

        inventory_service.revert([DemandLine(sku=2003, quantity=10)], 400500)

        assert _counters(session, near) == (4, 0, 0)
        assert _counters(session, drained) == (6, 0, 0)


class TestRoundTrip:
    """Reserve followed by revert of the same demand."""

    def test_split_reservation_round_trips(
        self, session, inventory_service, two_warehouses, make_inventory,
    ):
        near = make_inventory(2001, "W1", available=30)
        far = make_inventory(2001, "W2", available=20)
        demand = [DemandLine(sku=2001, quantity=40)]

        inventory_service.reserve(demand, 400500)
        inventory_service.revert(demand, 400500)

        assert _counters(session, near)[0::2] == (30, 0)
        assert _counters(session, far)[0::2] == (20, 0)

    @settings(
        max_examples=25,
        deadline=None,
        suppress_health_check=[HealthCheck.function_scoped_fixture],
    )
    @given(
        near_stock=st.integers(min_value=0, max_value=50),
        other_stock=st.lists(st.integers(min_value=0, max_value=50), min_size=0, max_size=3),
        quantity=st.integers(min_value=1, max_value=120),
        has_near_record=st.booleans(),
    )
    def test_reserve_then_revert_restores_available_and_on_order(
        self, session, inventory_service, make_warehouse,
        near_stock, other_stock, quantity, has_near_record,
    ):
        session.execute(delete(InventoryRecordModel))
        session.commit()
        if not inventory_service.list_warehouses():
            make_warehouse("W1", 400001, 400706)
            make_warehouse("W2", 500001, 500999)
            make_warehouse("W3", 600001, 600999)
            make_warehouse("W4", 700001, 700999)

        layout = [("W1", near_stock)] if has_near_record else []
        layout += [(f"W{i}", stock) for i, stock in enumerate(other_stock, start=2)]
        records = []
        for warehouse_id, stock in layout:
            record = InventoryRecordModel(
                sku=8001, item_id=80010, warehouse_id=warehouse_id,
                quantity_available=stock, quantity_on_hold=0, quantity_on_order=0,
            )
            session.add(record)
            records.append(record)
        session.commit()
        before = {r.warehouse_id: (r.quantity_available, r.quantity_on_order) for r in records}
        demand = [DemandLine(sku=8001, quantity=quantity)]

        try:
            outcome = inventory_service.reserve(demand, 400500)
        except InventoryNotFoundError:
            return
        if outcome.fully_reserved:
            inventory_service.revert(demand, 400500)

        for record in records:
            session.refresh(record)
            assert (record.quantity_available, record.quantity_on_order) == before[record.warehouse_id]


class TestRevertErrors:

    def test_not_enough_reserved_stock_raises_and_rolls_back(
        self, session, inventory_service, two_warehouses, make_inventory,
    ):
        near = make_inventory(3001, "W1", available=0, on_order=5)
        far = make_inventory(3001, "W2", available=0, on_order=2)

        with pytest.raises(InventoryNotFoundError) as exc_info:
            inventory_service.revert([DemandLine(sku=3001, quantity=10)], 400500)

        assert str(exc_info.value) == (
            "Not enough reserved stock available to revert for SKU: 3001"
        )
        assert _counters(session, near) == (0, 0, 5)
        assert _counters(session, far) == (0, 0, 2)

    def test_uncovered_zip_raises(self, inventory_service, make_warehouse):
        make_warehouse("W1", 400001, 400706)

        with pytest.raises(WarehouseNotFoundError):
            inventory_service.revert([DemandLine(sku=1, quantity=1)], 452001)

    def test_revert_logs_event(
        self, inventory_service, make_warehouse, make_inventory, captured_logs,
    ):
        make_warehouse("W1", 400001, 400706)
        make_inventory(1276, "W1", available=0, on_order=3)

        inventory_service.revert([DemandLine(sku=1276, quantity=3)], 400500)

        reverted = [r for r in captured_logs() if r["message"] == "stock_reverted"]
        assert len(reverted) == 1
        assert reverted[0]["sku"] == "1276"
