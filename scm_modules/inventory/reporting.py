"""
Module: scm_modules.inventory.reporting
Responsibility: Read-only stock aggregations for dashboards: per warehouse,
    per SKU, and one flattened row per (warehouse, SKU).
Architecture position: Modules > Inventory > Selectors.

Invariants enforced:
    - Never mutates, flushes or locks rows.
    - "reserved" is the on-hold counter; total = available + on-hold.
    - Output is sorted (warehouse_id, then SKU) so repeated calls over the
      same data return identical lists.
"""

from sqlalchemy import func, select

from scm_kernel.selectors.base import BaseSelector
from scm_modules.inventory.models import (
    SkuStockSummary,
    WarehouseInventoryDetail,
    WarehouseStockSummary,
)
from scm_modules.inventory.orm import InventoryRecordModel, WarehouseModel


class InventoryReportSelector(BaseSelector[InventoryRecordModel]):
    """Aggregated stock views computed at query time."""

    def inventory_report(self) -> list[WarehouseStockSummary]:
        """Available / reserved / total per warehouse; 0/0/0 for one with no records."""
        stmt = (
            select(
                WarehouseModel.warehouse_id,
                func.coalesce(func.sum(InventoryRecordModel.quantity_available), 0),
                func.coalesce(func.sum(InventoryRecordModel.quantity_on_hold), 0),
            )
            .outerjoin(
                InventoryRecordModel,
                InventoryRecordModel.warehouse_id == WarehouseModel.warehouse_id,
            )
            .group_by(WarehouseModel.warehouse_id)
            .order_by(WarehouseModel.warehouse_id)
        )
        rows = self.session.execute(stmt).all()
        return [
            WarehouseStockSummary(
                warehouse_id=warehouse_id,
                available_quantity=int(available),
                reserved_quantity=int(on_hold),
                total_quantity=int(available) + int(on_hold),
            )
            for warehouse_id, available, on_hold in rows
        ]

    def all_inventories(self) -> list[SkuStockSummary]:
        """Available / reserved / total per SKU across all warehouses."""
        stmt = (
            select(
                InventoryRecordModel.sku,
                func.sum(InventoryRecordModel.quantity_available),
                func.sum(InventoryRecordModel.quantity_on_hold),
            )
            .group_by(InventoryRecordModel.sku)
            .order_by(InventoryRecordModel.sku)
        )
        rows = self.session.execute(stmt).all()
        return [
            SkuStockSummary(
                sku=sku,
                available_quantity=int(available or 0),
                reserved_quantity=int(on_hold or 0),
                total_quantity=int(available or 0) + int(on_hold or 0),
            )
            for sku, available, on_hold in rows
        ]

    def all_warehouse_inventory_details(self) -> list[WarehouseInventoryDetail]:
        stmt = select(InventoryRecordModel).order_by(
            InventoryRecordModel.warehouse_id,
            InventoryRecordModel.sku,
        )
        return [
            WarehouseInventoryDetail(
                warehouse_id=r.warehouse_id,
                sku=r.sku,
                available_quantity=r.quantity_available,
                reserved_quantity=r.quantity_on_hold,
                total_quantity=r.total_quantity,
            )
            for r in self.session.execute(stmt).scalars()
        ]
