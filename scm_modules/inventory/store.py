"""
Module: scm_modules.inventory.store
Responsibility: Data-access contract for warehouses and inventory records,
    and its SQLAlchemy implementation.  The allocation engines depend only on
    the ``InventoryRecordStore`` / ``WarehouseStore`` protocols.

Architecture position: Modules > Inventory > Store.  Depends on orm.py and
    scm_kernel.services.base.

Invariants enforced:
    - Rows an engine is about to mutate are read ``FOR UPDATE`` when
      ``lock_rows`` is set, so concurrent reservations against the same
      (sku, warehouse) row serialize in the database.
    - ``save()`` flushes immediately; later queries in the same transaction
      observe earlier mutations.  The store never commits.
    - Result ordering is deterministic: insertion order for ``find_by_sku``,
      available (or on-order) descending then warehouse_id for the
      "other warehouses" candidate lists.

Failure modes:
    - IntegrityError surfaces from ``save()`` on constraint violations.
"""

from typing import Protocol, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from scm_kernel.services.base import BaseService
from scm_modules.inventory.orm import InventoryRecordModel, WarehouseModel


class InventoryRecordStore(Protocol):
    """Repository interface over per-(SKU, warehouse) stock rows."""

    def find_by_sku_and_warehouse(
        self, sku: int, warehouse_id: str,
    ) -> InventoryRecordModel | None: ...

    def find_by_sku(self, sku: int) -> Sequence[InventoryRecordModel]: ...

    def find_by_sku_for_update(self, sku: int) -> Sequence[InventoryRecordModel]: ...

    def find_by_sku_with_available_above_zero_excluding_warehouse(
        self, sku: int, excluded_warehouse_id: str | None,
    ) -> Sequence[InventoryRecordModel]: ...

    def find_by_sku_with_on_order_above_zero_excluding_warehouse(
        self, sku: int, excluded_warehouse_id: str | None,
    ) -> Sequence[InventoryRecordModel]: ...

    def find_by_warehouse_id(self, warehouse_id: str) -> Sequence[InventoryRecordModel]: ...

    def find_by_item_id(self, item_id: int) -> Sequence[InventoryRecordModel]: ...

    def find_by_sku_with_on_hold_above_zero(self, sku: int) -> Sequence[InventoryRecordModel]: ...

    def find_all(self) -> Sequence[InventoryRecordModel]: ...

    def save(self, record: InventoryRecordModel) -> InventoryRecordModel: ...


class WarehouseStore(Protocol):
    """Repository interface over warehouses and their ZIP ranges."""

    def find_by_zip_in_range(self, zipcode: int) -> WarehouseModel | None: ...

    def find_by_id(self, warehouse_id: str) -> WarehouseModel | None: ...

    def find_all(self) -> Sequence[WarehouseModel]: ...

    def find_overlapping(self, zipcode_start: int, zipcode_end: int) -> Sequence[WarehouseModel]: ...

    def save(self, warehouse: WarehouseModel) -> WarehouseModel: ...


class SqlInventoryRecordStore(BaseService[InventoryRecordModel]):
    """
    ``InventoryRecordStore`` over a SQLAlchemy session.

    Point lookups and candidate lists used by the mutating engines honour
    ``lock_rows``; pure read queries (reports, totals) do not lock.
    """

    def __init__(self, session: Session, lock_rows: bool = True):
        super().__init__(session)
        self._lock_rows = lock_rows

    def _locked(self, stmt):
        if self._lock_rows:
            return stmt.with_for_update()
        return stmt

    def find_by_sku_and_warehouse(
        self, sku: int, warehouse_id: str,
    ) -> InventoryRecordModel | None:
        stmt = select(InventoryRecordModel).where(
            InventoryRecordModel.sku == sku,
            InventoryRecordModel.warehouse_id == warehouse_id,
        )
        return self.session.execute(self._locked(stmt)).scalar_one_or_none()

    def find_by_sku(self, sku: int) -> Sequence[InventoryRecordModel]:
        stmt = (
            select(InventoryRecordModel)
            .where(InventoryRecordModel.sku == sku)
            .order_by(InventoryRecordModel.id)
        )
        return self.session.execute(stmt).scalars().all()

    def find_by_sku_for_update(self, sku: int) -> Sequence[InventoryRecordModel]:
        """Same rows as ``find_by_sku``, locked when ``lock_rows`` is set."""
        stmt = (
            select(InventoryRecordModel)
            .where(InventoryRecordModel.sku == sku)
            .order_by(InventoryRecordModel.id)
        )
        return self.session.execute(self._locked(stmt)).scalars().all()

    def find_by_sku_with_available_above_zero_excluding_warehouse(
        self, sku: int, excluded_warehouse_id: str | None,
    ) -> Sequence[InventoryRecordModel]:
        stmt = select(InventoryRecordModel).where(
            InventoryRecordModel.sku == sku,
            InventoryRecordModel.quantity_available > 0,
        )
        if excluded_warehouse_id is not None:
            stmt = stmt.where(InventoryRecordModel.warehouse_id != excluded_warehouse_id)
        stmt = stmt.order_by(
            InventoryRecordModel.quantity_available.desc(),
            InventoryRecordModel.warehouse_id,
        )
        return self.session.execute(self._locked(stmt)).scalars().all()

    def find_by_sku_with_on_order_above_zero_excluding_warehouse(
        self, sku: int, excluded_warehouse_id: str | None,
    ) -> Sequence[InventoryRecordModel]:
        stmt = select(InventoryRecordModel).where(
            InventoryRecordModel.sku == sku,
            InventoryRecordModel.quantity_on_order > 0,
        )
        if excluded_warehouse_id is not None:
            stmt = stmt.where(InventoryRecordModel.warehouse_id != excluded_warehouse_id)
        stmt = stmt.order_by(
            InventoryRecordModel.quantity_available.desc(),
            InventoryRecordModel.warehouse_id,
        )
        return self.session.execute(self._locked(stmt)).scalars().all()

    def find_by_warehouse_id(self, warehouse_id: str) -> Sequence[InventoryRecordModel]:
        stmt = (
            select(InventoryRecordModel)
            .where(InventoryRecordModel.warehouse_id == warehouse_id)
            .order_by(InventoryRecordModel.sku)
        )
        return self.session.execute(stmt).scalars().all()

    def find_by_item_id(self, item_id: int) -> Sequence[InventoryRecordModel]:
        stmt = (
            select(InventoryRecordModel)
            .where(InventoryRecordModel.item_id == item_id)
            .order_by(InventoryRecordModel.id)
        )
        return self.session.execute(stmt).scalars().all()

    def find_by_sku_with_on_hold_above_zero(self, sku: int) -> Sequence[InventoryRecordModel]:
        stmt = (
            select(InventoryRecordModel)
            .where(
                InventoryRecordModel.sku == sku,
                InventoryRecordModel.quantity_on_hold > 0,
            )
            .order_by(InventoryRecordModel.id)
        )
        return self.session.execute(self._locked(stmt)).scalars().all()

    def find_all(self) -> Sequence[InventoryRecordModel]:
        stmt = select(InventoryRecordModel).order_by(InventoryRecordModel.id)
        return self.session.execute(stmt).scalars().all()

    def save(self, record: InventoryRecordModel) -> InventoryRecordModel:
        self.session.add(record)
        self.session.flush()
        return record


class SqlWarehouseStore(BaseService[WarehouseModel]):
    """``WarehouseStore`` over a SQLAlchemy session."""

    def find_by_zip_in_range(self, zipcode: int) -> WarehouseModel | None:
        # Ranges are disjoint once registered through StockAdministration;
        # the ordering keeps the answer stable for hand-loaded data.
        stmt = (
            select(WarehouseModel)
            .where(
                WarehouseModel.zipcode_start <= zipcode,
                WarehouseModel.zipcode_end >= zipcode,
            )
            .order_by(WarehouseModel.zipcode_start, WarehouseModel.warehouse_id)
            .limit(1)
        )
        return self.session.execute(stmt).scalars().first()

    def find_by_id(self, warehouse_id: str) -> WarehouseModel | None:
        stmt = select(WarehouseModel).where(WarehouseModel.warehouse_id == warehouse_id)
        return self.session.execute(stmt).scalar_one_or_none()

    def find_all(self) -> Sequence[WarehouseModel]:
        stmt = select(WarehouseModel).order_by(WarehouseModel.warehouse_id)
        return self.session.execute(stmt).scalars().all()

    def find_overlapping(self, zipcode_start: int, zipcode_end: int) -> Sequence[WarehouseModel]:
        stmt = (
            select(WarehouseModel)
            .where(
                WarehouseModel.zipcode_start <= zipcode_end,
                WarehouseModel.zipcode_end >= zipcode_start,
            )
            .order_by(WarehouseModel.zipcode_start)
        )
        return self.session.execute(stmt).scalars().all()

    def save(self, warehouse: WarehouseModel) -> WarehouseModel:
        self.session.add(warehouse)
        self.session.flush()
        return warehouse
