"""
Module: scm_modules.inventory.orm
Responsibility: SQLAlchemy ORM persistence models for the Inventory module.
    Maps warehouses and per-(SKU, warehouse) stock counters to relational
    tables.

Architecture position: Modules > Inventory > ORM.  Inherits from TrackedBase
    (scm_kernel.db.base).

Invariants enforced:
    - One inventory row per (sku, warehouse_id) (uq_inventory_sku_warehouse).
    - quantity_available >= 0 is a database CHECK.  The on-hold and on-order
      counters are kept non-negative by the engines, not by the schema.
    - Warehouse ZIP ranges are ordered and inside 100000-999999 (CHECKs).
      Range disjointness is validated at registration time, not here.
    - Inventory rows use an integer identity so "insertion order" is
      well-defined for first-match scans.

Failure modes:
    - IntegrityError on duplicate (sku, warehouse_id) or warehouse_id.
    - IntegrityError if quantity_available would be stored negative.
"""

from datetime import date

from sqlalchemy import (
    CheckConstraint,
    Date,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from scm_kernel.db.base import TrackedBase


# =============================================================================
# WarehouseModel
# =============================================================================

class WarehouseModel(TrackedBase):
    """
    ORM model for a fulfillment warehouse.

    Maps to: scm_modules.inventory.models.WarehouseInfo (frozen dataclass).

    Guarantees:
        - warehouse_id is the unique business identifier referenced by
          inventory rows.
        - zipcode_start <= zipcode_end, both inclusive.
    """

    __tablename__ = "warehouses"

    __table_args__ = (
        UniqueConstraint("warehouse_id", name="uq_warehouse_id"),
        CheckConstraint("zipcode_start <= zipcode_end", name="ck_warehouse_zip_order"),
        CheckConstraint(
            "zipcode_start >= 100000 AND zipcode_end <= 999999",
            name="ck_warehouse_zip_bounds",
        ),
        Index("idx_warehouse_zip_range", "zipcode_start", "zipcode_end"),
    )

    warehouse_id: Mapped[str] = mapped_column(String(50), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    zipcode_start: Mapped[int] = mapped_column(nullable=False)
    zipcode_end: Mapped[int] = mapped_column(nullable=False)

    inventory_records: Mapped[list["InventoryRecordModel"]] = relationship(
        back_populates="warehouse",
    )

    def to_dto(self):
        """Convert ORM model to frozen WarehouseInfo DTO."""
        from scm_modules.inventory.models import WarehouseInfo
        return WarehouseInfo(
            warehouse_id=self.warehouse_id,
            name=self.name,
            location=self.location,
            zipcode_start=self.zipcode_start,
            zipcode_end=self.zipcode_end,
        )

    def __repr__(self) -> str:
        return (
            f"<WarehouseModel {self.warehouse_id} "
            f"zip={self.zipcode_start}-{self.zipcode_end}>"
        )


# =============================================================================
# InventoryRecordModel
# =============================================================================

class InventoryRecordModel(TrackedBase):
    """
    ORM model for the stock counters of one SKU at one warehouse.

    Maps to: scm_modules.inventory.models.InventoryRecordInfo.

    Counters:
        quantity_available -- free to be reserved by new orders
        quantity_on_hold   -- reserved against an order, not yet confirmed
        quantity_on_order  -- committed to an order, survives confirmation
    """

    __tablename__ = "inventory_records"

    __table_args__ = (
        UniqueConstraint("sku", "warehouse_id", name="uq_inventory_sku_warehouse"),
        CheckConstraint("quantity_available >= 0", name="ck_inventory_available_non_negative"),
        Index("idx_inventory_sku", "sku"),
        Index("idx_inventory_item", "item_id"),
        Index("idx_inventory_warehouse", "warehouse_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    sku: Mapped[int] = mapped_column(nullable=False)
    item_id: Mapped[int] = mapped_column(nullable=False)
    warehouse_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("warehouses.warehouse_id"),
        nullable=False,
    )

    quantity_available: Mapped[int] = mapped_column(nullable=False, default=0)
    quantity_on_hold: Mapped[int] = mapped_column(nullable=False, default=0)
    quantity_on_order: Mapped[int] = mapped_column(nullable=False, default=0)
    last_updated_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    warehouse: Mapped[WarehouseModel] = relationship(
        back_populates="inventory_records",
    )

    @property
    def total_quantity(self) -> int:
        """Available plus on-hold, as shown on stock dashboards."""
        return self.quantity_available + self.quantity_on_hold

    def to_dto(self):
        """Convert ORM model to frozen InventoryRecordInfo DTO."""
        from scm_modules.inventory.models import InventoryRecordInfo
        return InventoryRecordInfo(
            sku=self.sku,
            item_id=self.item_id,
            warehouse_id=self.warehouse_id,
            quantity_available=self.quantity_available,
            quantity_on_hold=self.quantity_on_hold,
            quantity_on_order=self.quantity_on_order,
            last_updated_date=self.last_updated_date,
        )

    def __repr__(self) -> str:
        return (
            f"<InventoryRecordModel sku={self.sku} wh={self.warehouse_id} "
            f"avail={self.quantity_available} hold={self.quantity_on_hold} "
            f"order={self.quantity_on_order}>"
        )
