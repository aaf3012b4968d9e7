"""
Inventory Domain Models (``scm_modules.inventory.models``).

Responsibility
--------------
Frozen value objects exchanged between the inventory engines and their
callers: warehouses, per-warehouse inventory records, demand lines, the
tagged reservation outcome, stock replenishments and reporting rows.

Architecture
------------
Layer: **Modules** -- pure domain data structures.  All dataclasses are
``frozen=True``.  They carry NO database identity and NO I/O; ORM rows are
converted with ``to_dto()`` before leaving a service.

Invariants
----------
- ``DemandLine.quantity`` and ``StockReplenishment.quantity`` are positive.
- ``ReservationOutcome`` holds at most one ``SkuReservation`` per SKU.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

RESERVED_MESSAGE = "Inventory updated with stock reservation"


def shortage_message(sku: int) -> str:
    """Status text recorded for a SKU whose total stock cannot cover demand."""
    return f"Not enough stock to fulfill the order for SKU: {sku}"


class ReservationStatus(Enum):
    """Per-SKU reservation tag."""
    RESERVED = "reserved"
    SHORTAGE = "shortage"


@dataclass(frozen=True)
class WarehouseInfo:
    """A fulfillment warehouse and the inclusive ZIP range it serves."""
    warehouse_id: str
    name: str
    location: str
    zipcode_start: int
    zipcode_end: int


@dataclass(frozen=True)
class InventoryRecordInfo:
    """Stock counters for one SKU at one warehouse."""
    sku: int
    item_id: int
    warehouse_id: str
    quantity_available: int
    quantity_on_hold: int
    quantity_on_order: int
    last_updated_date: date | None = None


@dataclass(frozen=True)
class DemandLine:
    """One order line at reservation / reversal time.  Never persisted."""
    sku: int
    quantity: int

    def __post_init__(self):
        if self.quantity <= 0:
            raise ValueError(
                f"quantity must be positive for SKU {self.sku}, got {self.quantity}"
            )


@dataclass(frozen=True)
class SkuReservation:
    """Tagged per-SKU result: RESERVED, or SHORTAGE with its message."""
    sku: int
    status: ReservationStatus
    message: str

    @classmethod
    def reserved(cls, sku: int) -> SkuReservation:
        return cls(sku=sku, status=ReservationStatus.RESERVED, message=RESERVED_MESSAGE)

    @classmethod
    def shortage(cls, sku: int) -> SkuReservation:
        return cls(sku=sku, status=ReservationStatus.SHORTAGE, message=shortage_message(sku))

    @property
    def is_reserved(self) -> bool:
        return self.status is ReservationStatus.RESERVED


@dataclass(frozen=True)
class ReservationOutcome:
    """
    Result of one reservation call, covering every input SKU exactly once.

    ``messages()`` gives the SKU -> status-string mapping handed back to
    order-management callers.
    """
    results: dict[int, SkuReservation] = field(default_factory=dict)

    def messages(self) -> dict[int, str]:
        return {sku: r.message for sku, r in self.results.items()}

    def shortages(self) -> dict[int, str]:
        return {
            sku: r.message for sku, r in self.results.items() if not r.is_reserved
        }

    @property
    def fully_reserved(self) -> bool:
        return all(r.is_reserved for r in self.results.values())

    def __getitem__(self, sku: int) -> SkuReservation:
        return self.results[sku]

    def __len__(self) -> int:
        return len(self.results)


@dataclass(frozen=True)
class StockReplenishment:
    """Quantity to add to an existing (sku, warehouse) record."""
    sku: int
    warehouse_id: str
    quantity: int

    def __post_init__(self):
        if self.quantity <= 0:
            raise ValueError(
                f"quantity to add must be positive, got {self.quantity}"
            )


@dataclass(frozen=True)
class WarehouseStockSummary:
    """Available / reserved / total stock across one warehouse."""
    warehouse_id: str
    available_quantity: int
    reserved_quantity: int
    total_quantity: int


@dataclass(frozen=True)
class SkuStockSummary:
    """Available / reserved / total stock for one SKU across warehouses."""
    sku: int
    available_quantity: int
    reserved_quantity: int
    total_quantity: int


@dataclass(frozen=True)
class WarehouseInventoryDetail:
    """One flattened (warehouse, SKU) row for dashboards."""
    warehouse_id: str
    sku: int
    available_quantity: int
    reserved_quantity: int
    total_quantity: int
