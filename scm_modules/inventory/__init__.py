"""
Inventory Module (``scm_modules.inventory``).

Responsibility
--------------
Multi-warehouse stock tracking and allocation: ZIP-based warehouse
location, stock reservation across warehouses, reversal on cancellation,
confirmation of held stock, delivery estimation, stock administration and
read-only reporting.

Architecture
------------
Layer: **Modules**.  Engines (``reservation``, ``reversal``,
``confirmation``, ``delivery``, ``stock``) depend only on the store
protocols in ``store``; ``service.InventoryService`` wires them to a
SQLAlchemy session and owns the transaction boundary.

Invariants
----------
- Each service method owns its transaction boundary (commit / rollback).
- Engines flush every record mutation individually and never commit.
- Available, on-hold and on-order counters never go negative.

Failure Modes
-------------
- ``WarehouseNotFoundError`` when no warehouse serves a ZIP.
- ``InventoryNotFoundError`` when a SKU has no usable stock anywhere.
- Any exception triggers a session rollback before re-raising.
"""

from scm_modules.inventory.models import (
    DemandLine,
    InventoryRecordInfo,
    ReservationOutcome,
    ReservationStatus,
    SkuReservation,
    SkuStockSummary,
    StockReplenishment,
    WarehouseInfo,
    WarehouseInventoryDetail,
    WarehouseStockSummary,
)
from scm_modules.inventory.config import InventoryConfig
from scm_modules.inventory.service import InventoryService

__all__ = [
    "DemandLine",
    "InventoryRecordInfo",
    "ReservationOutcome",
    "ReservationStatus",
    "SkuReservation",
    "SkuStockSummary",
    "StockReplenishment",
    "WarehouseInfo",
    "WarehouseInventoryDetail",
    "WarehouseStockSummary",
    "InventoryConfig",
    "InventoryService",
]
