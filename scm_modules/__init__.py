"""
Supply-chain modules.

Orchestration layers over the supply-chain kernel.  Each module contains:
- Domain models (frozen DTOs)
- ORM persistence models
- Engines / services
- Configuration schemas

Modules:
- Inventory: warehouses, stock records, reservation, reversal, reporting
- Ordering: order lifecycle driving the inventory engines
"""
