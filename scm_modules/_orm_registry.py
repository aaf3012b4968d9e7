"""
Module ORM Registry (``scm_modules._orm_registry``).

Responsibility
--------------
Ensure all module-level SQLAlchemy ORM models are imported so that
``Base.metadata`` contains their table definitions before
``scm_kernel.db.engine.create_tables()`` runs ``create_all()``.

Architecture position
---------------------
**Modules layer** -- utility.  Imported lazily by the kernel engine module
so the kernel never imports module packages at import time.
"""


def import_all_orm_models() -> None:
    """Import every ``scm_modules.*.orm`` module to register ORM models.

    Inventory first: order lines reference SKUs held in inventory tables.
    This function is idempotent -- repeated calls are harmless.
    """
    # fmt: off
    import scm_modules.inventory.orm  # noqa: F401
    import scm_modules.ordering.orm  # noqa: F401
    # fmt: on
