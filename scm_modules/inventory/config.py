"""
Inventory Configuration Schema.

Defines the structure and defaults for stock allocation settings.
Actual values are loaded from the service configuration at runtime
(see ``scm_config``).
"""

from dataclasses import dataclass
from typing import Self

from scm_kernel.logging_config import get_logger

logger = get_logger("modules.inventory.config")


ZIPCODE_LOWER_BOUND = 100000
ZIPCODE_UPPER_BOUND = 999999


@dataclass
class InventoryConfig:
    """
    Configuration schema for the inventory module.

    Override at instantiation with deployment-specific values:

        config = InventoryConfig(
            near_delivery_days=1,
            **service_config.inventory,
        )
    """

    # Delivery estimation (days added to today)
    near_delivery_days: int = 2  # customer's own warehouse has stock
    fallback_delivery_days: int = 5  # only another warehouse has stock

    # Serviceable ZIP codes
    zipcode_min: int = ZIPCODE_LOWER_BOUND
    zipcode_max: int = ZIPCODE_UPPER_BOUND

    # Concurrency
    lock_rows: bool = True  # SELECT ... FOR UPDATE on rows about to change

    def __post_init__(self):
        if self.near_delivery_days < 0:
            raise ValueError("near_delivery_days cannot be negative")
        if self.fallback_delivery_days < self.near_delivery_days:
            raise ValueError(
                f"fallback_delivery_days ({self.fallback_delivery_days}) cannot be "
                f"shorter than near_delivery_days ({self.near_delivery_days})"
            )

        if self.zipcode_min < ZIPCODE_LOWER_BOUND or self.zipcode_max > ZIPCODE_UPPER_BOUND:
            raise ValueError(
                f"zipcode bounds must lie within {ZIPCODE_LOWER_BOUND}-{ZIPCODE_UPPER_BOUND}"
            )
        if self.zipcode_min > self.zipcode_max:
            raise ValueError(
                f"zipcode_min ({self.zipcode_min}) cannot exceed "
                f"zipcode_max ({self.zipcode_max})"
            )

        logger.info(
            "inventory_config_initialized",
            extra={
                "near_delivery_days": self.near_delivery_days,
                "fallback_delivery_days": self.fallback_delivery_days,
                "zipcode_min": self.zipcode_min,
                "zipcode_max": self.zipcode_max,
                "lock_rows": self.lock_rows,
            },
        )

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with the standard delivery windows."""
        logger.info("inventory_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create config from dictionary (e.g., loaded from a YAML file)."""
        logger.info(
            "inventory_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(**data)
