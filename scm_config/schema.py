"""
Service configuration schema.

Frozen dataclasses the loader parses YAML into.  ``ServiceConfig`` is the
single runtime artifact handed out by ``scm_config.get_active_config()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class DatabaseConfig:
    """Connection settings forwarded to ``init_engine_from_url``."""

    url: str = "sqlite://"
    echo: bool = False
    pool_size: int = 20
    max_overflow: int = 10
    pool_pre_ping: bool = True
    pool_timeout: int = 30
    pool_recycle: int = 1800

    def __post_init__(self):
        if not self.url:
            raise ValueError("database url cannot be empty")
        if self.pool_size <= 0:
            raise ValueError("pool_size must be positive")
        if self.max_overflow < 0:
            raise ValueError("max_overflow cannot be negative")

    def engine_kwargs(self) -> dict[str, Any]:
        return {
            "echo": self.echo,
            "pool_size": self.pool_size,
            "max_overflow": self.max_overflow,
            "pool_pre_ping": self.pool_pre_ping,
            "pool_timeout": self.pool_timeout,
            "pool_recycle": self.pool_recycle,
        }


@dataclass(frozen=True)
class ServiceConfig:
    """Runtime configuration of the fulfillment service."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    log_level: str = "INFO"
    # Keyword arguments for scm_modules.inventory.config.InventoryConfig.
    inventory: dict[str, Any] = field(default_factory=dict)
    source: str | None = None
    checksum: str = ""

    def __post_init__(self):
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(VALID_LOG_LEVELS)}, got '{self.log_level}'"
            )
