"""
scm_config -- single public entrypoint for service configuration.

Responsibility:
    Provides the runtime configuration through ``get_active_config()``:
    database connection settings, log level and the inventory section.
    YAML loading is internal tooling.

Architecture position:
    Configuration.  Sits beside ``scm_kernel`` and below ``scm_modules``.
    The kernel never imports from ``scm_config``; callers hand the parsed
    values to ``init_engine_from_url`` and ``InventoryConfig.from_dict``.

Resolution order:
    1. ``config_path`` argument
    2. ``SCM_CONFIG_PATH`` environment variable
    3. built-in defaults (in-memory SQLite)
    ``DATABASE_URL``, when set, overrides ``database.url`` in every case.

Failure modes:
    - ``FileNotFoundError`` -- the configured path does not exist.
    - ``ValueError`` -- unknown keys or invalid values.
"""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path

from scm_config.loader import load_yaml_file, parse_service_config
from scm_config.schema import DatabaseConfig, ServiceConfig
from scm_kernel.logging_config import get_logger

logger = get_logger("config")

CONFIG_PATH_ENV = "SCM_CONFIG_PATH"
DATABASE_URL_ENV = "DATABASE_URL"


def get_active_config(config_path: Path | str | None = None) -> ServiceConfig:
    """The public configuration entrypoint.

    Args:
        config_path: YAML file to load.  Falls back to ``SCM_CONFIG_PATH``,
            then to built-in defaults.

    Returns:
        ServiceConfig with any ``DATABASE_URL`` override applied.
    """
    path = config_path or os.environ.get(CONFIG_PATH_ENV)
    if path:
        config = parse_service_config(load_yaml_file(Path(path)), source=str(path))
    else:
        config = parse_service_config({})

    url_override = os.environ.get(DATABASE_URL_ENV)
    if url_override:
        config = dataclasses.replace(
            config,
            database=dataclasses.replace(config.database, url=url_override),
        )

    logger.info(
        "service_config_loaded",
        extra={
            "source": config.source,
            "checksum": config.checksum,
            "database_url_overridden": bool(url_override),
            "log_level": config.log_level,
        },
    )
    return config


__all__ = [
    "DatabaseConfig",
    "ServiceConfig",
    "get_active_config",
]
