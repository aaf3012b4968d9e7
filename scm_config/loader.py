"""
Configuration Loader (``scm_config.loader``).

Responsibility
--------------
Loads a YAML configuration file and parses it into the typed
``scm_config.schema`` dataclasses.  The runtime entry point is
``scm_config.get_active_config()``; callers should not use this module
directly.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown keys in a section  -> ``ValueError``.
* Invalid values  -> ``ValueError`` from the schema ``__post_init__``.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from scm_config.schema import DatabaseConfig, ServiceConfig


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _reject_unknown(section: str, data: dict[str, Any], allowed: set[str]) -> None:
    unknown = set(data) - allowed
    if unknown:
        raise ValueError(f"Unknown keys in '{section}': {sorted(unknown)}")


def parse_database(data: dict[str, Any]) -> DatabaseConfig:
    """Parse a DatabaseConfig from the ``database`` section."""
    _reject_unknown("database", data, {f.name for f in fields(DatabaseConfig)})
    return DatabaseConfig(**data)


def parse_service_config(
    data: dict[str, Any],
    source: str | None = None,
) -> ServiceConfig:
    """
    Parse a ServiceConfig from a whole configuration document.

    Postconditions:
        - ``checksum`` identifies the parsed document content.
    """
    _reject_unknown("root", data, {"database", "log_level", "inventory"})
    return ServiceConfig(
        database=parse_database(data.get("database") or {}),
        log_level=str(data.get("log_level", "INFO")).upper(),
        inventory=dict(data.get("inventory") or {}),
        source=source,
        checksum=compute_checksum(data),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON serialization of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
