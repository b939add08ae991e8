"""Default config generation and validation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TypedDict

DEFAULT_CATALOG_FILE = "catalog.json"

VALID_LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR")


class AutotaskConfig(TypedDict, total=False):
    schema_version: int
    catalog: str
    log_level: str


def default_config() -> AutotaskConfig:
    """Return the default configuration.

    The returned dict, when serialized with
    ``json.dumps(data, sort_keys=True, indent=2) + "\\n"``,
    produces the canonical default config.json.
    """
    return {
        "schema_version": 1,
        "catalog": DEFAULT_CATALOG_FILE,
        "log_level": "WARNING",
    }


def serialize_config(config: AutotaskConfig | dict[str, object]) -> str:
    """Serialize a config dict to the canonical JSON format."""
    return json.dumps(config, sort_keys=True, indent=2) + "\n"


def load_config(raw: str) -> dict:
    """Parse a JSON config string and return the config dict.

    This is a pure function (no I/O).  The CLI layer reads the file
    and passes the raw string here.
    """
    config = json.loads(raw)
    if not isinstance(config, dict):
        raise ValueError("config.json must contain a JSON object")
    if "catalog" in config:
        catalog = config["catalog"]
        if not isinstance(catalog, str) or not catalog:
            raise ValueError("'catalog' must be a non-empty path string")
    return config


def validate_log_level(level: object) -> bool:
    """Return ``True`` if *level* is one of :data:`VALID_LOG_LEVELS`."""
    return isinstance(level, str) and level.upper() in VALID_LOG_LEVELS


def get_log_level(config: dict) -> str:
    """Return the configured log level, falling back to ``WARNING``."""
    level = config.get("log_level", "WARNING")
    return level.upper() if validate_log_level(level) else "WARNING"


def get_catalog_path(autotask_dir: Path, config: dict) -> Path:
    """Resolve the catalog file path.  Relative paths are taken from *autotask_dir*."""
    catalog = Path(config.get("catalog", DEFAULT_CATALOG_FILE))
    if catalog.is_absolute():
        return catalog
    return autotask_dir / catalog
