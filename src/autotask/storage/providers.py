"""Catalog providers: where a task catalog comes from.

Any object with a ``load() -> Catalog`` method can back a
:class:`~autotask.core.graph.TaskGraph`.  Each call to ``load()`` returns a
complete, independent catalog.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

import yaml

from autotask.core.catalog import Catalog, CatalogError, parse_catalog, serialize_catalog
from autotask.core.relationships import TaskRelation
from autotask.core.tasks import Task
from autotask.storage.fs import atomic_write

logger = logging.getLogger(__name__)

YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class CatalogProvider(Protocol):
    def load(self) -> Catalog: ...


class StaticCatalogProvider:
    """Serve a fixed, in-memory catalog."""

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        relations: Iterable[TaskRelation] = (),
    ) -> None:
        self._catalog = Catalog(tasks=tuple(tasks), relations=tuple(relations))

    def load(self) -> Catalog:
        return self._catalog


class FileCatalogProvider:
    """Load a catalog from a JSON or YAML file.

    The format is chosen by suffix: ``.yaml``/``.yml`` use ``yaml.safe_load``,
    anything else is read as JSON.  The file is re-read on every ``load()``.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _decode(self, raw: str) -> object:
        if self.path.suffix.lower() in YAML_SUFFIXES:
            return yaml.safe_load(raw)
        return json.loads(raw)

    def load(self) -> Catalog:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CatalogError(f"Cannot read catalog {self.path}: {e}") from e

        try:
            data = self._decode(raw)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise CatalogError(f"Invalid catalog file {self.path}: {e}") from e

        catalog = parse_catalog(data)
        logger.info(
            "Loaded catalog %s: %d tasks, %d relations",
            self.path,
            len(catalog.tasks),
            len(catalog.relations),
        )
        if not catalog.tasks:
            logger.warning("Catalog %s has no tasks", self.path)
        return catalog


def sample_provider() -> StaticCatalogProvider:
    """Return a provider serving the bundled sample catalog."""
    from autotask.sample import SAMPLE_RELATIONS, SAMPLE_TASKS

    return StaticCatalogProvider(SAMPLE_TASKS, SAMPLE_RELATIONS)


def save_catalog(path: Path, catalog: Catalog) -> None:
    """Write *catalog* to *path* as canonical JSON, atomically."""
    atomic_write(path, serialize_catalog(catalog))
