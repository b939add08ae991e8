"""Task catalog: the immutable (tasks, relations) pair queries run against."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from autotask.core.relationships import RelationError, TaskRelation
from autotask.core.tasks import Task, TaskError


class CatalogError(ValueError):
    """Raised when a catalog cannot be read or violates a catalog invariant."""


@dataclass(frozen=True)
class Catalog:
    """Ordered task records plus the ordered relation set.

    A catalog is replaced as a whole, never edited in place, so a reader
    holding a reference always sees a consistent graph.
    """

    tasks: tuple[Task, ...] = field(default_factory=tuple)
    relations: tuple[TaskRelation, ...] = field(default_factory=tuple)

    @property
    def task_ids(self) -> tuple[str, ...]:
        return tuple(t.id for t in self.tasks)

    def get_task(self, task_id: str) -> Task | None:
        """Get a task by id."""
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _parse_tasks(raw: object) -> list[Task]:
    if raw is None:
        return []

    tasks: list[Task] = []
    if isinstance(raw, dict):
        # YAML task files key tasks by id: {"build": {"name": ..., "run": ...}}
        for key, entry in raw.items():
            try:
                tasks.append(Task.from_dict(entry or {}, task_id=str(key)))
            except TaskError as e:
                raise CatalogError(f"tasks[{key!r}]: {e}") from e
    elif isinstance(raw, list):
        for index, entry in enumerate(raw):
            try:
                tasks.append(Task.from_dict(entry))
            except TaskError as e:
                raise CatalogError(f"tasks[{index}]: {e}") from e
    else:
        raise CatalogError("'tasks' must be a list or a mapping")

    seen: set[str] = set()
    for t in tasks:
        if t.id in seen:
            raise CatalogError(f"Duplicate task id: {t.id!r}")
        seen.add(t.id)
    return tasks


def _parse_relations(raw: object) -> list[TaskRelation]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise CatalogError("'relations' must be a list")

    relations: list[TaskRelation] = []
    for index, entry in enumerate(raw):
        try:
            relations.append(TaskRelation.from_dict(entry))
        except RelationError as e:
            raise CatalogError(f"relations[{index}]: {e}") from e
    return relations


def parse_catalog(data: object) -> Catalog:
    """Build a :class:`Catalog` from its decoded JSON/YAML form.

    This is a pure function (no I/O).  Record order is preserved; relation
    records are kept exactly as given, including several records for the
    same task pair.

    Raises:
        CatalogError: On a wrong top-level shape, a malformed record, or a
            duplicate task id.
    """
    if data is None:
        return Catalog()
    if not isinstance(data, dict):
        raise CatalogError(f"Catalog must be a mapping, got {type(data).__name__}")
    return Catalog(
        tasks=tuple(_parse_tasks(data.get("tasks"))),
        relations=tuple(_parse_relations(data.get("relations"))),
    )


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def catalog_to_dict(catalog: Catalog) -> dict:
    return {
        "tasks": [t.to_dict() for t in catalog.tasks],
        "relations": [r.to_dict() for r in catalog.relations],
    }


def serialize_catalog(catalog: Catalog) -> str:
    """Serialize a catalog to the canonical JSON format."""
    return json.dumps(catalog_to_dict(catalog), sort_keys=True, indent=2, ensure_ascii=False) + "\n"
