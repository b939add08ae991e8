"""Graph queries over the relation set: upstream closure and relation lookup.

The two query functions are pure -- they take the relation sequence as an
argument, never mutate it, and return freshly built results.  ``TaskGraph``
is a thin facade that binds them to a catalog loaded from a provider.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from typing import TYPE_CHECKING

from autotask.core.relationships import RelationType, TaskRelation

if TYPE_CHECKING:
    from autotask.core.catalog import Catalog
    from autotask.core.tasks import Task
    from autotask.storage.providers import CatalogProvider

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Relation lookup
# ---------------------------------------------------------------------------


def get_task_relations(relations: Iterable[TaskRelation], task_id: str) -> list[TaskRelation]:
    """Return every relation where *task_id* is ``from`` or ``to``.

    Insertion order is preserved and records sharing a task pair are all
    returned.  An unknown id yields an empty list.
    """
    return [r for r in relations if r.touches(task_id)]


# ---------------------------------------------------------------------------
# Upstream closure
# ---------------------------------------------------------------------------


def upstream_order(relations: Iterable[TaskRelation], task_id: str) -> list[str]:
    """Return the upstream closure of *task_id* in discovery order.

    Breadth-first walk along ``depends_on`` edges in the ``from -> to``
    direction.  The first element is always *task_id*; every other id appears
    once, in the order it was first reached.  Each id is expanded at most
    once, so cycles terminate.
    """
    edges = [r for r in relations if r.type is RelationType.DEPENDS_ON]

    order: list[str] = [task_id]
    related: set[str] = {task_id}
    visited: set[str] = set()
    queue: deque[str] = deque([task_id])

    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)

        for rel in edges:
            if rel.from_id != current:
                continue
            if rel.to_id not in related:
                related.add(rel.to_id)
                order.append(rel.to_id)
                queue.append(rel.to_id)

    logger.debug("upstream closure of %s: %s", task_id, order)
    return order


def get_related_task_ids(relations: Iterable[TaskRelation], task_id: str) -> set[str]:
    """Return the set of task ids *task_id* transitively depends on, plus itself.

    Only ``depends_on`` edges are followed; ``parallel`` and ``condition``
    edges never widen the result.  The starting id is not checked against any
    catalog -- an unknown id simply yields ``{task_id}``.
    """
    return set(upstream_order(relations, task_id))


# ---------------------------------------------------------------------------
# Facade
# ---------------------------------------------------------------------------


class TaskGraph:
    """Query facade over a catalog obtained from a provider.

    The current catalog is held by a single reference.  ``reload()`` builds a
    complete new catalog before swapping it in, so a query never observes a
    half-updated graph.
    """

    def __init__(self, provider: CatalogProvider) -> None:
        self._provider = provider
        self._catalog: Catalog = provider.load()

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def reload(self) -> Catalog:
        """Load a fresh catalog from the provider and swap it in."""
        catalog = self._provider.load()
        self._catalog = catalog
        logger.info(
            "Catalog reloaded: %d tasks, %d relations",
            len(catalog.tasks),
            len(catalog.relations),
        )
        return catalog

    def get_task(self, task_id: str) -> Task | None:
        return self._catalog.get_task(task_id)

    def get_task_relations(self, task_id: str) -> list[TaskRelation]:
        return get_task_relations(self._catalog.relations, task_id)

    def get_related_task_ids(self, task_id: str) -> set[str]:
        return get_related_task_ids(self._catalog.relations, task_id)

    def upstream_order(self, task_id: str) -> list[str]:
        return upstream_order(self._catalog.relations, task_id)

    def related_tasks(self, task_id: str) -> list[Task]:
        """Return the task records of the upstream closure, in catalog order.

        Ids in the closure that have no catalog entry are skipped.
        """
        catalog = self._catalog
        related = get_related_task_ids(catalog.relations, task_id)
        return [t for t in catalog.tasks if t.id in related]
