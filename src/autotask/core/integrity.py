"""Catalog integrity checks (pure, no I/O).

Findings are plain dicts ``{"level", "check", "message", "task_id"}`` with
level ``error``, ``warning`` or ``info``.  None of these checks gate the
graph queries, which are total over any catalog.
"""

from __future__ import annotations

from autotask.core.catalog import Catalog
from autotask.core.graph import get_related_task_ids
from autotask.core.relationships import RelationType

LEVELS: tuple[str, ...] = ("error", "warning", "info")


def _finding(level: str, check: str, message: str, task_id: str | None = None) -> dict:
    return {"level": level, "check": check, "message": message, "task_id": task_id}


def _check_relations(catalog: Catalog) -> list[dict]:
    findings: list[dict] = []
    known = set(catalog.task_ids)

    for index, rel in enumerate(catalog.relations):
        label = f"relations[{index}] {rel.from_id} -{rel.type.value}-> {rel.to_id}"
        for endpoint in (rel.from_id, rel.to_id):
            if endpoint not in known:
                findings.append(
                    _finding(
                        "warning",
                        "relation_endpoint",
                        f"{label}: task {endpoint} is not in the catalog",
                        endpoint,
                    )
                )
        if rel.from_id == rel.to_id:
            findings.append(
                _finding("warning", "self_relation", f"{label}: relation to itself", rel.from_id)
            )
        if rel.type is RelationType.CONDITION and not rel.condition:
            findings.append(
                _finding(
                    "warning",
                    "condition_missing",
                    f"{label}: condition relation has no expression",
                    rel.from_id,
                )
            )
        elif rel.type is not RelationType.CONDITION and rel.condition is not None:
            findings.append(
                _finding(
                    "warning",
                    "condition_unexpected",
                    f"{label}: expression is ignored on a {rel.type.value} relation",
                    rel.from_id,
                )
            )
    return findings


def find_cycle_members(catalog: Catalog) -> list[str]:
    """Return ids lying on a ``depends_on`` cycle, in first-seen order.

    A task is on a cycle when it is upstream of one of its own direct
    prerequisites.
    """
    edges: dict[str, list[str]] = {}
    for rel in catalog.relations:
        if rel.type is RelationType.DEPENDS_ON:
            edges.setdefault(rel.from_id, []).append(rel.to_id)

    members: list[str] = []
    for task_id, targets in edges.items():
        for target in targets:
            if task_id in get_related_task_ids(catalog.relations, target):
                members.append(task_id)
                break
    return members


def _check_prerequisites(catalog: Catalog) -> list[dict]:
    findings: list[dict] = []
    for task in catalog.tasks:
        declared = set(task.prerequisites)
        graph = {
            r.to_id
            for r in catalog.relations
            if r.from_id == task.id and r.type is RelationType.DEPENDS_ON
        }
        if declared == graph:
            continue
        parts: list[str] = []
        missing = sorted(declared - graph)
        extra = sorted(graph - declared)
        if missing:
            parts.append(f"no depends_on relation for {', '.join(missing)}")
        if extra:
            parts.append(f"not listed in prerequisites: {', '.join(extra)}")
        findings.append(
            _finding(
                "info",
                "prerequisites_drift",
                f"Task {task.id}: " + "; ".join(parts),
                task.id,
            )
        )
    return findings


def check_catalog(catalog: Catalog) -> list[dict]:
    """Run every integrity check and return the findings."""
    findings = _check_relations(catalog)
    for task_id in find_cycle_members(catalog):
        findings.append(
            _finding(
                "warning",
                "dependency_cycle",
                f"Task {task_id} is part of a depends_on cycle",
                task_id,
            )
        )
    findings.extend(_check_prerequisites(catalog))
    return findings
