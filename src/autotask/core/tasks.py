"""Task records and their serialization."""

from __future__ import annotations

from dataclasses import dataclass, field


class TaskError(ValueError):
    """Raised when a task record is malformed."""


@dataclass(frozen=True)
class Task:
    """A described unit of work, used as a node of the relation graph.

    ``image`` and ``script`` are opaque.  ``prerequisites`` is author-facing
    metadata; graph queries only ever follow relation records.
    """

    id: str
    name: str = ""
    description: str = ""
    image: str = ""
    prerequisites: tuple[str, ...] = field(default_factory=tuple)
    script: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "image": self.image,
            "prerequisites": list(self.prerequisites),
            "script": self.script,
        }

    @classmethod
    def from_dict(cls, data: dict, *, task_id: str | None = None) -> Task:
        """Build a task from its dict form.

        *task_id* overrides (or supplies) the ``id`` field; it is used when
        tasks are keyed by id in a mapping.

        Raises:
            TaskError: If the id is missing or a field has the wrong type.
        """
        if not isinstance(data, dict):
            raise TaskError(f"Task must be a mapping, got {type(data).__name__}")

        tid = task_id if task_id is not None else data.get("id")
        if not isinstance(tid, str) or not tid:
            raise TaskError("Task field 'id' must be a non-empty string")

        # YAML task files spell the script key ``run``.
        script = data.get("script", data.get("run", ""))
        values = {
            "name": data.get("name", ""),
            "description": data.get("description", ""),
            "image": data.get("image", ""),
            "script": script if script is not None else "",
        }
        for key, value in values.items():
            if not isinstance(value, str):
                raise TaskError(f"Task {tid}: field '{key}' must be a string")

        prerequisites = data.get("prerequisites") or []
        if not isinstance(prerequisites, list) or not all(
            isinstance(p, str) for p in prerequisites
        ):
            raise TaskError(f"Task {tid}: 'prerequisites' must be a list of task ids")

        return cls(id=tid, prerequisites=tuple(prerequisites), **values)


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------


def compact_task(task: Task) -> dict:
    """Return a compact view suitable for list output."""
    return {
        "id": task.id,
        "name": task.name,
        "image": task.image,
        "prerequisite_count": len(task.prerequisites),
    }
