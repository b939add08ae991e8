"""Relation types, relation records, and validation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# ---------------------------------------------------------------------------
# Relation types
# ---------------------------------------------------------------------------


class RelationType(str, Enum):
    """Kind of a directed edge between two tasks.

    ``DEPENDS_ON``: ``from`` requires ``to`` to complete first.
    ``PARALLEL``: ``from`` and ``to`` may run concurrently (no ordering).
    ``CONDITION``: ``from`` continues from ``to`` only when the relation's
    condition expression holds.  The expression is never evaluated here.
    """

    DEPENDS_ON = "depends_on"
    PARALLEL = "parallel"
    CONDITION = "condition"


RELATION_TYPES: frozenset[str] = frozenset(t.value for t in RelationType)


class RelationError(ValueError):
    """Raised when a relation record is malformed."""


def validate_relation_type(rel_type: str) -> bool:
    """Return ``True`` if *rel_type* is a recognised relation type."""
    return isinstance(rel_type, str) and rel_type in RELATION_TYPES


# ---------------------------------------------------------------------------
# Relation record
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TaskRelation:
    """A typed, directed edge ``from_id -> to_id``.

    Several records may share the same ``(from_id, to_id)`` pair with
    different types; they are distinct records and are never merged.
    """

    from_id: str
    to_id: str
    type: RelationType
    condition: str | None = None

    def touches(self, task_id: str) -> bool:
        """Return ``True`` if *task_id* is either endpoint of this relation."""
        return self.from_id == task_id or self.to_id == task_id

    def to_dict(self) -> dict:
        d: dict = {
            "from": self.from_id,
            "to": self.to_id,
            "type": self.type.value,
        }
        if self.condition is not None:
            d["condition"] = self.condition
        return d

    @classmethod
    def from_dict(cls, data: dict) -> TaskRelation:
        """Build a relation from its ``{from, to, type, condition?}`` dict form.

        Raises:
            RelationError: If an endpoint is missing or not a string, the
                type is unknown, or the condition is not a string.
        """
        if not isinstance(data, dict):
            raise RelationError(f"Relation must be a mapping, got {type(data).__name__}")

        for key in ("from", "to"):
            value = data.get(key)
            if not isinstance(value, str) or not value:
                raise RelationError(f"Relation field '{key}' must be a non-empty string")

        condition = data.get("condition")
        if condition is not None and not isinstance(condition, str):
            raise RelationError("Relation field 'condition' must be a string")

        return build_relation_record(data["from"], data["to"], data.get("type"), condition)


def build_relation_record(
    from_id: str,
    to_id: str,
    rel_type: str | RelationType,
    condition: str | None = None,
) -> TaskRelation:
    """Build a :class:`TaskRelation`, validating *rel_type*.

    Raises:
        RelationError: If *rel_type* is not a recognised relation type.
    """
    if isinstance(rel_type, RelationType):
        kind = rel_type
    elif validate_relation_type(rel_type):
        kind = RelationType(rel_type)
    else:
        sorted_types = ", ".join(sorted(RELATION_TYPES))
        raise RelationError(
            f"Invalid relation type: {rel_type!r}. Valid types: {sorted_types}."
        )
    return TaskRelation(from_id=from_id, to_id=to_id, type=kind, condition=condition)
