"""Hypothesis property-based tests for the graph queries."""

from __future__ import annotations

from hypothesis import given, settings, strategies as st

from autotask.core.graph import get_related_task_ids, get_task_relations, upstream_order
from autotask.core.relationships import RelationType, TaskRelation

# ---------------------------------------------------------------------------
# Reusable strategies
# ---------------------------------------------------------------------------

# A small id alphabet makes cycles and shared pairs likely.
task_ids = st.sampled_from([str(i) for i in range(8)])
relation_types = st.sampled_from(list(RelationType))

relations_strategy = st.lists(
    st.builds(
        TaskRelation,
        from_id=task_ids,
        to_id=task_ids,
        type=relation_types,
        condition=st.one_of(st.none(), st.just("x > 0")),
    ),
    max_size=40,
)


def _reachable(relations: list[TaskRelation], start: str) -> set[str]:
    """Reference closure: iterate to a fixed point over depends_on edges."""
    result = {start}
    changed = True
    while changed:
        changed = False
        for rel in relations:
            if (
                rel.type is RelationType.DEPENDS_ON
                and rel.from_id in result
                and rel.to_id not in result
            ):
                result.add(rel.to_id)
                changed = True
    return result


class TestClosureProperties:
    @given(relations=relations_strategy, start=task_ids)
    @settings(max_examples=200)
    def test_matches_fixed_point(self, relations: list[TaskRelation], start: str) -> None:
        assert get_related_task_ids(relations, start) == _reachable(relations, start)

    @given(relations=relations_strategy, start=task_ids)
    def test_start_always_included(self, relations: list[TaskRelation], start: str) -> None:
        assert start in get_related_task_ids(relations, start)

    @given(relations=relations_strategy, start=task_ids)
    def test_idempotent(self, relations: list[TaskRelation], start: str) -> None:
        assert get_related_task_ids(relations, start) == get_related_task_ids(relations, start)

    @given(relations=relations_strategy, start=task_ids)
    def test_closed_under_depends_on(self, relations: list[TaskRelation], start: str) -> None:
        result = get_related_task_ids(relations, start)
        for rel in relations:
            if rel.type is RelationType.DEPENDS_ON and rel.from_id in result:
                assert rel.to_id in result

    @given(relations=relations_strategy, start=task_ids)
    def test_non_depends_on_edges_irrelevant(
        self, relations: list[TaskRelation], start: str
    ) -> None:
        only_deps = [r for r in relations if r.type is RelationType.DEPENDS_ON]
        assert get_related_task_ids(relations, start) == get_related_task_ids(only_deps, start)

    @given(relations=relations_strategy, start=task_ids)
    def test_order_has_no_duplicates(self, relations: list[TaskRelation], start: str) -> None:
        order = upstream_order(relations, start)
        assert order[0] == start
        assert len(order) == len(set(order))


class TestRelationLookupProperties:
    @given(relations=relations_strategy, task_id=task_ids)
    def test_exactly_touching_records(self, relations: list[TaskRelation], task_id: str) -> None:
        found = get_task_relations(relations, task_id)
        expected = [r for r in relations if r.from_id == task_id or r.to_id == task_id]
        assert found == expected

    @given(relations=relations_strategy)
    def test_unknown_id_empty(self, relations: list[TaskRelation]) -> None:
        assert get_task_relations(relations, "not-an-id") == []
