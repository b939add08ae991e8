"""Query and display commands: list, show, related, relations."""

from __future__ import annotations

import click

from autotask.cli.helpers import (
    json_envelope,
    load_graph_or_exit,
    output_error,
    output_result,
)
from autotask.cli.main import cli
from autotask.core.relationships import TaskRelation
from autotask.core.tasks import compact_task


def _format_relation(rel: TaskRelation) -> str:
    line = f"{rel.from_id} -{rel.type.value}-> {rel.to_id}"
    if rel.condition is not None:
        line += f"  [if {rel.condition}]"
    return line


# ---------------------------------------------------------------------------
# autotask list
# ---------------------------------------------------------------------------


@cli.command("list")
@click.option("--json", "output_json", is_flag=True, help="Output structured JSON.")
@click.option("--quiet", is_flag=True, help="Print one task ID per line.")
def list_cmd(output_json: bool, quiet: bool) -> None:
    """List tasks in catalog order."""
    is_json = output_json
    graph = load_graph_or_exit(is_json)
    tasks = graph.catalog.tasks

    if is_json:
        click.echo(json_envelope(True, data=[compact_task(t) for t in tasks]))
        return
    if quiet:
        for t in tasks:
            click.echo(t.id)
        return
    if not tasks:
        click.echo("No tasks.")
        return
    for t in tasks:
        click.echo(f"{t.id}  {t.name}  ({t.image})")


# ---------------------------------------------------------------------------
# autotask show
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("task_id")
@click.option("--json", "output_json", is_flag=True, help="Output structured JSON.")
def show(task_id: str, output_json: bool) -> None:
    """Show a task and every relation touching it."""
    is_json = output_json
    graph = load_graph_or_exit(is_json)

    task = graph.get_task(task_id)
    if task is None:
        output_error(f"Task {task_id} not found.", "NOT_FOUND", is_json)
    relations = graph.get_task_relations(task_id)

    if is_json:
        data = task.to_dict()
        data["relations"] = [r.to_dict() for r in relations]
        click.echo(json_envelope(True, data=data))
        return

    click.echo(f'{task.id} "{task.name}"')
    click.echo(f"Image: {task.image or '-'}")
    if task.prerequisites:
        click.echo(f"Prerequisites: {', '.join(task.prerequisites)}")
    if task.description:
        click.echo("")
        click.echo(task.description)
    if relations:
        click.echo("")
        click.echo("Relations:")
        for rel in relations:
            click.echo(f"  {_format_relation(rel)}")
    if task.script:
        click.echo("")
        click.echo("Script:")
        for line in task.script.splitlines():
            click.echo(f"  {line}")


# ---------------------------------------------------------------------------
# autotask related
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("task_id")
@click.option("--json", "output_json", is_flag=True, help="Output structured JSON.")
@click.option("--quiet", is_flag=True, help="Print one task ID per line.")
def related(task_id: str, output_json: bool, quiet: bool) -> None:
    """Show the upstream dependency chain of a task (the task included).

    Only depends_on relations are followed.  An unknown ID is not an error;
    it is reported on its own.
    """
    is_json = output_json
    graph = load_graph_or_exit(is_json)
    order = graph.upstream_order(task_id)

    if is_json or quiet:
        output_result(
            data=order,
            human_message="",
            quiet_value="\n".join(order),
            is_json=is_json,
            is_quiet=quiet,
        )
        return

    for tid in order:
        task = graph.get_task(tid)
        name = task.name if task is not None else "(not in catalog)"
        click.echo(f"{tid}  {name}")


# ---------------------------------------------------------------------------
# autotask relations
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("task_id")
@click.option("--json", "output_json", is_flag=True, help="Output structured JSON.")
def relations(task_id: str, output_json: bool) -> None:
    """List every relation where the task is either endpoint."""
    is_json = output_json
    graph = load_graph_or_exit(is_json)
    found = graph.get_task_relations(task_id)

    if is_json:
        click.echo(json_envelope(True, data=[r.to_dict() for r in found]))
        return
    if not found:
        click.echo(f"No relations for {task_id}.")
        return
    for rel in found:
        click.echo(_format_relation(rel))
