"""CLI entry point and commands."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from autotask import __version__
from autotask.core.catalog import Catalog
from autotask.core.config import default_config, serialize_config
from autotask.sample import SAMPLE_RELATIONS, SAMPLE_TASKS
from autotask.storage.fs import AUTOTASK_DIR, atomic_write, ensure_autotask_dir
from autotask.storage.providers import save_catalog

LOG_FORMAT = "%(levelname)s: %(message)s"


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging on stderr.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """autotask: task catalog and dependency graph queries."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    # Bound to this invocation's stderr and detached when the command ends.
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger = logging.getLogger("autotask")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    ctx.call_on_close(lambda: logger.removeHandler(handler))


@cli.command()
@click.option(
    "--path",
    "target_path",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    default=".",
    help="Directory to initialize autotask in (defaults to current directory).",
)
@click.option(
    "--sample/--empty",
    default=True,
    help="Seed the catalog with the sample tasks (default) or start empty.",
)
def init(target_path: str, sample: bool) -> None:
    """Initialize a new autotask project."""
    root = Path(target_path)
    autotask_dir = root / AUTOTASK_DIR

    # Idempotency: if .autotask/ already exists as a directory, skip
    if autotask_dir.is_dir():
        click.echo(f"autotask already initialized in {AUTOTASK_DIR}/")
        return

    if autotask_dir.exists():
        raise click.ClickException(
            f"Cannot initialize: '{AUTOTASK_DIR}' exists but is not a directory. "
            "Remove it and try again."
        )

    config = default_config()
    catalog = Catalog(tasks=SAMPLE_TASKS, relations=SAMPLE_RELATIONS) if sample else Catalog()

    try:
        ensure_autotask_dir(root)
        atomic_write(autotask_dir / "config.json", serialize_config(config))
        save_catalog(autotask_dir / config["catalog"], catalog)
    except PermissionError:
        raise click.ClickException(f"Permission denied: cannot create {AUTOTASK_DIR}/ in {root}")
    except OSError as e:
        raise click.ClickException(f"Failed to initialize autotask: {e}")

    click.echo(f"autotask initialized in {AUTOTASK_DIR}/")
    click.echo(f"Catalog: {len(catalog.tasks)} tasks, {len(catalog.relations)} relations")


@cli.command()
def version() -> None:
    """Show version information."""
    click.echo(__version__)


# ---------------------------------------------------------------------------
# Register command modules (must be after cli group is defined)
# ---------------------------------------------------------------------------
from autotask.cli import query_cmds as _query_cmds  # noqa: E402, F401
from autotask.cli import integrity_cmds as _integrity_cmds  # noqa: E402, F401

if __name__ == "__main__":
    cli()
