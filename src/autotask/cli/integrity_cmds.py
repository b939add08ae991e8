"""Integrity commands: doctor."""

from __future__ import annotations

import click

from autotask.cli.helpers import (
    configure_logging,
    json_envelope,
    load_project_config,
    require_root,
)
from autotask.cli.main import cli
from autotask.core.catalog import Catalog, CatalogError
from autotask.core.config import get_catalog_path
from autotask.core.integrity import LEVELS, check_catalog
from autotask.storage.providers import FileCatalogProvider

# (check name, message shown when the check passes)
_CHECKS: tuple[tuple[str, str], ...] = (
    ("catalog_parse", "Catalog file valid"),
    ("relation_endpoint", "All relation endpoints exist"),
    ("self_relation", "No self-relations"),
    ("condition_missing", "All condition relations carry an expression"),
    ("condition_unexpected", "No stray condition expressions"),
    ("dependency_cycle", "No depends_on cycles"),
    ("prerequisites_drift", "Prerequisites match depends_on relations"),
)

_MARKS = {"error": "✗", "warning": "⚠", "info": "ℹ"}


# ---------------------------------------------------------------------------
# autotask doctor
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--json", "output_json", is_flag=True, help="Output structured JSON.")
def doctor(output_json: bool) -> None:
    """Check the catalog for integrity issues and report them.

    Exits non-zero only when an error is found; warnings and info findings
    are reported but never fail the command.
    """
    is_json = output_json
    autotask_dir = require_root(is_json)
    config = load_project_config(autotask_dir, is_json)
    configure_logging(config)
    catalog_path = get_catalog_path(autotask_dir, config)

    findings: list[dict] = []
    catalog = Catalog()
    try:
        catalog = FileCatalogProvider(catalog_path).load()
    except CatalogError as e:
        findings.append(
            {"level": "error", "check": "catalog_parse", "message": str(e), "task_id": None}
        )
    else:
        findings.extend(check_catalog(catalog))

    counts = dict.fromkeys(LEVELS, 0)
    for f in findings:
        counts[f["level"]] += 1
    errors, warnings = counts["error"], counts["warning"]

    if is_json:
        click.echo(
            json_envelope(
                True,
                data={
                    "findings": findings,
                    "summary": {
                        "tasks": len(catalog.tasks),
                        "relations": len(catalog.relations),
                        "errors": errors,
                        "warnings": warnings,
                        "info": counts["info"],
                    },
                },
            )
        )
    else:
        click.echo(
            f"Checking {len(catalog.tasks)} tasks, {len(catalog.relations)} relations..."
        )
        parsed = not any(f["check"] == "catalog_parse" for f in findings)
        for check, ok_message in _CHECKS if parsed else _CHECKS[:1]:
            matched = [f for f in findings if f["check"] == check]
            if not matched:
                click.echo(f"✓ {ok_message}")
                continue
            for f in matched:
                click.echo(f"{_MARKS[f['level']]} {f['message']}")

        total = errors + warnings
        if total == 0:
            click.echo("\nNo issues found.")
        else:
            parts = []
            if warnings:
                parts.append(f"{warnings} warning{'s' if warnings != 1 else ''}")
            if errors:
                parts.append(f"{errors} error{'s' if errors != 1 else ''}")
            click.echo(f"\n{' and '.join(parts)} found.")

    if errors > 0:
        raise SystemExit(1)
