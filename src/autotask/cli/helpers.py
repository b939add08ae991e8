"""Shared CLI helpers and output utilities."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import NoReturn

import click

from autotask.core.catalog import CatalogError
from autotask.core.config import get_catalog_path, get_log_level, load_config
from autotask.core.graph import TaskGraph
from autotask.storage.fs import AUTOTASK_DIR, AutotaskRootError, find_root
from autotask.storage.providers import FileCatalogProvider

# ---------------------------------------------------------------------------
# Root & config
# ---------------------------------------------------------------------------


def require_root(is_json: bool = False) -> Path:
    """Find .autotask/ directory or exit with error."""
    try:
        root = find_root()
    except AutotaskRootError as e:
        output_error(str(e), "NOT_INITIALIZED", is_json)
    if root is None:
        output_error(
            "Not an autotask project (no .autotask/ found). Run 'autotask init' first.",
            "NOT_INITIALIZED",
            is_json,
        )
    return root / AUTOTASK_DIR


def load_project_config(autotask_dir: Path, is_json: bool = False) -> dict:
    """Load and return config.json from the autotask directory."""
    try:
        return load_config((autotask_dir / "config.json").read_text())
    except (OSError, ValueError) as e:
        output_error(f"Cannot load config.json: {e}", "INVALID_CONFIG", is_json)


def configure_logging(config: dict) -> None:
    """Apply the configured log level unless --verbose already chose one."""
    ctx = click.get_current_context(silent=True)
    obj = (ctx.find_root().obj if ctx is not None else None) or {}
    verbose = bool(obj.get("verbose"))
    level = "DEBUG" if verbose else get_log_level(config)
    logging.getLogger("autotask").setLevel(level)


def load_graph_or_exit(is_json: bool) -> TaskGraph:
    """Locate the project, load its catalog, and return a ready TaskGraph."""
    autotask_dir = require_root(is_json)
    config = load_project_config(autotask_dir, is_json)
    configure_logging(config)
    provider = FileCatalogProvider(get_catalog_path(autotask_dir, config))
    try:
        return TaskGraph(provider)
    except CatalogError as e:
        output_error(str(e), "INVALID_CATALOG", is_json)


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------


def json_envelope(ok: bool, *, data: object = None, error: object = None) -> str:
    """Build a structured JSON output envelope."""
    result: dict = {"ok": ok}
    if data is not None:
        result["data"] = data
    if error is not None:
        result["error"] = error
    return json.dumps(result, sort_keys=True, indent=2, ensure_ascii=False) + "\n"


def json_error_obj(code: str, message: str) -> dict:
    """Build an error object for the JSON envelope."""
    return {"code": code, "message": message}


def output_error(message: str, code: str, is_json: bool, exit_code: int = 1) -> NoReturn:
    """Print error and exit. JSON errors go to stdout; human errors to stderr."""
    if is_json:
        click.echo(json_envelope(False, error=json_error_obj(code, message)))
    else:
        click.echo(f"Error: {message}", err=True)
    raise SystemExit(exit_code)


def output_result(
    *,
    data: object,
    human_message: str,
    quiet_value: str,
    is_json: bool,
    is_quiet: bool,
) -> None:
    """Print success result in the appropriate format."""
    if is_json:
        click.echo(json_envelope(True, data=data))
    elif is_quiet:
        click.echo(quiet_value)
    else:
        click.echo(human_message)
