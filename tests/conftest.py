"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture()
def autotask_root(tmp_path: Path) -> Path:
    """Return a temporary directory suitable for initializing .autotask/ in."""
    return tmp_path


@pytest.fixture()
def initialized_root(autotask_root: Path) -> Path:
    """Return a temporary directory with .autotask/ holding the sample catalog."""
    from autotask.core.catalog import Catalog
    from autotask.core.config import default_config, serialize_config
    from autotask.sample import SAMPLE_RELATIONS, SAMPLE_TASKS
    from autotask.storage.fs import AUTOTASK_DIR, atomic_write, ensure_autotask_dir
    from autotask.storage.providers import save_catalog

    ensure_autotask_dir(autotask_root)
    autotask_dir = autotask_root / AUTOTASK_DIR
    atomic_write(autotask_dir / "config.json", serialize_config(default_config()))
    save_catalog(
        autotask_dir / "catalog.json",
        Catalog(tasks=SAMPLE_TASKS, relations=SAMPLE_RELATIONS),
    )
    return autotask_root


@pytest.fixture()
def write_catalog(initialized_root: Path):
    """Overwrite the project's catalog.json with raw dict content.

    Usage::

        write_catalog({"tasks": [...], "relations": [...]})
    """

    def _write(data: object) -> Path:
        path = initialized_root / ".autotask" / "catalog.json"
        path.write_text(json.dumps(data))
        return path

    return _write


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Return a Click CliRunner for invoking CLI commands."""
    return CliRunner()


@pytest.fixture()
def cli_env(initialized_root: Path) -> dict[str, str]:
    """Return env dict with AUTOTASK_ROOT pointing to initialized_root."""
    return {"AUTOTASK_ROOT": str(initialized_root)}


@pytest.fixture()
def invoke(cli_runner: CliRunner, cli_env: dict[str, str]):
    """Return a helper that invokes CLI commands with the right environment.

    Usage::

        result = invoke("related", "6")
    """
    from autotask.cli.main import cli

    def _invoke(*args: str, **kwargs):
        return cli_runner.invoke(cli, list(args), env=cli_env, **kwargs)

    return _invoke


@pytest.fixture()
def invoke_json(invoke):
    """Like invoke, but appends --json and parses the response.

    Returns (parsed_dict, exit_code) tuple.
    """

    def _invoke_json(*args: str) -> tuple[dict, int]:
        result = invoke(*args, "--json")
        parsed = json.loads(result.stdout)
        return parsed, result.exit_code

    return _invoke_json
