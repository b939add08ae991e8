"""Tests for query commands: list, show, related, relations."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from autotask.cli.main import cli

# ---------------------------------------------------------------------------
# TestList
# ---------------------------------------------------------------------------


class TestList:
    def test_lists_sample_tasks(self, invoke) -> None:
        result = invoke("list")
        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert len(lines) == 12
        assert lines[0].startswith("1  Fix login page styling")

    def test_quiet(self, invoke) -> None:
        result = invoke("list", "--quiet")
        assert result.output.split() == [str(i) for i in range(1, 13)]

    def test_json(self, invoke_json) -> None:
        parsed, code = invoke_json("list")
        assert code == 0
        assert parsed["ok"] is True
        assert parsed["data"][4] == {
            "id": "5",
            "name": "Integrate payment gateway",
            "image": "node:18-alpine",
            "prerequisite_count": 2,
        }

    def test_empty_catalog(self, invoke, write_catalog) -> None:
        write_catalog({"tasks": [], "relations": []})
        result = invoke("list")
        assert result.exit_code == 0
        assert "No tasks." in result.output


# ---------------------------------------------------------------------------
# TestShow
# ---------------------------------------------------------------------------


class TestShow:
    def test_human_output(self, invoke) -> None:
        result = invoke("show", "9")
        assert result.exit_code == 0
        assert '9 "Implement file upload"' in result.output
        assert "9 -depends_on-> 8" in result.output
        assert "9 -parallel-> 8" in result.output
        assert "12 -condition-> 9  [if upload_size > 0]" in result.output

    def test_json_includes_relations(self, invoke_json) -> None:
        parsed, code = invoke_json("show", "6")
        assert code == 0
        data = parsed["data"]
        assert data["id"] == "6"
        assert data["prerequisites"] == ["5"]
        assert {"from": "6", "to": "5", "type": "condition", "condition": "exit_code == 0"} in (
            data["relations"]
        )

    def test_unknown_task(self, invoke) -> None:
        result = invoke("show", "99")
        assert result.exit_code == 1
        assert "Task 99 not found" in result.stderr

    def test_unknown_task_json(self, invoke_json) -> None:
        parsed, code = invoke_json("show", "99")
        assert code == 1
        assert parsed["ok"] is False
        assert parsed["error"]["code"] == "NOT_FOUND"


# ---------------------------------------------------------------------------
# TestRelated
# ---------------------------------------------------------------------------


class TestRelated:
    def test_discovery_order(self, invoke) -> None:
        result = invoke("related", "6", "--quiet")
        assert result.exit_code == 0
        assert result.output.split() == ["6", "5", "2", "3", "1"]

    def test_human_output_names_tasks(self, invoke) -> None:
        result = invoke("related", "12")
        assert result.exit_code == 0
        assert "12  Add data export" in result.output
        assert "9  Implement file upload" in result.output
        assert "8  Design new home page layout" in result.output

    def test_excludes_unrelated(self, invoke_json) -> None:
        parsed, _ = invoke_json("related", "6")
        assert set(parsed["data"]) == {"6", "5", "2", "1", "3"}
        assert "7" not in parsed["data"]
        assert "10" not in parsed["data"]

    def test_unknown_id_is_permissive(self, invoke_json) -> None:
        parsed, code = invoke_json("related", "ghost")
        assert code == 0
        assert parsed["data"] == ["ghost"]

    def test_unknown_id_human(self, invoke) -> None:
        result = invoke("related", "ghost")
        assert result.exit_code == 0
        assert "ghost  (not in catalog)" in result.output

    def test_cyclic_catalog_terminates(self, invoke_json, write_catalog) -> None:
        write_catalog(
            {
                "tasks": [{"id": "a"}, {"id": "b"}],
                "relations": [
                    {"from": "a", "to": "b", "type": "depends_on"},
                    {"from": "b", "to": "a", "type": "depends_on"},
                ],
            }
        )
        parsed, code = invoke_json("related", "a")
        assert code == 0
        assert parsed["data"] == ["a", "b"]


# ---------------------------------------------------------------------------
# TestRelations
# ---------------------------------------------------------------------------


class TestRelations:
    def test_json_keeps_duplicate_pairs(self, invoke_json) -> None:
        parsed, code = invoke_json("relations", "11")
        assert code == 0
        assert parsed["data"] == [
            {"from": "11", "to": "8", "type": "depends_on"},
            {"from": "11", "to": "8", "type": "parallel"},
        ]

    def test_human_output(self, invoke) -> None:
        result = invoke("relations", "5")
        assert result.output.strip().splitlines() == [
            "5 -depends_on-> 2",
            "5 -depends_on-> 3",
            "6 -depends_on-> 5",
            "6 -condition-> 5  [if exit_code == 0]",
        ]

    def test_unknown_id(self, invoke) -> None:
        result = invoke("relations", "ghost")
        assert result.exit_code == 0
        assert "No relations for ghost." in result.output

    def test_unknown_id_json_is_empty_list(self, invoke_json) -> None:
        parsed, code = invoke_json("relations", "ghost")
        assert code == 0
        assert parsed["data"] == []


# ---------------------------------------------------------------------------
# Project and catalog errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_not_initialized(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(cli, ["list"], env={"AUTOTASK_ROOT": str(tmp_path)})
        assert result.exit_code == 1
        assert "no .autotask/" in result.stderr

    def test_invalid_catalog(self, invoke_json, write_catalog) -> None:
        write_catalog({"tasks": [{"id": "1"}, {"id": "1"}]})
        parsed, code = invoke_json("list")
        assert code == 1
        assert parsed["error"]["code"] == "INVALID_CATALOG"
        assert "Duplicate task id" in parsed["error"]["message"]

    def test_catalog_not_utf8(self, invoke, initialized_root: Path) -> None:
        (initialized_root / ".autotask" / "catalog.json").write_bytes(
            b'{"tasks": [{"id": "\xff"}]}'
        )
        result = invoke("related", "6")
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Error: Cannot read catalog" in result.stderr

    def test_catalog_not_utf8_json(self, invoke_json, initialized_root: Path) -> None:
        (initialized_root / ".autotask" / "catalog.json").write_bytes(b"\xff\xfe")
        parsed, code = invoke_json("related", "6")
        assert code == 1
        assert parsed["error"]["code"] == "INVALID_CATALOG"

    def test_invalid_config(self, invoke, initialized_root: Path) -> None:
        (initialized_root / ".autotask" / "config.json").write_text("[]")
        result = invoke("list")
        assert result.exit_code == 1
        assert "config.json" in result.stderr

    @pytest.mark.parametrize("catalog", [5, "", None, ["catalog.json"]])
    def test_config_catalog_must_be_path(
        self, invoke_json, initialized_root: Path, catalog: object
    ) -> None:
        (initialized_root / ".autotask" / "config.json").write_text(
            json.dumps({"catalog": catalog})
        )
        parsed, code = invoke_json("related", "6")
        assert code == 1
        assert parsed["error"]["code"] == "INVALID_CONFIG"
        assert "catalog" in parsed["error"]["message"]

    def test_yaml_catalog_from_config(self, invoke, initialized_root: Path) -> None:
        autotask_dir = initialized_root / ".autotask"
        (autotask_dir / "tasks.yaml").write_text(
            "tasks:\n  build:\n    name: Build\n    run: make\n"
        )
        (autotask_dir / "config.json").write_text('{"catalog": "tasks.yaml"}')
        result = invoke("list", "--quiet")
        assert result.exit_code == 0
        assert result.output.split() == ["build"]

    def test_verbose_flag_accepted(self, invoke) -> None:
        result = invoke("--verbose", "related", "1", "--quiet")
        assert result.exit_code == 0
        assert "1" in result.stdout.split()


class TestLogging:
    def test_verbose_logs_each_invocation(self, invoke) -> None:
        for _ in range(2):
            result = invoke("--verbose", "related", "6", "--quiet")
            assert result.exit_code == 0
            assert "INFO: Loaded catalog" in result.stderr
            assert "DEBUG: " in result.stderr
            assert "Loaded catalog" not in result.stdout

    def test_handler_detached_after_command(self, invoke) -> None:
        logger = logging.getLogger("autotask")
        before = list(logger.handlers)
        invoke("--verbose", "list")
        assert logger.handlers == before

    def test_config_log_level(self, invoke, initialized_root: Path) -> None:
        (initialized_root / ".autotask" / "config.json").write_text('{"log_level": "info"}')
        result = invoke("related", "6")
        assert "INFO: Loaded catalog" in result.stderr
        assert "DEBUG: " not in result.stderr

    def test_quiet_by_default(self, invoke) -> None:
        result = invoke("related", "6")
        assert result.stderr == ""
