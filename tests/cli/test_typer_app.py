"""End-to-end tests for the aniqueue CLI.

The engine factory is patched to use an in-memory catalog, so the commands
run their real handlers, storage, and output formatting without network
access.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from aniqueue.cli.typer_app import app
from aniqueue.core.matching.engine import MatchingEngine
from aniqueue.shared.constants import Application, FileSystem

runner = CliRunner()


@pytest.fixture
def catalog(make_catalog, make_record):
    return make_catalog(
        {
            "Cowboy Bebop": [make_record(1, english="Cowboy Bebop", season_year=1998)],
            "Monster": [
                make_record(2, english="Monster", season_year=2004),
                make_record(3, english="Monster", season_year=2024),
            ],
        }
    )


@pytest.fixture
def patched_engine(mocker, catalog):
    return mocker.patch(
        "aniqueue.cli.match_handler.build_engine",
        side_effect=lambda settings, session=None: MatchingEngine(catalog),
    )


@pytest.fixture
def input_file(tmp_path: Path) -> Path:
    path = tmp_path / "watched.txt"
    path.write_text("Cowboy Bebop\n\nMonster\nzzz\n", encoding="utf-8")
    return path


def invoke_json(*args: str):
    result = runner.invoke(app, ["--json", "--log-level", "CRITICAL", *args])
    return result, json.loads(result.stdout)


class TestMatchCommand:
    """Test cases for the match command."""

    def test_match_files_results_into_library(self, patched_engine, input_file, temp_data_dir) -> None:
        result, payload = invoke_json("match", str(input_file), "--data-dir", str(temp_data_dir))

        assert result.exit_code == 0
        assert payload["success"] is True
        assert payload["command"] == "match"
        assert payload["data"]["summary"] == {"auto": 1, "review": 1, "no-match": 1, "failed": 0}
        assert [item["type"] for item in payload["data"]["results"]] == ["auto", "review", "no-match"]
        assert payload["data"]["library"] == {"added": 1, "duplicates": 0, "queued": 2}

        entries = json.loads((temp_data_dir / FileSystem.LIST_FILE).read_text(encoding="utf-8"))
        queue = json.loads((temp_data_dir / FileSystem.QUEUE_FILE).read_text(encoding="utf-8"))
        assert [entry["id"] for entry in entries] == [1]
        assert [item["raw"] for item in queue] == ["Monster", "zzz"]

    def test_dry_run_leaves_library_untouched(self, patched_engine, input_file, temp_data_dir) -> None:
        result, payload = invoke_json("match", str(input_file), "--dry-run", "--data-dir", str(temp_data_dir))

        assert result.exit_code == 0
        assert payload["data"]["library"] is None
        assert not (temp_data_dir / FileSystem.LIST_FILE).exists()

    def test_reads_stdin(self, patched_engine, catalog, temp_data_dir) -> None:
        result = runner.invoke(
            app,
            ["--json", "match", "--dry-run", "--data-dir", str(temp_data_dir)],
            input="Cowboy Bebop\n",
        )

        assert result.exit_code == 0
        assert catalog.calls == ["Cowboy Bebop"]

    def test_human_output(self, patched_engine, input_file, temp_data_dir) -> None:
        result = runner.invoke(app, ["match", str(input_file), "--data-dir", str(temp_data_dir)])

        assert result.exit_code == 0
        assert "Match Results" in result.stdout
        assert "auto: 1, review: 1, no-match: 1, failed: 0" in result.stdout

    def test_missing_input_file(self, patched_engine, tmp_path, temp_data_dir) -> None:
        result, payload = invoke_json("match", str(tmp_path / "missing.txt"), "--data-dir", str(temp_data_dir))

        assert result.exit_code == 1
        assert payload["success"] is False
        assert payload["errors"][0].startswith("File system error")


class TestLibraryCommands:
    """Test cases for list, queue, approve, and discard."""

    @pytest.fixture(autouse=True)
    def matched(self, patched_engine, input_file, temp_data_dir) -> None:
        result = runner.invoke(app, ["--json", "match", str(input_file), "--data-dir", str(temp_data_dir)])
        assert result.exit_code == 0

    def test_list(self, temp_data_dir) -> None:
        result, payload = invoke_json("list", "--data-dir", str(temp_data_dir))

        assert result.exit_code == 0
        assert [entry["title"] for entry in payload["data"]["entries"]] == ["Cowboy Bebop"]
        assert payload["data"]["entries"][0]["raw_input"] == "Cowboy Bebop"

    def test_queue_limits_candidates(self, temp_data_dir) -> None:
        result, payload = invoke_json("queue", "--top", "1", "--data-dir", str(temp_data_dir))

        assert result.exit_code == 0
        queue = payload["data"]["queue"]
        assert [item["position"] for item in queue] == [1, 2]
        assert [item["match_type"] for item in queue] == ["review", "no-match"]
        assert len(queue[0]["candidates"]) == 1
        assert queue[1]["candidates"] == []

    def test_approve_second_candidate(self, temp_data_dir) -> None:
        result, payload = invoke_json("approve", "1", "--candidate", "2", "--data-dir", str(temp_data_dir))

        assert result.exit_code == 0
        assert payload["data"]["raw"] == "Monster"
        assert payload["data"]["added"]["id"] == 3

        _, listing = invoke_json("list", "--data-dir", str(temp_data_dir))
        _, queue = invoke_json("queue", "--data-dir", str(temp_data_dir))
        assert [entry["id"] for entry in listing["data"]["entries"]] == [1, 3]
        assert [item["raw"] for item in queue["data"]["queue"]] == ["zzz"]

    def test_approve_missing_item(self, temp_data_dir) -> None:
        result, payload = invoke_json("approve", "5", "--data-dir", str(temp_data_dir))

        assert result.exit_code == 1
        assert payload["success"] is False
        assert payload["data"]["error_code"] == "QUEUE_ITEM_NOT_FOUND"

    def test_approve_item_without_candidates(self, temp_data_dir) -> None:
        result, payload = invoke_json("approve", "2", "--data-dir", str(temp_data_dir))

        assert result.exit_code == 1
        assert payload["data"]["error_code"] == "CANDIDATE_NOT_FOUND"

        _, queue = invoke_json("queue", "--data-dir", str(temp_data_dir))
        assert len(queue["data"]["queue"]) == 2

    def test_discard(self, temp_data_dir) -> None:
        result, payload = invoke_json("discard", "2", "--data-dir", str(temp_data_dir))

        assert result.exit_code == 0
        assert payload["data"]["discarded"]["raw"] == "zzz"

        result = runner.invoke(app, ["queue", "--data-dir", str(temp_data_dir)])
        assert "Monster" in result.stdout
        assert "zzz" not in result.stdout

    def test_zero_index_rejected(self, temp_data_dir) -> None:
        result = runner.invoke(app, ["discard", "0", "--data-dir", str(temp_data_dir)])

        assert result.exit_code == 2


class TestGlobalOptions:
    """Test cases for the main callback."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert Application.VERSION in result.stdout

    def test_missing_config_file(self, tmp_path) -> None:
        result, payload = invoke_json("--config", str(tmp_path / "nope.toml"), "list")

        assert result.exit_code == 1
        assert payload["command"] == "main-callback"
        assert payload["data"]["error_code"] == "CONFIG_MISSING"

    def test_empty_list_human_output(self, temp_data_dir) -> None:
        result = runner.invoke(app, ["list", "--data-dir", str(temp_data_dir)])

        assert result.exit_code == 0
        assert "Your list is empty." in result.stdout
