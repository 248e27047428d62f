"""Tests for CLI error mapping and output."""

from __future__ import annotations

import json

from aniqueue.cli.common.error_handler import handle_cli_error
from aniqueue.cli.json_formatter import format_json_output
from aniqueue.shared.errors import DomainError, ErrorCode, InfrastructureError


class TestFormatJsonOutput:
    """Test cases for format_json_output()."""

    def test_envelope(self) -> None:
        payload = json.loads(format_json_output(success=True, command="list", data={"entries": []}))

        assert payload["success"] is True
        assert payload["command"] == "list"
        assert payload["data"] == {"entries": []}
        assert payload["errors"] == []
        assert payload["warnings"] == []
        assert "timestamp" in payload

    def test_errors_force_failure(self) -> None:
        payload = json.loads(format_json_output(success=True, command="match", errors=["boom"]))

        assert payload["success"] is False


class TestHandleCliError:
    """Test cases for handle_cli_error()."""

    def test_domain_error_to_stderr(self, capsys) -> None:
        error = DomainError(ErrorCode.QUEUE_ITEM_NOT_FOUND, "No review queue item at index 4")

        exit_code = handle_cli_error(error, "approve")

        assert exit_code == 1
        assert capsys.readouterr().err == "Error: Invalid request: No review queue item at index 4\n"

    def test_infrastructure_error_as_json(self, capsys) -> None:
        error = InfrastructureError(ErrorCode.CATALOG_API_TIMEOUT, "AniList timed out")

        exit_code = handle_cli_error(error, "match", json_output=True)

        payload = json.loads(capsys.readouterr().out)
        assert exit_code == 1
        assert payload["success"] is False
        assert payload["errors"] == ["Infrastructure error: AniList timed out"]
        assert payload["data"]["error_code"] == "CATALOG_API_TIMEOUT"
        assert payload["data"]["error_type"] == "InfrastructureError"

    def test_keyboard_interrupt(self, capsys) -> None:
        assert handle_cli_error(KeyboardInterrupt(), "match") == 130
        assert "interrupted" in capsys.readouterr().err

    def test_unexpected_error(self, capsys) -> None:
        exit_code = handle_cli_error(RuntimeError("kaboom"), "list", json_output=True)

        payload = json.loads(capsys.readouterr().out)
        assert exit_code == 1
        assert payload["data"]["error_code"] == "CLI_UNEXPECTED_ERROR"
        assert payload["errors"] == ["Unexpected error: kaboom"]
