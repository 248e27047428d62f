"""
JSON Output Formatter for AniQueue CLI

Envelope shared by every command when the --json flag is used.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import orjson
import typer


def format_json_output(
    success: bool,
    command: str,
    data: Any | None = None,
    errors: list[str] | None = None,
    warnings: list[str] | None = None,
) -> bytes:
    """
    Format command output as JSON.

    Args:
        success: Whether the command executed successfully
        command: The command name (e.g., "match", "queue")
        data: The command's output data
        errors: List of error messages
        warnings: List of warning messages

    Returns:
        JSON-encoded bytes ready for output

    Example:
        >>> output = format_json_output(success=True, command="list", data={"entries": []})
        >>> orjson.loads(output)["command"]
        'list'
    """
    errors = errors or []
    warnings = warnings or []
    if errors:
        success = False

    json_data = {
        "success": success,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "command": command,
        "data": data,
        "errors": errors,
        "warnings": warnings,
    }

    return orjson.dumps(
        json_data,
        option=orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2,
        default=str,
    )


def emit_json(payload: bytes) -> None:
    """Write an encoded JSON document to stdout followed by a newline."""
    typer.echo(payload.decode("utf-8"))
