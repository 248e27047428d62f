"""
CLI Error Handling Utilities

Consistent error output and exit codes for every command: exceptions are
mapped to CliError, logged, and printed either as a message on stderr or
as a JSON envelope on stdout.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from aniqueue.cli.json_formatter import emit_json, format_json_output
from aniqueue.shared.constants import CLIDefaults
from aniqueue.shared.errors import (
    AniQueueError,
    ApplicationError,
    CliError,
    DomainError,
    ErrorCode,
    InfrastructureError,
    create_cli_error,
)

logger = logging.getLogger(__name__)


def handle_cli_error(
    error: BaseException,
    command: str,
    *,
    json_output: bool = False,
) -> int:
    """Handle CLI errors with consistent formatting and logging.

    Args:
        error: The exception that occurred
        command: The CLI command being executed
        json_output: Whether to output JSON format

    Returns:
        Exit code for the CLI command
    """
    error_context = _create_error_context(error, command, json_output=json_output)
    cli_error = _map_error_to_cli_error(error, command, error_context)
    _log_error(error, command, cli_error, error_context)
    _output_error(cli_error, error, command, error_context, json_output=json_output)

    return cli_error.exit_code


def _create_error_context(
    error: BaseException,
    command: str,
    *,
    json_output: bool,
) -> dict[str, Any]:
    return {
        "command": command,
        "error_type": type(error).__name__,
        "json_output": json_output,
    }


def _map_error_to_cli_error(
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
) -> CliError:
    """Map specific exception types to CLI errors."""
    if isinstance(error, CliError):
        error_context["error_code"] = error.code.value
        return error

    if isinstance(error, AniQueueError):
        error_context["error_code"] = error.code.value
        return CliError(
            code=error.code,
            message=f"{_category(error)}: {error.message}",
            context=error.context,
            original_error=error,
            command=command,
        )

    if isinstance(error, OSError):
        error_context["error_category"] = "file_system"
        return create_cli_error(
            message=f"File system error: {error}",
            command=command,
            original_error=error,
        )

    if isinstance(error, KeyboardInterrupt):
        error_context["interrupt_type"] = "user_interrupt"
        return create_cli_error(
            message="Command interrupted by user",
            command=command,
            exit_code=CLIDefaults.EXIT_INTERRUPTED,
        )

    error_context["error_category"] = "unexpected"
    return create_cli_error(
        message=f"Unexpected error: {error}",
        command=command,
        original_error=error if isinstance(error, Exception) else None,
    )


def _category(error: AniQueueError) -> str:
    if isinstance(error, DomainError):
        return "Invalid request"
    if isinstance(error, InfrastructureError):
        return "Infrastructure error"
    if isinstance(error, ApplicationError):
        return "Application error"
    return "Error"


def _log_error(
    error: BaseException,
    command: str,
    cli_error: CliError,
    error_context: dict[str, Any],
) -> None:
    if isinstance(error, KeyboardInterrupt):
        logger.warning("Command interrupted: %s", cli_error.message, extra={"context": error_context})
    elif isinstance(error, DomainError):
        logger.warning("%s failed: %s", command, cli_error.message, extra={"context": error_context})
    else:
        logger.error(
            "CLI error in %s: %s",
            command,
            cli_error.message,
            extra={"context": error_context},
            exc_info=not isinstance(error, AniQueueError),
        )


def _output_error(
    cli_error: CliError,
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
    *,
    json_output: bool,
) -> None:
    """Output error message in appropriate format."""
    if not json_output:
        sys.stderr.write(f"Error: {cli_error.message}\n")
        return

    try:
        emit_json(
            format_json_output(
                success=False,
                command=command,
                errors=[cli_error.message],
                data={
                    "error_code": cli_error.code.value,
                    "error_type": type(error).__name__,
                    "exit_code": cli_error.exit_code,
                    "context": error_context,
                },
            )
        )
    except (OSError, UnicodeEncodeError, TypeError) as output_error:
        logger.exception(
            "JSON output error: %s",
            output_error,
            extra={"context": {**error_context, "error_code": ErrorCode.CLI_OUTPUT_ERROR.value}},
        )
        sys.stderr.write(f"Error: {cli_error.message}\n")
