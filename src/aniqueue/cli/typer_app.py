"""
AniQueue Typer CLI Application

Entry point for the ``aniqueue`` command: global options are handled by
the callback, and each command delegates to a handler module.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Any, Optional

import typer

from aniqueue.cli.common.context import CliContext, LogLevel, get_cli_context, set_cli_context
from aniqueue.cli.common.error_handler import handle_cli_error
from aniqueue.cli.common.options import (
    config_option,
    data_dir_option,
    json_output_option,
    log_level_option,
    verbose_option,
    version_option,
)
from aniqueue.cli.library_handler import (
    handle_approve_command,
    handle_discard_command,
    handle_list_command,
    handle_queue_command,
)
from aniqueue.cli.match_handler import handle_match_command
from aniqueue.config import get_config, reload_config
from aniqueue.shared.constants import (
    Application,
    CLICommands,
    CLIDefaults,
    CLIHelp,
    CLIOptions,
)
from aniqueue.shared.logging import setup_structured_logger

__version__ = Application.VERSION


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(CLIHelp.VERSION_TEXT.format(version=__version__))
        raise typer.Exit


def main_callback(
    verbose: int,
    log_level: LogLevel,
    json_output: bool,
    version: bool,
    config_path: Path | None,
) -> None:
    """
    Process the global options.

    Sets the CLI context, loads settings (from ``--config`` when given),
    and configures logging.
    """
    if version:
        version_callback(value=True)

    context = CliContext(
        verbose=verbose,
        log_level=log_level,
        json_output=json_output,
        config_path=config_path,
    )
    set_cli_context(context)

    settings = reload_config(config_path) if config_path else get_config()
    setup_structured_logger(
        level=context.get_effective_log_level(),
        log_file=settings.logging.file or None,
        use_rich_console=not settings.logging.json_console,
        console_output=settings.logging.console_output,
    )


app = typer.Typer(
    name=CLIHelp.APP_NAME,
    help=CLIHelp.APP_DESCRIPTION,
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
    invoke_without_command=True,
)


def _run(command: str, handler: Callable[..., int], *args: Any, **kwargs: Any) -> None:
    """Call a handler, routing every failure through handle_cli_error."""
    json_output = get_cli_context().is_json_output_enabled()
    try:
        exit_code = handler(*args, **kwargs)
    except (Exception, KeyboardInterrupt) as e:  # pylint: disable=broad-exception-caught
        exit_code = handle_cli_error(e, command, json_output=json_output)
        raise typer.Exit(exit_code) from e

    if exit_code:
        raise typer.Exit(exit_code)


@app.callback()
def main(
    verbose: Annotated[int, verbose_option] = 0,
    log_level: Annotated[LogLevel, log_level_option] = LogLevel.WARNING,
    json_output: Annotated[bool, json_output_option] = False,
    version: Annotated[bool, version_option] = False,
    config_path: Annotated[Optional[Path], config_option] = None,
) -> None:
    """Match anime names against AniList and manage your list."""
    try:
        main_callback(verbose, log_level, json_output, version, config_path)
    except typer.Exit:
        raise
    except Exception as e:  # pylint: disable=broad-exception-caught
        exit_code = handle_cli_error(e, "main-callback", json_output=json_output)
        raise typer.Exit(exit_code) from e


@app.command(CLICommands.MATCH)
def match_command(
    source: Annotated[
        Optional[Path],
        typer.Argument(help=CLIHelp.MATCH_FILE_HELP, dir_okay=False),
    ] = None,
    dry_run: Annotated[bool, typer.Option(CLIOptions.DRY_RUN, help=CLIHelp.DRY_RUN_HELP)] = False,
    data_dir: Annotated[Optional[Path], data_dir_option] = None,
) -> None:
    """
    Match a list of anime names, one per line.

    Confident matches are added to your list; everything else is queued
    for review.

    Examples:
        # Match names from a file
        aniqueue match watched.txt

        # Paste names on stdin and only look at the results
        aniqueue match --dry-run < watched.txt
    """
    _run(CLICommands.MATCH, handle_match_command, source, dry_run=dry_run, data_dir=data_dir)


@app.command(CLICommands.LIST)
def list_command(
    data_dir: Annotated[Optional[Path], data_dir_option] = None,
) -> None:
    """Show your anime list."""
    _run(CLICommands.LIST, handle_list_command, data_dir)


@app.command(CLICommands.QUEUE)
def queue_command(
    top: Annotated[int, typer.Option(CLIOptions.TOP, min=1, help=CLIHelp.TOP_HELP)] = (
        CLIDefaults.QUEUE_PREVIEW_CANDIDATES
    ),
    data_dir: Annotated[Optional[Path], data_dir_option] = None,
) -> None:
    """Show the review queue."""
    _run(CLICommands.QUEUE, handle_queue_command, data_dir, top=top)


@app.command(CLICommands.APPROVE)
def approve_command(
    index: Annotated[int, typer.Argument(min=1, help=CLIHelp.QUEUE_INDEX_HELP)],
    candidate: Annotated[
        int,
        typer.Option(CLIOptions.CANDIDATE, CLIOptions.CANDIDATE_SHORT, min=1, help=CLIHelp.CANDIDATE_HELP),
    ] = 1,
    data_dir: Annotated[Optional[Path], data_dir_option] = None,
) -> None:
    """Add a candidate of a queued item to your list."""
    _run(CLICommands.APPROVE, handle_approve_command, index, candidate, data_dir=data_dir)


@app.command(CLICommands.DISCARD)
def discard_command(
    index: Annotated[int, typer.Argument(min=1, help=CLIHelp.QUEUE_INDEX_HELP)],
    data_dir: Annotated[Optional[Path], data_dir_option] = None,
) -> None:
    """Remove a queued item without adding anything."""
    _run(CLICommands.DISCARD, handle_discard_command, index, data_dir=data_dir)


if __name__ == "__main__":
    app()
