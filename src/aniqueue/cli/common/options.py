"""
Reusable Typer Options Module

Shared option definitions for the main callback, used as
``Annotated[<type>, <option>]`` metadata.
"""

from __future__ import annotations

import typer

from aniqueue.shared.constants import CLIHelp, CLIOptions

# Verbose option - count-based for multiple -v flags
verbose_option = typer.Option(
    "--verbose",
    "-v",
    count=True,
    help="Enable verbose output (equivalent to --log-level DEBUG).",
)

# Log level option - enum-based with case-insensitive choices
log_level_option = typer.Option(
    "--log-level",
    case_sensitive=False,
    help="Set the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: WARNING.",
)

# JSON output option - flag-based
json_output_option = typer.Option(
    "--json",
    help="Enable machine-readable JSON output instead of human-readable format.",
)

# Version option - for main app only
version_option = typer.Option(
    "--version",
    "-V",
    help="Show version information and exit.",
    is_eager=True,
)

# Config option - explicit TOML file
config_option = typer.Option(
    CLIOptions.CONFIG,
    help=CLIHelp.CONFIG_HELP,
    dir_okay=False,
)

# Data directory option - overrides storage.data_dir
data_dir_option = typer.Option(
    CLIOptions.DATA_DIR,
    help=CLIHelp.DATA_DIR_HELP,
    file_okay=False,
)
