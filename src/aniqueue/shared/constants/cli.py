"""
CLI Constants

Command names, option names, and help text for the Typer application.
"""


class CLICommands:
    """Command names."""

    MATCH = "match"
    LIST = "list"
    QUEUE = "queue"
    APPROVE = "approve"
    DISCARD = "discard"


class CLIOptions:
    """Option names."""

    CONFIG = "--config"
    DATA_DIR = "--data-dir"
    DRY_RUN = "--dry-run"
    CANDIDATE = "--candidate"
    CANDIDATE_SHORT = "-c"
    TOP = "--top"


class CLIDefaults:
    """Default values for CLI options."""

    QUEUE_PREVIEW_CANDIDATES = 3
    STDIN_MARKER = "-"
    EXIT_INTERRUPTED = 130


class CLIHelp:
    """Help text."""

    APP_NAME = "aniqueue"
    APP_DESCRIPTION = (
        "Match a free-form list of anime names against AniList. "
        "Confident matches go to your list, ambiguous ones to a review queue."
    )
    VERSION_TEXT = "aniqueue {version}"
    MATCH_FILE_HELP = "Text file with one anime name per line ('-' or omitted reads stdin)"
    DRY_RUN_HELP = "Show matches without updating the list or the review queue"
    DATA_DIR_HELP = "Directory holding anime_list.json and review_queue.json"
    CONFIG_HELP = "Path to a TOML configuration file"
    QUEUE_INDEX_HELP = "Position of the item in the review queue (as shown by 'queue')"
    CANDIDATE_HELP = "Position of the candidate to approve within the item"
    TOP_HELP = "Number of candidates to show per review item"
