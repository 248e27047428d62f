"""
Application and File System Constants
"""

from typing import ClassVar


class Application:
    """Application identity."""

    NAME = "aniqueue"
    VERSION = "0.1.0"


class FileSystem:
    """File system locations."""

    HOME_DIR = ".aniqueue"
    ENV_FILE = ".env"
    LIST_FILE = "anime_list.json"
    QUEUE_FILE = "review_queue.json"
    CONFIG_FILE = "config.toml"
    CONFIG_SEARCH_PATHS: ClassVar[list[str]] = [
        "config/config.toml",
        "config.toml",
    ]


class Logging:
    """Logging defaults."""

    DEFAULT_LEVEL = "INFO"
    DEFAULT_FILE_PATH = ""
