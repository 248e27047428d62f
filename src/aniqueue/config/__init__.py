"""AniQueue configuration package.

Usage:
    from aniqueue.config import Settings, get_config
"""

from aniqueue.config.loader import get_config, load_settings, reload_config
from aniqueue.config.models import (
    AniListSettings,
    APISettings,
    AppSettings,
    LoggingSettings,
    MatchingSettings,
    Settings,
    StorageSettings,
    WebSearchSettings,
)

__all__ = [
    "APISettings",
    "AniListSettings",
    "AppSettings",
    "LoggingSettings",
    "MatchingSettings",
    "Settings",
    "StorageSettings",
    "WebSearchSettings",
    "get_config",
    "load_settings",
    "reload_config",
]
