"""Configuration models for AniQueue."""

from .api_settings import AniListSettings, APISettings, WebSearchSettings
from .app_settings import AppSettings, LoggingSettings
from .matching_settings import MatchingSettings
from .settings import Settings
from .storage_settings import StorageSettings

__all__ = [
    "APISettings",
    "AniListSettings",
    "AppSettings",
    "LoggingSettings",
    "MatchingSettings",
    "Settings",
    "StorageSettings",
    "WebSearchSettings",
]
