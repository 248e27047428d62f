"""Settings loader and singleton manager.

This module handles:
- Environment variable loading from .env files
- Configuration file loading from TOML
- Thread-safe singleton pattern for Settings instance
"""

from __future__ import annotations

import logging
import os
import sys
import threading
from pathlib import Path

import toml
from dotenv import load_dotenv
from pydantic import ValidationError

from aniqueue.config.models.settings import Settings
from aniqueue.shared.constants import EnvVars, FileSystem
from aniqueue.shared.errors import ErrorCode, create_config_error

logger = logging.getLogger(__name__)


class SettingsLoader:
    """Thread-safe singleton manager for Settings.

    Uses double-checked locking pattern to ensure thread-safety
    while minimizing lock overhead.
    """

    _instance: Settings | None = None
    _lock: threading.RLock = threading.RLock()

    def get_config(self) -> Settings:
        """Get the global settings instance, loading it if necessary."""
        if self._instance is None:
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings()

        return self._instance

    def reload_config(self, config_path: str | Path | None = None) -> Settings:
        """Reload the global settings instance from configuration files."""
        with self._lock:
            self._instance = load_settings(config_path)

        return self._instance


def _env_file_path() -> Path:
    # PyInstaller builds look next to the executable
    if getattr(sys, "frozen", False):
        return Path(sys.executable).parent / FileSystem.ENV_FILE
    return Path(FileSystem.ENV_FILE)


def _load_env_file(env_file: Path | None = None) -> None:
    """Load environment variables from a .env file when one exists.

    Unlike the catalog, refinement credentials are optional, so a missing
    .env file is not an error.
    """
    env_file = env_file or _env_file_path()
    if not env_file.exists():
        logger.debug("No %s file found, using process environment only", env_file)
        return

    load_dotenv(env_file, override=False)


def _apply_search_credentials(settings: Settings) -> Settings:
    """Fill web search credentials from the conventional variables.

    ``ANIQUEUE_API__SEARCH__*`` and config-file values take precedence.
    """
    search = settings.api.search
    api_key = search.api_key or os.getenv(EnvVars.SEARCH_API_KEY, "")
    engine_id = search.engine_id or os.getenv(EnvVars.SEARCH_ENGINE_ID, "")
    if api_key == search.api_key and engine_id == search.engine_id:
        return settings

    settings.api.search = search.model_copy(update={"api_key": api_key.strip(), "engine_id": engine_id.strip()})
    return settings


def _default_config_paths() -> list[Path]:
    return [
        *(Path(path) for path in FileSystem.CONFIG_SEARCH_PATHS),
        Path.home() / FileSystem.HOME_DIR / FileSystem.CONFIG_FILE,
    ]


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from a TOML configuration file or the environment.

    Args:
        config_path: Optional path to a TOML file. If None, default locations
            are tried before falling back to environment variables.

    Returns:
        Settings instance

    Raises:
        ApplicationError: If the configuration file is missing (explicit path
            only), unreadable, or invalid
    """
    _load_env_file()

    candidates = [Path(config_path)] if config_path else _default_config_paths()
    source: Path | None = None
    for candidate in candidates:
        if candidate.exists():
            source = candidate
            break

    if config_path and source is None:
        raise create_config_error(
            f"Configuration file not found: {config_path}",
            code=ErrorCode.CONFIG_MISSING,
            config_path=config_path,
        )

    try:
        settings = Settings.from_toml_file(source) if source else Settings()
    except (toml.TomlDecodeError, ValidationError, OSError) as e:
        raise create_config_error(
            f"Invalid configuration: {e}",
            config_path=source or "<environment>",
            original_error=e,
        ) from e

    return _apply_search_credentials(settings)


# Global loader instance
_loader = SettingsLoader()


def get_config() -> Settings:
    """Get the global settings instance (thread-safe)."""
    return _loader.get_config()


def reload_config(config_path: str | Path | None = None) -> Settings:
    """Reload the global settings instance from configuration files."""
    return _loader.reload_config(config_path)


__all__ = [
    "SettingsLoader",
    "get_config",
    "load_settings",
    "reload_config",
]
