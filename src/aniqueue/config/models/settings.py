"""AniQueue Settings Configuration Model.

Main Settings class that consolidates all configuration domains.
"""

from __future__ import annotations

import logging
from pathlib import Path

import toml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from aniqueue.config.models.api_settings import APISettings
from aniqueue.config.models.app_settings import AppSettings, LoggingSettings
from aniqueue.config.models.matching_settings import MatchingSettings
from aniqueue.config.models.storage_settings import StorageSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Settings facade providing unified configuration access.

    Every field can be overridden through environment variables, e.g.
    ``ANIQUEUE_MATCHING__AUTO_THRESHOLD=0.8`` or
    ``ANIQUEUE_API__SEARCH__API_KEY=...``.
    """

    model_config = SettingsConfigDict(
        env_prefix="ANIQUEUE_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: APISettings = Field(default_factory=APISettings)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Load settings from a TOML file; environment variables fill in what the file leaves unset."""

        file_path = Path(file_path)
        if not file_path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        raw_config = toml.load(file_path)
        logger.debug("Loaded configuration from %s", file_path)
        return cls(**raw_config)

    def to_toml_file(self, file_path: str | Path) -> None:
        """Save settings to TOML file.

        API keys are written (they are needed to function); file permissions
        are the protection, and logs only ever see the masked repr.
        """

        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = self.model_dump(mode="json", exclude_none=True)

        with open(file_path, "w", encoding="utf-8") as f:
            toml.dump(config_dict, f)
