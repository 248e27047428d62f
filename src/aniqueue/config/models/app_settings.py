"""Application and logging configuration models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from aniqueue.shared.constants import Application, Logging


class AppSettings(BaseModel):
    """Application configuration."""

    name: str = Field(default=Application.NAME, description="Application name")
    version: str = Field(default=Application.VERSION, description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")


class LoggingSettings(BaseModel):
    """Logging configuration.

    Console output goes through Rich unless json_console is set; the
    optional log file is always written as JSON lines.
    """

    level: str = Field(default=Logging.DEFAULT_LEVEL, description="Logging level")
    file: str = Field(default=Logging.DEFAULT_FILE_PATH, description="Log file path (empty disables)")
    console_output: bool = Field(default=True, description="Enable console logging")
    json_console: bool = Field(default=False, description="Write console logs as JSON lines")


__all__ = [
    "AppSettings",
    "LoggingSettings",
]
