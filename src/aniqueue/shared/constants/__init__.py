"""
AniQueue Constants Module

This module provides centralized constants for the AniQueue application.
All magic values and configuration constants are defined here to ensure
consistency across the codebase.
"""

from .api import AniListConfig, EnvVars, WebSearchConfig
from .cli import CLICommands, CLIDefaults, CLIHelp, CLIOptions
from .http_codes import ContentTypes, HTTPHeaders, HTTPStatusCodes
from .matching import ConfidenceThresholds, ValidationConstants
from .system import Application, FileSystem, Logging

__all__ = [
    "AniListConfig",
    "Application",
    "CLICommands",
    "CLIDefaults",
    "CLIHelp",
    "CLIOptions",
    "ConfidenceThresholds",
    "ContentTypes",
    "EnvVars",
    "FileSystem",
    "HTTPHeaders",
    "HTTPStatusCodes",
    "Logging",
    "ValidationConstants",
    "WebSearchConfig",
]
