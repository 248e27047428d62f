"""Error types shared by every AniQueue layer.

``DomainError`` covers review-queue misuse, ``InfrastructureError`` the
AniList, web search, and file system boundaries, and ``ApplicationError``
configuration and CLI failures. Each carries an ``ErrorCode`` and an
``ErrorContext`` whose extra data is restricted to primitives so it can be
logged and printed as JSON.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]

# Default keys to mask in safe_dict
SAFE_DICT_MASK_KEYS: tuple[str, ...] = ("api_key",)


class ErrorCode(str, Enum):
    """Every error code AniQueue can report, grouped by the layer raising it."""

    # Catalog (AniList) API
    CATALOG_API_CONNECTION_ERROR = "CATALOG_API_CONNECTION_ERROR"
    CATALOG_API_AUTHENTICATION_ERROR = "CATALOG_API_AUTHENTICATION_ERROR"
    CATALOG_API_RATE_LIMIT_EXCEEDED = "CATALOG_API_RATE_LIMIT_EXCEEDED"
    CATALOG_API_REQUEST_FAILED = "CATALOG_API_REQUEST_FAILED"
    CATALOG_API_TIMEOUT = "CATALOG_API_TIMEOUT"
    CATALOG_API_SERVER_ERROR = "CATALOG_API_SERVER_ERROR"
    CATALOG_API_INVALID_RESPONSE = "CATALOG_API_INVALID_RESPONSE"

    # Refinement (web search); never surfaced past the refiner
    REFINEMENT_REQUEST_FAILED = "REFINEMENT_REQUEST_FAILED"
    REFINEMENT_INVALID_RESPONSE = "REFINEMENT_INVALID_RESPONSE"

    # Library files
    FILE_WRITE_ERROR = "FILE_WRITE_ERROR"

    # Configuration
    CONFIG_MISSING = "CONFIG_MISSING"
    CONFIG_INVALID = "CONFIG_INVALID"

    # Review queue
    QUEUE_ITEM_NOT_FOUND = "QUEUE_ITEM_NOT_FOUND"
    CANDIDATE_NOT_FOUND = "CANDIDATE_NOT_FOUND"

    # CLI
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"
    CLI_OUTPUT_ERROR = "CLI_OUTPUT_ERROR"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path, Enum, Decimal to primitive types.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, Decimal):
            coerced[key] = float(val)
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum, Decimal are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContextModel:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data to ensure safe serialization.

    Attributes:
        file_path: Optional file path associated with the error
        operation: Optional operation name that caused the error
        additional_data: Optional dict with primitive values only
    """

    file_path: str | None = None
    operation: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        """Post-initialization validation and coercion."""
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self, *, mask_keys: tuple[str, ...] | None = None) -> dict[str, Any]:
        """Export context as dict with sensitive keys masked.

        Args:
            mask_keys: Keys to mask inside additional_data. Defaults to SAFE_DICT_MASK_KEYS.

        Returns:
            Dictionary with a guaranteed additional_data key.

        Example:
            >>> context = ErrorContextModel(operation="search", additional_data={"api_key": "x"})
            >>> context.safe_dict()
            {'operation': 'search', 'additional_data': {'api_key': '****'}}
        """
        if mask_keys is None:
            mask_keys = SAFE_DICT_MASK_KEYS

        data: dict[str, Any] = {}
        if self.file_path is not None:
            data["file_path"] = self.file_path
        if self.operation is not None:
            data["operation"] = self.operation

        additional = dict(self.additional_data or {})
        for key in mask_keys:
            if key in additional:
                additional[key] = "****"
        data["additional_data"] = additional

        return data


ErrorContext = ErrorContextModel


class AniQueueError(Exception):
    """Base exception class for all AniQueue errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize AniQueueError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error

        formatted_message = f"{code.value}: {message}"
        super().__init__(formatted_message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging.

        Returns:
            Dictionary representation of the error with code, message,
            masked context, and original_error (if present)
        """
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(AniQueueError):
    """Domain-specific errors.

    These errors occur when business rules are violated, for example
    approving a review-queue item that does not exist.
    """


class InfrastructureError(AniQueueError):
    """Infrastructure-related errors.

    These errors occur when interacting with external systems
    like the catalog API, the web search API, or the file system.
    """


class ApplicationError(AniQueueError):
    """Application-level errors (configuration, command handling)."""


class CliError(ApplicationError):
    """Error carrying the command name and the process exit code to use."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
        command: str | None = None,
        exit_code: int = 1,
    ):
        super().__init__(code, message, context, original_error)
        self.command = command
        self.exit_code = exit_code


def create_api_error(
    message: str,
    code: ErrorCode,
    operation: str | None = None,
    additional_data: dict[str, Any] | None = None,
    original_error: Exception | None = None,
) -> InfrastructureError:
    """Build an InfrastructureError for a failed remote call."""
    return InfrastructureError(
        code,
        message,
        ErrorContext(operation=operation, additional_data=additional_data),
        original_error,
    )


def create_config_error(
    message: str,
    code: ErrorCode = ErrorCode.CONFIG_INVALID,
    config_path: str | Path | None = None,
    original_error: Exception | None = None,
) -> ApplicationError:
    """Build an ApplicationError for a configuration file problem."""
    additional_data = {"config_path": str(config_path)} if config_path else None
    return ApplicationError(
        code,
        message,
        ErrorContext(operation="load_settings", additional_data=additional_data),
        original_error,
    )


def create_cli_error(
    message: str,
    command: str | None = None,
    original_error: Exception | None = None,
    exit_code: int = 1,
) -> CliError:
    """Build a CliError for a failure with no more specific code."""
    additional_data = {"command": command} if command else None
    return CliError(
        ErrorCode.CLI_UNEXPECTED_ERROR,
        message,
        ErrorContext(additional_data=additional_data),
        original_error,
        command,
        exit_code,
    )
