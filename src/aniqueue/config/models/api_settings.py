"""API configuration models (AniList catalog, web search refinement).

This module contains configuration models for the external services the
matching engine talks to.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from aniqueue.shared.constants import AniListConfig, WebSearchConfig


class AniListSettings(BaseModel):
    """AniList GraphQL API configuration.

    AniList search needs no credentials; only endpoint, paging, and
    retry behaviour are configurable.
    """

    endpoint: str = Field(
        default=AniListConfig.ENDPOINT,
        description="GraphQL endpoint URL",
    )
    page_size: int = Field(
        default=AniListConfig.PAGE_SIZE,
        gt=0,
        le=50,
        description="Number of candidates requested per search",
    )
    timeout: float = Field(
        default=AniListConfig.TIMEOUT,
        gt=0,
        description="Request timeout in seconds",
    )
    retry_attempts: int = Field(
        default=AniListConfig.RETRY_ATTEMPTS,
        ge=0,
        description="Retries for rate-limited, server-error, or timed-out requests",
    )
    retry_delay: float = Field(
        default=AniListConfig.RETRY_DELAY,
        ge=0,
        description="Base delay between retries in seconds (doubled per attempt)",
    )


class WebSearchSettings(BaseModel):
    """Web search configuration for phrase refinement.

    Refinement is optional: without an API key and engine id the refiner
    reports itself unconfigured and the engine skips the second pass.

    Security: api_key is masked in __repr__.
    """

    api_key: str = Field(
        default="",
        repr=False,
        description="Google Programmable Search API key",
    )
    engine_id: str = Field(
        default="",
        description="Programmable Search engine id (cx)",
    )
    endpoint: str = Field(
        default=WebSearchConfig.ENDPOINT,
        description="Search endpoint URL",
    )
    qualifier: str = Field(
        default=WebSearchConfig.QUALIFIER,
        description="Text appended to every refinement query",
    )
    result_count: int = Field(
        default=WebSearchConfig.RESULT_COUNT,
        gt=0,
        le=10,
        description="Number of search results to rank",
    )
    timeout: float = Field(
        default=WebSearchConfig.TIMEOUT,
        gt=0,
        description="Request timeout in seconds",
    )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key.strip() and self.engine_id.strip())

    def __repr__(self) -> str:
        """Custom repr that masks the API key."""
        masked_key = "****" if self.api_key else "[empty]"
        return (
            f"WebSearchSettings("
            f"api_key={masked_key}, "
            f"engine_id={self.engine_id!r}, "
            f"result_count={self.result_count})"
        )


class APISettings(BaseModel):
    """API configuration container."""

    anilist: AniListSettings = Field(
        default_factory=AniListSettings,
        description="AniList catalog configuration",
    )
    search: WebSearchSettings = Field(
        default_factory=WebSearchSettings,
        description="Web search refinement configuration",
    )


__all__ = [
    "APISettings",
    "AniListSettings",
    "WebSearchSettings",
]
