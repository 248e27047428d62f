"""Web search phrase refinement.

When a catalog search comes back weak, a general web search for the raw
phrase usually surfaces the canonical title in the top results (MyAnimeList
and AniList pages in particular). This module runs that search, ranks the
results by source, and strips site boilerplate from the winning title.
"""

from __future__ import annotations

import asyncio
import logging
import re
import time
from typing import Any
from urllib.parse import urlparse

import aiohttp

from aniqueue.config.models.api_settings import WebSearchSettings
from aniqueue.shared.constants import HTTPStatusCodes, WebSearchConfig
from aniqueue.shared.errors import ErrorCode, ErrorContext, InfrastructureError
from aniqueue.shared.logging import log_api_call

logger = logging.getLogger(__name__)

_SITE_SUFFIXES = [re.compile(pattern, re.IGNORECASE) for pattern in WebSearchConfig.SITE_SUFFIX_PATTERNS]
_TYPE_TAG = re.compile(WebSearchConfig.TYPE_TAG_PATTERN, re.IGNORECASE)


def _source_priority(link: str) -> int:
    """Rank a result link by host; lower is better."""
    host = (urlparse(link).hostname or "").lower()
    for domain, priority in WebSearchConfig.SOURCE_PRIORITY.items():
        if host == domain or host.endswith("." + domain):
            return priority
    return WebSearchConfig.DEFAULT_PRIORITY


def rank_search_results(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Order search results by source priority, keeping search order within a tier.

    Examples:
        >>> ranked = rank_search_results([
        ...     {"link": "https://example.com/a"},
        ...     {"link": "https://anilist.co/anime/1"},
        ...     {"link": "https://myanimelist.net/anime/1"},
        ... ])
        >>> [item["link"] for item in ranked]
        ['https://myanimelist.net/anime/1', 'https://anilist.co/anime/1', 'https://example.com/a']
    """
    return sorted(items, key=lambda item: _source_priority(str(item.get("link", ""))))


def clean_result_title(title: str) -> str:
    """Strip site-name suffixes and media-type tags from a result title.

    Examples:
        >>> clean_result_title("Shingeki no Kyojin (Attack on Titan) - MyAnimeList.net")
        'Shingeki no Kyojin (Attack on Titan)'
        >>> clean_result_title("Frieren (TV) | AniList")
        'Frieren'
    """
    cleaned = title.strip()
    stripped = True
    while stripped:
        stripped = False
        for pattern in _SITE_SUFFIXES:
            new_value = pattern.sub("", cleaned)
            if new_value != cleaned:
                cleaned = new_value.strip()
                stripped = True

    cleaned = _TYPE_TAG.sub("", cleaned)
    return " ".join(cleaned.split())


class WebSearchRefiner:
    """Refinement client backed by Google Programmable Search.

    ``refine_phrase`` never raises: missing credentials, transport errors,
    and unusable payloads all mean "no refinement".

    Args:
        settings: Web search settings (credentials, qualifier, result count)
        session: Optional caller-owned HTTP session
    """

    def __init__(
        self,
        settings: WebSearchSettings | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self.settings = settings or WebSearchSettings()
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=self.settings.timeout)

    @property
    def is_configured(self) -> bool:
        return self.settings.is_configured

    async def refine_phrase(self, phrase: str) -> str | None:
        """Suggest a cleaner search phrase for ``phrase``.

        Args:
            phrase: Phrase whose catalog search was weak

        Returns:
            Cleaned title of the highest-priority result. When cleaning
            leaves that title empty, the next ranked result is tried; None
            when no result yields a title, on any failure, or when the
            refiner is not configured.
        """
        if not self.is_configured:
            logger.debug("Web search refinement is not configured; skipping '%s'", phrase)
            return None

        try:
            items = await self._search(phrase)
        except InfrastructureError as e:
            logger.warning("Web search refinement failed for '%s': %s", phrase, e.message)
            return None
        except Exception:  # pylint: disable=broad-exception-caught
            logger.warning("Unexpected web search failure for '%s'", phrase, exc_info=True)
            return None

        for item in rank_search_results(items):
            title = clean_result_title(str(item.get("title") or ""))
            if title:
                logger.debug("Refined '%s' -> '%s' (%s)", phrase, title, item.get("link"))
                return title

        logger.debug("Web search returned no usable title for '%s'", phrase)
        return None

    async def _search(self, phrase: str) -> list[dict[str, Any]]:
        """Run the search and return the raw ``items`` list.

        Raises:
            InfrastructureError: On transport failure, bad status, or bad payload
        """
        context = ErrorContext(operation="refine_phrase", additional_data={"phrase": phrase})
        params = {
            "key": self.settings.api_key,
            "cx": self.settings.engine_id,
            "q": phrase + self.settings.qualifier,
            "num": str(self.settings.result_count),
        }
        start = time.perf_counter()

        try:
            if self._session is not None:
                status, payload = await self._get(self._session, params)
            else:
                async with aiohttp.ClientSession() as session:
                    status, payload = await self._get(session, params)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise InfrastructureError(
                code=ErrorCode.REFINEMENT_REQUEST_FAILED,
                message=f"Web search request failed: {e}",
                context=context,
                original_error=e,
            ) from e
        except ValueError as e:
            raise InfrastructureError(
                code=ErrorCode.REFINEMENT_INVALID_RESPONSE,
                message="Web search returned invalid JSON",
                context=context,
                original_error=e,
            ) from e

        log_api_call(
            logger=logger,
            endpoint=self.settings.endpoint,
            method="GET",
            status_code=status,
            duration_ms=(time.perf_counter() - start) * 1000,
        )

        if not HTTPStatusCodes.is_success(status):
            raise InfrastructureError(
                code=ErrorCode.REFINEMENT_REQUEST_FAILED,
                message=f"Web search failed (status {status})",
                context=context,
            )

        if not isinstance(payload, dict):
            raise InfrastructureError(
                code=ErrorCode.REFINEMENT_INVALID_RESPONSE,
                message="Web search response is not a JSON object",
                context=context,
            )

        items = payload.get("items") or []
        if not isinstance(items, list):
            raise InfrastructureError(
                code=ErrorCode.REFINEMENT_INVALID_RESPONSE,
                message="Web search items is not a list",
                context=context,
            )
        return [item for item in items if isinstance(item, dict)]

    async def _get(self, session: aiohttp.ClientSession, params: dict[str, str]) -> tuple[int, Any]:
        async with session.get(self.settings.endpoint, params=params, timeout=self._timeout) as response:
            if not HTTPStatusCodes.is_success(response.status):
                return response.status, None
            return response.status, await response.json(content_type=None)
