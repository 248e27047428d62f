"""AniList GraphQL client with retry and error handling.

This module provides the catalog search used by the matching engine. It
posts the anime search query to AniList, converts transport problems and
malformed payloads into InfrastructureError, and turns ``media`` objects
into CandidateRecord values.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import aiohttp

from aniqueue.config.models.api_settings import AniListSettings
from aniqueue.core.matching.models import CandidateRecord
from aniqueue.shared.constants import (
    AniListConfig,
    ContentTypes,
    HTTPHeaders,
    HTTPStatusCodes,
)
from aniqueue.shared.errors import (
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    create_api_error,
)
from aniqueue.shared.logging import log_api_call, log_operation_error

logger = logging.getLogger(__name__)


class AniListClient:
    """AniList catalog client.

    The client can borrow an ``aiohttp.ClientSession`` owned by the caller;
    without one it opens a short-lived session per request, so it never
    holds resources between calls.

    Args:
        settings: AniList settings (endpoint, page size, timeout, retries)
        session: Optional caller-owned HTTP session
    """

    def __init__(
        self,
        settings: AniListSettings | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self.settings = settings or AniListSettings()
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=self.settings.timeout)

    async def search_catalog(self, phrase: str) -> list[CandidateRecord]:
        """Search AniList for anime matching ``phrase``.

        Args:
            phrase: Search phrase

        Returns:
            Up to ``page_size`` records in AniList's relevance order

        Raises:
            InfrastructureError: On transport failure or malformed response
        """
        context = ErrorContext(
            operation="search_catalog",
            additional_data={"phrase": phrase},
        )
        payload = {
            "query": AniListConfig.SEARCH_QUERY,
            "variables": {"search": phrase, "perPage": self.settings.page_size},
        }

        body = await self._post_with_retry(payload, context)
        records = self._parse_media(body, context)

        logger.debug("AniList returned %d candidates for '%s'", len(records), phrase)
        return records

    @asynccontextmanager
    async def _session_scope(self) -> AsyncIterator[aiohttp.ClientSession]:
        if self._session is not None:
            yield self._session
            return

        async with aiohttp.ClientSession() as session:
            yield session

    async def _post_with_retry(self, payload: dict[str, Any], context: ErrorContext) -> str:
        """Post the query, retrying rate limits, server errors, and transport failures."""
        last_error: InfrastructureError | None = None

        for attempt in range(self.settings.retry_attempts + 1):
            try:
                return await self._post_once(payload, context)
            except _RetryableError as retryable:
                last_error = retryable.error
                if attempt >= self.settings.retry_attempts:
                    break
                delay = retryable.retry_after or self.settings.retry_delay * (2**attempt)
                logger.debug(
                    "Retrying AniList request in %.1fs (attempt %d/%d): %s",
                    delay,
                    attempt + 1,
                    self.settings.retry_attempts,
                    retryable.error.message,
                )
                await asyncio.sleep(delay)

        assert last_error is not None
        log_operation_error(logger=logger, error=last_error, operation="search_catalog")
        raise last_error

    async def _post_once(self, payload: dict[str, Any], context: ErrorContext) -> str:
        headers = {
            HTTPHeaders.CONTENT_TYPE: ContentTypes.APPLICATION_JSON,
            HTTPHeaders.ACCEPT: ContentTypes.APPLICATION_JSON,
        }
        start = time.perf_counter()

        try:
            async with self._session_scope() as session:
                async with session.post(
                    self.settings.endpoint,
                    json=payload,
                    headers=headers,
                    timeout=self._timeout,
                ) as response:
                    status = response.status
                    retry_after = _parse_retry_after(response.headers.get(HTTPHeaders.RETRY_AFTER))
                    text = await response.text()
        except asyncio.TimeoutError as e:
            error = _catalog_error(
                ErrorCode.CATALOG_API_TIMEOUT,
                f"AniList request timed out after {self.settings.timeout}s",
                context,
                e,
            )
            raise _RetryableError(error) from e
        except aiohttp.ClientError as e:
            error = _catalog_error(ErrorCode.CATALOG_API_CONNECTION_ERROR, f"AniList connection failed: {e}", context, e)
            raise _RetryableError(error) from e
        except UnicodeDecodeError as e:
            raise _invalid_response(f"AniList response body could not be decoded: {e}", context, e) from e

        log_api_call(
            logger=logger,
            endpoint=self.settings.endpoint,
            method="POST",
            status_code=status,
            duration_ms=(time.perf_counter() - start) * 1000,
        )

        if HTTPStatusCodes.is_success(status):
            return text

        code, message = _convert_status(status)
        error = _catalog_error(code, message, context, status_code=status)
        if HTTPStatusCodes.is_retryable(status):
            raise _RetryableError(error, retry_after)
        raise error


    def _parse_media(self, body: str, context: ErrorContext) -> list[CandidateRecord]:
        """Extract ``data.Page.media`` and convert it to CandidateRecord values.

        Raises:
            InfrastructureError: If the payload is not the expected shape
        """
        try:
            payload = json.loads(body)
        except ValueError as e:
            raise _invalid_response("AniList returned invalid JSON", context, e) from e

        if not isinstance(payload, dict):
            raise _invalid_response("AniList response is not a JSON object", context)

        data = payload.get("data")
        if not data:
            errors = payload.get("errors") or []
            detail = "; ".join(str(error.get("message", error)) for error in errors if isinstance(error, dict))
            raise _invalid_response(f"AniList response has no data{': ' + detail if detail else ''}", context)

        try:
            media = data["Page"]["media"]
        except (KeyError, TypeError) as e:
            raise _invalid_response("AniList response is missing Page.media", context, e) from e

        if not isinstance(media, list):
            raise _invalid_response("AniList Page.media is not a list", context)

        try:
            return [CandidateRecord.from_api(item) for item in media]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise _invalid_response(f"AniList media entry is malformed: {e}", context, e) from e


class _RetryableError(Exception):
    """Internal wrapper marking an InfrastructureError as worth retrying."""

    def __init__(self, error: InfrastructureError, retry_after: float | None = None) -> None:
        super().__init__(str(error))
        self.error = error
        self.retry_after = retry_after


def _catalog_error(
    code: ErrorCode,
    message: str,
    context: ErrorContext,
    original_error: Exception | None = None,
    **extra: Any,
) -> InfrastructureError:
    return create_api_error(
        message,
        code=code,
        operation=context.operation,
        additional_data={**(context.additional_data or {}), **extra},
        original_error=original_error,
    )


def _invalid_response(
    message: str,
    context: ErrorContext,
    original_error: Exception | None = None,
) -> InfrastructureError:
    return _catalog_error(ErrorCode.CATALOG_API_INVALID_RESPONSE, message, context, original_error)


def _convert_status(status: int) -> tuple[ErrorCode, str]:
    """Map a non-success HTTP status to an error code and message."""
    if status in (HTTPStatusCodes.UNAUTHORIZED, HTTPStatusCodes.FORBIDDEN):
        return ErrorCode.CATALOG_API_AUTHENTICATION_ERROR, f"AniList rejected the request (status {status})"
    if status == HTTPStatusCodes.TOO_MANY_REQUESTS:
        return ErrorCode.CATALOG_API_RATE_LIMIT_EXCEEDED, "AniList rate limit exceeded"
    if HTTPStatusCodes.is_server_error(status):
        return ErrorCode.CATALOG_API_SERVER_ERROR, f"AniList server error (status {status})"
    return ErrorCode.CATALOG_API_REQUEST_FAILED, f"AniList request failed (status {status})"


def _parse_retry_after(value: str | None) -> float | None:
    if not value:
        return None
    try:
        return max(float(value), 0.0)
    except ValueError:
        logger.debug("Ignoring unparseable Retry-After header: %s", value)
        return None
