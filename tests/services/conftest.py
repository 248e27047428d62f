"""Stub aiohttp session for client tests."""

from __future__ import annotations

import json
from typing import Any

import pytest


class StubResponse:
    """Minimal stand-in for aiohttp.ClientResponse used as an async context manager."""

    def __init__(
        self,
        status: int = 200,
        payload: Any = None,
        *,
        body: str | None = None,
        headers=None,
        text_error: BaseException | None = None,
    ) -> None:
        self.status = status
        self.body = body if body is not None else json.dumps(payload)
        self.headers = headers or {}
        self.text_error = text_error

    async def text(self) -> str:
        if self.text_error is not None:
            raise self.text_error
        return self.body

    async def json(self, content_type: str | None = None) -> Any:
        return json.loads(self.body)

    async def __aenter__(self) -> StubResponse:
        return self

    async def __aexit__(self, *exc_info) -> bool:
        return False


class StubSession:
    """Session that replays queued responses (or raises queued exceptions)."""

    def __init__(self, *responses: StubResponse | BaseException) -> None:
        self.responses = list(responses)
        self.requests: list[dict[str, Any]] = []

    def post(self, url: str, **kwargs: Any) -> StubResponse:
        self.requests.append({"method": "POST", "url": url, **kwargs})
        return self._next()

    def get(self, url: str, **kwargs: Any) -> StubResponse:
        self.requests.append({"method": "GET", "url": url, **kwargs})
        return self._next()

    def _next(self) -> StubResponse:
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


@pytest.fixture
def stub_session():
    return StubSession


@pytest.fixture
def stub_response():
    return StubResponse
