"""
Pytest configuration and shared fixtures for AniQueue tests.

Catalog and refinement ports are replaced by in-memory fakes so that no
test touches the network.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from aniqueue.config import loader
from aniqueue.core.matching.models import CandidateRecord, CandidateTitles
from aniqueue.shared.constants import EnvVars


class FakeCatalog:
    """Catalog port returning canned records per phrase."""

    def __init__(self, responses: dict[str, list[CandidateRecord]] | None = None) -> None:
        self.responses = responses or {}
        self.calls: list[str] = []

    async def search_catalog(self, phrase: str) -> list[CandidateRecord]:
        self.calls.append(phrase)
        return list(self.responses.get(phrase, []))


class FakeRefiner:
    """Refinement port returning a fixed phrase (or raising)."""

    def __init__(self, phrase: str | None = None, error: Exception | None = None) -> None:
        self.phrase = phrase
        self.error = error
        self.calls: list[str] = []

    async def refine_phrase(self, phrase: str) -> str | None:
        self.calls.append(phrase)
        if self.error is not None:
            raise self.error
        return self.phrase


RecordFactory = Callable[..., CandidateRecord]


@pytest.fixture
def make_record() -> RecordFactory:
    """Build CandidateRecord values with sensible defaults."""

    def _make(
        record_id: int,
        english: str | None = None,
        romaji: str | None = None,
        native: str | None = None,
        season_year: int | None = None,
        cover_image: str | None = None,
    ) -> CandidateRecord:
        if english is None and romaji is None and native is None:
            english = f"Title {record_id}"
        return CandidateRecord(
            id=record_id,
            titles=CandidateTitles(romaji=romaji, english=english, native=native),
            cover_image=cover_image,
            season_year=season_year,
        )

    return _make


@pytest.fixture
def make_catalog() -> type[FakeCatalog]:
    return FakeCatalog


@pytest.fixture
def make_refiner() -> type[FakeRefiner]:
    return FakeRefiner


@pytest.fixture
def temp_data_dir(tmp_path: Path) -> Path:
    """Directory for library files."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return data_dir


@pytest.fixture(autouse=True)
def isolated_environment(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> Generator[None, None, None]:
    """Keep every test away from real credentials, config files, and cached settings."""
    monkeypatch.delenv(EnvVars.SEARCH_API_KEY, raising=False)
    monkeypatch.delenv(EnvVars.SEARCH_ENGINE_ID, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(loader._loader, "_instance", None)

    yield

    package_logger = logging.getLogger("aniqueue")
    package_logger.handlers.clear()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)
