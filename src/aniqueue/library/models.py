"""Persistent models for the anime list and the review queue."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from aniqueue.core.matching.models import CandidateRecord, MatchResult, MatchType, ScoredCandidate


class ListEntry(BaseModel):
    """One anime in the user's list."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="Catalog identifier")
    title: str = Field(description="Display title (english, romaji, or native)")
    season_year: int | None = Field(default=None, description="Year of the first season")
    cover: str | None = Field(default=None, description="Cover image URL")
    raw_input: str = Field(default="", description="Line the entry was matched from")

    @classmethod
    def from_record(cls, record: CandidateRecord, raw_input: str) -> ListEntry:
        return cls(
            id=record.id,
            title=record.display_title,
            season_year=record.season_year,
            cover=record.cover_image,
            raw_input=raw_input,
        )


class QueuedCandidate(BaseModel):
    """A scored candidate kept with a review-queue item."""

    model_config = ConfigDict(extra="ignore")

    id: int
    title: str
    season_year: int | None = None
    cover: str | None = None
    score: float = Field(ge=0.0, le=1.0)

    @classmethod
    def from_scored(cls, candidate: ScoredCandidate) -> QueuedCandidate:
        record = candidate.record
        return cls(
            id=record.id,
            title=record.display_title,
            season_year=record.season_year,
            cover=record.cover_image,
            score=candidate.score,
        )


class QueueItem(BaseModel):
    """An input line waiting for the user's decision."""

    model_config = ConfigDict(extra="ignore")

    raw: str
    match_type: MatchType
    candidates: list[QueuedCandidate] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: MatchResult) -> QueueItem:
        return cls(
            raw=result.raw,
            match_type=result.match_type,
            candidates=[QueuedCandidate.from_scored(candidate) for candidate in result.candidates],
        )

    def to_entry(self, candidate_index: int) -> ListEntry:
        """Build a list entry from the chosen candidate.

        Raises:
            IndexError: If candidate_index is out of range
        """
        if not 0 <= candidate_index < len(self.candidates):
            error_message = f"candidate index {candidate_index} out of range"
            raise IndexError(error_message)
        candidate = self.candidates[candidate_index]
        return ListEntry(
            id=candidate.id,
            title=candidate.title,
            season_year=candidate.season_year,
            cover=candidate.cover,
            raw_input=self.raw,
        )


class LibraryState(BaseModel):
    """In-memory state of the list and queue."""

    entries: list[ListEntry] = Field(default_factory=list)
    queue: list[QueueItem] = Field(default_factory=list)


__all__ = [
    "LibraryState",
    "ListEntry",
    "QueueItem",
    "QueuedCandidate",
]
