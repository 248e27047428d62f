"""Domain models for the matching engine.

This module defines frozen dataclasses that represent the domain concepts
in the anime matching system, ensuring immutability and type safety.
All of them are built fresh for every ``match_anime`` call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from aniqueue.shared.constants.matching import ValidationConstants


class MatchType(str, Enum):
    """Classification of one input line."""

    NO_MATCH = "no-match"
    AUTO = "auto"
    REVIEW = "review"


@dataclass(frozen=True)
class CandidateTitles:
    """Title variants of a catalog entry; at least one must be present."""

    romaji: str | None = None
    english: str | None = None
    native: str | None = None

    def __post_init__(self) -> None:
        """Reject non-string title variants.

        Raises:
            TypeError: If a variant is neither None nor a string
        """
        for name in ("romaji", "english", "native"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                error_message = f"{name} title must be a string, got {type(value).__name__}"
                raise TypeError(error_message)

    @property
    def variants(self) -> tuple[str, ...]:
        """Present titles, preferred display order first."""
        return tuple(title for title in (self.english, self.romaji, self.native) if title)


@dataclass(frozen=True)
class CandidateRecord:
    """One catalog entry as returned by the catalog search.

    Attributes:
        id: Catalog identifier, unique within the catalog
        titles: Title variants (romaji / english / native)
        cover_image: Cover image URL if available
        season_year: Year of the first season if known
    """

    id: int
    titles: CandidateTitles
    cover_image: str | None = None
    season_year: int | None = None

    def __post_init__(self) -> None:
        """Validate record invariants.

        Raises:
            ValueError: If no title variant is present
            TypeError: If season_year or cover_image has the wrong type
        """
        if not self.titles.variants:
            error_message = f"catalog entry {self.id} has no title"
            raise ValueError(error_message)
        if self.season_year is not None and (
            isinstance(self.season_year, bool) or not isinstance(self.season_year, int)
        ):
            error_message = f"catalog entry {self.id} has a non-integer season year"
            raise TypeError(error_message)
        if self.cover_image is not None and not isinstance(self.cover_image, str):
            error_message = f"catalog entry {self.id} has a non-string cover image"
            raise TypeError(error_message)

    @property
    def display_title(self) -> str:
        """English title, falling back to romaji then native."""
        return self.titles.variants[0]

    @classmethod
    def from_api(cls, media: dict[str, Any]) -> CandidateRecord:
        """Build a record from an AniList ``media`` object.

        Raises:
            KeyError: If ``id`` is missing
            ValueError: If no title is present or ``id`` is not an integer
            TypeError: If a title, cover, or season year has the wrong type
        """
        title = media.get("title") or {}
        cover = media.get("coverImage") or {}
        return cls(
            id=int(media["id"]),
            titles=CandidateTitles(
                romaji=title.get("romaji"),
                english=title.get("english"),
                native=title.get("native"),
            ),
            cover_image=cover.get("medium"),
            season_year=media.get("seasonYear"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.display_title,
            "titles": {
                "romaji": self.titles.romaji,
                "english": self.titles.english,
                "native": self.titles.native,
            },
            "cover_image": self.cover_image,
            "season_year": self.season_year,
        }


@dataclass(frozen=True)
class ScoredCandidate:
    """A catalog entry paired with its similarity to one search phrase."""

    record: CandidateRecord
    score: float

    def __post_init__(self) -> None:
        """Validate the score range.

        Raises:
            ValueError: If score is outside [0.0, 1.0]
        """
        if not (ValidationConstants.MIN_CONFIDENCE_SCORE <= self.score <= ValidationConstants.MAX_CONFIDENCE_SCORE):
            error_message = (
                "score must be between "
                f"{ValidationConstants.MIN_CONFIDENCE_SCORE} and "
                f"{ValidationConstants.MAX_CONFIDENCE_SCORE}, "
                f"got {self.score}"
            )
            raise ValueError(error_message)

    def to_dict(self) -> dict[str, Any]:
        return {**self.record.to_dict(), "score": round(self.score, 4)}


@dataclass(frozen=True)
class MatchAttempt:
    """Scored catalog response for one search phrase.

    ``candidates`` must already be sorted by score, highest first
    (``MatchAttempt.from_scored`` does the sorting).

    Attributes:
        phrase: Search phrase sent to the catalog and used for scoring
        candidates: Scored candidates, best first
    """

    phrase: str
    candidates: tuple[ScoredCandidate, ...] = field(default_factory=tuple)

    @classmethod
    def from_scored(cls, phrase: str, scored: list[ScoredCandidate]) -> MatchAttempt:
        """Sort by descending score; equal scores keep catalog order."""
        return cls(
            phrase=phrase,
            candidates=tuple(sorted(scored, key=lambda candidate: candidate.score, reverse=True)),
        )

    @property
    def best(self) -> ScoredCandidate | None:
        return self.candidates[0] if self.candidates else None

    @property
    def second(self) -> ScoredCandidate | None:
        return self.candidates[1] if len(self.candidates) > 1 else None

    @property
    def best_score(self) -> float:
        """Score of the best candidate, 0.0 when there is none."""
        return self.best.score if self.best else 0.0

    @property
    def margin(self) -> float:
        """Gap between the best and the runner-up.

        1.0 when there is a single candidate, 0.0 when there are none.
        """
        if self.best is None:
            return 0.0
        if self.second is None:
            return ValidationConstants.SOLE_CANDIDATE_MARGIN
        return round(self.best.score - self.second.score, ValidationConstants.SCORE_PRECISION)


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching one raw input line.

    Attributes:
        raw: The trimmed input line
        match_type: no-match, auto, or review
        candidates: Every scored candidate of the chosen attempt, best first
        best: Best candidate (None only for no-match)
        search_phrase: Phrase of the attempt the result was built from
        refined: True when the refined second attempt was chosen
    """

    raw: str
    match_type: MatchType
    candidates: tuple[ScoredCandidate, ...] = field(default_factory=tuple)
    best: ScoredCandidate | None = None
    search_phrase: str = ""
    refined: bool = False

    def __post_init__(self) -> None:
        """Validate result invariants.

        Raises:
            ValueError: If best is missing for a match, or present for no-match
        """
        if self.match_type is MatchType.NO_MATCH and self.best is not None:
            error_message = "no-match result cannot carry a best candidate"
            raise ValueError(error_message)
        if self.match_type is not MatchType.NO_MATCH and self.best is None:
            error_message = f"{self.match_type.value} result requires a best candidate"
            raise ValueError(error_message)

    def to_dict(self) -> dict[str, Any]:
        """Convert MatchResult to a JSON-friendly dict."""
        return {
            "raw": self.raw,
            "type": self.match_type.value,
            "search_phrase": self.search_phrase,
            "refined": self.refined,
            "best": self.best.to_dict() if self.best else None,
            "candidates": [candidate.to_dict() for candidate in self.candidates],
        }
