"""Classification rules for match attempts.

Everything here is pure: the decision boundary lives in ``MatchThresholds``
and the functions only read attempts, so threshold edges can be tested
without any catalog or network access.
"""

from __future__ import annotations

from dataclasses import dataclass

from aniqueue.core.matching.models import MatchAttempt, MatchResult, MatchType
from aniqueue.shared.constants.matching import ConfidenceThresholds


@dataclass(frozen=True)
class MatchThresholds:
    """Decision boundary for the classifier and the refinement gate.

    Attributes:
        auto: Minimum best score for an automatic match
        margin_min: Minimum lead over the runner-up for an automatic match
        low_confidence: Best score below which a refined search is tried
    """

    auto: float = ConfidenceThresholds.AUTO
    margin_min: float = ConfidenceThresholds.MARGIN_MIN
    low_confidence: float = ConfidenceThresholds.LOW_CONFIDENCE

    def __post_init__(self) -> None:
        for name in ("auto", "margin_min", "low_confidence"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                error_message = f"{name} must be between 0.0 and 1.0, got {value}"
                raise ValueError(error_message)


def classify_attempt(attempt: MatchAttempt, thresholds: MatchThresholds) -> MatchType:
    """Classify one attempt.

    1. No candidates -> NO_MATCH
    2. best >= auto and margin >= margin_min -> AUTO
    3. Otherwise -> REVIEW
    """
    if attempt.best is None:
        return MatchType.NO_MATCH
    if attempt.best.score >= thresholds.auto and attempt.margin >= thresholds.margin_min:
        return MatchType.AUTO
    return MatchType.REVIEW


def needs_refinement(attempt: MatchAttempt, thresholds: MatchThresholds) -> bool:
    """True when the attempt found nothing or its best score is below the gate."""
    return attempt.best is None or attempt.best.score < thresholds.low_confidence


def pick_better_attempt(initial: MatchAttempt, retry: MatchAttempt) -> MatchAttempt:
    """Choose between the initial and the refined attempt.

    The retry wins only with a strictly higher best score (no best counts
    as 0.0). A retry that found candidates always beats an initial attempt
    that found none, so no-match is reserved for attempts that all came
    back empty.
    """
    if initial.best is None and retry.best is not None:
        return retry
    if retry.best_score > initial.best_score:
        return retry
    return initial


def build_result(
    raw: str,
    attempt: MatchAttempt,
    thresholds: MatchThresholds,
    *,
    refined: bool = False,
) -> MatchResult:
    """Turn the chosen attempt into the externally visible result."""
    match_type = classify_attempt(attempt, thresholds)
    return MatchResult(
        raw=raw,
        match_type=match_type,
        candidates=attempt.candidates,
        best=attempt.best if match_type is not MatchType.NO_MATCH else None,
        search_phrase=attempt.phrase,
        refined=refined,
    )
