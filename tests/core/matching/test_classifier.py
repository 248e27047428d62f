"""Tests for attempt classification and refinement decisions."""

from __future__ import annotations

import pytest

from aniqueue.core.matching.classifier import (
    MatchThresholds,
    build_result,
    classify_attempt,
    needs_refinement,
    pick_better_attempt,
)
from aniqueue.core.matching.models import MatchAttempt, MatchType, ScoredCandidate


@pytest.fixture
def attempt_with(make_record):
    """Build an attempt from a list of scores (catalog order)."""

    def _build(*scores: float, phrase: str = "phrase") -> MatchAttempt:
        scored = [ScoredCandidate(make_record(index + 1), score) for index, score in enumerate(scores)]
        return MatchAttempt.from_scored(phrase, scored)

    return _build


class TestMatchThresholds:
    """Test cases for MatchThresholds."""

    def test_defaults(self) -> None:
        thresholds = MatchThresholds()
        assert thresholds.auto == 0.70
        assert thresholds.margin_min == 0.20
        assert thresholds.low_confidence == 0.55

    @pytest.mark.parametrize("field", ["auto", "margin_min", "low_confidence"])
    def test_out_of_range(self, field: str) -> None:
        with pytest.raises(ValueError, match=field):
            MatchThresholds(**{field: 1.5})


class TestClassifyAttempt:
    """Test cases for classify_attempt()."""

    def test_no_candidates(self, attempt_with) -> None:
        assert classify_attempt(attempt_with(), MatchThresholds()) is MatchType.NO_MATCH

    def test_auto_needs_score_and_margin(self, attempt_with) -> None:
        thresholds = MatchThresholds()
        assert classify_attempt(attempt_with(0.9, 0.5), thresholds) is MatchType.AUTO
        assert classify_attempt(attempt_with(0.9, 0.8), thresholds) is MatchType.REVIEW
        assert classify_attempt(attempt_with(0.6, 0.1), thresholds) is MatchType.REVIEW

    def test_boundaries_are_inclusive(self, attempt_with) -> None:
        thresholds = MatchThresholds(auto=0.75, margin_min=0.25)
        assert classify_attempt(attempt_with(0.75, 0.5), thresholds) is MatchType.AUTO

    @pytest.mark.parametrize(("best", "second"), [(0.95, 0.75), (0.7, 0.5), (0.9, 0.7)])
    def test_margin_equal_to_default_minimum_is_auto(self, attempt_with, best: float, second: float) -> None:
        attempt = attempt_with(best, second)

        assert attempt.margin == 0.20
        assert classify_attempt(attempt, MatchThresholds()) is MatchType.AUTO

    def test_single_low_candidate_is_review(self, attempt_with) -> None:
        assert classify_attempt(attempt_with(0.3), MatchThresholds()) is MatchType.REVIEW

    def test_single_strong_candidate_is_auto(self, attempt_with) -> None:
        assert classify_attempt(attempt_with(0.7), MatchThresholds()) is MatchType.AUTO

    @pytest.mark.parametrize("low", [0.0, 0.3, 0.69])
    @pytest.mark.parametrize("high", [0.7, 0.85, 1.0])
    def test_monotonic_in_confidence(self, attempt_with, low: float, high: float) -> None:
        thresholds = MatchThresholds()
        assert classify_attempt(attempt_with(low), thresholds) is MatchType.REVIEW
        assert classify_attempt(attempt_with(high), thresholds) is MatchType.AUTO


class TestNeedsRefinement:
    """Test cases for the low-confidence gate."""

    def test_empty_attempt_needs_refinement(self, attempt_with) -> None:
        assert needs_refinement(attempt_with(), MatchThresholds()) is True

    def test_below_gate(self, attempt_with) -> None:
        assert needs_refinement(attempt_with(0.54), MatchThresholds()) is True

    def test_at_gate(self, attempt_with) -> None:
        assert needs_refinement(attempt_with(0.55), MatchThresholds()) is False


class TestPickBetterAttempt:
    """Test cases for pick_better_attempt()."""

    def test_higher_retry_wins(self, attempt_with) -> None:
        initial, retry = attempt_with(0.4), attempt_with(0.8)
        assert pick_better_attempt(initial, retry) is retry

    def test_tie_keeps_initial(self, attempt_with) -> None:
        initial, retry = attempt_with(0.4), attempt_with(0.4)
        assert pick_better_attempt(initial, retry) is initial

    def test_lower_retry_loses(self, attempt_with) -> None:
        initial, retry = attempt_with(0.4), attempt_with(0.2)
        assert pick_better_attempt(initial, retry) is initial

    def test_empty_retry_never_wins(self, attempt_with) -> None:
        initial, retry = attempt_with(0.1), attempt_with()
        assert pick_better_attempt(initial, retry) is initial

    def test_retry_with_candidates_beats_empty_initial(self, attempt_with) -> None:
        initial, retry = attempt_with(), attempt_with(0.0)
        assert pick_better_attempt(initial, retry) is retry


class TestBuildResult:
    """Test cases for build_result()."""

    def test_no_match_result(self, attempt_with) -> None:
        result = build_result("raw", attempt_with(), MatchThresholds())

        assert result.match_type is MatchType.NO_MATCH
        assert result.best is None
        assert result.candidates == ()

    def test_review_result_keeps_all_candidates(self, attempt_with) -> None:
        attempt = attempt_with(0.5, 0.6, 0.1, 0.3, phrase="searched")
        result = build_result("raw", attempt, MatchThresholds(), refined=True)

        assert result.match_type is MatchType.REVIEW
        assert [candidate.score for candidate in result.candidates] == [0.6, 0.5, 0.3, 0.1]
        assert result.best is result.candidates[0]
        assert result.search_phrase == "searched"
        assert result.refined is True
