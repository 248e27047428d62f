"""Matching engine: scoring, classification, and two-pass orchestration."""

from .batch import BatchOutcome, LineFailure, match_lines, split_lines
from .classifier import MatchThresholds, build_result, classify_attempt, needs_refinement, pick_better_attempt
from .engine import MatchingEngine
from .models import (
    CandidateRecord,
    CandidateTitles,
    MatchAttempt,
    MatchResult,
    MatchType,
    ScoredCandidate,
)
from .scoring import ScoreCombination, edit_similarity, score_candidate, similarity, token_similarity

__all__ = [
    "BatchOutcome",
    "CandidateRecord",
    "CandidateTitles",
    "LineFailure",
    "MatchAttempt",
    "MatchResult",
    "MatchThresholds",
    "MatchType",
    "MatchingEngine",
    "ScoreCombination",
    "ScoredCandidate",
    "build_result",
    "classify_attempt",
    "edit_similarity",
    "match_lines",
    "needs_refinement",
    "pick_better_attempt",
    "score_candidate",
    "similarity",
    "split_lines",
    "token_similarity",
]
