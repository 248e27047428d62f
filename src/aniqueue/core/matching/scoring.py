"""Similarity scoring between a search phrase and catalog titles.

Two complementary measures are computed over normalized text:

- token overlap (Jaccard over word sets), robust to word order and extra words
- edit distance (Levenshtein), robust to typos inside words

By default the combined score is the larger of the two, so one strong
signal is enough to indicate a match.
"""

from __future__ import annotations

import logging
from enum import Enum

from rapidfuzz.distance import Levenshtein

from aniqueue.core.matching.models import CandidateRecord
from aniqueue.core.normalization import normalize, tokenize

logger = logging.getLogger(__name__)


class ScoreCombination(str, Enum):
    """How the token and edit measures are combined."""

    MAX = "max"
    TOKEN = "token"
    EDIT = "edit"


def token_similarity(a: str, b: str) -> float:
    """Jaccard similarity of the normalized token sets.

    Returns 0.0 when either side has no tokens.

    Examples:
        >>> token_similarity("attack on titan", "Titan on Attack!")
        1.0
        >>> token_similarity("one punch man", "one piece")
        0.25
    """
    tokens_a = tokenize(a)
    tokens_b = tokenize(b)
    if not tokens_a or not tokens_b:
        return 0.0

    intersection = len(tokens_a & tokens_b)
    union = len(tokens_a | tokens_b)
    return intersection / union


def edit_similarity(a: str, b: str) -> float:
    """Levenshtein similarity of the normalized strings.

    ``1 - distance / max(len(a), len(b))`` with unit-cost insertion,
    deletion, and substitution. Two empty strings are identical (1.0);
    one empty string scores 0.0.

    Examples:
        >>> edit_similarity("naruto", "Naruto!")
        1.0
        >>> round(edit_similarity("narutp", "naruto"), 3)
        0.833
    """
    norm_a = normalize(a)
    norm_b = normalize(b)
    if not norm_a or not norm_b:
        return 1.0 if norm_a == norm_b else 0.0

    distance = Levenshtein.distance(norm_a, norm_b)
    return 1.0 - distance / max(len(norm_a), len(norm_b))


def similarity(
    a: str,
    b: str,
    combination: ScoreCombination = ScoreCombination.MAX,
) -> float:
    """Similarity between two strings in [0.0, 1.0].

    Identical strings score exactly 1.0 without any normalization work.

    Args:
        a: First string
        b: Second string
        combination: Which measure(s) to use; MAX takes the larger of both

    Returns:
        Similarity score between 0.0 and 1.0
    """
    if a == b:
        return 1.0

    if combination is ScoreCombination.TOKEN:
        return token_similarity(a, b)
    if combination is ScoreCombination.EDIT:
        return edit_similarity(a, b)
    return max(token_similarity(a, b), edit_similarity(a, b))


def score_candidate(
    phrase: str,
    record: CandidateRecord,
    combination: ScoreCombination = ScoreCombination.MAX,
) -> float:
    """Best similarity between ``phrase`` and any title variant of ``record``."""
    score = max(similarity(phrase, title, combination) for title in record.titles.variants)

    logger.debug(
        "Score for '%s' vs '%s' (id=%d): %.3f",
        phrase,
        record.display_title,
        record.id,
        score,
    )
    return score
