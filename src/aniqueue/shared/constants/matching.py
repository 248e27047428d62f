"""
Matching Engine Constants

This module contains all constants related to the matching engine:
confidence thresholds and score validation bounds.
"""


class ConfidenceThresholds:
    """Decision boundaries for classifying a match attempt.

    AUTO and MARGIN_MIN together decide whether the best candidate is
    accepted without review. LOW_CONFIDENCE gates the refinement pass.
    """

    AUTO = 0.70  # Minimum best score for automatic acceptance
    MARGIN_MIN = 0.20  # Minimum gap between best and runner-up for automatic acceptance
    LOW_CONFIDENCE = 0.55  # Below this best score, a refined search is attempted


class ValidationConstants:
    """Validation constants for matching domain models."""

    MIN_CONFIDENCE_SCORE = 0.0
    MAX_CONFIDENCE_SCORE = 1.0

    # Margin reported for an attempt with exactly one candidate
    SOLE_CANDIDATE_MARGIN = 1.0

    # Decimal places kept for score differences (0.95 - 0.75 must equal 0.20)
    SCORE_PRECISION = 9
