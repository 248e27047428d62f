"""Matching configuration model.

Holds the tunable decision boundary of the classifier and the rule used
to combine token and edit similarity.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from aniqueue.core.matching.classifier import MatchThresholds
from aniqueue.core.matching.scoring import ScoreCombination
from aniqueue.shared.constants import ConfidenceThresholds


class MatchingSettings(BaseModel):
    """Matching thresholds and similarity combination rule."""

    auto_threshold: float = Field(
        default=ConfidenceThresholds.AUTO,
        ge=0.0,
        le=1.0,
        description="Minimum best score for an automatic match",
    )
    margin_min: float = Field(
        default=ConfidenceThresholds.MARGIN_MIN,
        ge=0.0,
        le=1.0,
        description="Minimum lead over the runner-up for an automatic match",
    )
    low_confidence_threshold: float = Field(
        default=ConfidenceThresholds.LOW_CONFIDENCE,
        ge=0.0,
        le=1.0,
        description="Best score below which refinement is attempted",
    )
    combination: ScoreCombination = Field(
        default=ScoreCombination.MAX,
        description="Similarity combination rule: max, token, or edit",
    )

    def to_thresholds(self) -> MatchThresholds:
        return MatchThresholds(
            auto=self.auto_threshold,
            margin_min=self.margin_min,
            low_confidence=self.low_confidence_threshold,
        )


__all__ = ["MatchingSettings"]
