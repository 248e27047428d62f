"""Two-pass matching engine for resolving anime names against the catalog.

This module provides the core matching functionality: it resolves aliases,
searches the catalog, scores candidates with fuzzy matching, classifies the
outcome, and retries with a refined phrase when confidence is low.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Callable

from aniqueue.core.aliases import ALIASES, resolve_alias
from aniqueue.core.matching.classifier import (
    MatchThresholds,
    build_result,
    needs_refinement,
    pick_better_attempt,
)
from aniqueue.core.matching.models import (
    CandidateRecord,
    MatchAttempt,
    MatchResult,
    ScoredCandidate,
)
from aniqueue.core.matching.scoring import ScoreCombination, score_candidate
from aniqueue.core.normalization import normalize
from aniqueue.shared.protocols.services import (
    CatalogClientProtocol,
    RefinementClientProtocol,
)

logger = logging.getLogger(__name__)

CandidateScorer = Callable[[str, CandidateRecord], float]


class MatchingEngine:
    """Two-pass matching engine.

    The engine orchestrates one line at a time:
    1. Trim and resolve aliases
    2. Search the catalog and score every candidate
    3. Return directly when the best score clears the low-confidence gate
    4. Otherwise ask the refiner for a cleaner phrase and search again
    5. Keep whichever attempt has the higher best score

    The engine keeps no state between calls.

    Args:
        catalog: Catalog search port (AniList in production)
        refiner: Optional refinement port; refinement is skipped without it
        thresholds: Decision boundary (defaults to ConfidenceThresholds)
        combination: How token and edit similarity are combined
        aliases: Normalized shorthand -> canonical phrase mapping
        scorer: Override for candidate scoring
    """

    def __init__(
        self,
        catalog: CatalogClientProtocol,
        refiner: RefinementClientProtocol | None = None,
        *,
        thresholds: MatchThresholds | None = None,
        combination: ScoreCombination = ScoreCombination.MAX,
        aliases: Mapping[str, str] = ALIASES,
        scorer: CandidateScorer | None = None,
    ) -> None:
        self.catalog = catalog
        self.refiner = refiner
        self.thresholds = thresholds or MatchThresholds()
        self.aliases = aliases
        self._scorer: CandidateScorer = scorer or (
            lambda phrase, record: score_candidate(phrase, record, combination)
        )

    async def run_attempt(self, phrase: str) -> MatchAttempt:
        """Search the catalog for ``phrase`` and score the candidates.

        Raises:
            InfrastructureError: Propagated from the catalog client
        """
        records = await self.catalog.search_catalog(phrase)
        scored = [ScoredCandidate(record=record, score=self._scorer(phrase, record)) for record in records]
        attempt = MatchAttempt.from_scored(phrase, scored)

        logger.debug(
            "Attempt '%s': %d candidates, best=%.3f, margin=%.3f",
            phrase,
            len(attempt.candidates),
            attempt.best_score,
            attempt.margin,
        )
        return attempt

    async def match_anime(self, raw_input: str) -> MatchResult | None:
        """Match one raw input line.

        Args:
            raw_input: One line of user text

        Returns:
            MatchResult, or None for blank input (no catalog call is made)

        Raises:
            InfrastructureError: When a catalog search fails; refinement
                failures never propagate
        """
        trimmed = raw_input.strip()
        if not trimmed:
            return None

        phrase = resolve_alias(trimmed, self.aliases)
        initial = await self.run_attempt(phrase)

        if not needs_refinement(initial, self.thresholds):
            return build_result(trimmed, initial, self.thresholds)

        chosen = await self._refine_attempt(initial)
        return build_result(trimmed, chosen, self.thresholds, refined=chosen is not initial)

    async def _refine_attempt(self, initial: MatchAttempt) -> MatchAttempt:
        """Return ``initial`` or a better attempt built from a refined phrase."""
        refined_phrase = await self._refine_phrase(initial.phrase)
        if not refined_phrase:
            return initial

        if normalize(refined_phrase) == normalize(initial.phrase):
            logger.debug("Refined phrase '%s' matches the phrase already tried", refined_phrase)
            return initial

        retry = await self.run_attempt(refined_phrase)
        chosen = pick_better_attempt(initial, retry)

        logger.info(
            "Refinement '%s' -> '%s': best %.3f -> %.3f (%s)",
            initial.phrase,
            refined_phrase,
            initial.best_score,
            retry.best_score,
            "kept refined" if chosen is retry else "kept initial",
        )
        return chosen

    async def _refine_phrase(self, phrase: str) -> str | None:
        if self.refiner is None:
            return None

        try:
            return await self.refiner.refine_phrase(phrase)
        except Exception:  # pylint: disable=broad-exception-caught
            # Refinement is best-effort; a failure means "no refinement"
            logger.warning("Refinement failed for '%s'", phrase, exc_info=True)
            return None
