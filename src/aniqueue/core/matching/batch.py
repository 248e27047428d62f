"""Sequential batch matching over a pasted list of anime names.

Lines are processed one after another; a failed catalog search for one
line is logged and recorded, and the batch moves on to the next line.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from aniqueue.core.matching.engine import MatchingEngine
from aniqueue.core.matching.models import MatchResult, MatchType
from aniqueue.shared.errors import AniQueueError
from aniqueue.shared.logging import log_operation_error, log_operation_success

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineFailure:
    """A line whose catalog search failed during this run."""

    raw: str
    error: AniQueueError


@dataclass
class BatchOutcome:
    """Results and failures of one batch run, in input order."""

    results: list[MatchResult] = field(default_factory=list)
    failures: list[LineFailure] = field(default_factory=list)

    def count(self, match_type: MatchType) -> int:
        return sum(1 for result in self.results if result.match_type is match_type)

    def summary(self) -> dict[str, int]:
        counts = Counter(result.match_type.value for result in self.results)
        return {
            MatchType.AUTO.value: counts[MatchType.AUTO.value],
            MatchType.REVIEW.value: counts[MatchType.REVIEW.value],
            MatchType.NO_MATCH.value: counts[MatchType.NO_MATCH.value],
            "failed": len(self.failures),
        }


def split_lines(text: str) -> list[str]:
    """Split pasted text into trimmed, non-blank lines."""
    return [line.strip() for line in text.splitlines() if line.strip()]


async def match_lines(engine: MatchingEngine, lines: Iterable[str]) -> BatchOutcome:
    """Match every line strictly in order.

    Args:
        engine: Matching engine
        lines: Raw input lines; blank lines are skipped

    Returns:
        BatchOutcome with one result per successfully processed line
    """
    outcome = BatchOutcome()
    start = time.perf_counter()

    for line in lines:
        try:
            result = await engine.match_anime(line)
        except AniQueueError as error:
            log_operation_error(
                logger=logger,
                error=error,
                operation="match_line",
                additional_context={"line": line.strip()},
            )
            outcome.failures.append(LineFailure(raw=line.strip(), error=error))
            continue

        if result is not None:
            outcome.results.append(result)

    log_operation_success(
        logger=logger,
        operation="match_lines",
        duration_ms=(time.perf_counter() - start) * 1000,
        result_info=outcome.summary(),
    )
    return outcome
