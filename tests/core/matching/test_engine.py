"""Tests for the two-pass matching engine."""

from __future__ import annotations

import pytest

from aniqueue.core.matching.classifier import MatchThresholds
from aniqueue.core.matching.engine import MatchingEngine
from aniqueue.core.matching.models import MatchType
from aniqueue.core.matching.scoring import ScoreCombination
from aniqueue.shared.errors import ErrorCode, InfrastructureError


def table_scorer(scores: dict[tuple[str, int], float]):
    """Scorer returning fixed scores per (phrase, record id)."""

    def _score(phrase, record) -> float:
        return scores[(phrase, record.id)]

    return _score


class TestMatchAnimeScenarios:
    """End-to-end behaviour of match_anime with fake ports."""

    @pytest.mark.asyncio
    async def test_alias_resolves_to_exact_single_candidate(self, make_catalog, make_record) -> None:
        record = make_record(113415, english="Jujutsu Kaisen", romaji="Jujutsu Kaisen", native="呪術廻戦")
        catalog = make_catalog({"Jujutsu Kaisen": [record]})
        engine = MatchingEngine(catalog)

        result = await engine.match_anime("jjk")

        assert catalog.calls == ["Jujutsu Kaisen"]
        assert result.match_type is MatchType.AUTO
        assert result.best.record is record
        assert result.best.score == 1.0
        assert result.raw == "jjk"
        assert result.search_phrase == "Jujutsu Kaisen"

    @pytest.mark.asyncio
    async def test_close_runner_up_goes_to_review(self, make_catalog, make_record) -> None:
        first, second = make_record(1), make_record(2)
        catalog = make_catalog({"one punch man": [second, first]})
        engine = MatchingEngine(
            catalog,
            scorer=table_scorer({("one punch man", 1): 0.95, ("one punch man", 2): 0.90}),
        )

        result = await engine.match_anime("one punch man")

        assert result.match_type is MatchType.REVIEW
        assert [candidate.record.id for candidate in result.candidates] == [1, 2]
        assert [candidate.score for candidate in result.candidates] == [0.95, 0.90]
        assert result.best.record.id == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["", "   ", "\t\n"])
    async def test_blank_input_makes_no_catalog_call(self, make_catalog, raw: str) -> None:
        catalog = make_catalog()
        engine = MatchingEngine(catalog)

        assert await engine.match_anime(raw) is None
        assert catalog.calls == []

    @pytest.mark.asyncio
    async def test_no_hits_without_refiner_is_no_match(self, make_catalog) -> None:
        catalog = make_catalog()
        engine = MatchingEngine(catalog)

        result = await engine.match_anime("zzzz unknown show")

        assert result.match_type is MatchType.NO_MATCH
        assert result.candidates == ()
        assert result.best is None
        assert result.refined is False

    @pytest.mark.asyncio
    async def test_refined_attempt_replaces_weak_initial(self, make_catalog, make_refiner, make_record) -> None:
        aot, other = make_record(16498), make_record(99)
        catalog = make_catalog({"shingeki": [aot], "Attack on Titan": [aot, other]})
        refiner = make_refiner("Attack on Titan")
        engine = MatchingEngine(
            catalog,
            refiner,
            scorer=table_scorer(
                {
                    ("shingeki", 16498): 0.40,
                    ("Attack on Titan", 16498): 0.85,
                    ("Attack on Titan", 99): 0.55,
                }
            ),
        )

        result = await engine.match_anime("shingeki")

        assert refiner.calls == ["shingeki"]
        assert catalog.calls == ["shingeki", "Attack on Titan"]
        assert result.match_type is MatchType.AUTO
        assert result.best.score == 0.85
        assert result.refined is True
        assert result.search_phrase == "Attack on Titan"
        assert result.raw == "shingeki"

    @pytest.mark.asyncio
    async def test_confident_initial_skips_refinement(self, make_catalog, make_refiner, make_record) -> None:
        catalog = make_catalog({"bebop": [make_record(1)]})
        refiner = make_refiner("Cowboy Bebop")
        engine = MatchingEngine(catalog, refiner, scorer=table_scorer({("bebop", 1): 0.60}))

        result = await engine.match_anime("bebop")

        assert refiner.calls == []
        assert catalog.calls == ["bebop"]
        assert result.match_type is MatchType.REVIEW
        assert result.best.score == 0.60
        assert result.refined is False


class TestRefinementFallbacks:
    """Refinement problems always fall back to the initial attempt."""

    @pytest.mark.asyncio
    async def test_refiner_error_is_absorbed(self, make_catalog, make_refiner, make_record) -> None:
        catalog = make_catalog({"weak": [make_record(1)]})
        refiner = make_refiner(error=RuntimeError("search exploded"))
        engine = MatchingEngine(catalog, refiner, scorer=table_scorer({("weak", 1): 0.2}))

        result = await engine.match_anime("weak")

        assert refiner.calls == ["weak"]
        assert catalog.calls == ["weak"]
        assert result.match_type is MatchType.REVIEW
        assert result.refined is False

    @pytest.mark.asyncio
    async def test_refiner_returning_nothing(self, make_catalog, make_refiner) -> None:
        catalog = make_catalog()
        engine = MatchingEngine(catalog, make_refiner(None))

        result = await engine.match_anime("nothing")

        assert catalog.calls == ["nothing"]
        assert result.match_type is MatchType.NO_MATCH

    @pytest.mark.asyncio
    async def test_refined_phrase_equal_after_normalization_is_not_retried(
        self, make_catalog, make_refiner
    ) -> None:
        catalog = make_catalog()
        engine = MatchingEngine(catalog, make_refiner("  NOTHING!! "))

        await engine.match_anime("nothing")

        assert catalog.calls == ["nothing"]

    @pytest.mark.asyncio
    async def test_worse_retry_keeps_initial(self, make_catalog, make_refiner, make_record) -> None:
        catalog = make_catalog({"weak": [make_record(1)], "worse": [make_record(2)]})
        engine = MatchingEngine(
            catalog,
            make_refiner("worse"),
            scorer=table_scorer({("weak", 1): 0.5, ("worse", 2): 0.5}),
        )

        result = await engine.match_anime("weak")

        assert catalog.calls == ["weak", "worse"]
        assert result.best.record.id == 1
        assert result.search_phrase == "weak"
        assert result.refined is False

    @pytest.mark.asyncio
    async def test_retry_hits_after_empty_initial(self, make_catalog, make_refiner, make_record) -> None:
        catalog = make_catalog({"Frieren": [make_record(154587, english="Frieren: Beyond Journey's End")]})
        engine = MatchingEngine(catalog, make_refiner("Frieren"))

        result = await engine.match_anime("that elf mage show")

        assert result.match_type is not MatchType.NO_MATCH
        assert result.refined is True
        assert result.best.record.id == 154587


class TestEngineConfiguration:
    """Thresholds and combination rule are injectable."""

    @pytest.mark.asyncio
    async def test_custom_thresholds(self, make_catalog, make_record) -> None:
        catalog = make_catalog({"bebop": [make_record(1)]})
        engine = MatchingEngine(
            catalog,
            thresholds=MatchThresholds(auto=0.5, margin_min=0.2, low_confidence=0.3),
            scorer=table_scorer({("bebop", 1): 0.6}),
        )

        result = await engine.match_anime("bebop")

        assert result.match_type is MatchType.AUTO

    @pytest.mark.asyncio
    async def test_token_only_combination(self, make_catalog, make_record) -> None:
        record = make_record(1, english="Fullmetal Alchemist")
        engine = MatchingEngine(make_catalog({"fullmetal alchemsit": [record]}), combination=ScoreCombination.TOKEN)

        result = await engine.match_anime("fullmetal alchemsit")

        assert result.best.score == pytest.approx(1 / 3)


class TestCatalogFailures:
    """Catalog failures propagate to the caller."""

    @pytest.mark.asyncio
    async def test_catalog_error_propagates(self, make_refiner) -> None:
        class BrokenCatalog:
            async def search_catalog(self, phrase):
                raise InfrastructureError(ErrorCode.CATALOG_API_TIMEOUT, "timed out")

        refiner = make_refiner("anything")
        engine = MatchingEngine(BrokenCatalog(), refiner)

        with pytest.raises(InfrastructureError) as exc_info:
            await engine.match_anime("naruto")

        assert exc_info.value.code is ErrorCode.CATALOG_API_TIMEOUT
        assert refiner.calls == []
