"""Assemble a MatchingEngine from application settings."""

from __future__ import annotations

import logging

import aiohttp

from aniqueue.config.models.settings import Settings
from aniqueue.core.matching.engine import MatchingEngine
from aniqueue.services.anilist import AniListClient
from aniqueue.services.refinement import WebSearchRefiner

logger = logging.getLogger(__name__)


def build_engine(settings: Settings, session: aiohttp.ClientSession | None = None) -> MatchingEngine:
    """Create an engine wired to AniList and, when configured, web search.

    Args:
        settings: Application settings
        session: Optional HTTP session shared by both clients

    Returns:
        MatchingEngine ready for ``match_anime`` calls
    """
    catalog = AniListClient(settings.api.anilist, session=session)

    refiner: WebSearchRefiner | None = WebSearchRefiner(settings.api.search, session=session)
    if not refiner.is_configured:
        logger.info("Web search credentials not set; refinement pass disabled")
        refiner = None

    return MatchingEngine(
        catalog,
        refiner,
        thresholds=settings.matching.to_thresholds(),
        combination=settings.matching.combination,
    )


__all__ = ["build_engine"]
