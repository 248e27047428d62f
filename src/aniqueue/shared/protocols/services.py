"""Service protocols for dependency inversion.

The matching engine depends on these capability interfaces only, so it can
run against the real AniList and web-search clients or against
deterministic fakes in tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from aniqueue.core.matching.models import CandidateRecord


class CatalogClientProtocol(Protocol):
    """Protocol for the anime catalog search.

    Example:
        >>> from aniqueue.services.anilist import AniListClient
        >>>
        >>> client: CatalogClientProtocol = AniListClient()
        >>> records = await client.search_catalog("Attack on Titan")
    """

    async def search_catalog(self, phrase: str) -> list[CandidateRecord]:
        """Search the catalog for a phrase.

        Args:
            phrase: Search phrase

        Returns:
            Candidate records in the order returned by the catalog; empty when
            the search succeeds but finds nothing

        Raises:
            InfrastructureError: On transport failure or malformed response
        """


class RefinementClientProtocol(Protocol):
    """Protocol for turning a messy phrase into a cleaner title."""

    async def refine_phrase(self, phrase: str) -> str | None:
        """Look the phrase up externally and extract a cleaner title.

        Args:
            phrase: Phrase that scored poorly against the catalog

        Returns:
            Cleaned title, or None when unavailable. Must not raise.
        """
