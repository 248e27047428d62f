"""External service clients used by the matching engine."""

from .anilist import AniListClient
from .refinement import WebSearchRefiner

__all__ = ["AniListClient", "WebSearchRefiner"]
