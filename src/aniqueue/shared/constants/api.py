"""
External API Constants

Endpoints, defaults, and source-priority data for the AniList catalog
and the web search used for phrase refinement.
"""

from typing import ClassVar


class AniListConfig:
    """AniList GraphQL API configuration."""

    ENDPOINT = "https://graphql.anilist.co"
    PAGE_SIZE = 5
    TIMEOUT = 10  # seconds
    RETRY_ATTEMPTS = 2
    RETRY_DELAY = 1.0  # seconds, doubled per attempt

    SEARCH_QUERY = """
query ($search: String, $perPage: Int) {
  Page(perPage: $perPage) {
    media(search: $search, type: ANIME) {
      id
      title {
        romaji
        english
        native
      }
      coverImage {
        medium
      }
      seasonYear
    }
  }
}
"""


class WebSearchConfig:
    """Google Programmable Search configuration for phrase refinement."""

    ENDPOINT = "https://www.googleapis.com/customsearch/v1"
    QUALIFIER = " anime"
    RESULT_COUNT = 5
    TIMEOUT = 10  # seconds

    # Lower value ranks higher; hosts match including subdomains
    SOURCE_PRIORITY: ClassVar[dict[str, int]] = {
        "myanimelist.net": 0,
        "anilist.co": 1,
    }
    DEFAULT_PRIORITY = 2

    # Site-name boilerplate appended to result titles
    SITE_SUFFIX_PATTERNS: ClassVar[list[str]] = [
        r"\s*[-|·–—]\s*MyAnimeList(?:\.net)?\s*$",
        r"\s*[-|·–—]\s*AniList(?:\.co)?\s*$",
        r"\s*[-|·–—]\s*Wikipedia\s*$",
        r"\s*[-|·–—]\s*Anime News Network\s*$",
        r"\s*[-|·–—]\s*Crunchyroll\s*$",
    ]
    # Parenthetical media-type tags such as "(TV)"
    TYPE_TAG_PATTERN = r"\(\s*(?:TV(?: Series)?|Movie|OVA|ONA|Special|Anime)\s*\)"


class EnvVars:
    """Conventional environment variables read in addition to ANIQUEUE_*."""

    SEARCH_API_KEY = "GOOGLE_SEARCH_API_KEY"  # pragma: allowlist secret
    SEARCH_ENGINE_ID = "GOOGLE_SEARCH_ENGINE_ID"
