"""Alias resolution for common anime shorthand and nicknames.

The mapping is fixed data: keys are normalized shorthand phrases, values are
canonical search phrases sent to the catalog. Several aliases may point at
the same title. No canonical phrase normalizes to a key, which keeps
resolution idempotent.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from aniqueue.core.normalization import normalize

logger = logging.getLogger(__name__)

ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "jjk": "Jujutsu Kaisen",
        "aot": "Attack on Titan",
        "snk": "Attack on Titan",
        "opm": "One Punch Man",
        "mha": "My Hero Academia",
        "bnha": "My Hero Academia",
        "kny": "Demon Slayer: Kimetsu no Yaiba",
        "hxh": "Hunter x Hunter",
        "fmab": "Fullmetal Alchemist: Brotherhood",
        "fma": "Fullmetal Alchemist",
        "jojo": "JoJo's Bizarre Adventure",
        "rezero": "Re:ZERO -Starting Life in Another World-",
        "re zero": "Re:ZERO -Starting Life in Another World-",
        "konosuba": "KonoSuba: God's Blessing on This Wonderful World!",
        "csm": "Chainsaw Man",
        "sxf": "SPY x FAMILY",
        "op": "One Piece",
        "dbz": "Dragon Ball Z",
        "nge": "Neon Genesis Evangelion",
        "eva": "Neon Genesis Evangelion",
        "tpn": "The Promised Neverland",
        "danmachi": "Is It Wrong to Try to Pick Up Girls in a Dungeon?",
        "tensura": "That Time I Got Reincarnated as a Slime",
        "oregairu": "My Teen Romantic Comedy SNAFU",
        "sao": "Sword Art Online",
        "fmp": "Full Metal Panic!",
        "ttgl": "Tengen Toppa Gurren Lagann",
        "kaguya sama": "Kaguya-sama: Love is War",
        "bocchi": "BOCCHI THE ROCK!",
        "frieren": "Frieren: Beyond Journey's End",
    }
)


def resolve_alias(raw_input: str, aliases: Mapping[str, str] = ALIASES) -> str:
    """Map a known shorthand to its canonical search phrase.

    Args:
        raw_input: The user's text for one anime
        aliases: Normalized shorthand -> canonical phrase mapping

    Returns:
        The canonical phrase on a hit; otherwise ``raw_input`` unchanged,
        keeping its original casing and punctuation for the catalog query.

    Examples:
        >>> resolve_alias("JJK")
        'Jujutsu Kaisen'
        >>> resolve_alias("Cowboy Bebop!")
        'Cowboy Bebop!'
    """
    canonical = aliases.get(normalize(raw_input))
    if canonical is None:
        return raw_input

    logger.debug("Resolved alias '%s' -> '%s'", raw_input, canonical)
    return canonical
