"""Text normalization for comparing free-form anime names.

Both the alias resolver and the similarity scorer compare strings through
this module so that case, punctuation, and spacing never affect a match.
"""

from __future__ import annotations


def _is_kept(char: str) -> bool:
    # Unicode letters and numbers survive, as does whitespace (collapsed later)
    return char.isalnum() or char.isspace()


def normalize(text: str) -> str:
    """Canonicalize free-form text for comparison.

    Lowercases, drops every character that is not a Unicode letter, number,
    or whitespace, collapses whitespace runs to a single space and trims.

    Args:
        text: Any text, possibly empty

    Returns:
        Normalized text ("" for empty or punctuation-only input)

    Examples:
        >>> normalize("  Re:Zero -- Starting Life  ")
        'rezero starting life'
        >>> normalize("JoJo's Bizarre Adventure")
        'jojos bizarre adventure'
    """
    kept = "".join(char for char in text.lower() if _is_kept(char))
    return " ".join(kept.split())


def tokenize(text: str) -> frozenset[str]:
    """Return the set of whitespace-separated tokens of ``normalize(text)``."""
    return frozenset(normalize(text).split())
