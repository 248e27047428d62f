"""Tests for alias resolution."""

from __future__ import annotations

from types import MappingProxyType

import pytest

from aniqueue.core.aliases import ALIASES, resolve_alias
from aniqueue.core.normalization import normalize


class TestResolveAlias:
    """Test cases for resolve_alias()."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("jjk", "Jujutsu Kaisen"),
            ("JJK", "Jujutsu Kaisen"),
            ("  j.j.k  ", "Jujutsu Kaisen"),
            ("AoT", "Attack on Titan"),
            ("SNK", "Attack on Titan"),
            ("Re:Zero", "Re:ZERO -Starting Life in Another World-"),
        ],
    )
    def test_known_aliases(self, raw: str, expected: str) -> None:
        assert resolve_alias(raw) == expected

    def test_unknown_input_is_returned_unchanged(self) -> None:
        assert resolve_alias("Cowboy Bebop!") == "Cowboy Bebop!"

    def test_many_aliases_share_one_canonical_phrase(self) -> None:
        assert resolve_alias("mha") == resolve_alias("bnha") == "My Hero Academia"

    def test_custom_mapping(self) -> None:
        aliases = {"bebop": "Cowboy Bebop"}
        assert resolve_alias("BEBOP", aliases) == "Cowboy Bebop"
        assert resolve_alias("jjk", aliases) == "jjk"


class TestAliasTable:
    """Invariants of the built-in alias table."""

    def test_table_is_read_only(self) -> None:
        assert isinstance(ALIASES, MappingProxyType)
        with pytest.raises(TypeError):
            ALIASES["new"] = "value"  # type: ignore[index]

    def test_keys_are_normalized(self) -> None:
        for key in ALIASES:
            assert normalize(key) == key

    def test_no_canonical_phrase_is_itself_an_alias(self) -> None:
        for canonical in ALIASES.values():
            assert normalize(canonical) not in ALIASES

    @pytest.mark.parametrize("raw", [*ALIASES.keys(), *ALIASES.values(), "Cowboy Bebop", "frieren!!"])
    def test_resolution_is_idempotent(self, raw: str) -> None:
        once = resolve_alias(raw)
        assert resolve_alias(once) == once
