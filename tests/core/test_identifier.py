"""
Unit tests for the Identifier value type.
"""

import pytest

from ztarter_toolkit.core.errors import IdentifierOverflowError
from ztarter_toolkit.core.models import Identifier, IDENTIFIER_CAPACITY


class TestIdentifierConstruction:
    """Tests for factory methods and the truncation policy."""

    def test_from_text_when_short_then_kept_verbatim(self):
        """Names within capacity are stored unchanged."""
        ident = Identifier.from_text("abc.lev")

        assert ident.as_text() == "abc.lev"
        assert len(ident) == 7

    def test_from_text_when_too_long_then_truncated(self):
        """Names over capacity are silently cut to capacity bytes."""
        ident = Identifier.from_text("a_very_long_name.lev")

        assert len(ident) == IDENTIFIER_CAPACITY
        assert ident.as_text() == "a_very_long_"

    def test_from_text_when_truncated_then_long_names_collide(self):
        """Truncation maps distinct long names with a shared prefix to one key."""
        assert Identifier.from_text("abcdefghijkl1.lev") == Identifier.from_text("abcdefghijkl2.lev")

    def test_from_text_when_strict_and_too_long_then_raises(self):
        """Strict mode rejects overflow instead of truncating."""
        with pytest.raises(IdentifierOverflowError):
            Identifier.from_text("a_very_long_name.lev", strict=True)

    def test_overflow_error_is_value_error(self):
        with pytest.raises(ValueError):
            Identifier.from_text("a_very_long_name.lev", strict=True)

    def test_from_text_when_multibyte_at_boundary_then_backs_off(self):
        """Truncation never splits a UTF-8 character."""
        ident = Identifier.from_text("abcdefghijké.lev")  # é is two bytes at offset 11

        assert ident.as_text() == "abcdefghijk"
        assert len(ident) == 11

    def test_constructor_when_raw_too_long_then_raises(self):
        with pytest.raises(IdentifierOverflowError):
            Identifier(b"x" * (IDENTIFIER_CAPACITY + 1))

    def test_constructor_when_invalid_utf8_then_raises(self):
        with pytest.raises(ValueError):
            Identifier(b"\xff\xfe")


class TestIdentifierComparison:
    """Equality, hashing and ordering use stored bytes only."""

    def test_equal_when_same_bytes(self):
        assert Identifier.from_text("a.lev") == Identifier.from_text("a.lev")
        assert hash(Identifier.from_text("a.lev")) == hash(Identifier.from_text("a.lev"))

    def test_case_sensitive(self):
        assert Identifier.from_text("A.lev") != Identifier.from_text("a.lev")

    def test_not_equal_to_str(self):
        assert Identifier.from_text("a.lev") != "a.lev"

    def test_ordering_follows_bytes(self):
        names = ["b.lev", "a.lev", "B.lev", "ab.lev"]
        ordered = sorted(Identifier.from_text(n) for n in names)

        assert [i.as_text() for i in ordered] == ["B.lev", "a.lev", "ab.lev", "b.lev"]

    def test_usable_in_sets(self):
        idents = {Identifier.from_text("a.lev"), Identifier.from_text("a.lev"), Identifier.from_text("b.lev")}

        assert len(idents) == 2


class TestIdentifierFormat:
    """Tests for numbered level names."""

    def test_from_format_pads_number(self):
        assert Identifier.from_format("abc", 3, 1).as_text() == "abc001.lev"

    def test_from_format_when_number_wider_than_pad_then_written_in_full(self):
        assert Identifier.from_format("abc", 2, 1234).as_text() == "abc1234.lev"

    def test_from_format_with_default_pad_fills_eight_characters(self):
        pad = Identifier.default_pad("L")

        assert pad == 7
        assert Identifier.from_format("L", pad, 42).as_text() == "L0000042.lev"

    def test_default_pad_never_below_one(self):
        assert Identifier.default_pad("longprefix") == 1

    def test_from_format_when_negative_then_raises(self):
        with pytest.raises(ValueError):
            Identifier.from_format("L", 3, -1)

    def test_from_format_when_too_long_then_truncated(self):
        assert Identifier.from_format("abcdefghij", 1, 10).as_text() == "abcdefghij10"

    def test_from_format_when_strict_and_too_long_then_raises(self):
        with pytest.raises(IdentifierOverflowError):
            Identifier.from_format("abcdefghij", 1, 10, strict=True)
