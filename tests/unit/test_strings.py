"""
Unit tests for string utilities.

Tests the conversion from designer-facing style names to code identifiers.
"""

import pytest

from stylesync.core.strings import camelcased, round_to_two_decimal_places, split_words


class TestSplitWords:
    """Tests for split_words."""

    def test_splits_on_spaces_and_punctuation(self) -> None:
        assert split_words("Brand / Primary-Blue") == ["Brand", "Primary", "Blue"]

    def test_splits_camel_case(self) -> None:
        assert split_words("headingLarge") == ["heading", "Large"]

    def test_keeps_acronyms_together(self) -> None:
        assert split_words("HTTPLink") == ["HTTP", "Link"]

    def test_empty(self) -> None:
        assert split_words("  / ") == []


class TestCamelcased:
    """Tests for camelcased."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Deprecated", "deprecated"),
            ("Deprecated Text Style", "deprecatedTextStyle"),
            ("Brand", "brand"),
            ("Heading / H1 Bold", "headingH1Bold"),
            ("PRIMARY BLUE", "primaryBlue"),
            ("2x Large", "_2xLarge"),
        ],
    )
    def test_conversion(self, name: str, expected: str) -> None:
        assert camelcased(name) == expected

    def test_name_without_words(self) -> None:
        assert camelcased("--") == ""


class TestRounding:
    def test_rounds_to_two_places(self) -> None:
        assert round_to_two_decimal_places(16.4567) == 16.46
        assert round_to_two_decimal_places(20) == 20.0
