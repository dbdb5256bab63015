"""Tests for fontmatch.core.traits."""

import pytest

from fontmatch import FontHandle
from fontmatch.core import traits
from fontmatch.core.constants import (
    BOLD_TRAIT,
    CONDENSED_TRAIT,
    EXPANDED_TRAIT,
    ITALIC_TRAIT,
)


def make_font(
    name: str = "Test-Regular", weight: float = 0.0, symbolic_traits: int = 0
) -> FontHandle:
    return FontHandle(
        postscript_name=name,
        family="Test",
        size=14,
        weight=weight,
        symbolic_traits=symbolic_traits,
    )


class TestSymbolicTraits:
    """Tests for is_italic() and is_condensed()."""

    def test_plain_font(self) -> None:
        font = make_font()
        assert not traits.is_italic(font)
        assert not traits.is_condensed(font)

    def test_italic_bit(self) -> None:
        font = make_font(symbolic_traits=ITALIC_TRAIT | BOLD_TRAIT)
        assert traits.is_italic(font)
        assert not traits.is_condensed(font)

    def test_condensed_bit(self) -> None:
        font = make_font(symbolic_traits=CONDENSED_TRAIT)
        assert traits.is_condensed(font)
        assert not traits.is_italic(font)

    def test_expanded_is_not_condensed(self) -> None:
        assert not traits.is_condensed(make_font(symbolic_traits=EXPANDED_TRAIT))


class TestWeightOf:
    """Tests for weight_of() and its name-suffix fallback."""

    def test_reported_weight(self) -> None:
        """Test that a reported weight is returned unchanged."""
        assert traits.weight_of(make_font("Test-Bold", weight=0.3)) == 0.3

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Test-Bold", 0.40),
            ("TestBOLD", 0.40),
            ("Test-Normal", 0.0),
            ("Test-100", -0.80),
            ("Test-700", 0.40),
            ("Test-900", 0.62),
        ],
    )
    def test_name_suffix_fallback(self, name: str, expected: float) -> None:
        """Test that unset weights are inferred from the face name."""
        assert traits.weight_of(make_font(name)) == pytest.approx(expected)

    @pytest.mark.parametrize("name", ["Test-Regular", "Test-Black", "Bold-Test"])
    def test_no_suffix_match_keeps_zero(self, name: str) -> None:
        """Test that unmatched names keep the unset weight."""
        assert traits.weight_of(make_font(name)) == 0.0
