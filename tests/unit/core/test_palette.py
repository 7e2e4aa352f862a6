"""
Tests for color records and palette derivation.
"""

import pytest

from brand_console.core.asset_data import ColorCategory
from brand_console.core.color_utils import analyze_brightness
from brand_console.core.exceptions import ColorValueError
from brand_console.core.palette import (
    apply_semantic_base,
    build_color_data,
    fill_neutral_ramp,
    group_colors_by_category,
    with_base_hex,
)


class TestBuildColorData:
    """Test color record construction."""

    def test_derivatives_are_populated(self):
        """Test that tints and shades are derived with their percentages."""
        record = build_color_data("#808080", name="Slate")
        assert record.base_hex == "#808080"
        assert [(s.percentage, s.hex) for s in record.tints] == [
            (60, "#cccccc"), (40, "#b3b3b3"), (20, "#999999"),
        ]
        assert [s.percentage for s in record.shades] == [20, 40, 60]

    def test_entry_strings(self):
        """Test that the entry stores uppercase hex with rgb and cmyk."""
        record = build_color_data("0055ff", pantone="2728 C")
        entry = record.colors[0]
        assert entry.hex == "#0055FF"
        assert entry.rgb == "rgb(0, 85, 255)"
        assert entry.cmyk == "cmyk(100, 67, 0, 0)"
        assert entry.pantone == "2728 C"
        assert record.category is ColorCategory.BRAND

    def test_invalid_hex(self):
        """Test that a bad color is rejected."""
        with pytest.raises(ColorValueError):
            build_color_data("#xyz")

    def test_unknown_category(self):
        """Test that an unknown category is rejected."""
        with pytest.raises(ValueError):
            build_color_data("#808080", category="accent")


class TestWithBaseHex:
    """Test base color replacement."""

    def test_regenerates_derivatives(self):
        """Test that changing the base recomputes tints and shades."""
        original = build_color_data("#808080", name="Slate")
        updated = with_base_hex(original, "#000000")

        assert updated.base_hex == "#000000"
        assert updated.shades[0].hex == "#000000"
        assert updated.name == "Slate"
        assert original.base_hex == "#808080"


class TestNeutralRamp:
    """Test neutral ramp synthesis."""

    def test_fills_missing_levels_only(self):
        """Test that levels already covered are not duplicated."""
        existing = [build_color_data("#000000"), build_color_data("#ffffff")]
        created = fill_neutral_ramp(existing)

        assert len(created) == 9
        assert all(c.category is ColorCategory.NEUTRAL for c in created)
        levels = {analyze_brightness(c.base_hex) for c in created}
        assert 1 not in levels and 11 not in levels

    def test_empty_palette(self):
        """Test that an empty palette gets a full ramp."""
        assert len(fill_neutral_ramp([])) == 11


class TestSemanticTokens:
    """Test container token derivation."""

    def test_apply_semantic_base(self):
        """Test that a base token yields its container pair."""
        tokens = apply_semantic_base({}, "neutral-base", "#0055ff")
        assert tokens == {
            "neutral-base": "#0055ff",
            "neutral-container": "#99bbff",
            "on-neutral-container": "#002266",
        }

    def test_group_by_category(self):
        """Test ordering of category groups."""
        records = [
            build_color_data("#00aa00", category="interactive"),
            build_color_data("#808080", category="neutral"),
            build_color_data("#0055ff"),
        ]
        groups = group_colors_by_category(records)
        assert list(groups) == ["brand", "neutral", "interactive"]
        assert groups["brand"][0].base_hex == "#0055FF"
