"""
Tests for token and font CSS export.
"""

from brand_console.core.palette import build_color_data
from brand_console.core.token_exporter import TokenExporter, token_name


class TestTokenExporter:
    """Test CSS and SCSS rendering."""

    def test_to_css(self):
        """Test custom property output."""
        css = TokenExporter().to_css({"primary": "#0055ff", "on-primary": "#ffffff"})
        assert css == (
            ":root {\n"
            "  --color-primary: #0055ff;\n"
            "  --color-on-primary: #ffffff;\n"
            "}\n"
        )

    def test_to_scss(self):
        """Test SCSS variable output."""
        scss = TokenExporter().to_scss({"Brand Blue": "#0055ff"})
        assert scss == "$color-brand-blue: #0055ff;\n"

    def test_custom_prefix(self):
        """Test an alternative prefix."""
        assert "--brand-primary:" in TokenExporter(prefix="brand-").to_css({"primary": "#000000"})

    def test_palette_tokens(self):
        """Test that each color contributes its tints and shades."""
        tokens = TokenExporter().palette_tokens([build_color_data("#808080", name="Slate Grey")])
        assert list(tokens) == [
            "slate-grey",
            "slate-grey-tint-1", "slate-grey-tint-2", "slate-grey-tint-3",
            "slate-grey-shade-1", "slate-grey-shade-2", "slate-grey-shade-3",
        ]
        assert tokens["slate-grey"] == "#808080"
        assert tokens["slate-grey-tint-1"] == "#cccccc"

    def test_unnamed_colors(self):
        """Test fallback names for colors without a name."""
        tokens = TokenExporter().palette_tokens([build_color_data("#000000", category="neutral")])
        assert "neutral-1" in tokens

    def test_token_name(self):
        """Test name slugging."""
        assert token_name("  Primary / Blue ") == "primary-blue"


class TestFontCss:
    """Test font embed snippets."""

    def test_google_font(self):
        """Test the Google Fonts import and family rule."""
        css = TokenExporter().google_font_css("Open Sans", ["400", "700"])
        assert "family=Open+Sans:wght@400;700&display=swap" in css
        assert "font-family: 'Open Sans', sans-serif;" in css
        assert "font-weight: 400;" in css

    def test_google_font_default_weight(self):
        """Test the regular weight default."""
        assert "wght@400&" in TokenExporter().google_font_css("Inter")

    def test_adobe_font(self):
        """Test the Typekit stylesheet link."""
        css = TokenExporter().adobe_font_css("abc1234", "Proxima Nova")
        assert 'href="https://use.typekit.net/abc1234.css"' in css
        assert "/* Adobe Font: Proxima Nova */" in css
