"""
Design token and font embed export.

Renders color tokens as CSS custom properties or SCSS variables, and builds
the embed snippets for Google and Adobe fonts, using Jinja2 templates.
"""

import logging
import re
from typing import Dict, Iterable, List, Mapping, Optional

from jinja2 import DictLoader, Environment

from .asset_data import ColorData

logger = logging.getLogger(__name__)

TEMPLATES = {
    'tokens.css': (
        ":root {\n"
        "{% for name, value in tokens.items() %}"
        "  --{{ prefix }}{{ name | token_name }}: {{ value }};\n"
        "{% endfor %}"
        "}\n"
    ),
    'tokens.scss': (
        "{% for name, value in tokens.items() %}"
        "${{ prefix }}{{ name | token_name }}: {{ value }};\n"
        "{% endfor %}"
    ),
    'google_font.css': (
        "/* Google Font: {{ family }} */\n"
        "@import url('https://fonts.googleapis.com/css2?family={{ family | url_family }}"
        ":wght@{{ weights | join(';') }}&display=swap');\n"
        "\n"
        ".your-element {\n"
        "  font-family: '{{ family }}', sans-serif;\n"
        "  font-weight: {{ weights[0] }};\n"
        "}"
    ),
    'adobe_font.css': (
        "/* Adobe Font: {{ family }} */\n"
        "<link rel=\"stylesheet\" href=\"https://use.typekit.net/{{ project_id }}.css\">\n"
        "\n"
        ".your-element {\n"
        "  font-family: '{{ family }}', sans-serif;\n"
        "}"
    ),
}


def token_name(value: str) -> str:
    """Lowercase a name and collapse anything non-alphanumeric into hyphens."""
    return re.sub(r'[^a-z0-9]+', '-', str(value).lower()).strip('-')


def _url_family(family: str) -> str:
    return re.sub(r'\s+', '+', family)


class TokenExporter:
    """
    Renders palette tokens and font snippets.

    Args:
        prefix: Prepended to every token name, ``color-`` by default
    """

    def __init__(self, prefix: str = "color-"):
        self.prefix = prefix
        self.jinja_env = Environment(
            loader=DictLoader(TEMPLATES),
            autoescape=False,
            keep_trailing_newline=True,
        )
        self.jinja_env.filters['token_name'] = token_name
        self.jinja_env.filters['url_family'] = _url_family

    def _render(self, template_name: str, **context) -> str:
        return self.jinja_env.get_template(template_name).render(**context)

    def palette_tokens(self, color_records: Iterable[ColorData]) -> Dict[str, str]:
        """
        Flatten color records into an ordered name -> hex mapping.

        Each record contributes its base color plus ``-tint-N`` and
        ``-shade-N`` entries numbered from 1 in stored order.
        """
        tokens: Dict[str, str] = {}
        for index, record in enumerate(color_records, start=1):
            name = token_name(record.name) if record.name else f"{record.category.value}-{index}"
            tokens[name] = record.base_hex.lower()
            for i, step in enumerate(record.tints, start=1):
                tokens[f"{name}-tint-{i}"] = step.hex.lower()
            for i, step in enumerate(record.shades, start=1):
                tokens[f"{name}-shade-{i}"] = step.hex.lower()
        return tokens

    def to_css(self, tokens: Mapping[str, str]) -> str:
        return self._render('tokens.css', tokens=tokens, prefix=self.prefix)

    def to_scss(self, tokens: Mapping[str, str]) -> str:
        return self._render('tokens.scss', tokens=tokens, prefix=self.prefix)

    def google_font_css(self, family: str, weights: Optional[List[str]] = None) -> str:
        weights = list(weights) if weights else ["400"]
        return self._render('google_font.css', family=family, weights=weights)

    def adobe_font_css(self, project_id: str, family: str) -> str:
        return self._render('adobe_font.css', project_id=project_id, family=family)
