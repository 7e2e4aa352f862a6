"""
Color derivation utilities for brand palettes.

Handles hex parsing, conversion to rgb/hsl/cmyk display strings, tint and shade
generation, neutral ramp synthesis and container color derivation. Every function
here is pure and deterministic.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .exceptions import ColorValueError

HEX_PATTERN = re.compile(r'^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$', re.IGNORECASE)

DEFAULT_TINT_PERCENTS = (60, 40, 20)
DEFAULT_SHADE_PERCENTS = (20, 40, 60)
CONTAINER_BLEND_PERCENT = 60

BRIGHTNESS_LEVELS = 11
DEFAULT_BRIGHTNESS_LEVEL = 6

# Hue ranges in degrees
COLOR_FAMILY_HUES = {
    'green': ((90, 170),),
    'yellow': ((30, 80),),
    'red': ((0, 25), (340, 360)),
    'blue': ((190, 260),),
}

RGB = Tuple[int, int, int]


@dataclass
class TintsAndShades:
    """Lighter and darker derivatives of a base color."""

    tints: List[str] = field(default_factory=list)
    shades: List[str] = field(default_factory=list)


@dataclass
class GreyShade:
    """A synthesized grey for one brightness level."""

    level: int
    hex: str


@dataclass
class ContainerColors:
    """Paired container (lighter) and on-container (darker) colors."""

    container: str
    on_container: str


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values, matching Math.round."""
    return int(math.floor(value + 0.5))


def parse_hex(hex_color: Any) -> Optional[RGB]:
    """Parse a 6-digit hex string into an (r, g, b) tuple, or None."""
    if not isinstance(hex_color, str):
        return None
    match = HEX_PATTERN.match(hex_color)
    if not match:
        return None
    return tuple(int(part, 16) for part in match.groups())


def normalize_hex(hex_color: Any) -> Optional[str]:
    """Return ``#RRGGBB`` in uppercase, or None for invalid input."""
    rgb = parse_hex(hex_color)
    if rgb is None:
        return None
    return _rgb_to_hex(rgb).upper()


def _require_rgb(hex_color: Any) -> RGB:
    rgb = parse_hex(hex_color)
    if rgb is None:
        raise ColorValueError(f"Invalid hex color: {hex_color!r}")
    return rgb


def _rgb_to_hex(rgb: Sequence[float]) -> str:
    return '#' + ''.join(f"{round_half_up(channel):02x}" for channel in rgb)


def _hsl_components(rgb: RGB) -> Tuple[float, float, float]:
    """Return hue in [0, 1), saturation and lightness as fractions."""
    r, g, b = (channel / 255 for channel in rgb)
    mx = max(r, g, b)
    mn = min(r, g, b)
    lightness = (mx + mn) / 2

    if mx == mn:
        return 0.0, 0.0, lightness

    d = mx - mn
    saturation = d / (2 - mx - mn) if lightness > 0.5 else d / (mx + mn)

    if mx == r:
        hue = (g - b) / d + (6 if g < b else 0)
    elif mx == g:
        hue = (b - r) / d + 2
    else:
        hue = (r - g) / d + 4

    return hue / 6, saturation, lightness


def hex_to_rgb(hex_color: Any) -> Optional[str]:
    """Convert hex to an ``rgb(r, g, b)`` string, or None for invalid input."""
    rgb = parse_hex(hex_color)
    if rgb is None:
        return None
    r, g, b = rgb
    return f"rgb({r}, {g}, {b})"


def hex_to_hsl(hex_color: Any) -> Optional[str]:
    """Convert hex to an ``hsl(h, s%, l%)`` string, or None for invalid input."""
    rgb = parse_hex(hex_color)
    if rgb is None:
        return None
    h, s, l = _hsl_components(rgb)
    return f"hsl({round_half_up(h * 360)}, {round_half_up(s * 100)}%, {round_half_up(l * 100)}%)"


def hex_to_cmyk(hex_color: Any) -> Optional[str]:
    """Convert hex to a ``cmyk(c, m, y, k)`` string, or None for invalid input."""
    rgb = parse_hex(hex_color)
    if rgb is None:
        return None
    r, g, b = (channel / 255 for channel in rgb)

    k = 1 - max(r, g, b)
    if k == 1:
        c = m = y = 0.0
    else:
        c = (1 - r - k) / (1 - k)
        m = (1 - g - k) / (1 - k)
        y = (1 - b - k) / (1 - k)

    values = (round_half_up(v * 100) for v in (c, m, y, k))
    return "cmyk({}, {}, {}, {})".format(*values)


def hex_to_hsl_values(hex_color: Any) -> Optional[Tuple[float, float, float]]:
    """Return (hue degrees, saturation fraction, lightness fraction), or None."""
    rgb = parse_hex(hex_color)
    if rgb is None:
        return None
    h, s, l = _hsl_components(rgb)
    return h * 360, s, l


def hsl_to_hex(h: float, s: float, l: float) -> str:
    """
    Convert HSL to an uppercase hex string.

    Args:
        h: Hue in degrees
        s: Saturation percentage (0-100)
        l: Lightness percentage (0-100)
    """
    l /= 100
    a = s * min(l, 1 - l) / 100

    def channel(n: int) -> float:
        k = (n + h / 30) % 12
        return 255 * (l - a * max(min(k - 3, 9 - k, 1), -1))

    return _rgb_to_hex((channel(0), channel(8), channel(4))).upper()


def generate_tints_and_shades(hex_color: str,
                              tint_percents: Sequence[float] = DEFAULT_TINT_PERCENTS,
                              shade_percents: Sequence[float] = DEFAULT_SHADE_PERCENTS) -> TintsAndShades:
    """
    Generate tints (toward white) and shades (toward black) of a base color.

    Args:
        hex_color: Base color as a 6-digit hex string
        tint_percents: Blend percentages toward white, one tint per entry
        shade_percents: Blend percentages toward black, one shade per entry

    Returns:
        TintsAndShades with lowercase hex strings in the order of the percent lists

    Raises:
        ColorValueError: If hex_color is not a valid 6-digit hex string
    """
    rgb = _require_rgb(hex_color)

    tints = [
        _rgb_to_hex([c + (255 - c) * percent / 100 for c in rgb])
        for percent in tint_percents
    ]
    shades = [
        _rgb_to_hex([c * (1 - percent / 100) for c in rgb])
        for percent in shade_percents
    ]

    return TintsAndShades(tints=tints, shades=shades)


def generate_neutral_palette(base_grey: str) -> List[str]:
    """Generate an 11-step ramp from near-white to near-black around a base grey."""
    tints = generate_tints_and_shades(base_grey, [90, 80, 70, 60, 50], []).tints
    shades = generate_tints_and_shades(base_grey, [], [40, 30, 20, 10, 5]).shades
    return tints + [_rgb_to_hex(_require_rgb(base_grey))] + shades


def generate_container_colors(base_color: str) -> ContainerColors:
    """Derive the container/on-container pair at a fixed 60% blend."""
    derived = generate_tints_and_shades(
        base_color, [CONTAINER_BLEND_PERCENT], [CONTAINER_BLEND_PERCENT]
    )
    return ContainerColors(container=derived.tints[0], on_container=derived.shades[0])


def analyze_brightness(hex_color: Any) -> int:
    """
    Map perceptual luminance onto the 1..11 brightness scale.

    Returns DEFAULT_BRIGHTNESS_LEVEL for unparseable input.
    """
    rgb = parse_hex(hex_color)
    if rgb is None:
        return DEFAULT_BRIGHTNESS_LEVEL
    r, g, b = rgb
    brightness = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return round_half_up(brightness * 10) + 1


def _brightness_of(entry: Any) -> Optional[int]:
    if isinstance(entry, Mapping):
        return entry.get('brightness')
    return getattr(entry, 'brightness', None)


def generate_grey_shades(existing: Iterable[Any] = ()) -> List[GreyShade]:
    """
    Synthesize greys for every brightness level not already covered.

    Args:
        existing: Objects or mappings exposing a ``brightness`` level

    Returns:
        GreyShade entries ordered by level, one per missing level
    """
    covered = {_brightness_of(entry) for entry in existing}

    shades = []
    for level in range(1, BRIGHTNESS_LEVELS + 1):
        if level in covered:
            continue
        percentage = (level - 1) / 10 * 100
        value = round_half_up(percentage / 100 * 255)
        shades.append(GreyShade(level=level, hex=_rgb_to_hex((value, value, value))))

    return shades


def _relative_luminance(rgb: RGB) -> float:
    def linear(channel: int) -> float:
        v = channel / 255
        return v / 12.92 if v <= 0.03928 else ((v + 0.055) / 1.055) ** 2.4

    r, g, b = (linear(c) for c in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def get_contrasting_text_color(background: str) -> str:
    """Pick black or white text for a background color."""
    # Computed CSS variables come through as hsl(); assume a light surface
    if background.startswith('hsl('):
        return '#000000'
    rgb = parse_hex(background) or (0, 0, 0)
    return '#000000' if _relative_luminance(rgb) > 0.5 else '#ffffff'


def is_color_family(hex_color: str, family: str) -> bool:
    """Check whether a color's hue falls within a named family."""
    hsl = hex_to_hsl_values(hex_color)
    if hsl is None or family not in COLOR_FAMILY_HUES:
        return False
    hue = hsl[0]
    return any(low <= hue <= high for low, high in COLOR_FAMILY_HUES[family])


def generate_interactive_colors(brand_colors: Iterable[Mapping[str, str]]) -> List[Dict[str, str]]:
    """
    Build Success/Warning/Error/Link colors that harmonize with brand colors.

    A brand color already in the matching hue family is reused as-is; otherwise
    a color is generated at the family's hue using the brand's average
    saturation and lightness.
    """
    brand_colors = list(brand_colors)

    avg_saturation = 0.7
    avg_lightness = 0.5
    values = [hex_to_hsl_values(color.get('hex')) for color in brand_colors]
    values = [v for v in values if v is not None]
    if values:
        avg_saturation = min(sum(v[1] for v in values) / len(values) + 0.1, 0.85)
        avg_lightness = max(0.45, min(sum(v[2] for v in values) / len(values), 0.6))

    targets = [
        ('Success', 'green', 145),
        ('Warning', 'yellow', 40),
        ('Error', 'red', 0),
        ('Link', 'blue', 220),
    ]

    results = []
    for name, family, hue in targets:
        existing = next(
            (c for c in brand_colors if is_color_family(c.get('hex'), family)), None
        )
        hex_value = existing['hex'] if existing else hsl_to_hex(
            hue, avg_saturation * 100, avg_lightness * 100
        )
        results.append({'name': name, 'hex': hex_value, 'category': 'interactive'})

    return results


def format_color_for_copy(fmt: str, hex_color: str, pantone: Optional[str] = None) -> Optional[str]:
    """Format a color for the clipboard in the requested notation."""
    if fmt == 'hex':
        return normalize_hex(hex_color)
    if fmt == 'rgb':
        return hex_to_rgb(hex_color)
    if fmt == 'hsl':
        return hex_to_hsl(hex_color)
    if fmt == 'cmyk':
        return hex_to_cmyk(hex_color)
    if fmt == 'pantone':
        return pantone or ""
    return None
