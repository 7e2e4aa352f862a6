"""
Color asset records and palette derivation.
"""

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, MutableMapping, Optional

from .asset_data import ColorCategory, ColorData, ColorEntry, ColorStep
from .color_utils import (
    DEFAULT_SHADE_PERCENTS,
    DEFAULT_TINT_PERCENTS,
    analyze_brightness,
    generate_container_colors,
    generate_grey_shades,
    generate_tints_and_shades,
    hex_to_cmyk,
    hex_to_rgb,
    normalize_hex,
)
from .exceptions import ColorValueError

logger = logging.getLogger(__name__)

CATEGORY_ORDER = (ColorCategory.BRAND, ColorCategory.NEUTRAL, ColorCategory.INTERACTIVE)


def _derive_steps(hex_color: str):
    derived = generate_tints_and_shades(hex_color)
    tints = [ColorStep(percentage=p, hex=h) for p, h in zip(DEFAULT_TINT_PERCENTS, derived.tints)]
    shades = [ColorStep(percentage=p, hex=h) for p, h in zip(DEFAULT_SHADE_PERCENTS, derived.shades)]
    return tints, shades


def build_color_data(hex_color: str, *, category: str = "brand", pantone: Optional[str] = None,
                     type: str = "solid", name: Optional[str] = None) -> ColorData:
    """
    Build a color record with derived tints and shades.

    Args:
        hex_color: Base color as a 6-digit hex string
        category: brand, neutral or interactive
        pantone: Optional Pantone reference stored alongside the color
        type: solid or gradient
        name: Optional display name

    Returns:
        ColorData whose derivatives are computed from the base color

    Raises:
        ColorValueError: If hex_color is invalid
    """
    normalized = normalize_hex(hex_color)
    if normalized is None:
        raise ColorValueError(f"Invalid hex color: {hex_color!r}")

    tints, shades = _derive_steps(normalized)
    entry = ColorEntry(
        hex=normalized,
        rgb=hex_to_rgb(normalized),
        cmyk=hex_to_cmyk(normalized),
        pantone=pantone,
    )
    return ColorData(
        category=ColorCategory(category),
        colors=[entry],
        type=type,
        tints=tints,
        shades=shades,
        name=name,
    )


def with_base_hex(color_data: ColorData, new_hex: str) -> ColorData:
    """Return a copy with a new base color and regenerated derivatives."""
    normalized = normalize_hex(new_hex)
    if normalized is None:
        raise ColorValueError(f"Invalid hex color: {new_hex!r}")

    first = color_data.colors[0]
    entry = replace(first, hex=normalized, rgb=hex_to_rgb(normalized), cmyk=hex_to_cmyk(normalized))
    tints, shades = _derive_steps(normalized)
    return replace(
        color_data,
        colors=[entry] + list(color_data.colors[1:]),
        tints=tints,
        shades=shades,
    )


def fill_neutral_ramp(colors: Iterable[ColorData]) -> List[ColorData]:
    """
    Synthesize neutral records for brightness levels the palette lacks.

    Existing records keep their place; only the missing levels are returned.
    """
    existing = [{'brightness': analyze_brightness(color.base_hex)} for color in colors]
    created = []
    for shade in generate_grey_shades(existing):
        created.append(build_color_data(
            shade.hex,
            category=ColorCategory.NEUTRAL.value,
            name=f"Grey {shade.level}",
        ))
    logger.debug(f"Synthesized {len(created)} neutral shades")
    return created


def apply_semantic_base(tokens: MutableMapping[str, str], name: str, hex_color: str) -> MutableMapping[str, str]:
    """
    Set a base token and derive its container pair.

    ``neutral-base`` yields ``neutral-container`` and ``on-neutral-container``.
    """
    derived = generate_container_colors(hex_color)
    stem = name[:-len('-base')] if name.endswith('-base') else name
    tokens[name] = hex_color
    tokens[f"{stem}-container"] = derived.container
    tokens[f"on-{stem}-container"] = derived.on_container
    return tokens


def group_colors_by_category(records: Iterable[ColorData]) -> Dict[str, List[ColorData]]:
    """Group records as brand, neutral, interactive, with anything else last."""
    groups: Dict[str, List[ColorData]] = {category.value: [] for category in CATEGORY_ORDER}
    for record in records:
        key = record.category.value if isinstance(record.category, ColorCategory) else str(record.category)
        groups.setdefault(key, []).append(record)
    return groups
