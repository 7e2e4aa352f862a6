"""
Typed records for brand assets, personas and hidden sections.

Persisted assets carry a polymorphic ``data`` payload whose shape depends on the
asset category. Each payload shape has its own parse function returning a
ParseResult, and ``parse_asset_data`` dispatches on the category.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .color_utils import normalize_hex
from .exceptions import AssetParseError
from .permissions import UserRole

logger = logging.getLogger(__name__)


class AssetCategory(str, Enum):
    LOGO = "logo"
    COLOR = "color"
    FONT = "font"


class LogoType(str, Enum):
    MAIN = "main"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    SQUARE = "square"
    APP_ICON = "app_icon"
    FAVICON = "favicon"


class ColorCategory(str, Enum):
    BRAND = "brand"
    NEUTRAL = "neutral"
    INTERACTIVE = "interactive"


class FontSource(str, Enum):
    GOOGLE = "google"
    ADOBE = "adobe"
    FILE = "file"


class Variant(str, Enum):
    LIGHT = "light"
    DARK = "dark"


# Older records stored fonts under the "typography" category
CATEGORY_ALIASES = {"typography": AssetCategory.FONT}

COLOR_TYPES = ("solid", "gradient")

DEFAULT_LOGO_DESCRIPTIONS = {
    LogoType.MAIN: (
        "This is your go-to logo, the one that should appear most often. It's built for "
        "versatility across digital, print, and product touchpoints."
    ),
    LogoType.HORIZONTAL: (
        "Your default logo layout, built for clarity and legibility in wide spaces such as "
        "websites, decks and documents."
    ),
    LogoType.VERTICAL: (
        "A stacked layout that fits better in tighter spaces like merch tags and narrow "
        "print formats."
    ),
    LogoType.SQUARE: (
        "A clean, compact logo focused on your core brand mark for social avatars, internal "
        "tools and platform UI."
    ),
    LogoType.APP_ICON: (
        "Optimized for app stores and mobile screens: bold, recognizable and readable at "
        "small sizes."
    ),
    LogoType.FAVICON: (
        "The smallest version of your brand mark, used in browser tabs and bookmarks."
    ),
}


@dataclass
class BrandAsset:
    """A persisted brand asset as returned by the API."""

    id: int
    client_id: int
    name: str
    category: str
    data: Any = None
    description: Optional[str] = None
    mime_type: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class LogoData:
    type: LogoType
    format: str
    file_name: str = ""
    has_dark_variant: bool = False
    is_dark_variant: bool = False
    description: Optional[str] = None
    figma_link: Optional[str] = None


@dataclass
class ColorEntry:
    hex: str
    rgb: Optional[str] = None
    cmyk: Optional[str] = None
    pantone: Optional[str] = None


@dataclass
class ColorStep:
    percentage: float
    hex: str


@dataclass
class ColorData:
    category: ColorCategory
    colors: List[ColorEntry]
    type: str = "solid"
    tints: List[ColorStep] = field(default_factory=list)
    shades: List[ColorStep] = field(default_factory=list)
    name: Optional[str] = None

    @property
    def base_hex(self) -> str:
        return self.colors[0].hex


@dataclass
class FontData:
    source: FontSource
    weights: List[str] = field(default_factory=list)
    styles: List[str] = field(default_factory=list)
    source_data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PersonaMetrics:
    average_spend: Optional[str] = None
    event_attendance: Optional[str] = None
    engagement_rate: Optional[str] = None


@dataclass
class UserPersona:
    id: Optional[int]
    client_id: int
    name: str
    role: str = ""
    age_range: str = ""
    event_attributes: List[str] = field(default_factory=list)
    motivations: List[str] = field(default_factory=list)
    core_needs: List[str] = field(default_factory=list)
    pain_points: List[str] = field(default_factory=list)
    metrics: Optional[PersonaMetrics] = None
    image_url: Optional[str] = None


@dataclass
class HiddenSection:
    client_id: int
    section_type: str


@dataclass
class User:
    id: int
    email: str
    name: str
    role: UserRole

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "User":
        return cls(
            id=int(payload['id']),
            email=payload.get('email', ""),
            name=payload.get('name', ""),
            role=UserRole.parse(payload.get('role', UserRole.GUEST)),
        )


@dataclass
class ParseResult:
    """Outcome of parsing a payload: exactly one of value or error is set."""

    value: Any = None
    error: Optional[AssetParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.value

    @classmethod
    def success(cls, value: Any) -> "ParseResult":
        return cls(value=value)

    @classmethod
    def failure(cls, reason: str, asset_id: Optional[int] = None) -> "ParseResult":
        return cls(error=AssetParseError(reason, asset_id))


def _get(payload: Mapping[str, Any], camel: str, snake: Optional[str] = None, default: Any = None) -> Any:
    """Read a key accepting either camelCase or snake_case spelling."""
    if camel in payload:
        return payload[camel]
    if snake and snake in payload:
        return payload[snake]
    return default


def _load_payload(raw: Any) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    if raw is None:
        return None, "data is missing"
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            return None, f"data is not valid JSON: {e}"
    if not isinstance(raw, dict):
        return None, f"data must be an object, got {type(raw).__name__}"
    return raw, None


def _parse_datetime(value: Any) -> Optional[datetime]:
    if not value or isinstance(value, datetime):
        return value or None
    try:
        return datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        logger.warning(f"Invalid timestamp: {value}")
        return None


def _string_list(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]


def parse_logo_data(raw: Any, asset_id: Optional[int] = None) -> ParseResult:
    """Parse and validate a logo payload."""
    data, error = _load_payload(raw)
    if error:
        return ParseResult.failure(error, asset_id)

    logo_type = data.get('type')
    file_format = data.get('format')
    if not logo_type or not file_format:
        return ParseResult.failure("logo data requires 'type' and 'format'", asset_id)

    try:
        logo_type = LogoType(logo_type)
    except ValueError:
        return ParseResult.failure(f"unknown logo type: {logo_type!r}", asset_id)

    return ParseResult.success(LogoData(
        type=logo_type,
        format=str(file_format).lower(),
        file_name=_get(data, 'fileName', 'file_name', ''),
        has_dark_variant=bool(_get(data, 'hasDarkVariant', 'has_dark_variant', False)),
        is_dark_variant=bool(_get(data, 'isDarkVariant', 'is_dark_variant', False)),
        description=data.get('description'),
        figma_link=_get(data, 'figmaLink', 'figma_link'),
    ))


def _parse_steps(raw_steps: Any, label: str, asset_id: Optional[int]) -> Tuple[List[ColorStep], Optional[str]]:
    steps = []
    for step in raw_steps or []:
        hex_value = normalize_hex(step.get('hex')) if isinstance(step, Mapping) else None
        if hex_value is None:
            return [], f"invalid {label} entry: {step!r}"
        steps.append(ColorStep(percentage=step.get('percentage', 0), hex=hex_value))
    return steps, None


def parse_color_data(raw: Any, asset_id: Optional[int] = None) -> ParseResult:
    """Parse and validate a color payload."""
    data, error = _load_payload(raw)
    if error:
        return ParseResult.failure(error, asset_id)

    color_type = data.get('type', 'solid')
    if color_type not in COLOR_TYPES:
        return ParseResult.failure(f"unknown color type: {color_type!r}", asset_id)

    try:
        category = ColorCategory(data.get('category', ColorCategory.BRAND.value))
    except ValueError:
        return ParseResult.failure(f"unknown color category: {data.get('category')!r}", asset_id)

    colors = []
    for entry in data.get('colors') or []:
        hex_value = normalize_hex(entry.get('hex')) if isinstance(entry, Mapping) else None
        if hex_value is None:
            return ParseResult.failure(f"invalid color entry: {entry!r}", asset_id)
        colors.append(ColorEntry(
            hex=hex_value,
            rgb=entry.get('rgb'),
            cmyk=entry.get('cmyk'),
            pantone=entry.get('pantone'),
        ))
    if not colors:
        return ParseResult.failure("color data requires at least one color", asset_id)

    tints, error = _parse_steps(data.get('tints'), 'tint', asset_id)
    if error:
        return ParseResult.failure(error, asset_id)
    shades, error = _parse_steps(data.get('shades'), 'shade', asset_id)
    if error:
        return ParseResult.failure(error, asset_id)

    return ParseResult.success(ColorData(
        category=category,
        colors=colors,
        type=color_type,
        tints=tints,
        shades=shades,
        name=data.get('name'),
    ))


def parse_font_data(raw: Any, asset_id: Optional[int] = None) -> ParseResult:
    """Parse and validate a font payload."""
    data, error = _load_payload(raw)
    if error:
        return ParseResult.failure(error, asset_id)

    try:
        source = FontSource(data.get('source'))
    except ValueError:
        return ParseResult.failure(f"unknown font source: {data.get('source')!r}", asset_id)

    source_data = _get(data, 'sourceData', 'source_data', {}) or {}
    if not isinstance(source_data, dict):
        return ParseResult.failure("font sourceData must be an object", asset_id)

    return ParseResult.success(FontData(
        source=source,
        weights=_string_list(data.get('weights')),
        styles=_string_list(data.get('styles')),
        source_data=source_data,
    ))


_PARSERS = {
    AssetCategory.LOGO: parse_logo_data,
    AssetCategory.COLOR: parse_color_data,
    AssetCategory.FONT: parse_font_data,
}


def resolve_category(category: Any) -> Optional[AssetCategory]:
    if isinstance(category, AssetCategory):
        return category
    if category in CATEGORY_ALIASES:
        return CATEGORY_ALIASES[category]
    try:
        return AssetCategory(category)
    except ValueError:
        return None


def parse_asset_data(asset: BrandAsset) -> ParseResult:
    """Parse an asset's payload according to its category."""
    category = resolve_category(asset.category)
    if category is None:
        return ParseResult.failure(f"unsupported category: {asset.category!r}", asset.id)
    return _PARSERS[category](asset.data, asset.id)


def parse_brand_asset(payload: Mapping[str, Any]) -> BrandAsset:
    """
    Build a BrandAsset from an API record.

    Raises:
        AssetParseError: If id, clientId, name or category is missing
    """
    missing = [
        key for key, alt in (('id', None), ('clientId', 'client_id'), ('name', None), ('category', None))
        if _get(payload, key, alt) is None
    ]
    if missing:
        raise AssetParseError(f"asset record missing fields: {', '.join(missing)}", payload.get('id'))

    return BrandAsset(
        id=int(payload['id']),
        client_id=int(_get(payload, 'clientId', 'client_id')),
        name=str(payload['name']),
        category=str(payload['category']),
        data=payload.get('data'),
        description=payload.get('description'),
        mime_type=_get(payload, 'mimeType', 'mime_type'),
        created_at=_parse_datetime(_get(payload, 'createdAt', 'created_at')),
        updated_at=_parse_datetime(_get(payload, 'updatedAt', 'updated_at')),
    )


def parse_persona(payload: Mapping[str, Any]) -> UserPersona:
    """
    Build a UserPersona from an API record.

    Raises:
        AssetParseError: If clientId or name is missing
    """
    client_id = _get(payload, 'clientId', 'client_id')
    if client_id is None or not payload.get('name'):
        raise AssetParseError("persona requires clientId and name", payload.get('id'))

    raw_metrics = payload.get('metrics')
    metrics = None
    if isinstance(raw_metrics, Mapping):
        metrics = PersonaMetrics(
            average_spend=_get(raw_metrics, 'averageSpend', 'average_spend'),
            event_attendance=_get(raw_metrics, 'eventAttendance', 'event_attendance'),
            engagement_rate=_get(raw_metrics, 'engagementRate', 'engagement_rate'),
        )

    persona_id = payload.get('id')
    return UserPersona(
        id=int(persona_id) if persona_id is not None else None,
        client_id=int(client_id),
        name=str(payload['name']),
        role=payload.get('role') or "",
        age_range=_get(payload, 'ageRange', 'age_range', "") or "",
        event_attributes=_string_list(_get(payload, 'eventAttributes', 'event_attributes')),
        motivations=_string_list(payload.get('motivations')),
        core_needs=_string_list(_get(payload, 'coreNeeds', 'core_needs')),
        pain_points=_string_list(_get(payload, 'painPoints', 'pain_points')),
        metrics=metrics,
        image_url=_get(payload, 'imageUrl', 'image_url'),
    )


def parse_hidden_section(payload: Mapping[str, Any]) -> HiddenSection:
    """
    Build a HiddenSection from an API record.

    Raises:
        AssetParseError: If clientId or sectionType is missing or malformed
    """
    client_id = _get(payload, 'clientId', 'client_id')
    section_type = _get(payload, 'sectionType', 'section_type')
    missing = [name for name, value in (('clientId', client_id), ('sectionType', section_type))
               if value is None or value == ""]
    if missing:
        raise AssetParseError(f"hidden section record missing fields: {', '.join(missing)}")

    try:
        client_id = int(client_id)
    except (TypeError, ValueError):
        raise AssetParseError(f"hidden section has invalid clientId: {client_id!r}")

    return HiddenSection(client_id=client_id, section_type=str(section_type))


def persona_to_payload(persona: UserPersona) -> Dict[str, Any]:
    """Serialize a persona to the camelCase JSON the API expects."""
    payload = {
        'clientId': persona.client_id,
        'name': persona.name,
        'role': persona.role,
        'ageRange': persona.age_range,
        'eventAttributes': list(persona.event_attributes),
        'motivations': list(persona.motivations),
        'coreNeeds': list(persona.core_needs),
        'painPoints': list(persona.pain_points),
    }
    if persona.metrics is not None:
        metrics = {
            'averageSpend': persona.metrics.average_spend,
            'eventAttendance': persona.metrics.event_attendance,
            'engagementRate': persona.metrics.engagement_rate,
        }
        payload['metrics'] = {k: v for k, v in metrics.items() if v is not None}
    if persona.image_url:
        payload['imageUrl'] = persona.image_url
    return payload


def logo_data_to_payload(logo: LogoData) -> Dict[str, Any]:
    payload = {
        'type': logo.type.value,
        'format': logo.format,
        'fileName': logo.file_name,
        'hasDarkVariant': logo.has_dark_variant,
        'isDarkVariant': logo.is_dark_variant,
    }
    if logo.description is not None:
        payload['description'] = logo.description
    if logo.figma_link:
        payload['figmaLink'] = logo.figma_link
    return payload


def renderable_logos(assets: List[BrandAsset]) -> List[Tuple[BrandAsset, LogoData]]:
    """
    Pair each logo asset with its parsed data, skipping unparseable ones.

    Skipped assets are logged; this never raises so a single bad record
    cannot break a whole view.
    """
    logos = []
    for asset in assets:
        if resolve_category(asset.category) is not AssetCategory.LOGO:
            continue
        result = parse_logo_data(asset.data, asset.id)
        if not result.ok:
            logger.warning(f"Skipping unparseable logo: {result.error}")
            continue
        logos.append((asset, result.value))
    return logos


def default_logo_description(logo_type: Any) -> str:
    try:
        return DEFAULT_LOGO_DESCRIPTIONS[LogoType(logo_type)]
    except ValueError:
        return ""
