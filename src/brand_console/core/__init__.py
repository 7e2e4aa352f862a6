"""
Core brand console modules.

Contains the pure logic for:
- Color conversion and palette derivation
- Asset data parsing
- Logo variant and download URL resolution
- Permission gating
- Optimistic mutations and debounced autosave
- Upload validation and token export
"""

from .asset_data import (
    AssetCategory,
    BrandAsset,
    ColorCategory,
    ColorData,
    FontData,
    FontSource,
    HiddenSection,
    LogoData,
    LogoType,
    ParseResult,
    User,
    UserPersona,
    Variant,
    parse_asset_data,
    renderable_logos,
)
from .autosave import CancelableTimer, DebouncedAutosave
from .color_utils import (
    analyze_brightness,
    generate_container_colors,
    generate_grey_shades,
    generate_tints_and_shades,
    hex_to_cmyk,
    hex_to_hsl,
    hex_to_rgb,
)
from .exceptions import (
    ApiError,
    AssetParseError,
    BrandConsoleError,
    ColorValueError,
    ConfigError,
    PackageError,
    UploadValidationError,
)
from .logo_variants import LogoSource, PackageEntry, get_secure_asset_url, resolve_logo_source
from .mutations import HiddenSectionsController, MutationState, OptimisticMutation, SectionVisibility
from .palette import build_color_data, fill_neutral_ramp, with_base_hex
from .permissions import CurrentUser, PermissionAction, Resource, UserRole, affordances_for, can
from .token_exporter import TokenExporter
from .upload import PreparedUpload, UploadValidator, prepare_logo_upload

__all__ = [
    "AssetCategory",
    "BrandAsset",
    "ColorCategory",
    "ColorData",
    "FontData",
    "FontSource",
    "HiddenSection",
    "LogoData",
    "LogoType",
    "ParseResult",
    "User",
    "UserPersona",
    "Variant",
    "parse_asset_data",
    "renderable_logos",
    "CancelableTimer",
    "DebouncedAutosave",
    "analyze_brightness",
    "generate_container_colors",
    "generate_grey_shades",
    "generate_tints_and_shades",
    "hex_to_cmyk",
    "hex_to_hsl",
    "hex_to_rgb",
    "ApiError",
    "AssetParseError",
    "BrandConsoleError",
    "ColorValueError",
    "ConfigError",
    "PackageError",
    "UploadValidationError",
    "LogoSource",
    "PackageEntry",
    "get_secure_asset_url",
    "resolve_logo_source",
    "HiddenSectionsController",
    "MutationState",
    "OptimisticMutation",
    "SectionVisibility",
    "build_color_data",
    "fill_neutral_ramp",
    "with_base_hex",
    "CurrentUser",
    "PermissionAction",
    "Resource",
    "UserRole",
    "affordances_for",
    "can",
    "TokenExporter",
    "PreparedUpload",
    "UploadValidator",
    "prepare_logo_upload",
]
