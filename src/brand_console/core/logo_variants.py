"""
Logo variant resolution and download URL construction.

Every asset file URL carries the owning client id so the server can verify
that the requested asset belongs to the active client.
"""

import logging
import re
import time
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any, List, Optional
from urllib.parse import urlencode

from .asset_data import BrandAsset, LogoData, LogoType, Variant
from .exceptions import UploadValidationError

logger = logging.getLogger(__name__)

DARK_FALLBACK_FILTER = "invert(1) brightness(1.5)"

ALLOWED_LOGO_EXTENSIONS = ('svg', 'png', 'jpg', 'jpeg', 'pdf', 'ai', 'eps')

STANDARD_PNG_SIZES = (300, 800, 2000)
STANDARD_VECTOR_FORMATS = ('svg', 'eps', 'ai', 'pdf')
FAVICON_SIZES = (16, 32, 48, 64)
APP_ICON_SIZES = (192, 512, 1024)

PNG_FOLDER = "PNG"
VECTOR_FOLDER = "Vector"
ICO_FOLDER = "ICO"


def _now_ms() -> int:
    return int(time.time() * 1000)


def _is_dark(variant: Any) -> bool:
    return variant == Variant.DARK or variant == Variant.DARK.value


def get_secure_asset_url(asset_id: int, client_id: Optional[int], *,
                         format: Optional[str] = None,
                         size: Optional[int] = None,
                         variant: Optional[str] = None,
                         preserve_ratio: bool = True,
                         preserve_vector: bool = False) -> str:
    """
    Build the file URL for an asset.

    The query string always starts with ``clientId`` and ends with a
    millisecond timestamp ``t`` so intermediate caches never serve a stale file.

    Args:
        asset_id: Asset identifier
        client_id: Owning client identifier, required
        format: Optional target format (png, svg, ...)
        size: Optional target width in pixels
        variant: ``dark`` selects the dark variant; anything else is light
        preserve_ratio: Sent alongside size
        preserve_vector: Ask the server not to rasterize vector output

    Returns:
        Relative URL of the form ``/api/assets/{id}/file?...``

    Raises:
        ValueError: If client_id is missing
    """
    if client_id is None or client_id == "":
        raise ValueError(f"client_id is required to build a URL for asset {asset_id}")

    params = [('clientId', client_id)]
    if _is_dark(variant):
        params.append(('variant', Variant.DARK.value))
    if format:
        params.append(('format', format))
    if size:
        params.append(('size', size))
        params.append(('preserveRatio', 'true' if preserve_ratio else 'false'))
    if preserve_vector:
        params.append(('preserveVector', 'true'))
    params.append(('t', _now_ms()))

    return f"/api/assets/{asset_id}/file?{urlencode(params)}"


@dataclass(frozen=True)
class LogoSource:
    """What to display for a logo in a given variant."""

    url: str
    css_filter: Optional[str] = None
    is_true_dark: bool = False


def resolve_logo_source(asset: BrandAsset, logo_data: LogoData, variant: str = Variant.LIGHT.value, *,
                        format: Optional[str] = None, size: Optional[int] = None) -> LogoSource:
    """
    Resolve the URL and visual treatment for a logo variant.

    A dark request without an uploaded dark asset falls back to the light file
    with an inverting CSS filter.
    """
    if _is_dark(variant) and logo_data.has_dark_variant:
        url = get_secure_asset_url(asset.id, asset.client_id, format=format, size=size,
                                   variant=Variant.DARK.value)
        return LogoSource(url=url, is_true_dark=True)

    url = get_secure_asset_url(asset.id, asset.client_id, format=format, size=size)
    if _is_dark(variant):
        return LogoSource(url=url, css_filter=DARK_FALLBACK_FILTER)
    return LogoSource(url=url)


def download_file_name(name: str, format: str, *, size: Optional[int] = None,
                       variant: str = Variant.LIGHT.value) -> str:
    suffix = "-Dark" if _is_dark(variant) else ""
    if size:
        return f"{name}-{size}px{suffix}.{format}"
    return f"{name}{suffix}.{format}"


def validate_logo_file_name(file_name: str) -> str:
    """
    Check a logo file name against the allowed extensions.

    Returns:
        The lowercase extension

    Raises:
        UploadValidationError: If the extension is missing or not allowed
    """
    extension = PurePath(file_name).suffix.lstrip('.').lower()
    if extension not in ALLOWED_LOGO_EXTENSIONS:
        raise UploadValidationError(
            f"Invalid file type '{extension or file_name}'. Allowed: {', '.join(ALLOWED_LOGO_EXTENSIONS)}"
        )
    return extension


@dataclass(frozen=True)
class PackageEntry:
    """One file in a download package."""

    folder: str
    file_name: str
    url: str


def standard_package_plan(asset: BrandAsset, variant: str = Variant.LIGHT.value,
                          png_sizes=STANDARD_PNG_SIZES,
                          vector_formats=STANDARD_VECTOR_FORMATS) -> List[PackageEntry]:
    """PNG renditions at fixed widths plus one file per vector format."""
    dark = Variant.DARK.value if _is_dark(variant) else None
    entries = [
        PackageEntry(
            folder=PNG_FOLDER,
            file_name=download_file_name(asset.name, 'png', size=size, variant=variant),
            url=get_secure_asset_url(asset.id, asset.client_id, format='png', size=size, variant=dark),
        )
        for size in png_sizes
    ]
    entries.extend(
        PackageEntry(
            folder=VECTOR_FOLDER,
            file_name=download_file_name(asset.name, fmt, variant=variant),
            url=get_secure_asset_url(asset.id, asset.client_id, format=fmt, variant=dark,
                                     preserve_vector=True),
        )
        for fmt in vector_formats
    )
    return entries


def _icon_plan(asset: BrandAsset, variant: str, sizes, formats) -> List[PackageEntry]:
    dark = Variant.DARK.value if _is_dark(variant) else None
    entries = []
    for fmt in formats:
        folder = ICO_FOLDER if fmt == 'ico' else PNG_FOLDER
        for size in sizes:
            entries.append(PackageEntry(
                folder=folder,
                file_name=download_file_name(asset.name, fmt, size=size, variant=variant),
                url=get_secure_asset_url(asset.id, asset.client_id, format=fmt, size=size, variant=dark),
            ))
    entries.append(PackageEntry(
        folder=VECTOR_FOLDER,
        file_name=download_file_name(asset.name, 'svg', variant=variant),
        url=get_secure_asset_url(asset.id, asset.client_id, format='svg', variant=dark,
                                 preserve_vector=True),
    ))
    return entries


def favicon_package_plan(asset: BrandAsset, variant: str = Variant.LIGHT.value,
                         sizes=FAVICON_SIZES) -> List[PackageEntry]:
    return _icon_plan(asset, variant, sizes, ('ico', 'png'))


def app_icon_package_plan(asset: BrandAsset, variant: str = Variant.LIGHT.value,
                          sizes=APP_ICON_SIZES) -> List[PackageEntry]:
    return _icon_plan(asset, variant, sizes, ('png',))


def package_kind_for(logo_type: Any) -> str:
    """Map a logo type to its package kind: standard, favicon or app_icon."""
    if logo_type in (LogoType.FAVICON, LogoType.FAVICON.value):
        return 'favicon'
    if logo_type in (LogoType.APP_ICON, LogoType.APP_ICON.value):
        return 'app_icon'
    return 'standard'


def package_plan_for(logo_type: Any, asset: BrandAsset, variant: str = Variant.LIGHT.value,
                     kind: Optional[str] = None, *,
                     png_sizes=STANDARD_PNG_SIZES,
                     vector_formats=STANDARD_VECTOR_FORMATS,
                     favicon_sizes=FAVICON_SIZES,
                     app_icon_sizes=APP_ICON_SIZES) -> List[PackageEntry]:
    """
    Select the package plan for a logo.

    ``kind`` overrides the choice made from ``logo_type``.

    Raises:
        ValueError: If the kind is not standard, favicon or app_icon
    """
    kind = kind or package_kind_for(logo_type)
    if kind == 'favicon':
        return favicon_package_plan(asset, variant, sizes=favicon_sizes)
    if kind == 'app_icon':
        return app_icon_package_plan(asset, variant, sizes=app_icon_sizes)
    if kind == 'standard':
        return standard_package_plan(asset, variant, png_sizes=png_sizes, vector_formats=vector_formats)
    raise ValueError(f"Unknown package kind: {kind}")


def _slug(name: str) -> str:
    return re.sub(r'[^a-z0-9]', '-', name, flags=re.IGNORECASE).lower()


def package_file_name(name: str, variant: str = Variant.LIGHT.value, kind: str = 'standard') -> str:
    """
    Name the ZIP for a package.

    Standard packages use a slug (``acme-co-logos-dark.zip``); icon packages
    keep the asset name (``Acme-Dark-favicon-package.zip``).
    """
    dark = _is_dark(variant)
    if kind == 'favicon':
        return f"{name}{'-Dark' if dark else ''}-favicon-package.zip"
    if kind == 'app_icon':
        return f"{name}{'-Dark' if dark else ''}-app-icon-package.zip"
    return f"{_slug(name)}-logos{'-dark' if dark else ''}.zip"
