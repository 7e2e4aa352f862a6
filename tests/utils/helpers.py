"""
Test helper utilities for brand-console.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import httpx
from PIL import Image

from brand_console.core.asset_data import BrandAsset


def make_logo_asset(
    asset_id: int = 7,
    client_id: int = 9,
    name: str = "Acme",
    logo_type: str = "main",
    file_format: str = "svg",
    has_dark_variant: bool = False,
    as_json: bool = False
) -> BrandAsset:
    """
    Build a logo BrandAsset.

    Args:
        asset_id: Asset identifier
        client_id: Owning client
        name: Asset name used in download file names
        logo_type: Logo type value
        file_format: Stored file format
        has_dark_variant: Whether a dark file has been uploaded
        as_json: Store data as a JSON string, as older records do

    Returns:
        BrandAsset with category ``logo``
    """
    data = {
        "type": logo_type,
        "format": file_format,
        "fileName": f"{name.lower()}.{file_format}",
        "hasDarkVariant": has_dark_variant,
    }
    return BrandAsset(
        id=asset_id,
        client_id=client_id,
        name=name,
        category="logo",
        data=json.dumps(data) if as_json else data,
    )


def make_color_record(hex_color: str, category: str = "brand", asset_id: int = 20,
                      name: str = "Primary") -> Dict[str, Any]:
    """Build an API color record with a single solid color."""
    return {
        "id": asset_id,
        "clientId": 9,
        "name": name,
        "category": "color",
        "data": {
            "type": "solid",
            "category": category,
            "colors": [{"hex": hex_color}],
        },
    }


def create_test_png(path: Path, size: Tuple[int, int] = (64, 64), color: str = "#1E3A8A") -> Path:
    """Write a solid-color PNG and return its path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, color).save(path, format="PNG")
    return path


def json_response(status: int, body: Any, reason: Optional[str] = None):
    """httpx response with a JSON body."""
    extensions = {"reason_phrase": reason.encode()} if reason else None
    return httpx.Response(status, json=body, extensions=extensions)
