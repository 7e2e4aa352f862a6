"""
Exception hierarchy for the brand console.

Validation errors are raised before any request is sent, API errors carry the
message extracted from the response body, and parse errors describe persisted
asset data that cannot be rendered.
"""

from typing import Optional


class BrandConsoleError(Exception):
    """Base exception for brand console operations."""
    pass


class ColorValueError(BrandConsoleError, ValueError):
    """Exception raised when a color value is not a 6-digit hex string."""
    pass


class UploadValidationError(BrandConsoleError):
    """Exception raised when a file fails client-side upload validation."""
    pass


class ConfigError(BrandConsoleError):
    """Exception raised when settings cannot be loaded."""
    pass


class PackageError(BrandConsoleError):
    """Exception raised when a download package cannot be assembled."""
    pass


class AssetParseError(BrandConsoleError):
    """Exception describing persisted asset data that failed validation."""

    def __init__(self, reason: str, asset_id: Optional[int] = None):
        self.reason = reason
        self.asset_id = asset_id
        prefix = f"Asset {asset_id}: " if asset_id is not None else ""
        super().__init__(f"{prefix}{reason}")


class ApiError(BrandConsoleError):
    """Exception raised for non-2xx responses and transport failures."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
