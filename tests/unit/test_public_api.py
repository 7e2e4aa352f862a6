"""
Public API tests to ensure the package exports stay importable.
"""

import brand_console
import brand_console.core
import brand_console.services


class TestPublicApi:
    """Test that the documented entry points are exported."""

    def test_version(self):
        """Test the package version string."""
        assert brand_console.__version__ == "1.0.0"

    def test_all_names_resolve(self):
        """Test that every name in __all__ exists on each package."""
        for module in (brand_console, brand_console.core, brand_console.services):
            for name in module.__all__:
                assert hasattr(module, name), f"{module.__name__} missing {name}"

    def test_top_level_entry_points(self):
        """Test the main classes are reachable from the package root."""
        from brand_console import BrandConsoleClient, LogoPackager, TokenExporter, load_settings

        assert callable(load_settings)
        assert hasattr(BrandConsoleClient, "list_assets")
        assert hasattr(LogoPackager, "build_package")
        assert hasattr(TokenExporter, "to_css")

    def test_error_hierarchy(self):
        """Test that all errors share the package base class."""
        from brand_console.core import (
            ApiError, AssetParseError, BrandConsoleError, ColorValueError,
            ConfigError, PackageError, UploadValidationError,
        )

        for error in (ApiError, AssetParseError, ColorValueError, ConfigError,
                      PackageError, UploadValidationError):
            assert issubclass(error, BrandConsoleError)
        assert issubclass(ColorValueError, ValueError)
