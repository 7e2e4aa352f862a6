"""
Tests for logo variant resolution, URLs and package plans.
"""

from unittest.mock import patch
from urllib.parse import parse_qsl, urlparse

import pytest

from brand_console.core.exceptions import UploadValidationError
from brand_console.core.logo_variants import (
    DARK_FALLBACK_FILTER,
    app_icon_package_plan,
    download_file_name,
    favicon_package_plan,
    get_secure_asset_url,
    package_file_name,
    package_plan_for,
    resolve_logo_source,
    standard_package_plan,
    validate_logo_file_name,
)
from brand_console.core.asset_data import parse_logo_data

NOW = 1700000000000


@pytest.fixture(autouse=True)
def frozen_clock():
    with patch("brand_console.core.logo_variants._now_ms", return_value=NOW):
        yield


def query(url):
    return parse_qsl(urlparse(url).query)


class TestSecureAssetUrl:
    """Test file URL construction."""

    def test_minimal_url(self):
        """Test that clientId comes first and t comes last."""
        url = get_secure_asset_url(7, 9)
        assert url == f"/api/assets/7/file?clientId=9&t={NOW}"

    def test_full_parameter_order(self):
        """Test ordering of every optional parameter."""
        url = get_secure_asset_url(7, 9, format="png", size=300, variant="dark")
        assert [k for k, _ in query(url)] == [
            "clientId", "variant", "format", "size", "preserveRatio", "t",
        ]
        assert dict(query(url))["preserveRatio"] == "true"

    def test_preserve_ratio_false(self):
        """Test that preserveRatio follows the flag."""
        url = get_secure_asset_url(7, 9, size=800, preserve_ratio=False)
        assert dict(query(url))["preserveRatio"] == "false"

    def test_no_ratio_without_size(self):
        """Test that preserveRatio is only sent with a size."""
        assert "preserveRatio" not in get_secure_asset_url(7, 9, format="png")

    def test_preserve_vector(self):
        """Test the vector preservation flag."""
        url = get_secure_asset_url(7, 9, format="svg", preserve_vector=True)
        assert "preserveVector=true" in url

    def test_light_variant_omitted(self):
        """Test that the light variant adds no parameter."""
        assert "variant" not in get_secure_asset_url(7, 9, variant="light")

    @pytest.mark.parametrize("client_id", [None, ""])
    def test_client_id_required(self, client_id):
        """Test that a missing client id is an error."""
        with pytest.raises(ValueError):
            get_secure_asset_url(7, client_id)


class TestResolveLogoSource:
    """Test variant resolution."""

    def test_true_dark(self, dark_logo_asset):
        """Test that an uploaded dark file is requested directly."""
        logo = parse_logo_data(dark_logo_asset.data).value
        source = resolve_logo_source(dark_logo_asset, logo, "dark")
        assert "variant=dark" in source.url
        assert source.css_filter is None
        assert source.is_true_dark

    def test_dark_fallback(self, logo_asset):
        """Test the CSS inversion fallback without a dark file."""
        logo = parse_logo_data(logo_asset.data).value
        source = resolve_logo_source(logo_asset, logo, "dark")
        assert "variant" not in source.url
        assert source.css_filter == DARK_FALLBACK_FILTER
        assert not source.is_true_dark

    def test_light(self, dark_logo_asset):
        """Test that light requests never use the dark file."""
        logo = parse_logo_data(dark_logo_asset.data).value
        source = resolve_logo_source(dark_logo_asset, logo, "light", format="png", size=300)
        assert "variant" not in source.url
        assert source.css_filter is None
        assert "clientId=9" in source.url


class TestFileNames:
    """Test download and package names."""

    def test_download_file_name(self):
        """Test sized and unsized names in both variants."""
        assert download_file_name("Acme", "png", size=300, variant="dark") == "Acme-300px-Dark.png"
        assert download_file_name("Acme", "svg", variant="dark") == "Acme-Dark.svg"
        assert download_file_name("Acme", "eps") == "Acme.eps"

    def test_package_file_name(self):
        """Test ZIP names per package kind."""
        assert package_file_name("Acme Co", "dark") == "acme-co-logos-dark.zip"
        assert package_file_name("Acme Co") == "acme-co-logos.zip"
        assert package_file_name("Acme", "dark", "favicon") == "Acme-Dark-favicon-package.zip"
        assert package_file_name("Acme", "light", "app_icon") == "Acme-app-icon-package.zip"

    def test_validate_logo_file_name(self):
        """Test the extension allow-list."""
        assert validate_logo_file_name("logo.SVG") == "svg"
        with pytest.raises(UploadValidationError):
            validate_logo_file_name("logo.exe")
        with pytest.raises(UploadValidationError):
            validate_logo_file_name("logo")


class TestPackagePlans:
    """Test package plan contents."""

    def test_standard_plan(self, logo_asset):
        """Test PNG sizes and vector formats."""
        plan = standard_package_plan(logo_asset, "dark")
        names = [(e.folder, e.file_name) for e in plan]
        assert names[:3] == [
            ("PNG", "Acme-300px-Dark.png"),
            ("PNG", "Acme-800px-Dark.png"),
            ("PNG", "Acme-2000px-Dark.png"),
        ]
        assert [n for f, n in names if f == "Vector"] == [
            "Acme-Dark.svg", "Acme-Dark.eps", "Acme-Dark.ai", "Acme-Dark.pdf",
        ]
        assert all("variant=dark" in e.url and "clientId=9" in e.url for e in plan)
        assert all("preserveVector=true" in e.url for e in plan if e.folder == "Vector")

    def test_favicon_plan(self, logo_asset):
        """Test ICO and PNG favicon sizes plus an SVG."""
        plan = favicon_package_plan(logo_asset)
        folders = [e.folder for e in plan]
        assert folders.count("ICO") == 4
        assert folders.count("PNG") == 4
        assert plan[-1].file_name == "Acme.svg"
        assert plan[0].file_name == "Acme-16px.ico"

    def test_app_icon_plan(self, logo_asset):
        """Test app icon sizes."""
        plan = app_icon_package_plan(logo_asset)
        assert [e.file_name for e in plan] == [
            "Acme-192px.png", "Acme-512px.png", "Acme-1024px.png", "Acme.svg",
        ]

    def test_plan_for_logo_type(self, logo_asset):
        """Test plan selection by logo type."""
        assert len(package_plan_for("favicon", logo_asset)) == 9
        assert len(package_plan_for("app_icon", logo_asset)) == 4
        assert len(package_plan_for("main", logo_asset)) == 7
        with pytest.raises(ValueError):
            package_plan_for("main", logo_asset, kind="poster")

    def test_plan_for_with_overrides(self, logo_asset):
        """Test that sizes and formats pass through to the selected plan."""
        standard = package_plan_for("main", logo_asset, png_sizes=[64], vector_formats=["svg"])
        favicon = package_plan_for("favicon", logo_asset, favicon_sizes=[32])
        forced = package_plan_for("main", logo_asset, kind="app_icon", app_icon_sizes=[180])

        assert [e.file_name for e in standard] == ["Acme-64px.png", "Acme.svg"]
        assert [e.file_name for e in favicon] == ["Acme-32px.ico", "Acme-32px.png", "Acme.svg"]
        assert [e.file_name for e in forced] == ["Acme-180px.png", "Acme.svg"]
