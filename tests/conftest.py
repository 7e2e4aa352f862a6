"""
Shared test configuration and fixtures for brand-console.
"""

import pytest
import tempfile
import shutil
from pathlib import Path

import httpx

from brand_console.core.asset_data import BrandAsset
from brand_console.core.permissions import CurrentUser, UserRole
from brand_console.services import BrandConsoleClient, LocalStorage
from tests.utils.helpers import create_test_png, make_color_record, make_logo_asset


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture
def test_storage(temp_dir):
    """Create a test storage instance."""
    return LocalStorage(base_path=temp_dir / "storage")


@pytest.fixture
def logo_asset() -> BrandAsset:
    """A main logo with no dark variant."""
    return make_logo_asset()


@pytest.fixture
def dark_logo_asset() -> BrandAsset:
    """A main logo with an uploaded dark variant."""
    return make_logo_asset(has_dark_variant=True)


@pytest.fixture
def color_payload():
    """Raw color record as returned by the API."""
    return make_color_record("#0055FF")


@pytest.fixture
def editor():
    return CurrentUser(id=2, role=UserRole.EDITOR, email="editor@example.com")


@pytest.fixture
def guest():
    return CurrentUser(id=3, role=UserRole.GUEST)


@pytest.fixture
def make_api():
    """Build a BrandConsoleClient whose requests are served by a handler function."""
    def factory(handler):
        transport = httpx.MockTransport(handler)
        http = httpx.AsyncClient(transport=transport, base_url="http://testserver")
        return BrandConsoleClient("http://testserver", client=http)
    return factory


@pytest.fixture
def png_file(temp_dir):
    """A small real PNG on disk."""
    return create_test_png(temp_dir / "logo.png", size=(120, 60))
