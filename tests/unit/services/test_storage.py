"""
Tests for the local storage backend.
"""

import pytest

from brand_console.config import load_settings
from brand_console.services import LocalStorage


class TestLocalStorage:
    """Test LocalStorage file operations."""

    def test_creates_base_path(self, temp_dir):
        """Test that the base directory is created."""
        storage = LocalStorage(base_path=temp_dir / "nested" / "downloads")
        assert storage.base_path.exists()

    def test_from_settings(self, temp_dir):
        """Test that the root comes from the configured download directory."""
        settings = load_settings(environ={"BRAND_CONSOLE_DOWNLOAD_DIR": str(temp_dir / "packages")})
        storage = LocalStorage.from_settings(settings)

        assert storage.base_path == temp_dir / "packages"
        assert storage.base_path.is_dir()

    @pytest.mark.asyncio
    async def test_write_and_read(self, test_storage):
        """Test a write/read cycle in a subfolder."""
        location = await test_storage.write_bytes("packages/acme.zip", b"PK\x03\x04")

        assert location.startswith("file://")
        assert await test_storage.read_bytes("packages/acme.zip") == b"PK\x03\x04"

    @pytest.mark.asyncio
    async def test_exists_and_delete(self, test_storage):
        """Test existence checks and deletion."""
        await test_storage.write_bytes("a.zip", b"data")
        assert await test_storage.file_exists("a.zip")

        assert await test_storage.delete_file("a.zip") is True
        assert not await test_storage.file_exists("a.zip")
        assert await test_storage.delete_file("a.zip") is False

    @pytest.mark.asyncio
    async def test_read_missing(self, test_storage):
        """Test reading a key that was never written."""
        with pytest.raises(FileNotFoundError):
            await test_storage.read_bytes("missing.zip")

    @pytest.mark.asyncio
    async def test_rejects_escaping_keys(self, test_storage):
        """Test that keys cannot leave the storage root."""
        with pytest.raises(ValueError):
            await test_storage.write_bytes("../outside.zip", b"x")
