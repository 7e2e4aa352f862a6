"""
Storage abstraction for downloaded packages and files.
Provides an async interface with a local filesystem implementation.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional
import asyncio
import logging

logger = logging.getLogger(__name__)


class StorageInterface(ABC):
    """Abstract storage interface for pluggable storage backends"""

    @abstractmethod
    async def write_bytes(self, key: str, content: bytes) -> str:
        """Store content under key and return its location"""
        pass

    @abstractmethod
    async def read_bytes(self, key: str) -> bytes:
        """Return the content stored under key"""
        pass

    @abstractmethod
    async def delete_file(self, key: str) -> bool:
        """Delete file by key"""
        pass

    @abstractmethod
    async def file_exists(self, key: str) -> bool:
        """Check if file exists"""
        pass


class LocalStorage(StorageInterface):
    """Local filesystem storage implementation"""

    def __init__(self, base_path: Optional[Path] = None):
        self.base_path = Path(base_path) if base_path else Path("./downloads")
        self.base_path.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_settings(cls, settings) -> "LocalStorage":
        """Storage rooted at the configured download directory"""
        return cls(settings.download_dir)

    def _resolve(self, key: str) -> Path:
        target = (self.base_path / key).resolve()
        if not target.is_relative_to(self.base_path.resolve()):
            raise ValueError(f"Key escapes storage root: {key}")
        return target

    async def write_bytes(self, key: str, content: bytes) -> str:
        target_path = self._resolve(key)
        target_path.parent.mkdir(parents=True, exist_ok=True)

        await asyncio.to_thread(target_path.write_bytes, content)

        logger.info(f"File written to local storage: {target_path}")
        return f"file://{target_path}"

    async def read_bytes(self, key: str) -> bytes:
        source_path = self._resolve(key)
        if not source_path.exists():
            raise FileNotFoundError(f"File not found: {key}")
        return await asyncio.to_thread(source_path.read_bytes)

    async def delete_file(self, key: str) -> bool:
        file_path = self._resolve(key)
        if file_path.exists():
            await asyncio.to_thread(file_path.unlink)
            return True
        return False

    async def file_exists(self, key: str) -> bool:
        return self._resolve(key).exists()
