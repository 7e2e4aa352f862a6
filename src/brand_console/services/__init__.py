"""
Service layer for API access, packaging and storage.

Contains:
- Async HTTP client for the brand asset API
- Logo package assembly
- Storage backends (local filesystem)
"""

from .api_client import BrandConsoleClient
from .logo_packager import LogoPackager
from .storage_abstraction import StorageInterface, LocalStorage

__all__ = [
    "BrandConsoleClient",
    "LogoPackager",
    "StorageInterface",
    "LocalStorage"
]
