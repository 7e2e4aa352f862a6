"""
Brand Console

Client library for managing a client's brand assets: logos, colors, fonts and
personas, with color derivation, logo download packaging and role-based
affordances.

Main exports:
- BrandConsoleClient: Async HTTP client for the brand asset API
- LogoPackager: ZIP download packages of logo renditions
- HiddenSectionsController: Per-client section visibility
- DebouncedAutosave: Coalesced description saves
- TokenExporter: CSS/SCSS token export
- load_settings: Layered configuration
"""

from .config import ConsoleSettings, load_settings
from .core import (
    ApiError,
    BrandConsoleError,
    CurrentUser,
    DebouncedAutosave,
    HiddenSectionsController,
    TokenExporter,
    UserRole,
    can,
    generate_tints_and_shades,
    get_secure_asset_url,
)
from .logging import configure_logging_from_env, setup_logging, timed_operation
from .services import BrandConsoleClient, LogoPackager, StorageInterface, LocalStorage

__version__ = "1.0.0"

__all__ = [
    "ConsoleSettings",
    "load_settings",
    "ApiError",
    "BrandConsoleError",
    "CurrentUser",
    "DebouncedAutosave",
    "HiddenSectionsController",
    "TokenExporter",
    "UserRole",
    "can",
    "generate_tints_and_shades",
    "get_secure_asset_url",
    "configure_logging_from_env",
    "setup_logging",
    "timed_operation",
    "BrandConsoleClient",
    "LogoPackager",
    "StorageInterface",
    "LocalStorage"
]
