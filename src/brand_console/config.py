"""
Settings for the brand console.

Values come from three layers, later ones winning: built-in defaults, an
optional YAML file and ``BRAND_CONSOLE_*`` environment variables.
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from .core.exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = 'BRAND_CONSOLE_'


@dataclass
class ConsoleSettings:
    """Runtime settings for API access, autosave, packaging and uploads."""

    api_base_url: str = "http://localhost:5000"
    request_timeout: float = 30.0
    autosave_delay: float = 0.5
    png_sizes: List[int] = field(default_factory=lambda: [300, 800, 2000])
    favicon_sizes: List[int] = field(default_factory=lambda: [16, 32, 48, 64])
    app_icon_sizes: List[int] = field(default_factory=lambda: [192, 512, 1024])
    vector_formats: List[str] = field(default_factory=lambda: ['svg', 'eps', 'ai', 'pdf'])
    allowed_logo_extensions: List[str] = field(
        default_factory=lambda: ['svg', 'png', 'jpg', 'jpeg', 'pdf', 'ai', 'eps']
    )
    max_upload_bytes: int = 500 * 1024 * 1024
    download_dir: Path = field(default_factory=lambda: Path("./downloads"))


def _coerce(name: str, current: Any, value: Any) -> Any:
    """Convert a raw YAML or environment value to the type of the default."""
    try:
        if isinstance(current, Path):
            return Path(value)
        if isinstance(current, list):
            if isinstance(value, str):
                value = [item.strip() for item in value.split(',') if item.strip()]
            element_type = type(current[0]) if current else str
            return [element_type(item) for item in value]
        if isinstance(current, bool):
            return str(value).lower() in ('1', 'true', 'yes')
        return type(current)(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {name}: {value!r} ({e})")


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Settings file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Invalid YAML in settings file {path}: {e}")
        raise ConfigError(f"Invalid settings file: {e}")

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Settings file must contain a mapping: {path}")
    # Allow the settings to be nested under a top-level key
    return raw.get('brand_console', raw)


def load_settings(path: Optional[Union[str, Path]] = None,
                  environ: Optional[Mapping[str, str]] = None) -> ConsoleSettings:
    """
    Load settings from defaults, an optional YAML file and the environment.

    Args:
        path: Optional YAML settings file
        environ: Environment mapping, ``os.environ`` by default

    Returns:
        ConsoleSettings instance

    Raises:
        ConfigError: If the file is missing or invalid, or a value cannot be coerced
    """
    settings = ConsoleSettings()
    environ = os.environ if environ is None else environ
    known = {f.name for f in fields(ConsoleSettings)}

    if path is not None:
        for key, value in _read_yaml(Path(path)).items():
            if key not in known:
                logger.warning(f"Ignoring unknown setting: {key}")
                continue
            setattr(settings, key, _coerce(key, getattr(settings, key), value))

    for name in known:
        env_value = environ.get(f"{ENV_PREFIX}{name.upper()}")
        if env_value is not None:
            setattr(settings, name, _coerce(name, getattr(settings, name), env_value))

    return settings
