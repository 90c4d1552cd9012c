"""Configuration loader for the package verifier.

Settings are read from an optional JSON file. Every key is optional; an
absent file means built-in defaults. Recognised keys:

- ``iconSize``: required icon edge length in pixels (default 128)
- ``strictIconDimensions``: fail when either icon side is off (default False)
- ``schemaSource``: directory or http(s) base URL holding replacement
  ``<kind>.schema.json`` files (default: bundled schemas)
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .errors import ConfigError
from .validators.icon import ICON_SIZE

CONFIG_PATH_ENV_VAR = "AIX_VALIDATOR_CONFIG"

_KNOWN_KEYS = {"iconSize", "strictIconDimensions", "schemaSource"}


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    icon_size: int = ICON_SIZE
    strict_icon_dimensions: bool = False
    schema_source: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from a decoded config object, validating each field."""
        unknown = sorted(set(data) - _KNOWN_KEYS)
        if unknown:
            raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")

        icon_size = data.get("iconSize", ICON_SIZE)
        if isinstance(icon_size, bool) or not isinstance(icon_size, int) or icon_size <= 0:
            raise ConfigError("'iconSize' must be a positive integer")

        strict = data.get("strictIconDimensions", False)
        if not isinstance(strict, bool):
            raise ConfigError("'strictIconDimensions' must be a boolean")

        schema_source = data.get("schemaSource")
        if schema_source is not None and (not isinstance(schema_source, str) or not schema_source):
            raise ConfigError("'schemaSource' must be a non-empty string")

        return cls(
            icon_size=icon_size,
            strict_icon_dimensions=strict,
            schema_source=schema_source,
        )

    def with_overrides(
        self,
        *,
        strict_icon_dimensions: bool | None = None,
        schema_source: str | None = None,
    ) -> Settings:
        """Return a copy with command-line overrides applied (None keeps the value)."""
        changes: dict[str, Any] = {}
        if strict_icon_dimensions is not None:
            changes["strict_icon_dimensions"] = strict_icon_dimensions
        if schema_source is not None:
            changes["schema_source"] = schema_source
        return replace(self, **changes)


def _resolve_config_path(path: Path | str | None = None) -> Path | None:
    """Resolve the configuration file path.

    Priority:
    1. Explicit path argument
    2. AIX_VALIDATOR_CONFIG environment variable
    3. None (defaults)
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return None


def load_settings(path: Path | str | None = None) -> Settings:
    """Load and validate settings from a JSON file.

    Args:
        path: Optional path to the config file. If not provided, uses the
            AIX_VALIDATOR_CONFIG env var or falls back to defaults.

    Returns:
        A validated Settings object.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path = _resolve_config_path(path)
    if config_path is None:
        return Settings()

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")

    return Settings.from_dict(data)
