# src/tamperline/core/config.py
"""
Configuration schema and loading for tamperline.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.

Example settings.yaml:

    logging:
      level: INFO
    fields:
      title:
        - plugin: string_replace_multiple
          options:
            allowed_values: |
              ReplaceMe|Found
            trim_right: 5
"""

import os
import re
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

ENVVAR_PREFIX = "TAMPERLINE"

# ${VAR} or ${VAR:-default}
_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")

# Option values kept verbatim: replacement pairs are data and may contain "${".
_LITERAL_KEYS = frozenset({"allowed_values"})


class LoggingSettings(BaseModel):
    """Log output configuration."""

    model_config = {"frozen": True}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    json_output: bool = False

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class TamperSettings(BaseModel):
    """One tamper in a field's chain.

    Options are validated by the plugin's own config model when the
    tamper is instantiated, not here.
    """

    model_config = {"frozen": True}

    plugin: str = Field(description="Registered tamper plugin name")
    options: dict[str, Any] = Field(default_factory=dict, description="Plugin-specific options")

    @field_validator("plugin")
    @classmethod
    def _plugin_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("plugin name cannot be empty")
        return v.strip()


class TamperlineSettings(BaseModel):
    """Top-level settings: logging plus the tamper chain for each field."""

    model_config = {"frozen": True}

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    fields: dict[str, list[TamperSettings]] = Field(
        default_factory=dict,
        description="Field name -> tampers applied in order",
    )

    @field_validator("fields")
    @classmethod
    def _field_names_not_empty(cls, v: dict[str, list[TamperSettings]]) -> dict[str, list[TamperSettings]]:
        for name in v:
            if not name.strip():
                raise ValueError("field names cannot be empty")
        return v


def _expand_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively expand ${VAR} and ${VAR:-default} in string values.

    Unset variables without a default are left as written. Values under a
    key in ``_LITERAL_KEYS`` are never expanded, at any depth.
    """

    def _expand_string(value: str) -> str:
        def replacer(match: re.Match[str]) -> str:
            env_value = os.environ.get(match.group(1))
            if env_value is not None:
                return env_value
            if match.group(2) is not None:
                return match.group(2)
            return match.group(0)

        return _ENV_VAR_PATTERN.sub(replacer, value)

    def _expand_value(value: Any) -> Any:
        if isinstance(value, str):
            return _expand_string(value)
        if isinstance(value, dict):
            return {k: v if k in _LITERAL_KEYS else _expand_value(v) for k, v in value.items()}
        if isinstance(value, list):
            return [_expand_value(item) for item in value]
        return value

    return {k: _expand_value(v) for k, v in config.items()}


def load_settings(config_path: Path) -> TamperlineSettings:
    """Load settings from YAML with environment variable overrides.

    Precedence, highest first:
    1. Environment variables (TAMPERLINE_*), e.g. TAMPERLINE_LOGGING__LEVEL=DEBUG
    2. The settings file
    3. Pydantic defaults

    Raises:
        FileNotFoundError: If the settings file doesn't exist.
        ValidationError: If the settings fail Pydantic validation.
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix=ENVVAR_PREFIX,
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf upper-cases top-level keys and adds a few of its own
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    return TamperlineSettings(**_expand_env_vars(raw_config))


def settings_from_dict(raw: dict[str, Any]) -> TamperlineSettings:
    """Build settings from an in-memory dict (no file, no environment)."""
    return TamperlineSettings(**_expand_env_vars(raw))
