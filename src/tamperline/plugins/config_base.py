# src/tamperline/plugins/config_base.py
"""Base classes for typed plugin configurations.

Tamper configs inherit from PluginConfig to get:
- Strict validation (unknown options are rejected)
- A from_dict() factory with clear error messages
- Shared validators for the option shapes tampers commonly take

Example usage:
    class TrimConfig(PluginConfig):
        side: str = "both"

    cfg = TrimConfig.from_dict(options)
"""

from typing import Any, Self

from pydantic import BaseModel, ValidationError


class PluginConfigError(Exception):
    """Raised when plugin configuration is invalid."""


class PluginConfig(BaseModel):
    """Base class for typed tamper configurations.

    Configs are frozen: a tamper's settings do not change between the values
    it processes.
    """

    model_config = {"extra": "forbid", "frozen": True}

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> Self:
        """Create config from dict with clear error on validation failure.

        Raises:
            PluginConfigError: If configuration is invalid.
        """
        if not isinstance(config, dict):
            raise PluginConfigError(f"Invalid configuration for {cls.__name__}: config must be a dict, got {type(config).__name__}.")

        try:
            return cls.model_validate(config)
        except ValidationError as e:
            raise PluginConfigError(f"Invalid configuration for {cls.__name__}: {e}") from e
        except ValueError as e:
            raise PluginConfigError(f"Invalid configuration for {cls.__name__}: {e}") from e

    @classmethod
    def defaults(cls) -> dict[str, Any]:
        """Default value of every option that has one."""
        return {name: field.get_default(call_default_factory=True) for name, field in cls.model_fields.items() if not field.is_required()}


def parse_non_negative_int(value: Any, option: str) -> int | None:
    """Parse a count option given as an int or a digit string.

    Empty strings and None mean "not set". Booleans, floats, negative numbers
    and anything non-numeric are rejected rather than coerced.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"{option} must be a non-negative integer, got a boolean")
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if not text.isascii() or not text.lstrip("-").isdigit():
            raise ValueError(f"{option} must be a non-negative integer, got {value!r}")
        parsed = int(text)
    else:
        raise ValueError(f"{option} must be a non-negative integer, got {type(value).__name__}")
    if parsed < 0:
        raise ValueError(f"{option} must be a non-negative integer, got {parsed}")
    return parsed
