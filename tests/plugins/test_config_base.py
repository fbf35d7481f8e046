# tests/plugins/test_config_base.py
"""Tests for plugin configuration base classes."""

from typing import Any

import pytest
from pydantic import ValidationError

from tamperline.plugins.config_base import PluginConfig, PluginConfigError, parse_non_negative_int


class SampleConfig(PluginConfig):
    required: str
    count: int = 3


class TestPluginConfig:
    def test_from_dict_valid(self) -> None:
        cfg = SampleConfig.from_dict({"required": "x"})

        assert cfg.required == "x"
        assert cfg.count == 3

    def test_unknown_option_rejected(self) -> None:
        with pytest.raises(PluginConfigError, match="SampleConfig"):
            SampleConfig.from_dict({"required": "x", "typo": 1})

    def test_missing_required_rejected(self) -> None:
        with pytest.raises(PluginConfigError):
            SampleConfig.from_dict({})

    def test_non_dict_rejected(self) -> None:
        with pytest.raises(PluginConfigError, match="must be a dict"):
            SampleConfig.from_dict("required=x")  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        cfg = SampleConfig.from_dict({"required": "x"})

        with pytest.raises(ValidationError):
            cfg.count = 4  # type: ignore[misc]

    def test_defaults_excludes_required(self) -> None:
        assert SampleConfig.defaults() == {"count": 3}


class TestParseNonNegativeInt:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, None),
            (0, 0),
            (5, 5),
            ("5", 5),
            (" 12 ", 12),
            ("", None),
            ("   ", None),
        ],
    )
    def test_accepted(self, value: Any, expected: int | None) -> None:
        assert parse_non_negative_int(value, "trim_right") == expected

    @pytest.mark.parametrize("value", [-1, "-3", "five", "2.5", 2.5, True, False, [1], "٣"])
    def test_rejected(self, value: Any) -> None:
        with pytest.raises(ValueError, match="trim_right must be a non-negative integer"):
            parse_non_negative_int(value, "trim_right")
