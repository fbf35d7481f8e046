# tests/core/test_config.py
"""Tests for settings loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError


class TestSettingsModels:
    def test_defaults(self) -> None:
        from tamperline.core.config import TamperlineSettings

        settings = TamperlineSettings()

        assert settings.fields == {}
        assert settings.logging.level == "INFO"
        assert settings.logging.json_output is False

    def test_settings_are_frozen(self) -> None:
        from tamperline.core.config import TamperlineSettings

        settings = TamperlineSettings()

        with pytest.raises(ValidationError):
            settings.fields = {}  # type: ignore[misc]

    def test_empty_plugin_name_rejected(self) -> None:
        from tamperline.core.config import TamperSettings

        with pytest.raises(ValidationError, match="plugin name cannot be empty"):
            TamperSettings(plugin="  ")

    def test_log_level_case_insensitive(self) -> None:
        from tamperline.core.config import LoggingSettings

        assert LoggingSettings(level="debug").level == "DEBUG"

    def test_env_var_expansion(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from tamperline.core.config import settings_from_dict

        monkeypatch.setenv("REPLACEMENT", "Found")
        monkeypatch.delenv("TRIM", raising=False)
        settings = settings_from_dict(
            {
                "fields": {
                    "title": [
                        {
                            "plugin": "string_replace_multiple",
                            "options": {"allowed_values": "ReplaceMe|Found", "trim_left": "${TRIM:-3}", "note": "${REPLACEMENT}"},
                        }
                    ]
                }
            }
        )

        options = settings.fields["title"][0].options
        assert options["note"] == "Found"
        assert options["trim_left"] == "3"

    def test_allowed_values_not_expanded(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from tamperline.core.config import settings_from_dict

        monkeypatch.setenv("HOME", "/root")
        monkeypatch.delenv("TRIM", raising=False)
        settings = settings_from_dict(
            {
                "fields": {
                    "title": [
                        {
                            "plugin": "string_replace_multiple",
                            "options": {"allowed_values": "${HOME}|home\n${MISSING:-x}|y", "trim_right": "${TRIM:-5}"},
                        }
                    ]
                }
            }
        )

        options = settings.fields["title"][0].options
        assert options["allowed_values"] == "${HOME}|home\n${MISSING:-x}|y"
        assert options["trim_right"] == "5"


class TestLoadSettings:
    def test_load_from_yaml_file(self, settings_file: Path) -> None:
        from tamperline.core.config import load_settings

        settings = load_settings(settings_file)

        chain = settings.fields["title"]
        assert len(chain) == 1
        assert chain[0].plugin == "string_replace_multiple"
        assert chain[0].options["trim_right"] == 5
        assert chain[0].options["allowed_values"] == "ReplaceMe|Found\nColour|Color\n"

    def test_load_with_env_override(self, settings_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        from tamperline.core.config import load_settings

        monkeypatch.setenv("TAMPERLINE_LOGGING__LEVEL", "DEBUG")

        settings = load_settings(settings_file)

        assert settings.logging.level == "DEBUG"

    def test_missing_file(self, tmp_path: Path) -> None:
        from tamperline.core.config import load_settings

        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "nope.yaml")

    def test_load_validates_schema(self, tmp_path: Path) -> None:
        from tamperline.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text(
            """
fields:
  title:
    - options:
        trim_right: 5
"""
        )

        with pytest.raises(ValidationError):
            load_settings(config_file)
