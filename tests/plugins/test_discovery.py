# tests/plugins/test_discovery.py
"""Tests for tamper discovery."""

from typing import Any

from tamperline.plugins.base import BaseTamper
from tamperline.plugins.discovery import (
    create_dynamic_hookimpl,
    discover_all_tampers,
    discover_plugins_in_package,
    get_plugin_description,
)
from tamperline.plugins.tampers.string_replace_multiple import StringReplaceMultiple


class TestDiscovery:
    def test_discovers_builtin_tampers(self) -> None:
        assert StringReplaceMultiple in discover_all_tampers()

    def test_discovered_class_is_importable_class(self) -> None:
        """Discovery imports modules normally, so identity checks hold."""
        found = discover_plugins_in_package("tamperline.plugins.tampers", BaseTamper)

        assert found == [StringReplaceMultiple]

    def test_description_from_docstring(self) -> None:
        assert get_plugin_description(StringReplaceMultiple) == "Replace more than one word or phrase at a time."

    def test_description_fallback(self) -> None:
        class NoDoc:
            name = "nodoc"

        assert get_plugin_description(NoDoc) == "nodoc plugin"

    def test_dynamic_hookimpl(self) -> None:
        class Dummy:
            name = "dummy"

        impl: Any = create_dynamic_hookimpl([Dummy], "tamperline_get_tampers")

        assert impl.tamperline_get_tampers() == [Dummy]
