"""Plugin manager for tamper discovery, registration and instantiation.

Uses pluggy for hook-based plugin registration.
"""

from dataclasses import dataclass
from typing import Any

import pluggy

from tamperline.contracts import Determinism, TamperCategory
from tamperline.core.logging import get_logger
from tamperline.plugins.base import BaseTamper
from tamperline.plugins.config_base import PluginConfigError
from tamperline.plugins.hookspecs import PROJECT_NAME, TamperlineTamperSpec

logger = get_logger(__name__)


@dataclass(frozen=True)
class PluginSpec:
    """Registration record for a tamper class."""

    name: str
    label: str
    category: TamperCategory
    version: str
    determinism: Determinism

    @classmethod
    def from_plugin(cls, plugin_cls: type[BaseTamper]) -> "PluginSpec":
        return cls(
            name=plugin_cls.name,
            label=plugin_cls.label or plugin_cls.name,
            category=plugin_cls.category,
            version=plugin_cls.plugin_version,
            determinism=plugin_cls.determinism,
        )


class PluginManager:
    """Manages tamper discovery, registration, and lookup.

    Usage:
        manager = PluginManager()
        manager.register_builtin_plugins()

        tamper = manager.create_tamper("string_replace_multiple", {"allowed_values": "a|b"})
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(TamperlineTamperSpec)
        self._tampers: dict[str, type[BaseTamper]] = {}

    def register_builtin_plugins(self) -> None:
        """Discover and register the built-in tampers.

        Call once at startup.
        """
        from tamperline.plugins.discovery import create_dynamic_hookimpl, discover_all_tampers

        self.register(create_dynamic_hookimpl(discover_all_tampers(), "tamperline_get_tampers"))

    def load_entrypoint_plugins(self) -> int:
        """Register tampers published by installed packages.

        Returns:
            Number of plugin objects loaded from the ``tamperline`` group.
        """
        count = self._pm.load_setuptools_entrypoints(PROJECT_NAME)
        self._refresh_caches()
        return count

    def register(self, plugin: Any) -> None:
        """Register an object implementing tamperline hooks."""
        self._pm.register(plugin)
        self._refresh_caches()

    def _refresh_caches(self) -> None:
        """Rebuild the name -> class cache from hooks.

        Raises:
            ValueError: If two registered tampers share a name.
        """
        new_tampers: dict[str, type[BaseTamper]] = {}
        for tampers in self._pm.hook.tamperline_get_tampers():
            for cls in tampers:
                name = cls.name
                if name in new_tampers:
                    raise ValueError(f"Duplicate tamper plugin name: '{name}'. Already registered by {new_tampers[name].__name__}")
                new_tampers[name] = cls
        self._tampers = new_tampers

    def get_tampers(self) -> list[type[BaseTamper]]:
        """Get all registered tamper classes."""
        return list(self._tampers.values())

    def get_tamper_by_name(self, name: str) -> type[BaseTamper] | None:
        """Get tamper class by plugin name."""
        return self._tampers.get(name)

    def get_specs(self) -> list[PluginSpec]:
        return [PluginSpec.from_plugin(cls) for cls in self._tampers.values()]

    def create_tamper(self, name: str, options: dict[str, Any] | None = None) -> BaseTamper:
        """Instantiate a registered tamper with validated options.

        Raises:
            PluginConfigError: If no tamper has that name, or the options are invalid.
        """
        plugin_cls = self.get_tamper_by_name(name)
        if plugin_cls is None:
            available = ", ".join(sorted(self._tampers)) or "(none)"
            raise PluginConfigError(f"Unknown tamper plugin: '{name}'. Available: {available}")
        tamper = plugin_cls(dict(options or {}))
        logger.debug("Created tamper", plugin=name, version=plugin_cls.plugin_version)
        return tamper
