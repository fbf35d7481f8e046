"""Dynamic tamper discovery by package scanning.

Scans the built-in tamper packages for classes that:
1. Inherit from BaseTamper
2. Have a non-empty `name` class attribute
3. Are not abstract

Modules are imported under their real package path, so a discovered class
is the same object a direct import returns.
"""

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType
from typing import Any

logger = logging.getLogger(__name__)

# Packages scanned for built-in tampers (non-recursive)
TAMPER_PACKAGES: tuple[str, ...] = ("tamperline.plugins.tampers",)


def discover_plugins_in_package(package_name: str, base_class: type) -> list[type]:
    """Discover plugin classes in the modules of one package.

    Plugin code is system-owned: import errors are bugs and propagate.

    Args:
        package_name: Dotted package to scan.
        base_class: Base class plugins must inherit from.

    Returns:
        Discovered classes, ordered by module name then class name.
    """
    package = importlib.import_module(package_name)
    discovered: list[type] = []

    for module_info in sorted(pkgutil.iter_modules(package.__path__), key=lambda m: m.name):
        if module_info.ispkg or module_info.name.startswith("_"):
            continue
        module = importlib.import_module(f"{package_name}.{module_info.name}")
        discovered.extend(_discover_in_module(module, base_class))

    return discovered


def _discover_in_module(module: ModuleType, base_class: type) -> list[type]:
    discovered: list[type] = []
    for name, obj in inspect.getmembers(module, inspect.isclass):
        # Defined here, not imported
        if obj.__module__ != module.__name__:
            continue
        if not issubclass(obj, base_class) or obj is base_class:
            continue
        if inspect.isabstract(obj):
            continue

        plugin_name = getattr(obj, "name", None)
        if not plugin_name:
            logger.warning(
                "Class %s in %s inherits from %s but has no/empty 'name' attribute - skipping",
                name,
                module.__name__,
                base_class.__name__,
            )
            continue

        discovered.append(obj)
    return discovered


def discover_all_tampers() -> list[type]:
    """Discover all built-in tampers.

    Raises:
        ValueError: If two built-in tampers share a name.
    """
    from tamperline.plugins.base import BaseTamper

    found: dict[str, type] = {}
    for package_name in TAMPER_PACKAGES:
        for cls in discover_plugins_in_package(package_name, BaseTamper):
            cls_name: str = cls.name  # type: ignore[attr-defined]
            if cls_name in found:
                raise ValueError(
                    f"Duplicate tamper plugin name '{cls_name}': "
                    f"found in both {found[cls_name].__module__} and {cls.__module__}. "
                    f"Plugin names must be unique."
                )
            found[cls_name] = cls
    return list(found.values())


def get_plugin_description(plugin_cls: type) -> str:
    """First non-empty docstring line, or a name-based fallback."""
    if plugin_cls.__doc__:
        for line in plugin_cls.__doc__.strip().split("\n"):
            cleaned = line.strip()
            if cleaned:
                return cleaned

    name = getattr(plugin_cls, "name", plugin_cls.__name__)
    return f"{name} plugin"


def create_dynamic_hookimpl(plugin_classes: list[type], hook_method_name: str) -> object:
    """Wrap plugin classes in an object pluggy can register.

    Args:
        plugin_classes: Classes the hook should return.
        hook_method_name: Hook to implement (e.g. "tamperline_get_tampers").
    """
    from tamperline.plugins.hookspecs import hookimpl

    class DynamicHookImpl:
        """Dynamically generated hook implementer."""

    def hook_method(self: Any) -> list[type]:
        return plugin_classes

    setattr(DynamicHookImpl, hook_method_name, hookimpl(hook_method))
    return DynamicHookImpl()
