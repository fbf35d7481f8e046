"""Plugin system: tampers via pluggy.

- Base class: BaseTamper, which every tamper subclasses
- Config: PluginConfig (Pydantic) and PluginConfigError
- Manager: discovery, registration and instantiation
- Hookspecs: pluggy hook definitions
"""

from tamperline.plugins.base import BaseTamper
from tamperline.plugins.config_base import PluginConfig, PluginConfigError
from tamperline.plugins.hookspecs import hookimpl, hookspec
from tamperline.plugins.manager import PluginManager, PluginSpec

__all__ = [
    # Base classes
    "BaseTamper",
    # Config
    "PluginConfig",
    "PluginConfigError",
    # Manager
    "PluginManager",
    "PluginSpec",
    # Hookspecs
    "hookimpl",
    "hookspec",
]
