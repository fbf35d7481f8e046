# src/tamperline/plugins/hookspecs.py
"""pluggy hook specifications for tamper plugins.

Plugins implement these hooks to register themselves with the framework.
The plugin manager calls them during discovery.

Usage (shipping tampers from another package):
    from tamperline.plugins.hookspecs import hookimpl

    class MyTampers:
        @hookimpl
        def tamperline_get_tampers(self):
            return [MyTamper]

Third-party packages can also expose such an object under the
``tamperline`` entry-point group.
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from tamperline.plugins.base import BaseTamper

PROJECT_NAME = "tamperline"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)

hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class TamperlineTamperSpec:
    """Hook specifications for tamper plugins."""

    @hookspec
    def tamperline_get_tampers(self) -> list[type["BaseTamper"]]:  # type: ignore[empty-body]
        """Return tamper plugin classes (not instances)."""
