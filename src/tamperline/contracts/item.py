"""Per-item handle passed to tampers.

The runner wraps each incoming item in a TamperableItem before calling the
tamper chain for each field. Tampers that only need the field value ignore
it; a missing handle (None) tells a tamper it is being called outside a
pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class TamperableItem:
    """An item being imported, as seen by tampers.

    Example:
        def tamper(self, data: Any, item: TamperableItem | None = None) -> Any:
            if item is None:
                return data
            prefix = item.get_source_property("prefix", default="")
            return f"{prefix}{data}"
    """

    source: dict[str, Any] = field(default_factory=dict)
    run_id: str | None = None

    def get_source_property(self, name: str, *, default: Any = None) -> Any:
        return self.source.get(name, default)
