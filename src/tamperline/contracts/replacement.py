"""Value types for the multiple string replacement tamper.

Both types are built once from configuration and shared by every call to
the tamper, so both are immutable.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType


class ReplacementTable(Mapping[str, str]):
    """Insertion-ordered, read-only mapping of source string to replacement.

    Lookup is exact string equality. Iteration order is the order in which
    keys were first inserted; it drives how the table is rendered back into
    ``key|value`` lines. Re-inserting an existing key while building keeps
    its original position but takes the later value.
    """

    __slots__ = ("_pairs",)

    def __init__(self, pairs: Mapping[str, str] | Iterable[tuple[str, str]] = ()) -> None:
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        built: dict[str, str] = {}
        for key, value in items:
            if type(key) is not str or type(value) is not str:
                raise TypeError(f"Replacement pairs must be str -> str, got {type(key).__name__} -> {type(value).__name__}")
            built[key] = value
        self._pairs: Mapping[str, str] = MappingProxyType(built)

    @classmethod
    def empty(cls) -> ReplacementTable:
        return cls()

    def __getitem__(self, key: str) -> str:
        return self._pairs[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __repr__(self) -> str:
        return f"ReplacementTable({dict(self._pairs)!r})"

    def __hash__(self) -> int:
        return hash(tuple(self._pairs.items()))

    def to_dict(self) -> dict[str, str]:
        """Return a mutable copy, preserving order."""
        return dict(self._pairs)


@dataclass(frozen=True, slots=True)
class TrimSpec:
    """Characters to cut from each end of a value before table lookup.

    ``None`` and ``0`` both mean "leave that side alone".
    """

    left: int | None = None
    right: int | None = None

    def __post_init__(self) -> None:
        for side in ("left", "right"):
            amount = getattr(self, side)
            if amount is None:
                continue
            if type(amount) is not int:
                raise TypeError(f"Trim {side} must be an int or None, got {type(amount).__name__}")
            if amount < 0:
                raise ValueError(f"Trim {side} must be non-negative, got {amount}")

    def probe(self, value: str) -> str:
        """Return the candidate string to look up for ``value``.

        The right trim drops characters from the end. The left trim then keeps
        only the first ``left`` characters of what remains; it does not drop
        characters from the start. Deployed configurations depend on this
        keep-prefix behaviour, so it is preserved.
        """
        probe = value
        if self.right:
            probe = probe[: -self.right]
        if self.left:
            probe = probe[: self.left]
        return probe
