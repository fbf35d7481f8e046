# src/tamperline/engine/runner.py
"""Apply configured tamper chains to items.

An item is a flat dict of field values. For each configured field present
in the item, the field's tampers run in order, each receiving the previous
tamper's output. Items are never mutated; process() returns a new dict.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from tamperline.contracts import TamperableItem, TamperError
from tamperline.core.config import TamperlineSettings
from tamperline.core.logging import get_logger
from tamperline.plugins.base import BaseTamper
from tamperline.plugins.manager import PluginManager

logger = get_logger(__name__)


@dataclass(frozen=True)
class FieldError:
    """A tamper rejected a field value."""

    field: str
    plugin: str
    message: str


@dataclass
class RunnerResult:
    """Outcome of running the chains over one item."""

    item: dict[str, Any]
    fields_modified: list[str] = field(default_factory=list)
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class TamperRunner:
    """Runs per-field tamper chains.

    Usage:
        runner = TamperRunner.from_settings(settings, manager)
        for result in runner.process_all(items):
            ...
        runner.close()
    """

    def __init__(self, chains: Mapping[str, list[BaseTamper]], *, run_id: str | None = None) -> None:
        self._chains = {name: list(tampers) for name, tampers in chains.items()}
        self._run_id = run_id

    @classmethod
    def from_settings(
        cls,
        settings: TamperlineSettings,
        manager: PluginManager,
        *,
        run_id: str | None = None,
    ) -> TamperRunner:
        """Instantiate every configured tamper.

        Raises:
            PluginConfigError: If a plugin is unknown or its options are invalid.
        """
        chains = {
            field_name: [manager.create_tamper(t.plugin, t.options) for t in tamper_settings]
            for field_name, tamper_settings in settings.fields.items()
        }
        return cls(chains, run_id=run_id)

    @property
    def fields(self) -> list[str]:
        return list(self._chains)

    def process(self, item: Mapping[str, Any]) -> RunnerResult:
        """Run every configured chain over ``item``.

        Fields missing from the item are skipped. When a tamper raises
        TamperError the field keeps the value it had before that tamper
        and the rest of its chain is skipped.
        """
        output = copy.deepcopy(dict(item))
        handle = TamperableItem(source=output, run_id=self._run_id)
        result = RunnerResult(item=output)

        for field_name, tampers in self._chains.items():
            if field_name not in output:
                continue

            original = output[field_name]
            value = original
            for tamper in tampers:
                try:
                    value = tamper.tamper(value, handle)
                except TamperError as e:
                    logger.warning("Tamper rejected value", field=field_name, plugin=tamper.name, error=str(e))
                    result.errors.append(FieldError(field=field_name, plugin=tamper.name, message=str(e)))
                    break

            output[field_name] = value
            if value != original:
                result.fields_modified.append(field_name)

        logger.debug("Processed item", fields_modified=result.fields_modified, errors=len(result.errors))
        return result

    def process_all(self, items: Iterable[Mapping[str, Any]]) -> Iterator[RunnerResult]:
        for item in items:
            yield self.process(item)

    def close(self) -> None:
        """Close every tamper; one failing close does not stop the others."""
        for field_name, tampers in self._chains.items():
            for tamper in tampers:
                try:
                    tamper.close()
                except Exception:
                    logger.exception("Tamper close failed", field=field_name, plugin=tamper.name)
