# src/tamperline/plugins/base.py
"""Base class for tamper implementations.

Tampers MUST subclass BaseTamper. Plugin discovery uses issubclass()
checks against it, and the class attributes below are the metadata the
plugin manager and the CLI read without instantiating anything.

Lifecycle (driven by TamperRunner):
    __init__(options) -> tamper(data, item) per value -> close()

- __init__: validate options once; raise PluginConfigError on bad options.
- tamper: rewrite one value. Must not mutate plugin state.
- close: release resources. Called once when the runner is closed.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from tamperline.contracts import Determinism, TamperableItem, TamperCategory
from tamperline.plugins.config_base import PluginConfig


class BaseTamper(ABC):
    """Base class for all value tampers.

    Subclasses declare their metadata and config model, then implement
    tamper():

        class Uppercase(BaseTamper):
            name = "uppercase"
            label = "Convert to upper case"
            config_class = UppercaseConfig

            def tamper(self, data: Any, item: TamperableItem | None = None) -> Any:
                return data.upper()
    """

    name: ClassVar[str]
    label: ClassVar[str] = ""
    category: ClassVar[TamperCategory] = TamperCategory.OTHER
    config_class: ClassVar[type[PluginConfig]] = PluginConfig

    determinism: ClassVar[Determinism] = Determinism.DETERMINISTIC
    plugin_version: ClassVar[str] = "0.0.0"

    def __init__(self, config: dict[str, Any]) -> None:
        """Initialize with configuration.

        Args:
            config: Raw plugin options from settings.
        """
        self.config = config

    @classmethod
    def default_configuration(cls) -> dict[str, Any]:
        """Options a freshly added tamper of this type starts with."""
        return cls.config_class.defaults()

    @abstractmethod
    def tamper(self, data: Any, item: TamperableItem | None = None) -> Any:
        """Rewrite one value.

        Args:
            data: The field value.
            item: The item the value belongs to, or None when called outside
                a pipeline.

        Returns:
            The rewritten value.

        Raises:
            TamperError: If the value cannot be processed.
        """

    def close(self) -> None:  # noqa: B027 - optional override, not abstract
        """Release resources. Most tampers hold none."""
