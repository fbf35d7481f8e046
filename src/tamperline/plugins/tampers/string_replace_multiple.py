"""String Replace (Multiple) tamper.

Replaces one of several configured words or phrases at a time. The value
is optionally trimmed first so that, for example, "ReplaceMe 2021" can
match a "ReplaceMe" entry.
"""

from typing import Any

from pydantic import Field, ValidationInfo, field_validator, model_validator

from tamperline.contracts import (
    InvalidAllowedValuesError,
    ReplacementTable,
    TamperableItem,
    TamperCategory,
    TamperError,
    TrimSpec,
)
from tamperline.core.allowed_values import format_table, parse_table
from tamperline.core.replace import replace_pair
from tamperline.plugins.base import BaseTamper
from tamperline.plugins.config_base import PluginConfig, parse_non_negative_int


class StringReplaceMultipleConfig(PluginConfig):
    """Configuration for the string_replace_multiple tamper.

    ``allowed_values`` accepts either the replacement-pairs text an
    administrator types (one ``Source String|Replacement String`` per line)
    or an already parsed mapping. Text is parsed with ``field_has_data``
    in effect, so positional keys are refused for fields that hold data.
    """

    allowed_values: dict[str, str] = Field(
        default_factory=dict,
        description="Replacement pairs, one per line: Source String|Replacement String.",
    )
    field_has_data: bool = Field(
        default=False,
        strict=True,
        description="Whether the target field already holds data. Disables positional keys.",
    )
    trim_right: int | None = Field(
        default=None,
        description=(
            "Characters to remove from the right of the value before matching. "
            'Trimming 5 from "ReplaceMe 2021" matches an entry for "ReplaceMe".'
        ),
    )
    trim_left: int | None = Field(
        default=None,
        description="Keep only this many leading characters of the value before matching.",
    )

    @model_validator(mode="before")
    @classmethod
    def _parse_allowed_values(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "allowed_values" not in data:
            return data

        raw = data["allowed_values"]
        if raw is None:
            table = ReplacementTable.empty()
        elif isinstance(raw, str):
            try:
                table = parse_table(raw, data.get("field_has_data") is True)
            except InvalidAllowedValuesError as e:
                raise ValueError(str(e)) from e
        elif isinstance(raw, dict):
            if not all(isinstance(key, str | int) and isinstance(value, str) for key, value in raw.items()):
                raise ValueError("allowed_values mapping must map strings to strings")
            table = ReplacementTable({str(key): value for key, value in raw.items()})
        else:
            return data
        return {**data, "allowed_values": table.to_dict()}

    @field_validator("trim_right", "trim_left", mode="before")
    @classmethod
    def _parse_trim(cls, v: Any, info: ValidationInfo) -> int | None:
        return parse_non_negative_int(v, info.field_name or "trim")

    @property
    def table(self) -> ReplacementTable:
        return ReplacementTable(self.allowed_values)

    @property
    def trim(self) -> TrimSpec:
        return TrimSpec(left=self.trim_left, right=self.trim_right)

    @property
    def allowed_values_text(self) -> str:
        """The replacement pairs as editable text."""
        return format_table(self.table)


class StringReplaceMultiple(BaseTamper):
    """Replace more than one word or phrase at a time.

    The value is trimmed into a probe (``trim_right`` characters dropped
    from the end, then only the first ``trim_left`` characters kept). When
    the probe exactly equals a configured source string, every occurrence of
    it in the untrimmed value is replaced. Otherwise the value passes through.

    Example config:
        - plugin: string_replace_multiple
          options:
            allowed_values: |
              ReplaceMe|Found
              Colour|Color
            trim_right: 5
    """

    name = "string_replace_multiple"
    label = "String Replace (Multiple)"
    category = TamperCategory.OTHER
    config_class = StringReplaceMultipleConfig
    plugin_version = "1.0.0"

    def __init__(self, config: dict[str, Any]) -> None:
        super().__init__(config)
        cfg = StringReplaceMultipleConfig.from_dict(config)
        self._table = cfg.table
        self._trim = cfg.trim
        self.settings = cfg

    @property
    def table(self) -> ReplacementTable:
        return self._table

    @property
    def trim(self) -> TrimSpec:
        return self._trim

    def tamper(self, data: Any, item: TamperableItem | None = None) -> Any:
        """Rewrite ``data`` when its probe is a configured source string.

        Raises:
            TamperError: If ``data`` is not a string.
        """
        if item is None:
            # Nothing to replace.
            return data
        if not isinstance(data, str):
            raise TamperError("Input should be a string.")
        return replace_pair(data, self._table, self._trim)
