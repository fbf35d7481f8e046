"""Core functionality: logging, configuration, and the replacement primitives."""

from tamperline.core.allowed_values import (
    accept_any_key,
    bare_lines_positional,
    bare_lines_self_keyed,
    format_table,
    parse_table,
    removed_keys,
    validate_allowed_values,
)
from tamperline.core.logging import configure_logging, get_logger
from tamperline.core.replace import replace_pair

__all__ = [
    "accept_any_key",
    "bare_lines_positional",
    "bare_lines_self_keyed",
    "configure_logging",
    "format_table",
    "get_logger",
    "parse_table",
    "removed_keys",
    "replace_pair",
    "validate_allowed_values",
]
