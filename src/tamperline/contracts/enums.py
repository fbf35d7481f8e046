"""Status codes and kinds used across subsystem boundaries."""

from enum import StrEnum


class Determinism(StrEnum):
    """Plugin determinism classification.

    Every tamper declares one of these. Replaying a deterministic tamper
    over the same value and configuration yields the same output.
    """

    DETERMINISTIC = "deterministic"
    IO_READ = "io_read"
    NON_DETERMINISTIC = "non_deterministic"


class TamperCategory(StrEnum):
    """Grouping shown when listing tamper plugins."""

    TEXT = "Text"
    LIST = "List"
    OTHER = "Other"
