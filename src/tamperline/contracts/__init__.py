"""Shared contracts for cross-boundary data types.

This package is a leaf module with no outbound dependencies to core,
plugins or engine.

Import patterns:
    from tamperline.contracts import ReplacementTable, TrimSpec, TamperableItem
"""

from tamperline.contracts.enums import Determinism, TamperCategory
from tamperline.contracts.errors import (
    InvalidAllowedValuesError,
    TamperError,
    TamperlineError,
)
from tamperline.contracts.item import TamperableItem
from tamperline.contracts.replacement import ReplacementTable, TrimSpec

__all__ = [
    # Enums
    "Determinism",
    "TamperCategory",
    # Errors
    "InvalidAllowedValuesError",
    "TamperError",
    "TamperlineError",
    # Values
    "ReplacementTable",
    "TamperableItem",
    "TrimSpec",
]
