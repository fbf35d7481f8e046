# src/tamperline/core/allowed_values.py
"""Replacement-pairs text format.

Administrators enter replacement pairs as plain text, one per line:

    Source String|Replacement String
    ReplaceMe|Found

This module turns that text into a ReplacementTable, renders a table back
into text for editing, and validates an edit against the previous table.

Line rules:
- Lines are stripped; blank lines are dropped but still consume a position.
- ``key|value`` gives an explicit key. The split happens at the LAST ``|``,
  so ``a|b|c`` maps ``a|b`` to ``c``. Both sides are stripped.
- A bare line keys itself when the bare-line policy allows it.
- Otherwise, if the field holds no data yet, the line's position becomes its
  key (``"0"``, ``"1"``, ...).
- Explicit and positional keys cannot be mixed in one list.
- A repeated key takes the later value.
"""

from collections.abc import Callable, Iterable

from tamperline.contracts.errors import InvalidAllowedValuesError
from tamperline.contracts.replacement import ReplacementTable
from tamperline.core.logging import get_logger

logger = get_logger(__name__)

KeyValidator = Callable[[str], str | None]
"""Returns an error message for an unusable key, or None when it is fine."""

BareKeyPolicy = Callable[[str], bool]
"""Decides whether a line without ``|`` may be used as its own key."""

ValuesInUse = Callable[[Iterable[str]], bool]
"""Reports whether any of the given keys is referenced by stored data."""

IN_USE_MESSAGE = "Allowed values list: some values are being removed while currently in use."


def accept_any_key(key: str) -> str | None:
    """Default key validator: every key is usable."""
    return None


def bare_lines_positional(line: str) -> bool:
    """Default bare-line policy: bare lines never key themselves."""
    return False


def bare_lines_self_keyed(line: str) -> bool:
    """Bare-line policy that lets any bare line be its own key."""
    return True


def parse_table(
    raw: str,
    has_data: bool = False,
    *,
    bare_key: BareKeyPolicy = bare_lines_positional,
) -> ReplacementTable:
    """Parse replacement-pairs text into a table.

    Args:
        raw: Newline-separated lines.
        has_data: True when the configured field already holds data. Positional
            keys are only generated for fields without data, since renumbering
            would silently re-point stored values.
        bare_key: Decides whether a bare line may be used as its own key.

    Returns:
        The parsed table, in line order.

    Raises:
        InvalidAllowedValuesError: If a line cannot be keyed, or explicit and
            positional keys are mixed.
    """
    pairs: list[tuple[str, str]] = []
    explicit_keys = generated_keys = False

    for position, line in enumerate(raw.split("\n")):
        text = line.strip()
        if not text:
            continue

        key, sep, value = text.rpartition("|")
        if sep:
            pairs.append((key.strip(), value.strip()))
            explicit_keys = True
        elif bare_key(text):
            pairs.append((text, text))
            explicit_keys = True
        elif not has_data:
            pairs.append((str(position), text))
            generated_keys = True
        else:
            raise InvalidAllowedValuesError(line=position)

    # Keys are generated only when the list has no explicit key at all.
    if explicit_keys and generated_keys:
        raise InvalidAllowedValuesError()

    table = ReplacementTable(pairs)
    logger.debug("Parsed replacement table", pairs=len(table), positional=generated_keys)
    return table


def format_table(table: ReplacementTable) -> str:
    """Render a table as ``key|value`` lines for editing."""
    return "\n".join(f"{key}|{value}" for key, value in table.items())


def removed_keys(old: ReplacementTable, new: ReplacementTable) -> set[str]:
    """Keys present in ``old`` that ``new`` no longer defines."""
    return {key for key in old if key not in new}


def validate_allowed_values(
    raw: str,
    *,
    has_data: bool = False,
    previous: ReplacementTable | None = None,
    values_in_use: ValuesInUse | None = None,
    validate_key: KeyValidator = accept_any_key,
    bare_key: BareKeyPolicy = bare_lines_positional,
) -> ReplacementTable:
    """Validate an edited replacement-pairs list.

    Parses ``raw``, checks every key with ``validate_key`` and, when the field
    has data, refuses edits that drop keys ``values_in_use`` reports as
    referenced.

    Returns:
        The new table.

    Raises:
        InvalidAllowedValuesError: On any of the failures above. A rejected
            key raises with the validator's message.
    """
    table = parse_table(raw, has_data, bare_key=bare_key)

    for key in table:
        error = validate_key(key)
        if error is not None:
            raise InvalidAllowedValuesError(error)

    if has_data and previous is not None and values_in_use is not None:
        lost = removed_keys(previous, table)
        if lost and values_in_use(sorted(lost)):
            logger.warning("Rejected edit removing keys in use", removed=sorted(lost))
            raise InvalidAllowedValuesError(IN_USE_MESSAGE)

    return table
