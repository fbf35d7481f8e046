"""Trim-then-lookup string replacement.

A value is trimmed into a probe, the probe is looked up as a whole in the
replacement table, and on a hit every occurrence of the probe inside the
original (untrimmed) value is replaced.
"""

from tamperline.contracts.replacement import ReplacementTable, TrimSpec

_NO_TRIM = TrimSpec()


def replace_pair(value: str, table: ReplacementTable, trim: TrimSpec = _NO_TRIM) -> str:
    """Rewrite ``value`` using the entry its trimmed probe matches.

    Args:
        value: The raw field value.
        table: Source string -> replacement.
        trim: Trim applied to build the lookup probe. The rewrite itself
            always runs against the untrimmed value.

    Returns:
        The rewritten value, or ``value`` itself when the probe is not a key.

    Examples:
        >>> table = ReplacementTable({"ReplaceMe": "Found"})
        >>> replace_pair("ReplaceMe 2021", table, TrimSpec(right=5))
        'Found 2021'
        >>> replace_pair("no match here", table)
        'no match here'
    """
    if not table:
        return value

    probe = trim.probe(value)

    # Replacing an empty search string would insert the replacement
    # between every character; an empty probe never rewrites.
    if not probe:
        return value

    replacement = table.get(probe)
    if replacement is None:
        return value
    return value.replace(probe, replacement)
