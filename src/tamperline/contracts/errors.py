"""Exception contracts shared by core, plugins and the CLI."""


class TamperlineError(Exception):
    """Base class for all tamperline errors."""


class InvalidAllowedValuesError(TamperlineError):
    """Raised when a replacement-pairs list cannot be turned into a table.

    Covers malformed lines, mixing explicit and positional keys, keys
    rejected by a key validator, and edits that remove keys still in use.
    """

    def __init__(self, message: str = "Allowed values list: invalid input.", *, line: int | None = None) -> None:
        self.line = line
        super().__init__(message)


class TamperError(TamperlineError):
    """Raised by a tamper when the value it received cannot be processed.

    This is a data problem (wrong type, unexpected shape), not a plugin bug.
    The runner records it against the field and leaves the value as it was.
    """
