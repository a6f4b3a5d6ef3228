"""
Exceptions raised by record streams and file access.

Hierarchy:
    RecordStreamError
    ├── ExhaustionError             read() called on a stream with no records left.
    ├── InvalidArgumentError        Bad argument; raised before any I/O happens.
    └── UnsupportedOperationError   The stream variant cannot do this at all.

Failures of the underlying medium are not wrapped: they surface as the
platform's ``OSError``.
"""


class RecordStreamError(Exception):
    """Base class for all record stream errors."""


class ExhaustionError(RecordStreamError, LookupError):
    """Raised when ``read()`` is called on an exhausted source."""


class InvalidArgumentError(RecordStreamError, ValueError):
    """
    Raised when a call or constructor argument is missing or out of range.

    Args:
        message: Human-readable description.
        argument: Name of the offending argument, if known.
    """

    def __init__(self, message: str, argument: str | None = None) -> None:
        super().__init__(message)
        self.argument = argument

    def __str__(self) -> str:
        base = super().__str__()
        if self.argument:
            return f"{base} | argument={self.argument}"
        return base


class UnsupportedOperationError(RecordStreamError, NotImplementedError):
    """Raised by sentinel streams for operations they never support."""


def check_not_none(name: str, value) -> None:
    """Raise InvalidArgumentError if ``value`` is None."""
    if value is None:
        raise InvalidArgumentError(f"{name} is None", argument=name)


def check_limit(limit) -> None:
    """Validate an optional record limit: None or a non-negative int."""
    if limit is None:
        return
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidArgumentError(f"limit must be an int, got {type(limit).__name__}",
                                   argument="limit")
    if limit < 0:
        raise InvalidArgumentError(f"limit must be >= 0, got {limit}", argument="limit")
