"""Custom exception classes for splittar."""

from typing import List, Optional


class SplittarError(Exception):
    """
    Base exception class for all splittar errors.

    A run that fails and then also fails to release its streams keeps the
    original error and records the cleanup failure in ``close_error``.
    """

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.close_error: Optional["CloseError"] = None

    def __str__(self) -> str:
        message = super().__str__()
        if self.close_error is not None:
            message = f"{message}; additionally {self.close_error}"
        return message


class ConfigError(SplittarError):
    """
    Raised when the run configuration is invalid. No I/O has happened yet.
    """
    pass


class EmptyInputError(ConfigError):
    """
    Raised when a size expression is empty.
    """
    pass


class UnknownSuffixError(ConfigError):
    """
    Raised when a size expression ends with an unsupported multiplier.
    """

    def __init__(self, suffix: str):
        super().__init__(f"invalid size multiplier: {suffix!r}")
        self.suffix = suffix


class InvalidNumberError(ConfigError):
    """
    Raised when the numeric part of a size expression cannot be parsed.
    """
    pass


class SizeOverflowError(ConfigError):
    """
    Raised when a size expression's value does not fit in a signed 64-bit int.
    """
    pass


class SourceReadError(SplittarError):
    """
    Raised when reading the next chunk from the source fails.
    """
    pass


class TargetWriteError(SplittarError):
    """
    Raised when an entry cannot be written to the archive.
    """

    def __init__(self, message: str, entry_name: str):
        super().__init__(message)
        self.entry_name = entry_name


class ShortWriteError(TargetWriteError):
    """
    Raised when the archive accepted fewer payload bytes than the chunk holds.
    """

    def __init__(self, entry_name: str, written: int, expected: int):
        super().__init__(
            f"bytes written to tar ({written}) for {entry_name} "
            f"does not equal expected count ({expected})",
            entry_name,
        )
        self.written = written
        self.expected = expected


class CloseError(SplittarError):
    """
    Raised when closing the source or finalizing the archive fails.
    """

    def __init__(self, errors: List[BaseException]):
        details = "; ".join(str(error) for error in errors)
        super().__init__(f"failed to close streams: {details}")
        self.errors = list(errors)
