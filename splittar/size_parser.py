"""Parses human readable sizes such as "64M" into byte counts."""

from typing import Union

from common.constants import MAX_SIZE_BYTES
from splittar.exceptions import (
    ConfigError,
    EmptyInputError,
    InvalidNumberError,
    SizeOverflowError,
    UnknownSuffixError,
)

# Lowercase multipliers are decimal, uppercase are binary. 'b' and 'B' are both 1.
SIZE_MULTIPLIERS = {
    'b': 1,
    'B': 1,
    'k': 1000,
    'K': 1024,
    'm': 1000 ** 2,
    'M': 1024 ** 2,
    'g': 1000 ** 3,
    'G': 1024 ** 3,
    't': 1000 ** 4,
    'T': 1024 ** 4,
    'p': 1000 ** 5,
    'P': 1024 ** 5,
}


def _is_digit(char: str) -> bool:
    return '0' <= char <= '9'


def parse_size(value: str) -> int:
    """
    Convert a size expression into a byte count.

    The expression is a run of decimal digits optionally followed by one
    multiplier suffix from SIZE_MULTIPLIERS.

    Args:
        value: Size expression (e.g., "1024", "1k", "64M")

    Returns:
        Size in bytes

    Raises:
        EmptyInputError: If value is empty
        UnknownSuffixError: If the last character is not a digit or a known suffix
        InvalidNumberError: If the numeric part is empty, malformed or too large
        SizeOverflowError: If number * multiplier does not fit in 64 bits
    """
    if len(value) == 0:
        raise EmptyInputError("empty size")

    suffix = value[-1]
    multiplier = 1
    number = value
    if not _is_digit(suffix):
        if suffix not in SIZE_MULTIPLIERS:
            raise UnknownSuffixError(suffix)
        multiplier = SIZE_MULTIPLIERS[suffix]
        number = value[:-1]

    if not number or not all(_is_digit(char) for char in number):
        raise InvalidNumberError(f"invalid size: {value!r}")

    magnitude = int(number, 10)
    if magnitude > MAX_SIZE_BYTES:
        raise InvalidNumberError(f"invalid size: {value!r} is out of range")

    size = magnitude * multiplier
    if size > MAX_SIZE_BYTES:
        raise SizeOverflowError(f"size {value!r} overflows a 64-bit byte count")

    return size


def parse_chunk_size(value: Union[int, str]) -> int:
    """
    Resolve a chunk size given as bytes or as a size expression.

    Args:
        value: Positive integer or size expression

    Returns:
        Chunk size in bytes

    Raises:
        ConfigError: If the value is malformed or not positive
    """
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ConfigError(f"chunk size must be an integer or size string, got {value!r}")

    size = parse_size(value) if isinstance(value, str) else value
    if size <= 0:
        raise ConfigError("chunk size cannot be <= 0")
    if size > MAX_SIZE_BYTES:
        raise SizeOverflowError(f"chunk size {size} overflows a 64-bit byte count")
    return size
