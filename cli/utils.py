"""Utility functions for CLI output."""

from typing import List

from common.types import ChunkEntry

BINARY_UNITS = ('KiB', 'MiB', 'GiB', 'TiB', 'PiB')


def format_size(size_bytes: int) -> str:
    """
    Format a byte count for log messages.

    Args:
        size_bytes: Size in bytes

    Returns:
        "512 B" below 1 KiB, otherwise two decimals in the largest binary unit
        below 1024 (e.g., "64.00 MiB")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    size = float(size_bytes)
    for unit in BINARY_UNITS:
        size /= 1024.0
        if size < 1024.0 or unit == BINARY_UNITS[-1]:
            break
    return f"{size:.2f} {unit}"


def summarize(entries: List[ChunkEntry]) -> str:
    """One line summary of a finished split."""
    total = sum(entry.size for entry in entries)
    if not entries:
        return "0 chunk(s), 0 B"
    return f"{len(entries)} chunk(s), {format_size(total)} ({entries[0].name} .. {entries[-1].name})"
