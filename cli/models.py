"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class SplitCommand:
    """Split a file into a tar of chunks."""

    chunk_size: str
    source_path: str = "-"
    target_path: str = "-"
    suffix_length: int | None = None
    naming: Literal["basename", "index"] = "basename"
    archive_format: Literal["pax", "gnu"] = "pax"
    short_write_policy: Literal["fatal", "warn"] = "fatal"
    debug: bool = False
