"""Shared data type definitions (ChunkEntry, HostIdentity)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChunkEntry:
    """
    One chunk emitted into the archive.
    """
    index: int
    name: str
    size: int
    offset: int


@dataclass(frozen=True)
class HostIdentity:
    """
    Owner identity stamped on every entry of a run.
    """
    uid: int
    gid: int
    uname: str
    gname: str
