"""Builds the tar header template shared by every chunk of a run."""

import os
import tarfile
import time
from dataclasses import dataclass

from common.constants import ENTRY_MODE, SENTINEL_GID, SENTINEL_NAME, SENTINEL_UID
from common.logging_config import get_logger
from common.types import HostIdentity

try:
    import grp
    import pwd
except ImportError:  # not available on Windows
    grp = None
    pwd = None

logger = get_logger(__name__)

SENTINEL_IDENTITY = HostIdentity(
    uid=SENTINEL_UID,
    gid=SENTINEL_GID,
    uname=SENTINEL_NAME,
    gname=SENTINEL_NAME,
)


def resolve_identity() -> HostIdentity:
    """
    Look up the invoking user's uid, gid, user name and group name.

    Falls back to SENTINEL_IDENTITY when the user cannot be resolved, and to
    the sentinel group name when only the group lookup fails.

    Returns:
        HostIdentity for the current process
    """
    if pwd is None or not hasattr(os, "getuid"):
        logger.warning("failed to get current user: user database is not available on this platform")
        return SENTINEL_IDENTITY

    uid = os.getuid()
    try:
        user = pwd.getpwuid(uid)
    except KeyError as e:
        logger.warning(f"failed to get current user: {e}")
        return SENTINEL_IDENTITY

    gid = user.pw_gid
    try:
        gname = grp.getgrgid(gid).gr_name
    except KeyError as e:
        logger.warning(f"failed to look up gid: {gid}: {e}")
        gname = SENTINEL_NAME

    return HostIdentity(uid=uid, gid=gid, uname=user.pw_name, gname=gname)


@dataclass(frozen=True)
class HeaderTemplate:
    """
    Fields every entry of a run has in common.

    Only the name and size differ between chunks; for_chunk builds a fresh
    TarInfo for each so no header object outlives its flush.
    """
    identity: HostIdentity
    timestamp: float
    mode: int = ENTRY_MODE

    def for_chunk(self, name: str, size: int) -> tarfile.TarInfo:
        """
        Build the header for one chunk.

        Args:
            name: Entry name
            size: Number of payload bytes in the entry

        Returns:
            TarInfo describing a read-only regular file
        """
        info = tarfile.TarInfo(name=name)
        info.type = tarfile.REGTYPE
        info.size = size
        info.mode = self.mode
        info.uid = self.identity.uid
        info.gid = self.identity.gid
        info.uname = self.identity.uname
        info.gname = self.identity.gname
        info.mtime = self.timestamp
        info.linkname = ""
        info.devmajor = 0
        info.devminor = 0
        # only written out in PAX format
        info.pax_headers = {
            "atime": repr(self.timestamp),
            "ctime": repr(self.timestamp),
        }
        return info


def create_header_template() -> HeaderTemplate:
    """
    Resolve the host identity and capture the run's timestamp.

    Returns:
        HeaderTemplate used for every chunk of one run
    """
    identity = resolve_identity()
    timestamp = time.time()
    logger.debug(
        f"header template: uid={identity.uid} gid={identity.gid} "
        f"uname={identity.uname} gname={identity.gname} time={timestamp}"
    )
    return HeaderTemplate(identity=identity, timestamp=timestamp)
