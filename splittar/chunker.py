"""Reads a source stream in fixed size chunks and writes each as a tar entry."""

import os
import stat
import time
from typing import List, Optional

from common.logging_config import get_logger
from common.types import ChunkEntry
from splittar.config import RunConfig
from splittar.exceptions import (
    CloseError,
    ShortWriteError,
    SourceReadError,
    SplittarError,
    TargetWriteError,
)
from splittar.header import HeaderTemplate, create_header_template

logger = get_logger(__name__)

# largest single read; chunk buffers grow by at most this much per read
READ_SIZE = 64 * 1024

# pause before retrying a non-blocking source that had no data
WOULD_BLOCK_DELAY_SECONDS = 0.01


def remaining_length(source) -> Optional[int]:
    """
    Bytes left in source when it is a regular file, else None.

    Args:
        source: Binary stream

    Returns:
        Remaining byte count, or None for pipes, sockets and in-memory streams
    """
    try:
        fd = source.fileno()
        st = os.fstat(fd)
        if not stat.S_ISREG(st.st_mode):
            return None
        return max(st.st_size - source.tell(), 0)
    except (AttributeError, OSError, ValueError):
        return None


def effective_chunk_size(config: RunConfig) -> int:
    """
    Chunk size actually used for the buffer.

    A regular file smaller than the configured chunk size only needs a
    buffer as large as the file.
    """
    remaining = remaining_length(config.source)
    if remaining is not None and remaining < config.chunk_size:
        logger.debug(f"source holds {remaining} bytes, shrinking chunk size from {config.chunk_size}")
        return max(remaining, 1)
    return config.chunk_size


class SplitTar:
    """
    Splits config.source into entries of at most config.chunk_size bytes.

    Usage:
        entries = SplitTar(config).run()
    """

    def __init__(self, config: RunConfig, template: Optional[HeaderTemplate] = None):
        """
        Initialize a split run.

        Args:
            config: Resolved run configuration
            template: Header template; created from the host identity if omitted
        """
        self.config = config
        self.template = template
        self.entries: List[ChunkEntry] = []
        self._closed = False

    def run(self) -> List[ChunkEntry]:
        """
        Split the whole source, then finalize the archive and close streams.

        Streams are released on every path. When the split itself fails, its
        error is raised with any close failure attached as close_error.

        Returns:
            Entries written, in order

        Raises:
            SourceReadError: If the source fails mid read
            TargetWriteError: If an entry cannot be written
            CloseError: If only closing the streams failed
        """
        try:
            self._split()
        except SplittarError as e:
            e.close_error = self.close()
            if e.close_error is not None:
                logger.error(f"{e.close_error} (after: {e})")
            raise
        except BaseException:
            self.close()
            raise

        close_error = self.close()
        if close_error is not None:
            raise close_error

        total = sum(entry.size for entry in self.entries)
        logger.info(f"wrote {len(self.entries)} chunk(s), {total} bytes")
        return self.entries

    def close(self) -> Optional[CloseError]:
        """
        Finalize the archive and close the source if the run owns it.

        Runs at most once; later calls return None.

        Returns:
            CloseError collecting every failure, or None
        """
        if self._closed:
            return None
        self._closed = True

        errors: List[BaseException] = []
        try:
            self.config.target.close()
        except (OSError, ValueError) as e:
            errors.append(e)
        if self.config.close_source:
            try:
                self.config.source.close()
            except (OSError, ValueError) as e:
                errors.append(e)

        if errors:
            return CloseError(errors)
        return None

    def _split(self) -> None:
        if self.template is None:
            self.template = create_header_template()

        chunk_size = effective_chunk_size(self.config)
        step = bytearray(min(READ_SIZE, chunk_size))
        offset = 0
        index = 0

        while True:
            payload = self._fill(chunk_size, memoryview(step))
            if not payload:
                break
            self._flush(index, payload, offset)
            offset += len(payload)
            index += 1

    def _fill(self, chunk_size: int, step: memoryview) -> bytearray:
        """
        Read one chunk, growing the buffer as data arrives.

        Returns:
            Up to chunk_size bytes; empty once the source is exhausted
        """
        buffer = bytearray()
        while len(buffer) < chunk_size:
            wanted = min(len(step), chunk_size - len(buffer))
            logger.debug(f"attempt reading {wanted} bytes from source")
            try:
                n = self._read_into(step[:wanted])
                if n is None:
                    # non-blocking source with nothing available yet
                    time.sleep(WOULD_BLOCK_DELAY_SECONDS)
                    continue
                if n > wanted:
                    raise SourceReadError(f"source returned {n} bytes when {wanted} were requested")
                buffer += step[:n]
            except MemoryError as e:
                raise SourceReadError(
                    f"not enough memory to buffer a chunk of {chunk_size} bytes "
                    f"({len(buffer)} read so far)"
                ) from e
            except (OSError, ValueError) as e:
                raise SourceReadError(f"failed to read next chunk from source: {e}") from e
            logger.debug(f"actually read {n} bytes from source")
            if n == 0:
                break
        return buffer

    def _read_into(self, view: memoryview) -> Optional[int]:
        source = self.config.source
        if hasattr(source, "readinto"):
            return source.readinto(view)
        data = source.read(len(view))
        if data is None:
            return None
        n = len(data)
        if n > len(view):
            return n
        view[:n] = data
        return n

    def _flush(self, index: int, payload: bytearray, offset: int) -> None:
        """Write one header and its payload."""
        name = self.config.entry_name(index)
        size = len(payload)
        info = self.template.for_chunk(name, size)

        logger.debug(f"writing header for {name} ({size} bytes)")
        try:
            written = self.config.target.write_entry(info, payload)
        except (OSError, ValueError) as e:
            raise TargetWriteError(f"failed to write {name} to tar: {e}", name) from e

        if written != size:
            if self.config.short_write_policy == "fatal":
                raise ShortWriteError(name, written, size)
            logger.warning(
                f"bytes written to tar ({written}) for {name} does not equal expected count ({size})"
            )

        self.entries.append(ChunkEntry(index=index, name=name, size=size, offset=offset))


def split_tar(config: RunConfig) -> List[ChunkEntry]:
    """
    Split config.source into a tar archive written to config.target.

    Args:
        config: Resolved run configuration

    Returns:
        Entries written, in order
    """
    return SplitTar(config).run()
