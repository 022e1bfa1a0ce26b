"""Thin adapter over tarfile that writes one entry per chunk to a stream."""

import tarfile
from typing import BinaryIO, Literal

from common.logging_config import get_logger

logger = get_logger(__name__)

ArchiveFormat = Literal["pax", "gnu"]

TAR_FORMATS = {
    "pax": tarfile.PAX_FORMAT,
    "gnu": tarfile.GNU_FORMAT,
}


class PayloadReader:
    """
    File object over an in-memory payload, for tarfile.addfile.

    Hands out slices of a memoryview so the payload is never copied as a
    whole; position counts the bytes consumed so far.
    """

    def __init__(self, payload):
        self._view = memoryview(payload).cast("B")
        self.position = 0

    def read(self, size: int = -1) -> bytes:
        end = len(self._view)
        if size is not None and size >= 0:
            end = min(self.position + size, end)
        data = self._view[self.position:end].tobytes()
        self.position = end
        return data

    def release(self) -> None:
        self._view.release()


class ArchiveWriter:
    """Writes tar entries to a binary stream that may be a pipe."""

    def __init__(self, stream: BinaryIO, owns_stream: bool = False, archive_format: ArchiveFormat = "pax"):
        """
        Initialize the archive writer.

        Args:
            stream: Writable binary stream (file, pipe, sys.stdout.buffer, ...)
            owns_stream: Close the stream after writing the archive footer
            archive_format: "pax" or "gnu"
        """
        if archive_format not in TAR_FORMATS:
            raise ValueError(f"unsupported archive format: {archive_format!r}")
        self.stream = stream
        self.owns_stream = owns_stream
        self.archive_format = archive_format
        self._tar = tarfile.open(fileobj=stream, mode="w|", format=TAR_FORMATS[archive_format])
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def write_entry(self, info: tarfile.TarInfo, payload) -> int:
        """
        Serialize one header and its payload.

        Args:
            info: Entry header; info.size bytes are taken from payload
            payload: Entry body, any bytes-like object

        Returns:
            Number of payload bytes the archive consumed

        Raises:
            OSError: If the underlying stream rejects the write
            ValueError: If the header cannot be encoded or the writer is closed
        """
        body = PayloadReader(payload)
        try:
            self._tar.addfile(info, body)
        finally:
            body.release()
        return body.position

    def close(self) -> None:
        """
        Write the archive footer and release the stream if owned.

        Closing an already closed writer does nothing.
        """
        if self._closed:
            return
        self._closed = True
        try:
            self._tar.close()
        finally:
            if self.owns_stream:
                self.stream.close()
            elif hasattr(self.stream, "flush"):
                self.stream.flush()
        logger.debug("archive finalized")

    def __enter__(self) -> 'ArchiveWriter':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
