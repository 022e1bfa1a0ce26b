"""Shared pytest fixtures for all tests."""

import io
import logging
import tarfile

import pytest

from common.types import HostIdentity
from splittar.header import HeaderTemplate


class RecordingWriter:
    """
    In-memory archive writer that records every entry it is given.

    fail_on: entry index whose write raises OSError
    short_by: bytes to under-report for every entry
    close_error: exception raised from close()
    """

    def __init__(self, fail_on=None, short_by=0, close_error=None):
        self.entries = []
        self.fail_on = fail_on
        self.short_by = short_by
        self.close_error = close_error
        self.close_calls = 0

    def write_entry(self, info, payload):
        if self.fail_on is not None and len(self.entries) == self.fail_on:
            raise OSError("disk full")
        self.entries.append((info, bytes(payload)))
        return len(payload) - self.short_by

    def close(self):
        self.close_calls += 1
        if self.close_error is not None:
            raise self.close_error

    @property
    def names(self):
        return [info.name for info, _ in self.entries]

    @property
    def sizes(self):
        return [info.size for info, _ in self.entries]


class FailingReader(io.BytesIO):
    """BytesIO that raises OSError once fail_after bytes have been read."""

    def __init__(self, data, fail_after):
        super().__init__(data)
        self.fail_after = fail_after

    def readinto(self, buffer):
        if self.tell() >= self.fail_after:
            raise OSError("connection reset")
        limit = min(len(buffer), self.fail_after - self.tell())
        return super().readinto(memoryview(buffer)[:limit])


class TrickleReader(io.RawIOBase):
    """Raw stream returning at most step bytes per read."""

    def __init__(self, data, step=1):
        self._data = io.BytesIO(data)
        self.step = step

    def readable(self):
        return True

    def readinto(self, buffer):
        chunk = self._data.read(min(len(buffer), self.step))
        buffer[:len(chunk)] = chunk
        return len(chunk)


@pytest.fixture
def identity():
    """Fixed owner identity."""
    return HostIdentity(uid=1000, gid=100, uname='alice', gname='users')


@pytest.fixture
def template(identity):
    """
    Header template with a fixed identity and timestamp.

    Returns:
        HeaderTemplate
    """
    return HeaderTemplate(identity=identity, timestamp=1700000000.5)


@pytest.fixture
def recording_writer():
    """Archive writer that keeps entries in memory."""
    return RecordingWriter()


@pytest.fixture
def read_archive():
    """
    Parse tar bytes back into (TarInfo, payload) pairs.

    Returns:
        Function taking archive bytes
    """
    def _read(data):
        entries = []
        with tarfile.open(fileobj=io.BytesIO(data), mode='r:') as tar:
            for member in tar.getmembers():
                entries.append((member, tar.extractfile(member).read()))
        return entries
    return _read


@pytest.fixture
def sample_file(tmp_path):
    """
    Create a 10 byte source file.

    Returns:
        Path to the file
    """
    file_path = tmp_path / 'backup.img'
    file_path.write_bytes(b'0123456789')
    return file_path


@pytest.fixture(autouse=True)
def reset_loggers():
    """Drop handlers installed by setup_logging so tests don't share streams."""
    yield
    for name in ('cli', 'splittar'):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
