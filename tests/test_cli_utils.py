"""Tests for CLI output helpers."""

import pytest

from cli.utils import format_size, summarize
from common.types import ChunkEntry


@pytest.mark.parametrize('size, expected', [
    (0, '0 B'),
    (1023, '1023 B'),
    (1024, '1.00 KiB'),
    (1536, '1.50 KiB'),
    (64 * 1024 ** 2, '64.00 MiB'),
    (3 * 1024 ** 3, '3.00 GiB'),
    (2 * 1024 ** 5, '2.00 PiB'),
    (4096 * 1024 ** 5, '4096.00 PiB'),
])
def test_format_size(size, expected):
    """Test unit selection."""
    assert format_size(size) == expected


def test_summarize():
    """Test the run summary line."""
    entries = [
        ChunkEntry(index=0, name='db.00', size=1024, offset=0),
        ChunkEntry(index=1, name='db.01', size=512, offset=1024),
    ]

    assert summarize(entries) == '2 chunk(s), 1.50 KiB (db.00 .. db.01)'
    assert summarize([]) == '0 chunk(s), 0 B'
