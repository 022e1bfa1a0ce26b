"""Tests for size expression parsing."""

import pytest

from splittar.exceptions import (
    ConfigError,
    EmptyInputError,
    InvalidNumberError,
    SizeOverflowError,
    UnknownSuffixError,
)
from splittar.size_parser import parse_chunk_size, parse_size


@pytest.mark.parametrize('value, expected', [
    ('1024', 1024),
    ('1k', 1000),
    ('1K', 1024),
    ('2M', 2097152),
    ('2m', 2000000),
    ('0', 0),
    ('007', 7),
])
def test_parse_size(value, expected):
    """Test the documented size examples."""
    assert parse_size(value) == expected


@pytest.mark.parametrize('suffix, multiplier', [
    ('b', 1),
    ('k', 1000),
    ('m', 1000 ** 2),
    ('g', 1000 ** 3),
    ('t', 1000 ** 4),
    ('p', 1000 ** 5),
    ('B', 1),
    ('K', 1024),
    ('M', 1024 ** 2),
    ('G', 1024 ** 3),
    ('T', 1024 ** 4),
    ('P', 1024 ** 5),
])
def test_parse_size_suffix_table(suffix, multiplier):
    """Test every multiplier suffix."""
    assert parse_size(f'3{suffix}') == 3 * multiplier


def test_byte_suffix_case_is_ignored():
    """Test that 'b' and 'B' both mean single bytes."""
    assert parse_size('512b') == parse_size('512B') == 512


def test_parse_size_empty():
    """Test that an empty expression is rejected."""
    with pytest.raises(EmptyInputError):
        parse_size('')


@pytest.mark.parametrize('value', ['5x', '10 ', '3i', '2%'])
def test_parse_size_unknown_suffix(value):
    """Test that unsupported suffixes are rejected."""
    with pytest.raises(UnknownSuffixError) as exc_info:
        parse_size(value)
    assert exc_info.value.suffix == value[-1]


@pytest.mark.parametrize('value', ['k', 'M', '1.5M', '1KB', '-4', '+4', ' 4', '4 4', '0x10'])
def test_parse_size_invalid_number(value):
    """Test that malformed numeric parts are rejected."""
    with pytest.raises(InvalidNumberError):
        parse_size(value)


def test_parse_size_number_out_of_range():
    """Test that numbers beyond 64 bits are rejected."""
    with pytest.raises(InvalidNumberError):
        parse_size('99999999999999999999')


def test_parse_size_product_overflow():
    """Test that number * multiplier beyond 64 bits is rejected."""
    assert parse_size('8388607T') == 8388607 * 1024 ** 4
    with pytest.raises(SizeOverflowError):
        parse_size('8388608T')


def test_parser_errors_are_config_errors():
    """Test that every parser failure is a ConfigError."""
    for value in ['', '5x', 'abc1', '99999999P']:
        with pytest.raises(ConfigError):
            parse_size(value)


def test_parse_chunk_size_accepts_int_and_string():
    """Test chunk size resolution from both input kinds."""
    assert parse_chunk_size(4096) == 4096
    assert parse_chunk_size('64M') == 64 * 1024 * 1024


@pytest.mark.parametrize('value', [0, -1, '0', '0K', '-1', True, 4.0, None])
def test_parse_chunk_size_rejects_non_positive(value):
    """Test that zero, negative and non-integer chunk sizes are rejected."""
    with pytest.raises(ConfigError):
        parse_chunk_size(value)
