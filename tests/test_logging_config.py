"""Tests for logging setup."""

import io
import logging

from common.logging_config import get_logger, setup_logging


def test_setup_logging_writes_to_stream():
    """Test that records reach the configured stream with the shared format."""
    stream = io.StringIO()
    logger = setup_logging('splittar', log_level='DEBUG', stream=stream)

    get_logger('splittar.chunker').debug('attempt reading 4 bytes from source')

    output = stream.getvalue()
    assert ' - splittar.chunker - DEBUG - attempt reading 4 bytes from source' in output
    assert logger.propagate is False


def test_setup_logging_level_from_environment(monkeypatch):
    """Test that LOG_LEVEL is used when no level is given."""
    monkeypatch.setenv('LOG_LEVEL', 'warning')

    logger = setup_logging('cli', stream=io.StringIO())

    assert logger.level == logging.WARNING


def test_setup_logging_unknown_level_defaults_to_info():
    """Test that an unknown level falls back to INFO."""
    logger = setup_logging('cli', log_level='chatty', stream=io.StringIO())

    assert logger.level == logging.INFO


def test_setup_logging_does_not_duplicate_handlers():
    """Test that repeated setup keeps one handler and updates the level."""
    setup_logging('cli', log_level='INFO', stream=io.StringIO())
    logger = setup_logging('cli', log_level='DEBUG', stream=io.StringIO())

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.handlers[0].level == logging.DEBUG


def test_setup_logging_defaults_to_stderr(capsys):
    """Test that nothing is logged to standard output."""
    setup_logging('cli', log_level='INFO')

    get_logger('cli.main').info('CLI starting...')

    captured = capsys.readouterr()
    assert captured.out == ''
    assert 'CLI starting...' in captured.err
