"""CLI entry point."""

import os
import sys
from typing import Optional, Sequence

from common.logging_config import setup_logging
from cli.commands import handle_split
from cli.constants import EXIT_FAILURE, EXIT_OK, EXIT_USAGE, PROG
from cli.parser import ParseError, parse_command
from splittar.exceptions import SplittarError


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for CLI."""
    try:
        cmd = parse_command(argv)
    except ParseError as e:
        print(f"{PROG}: error: {e}", file=sys.stderr)
        return EXIT_USAGE

    log_level = 'DEBUG' if cmd.debug else os.getenv('LOG_LEVEL', 'INFO')
    logger = setup_logging('cli', log_level=log_level)
    setup_logging('splittar', log_level=log_level)

    if cmd.debug:
        logger.info("Debug logging enabled")

    try:
        handle_split(cmd)
    except SplittarError as e:
        logger.debug(f"split failed: {e}", exc_info=True)
        print(f"{PROG}: {e}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
