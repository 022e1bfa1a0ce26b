"""Command line parser for splittar."""

import argparse
from typing import Optional, Sequence

from cli.constants import (
    ARCHIVE_FORMATS,
    DESCRIPTION,
    EPILOG,
    NAMING_MODES,
    PROG,
    SHORT_WRITE_POLICIES,
    SIZE_HELP,
)
from cli.models import SplitCommand
from splittar import settings


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the splittar command."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-a", "--suffix-length",
        type=int,
        metavar="N",
        help="generate suffixes of length N (default 2, or 8 with --naming index)",
    )
    parser.add_argument(
        "-b", "--bytes",
        dest="size",
        metavar="SIZE",
        default=settings.DEFAULT_CHUNK_SIZE,
        help=SIZE_HELP,
    )
    parser.add_argument(
        "--naming",
        choices=NAMING_MODES,
        default="basename",
        help="name entries FILE.NN (basename) or NNNNNNNN (index); default basename",
    )
    parser.add_argument(
        "--format",
        dest="archive_format",
        choices=ARCHIVE_FORMATS,
        default="pax",
        help="tar format to write (default pax)",
    )
    parser.add_argument(
        "--short-write",
        dest="short_write_policy",
        choices=SHORT_WRITE_POLICIES,
        default=settings.SHORT_WRITE_POLICY,
        help="abort or only warn when the archive accepts fewer bytes than a chunk holds",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="enable debug logging on standard error",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default="-",
        metavar="FILE",
        help="source file to split (default: standard input)",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default="-",
        metavar="TAR_FILE",
        help="target tar file to write to (default: standard output)",
    )
    return parser


def parse_command(argv: Optional[Sequence[str]] = None) -> SplitCommand:
    """Parse command line arguments into a SplitCommand.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        SplitCommand

    Raises:
        ParseError: If no chunk size was given or SPLITTAR_SUFFIX_LENGTH is not an integer
        SystemExit: On argparse usage errors and --help
    """
    args = build_parser().parse_args(argv)

    if not args.size:
        raise ParseError("a chunk size is required: use -b SIZE or set SPLITTAR_CHUNK_SIZE")

    suffix_length = args.suffix_length
    if suffix_length is None and settings.DEFAULT_SUFFIX_LENGTH:
        try:
            suffix_length = int(settings.DEFAULT_SUFFIX_LENGTH)
        except ValueError as e:
            raise ParseError(
                f"SPLITTAR_SUFFIX_LENGTH must be an integer, got {settings.DEFAULT_SUFFIX_LENGTH!r}"
            ) from e

    return SplitCommand(
        chunk_size=args.size,
        source_path=args.file,
        target_path=args.target,
        suffix_length=suffix_length,
        naming=args.naming,
        archive_format=args.archive_format,
        short_write_policy=args.short_write_policy,
        debug=args.debug,
    )
