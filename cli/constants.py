"""CLI constants."""

PROG = "splittar"

DESCRIPTION = """Split a source file (or standard input if no source is
provided) into SIZE chunks and write them to an output tar file (or standard
output if no output file is specified).

This command is intended to be used as a preprocessor to pipe tar archives to
other commands."""

SIZE_HELP = """put SIZE bytes per tar entry. SIZE is an integer with an optional
multiplier suffix: b k m g t p (powers of 1000) or B K M G T P (powers of 1024)"""

EPILOG = """Examples:
  splittar -b 64M backup.img | upload-tar
  pg_dump mydb | splittar -b 500m - dump.tar
  splittar -b 1G --naming index -a 4 big.iso parts.tar"""

NAMING_MODES = ("basename", "index")
ARCHIVE_FORMATS = ("pax", "gnu")
SHORT_WRITE_POLICIES = ("fatal", "warn")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
