"""Project-wide constants (name widths, header defaults, sentinel identity)."""

INDEX_SUFFIX_LENGTH: int = 8  # "00000000", "00000001", ...
BASENAME_SUFFIX_LENGTH: int = 2  # "<basename>.00", "<basename>.01", ...

ENTRY_MODE: int = 0o444

SENTINEL_UID: int = 999
SENTINEL_GID: int = 999
SENTINEL_NAME: str = "<unknown>"

STDIO_PATH: str = "-"
STDIN_BASENAME: str = "stdin"

MAX_SIZE_BYTES: int = 2 ** 63 - 1
