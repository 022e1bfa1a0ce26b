"""Environment driven defaults for splittar runs."""

import os

DEFAULT_CHUNK_SIZE = os.environ.get("SPLITTAR_CHUNK_SIZE") or None

# raw string; the CLI parser validates it
DEFAULT_SUFFIX_LENGTH = os.environ.get("SPLITTAR_SUFFIX_LENGTH") or None

SHORT_WRITE_POLICY = os.environ.get("SPLITTAR_SHORT_WRITE_POLICY", "fatal")
