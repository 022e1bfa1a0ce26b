"""Split one large stream into fixed size chunks packed in a single tar stream."""

from splittar.archive import ArchiveWriter
from splittar.chunker import SplitTar, split_tar
from splittar.config import RunConfig, new_config, open_source, open_target
from splittar.exceptions import (
    CloseError,
    ConfigError,
    EmptyInputError,
    InvalidNumberError,
    ShortWriteError,
    SizeOverflowError,
    SourceReadError,
    SplittarError,
    TargetWriteError,
    UnknownSuffixError,
)
from splittar.header import HeaderTemplate, create_header_template, resolve_identity
from splittar.size_parser import parse_chunk_size, parse_size

__all__ = [
    "ArchiveWriter",
    "CloseError",
    "ConfigError",
    "EmptyInputError",
    "HeaderTemplate",
    "InvalidNumberError",
    "RunConfig",
    "ShortWriteError",
    "SizeOverflowError",
    "SourceReadError",
    "SplitTar",
    "SplittarError",
    "TargetWriteError",
    "UnknownSuffixError",
    "create_header_template",
    "new_config",
    "open_source",
    "open_target",
    "parse_chunk_size",
    "parse_size",
    "resolve_identity",
    "split_tar",
]
