"""Run configuration for a split: chunk size, streams and naming."""

import io
import os
import sys
from typing import Any, BinaryIO, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from common.constants import (
    BASENAME_SUFFIX_LENGTH,
    INDEX_SUFFIX_LENGTH,
    STDIN_BASENAME,
    STDIO_PATH,
)
from common.logging_config import get_logger
from splittar.archive import ArchiveFormat, ArchiveWriter
from splittar.exceptions import ConfigError
from splittar.size_parser import parse_chunk_size

logger = get_logger(__name__)

NamingMode = Literal["index", "basename"]
ShortWritePolicy = Literal["fatal", "warn"]


class RunConfig(BaseModel):
    """
    Resolved parameters of one split run.

    chunk_size accepts an int or a size expression ("64M"). target accepts an
    ArchiveWriter (or anything with write_entry/close) or a raw binary stream,
    which is wrapped in an ArchiveWriter that does not close it.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    chunk_size: int
    source: Any
    target: Any
    close_source: bool = True
    naming: NamingMode = "index"
    suffix_length: int
    basename: Optional[str] = None
    archive_format: ArchiveFormat = "pax"
    short_write_policy: ShortWritePolicy = "fatal"

    @model_validator(mode="before")
    @classmethod
    def _fill_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        naming = data.get("naming", "index")

        if data.get("suffix_length") is None:
            data["suffix_length"] = BASENAME_SUFFIX_LENGTH if naming == "basename" else INDEX_SUFFIX_LENGTH

        if naming == "basename" and not data.get("basename"):
            data["basename"] = _source_basename(data.get("source"))

        target = data.get("target")
        if target is not None and not hasattr(target, "write_entry") and hasattr(target, "write"):
            data["target"] = ArchiveWriter(target, archive_format=data.get("archive_format", "pax"))
        return data

    @field_validator("chunk_size", mode="before")
    @classmethod
    def _parse_chunk_size(cls, value: Union[int, str]) -> int:
        return parse_chunk_size(value)

    @field_validator("source")
    @classmethod
    def _check_source(cls, value: Any) -> Any:
        if not (hasattr(value, "readinto") or hasattr(value, "read")):
            raise ValueError("source must be a readable binary stream")
        return value

    @field_validator("target")
    @classmethod
    def _check_target(cls, value: Any) -> Any:
        if not (hasattr(value, "write_entry") and hasattr(value, "close")):
            raise ValueError("target must be an archive writer or a writable binary stream")
        return value

    @field_validator("suffix_length")
    @classmethod
    def _check_suffix_length(cls, value: int) -> int:
        if value < 1:
            raise ValueError("suffix length must be >= 1")
        return value

    def entry_name(self, index: int) -> str:
        """
        Name of the entry holding chunk number index.

        Args:
            index: Zero based chunk index

        Returns:
            "00000003" in index mode, "<basename>.03" in basename mode
        """
        suffix = f"{index:0{self.suffix_length}d}"
        if self.naming == "basename":
            return f"{self.basename}.{suffix}"
        return suffix

    @classmethod
    def from_paths(
        cls,
        chunk_size: Union[int, str],
        source_path: str = STDIO_PATH,
        target_path: str = STDIO_PATH,
        **options: Any,
    ) -> 'RunConfig':
        """
        Open the source and target and build a configuration over them.

        "-" (or an empty path) selects standard input / standard output,
        which are never closed by the run.

        Args:
            chunk_size: Chunk size in bytes or as a size expression
            source_path: File to split, or "-"
            target_path: Tar file to create, or "-"
            **options: Remaining RunConfig fields

        Returns:
            RunConfig owning whatever files it opened

        Raises:
            ConfigError: If a stream cannot be opened or a value is invalid
        """
        if options.get("naming") == "basename" and not options.get("basename"):
            options["basename"] = _path_basename(source_path)

        # validate everything before opening (and truncating) any file
        new_config(
            chunk_size=chunk_size,
            source=io.BytesIO(),
            target=io.BytesIO(),
            close_source=False,
            **options,
        )

        source, owns_source = open_source(source_path)
        try:
            target_stream, owns_target = open_target(target_path)
        except ConfigError:
            if owns_source:
                source.close()
            raise
        logger.debug(f"opened source {source_path or STDIO_PATH} and target {target_path or STDIO_PATH}")

        try:
            target = ArchiveWriter(
                target_stream,
                owns_stream=owns_target,
                archive_format=options.pop("archive_format", "pax"),
            )
            return new_config(
                chunk_size=chunk_size,
                source=source,
                target=target,
                close_source=owns_source,
                archive_format=target.archive_format,
                **options,
            )
        except Exception:
            if owns_target:
                target_stream.close()
            if owns_source:
                source.close()
            raise


def new_config(**options: Any) -> RunConfig:
    """
    Build a RunConfig, reporting every invalid value as a ConfigError.

    Args:
        **options: RunConfig fields

    Returns:
        Validated RunConfig

    Raises:
        ConfigError: If any value is invalid
    """
    try:
        return RunConfig(**options)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'config'}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigError(f"invalid configuration: {details}") from e


def open_source(path: str) -> Tuple[BinaryIO, bool]:
    """
    Open the stream to split.

    Args:
        path: File path, or "-" / "" for standard input

    Returns:
        Tuple of (binary stream, whether the caller owns and must close it)

    Raises:
        ConfigError: If the file cannot be opened
    """
    if not path or path == STDIO_PATH:
        return sys.stdin.buffer, False
    try:
        return open(path, 'rb'), True
    except OSError as e:
        raise ConfigError(f"failed to open source file: {e}") from e


def open_target(path: str) -> Tuple[BinaryIO, bool]:
    """
    Open the stream the archive is written to.

    Args:
        path: File path, or "-" / "" for standard output

    Returns:
        Tuple of (binary stream, whether the caller owns and must close it)

    Raises:
        ConfigError: If the file cannot be created
    """
    if not path or path == STDIO_PATH:
        return sys.stdout.buffer, False
    try:
        return open(path, 'wb'), True
    except OSError as e:
        raise ConfigError(f"failed to create target file: {e}") from e


def _path_basename(path: str) -> str:
    if not path or path == STDIO_PATH:
        return STDIN_BASENAME
    return os.path.basename(path) or STDIN_BASENAME


def _source_basename(source: Any) -> str:
    name = getattr(source, "name", None)
    if not isinstance(name, str) or name.startswith("<"):
        return STDIN_BASENAME
    return _path_basename(name)
