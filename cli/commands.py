"""Command handler for the splittar CLI."""

from typing import Callable, List, Optional

from common.logging_config import get_logger
from common.types import ChunkEntry
from cli.models import SplitCommand
from cli.utils import summarize
from splittar.chunker import split_tar
from splittar.config import RunConfig

logger = get_logger(__name__)


def handle_split(
    cmd: SplitCommand,
    run: Optional[Callable[[RunConfig], List[ChunkEntry]]] = None,
) -> List[ChunkEntry]:
    """
    Handle the split command.

    Args:
        cmd: SplitCommand with the size, paths and naming options
        run: Optional split function for dependency injection (testing)

    Returns:
        Entries written to the archive

    Raises:
        SplittarError: If configuration, reading, writing or closing fails
    """
    if run is None:
        run = split_tar

    logger.debug(
        f"Executing split: source={cmd.source_path} target={cmd.target_path} "
        f"size={cmd.chunk_size} naming={cmd.naming}"
    )
    config = RunConfig.from_paths(
        cmd.chunk_size,
        cmd.source_path,
        cmd.target_path,
        naming=cmd.naming,
        suffix_length=cmd.suffix_length,
        archive_format=cmd.archive_format,
        short_write_policy=cmd.short_write_policy,
    )
    entries = run(config)
    logger.info(f"Split {cmd.source_path} into {summarize(entries)}")
    return entries
