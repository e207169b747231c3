"""Single-threaded recursive walker."""

from __future__ import annotations

import os
import time
import uuid

from walks.errors import UnsupportedEntryKind
from walks.fs.entries import (
    UNLIMITED,
    EntryKind,
    PathAction,
    ensure_directory,
    list_entries,
    validate_depth,
)
from walks.fs.ignore import IgnoreMatcher
from walks.runtime_logging import RuntimeLogger, get_runtime_logger


def _walk_linear(
    root: str,
    file_action: PathAction,
    dir_action: PathAction,
    depth: int,
    level: int,
    ignore: IgnoreMatcher,
    logger: RuntimeLogger,
) -> None:
    # Cutoff is checked before listing this level, so depth=0 visits nothing.
    # The concurrent walker prunes with level > depth instead.
    if level == depth:
        return
    ensure_directory(root)
    entries = list_entries(root)
    logger.debug("walk.dir.listed", path=root, level=level, entries=len(entries))

    for path, kind in entries:
        if ignore.matches(path):
            continue
        if kind is EntryKind.DIRECTORY:
            dir_action(path)
            _walk_linear(path, file_action, dir_action, depth, level + 1, ignore, logger)
        elif kind is EntryKind.FILE:
            file_action(path)
        else:
            raise UnsupportedEntryKind(path)


def walk_linear(
    root: str | os.PathLike[str],
    file_action: PathAction,
    dir_action: PathAction,
    depth: int = UNLIMITED,
    level: int = 0,
    *,
    ignore: IgnoreMatcher | None = None,
) -> None:
    """Walk *root* on the calling thread, depth-first in name order.

    Stops descending when ``level == depth``. Any error propagates at once
    and no further actions are called.
    """
    validate_depth(depth)
    root_path = os.fspath(root)
    matcher = ignore if ignore is not None else IgnoreMatcher.empty()
    logger = get_runtime_logger().bind(walk_id=uuid.uuid4().hex[:12], root=root_path, strategy="linear")
    logger.info(
        "walk.started",
        depth=depth,
        level=level,
        ignore=matcher.source,
    )
    started = time.monotonic()
    try:
        _walk_linear(root_path, file_action, dir_action, depth, level, matcher, logger)
    except Exception as exc:
        logger.error(
            "walk.failed",
            error_type=type(exc).__name__,
            error=str(exc),
            elapsed_s=round(time.monotonic() - started, 4),
        )
        raise
    logger.info("walk.finished", elapsed_s=round(time.monotonic() - started, 4))
