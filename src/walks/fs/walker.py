"""Concurrent directory walker: one task per discovered directory."""

from __future__ import annotations

import concurrent.futures
import os
import threading
import time
import uuid

from walks.errors import UnsupportedEntryKind
from walks.fs.counter import SyncCounter
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


class _WalkRun:
    """State shared by every task of a single ``walk`` call."""

    def __init__(
        self,
        file_action: PathAction,
        dir_action: PathAction,
        depth: int,
        ignore: IgnoreMatcher,
        logger: RuntimeLogger,
        executor: concurrent.futures.Executor | None = None,
    ) -> None:
        self.file_action = file_action
        self.dir_action = dir_action
        self.depth = depth
        self.ignore = ignore
        self.counter = SyncCounter()
        self.cancelled = threading.Event()
        self._logger = logger
        self._executor = executor
        self._error: Exception | None = None
        self._error_lock = threading.Lock()

    @property
    def error(self) -> Exception | None:
        return self._error

    def spawn(self, path: str, level: int) -> None:
        self.counter.add(1)
        try:
            if self._executor is not None:
                self._executor.submit(self._task, path, level)
            else:
                thread = threading.Thread(
                    target=self._task,
                    args=(path, level),
                    name=f"walks-task-{level}",
                    daemon=True,
                )
                thread.start()
        except Exception:
            self.counter.done()
            raise

    def _fail(self, exc: Exception) -> None:
        with self._error_lock:
            if self._error is None:
                self._error = exc
        self.cancelled.set()

    def _task(self, root: str, level: int) -> None:
        try:
            if not self.cancelled.is_set():
                self._visit(root, level)
        except Exception as exc:
            self._fail(exc)
        finally:
            self.counter.done()

    def _visit(self, root: str, level: int) -> None:
        if self.depth != UNLIMITED and level > self.depth:
            return
        ensure_directory(root)
        entries = list_entries(root)
        self._logger.debug("walk.dir.listed", path=root, level=level, entries=len(entries))

        for path, kind in entries:
            if self.cancelled.is_set():
                return
            if self.ignore.matches(path):
                continue
            if kind is EntryKind.DIRECTORY:
                self.dir_action(path)
                self.spawn(path, level + 1)
            elif kind is EntryKind.FILE:
                self.file_action(path)
            else:
                raise UnsupportedEntryKind(path)


def walk(
    root: str | os.PathLike[str],
    file_action: PathAction,
    dir_action: PathAction,
    depth: int = UNLIMITED,
    *,
    ignore: IgnoreMatcher | None = None,
    max_workers: int | None = None,
) -> None:
    """Walk *root* concurrently, calling the actions on every entry found.

    Blocks until all tasks have finished. Each directory is listed by its own
    task; with ``max_workers`` the tasks share a bounded thread pool instead
    of getting a thread each. The first error from any task (including one
    raised by an action) cancels the remaining tasks and is raised here.
    Actions are called from several threads at once.
    """
    validate_depth(depth)
    if max_workers is not None and max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers}")

    root_path = os.fspath(root)
    matcher = ignore if ignore is not None else IgnoreMatcher.empty()
    logger = get_runtime_logger().bind(walk_id=uuid.uuid4().hex[:12], root=root_path, strategy="concurrent")
    logger.info(
        "walk.started",
        depth=depth,
        max_workers=max_workers,
        ignore=matcher.source,
    )
    started = time.monotonic()

    if max_workers is None:
        run = _WalkRun(file_action, dir_action, depth, matcher, logger)
        run.spawn(root_path, 0)
        run.counter.wait()
    else:
        with concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="walks-pool"
        ) as pool:
            run = _WalkRun(file_action, dir_action, depth, matcher, logger, executor=pool)
            run.spawn(root_path, 0)
            run.counter.wait()

    elapsed = round(time.monotonic() - started, 4)
    if run.error is not None:
        logger.error(
            "walk.failed",
            error_type=type(run.error).__name__,
            error=str(run.error),
            elapsed_s=elapsed,
        )
        raise run.error
    logger.info("walk.finished", elapsed_s=elapsed)
