"""Caller-owned walk context holding the compiled ignore matcher."""

from __future__ import annotations

import os
from pathlib import Path

from walks.fs.entries import UNLIMITED, PathAction
from walks.fs.ignore import IgnoreMatcher, compile_ignore
from walks.fs.linear import walk_linear
from walks.fs.walker import walk


class Walker:
    """Compile the ignore file once, reuse it across many walks.

    ``configure_ignore`` swaps in a new matcher; a walk already running keeps
    the matcher it started with.
    """

    def __init__(self, ignore: IgnoreMatcher | None = None, *, max_workers: int | None = None) -> None:
        self.ignore = ignore if ignore is not None else IgnoreMatcher.empty()
        self.max_workers = max_workers

    def configure_ignore(self, path: str | Path | None) -> IgnoreMatcher:
        self.ignore = compile_ignore(path)
        return self.ignore

    def walk(
        self,
        root: str | os.PathLike[str],
        file_action: PathAction,
        dir_action: PathAction,
        depth: int = UNLIMITED,
    ) -> None:
        walk(root, file_action, dir_action, depth, ignore=self.ignore, max_workers=self.max_workers)

    def walk_linear(
        self,
        root: str | os.PathLike[str],
        file_action: PathAction,
        dir_action: PathAction,
        depth: int = UNLIMITED,
        level: int = 0,
    ) -> None:
        walk_linear(root, file_action, dir_action, depth, level, ignore=self.ignore)
