"""Directory listing and entry classification shared by both walkers."""

from __future__ import annotations

import os
import stat
from collections.abc import Callable
from enum import Enum

from walks.errors import DirectoryListUnreadable, NotADirectory

UNLIMITED = -1

PathAction = Callable[[str], None]


class EntryKind(Enum):
    DIRECTORY = "directory"
    FILE = "file"
    OTHER = "other"


def validate_depth(depth: int) -> None:
    if depth < UNLIMITED:
        raise ValueError(f"depth must be -1 (unlimited) or >= 0, got {depth}")


def ensure_directory(root: str) -> None:
    try:
        mode = os.stat(root).st_mode
    except OSError as exc:
        raise NotADirectory(root, f"cannot stat walk root ({exc.strerror or exc})") from exc
    if not stat.S_ISDIR(mode):
        raise NotADirectory(root)


def entry_kind(entry: os.DirEntry[str]) -> EntryKind:
    # Symlinks are not followed: a link to a directory is "other".
    if entry.is_symlink():
        return EntryKind.OTHER
    if entry.is_dir(follow_symlinks=False):
        return EntryKind.DIRECTORY
    if entry.is_file(follow_symlinks=False):
        return EntryKind.FILE
    return EntryKind.OTHER


def list_entries(root: str) -> list[tuple[str, EntryKind]]:
    """Return ``(path, kind)`` for each entry of *root*, sorted by name."""
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda entry: entry.name)
            return [(os.path.join(root, entry.name), entry_kind(entry)) for entry in entries]
    except OSError as exc:
        raise DirectoryListUnreadable(root, f"cannot list directory ({exc.strerror or exc})") from exc
