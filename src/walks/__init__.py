"""Recursive directory walking with ignore files and depth bounds."""

from walks.errors import (
    DirectoryListUnreadable,
    IgnoreFileUnreadable,
    IgnorePatternInvalid,
    NotADirectory,
    UnsupportedEntryKind,
    WalkError,
)
from walks.fs.context import Walker
from walks.fs.counter import SyncCounter
from walks.fs.entries import UNLIMITED
from walks.fs.ignore import IgnoreMatcher, compile_ignore
from walks.fs.linear import walk_linear
from walks.fs.walker import walk
from walks.version import __version__

__all__ = [
    "UNLIMITED",
    "DirectoryListUnreadable",
    "IgnoreFileUnreadable",
    "IgnoreMatcher",
    "IgnorePatternInvalid",
    "NotADirectory",
    "SyncCounter",
    "UnsupportedEntryKind",
    "WalkError",
    "Walker",
    "__version__",
    "compile_ignore",
    "walk",
    "walk_linear",
]
