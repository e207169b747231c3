"""Errors raised by ignore compilation and directory walks."""

from __future__ import annotations


class WalkError(Exception):
    """Base class for every failure that aborts a walk."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path
        self.message = message


class IgnoreFileUnreadable(WalkError):
    def __init__(self, path: str, reason: str = "cannot read ignore file") -> None:
        super().__init__(path, reason)


class IgnorePatternInvalid(WalkError):
    def __init__(self, path: str, pattern: str, reason: str) -> None:
        super().__init__(path, f"invalid ignore pattern {pattern!r} ({reason})")
        self.pattern = pattern


class NotADirectory(WalkError):
    def __init__(self, path: str, reason: str = "walk root must be a directory") -> None:
        super().__init__(path, reason)


class DirectoryListUnreadable(WalkError):
    def __init__(self, path: str, reason: str = "cannot list directory") -> None:
        super().__init__(path, reason)


class UnsupportedEntryKind(WalkError):
    def __init__(self, path: str) -> None:
        super().__init__(path, "unsupported entry kind (not a file or directory)")
