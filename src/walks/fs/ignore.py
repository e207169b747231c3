"""Ignore-file compilation into a single path-exclusion regex."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from walks.errors import IgnoreFileUnreadable, IgnorePatternInvalid
from walks.runtime_logging import get_runtime_logger

_ANCHORED_LINES = {".", ".."}


@dataclass(frozen=True, slots=True)
class IgnoreMatcher:
    """Compiled ignore pattern. Immutable, so walks may share it across threads.

    An empty source matches nothing: an empty regex would otherwise match
    every path.
    """

    source: str = ""
    pattern: re.Pattern[str] | None = None

    @classmethod
    def empty(cls) -> IgnoreMatcher:
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.source == ""

    def matches(self, path: str) -> bool:
        if self.is_empty or self.pattern is None:
            return False
        return self.pattern.search(path) is not None


def translate_lines(content: str) -> str:
    """Turn ignore-file content into one alternation pattern.

    Reading stops at the first empty line. ``.`` and ``..`` are anchored to
    whole-path matches; every dot is escaped, nothing else is.
    """
    alternatives: list[str] = []
    for line in content.split("\n"):
        if line == "":
            break
        if line in _ANCHORED_LINES:
            line = f"^{line}$"
        alternatives.append(line.replace(".", "\\."))
    return "|".join(alternatives)


def compile_pattern(source: str, *, origin: str = "") -> IgnoreMatcher:
    if source == "":
        return IgnoreMatcher.empty()
    try:
        compiled = re.compile(source)
    except re.error as exc:
        raise IgnorePatternInvalid(origin, source, str(exc)) from exc
    return IgnoreMatcher(source=source, pattern=compiled)


def _read_or_placeholder(path: Path) -> tuple[str, bool]:
    try:
        return path.read_text(encoding="utf-8"), False
    except FileNotFoundError:
        pass
    except (OSError, UnicodeDecodeError) as exc:
        raise IgnoreFileUnreadable(str(path), f"cannot read ignore file ({exc})") from exc

    # A default ignore path may legitimately be absent: stand in an empty
    # file for the duration of compilation, then remove it.
    try:
        path.write_text("", encoding="utf-8")
    except OSError as exc:
        raise IgnoreFileUnreadable(str(path), f"cannot create ignore file ({exc})") from exc
    get_runtime_logger().debug("ignore.placeholder", path=str(path))
    return "", True


def compile_ignore(path: str | Path | None) -> IgnoreMatcher:
    """Build an ``IgnoreMatcher`` from the ignore file at *path*.

    An empty path yields the empty matcher. A missing file is not an error.
    """
    if path is None or str(path) == "":
        return IgnoreMatcher.empty()

    ignore_path = Path(path)
    content, placeholder = _read_or_placeholder(ignore_path)
    try:
        matcher = compile_pattern(translate_lines(content), origin=str(ignore_path))
    finally:
        if placeholder:
            ignore_path.unlink(missing_ok=True)

    get_runtime_logger().info(
        "ignore.compiled",
        path=str(ignore_path),
        existed=not placeholder,
        pattern=matcher.source,
    )
    return matcher
