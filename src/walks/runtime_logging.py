"""Structured JSONL runtime logging for walks.

Every record is one JSON object: ``ts``, ``severity``, ``event``, ``pid``,
``thread``, the fields bound to the logger, then the call's own fields.
Walk events carry the traversal ``level`` as an ordinary field, so the
record's severity lives under its own key.
"""

from __future__ import annotations

import json
import os
import threading
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Literal

from walks.paths import state_root

Severity = Literal["off", "error", "warning", "info", "debug"]

_SEVERITY_VALUES: dict[str, int] = {
    "off": 100,
    "error": 40,
    "warning": 30,
    "info": 20,
    "debug": 10,
}

_ALIASES = {"warn": "warning", "none": "off", "disabled": "off", "0": "off"}

_runtime_logger: "RuntimeLogger | None" = None


def parse_level(value: str | None, default: Severity = "warning") -> Severity:
    if not value:
        return default
    normalized = value.strip().lower()
    normalized = _ALIASES.get(normalized, normalized)
    if normalized not in _SEVERITY_VALUES:
        return default
    return normalized  # type: ignore[return-value]


def resolve_log_file(path: str | Path | None) -> Path:
    if path is None:
        return state_root() / "logs" / "walks.runtime.jsonl"
    return Path(path).expanduser().resolve()


@dataclass(slots=True)
class _Sink:
    path: Path
    lock: threading.Lock = field(default_factory=threading.Lock)

    def write(self, line: str) -> None:
        # Walk tasks log from many threads at once; one whole line per write.
        with self.lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")


@dataclass(slots=True)
class RuntimeLogger:
    threshold: Severity
    sink: _Sink
    context: dict[str, Any] = field(default_factory=dict)

    @property
    def sink_path(self) -> Path:
        return self.sink.path

    def enabled(self, severity: str) -> bool:
        current = _SEVERITY_VALUES.get(self.threshold, _SEVERITY_VALUES["warning"])
        incoming = _SEVERITY_VALUES.get(severity, _SEVERITY_VALUES["debug"])
        return incoming >= current and current < _SEVERITY_VALUES["off"]

    def bind(self, **fields: Any) -> RuntimeLogger:
        """Return a logger sharing this sink that adds *fields* to every record."""
        return replace(self, context={**self.context, **fields})

    def log(self, severity: str, event: str, /, **fields: Any) -> None:
        if not self.enabled(severity):
            return
        payload = {
            "ts": datetime.now(UTC).isoformat(),
            "severity": severity,
            "event": event,
            "pid": os.getpid(),
            "thread": threading.current_thread().name,
            **self.context,
            **fields,
        }
        self.sink.write(json.dumps(payload, sort_keys=True, default=str))

    def debug(self, event: str, /, **fields: Any) -> None:
        self.log("debug", event, **fields)

    def info(self, event: str, /, **fields: Any) -> None:
        self.log("info", event, **fields)

    def warning(self, event: str, /, **fields: Any) -> None:
        self.log("warning", event, **fields)

    def error(self, event: str, /, **fields: Any) -> None:
        self.log("error", event, **fields)


class _DisabledLogger(RuntimeLogger):
    def __init__(self) -> None:
        super().__init__(threshold="off", sink=_Sink(Path(os.devnull)))

    def bind(self, **fields: Any) -> RuntimeLogger:  # noqa: ARG002
        return self

    def log(self, severity: str, event: str, /, **fields: Any) -> None:  # noqa: ARG002
        return


def configure_runtime_logging(
    *,
    level: str | None = None,
    log_file: str | Path | None = None,
) -> RuntimeLogger:
    """Install the process logger; ``WALKS_LOG_LEVEL``/``WALKS_LOG_FILE`` fill in unset arguments."""
    global _runtime_logger

    effective = parse_level(level or os.getenv("WALKS_LOG_LEVEL"), default="warning")
    if effective == "off":
        _runtime_logger = _DisabledLogger()
        return _runtime_logger

    sink_path = resolve_log_file(log_file or os.getenv("WALKS_LOG_FILE"))
    _runtime_logger = RuntimeLogger(threshold=effective, sink=_Sink(sink_path))
    _runtime_logger.info("logging.configured", threshold=effective, sink_path=str(sink_path))
    return _runtime_logger


def get_runtime_logger() -> RuntimeLogger:
    global _runtime_logger
    if _runtime_logger is None:
        _runtime_logger = configure_runtime_logging()
    return _runtime_logger
