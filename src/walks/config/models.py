"""Settings schema for walks."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from walks.paths import default_ignore_path

Strategy = Literal["concurrent", "linear"]


class LoggingSettings(BaseModel):
    level: Literal["off", "error", "warning", "info", "debug"] = Field(default="warning")
    file: str | None = Field(default=None, description="JSONL sink; platform state dir when unset")


class WalkSettings(BaseModel):
    schema_version: int = Field(default=1)
    depth: int = Field(default=-1, ge=-1, description="-1 walks without a depth bound")
    ignore_file: str = Field(
        default_factory=lambda: str(default_ignore_path()),
        description="Ignore file; empty disables ignoring, a missing file ignores nothing",
    )
    strategy: Strategy = Field(default="concurrent")
    max_workers: int | None = Field(default=None, ge=1, description="Thread pool size; unset spawns a thread per directory")
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("ignore_file")
    @classmethod
    def expand_ignore_file(cls, value: str) -> str:
        if not value:
            return value
        return str(Path(value).expanduser())

    def setting_items(self) -> list[tuple[str, str]]:
        """Flatten key/value pairs for display."""

        result: list[tuple[str, str]] = []

        def walk(prefix: str, value: object) -> None:
            if isinstance(value, dict):
                for key, nested in value.items():
                    walk(f"{prefix}.{key}" if prefix else key, nested)
            else:
                result.append((prefix, str(value)))

        walk("", self.model_dump())
        return result

