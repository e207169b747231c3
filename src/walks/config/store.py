"""Load/save walk settings."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from walks.config.models import WalkSettings
from walks.paths import settings_path
from walks.runtime_logging import get_runtime_logger


class SettingsStore:
    def __init__(self, path: Path | None = None) -> None:
        self.path = path or settings_path()

    def load(self) -> WalkSettings:
        if not self.path.exists():
            settings = WalkSettings()
            self.save(settings)
            return settings

        raw = self.path.read_text(encoding="utf-8")
        try:
            data = json.loads(raw)
            return WalkSettings.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as exc:
            # Fall back to defaults while preserving corrupt payload for debugging.
            backup = self.path.with_suffix(".corrupt.json")
            backup.write_text(raw, encoding="utf-8")
            get_runtime_logger().warning(
                "settings.corrupt",
                path=str(self.path),
                backup=str(backup),
                error=str(exc),
            )
            settings = WalkSettings()
            self.save(settings)
            return settings

    def save(self, settings: WalkSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(settings.model_dump(mode="json"), indent=2, sort_keys=True)
        self.path.write_text(f"{payload}\n", encoding="utf-8")

    def update(self, dotted_key: str, value: Any) -> WalkSettings:
        settings = self.load()
        data = settings.model_dump()

        keys = dotted_key.split(".")
        cursor: dict[str, Any] = data
        for key in keys[:-1]:
            nested = cursor.get(key)
            if not isinstance(nested, dict):
                raise KeyError(f"Unknown setting path: {dotted_key}")
            cursor = nested
        if keys[-1] not in cursor:
            raise KeyError(f"Unknown setting path: {dotted_key}")
        cursor[keys[-1]] = value

        updated = WalkSettings.model_validate(data)
        self.save(updated)
        return updated
