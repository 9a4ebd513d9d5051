"""Settings file management with validation and change notifications."""

from __future__ import annotations

import json
import os
import sys
from copy import deepcopy
from pathlib import Path
from typing import Any

from jsonschema import ValidationError as SchemaValidationError

from ..errors import SettingsLoadError, SettingsValidationError
from ..gui.viewmodels.signal import Signal
from .schema import DEFAULT_SETTINGS, merge_with_defaults, validate_settings


def default_settings_path() -> Path:
    """Return the default settings.json location for the current platform."""

    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "finproducts" / "settings.json"
        return Path.home() / "AppData" / "Roaming" / "finproducts" / "settings.json"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "finproducts" / "settings.json"
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / "finproducts" / "settings.json"
    return Path.home() / ".config" / "finproducts" / "settings.json"


class SettingsManager:
    """Load, validate and persist user settings for the application."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path
        self._data: dict[str, Any] = deepcopy(DEFAULT_SETTINGS)
        self.settings_changed = Signal()  # emits (key, value)

    @property
    def path(self) -> Path:
        return self._path or default_settings_path()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self) -> None:
        """Load the settings JSON from disk; a missing file means defaults."""

        path = self.path
        payload = None
        if path.exists():
            try:
                payload = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                raise SettingsLoadError(f"Cannot read {path}: {exc}") from exc
        try:
            self._data = merge_with_defaults(payload)
        except SchemaValidationError as exc:
            raise SettingsValidationError(f"{path}: {exc.message}") from exc

    def save(self) -> None:
        path = self.path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self._data, indent=2, ensure_ascii=False), encoding="utf-8")

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------
    def get(self, key: str, default: Any | None = None) -> Any:
        """Return the value for *key*, supporting dotted access for nested keys."""

        target = self._data
        parts = key.split(".")
        for index, part in enumerate(parts):
            if not isinstance(target, dict) or part not in target:
                return default
            value = target[part]
            if index == len(parts) - 1:
                return value
            target = value
        return default

    def set(self, key: str, value: Any) -> None:
        """Update *key* with *value*, validate and persist the change."""

        candidate = deepcopy(self._data)
        target = candidate
        parts = key.split(".")
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        if target.get(parts[-1]) == value:
            return
        target[parts[-1]] = value
        try:
            validate_settings(candidate)
        except SchemaValidationError as exc:
            raise SettingsValidationError(f"{key}: {exc.message}") from exc
        self._data = candidate
        self.save()
        self.settings_changed.emit(key, value)

    def data(self) -> dict[str, Any]:
        return deepcopy(self._data)
