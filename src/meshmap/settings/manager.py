"""Settings file management with validation and change notifications."""

from __future__ import annotations

import os
import sys
from copy import deepcopy
from pathlib import Path
from typing import Any

from jsonschema import ValidationError
from PySide6.QtCore import QObject, Signal

from ..errors import SettingsLoadError, SettingsValidationError
from ..map_view.viewport import clamp_zoom
from ..utils.jsonio import read_json, write_json
from ..utils.logging import get_logger
from .schema import DEFAULT_SETTINGS, MapViewportSettings, merge_with_defaults

_LOGGER = get_logger(__name__)

_MAP_VIEWPORT_KEY = "ui.map_viewport"


def default_settings_path() -> Path:
    """Return the default settings.json location for the current platform."""

    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "meshmap" / "settings.json"
        return Path.home() / "AppData" / "Roaming" / "meshmap" / "settings.json"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "meshmap" / "settings.json"
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / "meshmap" / "settings.json"
    return Path.home() / ".config" / "meshmap" / "settings.json"


class SettingsManager(QObject):
    """Load, validate and persist user settings for the map."""

    settingsChanged = Signal(str, object)

    def __init__(self, path: Path | None = None) -> None:
        super().__init__()
        self._path = path
        self._data: dict[str, Any] = deepcopy(DEFAULT_SETTINGS)

    # ------------------------------------------------------------------
    @property
    def path(self) -> Path:
        return self._path or default_settings_path()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self) -> None:
        """Load the settings JSON from disk, creating defaults if missing."""

        path = self.path
        self._path = path
        if path.exists():
            try:
                payload = read_json(path)
            except (OSError, ValueError) as exc:
                raise SettingsLoadError(f"{path}: {exc}") from exc
            if not isinstance(payload, dict):
                raise SettingsLoadError(f"{path}: expected a JSON object")
        else:
            payload = None
        try:
            self._data = merge_with_defaults(payload)
        except ValidationError as exc:
            raise SettingsValidationError(exc.message) from exc
        self._write()

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

    # ------------------------------------------------------------------
    def set(self, key: str, value: Any) -> None:
        """Update *key* with *value* and persist the change."""

        if isinstance(value, Path):
            value = str(value)

        parts = key.split(".")
        candidate = deepcopy(self._data)
        target: dict[str, Any] = candidate
        for part in parts[:-1]:
            branch = target.get(part)
            if not isinstance(branch, dict):
                branch = {}
                target[part] = branch
            target = branch
        target[parts[-1]] = value
        try:
            merged = merge_with_defaults(candidate)
        except ValidationError as exc:
            raise SettingsValidationError(exc.message) from exc
        self._write(merged)
        self._data = merged
        self.settingsChanged.emit(key, self.get(key))

    # ------------------------------------------------------------------
    # Map viewport
    # ------------------------------------------------------------------
    def map_viewport(self) -> MapViewportSettings:
        """Return the remembered map viewport."""

        return MapViewportSettings.from_mapping(self.get(_MAP_VIEWPORT_KEY))

    # ------------------------------------------------------------------
    def remember_map_viewport(self, zoom: int, x: int, y: int) -> None:
        """Persist the viewport the map was left at.

        Unchanged viewports are not rewritten. A failed write is logged and the
        previous settings stay in effect; the map keeps working either way.
        """

        zoom = clamp_zoom(zoom)
        current = self.map_viewport()
        if current.is_set and (current.zoom, current.x, current.y) == (zoom, x, y):
            return

        viewport = MapViewportSettings(is_set=True, zoom=zoom, x=int(x), y=int(y))
        try:
            self.set(_MAP_VIEWPORT_KEY, viewport.to_mapping())
        except (OSError, SettingsValidationError) as exc:
            _LOGGER.warning("save map viewport failed zoom=%d x=%d y=%d: %s", zoom, x, y, exc)

    # ------------------------------------------------------------------
    # Internal utilities
    # ------------------------------------------------------------------
    def _write(self, data: dict[str, Any] | None = None) -> None:
        path = self.path
        self._path = path
        write_json(path, self._data if data is None else data)


__all__ = ["SettingsManager", "default_settings_path"]
