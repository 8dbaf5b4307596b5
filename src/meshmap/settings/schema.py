"""Schema helpers for the meshmap settings file."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Mapping

from jsonschema import Draft202012Validator

from ..config import MAX_ZOOM, MIN_ZOOM
from ..map_view.viewport import ViewportState, clamp_zoom

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "meshmap/settings.schema.json",
    "type": "object",
    "required": ["schema", "ui"],
    "properties": {
        "schema": {"const": "meshmap/settings@1"},
        "ui": {
            "type": "object",
            "required": ["map_viewport"],
            "properties": {
                "map_viewport": {
                    "type": "object",
                    "required": ["set", "zoom", "x", "y"],
                    "properties": {
                        "set": {"type": "boolean"},
                        "zoom": {"type": "integer", "minimum": MIN_ZOOM, "maximum": MAX_ZOOM},
                        "x": {"type": "integer"},
                        "y": {"type": "integer"},
                    },
                    "additionalProperties": False,
                },
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "meshmap/settings@1",
    "ui": {
        "map_viewport": {"set": False, "zoom": 0, "x": 0, "y": 0},
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)


@dataclass(frozen=True)
class MapViewportSettings:
    """The last viewport the user left the map at."""

    is_set: bool = False
    zoom: int = 0
    x: int = 0
    y: int = 0

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> MapViewportSettings:
        if not payload:
            return cls()
        normalised = normalise_map_viewport(payload)
        return cls(
            is_set=normalised["set"],
            zoom=normalised["zoom"],
            x=normalised["x"],
            y=normalised["y"],
        )

    def to_mapping(self) -> dict[str, Any]:
        return {"set": self.is_set, "zoom": self.zoom, "x": self.x, "y": self.y}

    def to_state(self) -> ViewportState:
        return ViewportState(zoom=self.zoom, tile_x=self.x, tile_y=self.y)


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def normalise_map_viewport(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return a schema-conforming viewport entry for *payload*.

    An entry that was never set collapses to zeros; a set entry keeps its
    offsets and has its zoom clamped to the tile pyramid.
    """

    if payload.get("set") is not True:
        return deepcopy(DEFAULT_SETTINGS["ui"]["map_viewport"])
    return {
        "set": True,
        "zoom": clamp_zoom(_as_int(payload.get("zoom"))),
        "x": _as_int(payload.get("x")),
        "y": _as_int(payload.get("y")),
    }


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key == "ui" and isinstance(value, dict):
                target = merged.setdefault("ui", {})
                for sub_key, sub_value in value.items():
                    if sub_key == "map_viewport":
                        if isinstance(sub_value, dict):
                            target[sub_key] = normalise_map_viewport(sub_value)
                        continue
                    target[sub_key] = sub_value
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


__all__ = [
    "DEFAULT_SETTINGS",
    "MapViewportSettings",
    "SETTINGS_SCHEMA",
    "merge_with_defaults",
    "normalise_map_viewport",
    "validate_settings",
]
