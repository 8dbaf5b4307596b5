"""Custom exception hierarchy for meshmap."""

from __future__ import annotations


class MeshMapError(Exception):
    """Base class for all custom errors raised by meshmap."""


class SettingsError(MeshMapError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""


class NodeDataError(MeshMapError):
    """Raised when a node snapshot file cannot be read or has the wrong shape."""


__all__ = [
    "MeshMapError",
    "NodeDataError",
    "SettingsError",
    "SettingsLoadError",
    "SettingsValidationError",
]
