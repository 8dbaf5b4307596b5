"""Node records as seen by the map view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class NodeRecord:
    """Snapshot of a mesh node as supplied by the node registry."""

    node_id: str
    long_name: str = ""
    short_name: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def display_name(self) -> str:
        return self.long_name.strip() or self.short_name.strip() or self.node_id

    @property
    def tooltip(self) -> str:
        """Return the marker label: the name followed by the node id."""

        name = self.display_name
        if name == self.node_id:
            return name
        return f"{name} ({self.node_id})"

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> NodeRecord:
        """Build a record from a JSON-style mapping.

        Coordinates that cannot be read as numbers are treated as missing so a
        node without a position fix never blocks the rest of the snapshot.
        """

        node_id = payload.get("node_id")
        if not isinstance(node_id, str) or not node_id:
            raise ValueError("node record requires a non-empty 'node_id'")
        return cls(
            node_id=node_id,
            long_name=str(payload.get("long_name") or ""),
            short_name=str(payload.get("short_name") or ""),
            latitude=_coerce_coordinate(payload.get("latitude")),
            longitude=_coerce_coordinate(payload.get("longitude")),
        )


def _coerce_coordinate(value: object) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        candidate = value.strip()
        if not candidate:
            return None
        try:
            return float(candidate)
        except ValueError:
            return None
    return None


__all__ = ["NodeRecord"]
