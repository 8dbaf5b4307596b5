"""Geographic coordinate type and the validity gate used by all map maths."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ..models import NodeRecord


@dataclass(frozen=True)
class GeoCoordinate:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


def is_valid_coordinate(lat: float, lon: float) -> bool:
    """Return ``True`` when *lat*/*lon* are finite and inside their domains."""

    if math.isnan(lat) or math.isnan(lon) or math.isinf(lat) or math.isinf(lon):
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0


def node_coordinate(node: NodeRecord) -> Optional[GeoCoordinate]:
    """Return the position of *node*, or ``None`` when it has no usable fix."""

    if node.latitude is None or node.longitude is None:
        return None
    if not is_valid_coordinate(node.latitude, node.longitude):
        return None
    return GeoCoordinate(latitude=node.latitude, longitude=node.longitude)


__all__ = ["GeoCoordinate", "is_valid_coordinate", "node_coordinate"]
