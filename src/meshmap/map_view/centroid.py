"""Pick the point the map centres on from a snapshot of node positions.

A plain mean is dragged away by a single node reporting a bogus fix, so the
centre is the per-axis median, recomputed after discarding points whose
distance from the first estimate is an outlier by median absolute deviation.
The snapshot is rescanned on every call; node counts are small.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..config import MIN_POINTS_FOR_OUTLIER_REJECTION, OUTLIER_MAD_FACTOR
from ..models import NodeRecord
from ..utils.logging import get_logger
from .coordinates import GeoCoordinate, node_coordinate
from .projection import haversine_km

_LOGGER = get_logger(__name__)


def median(values: Iterable[float]) -> float:
    """Return the median of *values*, or ``0.0`` when there are none."""

    ordered = sorted(values)
    if not ordered:
        return 0.0
    mid = len(ordered) // 2
    if len(ordered) % 2 == 1:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def _median_coordinate(points: Sequence[GeoCoordinate]) -> GeoCoordinate:
    return GeoCoordinate(
        latitude=median(point.latitude for point in points),
        longitude=median(point.longitude for point in points),
    )


def robust_cluster_center(points: Sequence[GeoCoordinate]) -> Optional[GeoCoordinate]:
    """Return the outlier-resistant centre of *points*, or ``None`` if empty."""

    if not points:
        return None

    center = _median_coordinate(points)
    if len(points) < MIN_POINTS_FOR_OUTLIER_REJECTION:
        return center

    distances = [haversine_km(center, point) for point in points]
    dist_median = median(distances)
    mad = median(abs(distance - dist_median) for distance in distances)
    if mad <= 0:
        return center

    threshold = dist_median + OUTLIER_MAD_FACTOR * mad
    filtered = [point for point, distance in zip(points, distances) if distance <= threshold]
    if not filtered:
        return center

    if len(filtered) < len(points):
        _LOGGER.debug(
            "discarded %d outlying node positions (threshold %.3f km)",
            len(points) - len(filtered),
            threshold,
        )
    return _median_coordinate(filtered)


def choose_center(
    nodes: Iterable[NodeRecord],
    preferred_node_id: Optional[str] = None,
) -> Optional[GeoCoordinate]:
    """Return the coordinate the map should centre on.

    A positioned node whose id matches *preferred_node_id* (normally the local
    device) wins outright. Otherwise the robust cluster centre of every
    positioned node is used. ``None`` means no node has a usable position.
    """

    preferred = (preferred_node_id or "").strip()
    positions: list[GeoCoordinate] = []
    for node in nodes:
        coord = node_coordinate(node)
        if coord is None:
            continue
        if preferred and node.node_id == preferred:
            return coord
        positions.append(coord)

    return robust_cluster_center(positions)


__all__ = ["choose_center", "median", "robust_cluster_center"]
