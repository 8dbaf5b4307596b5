"""Public interface of the map viewport and projection engine.

Only the toolkit-free helpers are re-exported here. Import the Qt pieces
(``controller``, ``gestures``, ``map_widget``) from their modules.
"""

from .centroid import choose_center, median, robust_cluster_center
from .coordinates import GeoCoordinate, is_valid_coordinate, node_coordinate
from .projection import (
    coordinate_to_viewport,
    geo_to_tile,
    haversine_km,
    project_to_screen,
    tile_offset_for_zoom,
)
from .viewport import ViewportState, clamp_zoom

__all__ = [
    "GeoCoordinate",
    "ViewportState",
    "choose_center",
    "clamp_zoom",
    "coordinate_to_viewport",
    "geo_to_tile",
    "haversine_km",
    "is_valid_coordinate",
    "median",
    "node_coordinate",
    "project_to_screen",
    "robust_cluster_center",
    "tile_offset_for_zoom",
]
