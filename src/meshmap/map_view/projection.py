"""Web Mercator tile maths used to centre the map and place node markers.

All functions are pure. Geographic input is expected to have passed
:func:`~meshmap.map_view.coordinates.is_valid_coordinate`; latitudes are still
clamped to :data:`~meshmap.config.MERCATOR_LAT_BOUND` because the projection
diverges at the poles.
"""

from __future__ import annotations

import math
from typing import Optional

from ..config import EARTH_RADIUS_KM, MARKER_OUTSIDE_PAD, MERCATOR_LAT_BOUND, TILE_SIZE
from .coordinates import GeoCoordinate
from .viewport import ViewportState, clamp_zoom


def geo_to_tile(coord: GeoCoordinate, zoom: int) -> tuple[float, float]:
    """Return the fractional tile coordinates of *coord* at *zoom*."""

    n = math.pow(2.0, zoom)
    lat = max(-MERCATOR_LAT_BOUND, min(MERCATOR_LAT_BOUND, coord.latitude))
    lat_rad = math.radians(lat)

    x = (coord.longitude + 180.0) / 360.0 * n
    y = (1.0 - math.log(math.tan(lat_rad) + 1.0 / math.cos(lat_rad)) / math.pi) / 2.0 * n
    return x, y


def tile_offset_for_zoom(zoom: int) -> int:
    """Return the absolute tile index shown under a ``(0, 0)`` viewport offset."""

    zoom = max(0, zoom)
    count = 1 << zoom
    return math.floor(count / 2 - 0.5)


def center_tile_bias(zoom: int) -> float:
    """Return the tile correction used when centring a coordinate.

    The minimum zoom level only has a single tile, which needs half the usual
    correction to land in the middle of the canvas.
    """

    return 0.5 if zoom == 0 else 1.0


def coordinate_to_viewport(coord: GeoCoordinate, zoom: int) -> ViewportState:
    """Build the viewport that shows *coord* in the middle of the canvas."""

    zoom = clamp_zoom(zoom)
    tile_x, tile_y = geo_to_tile(coord, zoom)
    offset = tile_offset_for_zoom(zoom)
    bias = center_tile_bias(zoom)
    return ViewportState(
        zoom=zoom,
        tile_x=_round_half_away(tile_x - bias) - offset,
        tile_y=_round_half_away(tile_y - bias) - offset,
    )


def _round_half_away(value: float) -> int:
    # ``round`` would send 2.5 to 2; tile centring rounds halves away from zero.
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _truncating_half(value: int) -> int:
    return int(value / 2)


def mid_tile_anchor(width: float, height: float, zoom: int) -> tuple[int, int]:
    """Return the canvas position where the viewport's origin tile is drawn."""

    mid_x = _truncating_half(int(width) - TILE_SIZE * 2)
    mid_y = _truncating_half(int(height) - TILE_SIZE * 2)
    if zoom == 0:
        mid_x += TILE_SIZE // 2
        mid_y += TILE_SIZE // 2
    return mid_x, mid_y


def project_to_screen(
    coord: GeoCoordinate,
    viewport: ViewportState,
    width: float,
    height: float,
) -> Optional[tuple[float, float]]:
    """Return canvas pixel coordinates for *coord*, or ``None`` for an empty canvas."""

    if width <= 0 or height <= 0:
        return None

    mid_x, mid_y = mid_tile_anchor(width, height, viewport.zoom)
    offset = tile_offset_for_zoom(viewport.zoom)
    abs_x = float(viewport.tile_x + offset)
    abs_y = float(viewport.tile_y + offset)
    tile_x, tile_y = geo_to_tile(coord, viewport.zoom)

    screen_x = mid_x + (tile_x - abs_x) * TILE_SIZE
    screen_y = mid_y + (tile_y - abs_y) * TILE_SIZE
    return screen_x, screen_y


def is_marker_visible(
    x: float,
    y: float,
    width: float,
    height: float,
    pad: float = MARKER_OUTSIDE_PAD,
) -> bool:
    """Return ``True`` when ``(x, y)`` lies on the canvas grown by *pad*."""

    if width <= 0 or height <= 0:
        return False
    if x < -pad or y < -pad:
        return False
    if x > width + pad or y > height + pad:
        return False
    return True


def haversine_km(a: GeoCoordinate, b: GeoCoordinate) -> float:
    """Return the great-circle distance between *a* and *b* in kilometres."""

    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(b.longitude - a.longitude)

    sin_lat = math.sin(d_lat / 2)
    sin_lon = math.sin(d_lon / 2)
    h = sin_lat * sin_lat + math.cos(lat1) * math.cos(lat2) * sin_lon * sin_lon
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(min(1.0, h)))


__all__ = [
    "center_tile_bias",
    "coordinate_to_viewport",
    "geo_to_tile",
    "haversine_km",
    "is_marker_visible",
    "mid_tile_anchor",
    "project_to_screen",
    "tile_offset_for_zoom",
]
