from __future__ import annotations

import math

import pytest

from meshmap.map_view.coordinates import GeoCoordinate, is_valid_coordinate, node_coordinate


@pytest.mark.parametrize(
    "lat, lon",
    [
        (math.nan, 0.0),
        (0.0, math.nan),
        (math.inf, 0.0),
        (0.0, -math.inf),
        (90.0001, 0.0),
        (-90.5, 0.0),
        (0.0, 180.01),
        (0.0, -181.0),
    ],
)
def test_invalid_coordinates_are_rejected(lat: float, lon: float) -> None:
    assert is_valid_coordinate(lat, lon) is False


@pytest.mark.parametrize(
    "lat, lon",
    [(0.0, 0.0), (90.0, 180.0), (-90.0, -180.0), (52.52, 13.405)],
)
def test_domain_boundaries_are_valid(lat: float, lon: float) -> None:
    assert is_valid_coordinate(lat, lon) is True


def test_node_coordinate_requires_both_values(make_node) -> None:
    assert node_coordinate(make_node("!a", latitude=10.0)) is None
    assert node_coordinate(make_node("!b", longitude=10.0)) is None
    assert node_coordinate(make_node("!c")) is None


def test_node_coordinate_filters_invalid_fix(make_node) -> None:
    assert node_coordinate(make_node("!a", 120.0, 10.0)) is None
    assert node_coordinate(make_node("!b", math.nan, 10.0)) is None


def test_node_coordinate_returns_position(make_node) -> None:
    assert node_coordinate(make_node("!a", 37.7749, -122.4194)) == GeoCoordinate(37.7749, -122.4194)
