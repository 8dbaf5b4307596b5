from __future__ import annotations

import pytest

from meshmap.map_view.viewport import ViewportState, clamp_zoom


def test_pan_transitions_step_one_tile() -> None:
    state = ViewportState(zoom=5, tile_x=0, tile_y=0)

    state.pan_east()
    state.pan_east()
    state.pan_west()
    state.pan_south()
    state.pan_north()
    state.pan_north()

    assert state.as_tuple() == (5, 1, -1)


def test_zoom_in_then_out_round_trips_even_offsets() -> None:
    state = ViewportState(zoom=5, tile_x=2, tile_y=-3)

    state.zoom_in()
    assert state.as_tuple() == (6, 4, -6)

    state.zoom_out()
    assert state.as_tuple() == (5, 2, -3)


def test_zoom_out_truncates_toward_zero() -> None:
    state = ViewportState(zoom=6, tile_x=-3, tile_y=3)

    state.zoom_out()

    assert state.as_tuple() == (5, -1, 1)


def test_zoom_out_drops_odd_pan_remainder() -> None:
    state = ViewportState(zoom=5, tile_x=3, tile_y=0)
    state.zoom_in()
    state.pan_east()

    state.zoom_out()

    assert state.as_tuple() == (5, 3, 0)


def test_zoom_is_bounded() -> None:
    top = ViewportState(zoom=19, tile_x=7, tile_y=7)
    top.zoom_in()
    assert top.as_tuple() == (19, 7, 7)

    bottom = ViewportState(zoom=0, tile_x=3, tile_y=-3)
    bottom.zoom_out()
    assert bottom.as_tuple() == (0, 3, -3)


def test_set_zoom_walks_each_level() -> None:
    state = ViewportState(zoom=3, tile_x=1, tile_y=1)

    state.set_zoom(5)
    assert state.as_tuple() == (5, 4, 4)

    state.set_zoom(2)
    assert state.as_tuple() == (2, 0, 0)


@pytest.mark.parametrize("target, expected", [(25, 19), (-5, 0), (7, 7)])
def test_set_zoom_clamps_target(target: int, expected: int) -> None:
    state = ViewportState(zoom=10)

    state.set_zoom(target)

    assert state.zoom == expected
    assert clamp_zoom(target) == expected


def test_set_zoom_is_idempotent() -> None:
    once = ViewportState(zoom=9, tile_x=-7, tile_y=13)
    twice = ViewportState(zoom=9, tile_x=-7, tile_y=13)

    once.set_zoom(4)
    twice.set_zoom(4)
    twice.set_zoom(4)

    assert once == twice


def test_pan_to_adopts_target() -> None:
    state = ViewportState(zoom=2, tile_x=1, tile_y=1)

    state.pan_to(ViewportState(zoom=6, tile_x=5, tile_y=-3))

    assert state.as_tuple() == (6, 5, -3)


def test_snapshot_is_independent() -> None:
    state = ViewportState(zoom=4, tile_x=1, tile_y=2)
    snapshot = state.snapshot()

    state.pan_east()

    assert snapshot.as_tuple() == (4, 1, 2)
    assert state.as_tuple() == (4, 2, 2)
