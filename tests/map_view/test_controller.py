from __future__ import annotations

from unittest.mock import Mock

import pytest

from meshmap.config import DEFAULT_ZOOM
from meshmap.map_view.controller import MapViewController
from meshmap.map_view.coordinates import GeoCoordinate
from meshmap.map_view.projection import coordinate_to_viewport
from meshmap.settings.schema import MapViewportSettings

SAN_FRANCISCO = GeoCoordinate(37.7749, -122.4194)


@pytest.fixture
def nodes(make_node):
    return [
        make_node("!remote-1", 52.52, 13.405),
        make_node("!local", SAN_FRANCISCO.latitude, SAN_FRANCISCO.longitude, long_name="Base"),
        make_node("!silent"),
    ]


def test_saved_viewport_is_applied(qtbot) -> None:
    callback = Mock()
    controller = MapViewController(
        initial_viewport=MapViewportSettings(is_set=True, zoom=6, x=5, y=-3),
        on_viewport_persist=callback,
        persist_debounce_ms=10,
    )

    assert controller.viewport.as_tuple() == (6, 5, -3)
    assert controller.auto_centered
    qtbot.wait(50)
    callback.assert_not_called()


def test_unset_viewport_is_ignored(qtbot) -> None:
    controller = MapViewController(initial_viewport=MapViewportSettings(is_set=False, zoom=6, x=5, y=-3))

    assert controller.viewport.as_tuple() == (0, 0, 0)
    assert not controller.auto_centered


def test_restored_viewport_survives_initial_nodes(qtbot, nodes) -> None:
    controller = MapViewController(
        local_node_id=lambda: "!local",
        initial_viewport=MapViewportSettings(is_set=True, zoom=6, x=5, y=-3),
    )

    controller.set_nodes(nodes, initial=True)

    assert controller.viewport.as_tuple() == (6, 5, -3)


def test_initial_nodes_centre_on_local_node(qtbot, nodes) -> None:
    controller = MapViewController(local_node_id=lambda: "!local")

    controller.set_nodes(nodes, initial=True)

    assert controller.auto_centered
    assert controller.viewport == coordinate_to_viewport(SAN_FRANCISCO, DEFAULT_ZOOM)


def test_without_local_node_centres_on_cluster(qtbot, make_node) -> None:
    controller = MapViewController()

    controller.set_nodes([make_node("!a", 10.0, 20.0), make_node("!b", 12.0, 22.0)])

    assert controller.viewport == coordinate_to_viewport(GeoCoordinate(11.0, 21.0), DEFAULT_ZOOM)


def test_later_snapshots_do_not_recentre(qtbot, nodes) -> None:
    controller = MapViewController(local_node_id=lambda: "!local")
    controller.set_nodes(nodes)
    controller.pan_east()
    moved = controller.viewport.as_tuple()

    controller.set_nodes(nodes)

    assert controller.viewport.as_tuple() == moved


def test_initial_snapshot_recentres_after_auto_centre(qtbot, nodes) -> None:
    controller = MapViewController(local_node_id=lambda: "!local")
    controller.set_nodes(nodes)
    controller.pan_east()
    controller.zoom_in()

    controller.set_nodes(nodes, initial=True)

    assert controller.viewport == coordinate_to_viewport(SAN_FRANCISCO, DEFAULT_ZOOM + 1)


def test_centring_waits_for_positions(qtbot, make_node) -> None:
    controller = MapViewController(local_node_id=lambda: "!local")

    controller.set_nodes([make_node("!local"), make_node("!other")], initial=True)
    assert not controller.auto_centered
    assert not controller.has_positions()
    assert controller.viewport.as_tuple() == (0, 0, 0)

    controller.set_nodes([make_node("!local", SAN_FRANCISCO.latitude, SAN_FRANCISCO.longitude)])
    assert controller.auto_centered
    assert controller.viewport == coordinate_to_viewport(SAN_FRANCISCO, DEFAULT_ZOOM)


def test_auto_centre_is_not_persisted(qtbot, nodes) -> None:
    callback = Mock()
    controller = MapViewController(
        local_node_id=lambda: "!local",
        on_viewport_persist=callback,
        persist_debounce_ms=10,
    )

    controller.set_nodes(nodes, initial=True)
    qtbot.wait(50)

    callback.assert_not_called()


def test_recenter_schedules_persistence(qtbot, nodes) -> None:
    callback = Mock()
    controller = MapViewController(
        local_node_id=lambda: "!local",
        on_viewport_persist=callback,
        persist_debounce_ms=10,
    )
    controller.set_nodes(nodes)
    controller.pan_south()
    qtbot.waitUntil(lambda: callback.called, timeout=2000)
    callback.reset_mock()

    controller.recenter()

    qtbot.waitUntil(lambda: callback.called, timeout=2000)
    expected = coordinate_to_viewport(SAN_FRANCISCO, DEFAULT_ZOOM)
    callback.assert_called_once_with(*expected.as_tuple())


def test_shutdown_flushes_pending_viewport(qtbot) -> None:
    callback = Mock()
    controller = MapViewController(on_viewport_persist=callback, persist_debounce_ms=10_000)

    controller.zoom_in()
    controller.pan_west()
    controller.shutdown()

    callback.assert_called_once_with(1, -1, 0)


def test_markers_only_include_visible_positions(qtbot, nodes) -> None:
    controller = MapViewController(local_node_id=lambda: "!local")
    controller.set_canvas_size(800, 600)
    controller.set_nodes(nodes, initial=True)

    markers = controller.markers()

    assert [marker.node_id for marker in markers] == ["!local"]
    marker = markers[0]
    assert marker.tooltip == "Base (!local)"
    assert 0 <= marker.x <= 800
    assert 0 <= marker.y <= 600


def test_markers_empty_without_canvas(qtbot, nodes) -> None:
    controller = MapViewController(local_node_id=lambda: "!local")
    controller.set_nodes(nodes, initial=True)

    assert controller.markers() == []


def test_canvas_resize_emits_only_on_change(qtbot) -> None:
    controller = MapViewController()

    with qtbot.waitSignal(controller.markers_changed, timeout=1000):
        controller.set_canvas_size(640, 480)
    with qtbot.assertNotEmitted(controller.markers_changed):
        controller.set_canvas_size(640, 480)


def test_gestures_forward_viewport_changes(qtbot) -> None:
    controller = MapViewController()
    controller.set_canvas_size(800, 600)

    with qtbot.waitSignal(controller.markers_changed, timeout=1000):
        with qtbot.waitSignal(controller.viewport_changed, timeout=1000) as blocker:
            controller.handle_drag(-96.0, 0.0)

    assert controller.viewport.as_tuple() == (0, 1, 0)
    assert blocker.args == [0, 1, 0]
