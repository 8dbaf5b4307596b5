"""Toolkit-independent state behind the node map view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from PySide6.QtCore import QObject, Signal

from ..config import DEFAULT_ZOOM, VIEWPORT_PERSIST_DEBOUNCE_MS
from ..models import NodeRecord
from ..settings.schema import MapViewportSettings
from ..utils.logging import get_logger
from .centroid import choose_center
from .coordinates import node_coordinate
from .gestures import GestureController
from .persistence import PersistCallback, ViewportPersistScheduler
from .projection import coordinate_to_viewport, is_marker_visible, project_to_screen
from .viewport import ViewportState

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class MarkerPlacement:
    """Canvas position of one node marker; ``(x, y)`` is the marker's tip."""

    node_id: str
    tooltip: str
    x: float
    y: float


class MapViewController(QObject):
    """Keep the node snapshot, viewport and centring policy of the map view.

    The controller never draws. Widgets call :meth:`markers` after
    :attr:`markers_changed` and forward gestures to :meth:`handle_scroll` and
    :meth:`handle_drag`.
    """

    markers_changed = Signal()
    viewport_changed = Signal(int, int, int)

    def __init__(
        self,
        *,
        local_node_id: Optional[Callable[[], Optional[str]]] = None,
        initial_viewport: Optional[MapViewportSettings] = None,
        on_viewport_persist: Optional[PersistCallback] = None,
        persist_debounce_ms: int = VIEWPORT_PERSIST_DEBOUNCE_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._local_node_id = local_node_id
        self._nodes: list[NodeRecord] = []
        self._auto_centered = False
        self._viewport_restored = False

        self._scheduler = ViewportPersistScheduler(
            on_viewport_persist,
            interval_ms=persist_debounce_ms,
            parent=self,
        )
        self._gestures = GestureController(ViewportState(), scheduler=self._scheduler, parent=self)
        self._gestures.viewport_changed.connect(self._on_viewport_changed)

        if initial_viewport is not None and initial_viewport.is_set:
            _LOGGER.debug(
                "applying initial map viewport zoom=%d x=%d y=%d",
                initial_viewport.zoom,
                initial_viewport.x,
                initial_viewport.y,
            )
            self._gestures.pan_to(initial_viewport.to_state(), persist=False)
            # A restored viewport is the user's choice; never re-centre over it.
            self._auto_centered = True
            self._viewport_restored = True

    # ------------------------------------------------------------------
    @property
    def viewport(self) -> ViewportState:
        return self._gestures.viewport

    # ------------------------------------------------------------------
    @property
    def gestures(self) -> GestureController:
        return self._gestures

    # ------------------------------------------------------------------
    @property
    def scheduler(self) -> ViewportPersistScheduler:
        return self._scheduler

    # ------------------------------------------------------------------
    @property
    def auto_centered(self) -> bool:
        return self._auto_centered

    # ------------------------------------------------------------------
    @property
    def nodes(self) -> list[NodeRecord]:
        return list(self._nodes)

    # ------------------------------------------------------------------
    def set_canvas_size(self, width: float, height: float) -> None:
        """Update the canvas size and re-place markers when it changed."""

        if self._gestures.canvas_size() == (float(width), float(height)):
            return
        self._gestures.set_canvas_size(width, height)
        self.markers_changed.emit()

    # ------------------------------------------------------------------
    def set_nodes(self, nodes: Iterable[NodeRecord], *, initial: bool = False) -> None:
        """Replace the node snapshot, centring the map until it has been centred once.

        *initial* re-centres even after an earlier auto-centre, unless the
        viewport was restored from the settings file.
        """

        self._nodes = list(nodes)
        _LOGGER.debug("updating map nodes initial=%s node_count=%d", initial, len(self._nodes))
        if not self._auto_centered or (initial and not self._viewport_restored):
            zoom = self.viewport.zoom or DEFAULT_ZOOM
            if self.center_to_preferred(zoom):
                _LOGGER.info(
                    "auto-centered map viewport zoom=%d x=%d y=%d",
                    *self.viewport.as_tuple(),
                )
                self._auto_centered = True
            else:
                _LOGGER.debug("skipped auto-centering: no suitable node coordinates")
        self.markers_changed.emit()

    # ------------------------------------------------------------------
    def center_to_preferred(self, zoom: int) -> bool:
        """Centre on the local node or the node cluster; ``False`` if impossible."""

        local_id = self._current_local_node_id()
        center = choose_center(self._nodes, local_id)
        if center is None:
            _LOGGER.debug(
                "map center was not resolved node_count=%d local_node_id=%r",
                len(self._nodes),
                local_id,
            )
            return False

        _LOGGER.debug(
            "map center resolved lat=%f lon=%f zoom=%d",
            center.latitude,
            center.longitude,
            zoom,
        )
        self._gestures.pan_to(coordinate_to_viewport(center, zoom), persist=False)
        return True

    # ------------------------------------------------------------------
    def recenter(self) -> None:
        """Re-centre at the current zoom level and remember the result."""

        self.center_to_preferred(self.viewport.zoom)
        self._scheduler.schedule(self.viewport)
        self.markers_changed.emit()

    # ------------------------------------------------------------------
    def zoom_in(self) -> None:
        self._gestures.zoom_in()

    def zoom_out(self) -> None:
        self._gestures.zoom_out()

    def pan_north(self) -> None:
        self._gestures.pan_north()

    def pan_south(self) -> None:
        self._gestures.pan_south()

    def pan_east(self) -> None:
        self._gestures.pan_east()

    def pan_west(self) -> None:
        self._gestures.pan_west()

    def set_zoom(self, zoom: int) -> None:
        self._gestures.set_zoom(zoom)

    # ------------------------------------------------------------------
    def handle_scroll(self, delta_x: float, delta_y: float, cursor_x: float, cursor_y: float) -> bool:
        return self._gestures.handle_scroll(delta_x, delta_y, cursor_x, cursor_y)

    # ------------------------------------------------------------------
    def handle_drag(self, delta_x: float, delta_y: float) -> bool:
        return self._gestures.handle_drag(delta_x, delta_y)

    # ------------------------------------------------------------------
    def has_positions(self) -> bool:
        """Return ``True`` when at least one node has a usable position."""

        return any(node_coordinate(node) is not None for node in self._nodes)

    # ------------------------------------------------------------------
    def markers(self) -> list[MarkerPlacement]:
        """Return the markers that fall on the current canvas."""

        width, height = self._gestures.canvas_size()
        placements: list[MarkerPlacement] = []
        positioned = 0
        for node in self._nodes:
            coord = node_coordinate(node)
            if coord is None:
                continue
            positioned += 1
            position = project_to_screen(coord, self.viewport, width, height)
            if position is None:
                continue
            x, y = position
            if not is_marker_visible(x, y, width, height):
                continue
            placements.append(MarkerPlacement(node.node_id, node.tooltip, x, y))

        _LOGGER.debug(
            "placed map markers total=%d positioned=%d visible=%d",
            len(self._nodes),
            positioned,
            len(placements),
        )
        return placements

    # ------------------------------------------------------------------
    def shutdown(self) -> None:
        """Write out a pending viewport before the view goes away."""

        self._scheduler.flush()

    # ------------------------------------------------------------------
    def _current_local_node_id(self) -> str:
        if self._local_node_id is None:
            return ""
        return self._local_node_id() or ""

    # ------------------------------------------------------------------
    def _on_viewport_changed(self, zoom: int, tile_x: int, tile_y: int) -> None:
        self.viewport_changed.emit(zoom, tile_x, tile_y)
        self.markers_changed.emit()


__all__ = ["MapViewController", "MarkerPlacement"]
