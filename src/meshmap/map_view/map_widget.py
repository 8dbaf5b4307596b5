"""QWidget based surface that shows node markers over the map viewport."""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from PySide6.QtCore import QPointF, QRectF, Qt, Signal
from PySide6.QtGui import QBrush, QCloseEvent, QColor, QPainter, QPen, QResizeEvent
from PySide6.QtWidgets import QWidget

from ..config import MARKER_SIZE
from ..models import NodeRecord
from ..settings.schema import MapViewportSettings
from .controller import MapViewController, MarkerPlacement
from .input_handler import InputHandler
from .persistence import PersistCallback

EMPTY_STATE_TEXT = "No node positions yet"


class NodeMapWidget(QWidget):
    """Display node markers and route pan/zoom gestures to the controller.

    Tile imagery is drawn by whatever sits underneath this widget; the widget
    itself only paints markers and the empty-state hint.
    """

    viewChanged = Signal(int, int, int)
    """Signal emitted whenever the viewport's zoom or tile offset changes."""

    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        local_node_id: Optional[Callable[[], Optional[str]]] = None,
        initial_viewport: Optional[MapViewportSettings] = None,
        on_viewport_persist: Optional[PersistCallback] = None,
    ) -> None:
        super().__init__(parent)

        self._controller = MapViewController(
            local_node_id=local_node_id,
            initial_viewport=initial_viewport,
            on_viewport_persist=on_viewport_persist,
            parent=self,
        )
        self._input_handler = InputHandler(parent=self)
        self._markers: list[MarkerPlacement] = []

        self._controller.markers_changed.connect(self._refresh_markers)
        self._controller.viewport_changed.connect(self.viewChanged)

        self._input_handler.drag_requested.connect(self._on_drag_requested)
        self._input_handler.scroll_requested.connect(self._on_scroll_requested)
        self._input_handler.cursor_changed.connect(self.setCursor)
        self._input_handler.cursor_reset.connect(self.unsetCursor)

        self.setMouseTracking(True)
        self.setMinimumSize(180, 120)

    # ------------------------------------------------------------------
    @property
    def controller(self) -> MapViewController:
        return self._controller

    # ------------------------------------------------------------------
    def set_nodes(self, nodes: Iterable[NodeRecord], *, initial: bool = False) -> None:
        """Forward a fresh node snapshot to the controller."""

        self._controller.set_nodes(nodes, initial=initial)

    # ------------------------------------------------------------------
    def markers(self) -> list[MarkerPlacement]:
        """Return the markers painted during the last refresh."""

        return list(self._markers)

    # ------------------------------------------------------------------
    def marker_at(self, position: QPointF) -> MarkerPlacement | None:
        """Return the marker whose icon covers *position*, if any."""

        for marker in reversed(self._markers):
            if self._marker_rect(marker).contains(position):
                return marker
        return None

    # ------------------------------------------------------------------
    def shutdown(self) -> None:
        self._controller.shutdown()

    # ------------------------------------------------------------------
    def paintEvent(self, event) -> None:  # type: ignore[override]
        """Draw node markers, or the empty-state hint when nothing is positioned."""

        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.Antialiasing, True)
            if not self._controller.has_positions():
                painter.setPen(self.palette().color(self.foregroundRole()))
                painter.drawText(self.rect(), Qt.AlignCenter, EMPTY_STATE_TEXT)
                return
            painter.setPen(QPen(QColor(255, 255, 255), 2))
            painter.setBrush(QBrush(QColor(220, 60, 60)))
            for marker in self._markers:
                painter.drawEllipse(self._marker_rect(marker))
        finally:
            painter.end()

    # ------------------------------------------------------------------
    def closeEvent(self, event: QCloseEvent) -> None:  # type: ignore[override]
        """Write out a pending viewport before the widget is destroyed."""

        self.shutdown()
        super().closeEvent(event)

    # ------------------------------------------------------------------
    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        self._input_handler.handle_mouse_press(event)
        super().mousePressEvent(event)

    # ------------------------------------------------------------------
    def mouseMoveEvent(self, event) -> None:  # type: ignore[override]
        self._input_handler.handle_mouse_move(event)
        super().mouseMoveEvent(event)

    # ------------------------------------------------------------------
    def mouseReleaseEvent(self, event) -> None:  # type: ignore[override]
        self._input_handler.handle_mouse_release(event)
        super().mouseReleaseEvent(event)

    # ------------------------------------------------------------------
    def wheelEvent(self, event) -> None:  # type: ignore[override]
        self._input_handler.handle_wheel_event(event)
        event.accept()

    # ------------------------------------------------------------------
    def resizeEvent(self, event: QResizeEvent) -> None:  # type: ignore[override]
        """Keep the controller's canvas size in step with the widget."""

        super().resizeEvent(event)
        size = event.size()
        self._controller.set_canvas_size(size.width(), size.height())

    # ------------------------------------------------------------------
    def _on_drag_requested(self, delta: QPointF) -> None:
        self._controller.handle_drag(delta.x(), delta.y())

    # ------------------------------------------------------------------
    def _on_scroll_requested(self, delta_x: float, delta_y: float, cursor: QPointF) -> None:
        self._controller.handle_scroll(delta_x, delta_y, cursor.x(), cursor.y())

    # ------------------------------------------------------------------
    def _refresh_markers(self) -> None:
        self._markers = self._controller.markers()
        self.update()

    # ------------------------------------------------------------------
    @staticmethod
    def _marker_rect(marker: MarkerPlacement) -> QRectF:
        # The marker's tip sits on the node position, with the icon above it.
        return QRectF(
            marker.x - MARKER_SIZE / 2,
            marker.y - MARKER_SIZE,
            MARKER_SIZE,
            MARKER_SIZE,
        )


__all__ = ["EMPTY_STATE_TEXT", "NodeMapWidget"]
