"""Logic for translating Qt input events into map navigation requests."""

from __future__ import annotations

from PySide6.QtCore import QObject, QPointF, Qt, Signal

# Qt reports wheel rotation in eighths of a degree.
_ANGLE_UNITS_PER_DEGREE = 8.0


class InputHandler(QObject):
    """Handle mouse interaction for :class:`~meshmap.map_view.map_widget.NodeMapWidget`."""

    drag_requested = Signal(QPointF)
    """Signal emitted for every incremental drag delta while the user pans."""

    drag_finished = Signal()
    """Signal emitted once the active drag gesture completes."""

    scroll_requested = Signal(float, float, QPointF)
    """Signal emitted with ``(delta_x, delta_y, cursor)`` for wheel input."""

    cursor_changed = Signal(Qt.CursorShape)
    cursor_reset = Signal()

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._is_dragging = False
        self._last_mouse_pos = QPointF()

    # ------------------------------------------------------------------
    @property
    def is_dragging(self) -> bool:
        return self._is_dragging

    # ------------------------------------------------------------------
    def handle_mouse_press(self, event) -> None:
        """Start a drag gesture when the primary mouse button is pressed."""

        if event.button() == Qt.LeftButton:
            self._is_dragging = True
            self._last_mouse_pos = event.position()
            self.cursor_changed.emit(Qt.ClosedHandCursor)

    # ------------------------------------------------------------------
    def handle_mouse_move(self, event) -> None:
        """Emit a drag request when the mouse moves during a drag gesture."""

        if self._is_dragging and event.buttons() & Qt.LeftButton:
            current_pos = event.position()
            delta = current_pos - self._last_mouse_pos
            self._last_mouse_pos = current_pos
            self.drag_requested.emit(delta)

    # ------------------------------------------------------------------
    def handle_mouse_release(self, event) -> None:
        """Finish drag gestures and restore the default cursor."""

        if event.button() == Qt.LeftButton and self._is_dragging:
            self._is_dragging = False
            self.drag_finished.emit()
            self.cursor_reset.emit()

    # ------------------------------------------------------------------
    def handle_wheel_event(self, event) -> None:
        """Forward wheel rotation in degrees, or touchpad pixels when provided."""

        pixel_delta = event.pixelDelta()
        if not pixel_delta.isNull():
            delta_x = float(pixel_delta.x())
            delta_y = float(pixel_delta.y())
        else:
            angle_delta = event.angleDelta()
            delta_x = angle_delta.x() / _ANGLE_UNITS_PER_DEGREE
            delta_y = angle_delta.y() / _ANGLE_UNITS_PER_DEGREE
        if delta_x == 0 and delta_y == 0:
            return

        self.scroll_requested.emit(delta_x, delta_y, QPointF(event.position()))


__all__ = ["InputHandler"]
