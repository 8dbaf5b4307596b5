"""Unit tests for the map input handler.

Events are plain mocks; only the signals of the handler go through Qt.
"""

from __future__ import annotations

from unittest.mock import Mock

from PySide6.QtCore import QPoint, QPointF, Qt

from meshmap.map_view.input_handler import InputHandler


def _mouse_event(button=Qt.LeftButton, buttons=Qt.LeftButton, position=QPointF(0.0, 0.0)) -> Mock:
    event = Mock()
    event.button.return_value = button
    event.buttons.return_value = buttons
    event.position.return_value = position
    return event


def _wheel_event(pixel=QPoint(0, 0), angle=QPoint(0, 0), position=QPointF(10.0, 20.0)) -> Mock:
    event = Mock()
    event.pixelDelta.return_value = pixel
    event.angleDelta.return_value = angle
    event.position.return_value = position
    return event


class TestDragGesture:
    """Drag deltas are emitted relative to the previous pointer position."""

    def setup_method(self):
        self.handler = InputHandler()
        self.drags: list[QPointF] = []
        self.cursors: list = []
        self.finished = Mock()
        self.reset = Mock()
        self.handler.drag_requested.connect(self.drags.append)
        self.handler.cursor_changed.connect(self.cursors.append)
        self.handler.drag_finished.connect(self.finished)
        self.handler.cursor_reset.connect(self.reset)

    def test_press_starts_drag(self, qtbot):
        self.handler.handle_mouse_press(_mouse_event(position=QPointF(5.0, 5.0)))

        assert self.handler.is_dragging
        assert self.cursors == [Qt.ClosedHandCursor]

    def test_moves_emit_incremental_deltas(self, qtbot):
        self.handler.handle_mouse_press(_mouse_event(position=QPointF(5.0, 5.0)))
        self.handler.handle_mouse_move(_mouse_event(position=QPointF(15.0, 0.0)))
        self.handler.handle_mouse_move(_mouse_event(position=QPointF(20.0, 3.0)))

        assert self.drags == [QPointF(10.0, -5.0), QPointF(5.0, 3.0)]

    def test_move_without_press_is_ignored(self, qtbot):
        self.handler.handle_mouse_move(_mouse_event(position=QPointF(15.0, 0.0)))

        assert self.drags == []

    def test_right_button_does_not_drag(self, qtbot):
        self.handler.handle_mouse_press(_mouse_event(button=Qt.RightButton))

        assert not self.handler.is_dragging
        assert self.cursors == []

    def test_release_finishes_drag(self, qtbot):
        self.handler.handle_mouse_press(_mouse_event())
        self.handler.handle_mouse_release(_mouse_event())

        assert not self.handler.is_dragging
        self.finished.assert_called_once()
        self.reset.assert_called_once()

    def test_release_without_drag_is_silent(self, qtbot):
        self.handler.handle_mouse_release(_mouse_event())

        self.finished.assert_not_called()
        self.reset.assert_not_called()


class TestWheelGesture:
    def setup_method(self):
        self.handler = InputHandler()
        self.scrolls: list[tuple] = []
        self.handler.scroll_requested.connect(
            lambda dx, dy, cursor: self.scrolls.append((dx, dy, cursor))
        )

    def test_angle_delta_is_reported_in_degrees(self, qtbot):
        self.handler.handle_wheel_event(_wheel_event(angle=QPoint(0, 120)))

        assert self.scrolls == [(0.0, 15.0, QPointF(10.0, 20.0))]

    def test_pixel_delta_takes_precedence(self, qtbot):
        self.handler.handle_wheel_event(_wheel_event(pixel=QPoint(-4, 9), angle=QPoint(0, 120)))

        assert self.scrolls == [(-4.0, 9.0, QPointF(10.0, 20.0))]

    def test_zero_delta_is_ignored(self, qtbot):
        self.handler.handle_wheel_event(_wheel_event())

        assert self.scrolls == []
