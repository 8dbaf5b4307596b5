"""Translate scroll and drag deltas into viewport transitions."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal

from ..config import (
    DRAG_PAN_THRESHOLD,
    ZOOM_FOCUS_BOOST,
    ZOOM_FOCUS_DEAD_ZONE,
    ZOOM_STEP_THRESHOLD,
)
from ..utils.logging import get_logger
from .persistence import ViewportPersistScheduler
from .viewport import ViewportState

_LOGGER = get_logger(__name__)


def zoom_focus_pan_steps(norm: float) -> int:
    """Return how many tiles a zoom-in should pan for a normalised cursor offset.

    *norm* is the cursor's distance from the canvas centre along one axis,
    scaled to ``[-1, 1]``. The sign of the result gives the direction.
    """

    magnitude = abs(norm)
    if magnitude < ZOOM_FOCUS_DEAD_ZONE:
        return 0
    steps = 2 if magnitude >= ZOOM_FOCUS_BOOST else 1
    return -steps if norm < 0 else steps


class GestureController(QObject):
    """Own the viewport's read-modify-write cycle for user interaction.

    The controller is driven from the Qt event loop only. Every transition
    that changes the viewport emits :attr:`viewport_changed` and hands a
    snapshot to the persistence scheduler.
    """

    viewport_changed = Signal(int, int, int)
    """Signal emitted with ``(zoom, tile_x, tile_y)`` after each change."""

    def __init__(
        self,
        viewport: ViewportState | None = None,
        *,
        scheduler: Optional[ViewportPersistScheduler] = None,
        zoom_step: float = ZOOM_STEP_THRESHOLD,
        drag_threshold: float = DRAG_PAN_THRESHOLD,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._viewport = viewport if viewport is not None else ViewportState()
        self._scheduler = scheduler
        self._zoom_step = float(zoom_step)
        self._drag_threshold = float(drag_threshold)
        self._canvas_width = 0.0
        self._canvas_height = 0.0
        self._scroll_accumulator = 0.0
        self._drag_accumulator_x = 0.0
        self._drag_accumulator_y = 0.0

    # ------------------------------------------------------------------
    @property
    def viewport(self) -> ViewportState:
        return self._viewport

    # ------------------------------------------------------------------
    @property
    def scheduler(self) -> Optional[ViewportPersistScheduler]:
        return self._scheduler

    # ------------------------------------------------------------------
    def set_canvas_size(self, width: float, height: float) -> None:
        """Record the canvas size used to normalise zoom cursor positions."""

        self._canvas_width = float(width)
        self._canvas_height = float(height)

    # ------------------------------------------------------------------
    def canvas_size(self) -> tuple[float, float]:
        return self._canvas_width, self._canvas_height

    # ------------------------------------------------------------------
    # Explicit controls
    # ------------------------------------------------------------------
    def zoom_in(self) -> None:
        self._apply(self._viewport.zoom_in, "zoom in")

    def zoom_out(self) -> None:
        self._apply(self._viewport.zoom_out, "zoom out")

    def pan_north(self) -> None:
        self._apply(self._viewport.pan_north, "pan north")

    def pan_south(self) -> None:
        self._apply(self._viewport.pan_south, "pan south")

    def pan_east(self) -> None:
        self._apply(self._viewport.pan_east, "pan east")

    def pan_west(self) -> None:
        self._apply(self._viewport.pan_west, "pan west")

    # ------------------------------------------------------------------
    def set_zoom(self, target: int) -> None:
        self._apply(lambda: self._viewport.set_zoom(target), "set zoom")

    # ------------------------------------------------------------------
    def pan_to(self, target: ViewportState, *, persist: bool = True) -> None:
        """Move the viewport to *target*; restored viewports skip persistence."""

        _LOGGER.debug(
            "panning map from zoom=%d x=%d y=%d to zoom=%d x=%d y=%d",
            *self._viewport.as_tuple(),
            *target.as_tuple(),
        )
        self._apply(lambda: self._viewport.pan_to(target), "pan to", persist=persist)

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------
    def handle_scroll(
        self,
        delta_x: float,
        delta_y: float,
        cursor_x: float,
        cursor_y: float,
    ) -> bool:
        """Zoom for every full step of accumulated scrolling.

        The dominant axis counts: vertical, unless the horizontal delta is
        larger. Zooming in also pans toward the cursor; zooming out does not.
        Returns ``True`` when the viewport changed.
        """

        primary = delta_y
        if abs(delta_x) > abs(primary):
            primary = delta_x
        if primary == 0:
            return False
        self._scroll_accumulator += primary

        before = self._viewport.as_tuple()
        while self._scroll_accumulator >= self._zoom_step:
            self._viewport.zoom_in()
            self._nudge_toward_cursor(cursor_x, cursor_y)
            self._scroll_accumulator -= self._zoom_step
        while self._scroll_accumulator <= -self._zoom_step:
            self._viewport.zoom_out()
            self._scroll_accumulator += self._zoom_step

        return self._commit_if_changed(before, "scroll")

    # ------------------------------------------------------------------
    def handle_drag(self, delta_x: float, delta_y: float) -> bool:
        """Pan once per full threshold of accumulated drag distance.

        The content follows the pointer: dragging right reveals the west,
        dragging down reveals the north. Returns ``True`` when the viewport
        changed.
        """

        if delta_x == 0 and delta_y == 0:
            return False
        self._drag_accumulator_x += delta_x
        self._drag_accumulator_y += delta_y

        before = self._viewport.as_tuple()
        threshold = self._drag_threshold
        while self._drag_accumulator_x >= threshold:
            self._viewport.pan_west()
            self._drag_accumulator_x -= threshold
        while self._drag_accumulator_x <= -threshold:
            self._viewport.pan_east()
            self._drag_accumulator_x += threshold
        while self._drag_accumulator_y >= threshold:
            self._viewport.pan_north()
            self._drag_accumulator_y -= threshold
        while self._drag_accumulator_y <= -threshold:
            self._viewport.pan_south()
            self._drag_accumulator_y += threshold

        return self._commit_if_changed(before, "drag")

    # ------------------------------------------------------------------
    def reset_accumulators(self) -> None:
        """Forget partial scroll and drag distances."""

        self._scroll_accumulator = 0.0
        self._drag_accumulator_x = 0.0
        self._drag_accumulator_y = 0.0

    # ------------------------------------------------------------------
    def _nudge_toward_cursor(self, cursor_x: float, cursor_y: float) -> None:
        half_width = self._canvas_width / 2
        half_height = self._canvas_height / 2
        if half_width <= 0 or half_height <= 0:
            return

        dx_norm = max(-1.0, min(1.0, (cursor_x - half_width) / half_width))
        dy_norm = max(-1.0, min(1.0, (cursor_y - half_height) / half_height))

        x_steps = zoom_focus_pan_steps(dx_norm)
        y_steps = zoom_focus_pan_steps(dy_norm)
        for _ in range(abs(x_steps)):
            if x_steps > 0:
                self._viewport.pan_east()
            else:
                self._viewport.pan_west()
        for _ in range(abs(y_steps)):
            if y_steps > 0:
                self._viewport.pan_south()
            else:
                self._viewport.pan_north()

    # ------------------------------------------------------------------
    def _apply(self, transition: Callable[[], None], reason: str, *, persist: bool = True) -> None:
        before = self._viewport.as_tuple()
        transition()
        self._commit_if_changed(before, reason, persist=persist)

    # ------------------------------------------------------------------
    def _commit_if_changed(
        self,
        before: tuple[int, int, int],
        reason: str,
        *,
        persist: bool = True,
    ) -> bool:
        after = self._viewport.as_tuple()
        if after == before:
            return False
        _LOGGER.debug("map viewport changed by %s zoom=%d x=%d y=%d", reason, *after)
        self.viewport_changed.emit(*after)
        if persist and self._scheduler is not None:
            self._scheduler.schedule(self._viewport)
        return True


__all__ = ["GestureController", "zoom_focus_pan_steps"]
