"""Debounced persistence of the map viewport."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from ..config import VIEWPORT_PERSIST_DEBOUNCE_MS
from ..utils.logging import get_logger
from .viewport import ViewportState

_LOGGER = get_logger(__name__)

PersistCallback = Callable[[int, int, int], None]


class ViewportPersistScheduler(QObject):
    """Coalesce bursts of viewport changes into one persistence call.

    Every :meth:`schedule` replaces the pending snapshot and restarts a
    single-shot timer, so only the state left after a quiet period of
    ``interval_ms`` reaches the callback.
    """

    persisted = Signal(int, int, int)
    """Signal emitted with ``(zoom, tile_x, tile_y)`` after the callback ran."""

    def __init__(
        self,
        callback: Optional[PersistCallback] = None,
        *,
        interval_ms: int = VIEWPORT_PERSIST_DEBOUNCE_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._callback = callback
        self._pending: Optional[ViewportState] = None
        self._sequence = 0

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(max(0, int(interval_ms)))
        self._timer.timeout.connect(self._fire)

    # ------------------------------------------------------------------
    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    # ------------------------------------------------------------------
    def set_callback(self, callback: Optional[PersistCallback]) -> None:
        """Replace the function that receives the debounced viewport."""

        self._callback = callback

    # ------------------------------------------------------------------
    def is_pending(self) -> bool:
        return self._pending is not None

    # ------------------------------------------------------------------
    def schedule(self, state: ViewportState) -> None:
        """Remember a copy of *state* and restart the quiet-period timer."""

        self._pending = state.snapshot()
        self._sequence += 1
        _LOGGER.debug(
            "scheduled map viewport persistence seq=%d zoom=%d x=%d y=%d",
            self._sequence,
            *self._pending.as_tuple(),
        )
        self._timer.start()

    # ------------------------------------------------------------------
    def cancel(self) -> None:
        """Drop the pending snapshot without persisting it."""

        if self._pending is not None:
            _LOGGER.debug("skipping stale map viewport persistence seq=%d", self._sequence)
        self._timer.stop()
        self._pending = None

    # ------------------------------------------------------------------
    def flush(self) -> None:
        """Persist the pending snapshot immediately, if there is one."""

        self._timer.stop()
        self._fire()

    # ------------------------------------------------------------------
    def _fire(self) -> None:
        state = self._pending
        self._pending = None
        if state is None:
            return

        zoom, tile_x, tile_y = state.as_tuple()
        if self._callback is not None:
            _LOGGER.info("persisting map viewport zoom=%d x=%d y=%d", zoom, tile_x, tile_y)
            try:
                self._callback(zoom, tile_x, tile_y)
            except Exception:
                _LOGGER.exception("map viewport persistence callback failed")
                return
        self.persisted.emit(zoom, tile_x, tile_y)


__all__ = ["PersistCallback", "ViewportPersistScheduler"]
