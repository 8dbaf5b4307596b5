"""Integer tile-space viewport and its pan/zoom transitions."""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..config import MAX_ZOOM, MIN_ZOOM


def clamp_zoom(zoom: int) -> int:
    """Clamp *zoom* to the tile pyramid's ``[MIN_ZOOM, MAX_ZOOM]`` range."""

    return max(MIN_ZOOM, min(MAX_ZOOM, int(zoom)))


def _halve(value: int) -> int:
    # Truncates toward zero: -3 becomes -1, not -2.
    return int(value / 2)


@dataclass
class ViewportState:
    """Describe which part of the tile pyramid the map currently shows.

    ``tile_x``/``tile_y`` are offsets relative to the tile that sits under the
    view when both are zero (see :func:`~meshmap.map_view.projection.tile_offset_for_zoom`).
    They are not clamped to the pyramid. The state is mutated in place by every
    transition.
    """

    zoom: int = MIN_ZOOM
    tile_x: int = 0
    tile_y: int = 0

    # ------------------------------------------------------------------
    def pan_east(self) -> None:
        self.tile_x += 1

    # ------------------------------------------------------------------
    def pan_west(self) -> None:
        self.tile_x -= 1

    # ------------------------------------------------------------------
    def pan_north(self) -> None:
        self.tile_y -= 1

    # ------------------------------------------------------------------
    def pan_south(self) -> None:
        self.tile_y += 1

    # ------------------------------------------------------------------
    def zoom_in(self) -> None:
        """Descend one level, doubling the offsets to keep the same area."""

        if self.zoom >= MAX_ZOOM:
            return
        self.zoom += 1
        self.tile_x *= 2
        self.tile_y *= 2

    # ------------------------------------------------------------------
    def zoom_out(self) -> None:
        """Ascend one level, halving the offsets with truncation toward zero.

        This is not an exact inverse of :meth:`zoom_in` for odd offsets.
        """

        if self.zoom <= MIN_ZOOM:
            return
        self.tile_x = _halve(self.tile_x)
        self.tile_y = _halve(self.tile_y)
        self.zoom -= 1

    # ------------------------------------------------------------------
    def set_zoom(self, target: int) -> None:
        """Step one level at a time until ``zoom`` equals the clamped *target*."""

        target = clamp_zoom(target)
        while self.zoom < target:
            self.zoom_in()
        while self.zoom > target:
            self.zoom_out()

    # ------------------------------------------------------------------
    def pan_to(self, target: ViewportState) -> None:
        """Zoom step by step to *target*'s level, then take over its offsets."""

        self.set_zoom(target.zoom)
        self.tile_x = int(target.tile_x)
        self.tile_y = int(target.tile_y)

    # ------------------------------------------------------------------
    def snapshot(self) -> ViewportState:
        """Return an independent copy that later mutations do not affect."""

        return replace(self)

    # ------------------------------------------------------------------
    def as_tuple(self) -> tuple[int, int, int]:
        return self.zoom, self.tile_x, self.tile_y


__all__ = ["ViewportState", "clamp_zoom"]
