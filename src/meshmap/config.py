"""Default configuration values for meshmap."""

from __future__ import annotations

from typing import Final

# ---------------------------------------------------------------------------
# Tile pyramid
# ---------------------------------------------------------------------------

TILE_SIZE: Final[int] = 256
MIN_ZOOM: Final[int] = 0
MAX_ZOOM: Final[int] = 19
MERCATOR_LAT_BOUND: Final[float] = 85.05112878
EARTH_RADIUS_KM: Final[float] = 6371.0

# Zoom level used when the map centres itself on the node cluster for the first
# time and no viewport was restored from the settings file.
DEFAULT_ZOOM: Final[int] = 11

# ---------------------------------------------------------------------------
# Centre selection
# ---------------------------------------------------------------------------

# Points further from the median centre than ``median + factor * MAD`` are
# ignored when the cluster centre is recomputed.
OUTLIER_MAD_FACTOR: Final[float] = 3.5
MIN_POINTS_FOR_OUTLIER_REJECTION: Final[int] = 4

# ---------------------------------------------------------------------------
# Gesture handling
# ---------------------------------------------------------------------------

# Accumulated scroll distance (in degrees of wheel rotation) that equals one
# zoom step.
ZOOM_STEP_THRESHOLD: Final[float] = 15.0

# Cursor offsets (normalised to ``[-1, 1]`` from the canvas centre) below the
# dead zone do not nudge a zoom-in; offsets beyond the boost ratio pan two tiles.
ZOOM_FOCUS_DEAD_ZONE: Final[float] = 0.18
ZOOM_FOCUS_BOOST: Final[float] = 0.65

# Pixels of accumulated drag that move the viewport by one tile.
DRAG_PAN_THRESHOLD: Final[float] = 96.0

VIEWPORT_PERSIST_DEBOUNCE_MS: Final[int] = 500

# ---------------------------------------------------------------------------
# Marker placement
# ---------------------------------------------------------------------------

MARKER_OUTSIDE_PAD: Final[float] = 20.0
MARKER_SIZE: Final[float] = 20.0
