"""Default configuration values for ImageDeskew."""

from __future__ import annotations

from typing import Final

# ---------------------------------------------------------------------------
# Viewport
# ---------------------------------------------------------------------------

# Pinch-zoom is clamped to this range.  Panning is deliberately unbounded so
# the image can be dragged completely out of the container.
MIN_VIEWPORT_SCALE: Final[float] = 0.5
MAX_VIEWPORT_SCALE: Final[float] = 4.0

# ---------------------------------------------------------------------------
# Crop rectangle
# ---------------------------------------------------------------------------

# Smallest side length, in container units, a crop rectangle may shrink to.
MIN_CROP_SIDE: Final[float] = 40.0

# The initial crop is a centred square covering this fraction of the shorter
# side of the display frame.
DEFAULT_CROP_FRACTION: Final[float] = 0.6

# ---------------------------------------------------------------------------
# Rectangle detection
# ---------------------------------------------------------------------------

# Aspect ratios are expressed as short side / long side, so 1.0 is a square.
DETECTOR_MIN_ASPECT_RATIO: Final[float] = 0.3
DETECTOR_MAX_ASPECT_RATIO: Final[float] = 1.0
# Minimum rectangle side relative to the smaller dimension of the crop.
DETECTOR_MIN_SIZE: Final[float] = 0.2
DETECTOR_MIN_CONFIDENCE: Final[float] = 0.5
DETECTOR_MAX_OBSERVATIONS: Final[int] = 1

# ---------------------------------------------------------------------------
# Undo / redo
# ---------------------------------------------------------------------------

HISTORY_LIMIT: Final[int] = 50
