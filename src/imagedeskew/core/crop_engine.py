"""
Crop rectangle resizing for the six interactive handles.

The functions here are pure: they take the rectangle captured when the drag
started plus the cumulative drag translation and return a new rectangle.
Nothing is stored between calls.
"""

from __future__ import annotations

import enum
import math

from ..config import DEFAULT_CROP_FRACTION, MIN_CROP_SIDE
from .geometry import Point, Rect, Size


class CropHandle(enum.IntEnum):
    """Enumeration of crop box interaction handles."""

    TOP_LEFT = 0
    TOP_RIGHT = 1
    BOTTOM_RIGHT = 2
    BOTTOM_LEFT = 3
    LEFT_MID = 4
    RIGHT_MID = 5

    @property
    def moves_left(self) -> bool:
        return self in (CropHandle.TOP_LEFT, CropHandle.BOTTOM_LEFT, CropHandle.LEFT_MID)

    @property
    def moves_right(self) -> bool:
        return self in (CropHandle.TOP_RIGHT, CropHandle.BOTTOM_RIGHT, CropHandle.RIGHT_MID)

    @property
    def moves_top(self) -> bool:
        return self in (CropHandle.TOP_LEFT, CropHandle.TOP_RIGHT)

    @property
    def moves_bottom(self) -> bool:
        return self in (CropHandle.BOTTOM_LEFT, CropHandle.BOTTOM_RIGHT)


def _coerce_handle(handle: CropHandle | int) -> CropHandle | None:
    try:
        return CropHandle(int(handle))
    except (TypeError, ValueError):
        return None


def resize(
    rect: Rect,
    handle: CropHandle | int,
    translation: Size,
    image_frame: Rect | None,
    min_side: float = MIN_CROP_SIDE,
) -> Rect:
    """Return *rect* resized by dragging *handle* by *translation*.

    Parameters
    ----------
    rect:
        Crop rectangle captured at the start of the drag.
    handle:
        The handle being dragged.  Unknown indices leave the edges untouched.
    translation:
        Cumulative drag translation since the drag started.
    image_frame:
        Display frame the result must stay inside, or ``None`` to leave the
        edges unbounded (pad policy).  A *rect* lying outside the frame is
        slid back onto it before the drag is applied.
    min_side:
        Minimum width and height of the result.

    Returns
    -------
    Rect
        The resized rectangle.  The edges that were not dragged stay anchored;
        a dragged edge stops at the frame and never comes closer than
        *min_side* to the edge opposite it.
    """

    if image_frame is None:
        min_x = min_y = -math.inf
        max_x = max_y = math.inf
    else:
        rect = clamp_rect(rect, image_frame, min_side)
        min_x, min_y = image_frame.min_x, image_frame.min_y
        max_x, max_y = image_frame.max_x, image_frame.max_y

    left, top, right, bottom = rect.min_x, rect.min_y, rect.max_x, rect.max_y
    dx, dy = float(translation.width), float(translation.height)
    resolved = _coerce_handle(handle)

    # Each dragged edge stops at the frame, and at min_side from its anchor.
    if resolved is not None and resolved.moves_left:
        left = min(max(left + dx, min_x), right - min_side)
    if resolved is not None and resolved.moves_right:
        right = max(min(right + dx, max_x), left + min_side)
    if resolved is not None and resolved.moves_top:
        top = min(max(top + dy, min_y), bottom - min_side)
    if resolved is not None and resolved.moves_bottom:
        bottom = max(min(bottom + dy, max_y), top + min_side)

    # Undragged axes of an undersized rectangle grow away from the origin.
    if right - left < min_side:
        right = left + min_side
    if bottom - top < min_side:
        bottom = top + min_side

    return Rect.from_edges(left, top, right, bottom)


def clamp_rect(rect: Rect, bounds: Rect, min_side: float = MIN_CROP_SIDE) -> Rect:
    """Keep *rect* inside *bounds* by sliding it, shrinking only when necessary.

    The size never drops below *min_side*; if *bounds* is narrower than that
    the rectangle is aligned with the far edge of the bounds.
    """

    width = max(min_side, min(rect.width, bounds.width))
    height = max(min_side, min(rect.height, bounds.height))
    x = min(max(rect.x, bounds.min_x), bounds.max_x - width)
    y = min(max(rect.y, bounds.min_y), bounds.max_y - height)
    return Rect(x, y, width, height)


def default_crop_rect(
    frame: Rect,
    min_side: float = MIN_CROP_SIDE,
    fraction: float = DEFAULT_CROP_FRACTION,
) -> Rect:
    """Return the initial centred square crop for *frame*."""

    side = min(frame.width, frame.height) * fraction
    crop = Rect(frame.mid_x - side / 2.0, frame.mid_y - side / 2.0, side, side)
    return clamp_rect(crop, frame, min_side)


def handle_position(rect: Rect, handle: CropHandle | int) -> Point:
    """Return the point at which *handle* is drawn for *rect*."""

    resolved = _coerce_handle(handle)
    if resolved is CropHandle.TOP_LEFT:
        return Point(rect.min_x, rect.min_y)
    if resolved is CropHandle.TOP_RIGHT:
        return Point(rect.max_x, rect.min_y)
    if resolved is CropHandle.BOTTOM_RIGHT:
        return Point(rect.max_x, rect.max_y)
    if resolved is CropHandle.BOTTOM_LEFT:
        return Point(rect.min_x, rect.max_y)
    if resolved is CropHandle.LEFT_MID:
        return Point(rect.min_x, rect.mid_y)
    if resolved is CropHandle.RIGHT_MID:
        return Point(rect.max_x, rect.mid_y)
    return Point()


__all__ = ["CropHandle", "clamp_rect", "default_crop_rect", "handle_position", "resize"]
