"""
Conversion of crop rectangles between display, normalised and pixel space.

Display space is the container the image is drawn in.  Normalised space
expresses a rectangle as fractions of the display frame, so ``(0, 0, 1, 1)``
is exactly the visible image regardless of zoom or pan.  Pixel space is the
integer grid of the upright source bitmap.  Normalised values outside
``[0, 1]`` are legal and describe crops that overflow the image.
"""

from __future__ import annotations

from dataclasses import dataclass

from .geometry import Rect


@dataclass(frozen=True)
class NormalisedRect:
    """Rectangle expressed as fractions of the display frame."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def is_inside_unit(self) -> bool:
        return self.x >= 0.0 and self.y >= 0.0 and self.right <= 1.0 and self.bottom <= 1.0


@dataclass(frozen=True)
class PixelRect:
    """Integer rectangle on the pixel grid of a bitmap."""

    left: int
    top: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def intersection(self, other: PixelRect) -> PixelRect:
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if right <= left or bottom <= top:
            return PixelRect(0, 0, 0, 0)
        return PixelRect(left, top, right - left, bottom - top)

    def as_box(self) -> tuple[int, int, int, int]:
        """Return ``(left, top, right, bottom)`` as expected by Pillow."""
        return (self.left, self.top, self.right, self.bottom)


def normalise_rect(rect: Rect, frame: Rect) -> NormalisedRect | None:
    """Express *rect* as fractions of *frame*.

    Returns ``None`` when the frame has no extent, since no mapping exists.
    """

    if frame.width <= 0.0 or frame.height <= 0.0:
        return None
    return NormalisedRect(
        (rect.min_x - frame.min_x) / frame.width,
        (rect.min_y - frame.min_y) / frame.height,
        rect.width / frame.width,
        rect.height / frame.height,
    )


def denormalise_rect(norm: NormalisedRect, frame: Rect) -> Rect:
    """Inverse of :func:`normalise_rect`."""

    return Rect(
        frame.min_x + norm.x * frame.width,
        frame.min_y + norm.y * frame.height,
        norm.width * frame.width,
        norm.height * frame.height,
    )


def to_pixel_rect(norm: NormalisedRect, width: int, height: int) -> PixelRect:
    """Map *norm* onto a ``width`` x ``height`` bitmap.

    Each edge is rounded independently so adjacent crops share their boundary
    pixels instead of drifting by accumulated size rounding.
    """

    left = int(round(norm.x * width))
    top = int(round(norm.y * height))
    right = int(round(norm.right * width))
    bottom = int(round(norm.bottom * height))
    return PixelRect(left, top, right - left, bottom - top)


__all__ = [
    "NormalisedRect",
    "PixelRect",
    "denormalise_rect",
    "normalise_rect",
    "to_pixel_rect",
]
