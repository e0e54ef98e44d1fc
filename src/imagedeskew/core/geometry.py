"""
Value types and aspect-ratio fitting for the crop pipeline.

All coordinates in this module are plain floats in whatever space the caller
works in (usually container/display units).  The types are immutable so a
rectangle captured at the start of a gesture can never be modified by the
updates that follow it.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import DegenerateSizeError


@dataclass(frozen=True)
class Point:
    """A position in a 2D coordinate space."""

    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Size:
    """Width/height pair, also used as a translation vector for pan offsets."""

    width: float = 0.0
    height: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.width <= 0.0 or self.height <= 0.0

    def scaled(self, factor: float) -> Size:
        return Size(self.width * factor, self.height * factor)

    def __add__(self, other: Size) -> Size:
        return Size(self.width + other.width, self.height + other.height)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle stored as origin and extent."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_edges(cls, left: float, top: float, right: float, bottom: float) -> Rect:
        return cls(left, top, right - left, bottom - top)

    @property
    def origin(self) -> Point:
        return Point(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def mid_x(self) -> float:
        return self.x + self.width * 0.5

    @property
    def mid_y(self) -> float:
        return self.y + self.height * 0.5

    @property
    def is_empty(self) -> bool:
        return self.width <= 0.0 or self.height <= 0.0

    def intersection(self, other: Rect) -> Rect:
        """Return the overlap of both rectangles, or an empty rect at the origin."""

        left = max(self.min_x, other.min_x)
        top = max(self.min_y, other.min_y)
        right = min(self.max_x, other.max_x)
        bottom = min(self.max_y, other.max_y)
        if right <= left or bottom <= top:
            return Rect()
        return Rect.from_edges(left, top, right, bottom)

    def contains_rect(self, other: Rect, tolerance: float = 1e-9) -> bool:
        return (
            other.min_x >= self.min_x - tolerance
            and other.min_y >= self.min_y - tolerance
            and other.max_x <= self.max_x + tolerance
            and other.max_y <= self.max_y + tolerance
        )

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


def fit_scale(image_size: Size, container_size: Size) -> float:
    """Return the factor that fits *image_size* inside *container_size*.

    Raises
    ------
    DegenerateSizeError
        If the image has a zero or negative dimension.
    """

    if image_size.is_empty:
        raise DegenerateSizeError(
            f"Cannot fit an image of size {image_size.width}x{image_size.height}"
        )
    width_ratio = container_size.width / float(image_size.width)
    height_ratio = container_size.height / float(image_size.height)
    return max(0.0, min(width_ratio, height_ratio))


def fit_size(image_size: Size, container_size: Size) -> Size:
    """Return the largest size with the image's aspect ratio inside the container."""

    return image_size.scaled(fit_scale(image_size, container_size))


__all__ = ["Point", "Rect", "Size", "fit_scale", "fit_size"]
