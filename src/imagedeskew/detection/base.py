"""
Capability interfaces for rectangle detection and perspective correction.

Both services are best-effort collaborators of the crop pipeline: a detector
that finds nothing or a corrector that fails simply leaves the plain crop in
place.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from PIL import Image

from ..config import (
    DETECTOR_MAX_ASPECT_RATIO,
    DETECTOR_MAX_OBSERVATIONS,
    DETECTOR_MIN_ASPECT_RATIO,
    DETECTOR_MIN_CONFIDENCE,
    DETECTOR_MIN_SIZE,
)
from ..core.geometry import Point


@dataclass(frozen=True)
class DetectorOptions:
    """Constraints a detected rectangle has to satisfy."""

    minimum_aspect_ratio: float = DETECTOR_MIN_ASPECT_RATIO
    maximum_aspect_ratio: float = DETECTOR_MAX_ASPECT_RATIO
    minimum_size: float = DETECTOR_MIN_SIZE
    minimum_confidence: float = DETECTOR_MIN_CONFIDENCE
    maximum_observations: int = DETECTOR_MAX_OBSERVATIONS


@dataclass(frozen=True)
class Quad:
    """Four corners of a detected rectangle.

    Detectors report corners normalised to ``[0, 1]`` with the origin at the
    bottom-left.  :meth:`to_pixels` converts them into the top-left origin
    pixel space perspective correctors work in.
    """

    top_left: Point
    top_right: Point
    bottom_right: Point
    bottom_left: Point

    def corners(self) -> tuple[Point, Point, Point, Point]:
        return (self.top_left, self.top_right, self.bottom_right, self.bottom_left)

    def to_pixels(self, width: int, height: int) -> Quad:
        """Denormalise onto a ``width`` x ``height`` bitmap, flipping the y axis."""

        def convert(point: Point) -> Point:
            return Point(point.x * width, (1.0 - point.y) * height)

        return Quad(
            convert(self.top_left),
            convert(self.top_right),
            convert(self.bottom_right),
            convert(self.bottom_left),
        )


@dataclass(frozen=True)
class Observation:
    """A detected rectangle and the detector's confidence in it."""

    quad: Quad
    confidence: float


class RectangleDetector(ABC):
    """Finds document-like rectangles in an image."""

    @abstractmethod
    def detect_all(self, image: Image.Image, options: DetectorOptions) -> list[Observation]:
        """Return at most ``options.maximum_observations`` results, best first."""

    def detect(self, image: Image.Image, options: DetectorOptions | None = None) -> Quad | None:
        """Return the best rectangle in *image*, or ``None``."""

        observations = self.detect_all(image, options or DetectorOptions())
        if not observations:
            return None
        return observations[0].quad


class PerspectiveCorrector(ABC):
    """Warps a quadrilateral region of an image onto a rectangle."""

    @abstractmethod
    def correct(self, image: Image.Image, corners: Quad) -> Image.Image | None:
        """Return the rectified image, or ``None`` on failure.

        Parameters
        ----------
        image:
            The bitmap containing the quadrilateral.
        corners:
            Corners in pixel coordinates of *image*, origin top-left.
        """


__all__ = [
    "DetectorOptions",
    "Observation",
    "PerspectiveCorrector",
    "Quad",
    "RectangleDetector",
]
