"""
Rectangle detection and perspective correction collaborators.

The OpenCV-backed implementations live in :mod:`.contour_detector` and
:mod:`.warp_corrector`; they are imported on demand so the geometry core can
be used without loading OpenCV.
"""

from .base import DetectorOptions, Observation, PerspectiveCorrector, Quad, RectangleDetector
from .null import NullPerspectiveCorrector, NullRectangleDetector


def default_detector() -> RectangleDetector:
    """Return the OpenCV contour detector."""
    from .contour_detector import ContourRectangleDetector

    return ContourRectangleDetector()


def default_corrector() -> PerspectiveCorrector:
    """Return the OpenCV perspective corrector."""
    from .warp_corrector import WarpPerspectiveCorrector

    return WarpPerspectiveCorrector()


__all__ = [
    "DetectorOptions",
    "NullPerspectiveCorrector",
    "NullRectangleDetector",
    "Observation",
    "PerspectiveCorrector",
    "Quad",
    "RectangleDetector",
    "default_corrector",
    "default_detector",
]
