"""No-op collaborators used when detection is disabled or in tests."""

from __future__ import annotations

from PIL import Image

from .base import DetectorOptions, Observation, PerspectiveCorrector, Quad, RectangleDetector


class NullRectangleDetector(RectangleDetector):
    """Detector that never finds anything."""

    def detect_all(self, image: Image.Image, options: DetectorOptions) -> list[Observation]:
        return []


class NullPerspectiveCorrector(PerspectiveCorrector):
    """Corrector that always declines, leaving the uncorrected crop."""

    def correct(self, image: Image.Image, corners: Quad) -> Image.Image | None:
        return None


__all__ = ["NullPerspectiveCorrector", "NullRectangleDetector"]
