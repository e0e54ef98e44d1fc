"""
Perspective correction with OpenCV.

Maps the four detected corners onto an axis-aligned rectangle whose size is
taken from the longer of each pair of opposing edges.
"""

from __future__ import annotations

import logging

import cv2
import numpy as np
from PIL import Image

from .base import PerspectiveCorrector, Quad

_LOGGER = logging.getLogger(__name__)


class WarpPerspectiveCorrector(PerspectiveCorrector):
    """Keystone correction via ``cv2.warpPerspective``."""

    def __init__(self, interpolation: int = cv2.INTER_CUBIC) -> None:
        self._interpolation = interpolation

    def correct(self, image: Image.Image, corners: Quad) -> Image.Image | None:
        src = np.array(
            [[point.x, point.y] for point in corners.corners()],
            dtype=np.float32,
        )
        tl, tr, br, bl = src

        max_width = int(round(max(np.linalg.norm(tr - tl), np.linalg.norm(br - bl))))
        max_height = int(round(max(np.linalg.norm(bl - tl), np.linalg.norm(br - tr))))
        if max_width <= 0 or max_height <= 0:
            _LOGGER.debug("Rejecting degenerate quad %s", src.tolist())
            return None

        dst = np.array(
            [
                [0, 0],
                [max_width - 1, 0],
                [max_width - 1, max_height - 1],
                [0, max_height - 1],
            ],
            dtype=np.float32,
        )

        mode = "RGBA" if "A" in image.getbands() else "RGB"
        pixels = np.asarray(image.convert(mode))
        try:
            matrix = cv2.getPerspectiveTransform(src, dst)
            warped = cv2.warpPerspective(
                pixels,
                matrix,
                (max_width, max_height),
                flags=self._interpolation,
            )
        except cv2.error:
            _LOGGER.warning("Perspective correction failed", exc_info=True)
            return None
        return Image.fromarray(warped)


__all__ = ["WarpPerspectiveCorrector"]
