"""
Contour based rectangle detection with OpenCV.

Looks for convex quadrilaterals in an edge map and a threshold map of the
image, scores them by how rectangular they are and keeps those that satisfy
the :class:`DetectorOptions` constraints:

- aspect ratio (short side / long side) within the configured range
- short side at least ``minimum_size`` of the smaller image dimension
- confidence at least ``minimum_confidence``
"""

from __future__ import annotations

import logging

import cv2
import numpy as np
from PIL import Image

from ..core.geometry import Point
from .base import DetectorOptions, Observation, Quad, RectangleDetector

_LOGGER = logging.getLogger(__name__)

# Replicated border added before edge detection so documents touching the
# crop edge still produce a closed contour.
BORDER_SIZE = 5
# Images whose grey levels vary less than this carry no edges worth scanning.
FLAT_IMAGE_STDDEV = 1.0
APPROX_EPSILONS = (0.02, 0.03, 0.04)


def order_points(pts: np.ndarray) -> np.ndarray:
    """
    Order points: top-left, top-right, bottom-right, bottom-left

    - Top-left: smallest sum (x+y)
    - Bottom-right: largest sum (x+y)
    - Top-right: smallest difference (y-x)
    - Bottom-left: largest difference (y-x)
    """
    pts = pts.reshape(4, 2).astype(np.float32)
    rect = np.zeros((4, 2), dtype=np.float32)

    s = pts.sum(axis=1)
    diff = np.diff(pts, axis=1).flatten()

    rect[0] = pts[np.argmin(s)]
    rect[2] = pts[np.argmax(s)]
    rect[1] = pts[np.argmin(diff)]
    rect[3] = pts[np.argmax(diff)]
    return rect


def _corner_cosines(corners: np.ndarray) -> list[float]:
    """Return |cos| of the interior angle at each corner (0 for right angles)."""
    cosines = []
    for index in range(4):
        current = corners[index]
        a = corners[index - 1] - current
        b = corners[(index + 1) % 4] - current
        denom = float(np.linalg.norm(a) * np.linalg.norm(b))
        if denom <= 1e-6:
            return [1.0] * 4
        cosines.append(abs(float(np.dot(a, b)) / denom))
    return cosines


class ContourRectangleDetector(RectangleDetector):
    """Rectangle detector built on Canny edges, Otsu thresholding and contours."""

    def __init__(
        self,
        *,
        canny_low: int = 50,
        canny_high: int = 150,
        blur_kernel: int = 5,
    ) -> None:
        self._canny_low = int(canny_low)
        self._canny_high = int(canny_high)
        self._blur_kernel = int(blur_kernel) | 1

    def detect_all(self, image: Image.Image, options: DetectorOptions) -> list[Observation]:
        gray = np.asarray(image.convert("L"), dtype=np.uint8)
        height, width = gray.shape[:2]
        if width < 3 or height < 3 or options.maximum_observations <= 0:
            return []
        if float(gray.std()) < FLAT_IMAGE_STDDEV:
            _LOGGER.debug("Skipping detection on flat %sx%s image", width, height)
            return []

        padded = cv2.copyMakeBorder(
            gray, BORDER_SIZE, BORDER_SIZE, BORDER_SIZE, BORDER_SIZE, cv2.BORDER_REPLICATE
        )
        scored: list[tuple[Observation, np.ndarray]] = []
        for edges in self._edge_maps(padded):
            for epsilon in APPROX_EPSILONS:
                scored.extend(self._candidates(edges, epsilon, width, height, options))

        scored.sort(key=lambda item: item[0].confidence, reverse=True)
        tolerance = 0.02 * min(width, height)
        kept: list[tuple[Observation, np.ndarray]] = []
        for observation, corners in scored:
            if any(np.max(np.abs(corners - other)) <= tolerance for _, other in kept):
                continue
            kept.append((observation, corners))
            if len(kept) >= options.maximum_observations:
                break

        _LOGGER.debug(
            "Detected %d rectangle(s) in %sx%s image (%d candidates)",
            len(kept),
            width,
            height,
            len(scored),
        )
        return [observation for observation, _ in kept]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _edge_maps(self, gray: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        blurred = cv2.GaussianBlur(gray, (self._blur_kernel, self._blur_kernel), 0)
        kernel = cv2.getStructuringElement(cv2.MORPH_RECT, (3, 3))
        edges = cv2.Canny(blurred, self._canny_low, self._canny_high)
        edges = cv2.morphologyEx(edges, cv2.MORPH_CLOSE, kernel)
        _, binary = cv2.threshold(blurred, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)
        return edges, binary

    def _candidates(
        self,
        edges: np.ndarray,
        epsilon: float,
        width: int,
        height: int,
        options: DetectorOptions,
    ) -> list[tuple[Observation, np.ndarray]]:
        contours, _ = cv2.findContours(edges, cv2.RETR_LIST, cv2.CHAIN_APPROX_SIMPLE)
        min_perimeter = 4.0 * options.minimum_size * min(width, height)
        found = []
        for contour in contours:
            perimeter = cv2.arcLength(contour, True)
            if perimeter < min_perimeter:
                continue
            approx = cv2.approxPolyDP(contour, epsilon * perimeter, True)
            if len(approx) != 4 or not cv2.isContourConvex(approx):
                continue
            corners = order_points(approx.astype(np.float32) - BORDER_SIZE)
            corners[:, 0] = np.clip(corners[:, 0], 0.0, float(width))
            corners[:, 1] = np.clip(corners[:, 1], 0.0, float(height))
            observation = self._score(corners, contour, width, height, options)
            if observation is not None:
                found.append((observation, corners))
        return found

    @staticmethod
    def _score(
        corners: np.ndarray,
        contour: np.ndarray,
        width: int,
        height: int,
        options: DetectorOptions,
    ) -> Observation | None:
        tl, tr, br, bl = corners
        avg_width = (np.linalg.norm(tr - tl) + np.linalg.norm(br - bl)) / 2.0
        avg_height = (np.linalg.norm(bl - tl) + np.linalg.norm(br - tr)) / 2.0
        short_side, long_side = sorted((float(avg_width), float(avg_height)))
        if long_side <= 0.0:
            return None

        aspect = short_side / long_side
        if not options.minimum_aspect_ratio - 1e-6 <= aspect <= options.maximum_aspect_ratio + 1e-6:
            return None
        if short_side < options.minimum_size * min(width, height):
            return None

        # Fill: how much of the quadrilateral hull the traced contour covers.
        hull_area = float(cv2.contourArea(corners))
        if hull_area <= 0.0:
            return None
        fill = min(1.0, float(cv2.contourArea(contour)) / hull_area)
        squareness = 1.0 - sum(_corner_cosines(corners)) / 4.0
        confidence = max(0.0, min(1.0, 0.6 * squareness + 0.4 * fill))
        if confidence < options.minimum_confidence:
            return None

        # Report corners in the normalised, bottom-left origin convention.
        points = [Point(float(x) / width, 1.0 - float(y) / height) for x, y in corners]
        return Observation(Quad(*points), confidence)


__all__ = ["ContourRectangleDetector", "order_points"]
