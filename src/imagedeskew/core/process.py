"""
Crop orchestration: display-space crop in, corrected upright image out.

Pipeline:
1. Rectify the source orientation
2. Derive the display frame from the upright size and the viewport state
3. Map the crop to pixels and materialise it under the out-of-bounds policy
4. Detect a document rectangle inside the crop
5. Perspective-correct onto that rectangle (if one was found)
6. Tag the result as upright

Steps 4 and 5 are best-effort: any failure there keeps the plain crop.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from PIL import Image

from ..detection import (
    DetectorOptions,
    PerspectiveCorrector,
    Quad,
    RectangleDetector,
    default_corrector,
    default_detector,
)
from ..errors import DegenerateFrameError, GeometryError, OrientationRectifyError
from .bounds import OutOfBoundsPolicy, ResolvedCrop, materialise, resolve_pixel_rect
from .geometry import Rect, Size
from .mapping import NormalisedRect, normalise_rect
from .orientation import mark_upright, rectify
from .viewport import display_frame

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CropRequest:
    """Everything the pipeline needs to know about the on-screen selection."""

    display_size: Size
    crop_rect: Rect
    scale: float = 1.0
    offset: Size = Size()
    policy: OutOfBoundsPolicy = OutOfBoundsPolicy.CLAMP


@dataclass
class CropOutcome:
    """Result of :func:`process_crop` together with its intermediate values."""

    image: Image.Image
    frame: Rect
    normalised: NormalisedRect
    resolved: ResolvedCrop
    quad: Quad | None = None
    corrected: bool = False
    pixel_corners: Quad | None = field(default=None, repr=False)


def _detect(
    detector: RectangleDetector,
    image: Image.Image,
    options: DetectorOptions,
) -> Quad | None:
    try:
        return detector.detect(image, options)
    except Exception:
        _LOGGER.exception("Rectangle detection failed, keeping the plain crop")
        return None


def _correct(
    corrector: PerspectiveCorrector,
    image: Image.Image,
    corners: Quad,
) -> Image.Image | None:
    try:
        return corrector.correct(image, corners)
    except Exception:
        _LOGGER.exception("Perspective correction failed, keeping the plain crop")
        return None


def process_crop(
    image: Image.Image,
    request: CropRequest,
    *,
    detector: RectangleDetector | None = None,
    corrector: PerspectiveCorrector | None = None,
    options: DetectorOptions | None = None,
) -> CropOutcome:
    """Run the full crop pipeline for *request* on *image*.

    Raises
    ------
    GeometryError
        If the crop cannot be mapped onto the image.
    OrientationRectifyError
        If the source cannot be rendered upright.
    """

    upright = rectify(image)
    width, height = upright.size
    frame = display_frame(
        Size(float(width), float(height)),
        request.display_size,
        request.scale,
        request.offset,
    )
    norm = normalise_rect(request.crop_rect, frame)
    if norm is None:
        raise DegenerateFrameError(
            f"Display frame {frame.width}x{frame.height} has no extent"
        )

    resolved = resolve_pixel_rect(norm, (width, height), request.policy)
    _LOGGER.debug(
        "Crop %s in frame %s -> normalised %s -> pixels %s (%s)",
        request.crop_rect.as_tuple(),
        frame.as_tuple(),
        norm,
        resolved.target.as_box(),
        resolved.policy.value,
    )
    cropped = materialise(upright, resolved)

    detector = detector if detector is not None else default_detector()
    quad = _detect(detector, cropped, options or DetectorOptions())
    outcome = CropOutcome(cropped, frame, norm, resolved, quad=quad)
    if quad is None:
        _LOGGER.debug("No rectangle detected, returning the plain crop")
    else:
        corners = quad.to_pixels(cropped.width, cropped.height)
        _LOGGER.debug("Detected corners (pixels of crop): %s", corners)
        outcome.pixel_corners = corners
        corrector = corrector if corrector is not None else default_corrector()
        warped = _correct(corrector, cropped, corners)
        if warped is not None:
            outcome.image = warped
            outcome.corrected = True

    outcome.image = mark_upright(outcome.image)
    return outcome


def process(
    image: Image.Image,
    display_size: Size,
    scale: float,
    offset: Size,
    crop_rect: Rect,
    policy: OutOfBoundsPolicy = OutOfBoundsPolicy.CLAMP,
    *,
    detector: RectangleDetector | None = None,
    corrector: PerspectiveCorrector | None = None,
    options: DetectorOptions | None = None,
) -> Image.Image | None:
    """Return the cropped and deskewed image, or ``None`` if the crop failed."""

    request = CropRequest(display_size, crop_rect, scale, offset, OutOfBoundsPolicy(policy))
    try:
        outcome = process_crop(
            image,
            request,
            detector=detector,
            corrector=corrector,
            options=options,
        )
    except (GeometryError, OrientationRectifyError) as exc:
        _LOGGER.warning("Crop could not be applied: %s", exc)
        return None
    return outcome.image


__all__ = ["CropOutcome", "CropRequest", "process", "process_crop"]
