"""
Resolution of crops that overflow the image.

``CLAMP`` slides the requested rectangle back onto the image, keeping its
size where the image is large enough.  ``PAD`` keeps the requested extents
and fills whatever lies outside the image with transparent pixels.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from PIL import Image

from ..errors import DegenerateCropError, DegenerateSizeError, EmptyCropIntersectionError
from .mapping import NormalisedRect, PixelRect, to_pixel_rect

_LOGGER = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)


class OutOfBoundsPolicy(str, enum.Enum):
    """How to treat the part of a crop lying outside the image."""

    CLAMP = "clamp"
    PAD = "pad"


@dataclass(frozen=True)
class ResolvedCrop:
    """Pixel-space description of a crop ready to be materialised.

    ``target`` is the output rectangle in source pixel coordinates and may
    extend past the image under ``PAD``.  ``source`` is the part actually read
    from the image, always inside its bounds.  ``placement`` is where
    ``source`` lands on the output canvas.
    """

    target: PixelRect
    source: PixelRect
    placement: tuple[int, int]
    policy: OutOfBoundsPolicy

    @property
    def output_size(self) -> tuple[int, int]:
        return (self.target.width, self.target.height)


def _slide_into(rect: PixelRect, width: int, height: int) -> PixelRect:
    new_width = min(rect.width, width)
    new_height = min(rect.height, height)
    left = min(max(rect.left, 0), width - new_width)
    top = min(max(rect.top, 0), height - new_height)
    return PixelRect(left, top, new_width, new_height)


def resolve_pixel_rect(
    norm: NormalisedRect,
    image_size: tuple[int, int],
    policy: OutOfBoundsPolicy = OutOfBoundsPolicy.CLAMP,
) -> ResolvedCrop:
    """Resolve *norm* against an image of *image_size* under *policy*.

    Raises
    ------
    DegenerateSizeError
        If the image has no pixels.
    DegenerateCropError
        If the request rounds to zero or negative width or height.
    EmptyCropIntersectionError
        If the request does not overlap the image at all.
    """

    width, height = image_size
    if width <= 0 or height <= 0:
        raise DegenerateSizeError(f"Image has no pixels ({width}x{height})")

    requested = to_pixel_rect(norm, width, height)
    if requested.is_empty:
        raise DegenerateCropError(
            f"Crop resolves to {requested.width}x{requested.height} pixels"
        )

    overlap = requested.intersection(PixelRect(0, 0, width, height))
    if overlap.is_empty:
        raise EmptyCropIntersectionError(
            f"Crop {requested.as_box()} does not overlap the {width}x{height} image"
        )

    if OutOfBoundsPolicy(policy) is OutOfBoundsPolicy.PAD:
        placement = (overlap.left - requested.left, overlap.top - requested.top)
        return ResolvedCrop(requested, overlap, placement, OutOfBoundsPolicy.PAD)

    clamped = _slide_into(requested, width, height)
    if clamped != requested:
        _LOGGER.debug("Clamped crop %s to %s", requested.as_box(), clamped.as_box())
    return ResolvedCrop(clamped, clamped, (0, 0), OutOfBoundsPolicy.CLAMP)


def materialise(image: Image.Image, resolved: ResolvedCrop) -> Image.Image:
    """Return a new image holding the pixels described by *resolved*."""

    cropped = image.crop(resolved.source.as_box())
    if resolved.policy is OutOfBoundsPolicy.CLAMP:
        return cropped
    canvas = Image.new("RGBA", resolved.output_size, TRANSPARENT)
    canvas.paste(cropped.convert("RGBA"), resolved.placement)
    return canvas


__all__ = ["OutOfBoundsPolicy", "ResolvedCrop", "materialise", "resolve_pixel_rect"]
