"""EXIF orientation handling for Pillow images."""

from __future__ import annotations

import enum
import logging

from PIL import Image, ImageOps

from ..errors import OrientationRectifyError

_LOGGER = logging.getLogger(__name__)

ORIENTATION_TAG = 0x0112


class Orientation(enum.IntEnum):
    """The eight EXIF orientations."""

    UP = 1
    UP_MIRRORED = 2
    DOWN = 3
    DOWN_MIRRORED = 4
    LEFT_MIRRORED = 5
    RIGHT = 6
    RIGHT_MIRRORED = 7
    LEFT = 8

    @property
    def swaps_axes(self) -> bool:
        """Return True when the upright image has width and height swapped."""
        return self >= Orientation.LEFT_MIRRORED


def image_orientation(image: Image.Image) -> Orientation:
    """Return the orientation tag of *image*, treating missing or bogus values as up."""

    value = image.getexif().get(ORIENTATION_TAG, Orientation.UP)
    try:
        return Orientation(int(value))
    except (TypeError, ValueError):
        _LOGGER.debug("Ignoring invalid orientation tag %r", value)
        return Orientation.UP


def upright_size(image: Image.Image) -> tuple[int, int]:
    """Return the pixel size *image* has once rectified."""

    width, height = image.size
    if image_orientation(image).swaps_axes:
        return (height, width)
    return (width, height)


def rectify(image: Image.Image) -> Image.Image:
    """Return *image* re-rendered so its buffer reads top-left to bottom-right.

    Upright images are returned unchanged.  The caller's image is never
    modified.
    """

    orientation = image_orientation(image)
    if orientation is Orientation.UP:
        return image
    try:
        upright = ImageOps.exif_transpose(image)
    except (OSError, ValueError) as exc:
        raise OrientationRectifyError(
            f"Could not rectify image with orientation {orientation.name}: {exc}"
        ) from exc
    _LOGGER.debug("Rectified %s image to %sx%s", orientation.name, *upright.size)
    return upright


def mark_upright(image: Image.Image) -> Image.Image:
    """Reset the orientation tag of *image* (owned by the caller) to up."""

    exif = image.getexif()
    if exif.get(ORIENTATION_TAG, Orientation.UP) != Orientation.UP:
        exif[ORIENTATION_TAG] = int(Orientation.UP)
        image.info["exif"] = exif.tobytes()
    return image


__all__ = [
    "ORIENTATION_TAG",
    "Orientation",
    "image_orientation",
    "mark_upright",
    "rectify",
    "upright_size",
]
