"""Helpers for reading and writing Pillow images."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from ..errors import ImageLoadError

_LOGGER = logging.getLogger(__name__)

# Formats that cannot store an alpha channel.
_OPAQUE_FORMATS = {".jpg", ".jpeg", ".bmp"}


def load_image(source: Path) -> Image.Image:
    """Return the decoded image at *source* with its EXIF orientation intact.

    Orientation is left for :func:`imagedeskew.core.orientation.rectify` to
    apply so display and pixel geometry are derived from the same buffer.
    """

    try:
        with Image.open(source) as handle:
            handle.load()
            image = handle.copy()
    except (OSError, UnidentifiedImageError) as exc:
        raise ImageLoadError(f"Could not load image {source}: {exc}") from exc
    _LOGGER.debug("Loaded %s (%sx%s, %s)", source, image.width, image.height, image.mode)
    return image


def save_image(image: Image.Image, target: Path) -> Path:
    """Write *image* to *target*, flattening alpha for opaque formats."""

    target = Path(target)
    target.parent.mkdir(parents=True, exist_ok=True)
    suffix = target.suffix.lower()
    if suffix in _OPAQUE_FORMATS and image.mode not in {"RGB", "L"}:
        if image.mode in {"RGBA", "LA"}:
            _LOGGER.warning("Discarding transparency while saving %s", target)
        image = image.convert("RGB")
    params = {}
    exif = image.info.get("exif")
    if exif and suffix in {".jpg", ".jpeg", ".png", ".webp", ".tif", ".tiff"}:
        params["exif"] = exif
    try:
        image.save(target, **params)
    except (OSError, ValueError) as exc:
        raise ImageLoadError(f"Could not write image {target}: {exc}") from exc
    return target


__all__ = ["load_image", "save_image"]
