"""Custom exception hierarchy for ImageDeskew."""

from __future__ import annotations


class ImageDeskewError(Exception):
    """Base class for all custom errors raised by ImageDeskew."""


# --- Geometry errors ---

class GeometryError(ImageDeskewError):
    """Base class for failures while mapping a crop into pixel space."""


class DegenerateFrameError(GeometryError):
    """Raised when the display frame has zero width or height."""


class DegenerateSizeError(GeometryError):
    """Raised when an image or container size has a non-positive dimension."""


class EmptyCropIntersectionError(GeometryError):
    """Raised when the crop rectangle does not overlap the image at all."""


class DegenerateCropError(GeometryError):
    """Raised when a crop request resolves to zero or negative pixel extent."""


# --- Image errors ---

class OrientationRectifyError(ImageDeskewError):
    """Raised when an image cannot be re-rendered in upright orientation."""


class ImageLoadError(ImageDeskewError):
    """Raised when an image file cannot be decoded."""


# --- Settings errors ---

class SettingsError(ImageDeskewError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""
