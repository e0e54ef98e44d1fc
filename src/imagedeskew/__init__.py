"""ImageDeskew: crop photographed documents and straighten their perspective."""

from __future__ import annotations

from .core.geometry import Point, Rect, Size
from .core.bounds import OutOfBoundsPolicy
from .core.crop_engine import CropHandle
from .core.process import CropOutcome, CropRequest, process, process_crop
from .errors import ImageDeskewError
from .session import CropSession

__version__ = "0.1.0"

__all__ = [
    "CropHandle",
    "CropOutcome",
    "CropRequest",
    "CropSession",
    "ImageDeskewError",
    "OutOfBoundsPolicy",
    "Point",
    "Rect",
    "Size",
    "process",
    "process_crop",
]
