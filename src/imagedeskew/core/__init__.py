"""Geometry and crop-processing core.

The orchestrator lives in :mod:`.process`; it is not re-exported here because
it depends on the detection package, which itself builds on these types.
"""

from .geometry import Point, Rect, Size, fit_scale, fit_size
from .viewport import ViewportModel, ViewportState, clamp_scale, display_frame
from .crop_engine import CropHandle, clamp_rect, default_crop_rect, handle_position, resize
from .mapping import NormalisedRect, PixelRect, denormalise_rect, normalise_rect, to_pixel_rect
from .bounds import OutOfBoundsPolicy, ResolvedCrop, materialise, resolve_pixel_rect
from .orientation import Orientation, image_orientation, mark_upright, rectify, upright_size
from .history import HistoryLog, Snapshot

__all__ = [
    "CropHandle",
    "HistoryLog",
    "NormalisedRect",
    "Orientation",
    "OutOfBoundsPolicy",
    "PixelRect",
    "Point",
    "Rect",
    "ResolvedCrop",
    "Size",
    "Snapshot",
    "ViewportModel",
    "ViewportState",
    "clamp_rect",
    "clamp_scale",
    "default_crop_rect",
    "denormalise_rect",
    "display_frame",
    "fit_scale",
    "fit_size",
    "handle_position",
    "image_orientation",
    "mark_upright",
    "materialise",
    "normalise_rect",
    "rectify",
    "resize",
    "resolve_pixel_rect",
    "to_pixel_rect",
    "upright_size",
]
