"""
Viewport state for the pannable, zoomable image preview.

Gesture updates are always computed from the value captured when the gesture
started (``begin_*``) plus the cumulative translation or magnification reported
since then.  Chaining per-event deltas would drift whenever the gesture system
drops or coalesces events, so the model never does that.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..config import MAX_VIEWPORT_SCALE, MIN_VIEWPORT_SCALE
from .geometry import Rect, Size, fit_size


def clamp_scale(value: float) -> float:
    """Clamp *value* into the supported zoom range."""
    return max(MIN_VIEWPORT_SCALE, min(MAX_VIEWPORT_SCALE, float(value)))


def display_frame(
    image_size: Size,
    container_size: Size,
    scale: float = 1.0,
    offset: Size = Size(),
) -> Rect:
    """Return the rectangle the image occupies inside the container.

    The image is fitted to the container, scaled by the user zoom, centred and
    finally translated by the pan offset.
    """

    shown = fit_size(image_size, container_size).scaled(scale)
    return Rect(
        (container_size.width - shown.width) / 2.0 + offset.width,
        (container_size.height - shown.height) / 2.0 + offset.height,
        shown.width,
        shown.height,
    )


@dataclass(frozen=True)
class ViewportState:
    """User-controlled zoom factor and pan offset."""

    scale: float = 1.0
    offset: Size = Size()


class ViewportModel:
    """Applies pan and pinch gestures relative to their starting values."""

    def __init__(self, state: ViewportState | None = None) -> None:
        self._state = state or ViewportState()
        self._base_scale = self._state.scale
        self._base_offset = self._state.offset

    @property
    def state(self) -> ViewportState:
        return self._state

    @property
    def scale(self) -> float:
        return self._state.scale

    @property
    def offset(self) -> Size:
        return self._state.offset

    # ------------------------------------------------------------------
    # Pan
    # ------------------------------------------------------------------
    def begin_pan(self) -> None:
        self._base_offset = self._state.offset

    def update_pan(self, translation: Size) -> ViewportState:
        """Move the image by the cumulative *translation* since :meth:`begin_pan`."""

        self._state = replace(self._state, offset=self._base_offset + translation)
        return self._state

    def end_pan(self) -> None:
        self._base_offset = self._state.offset

    # ------------------------------------------------------------------
    # Zoom
    # ------------------------------------------------------------------
    def begin_zoom(self) -> None:
        self._base_scale = self._state.scale

    def update_zoom(self, magnification: float) -> ViewportState:
        """Scale by the cumulative *magnification* since :meth:`begin_zoom`."""

        self._state = replace(self._state, scale=clamp_scale(self._base_scale * magnification))
        return self._state

    def end_zoom(self) -> None:
        self._base_scale = self._state.scale

    def restore(self, state: ViewportState) -> None:
        """Replace the state (undo/redo) and re-anchor both gesture bases."""

        self._state = replace(state, scale=clamp_scale(state.scale))
        self._base_scale = self._state.scale
        self._base_offset = self._state.offset


__all__ = ["ViewportModel", "ViewportState", "clamp_scale", "display_frame"]
