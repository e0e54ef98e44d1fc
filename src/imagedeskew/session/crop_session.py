"""
Interactive crop session.

Owns the viewport, the crop rectangle and the undo history for one editing
session and exposes them through discrete gesture commands.  Every
continuous gesture follows the same protocol:

- ``begin_*`` captures the base value
- ``update_*`` receives the *cumulative* translation or magnification since
  ``begin_*`` and recomputes the state from the base
- ``end_*`` commits a history snapshot

The session is not thread-safe; it belongs to the interactive thread.
"""

from __future__ import annotations

import logging

from PIL import Image

from ..config import HISTORY_LIMIT, MIN_CROP_SIDE
from ..core.bounds import OutOfBoundsPolicy
from ..core.crop_engine import CropHandle, clamp_rect, default_crop_rect, resize
from ..core.geometry import Rect, Size
from ..core.history import HistoryLog, Snapshot
from ..core.process import CropRequest, process
from ..core.viewport import ViewportModel, ViewportState, display_frame
from ..detection import DetectorOptions, PerspectiveCorrector, RectangleDetector

_LOGGER = logging.getLogger(__name__)


class CropSession:
    """View-model state for cropping a single image."""

    def __init__(
        self,
        image_size: Size,
        *,
        min_side: float = MIN_CROP_SIDE,
        policy: OutOfBoundsPolicy = OutOfBoundsPolicy.CLAMP,
        history_limit: int | None = HISTORY_LIMIT,
    ) -> None:
        # An unknown image size is treated as a unit square so the fit
        # calculation stays defined until the real size arrives.
        self._image_size = Size(1.0, 1.0) if image_size.is_empty else image_size
        self._min_side = float(min_side)
        self._policy = OutOfBoundsPolicy(policy)
        self._viewport = ViewportModel()
        self._history = HistoryLog(history_limit)
        self._container_size: Size | None = None
        self._crop_rect: Rect | None = None
        self._base_crop_rect: Rect | None = None
        self._active_handle: CropHandle | None = None

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------
    @property
    def is_ready(self) -> bool:
        """True once a container size is known and the crop exists."""
        return self._crop_rect is not None

    @property
    def image_size(self) -> Size:
        return self._image_size

    @property
    def container_size(self) -> Size | None:
        return self._container_size

    @property
    def scale(self) -> float:
        return self._viewport.scale

    @property
    def offset(self) -> Size:
        return self._viewport.offset

    @property
    def crop_rect(self) -> Rect | None:
        return self._crop_rect

    @property
    def policy(self) -> OutOfBoundsPolicy:
        return self._policy

    @property
    def history(self) -> HistoryLog:
        return self._history

    @property
    def is_dragging_handle(self) -> bool:
        return self._active_handle is not None

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def display_frame(self) -> Rect | None:
        """Return the frame the image currently occupies, if the container is known."""

        if self._container_size is None:
            return None
        return display_frame(
            self._image_size,
            self._container_size,
            self._viewport.scale,
            self._viewport.offset,
        )

    def snapshot(self) -> Snapshot | None:
        if self._crop_rect is None:
            return None
        return Snapshot(self._viewport.scale, self._viewport.offset, self._crop_rect)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def set_container_size(self, size: Size) -> None:
        """Record the container size, creating the initial crop on first layout."""

        if size.is_empty:
            _LOGGER.debug("Ignoring empty container size %s", size)
            return
        self._container_size = size
        if self._crop_rect is not None:
            return
        frame = self.display_frame()
        assert frame is not None
        self._crop_rect = default_crop_rect(frame, self._min_side)
        self._commit()

    # ------------------------------------------------------------------
    # Pan / zoom
    # ------------------------------------------------------------------
    def begin_pan(self) -> None:
        self._viewport.begin_pan()

    def update_pan(self, translation: Size) -> None:
        """Offset the image by the cumulative *translation* of the current pan."""
        self._viewport.update_pan(translation)

    def end_pan(self) -> None:
        self._viewport.end_pan()
        self._commit()

    def begin_zoom(self) -> None:
        self._viewport.begin_zoom()

    def update_zoom(self, magnification: float) -> None:
        """Scale the image by the cumulative *magnification* of the current pinch."""
        self._viewport.update_zoom(magnification)

    def end_zoom(self) -> None:
        self._viewport.end_zoom()
        self._commit()

    # ------------------------------------------------------------------
    # Handle drags
    # ------------------------------------------------------------------
    def begin_drag(self, handle: CropHandle | int) -> bool:
        """Anchor the crop rectangle for a drag of *handle*.

        Returns False if the session is not ready or the handle is unknown.
        """

        if self._crop_rect is None:
            _LOGGER.debug("Ignoring drag before the container size is known")
            return False
        try:
            self._active_handle = CropHandle(int(handle))
        except (TypeError, ValueError):
            _LOGGER.debug("Ignoring drag of unknown handle %r", handle)
            return False
        self._base_crop_rect = self._constrain(self._crop_rect)
        self._commit()
        return True

    def update_drag(self, translation: Size) -> Rect | None:
        """Resize the anchored crop by the cumulative drag *translation*."""

        if self._active_handle is None or self._base_crop_rect is None:
            return self._crop_rect
        proposed = resize(
            self._base_crop_rect,
            self._active_handle,
            translation,
            self._drag_bounds(),
            self._min_side,
        )
        self._crop_rect = self._constrain(proposed)
        return self._crop_rect

    def end_drag(self) -> None:
        if self._active_handle is None:
            return
        self._active_handle = None
        self._base_crop_rect = None
        self._commit()

    # ------------------------------------------------------------------
    # Undo / redo
    # ------------------------------------------------------------------
    def undo(self) -> bool:
        snapshot = self._history.undo()
        if snapshot is None:
            return False
        self._apply(snapshot)
        return True

    def redo(self) -> bool:
        snapshot = self._history.redo()
        if snapshot is None:
            return False
        self._apply(snapshot)
        return True

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------
    def crop_request(self) -> CropRequest | None:
        """Return the request describing the current selection."""

        if self._crop_rect is None or self._container_size is None:
            return None
        return CropRequest(
            self._container_size,
            self._crop_rect,
            self._viewport.scale,
            self._viewport.offset,
            self._policy,
        )

    def process(
        self,
        image: Image.Image,
        *,
        detector: RectangleDetector | None = None,
        corrector: PerspectiveCorrector | None = None,
        options: DetectorOptions | None = None,
    ) -> Image.Image | None:
        """Crop and deskew *image* with the current session state."""

        request = self.crop_request()
        if request is None:
            return None
        return process(
            image,
            request.display_size,
            request.scale,
            request.offset,
            request.crop_rect,
            request.policy,
            detector=detector,
            corrector=corrector,
            options=options,
        )

    # ------------------------------------------------------------------
    # Internal utilities
    # ------------------------------------------------------------------
    def _commit(self) -> None:
        """Push the current state unless it matches the latest entry."""

        snapshot = self.snapshot()
        if snapshot is None or snapshot == self._history.current:
            return
        self._history.push(snapshot)

    def _drag_bounds(self) -> Rect | None:
        """Return the frame drags are confined to, or None under the pad policy."""

        if self._policy is OutOfBoundsPolicy.PAD:
            return None
        return self.display_frame()

    def _constrain(self, rect: Rect) -> Rect:
        bounds = self._drag_bounds()
        if bounds is None:
            return rect
        return clamp_rect(rect, bounds, self._min_side)

    def _apply(self, snapshot: Snapshot) -> None:
        self._viewport.restore(ViewportState(snapshot.scale, snapshot.offset))
        self._crop_rect = snapshot.crop_rect
        self._base_crop_rect = None
        self._active_handle = None


__all__ = ["CropSession"]
