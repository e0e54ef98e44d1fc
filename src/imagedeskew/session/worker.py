"""Worker that runs the crop pipeline off the UI thread."""

from __future__ import annotations

from PIL import Image
from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

from ..core.process import CropRequest, process_crop
from ..detection import DetectorOptions, PerspectiveCorrector, RectangleDetector


class CropProcessWorkerSignals(QObject):
    """Signals exposed by :class:`CropProcessWorker`.

    The worker runs on a thread pool; keeping the signals on a separate
    ``QObject`` lets the receiving slots execute on the thread that owns it.
    """

    finished = Signal(object)
    """Emitted with the output Pillow image once the crop succeeds."""

    failed = Signal(str)
    """Emitted with a human readable message if the crop could not be applied."""


class CropProcessWorker(QRunnable):
    """Crop, deskew and re-orient an image without blocking the UI."""

    def __init__(
        self,
        image: Image.Image,
        request: CropRequest,
        *,
        detector: RectangleDetector | None = None,
        corrector: PerspectiveCorrector | None = None,
        options: DetectorOptions | None = None,
    ) -> None:
        super().__init__()
        self._image = image
        self._request = request
        self._detector = detector
        self._corrector = corrector
        self._options = options
        self.signals = CropProcessWorkerSignals()

    @property
    def request(self) -> CropRequest:
        return self._request

    def run(self) -> None:  # type: ignore[override]
        """Execute the pipeline and emit exactly one of the signals."""

        try:
            outcome = process_crop(
                self._image,
                self._request,
                detector=self._detector,
                corrector=self._corrector,
                options=self._options,
            )
        except Exception as exc:
            self.signals.failed.emit(str(exc))
            return
        self.signals.finished.emit(outcome.image)


def submit_crop(
    worker: CropProcessWorker,
    pool: QThreadPool | None = None,
) -> CropProcessWorker:
    """Queue *worker* on *pool* (the global pool by default) and return it."""

    (pool or QThreadPool.globalInstance()).start(worker)
    return worker


__all__ = ["CropProcessWorker", "CropProcessWorkerSignals", "submit_crop"]
