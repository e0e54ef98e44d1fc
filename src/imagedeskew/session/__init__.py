"""Interactive crop session and its background worker.

The worker depends on PySide6 and is imported from :mod:`.worker` directly.
"""

from .crop_session import CropSession

__all__ = ["CropSession"]
