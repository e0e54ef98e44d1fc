"""Load processing settings from a JSON file."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jsonschema import ValidationError

from ..core.bounds import OutOfBoundsPolicy
from ..detection import DetectorOptions
from ..errors import SettingsLoadError, SettingsValidationError
from .schema import DEFAULT_SETTINGS, merge_with_defaults

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessingSettings:
    """Typed view of a validated settings document."""

    policy: OutOfBoundsPolicy = OutOfBoundsPolicy.CLAMP
    min_side: float = DEFAULT_SETTINGS["crop"]["min_side"]
    detect: bool = True
    detector_options: DetectorOptions = field(default_factory=DetectorOptions)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> ProcessingSettings:
        crop = data["crop"]
        detection = dict(data["detection"])
        enabled = bool(detection.pop("enabled", True))
        if detection["minimum_aspect_ratio"] > detection["maximum_aspect_ratio"]:
            raise SettingsValidationError(
                "detection.minimum_aspect_ratio exceeds detection.maximum_aspect_ratio"
            )
        return cls(
            policy=OutOfBoundsPolicy(crop["policy"]),
            min_side=float(crop["min_side"]),
            detect=enabled,
            detector_options=DetectorOptions(**detection),
        )


def load_settings(path: Path | None = None) -> ProcessingSettings:
    """Return the settings stored at *path*, or the defaults when *path* is ``None``.

    Raises
    ------
    SettingsLoadError
        If the file cannot be read or is not valid JSON.
    SettingsValidationError
        If the document does not satisfy the settings schema.
    """

    payload: dict[str, Any] | None = None
    if path is not None:
        try:
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise SettingsLoadError(f"Could not read settings from {path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise SettingsLoadError(f"Settings file {path} must contain a JSON object")
        _LOGGER.debug("Loaded settings from %s", path)
    try:
        merged = merge_with_defaults(payload)
    except ValidationError as exc:
        raise SettingsValidationError(exc.message) from exc
    return ProcessingSettings.from_mapping(merged)


__all__ = ["ProcessingSettings", "load_settings"]
