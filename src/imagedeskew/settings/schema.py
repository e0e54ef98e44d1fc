"""Schema helpers for the processing settings file."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import (
    DETECTOR_MAX_ASPECT_RATIO,
    DETECTOR_MAX_OBSERVATIONS,
    DETECTOR_MIN_ASPECT_RATIO,
    DETECTOR_MIN_CONFIDENCE,
    DETECTOR_MIN_SIZE,
    MIN_CROP_SIDE,
)

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "imagedeskew/settings.schema.json",
    "type": "object",
    "required": ["schema", "crop", "detection"],
    "properties": {
        "schema": {"const": "imagedeskew/settings@1"},
        "crop": {
            "type": "object",
            "properties": {
                "policy": {"type": "string", "enum": ["clamp", "pad"]},
                "min_side": {"type": "number", "exclusiveMinimum": 0},
            },
            "additionalProperties": False,
        },
        "detection": {
            "type": "object",
            "properties": {
                "enabled": {"type": "boolean"},
                "minimum_aspect_ratio": {"type": "number", "minimum": 0, "maximum": 1},
                "maximum_aspect_ratio": {"type": "number", "minimum": 0, "maximum": 1},
                "minimum_size": {"type": "number", "minimum": 0, "maximum": 1},
                "minimum_confidence": {"type": "number", "minimum": 0, "maximum": 1},
                "maximum_observations": {"type": "integer", "minimum": 1},
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "imagedeskew/settings@1",
    "crop": {
        "policy": "clamp",
        "min_side": MIN_CROP_SIDE,
    },
    "detection": {
        "enabled": True,
        "minimum_aspect_ratio": DETECTOR_MIN_ASPECT_RATIO,
        "maximum_aspect_ratio": DETECTOR_MAX_ASPECT_RATIO,
        "minimum_size": DETECTOR_MIN_SIZE,
        "minimum_confidence": DETECTOR_MIN_CONFIDENCE,
        "maximum_observations": DETECTOR_MAX_OBSERVATIONS,
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key in {"crop", "detection"} and isinstance(value, dict):
                target = merged.setdefault(key, {})
                for sub_key, sub_value in value.items():
                    target[sub_key] = sub_value
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults", "validate_settings"]
