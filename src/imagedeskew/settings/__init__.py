"""Processing settings for ImageDeskew."""

from .loader import ProcessingSettings, load_settings
from .schema import DEFAULT_SETTINGS, SETTINGS_SCHEMA, merge_with_defaults, validate_settings

__all__ = [
    "DEFAULT_SETTINGS",
    "ProcessingSettings",
    "SETTINGS_SCHEMA",
    "load_settings",
    "merge_with_defaults",
    "validate_settings",
]
