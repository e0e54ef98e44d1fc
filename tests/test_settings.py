import json
from copy import deepcopy
from pathlib import Path

import pytest

from imagedeskew.core.bounds import OutOfBoundsPolicy
from imagedeskew.detection import DetectorOptions
from imagedeskew.errors import SettingsLoadError, SettingsValidationError
from imagedeskew.settings import (
    DEFAULT_SETTINGS,
    ProcessingSettings,
    load_settings,
    merge_with_defaults,
    validate_settings,
)


def _write(tmp_path, payload) -> Path:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_defaults_without_file():
    settings = load_settings()

    assert settings == ProcessingSettings()
    assert settings.policy is OutOfBoundsPolicy.CLAMP
    assert settings.min_side == 40
    assert settings.detect
    assert settings.detector_options == DetectorOptions()


def test_file_values_override_defaults(tmp_path):
    path = _write(
        tmp_path,
        {
            "crop": {"policy": "pad", "min_side": 24},
            "detection": {"enabled": False, "minimum_confidence": 0.8},
        },
    )

    settings = load_settings(path)

    assert settings.policy is OutOfBoundsPolicy.PAD
    assert settings.min_side == 24
    assert not settings.detect
    assert settings.detector_options.minimum_confidence == pytest.approx(0.8)
    assert settings.detector_options.minimum_size == DetectorOptions().minimum_size


@pytest.mark.parametrize(
    "payload",
    [
        {"detection": {"minimum_confidence": 1.5}},
        {"detection": {"maximum_observations": 0}},
        {"crop": {"policy": "stretch"}},
        {"crop": {"min_side": 0}},
        {"crop": {"unknown": True}},
        {"schema": "imagedeskew/settings@0"},
    ],
)
def test_invalid_values_are_rejected(tmp_path, payload):
    with pytest.raises(SettingsValidationError):
        load_settings(_write(tmp_path, payload))


def test_inverted_aspect_range_is_rejected(tmp_path):
    path = _write(
        tmp_path,
        {"detection": {"minimum_aspect_ratio": 0.9, "maximum_aspect_ratio": 0.5}},
    )

    with pytest.raises(SettingsValidationError):
        load_settings(path)


def test_malformed_json_raises_load_error(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SettingsLoadError):
        load_settings(path)


def test_non_object_document_raises_load_error(tmp_path):
    with pytest.raises(SettingsLoadError):
        load_settings(_write(tmp_path, [1, 2, 3]))


def test_missing_file_raises_load_error(tmp_path):
    with pytest.raises(SettingsLoadError):
        load_settings(tmp_path / "missing.json")


def test_merge_does_not_mutate_defaults():
    before = deepcopy(DEFAULT_SETTINGS)

    merged = merge_with_defaults({"crop": {"policy": "pad"}})

    assert merged["crop"]["policy"] == "pad"
    assert merged["crop"]["min_side"] == before["crop"]["min_side"]
    assert DEFAULT_SETTINGS == before


def test_default_document_satisfies_schema():
    validate_settings(DEFAULT_SETTINGS)
