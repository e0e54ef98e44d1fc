import logging

import pytest
from PIL import Image

from imagedeskew.core.bounds import OutOfBoundsPolicy
from imagedeskew.core.geometry import Point, Rect, Size
from imagedeskew.core.orientation import ORIENTATION_TAG, Orientation, image_orientation
from imagedeskew.core.process import CropRequest, process, process_crop
from imagedeskew.detection import (
    DetectorOptions,
    Observation,
    PerspectiveCorrector,
    Quad,
    RectangleDetector,
)
from imagedeskew.errors import EmptyCropIntersectionError

# Frame of a 200x100 image in a 200x200 container is (0, 50, 200, 100).
CONTAINER = Size(200, 200)
INNER_CROP = Rect(20, 60, 100, 50)

NORMALISED_QUAD = Quad(
    top_left=Point(0.1, 0.9),
    top_right=Point(0.9, 0.8),
    bottom_right=Point(0.8, 0.2),
    bottom_left=Point(0.2, 0.1),
)


class _FixedDetector(RectangleDetector):
    def __init__(self, quad=NORMALISED_QUAD):
        self.quad = quad
        self.seen = []

    def detect_all(self, image, options):
        self.seen.append((image.size, options))
        if self.quad is None:
            return []
        return [Observation(self.quad, 0.9)]


class _ExplodingDetector(RectangleDetector):
    def detect_all(self, image, options):
        raise RuntimeError("boom")


class _RecordingCorrector(PerspectiveCorrector):
    def __init__(self, result=None):
        self.result = result
        self.calls = []

    def correct(self, image, corners):
        self.calls.append((image.size, corners))
        return self.result


def test_plain_crop_maps_display_rect_to_pixels(gradient_image, null_collaborators):
    outcome = process_crop(gradient_image, CropRequest(CONTAINER, INNER_CROP), **null_collaborators)

    assert outcome.frame == Rect(0, 50, 200, 100)
    assert outcome.image.size == (100, 50)
    assert outcome.image.getpixel((0, 0)) == (20, 10, 0)
    assert outcome.quad is None
    assert not outcome.corrected


def test_crop_honours_scale_and_offset(gradient_image, null_collaborators):
    request = CropRequest(CONTAINER, Rect(0, 0, 200, 200), scale=2.0, offset=Size(0, 0))

    outcome = process_crop(gradient_image, request, **null_collaborators)

    assert outcome.frame == Rect(-100, 0, 400, 200)
    assert outcome.image.size == (100, 100)
    assert outcome.image.getpixel((0, 0)) == (50, 0, 0)


def test_detected_corners_are_flipped_into_pixel_space(gradient_image):
    warped = Image.new("RGB", (30, 20), (1, 2, 3))
    detector = _FixedDetector()
    corrector = _RecordingCorrector(result=warped)

    outcome = process_crop(
        gradient_image,
        CropRequest(CONTAINER, INNER_CROP),
        detector=detector,
        corrector=corrector,
    )

    assert outcome.corrected
    assert outcome.image.size == (30, 20)
    (size, corners), = corrector.calls
    assert size == (100, 50)
    assert corners.top_left.x == pytest.approx(10)
    assert corners.top_left.y == pytest.approx(5)
    assert corners.top_right.x == pytest.approx(90)
    assert corners.top_right.y == pytest.approx(10)
    assert corners.bottom_right.y == pytest.approx(40)
    assert corners.bottom_left.y == pytest.approx(45)
    assert outcome.pixel_corners == corners


def test_detector_receives_options(gradient_image):
    detector = _FixedDetector(quad=None)
    options = DetectorOptions(minimum_confidence=0.75)

    process_crop(
        gradient_image,
        CropRequest(CONTAINER, INNER_CROP),
        detector=detector,
        corrector=_RecordingCorrector(),
        options=options,
    )

    assert detector.seen == [((100, 50), options)]


def test_corrector_failure_keeps_plain_crop(gradient_image):
    outcome = process_crop(
        gradient_image,
        CropRequest(CONTAINER, INNER_CROP),
        detector=_FixedDetector(),
        corrector=_RecordingCorrector(result=None),
    )

    assert outcome.quad == NORMALISED_QUAD
    assert not outcome.corrected
    assert outcome.image.size == (100, 50)


def test_detector_exception_is_logged_and_ignored(gradient_image, caplog):
    corrector = _RecordingCorrector()

    with caplog.at_level(logging.ERROR, logger="imagedeskew.core.process"):
        outcome = process_crop(
            gradient_image,
            CropRequest(CONTAINER, INNER_CROP),
            detector=_ExplodingDetector(),
            corrector=corrector,
        )

    assert outcome.image.size == (100, 50)
    assert corrector.calls == []
    assert "Rectangle detection failed" in caplog.text


def test_rotated_source_is_cropped_upright(null_collaborators):
    stored = Image.new("RGB", (100, 200), (200, 10, 10))
    exif = stored.getexif()
    exif[ORIENTATION_TAG] = int(Orientation.RIGHT)
    stored.info["exif"] = exif.tobytes()

    outcome = process_crop(
        stored,
        CropRequest(CONTAINER, Rect(0, 50, 200, 100)),
        **null_collaborators,
    )

    assert outcome.image.size == (200, 100)
    assert image_orientation(outcome.image) is Orientation.UP


def test_pad_policy_produces_transparent_overflow(gradient_image, null_collaborators):
    request = CropRequest(CONTAINER, Rect(-20, 60, 100, 50), policy=OutOfBoundsPolicy.PAD)

    outcome = process_crop(gradient_image, request, **null_collaborators)

    assert outcome.image.mode == "RGBA"
    assert outcome.image.size == (100, 50)
    assert outcome.image.getpixel((0, 0))[3] == 0
    assert outcome.image.getpixel((20, 0)) == (0, 10, 0, 255)


def test_process_crop_raises_when_crop_misses_image(gradient_image, null_collaborators):
    with pytest.raises(EmptyCropIntersectionError):
        process_crop(
            gradient_image,
            CropRequest(CONTAINER, Rect(0, 0, 100, 40)),
            **null_collaborators,
        )


def test_process_returns_none_on_geometry_failure(gradient_image, null_collaborators):
    result = process(
        gradient_image,
        CONTAINER,
        1.0,
        Size(),
        Rect(0, 0, 100, 40),
        **null_collaborators,
    )

    assert result is None


def test_process_returns_none_for_empty_container(gradient_image, null_collaborators):
    assert process(gradient_image, Size(0, 0), 1.0, Size(), INNER_CROP, **null_collaborators) is None


def test_process_returns_image(gradient_image, null_collaborators):
    result = process(gradient_image, CONTAINER, 1.0, Size(), INNER_CROP, "clamp", **null_collaborators)

    assert result is not None
    assert result.size == (100, 50)
