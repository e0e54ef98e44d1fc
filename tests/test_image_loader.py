import logging

import pytest
from PIL import Image

from imagedeskew.core.orientation import ORIENTATION_TAG, Orientation, image_orientation
from imagedeskew.errors import ImageLoadError
from imagedeskew.utils.console_logger import ensure_console_logger
from imagedeskew.utils.image_loader import load_image, save_image


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(ImageLoadError):
        load_image(tmp_path / "missing.png")


def test_load_garbage_raises(tmp_path):
    path = tmp_path / "garbage.png"
    path.write_bytes(b"definitely not an image")

    with pytest.raises(ImageLoadError):
        load_image(path)


def test_load_keeps_exif_orientation(tmp_path):
    path = tmp_path / "rotated.jpg"
    image = Image.new("RGB", (40, 20), (120, 30, 30))
    exif = image.getexif()
    exif[ORIENTATION_TAG] = int(Orientation.RIGHT)
    image.save(path, exif=exif.tobytes())

    loaded = load_image(path)

    assert loaded.size == (40, 20)
    assert image_orientation(loaded) is Orientation.RIGHT


def test_save_flattens_alpha_for_jpeg(tmp_path):
    target = save_image(Image.new("RGBA", (10, 10), (0, 0, 0, 0)), tmp_path / "nested" / "out.jpg")

    with Image.open(target) as reopened:
        assert reopened.mode == "RGB"
        assert reopened.size == (10, 10)


def test_save_keeps_alpha_for_png(tmp_path):
    target = save_image(Image.new("RGBA", (10, 10), (0, 0, 0, 0)), tmp_path / "out.png")

    with Image.open(target) as reopened:
        assert reopened.mode == "RGBA"


def test_console_logger_installs_single_handler():
    logger = logging.getLogger("imagedeskew.tests.console")

    first = ensure_console_logger(logger, "test-console", level=logging.INFO)
    second = ensure_console_logger(logger, "test-console", level=logging.DEBUG)

    assert first is second
    assert [h.name for h in logger.handlers].count("test-console") == 1
    assert second.level == logging.DEBUG
    assert logger.level == logging.DEBUG
    logger.removeHandler(first)
