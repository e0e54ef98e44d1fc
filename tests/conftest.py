import sys
from pathlib import Path

import pytest
from PIL import Image

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Ensure the project sources are importable without an editable install.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from imagedeskew.core.geometry import Size  # noqa: E402
from imagedeskew.detection import NullPerspectiveCorrector, NullRectangleDetector  # noqa: E402


@pytest.fixture
def gradient_image() -> Image.Image:
    """A 200x100 RGB image whose pixels encode their own coordinates."""

    image = Image.new("RGB", (200, 100))
    image.putdata([(x, y, 0) for y in range(100) for x in range(200)])
    return image


@pytest.fixture
def null_collaborators() -> dict:
    return {
        "detector": NullRectangleDetector(),
        "corrector": NullPerspectiveCorrector(),
    }


@pytest.fixture
def square_container() -> Size:
    return Size(200.0, 200.0)
