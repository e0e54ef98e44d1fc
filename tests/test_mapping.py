import pytest

from imagedeskew.core.geometry import Rect
from imagedeskew.core.mapping import (
    NormalisedRect,
    PixelRect,
    denormalise_rect,
    normalise_rect,
    to_pixel_rect,
)

FRAME = Rect(0, 50, 200, 100)


def test_normalise_whole_frame_is_unit_rect():
    assert normalise_rect(FRAME, FRAME) == NormalisedRect(0, 0, 1, 1)


def test_normalise_allows_values_outside_unit_range():
    norm = normalise_rect(Rect(-20, 40, 100, 50), FRAME)

    assert norm.x == pytest.approx(-0.1)
    assert norm.y == pytest.approx(-0.1)
    assert not norm.is_inside_unit


def test_normalise_returns_none_for_degenerate_frame():
    assert normalise_rect(Rect(0, 0, 10, 10), Rect(0, 0, 0, 10)) is None


@pytest.mark.parametrize(
    "rect",
    [Rect(10, 60, 50, 30), Rect(-40, 0, 300, 20), Rect(199, 149, 1, 1)],
)
def test_denormalise_inverts_normalise(rect):
    restored = denormalise_rect(normalise_rect(rect, FRAME), FRAME)

    for actual, expected in zip(restored.as_tuple(), rect.as_tuple()):
        assert actual == pytest.approx(expected)


def test_to_pixel_rect_rounds_each_edge():
    pixels = to_pixel_rect(NormalisedRect(0.2, 0.3, 0.4, 0.3), 1000, 500)

    assert pixels == PixelRect(200, 150, 400, 150)
    assert pixels.as_box() == (200, 150, 600, 300)


def test_adjacent_crops_share_their_boundary():
    left = to_pixel_rect(NormalisedRect(0.0, 0.0, 1 / 3, 1.0), 100, 10)
    right = to_pixel_rect(NormalisedRect(1 / 3, 0.0, 2 / 3, 1.0), 100, 10)

    assert left.right == right.left
    assert left.width + right.width == 100


def test_pixel_rect_intersection():
    a = PixelRect(-10, -10, 50, 50)

    assert a.intersection(PixelRect(0, 0, 100, 100)) == PixelRect(0, 0, 40, 40)
    assert a.intersection(PixelRect(100, 100, 10, 10)).is_empty
