import pytest

from cubed.canvas import CROSSHAIR_COLOR, CROSSHAIR_SIZE, Canvas
from cubed.xpm import Image


def test_set_then_get_round_trip():
    canvas = Canvas(4, 3)
    canvas.set_pixel(2, 1, 0x123456)
    assert canvas.get_pixel(2, 1) == 0x123456
    assert canvas.get_pixel(1, 2) == 0


def test_set_pixel_outside_is_ignored():
    canvas = Canvas(3, 3)
    for x, y in [(-1, 0), (0, -1), (3, 0), (0, 3)]:
        canvas.set_pixel(x, y, 0xFFFFFF)
    assert canvas.pixels == [0] * 9


def test_get_pixel_outside_raises():
    canvas = Canvas(2, 2)
    with pytest.raises(IndexError):
        canvas.get_pixel(2, 0)


def test_bad_dimensions_raise():
    with pytest.raises(ValueError):
        Canvas(0, 5)


def test_wrong_pixel_count_raises():
    with pytest.raises(ValueError):
        Canvas(2, 2, [1, 2, 3])


def test_crosshair_arms():
    canvas = Canvas(40, 30)
    canvas.draw_crosshair()
    cx, cy = 20, 15
    assert canvas.get_pixel(cx, cy) == CROSSHAIR_COLOR
    assert canvas.get_pixel(cx + CROSSHAIR_SIZE, cy) == CROSSHAIR_COLOR
    assert canvas.get_pixel(cx - CROSSHAIR_SIZE, cy) == CROSSHAIR_COLOR
    assert canvas.get_pixel(cx, cy + CROSSHAIR_SIZE) == CROSSHAIR_COLOR
    assert canvas.get_pixel(cx + CROSSHAIR_SIZE + 1, cy) == 0
    assert canvas.get_pixel(cx + 1, cy + 1) == 0


def test_vertical_line_is_clamped():
    canvas = Canvas(5, 8)
    canvas.draw_vertical_line(2, -5, 100, 0xABCDEF)
    assert all(canvas.get_pixel(2, y) == 0xABCDEF for y in range(8))
    assert all(canvas.get_pixel(1, y) == 0 for y in range(8))


def test_vertical_line_end_is_exclusive():
    canvas = Canvas(3, 6)
    canvas.draw_vertical_line(0, 1, 4, 0x00FF00)
    column = [canvas.get_pixel(0, y) for y in range(6)]
    assert column == [0, 0x00FF00, 0x00FF00, 0x00FF00, 0, 0]


def test_textured_column_stretches_texture():
    texture = Image(1, 4, [0x110000, 0x220000, 0x330000, 0x440000])
    canvas = Canvas(3, 8)
    canvas.draw_textured_column(1, 0, 8, 8, texture, 0)
    for y in range(8):
        assert canvas.get_pixel(1, y) == texture.get_pixel(0, y // 2)
    assert all(canvas.get_pixel(0, y) == 0 for y in range(8))


def test_textured_column_with_zero_height_draws_nothing():
    texture = Image(1, 2, [5, 6])
    canvas = Canvas(2, 2)
    canvas.draw_textured_column(0, 0, 2, 0, texture, 0)
    assert canvas.pixels == [0, 0, 0, 0]