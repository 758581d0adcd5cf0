import pytest

from cubed.canvas import Canvas
from cubed.minimap import (
    MINIMAP_OFFSET_X,
    MINIMAP_OFFSET_Y,
    MINIMAP_SIZE,
    PLAYER_COLOR,
    RAY_COLOR,
    draw_line,
    draw_map,
    draw_player,
    draw_rays,
    tile_color,
    tile_size,
)
from cubed.player import spawn_player

ROOM = ["11111", "10001", "10N01", "10D01", "11111"]
SIDE = MINIMAP_SIZE + max(MINIMAP_OFFSET_X, MINIMAP_OFFSET_Y) + 10


def _canvas():
    return Canvas(SIDE, SIDE)


def test_tile_size_single_cell_fills_minimap():
    assert tile_size(1, 1) == MINIMAP_SIZE


@pytest.mark.parametrize("w,h", [(5, 5), (10, 3), (7, 20), (33, 1)])
def test_tile_size_fits(w, h):
    size = tile_size(w, h)
    assert size * w <= MINIMAP_SIZE
    assert size * h <= MINIMAP_SIZE


def test_tile_size_rejects_empty_map():
    with pytest.raises(ValueError):
        tile_size(0, 3)


def test_tile_colors():
    assert tile_color("1") == 0x333333
    assert tile_color("X") == 0x5FCC25
    assert tile_color("D") == 0x996633
    assert tile_color("0") == 0xFFFFFF
    assert tile_color(" ") == 0xFFFFFF


def test_draw_line_horizontal():
    canvas = _canvas()
    draw_line(canvas, 0, 0, 5, 0, 0x00FF00)
    assert all(canvas.get_pixel(x, 0) == 0x00FF00 for x in range(6))
    assert canvas.get_pixel(6, 0) == 0
    assert canvas.get_pixel(0, 1) == 0


def test_draw_line_diagonal_backwards():
    canvas = _canvas()
    draw_line(canvas, 4, 4, 0, 0, 0x0000FF)
    assert all(canvas.get_pixel(i, i) == 0x0000FF for i in range(5))
    assert canvas.get_pixel(1, 0) == 0


def test_draw_line_clipped_to_minimap():
    canvas = _canvas()
    draw_line(canvas, MINIMAP_SIZE - 2, 0, MINIMAP_SIZE + 5, 0, 0xFF00FF)
    assert canvas.get_pixel(MINIMAP_SIZE - 1, 0) == 0xFF00FF
    assert canvas.get_pixel(MINIMAP_SIZE, 0) == 0
    assert canvas.get_pixel(MINIMAP_SIZE + 3, 0) == 0


def test_draw_map_tiles():
    canvas = _canvas()
    draw_map(canvas, ROOM)
    size = tile_size(5, 5)
    ox, oy = MINIMAP_OFFSET_X, MINIMAP_OFFSET_Y
    assert canvas.get_pixel(ox, oy) == tile_color("1")
    assert canvas.get_pixel(ox + size, oy + size) == tile_color("0")
    assert canvas.get_pixel(ox + 2 * size, oy + 3 * size) == tile_color("D")
    assert canvas.get_pixel(ox - 1, oy - 1) == 0


def test_draw_player_marks_position():
    canvas = _canvas()
    player = spawn_player(2, 2, "N")
    draw_player(canvas, ROOM, player)
    size = tile_size(5, 5)
    px = int(player.pos_x * size) + MINIMAP_OFFSET_X
    py = int(player.pos_y * size) + MINIMAP_OFFSET_Y
    assert canvas.get_pixel(px, py) == PLAYER_COLOR
    assert canvas.get_pixel(MINIMAP_OFFSET_X, MINIMAP_OFFSET_Y) == 0


def test_draw_rays_start_at_player_and_stay_in_map():
    canvas = _canvas()
    player = spawn_player(2, 2, "E")
    draw_rays(canvas, ROOM, player)
    size = tile_size(5, 5)
    px = int(player.pos_x * size) + MINIMAP_OFFSET_X
    py = int(player.pos_y * size) + MINIMAP_OFFSET_Y
    assert canvas.get_pixel(px, py) == RAY_COLOR
    green = [
        (i % SIDE, i // SIDE)
        for i, value in enumerate(canvas.pixels)
        if value == RAY_COLOR
    ]
    assert len(green) > 1
    for x, y in green:
        assert MINIMAP_OFFSET_X <= x <= MINIMAP_OFFSET_X + 5 * size
        assert MINIMAP_OFFSET_Y <= y <= MINIMAP_OFFSET_Y + 5 * size