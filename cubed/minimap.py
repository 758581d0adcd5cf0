"""The minimap overlay: tiles, the player marker and the view rays."""

from __future__ import annotations

import math
from collections.abc import Sequence

from cubed.canvas import Canvas
from cubed.player import Player

MINIMAP_SIZE = 200
MINIMAP_OFFSET_X = 10
MINIMAP_OFFSET_Y = 10
PLAYER_SIZE = 6

PLAYER_COLOR = 0xFF0000
RAY_COLOR = 0x00FF00
RAY_COUNT = 60
RAY_LENGTH = 50
RAY_STEP = 0.05
FOV = math.radians(60)

_TILE_COLORS = {"1": 0x333333, "X": 0x5FCC25, "D": 0x996633}
_RAY_STOPPERS = frozenset("1DS")


def tile_size(map_width: int, map_height: int) -> int:
    """Return the side in pixels of one map tile on the minimap."""
    if map_width <= 0 or map_height <= 0:
        raise ValueError("map dimensions must be positive")
    return min(MINIMAP_SIZE // map_width, MINIMAP_SIZE // map_height)


def tile_color(tile: str) -> int:
    """Return the minimap colour of a map cell."""
    return _TILE_COLORS.get(tile, 0xFFFFFF)


def _dimensions(grid: Sequence[str]) -> tuple[int, int]:
    return max(map(len, grid), default=0), len(grid)


def _cell(grid: Sequence[str], x: int, y: int) -> str:
    row = grid[y]
    return row[x] if x < len(row) else " "


def draw_line(
    canvas: Canvas, x0: int, y0: int, x1: int, y1: int, color: int
) -> None:
    """Draw a line, keeping only points inside the minimap square."""
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    while True:
        if 0 <= x0 < MINIMAP_SIZE and 0 <= y0 < MINIMAP_SIZE:
            canvas.set_pixel(x0, y0, color)
        if x0 == x1 and y0 == y1:
            return
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def draw_map(canvas: Canvas, grid: Sequence[str]) -> None:
    """Draw every map cell as a filled tile."""
    width, height = _dimensions(grid)
    size = tile_size(width, height)
    for y in range(height):
        for x in range(width):
            color = tile_color(_cell(grid, x, y))
            left = MINIMAP_OFFSET_X + x * size
            top = MINIMAP_OFFSET_Y + y * size
            for py in range(size):
                for px in range(size):
                    canvas.set_pixel(left + px, top + py, color)


def _to_minimap(value: float, size: int, offset: int) -> int:
    return int(value * size) + offset


def draw_player(canvas: Canvas, grid: Sequence[str], player: Player) -> None:
    """Draw the player as a small red square."""
    size = tile_size(*_dimensions(grid))
    px = _to_minimap(player.pos_x, size, MINIMAP_OFFSET_X)
    py = _to_minimap(player.pos_y, size, MINIMAP_OFFSET_Y)
    half = PLAYER_SIZE // 2
    for y in range(py - half, py + half + 1):
        for x in range(px - half, px + half + 1):
            canvas.set_pixel(x, y, PLAYER_COLOR)


def _trace(grid: Sequence[str], player: Player, angle: float, limit: float):
    width, height = _dimensions(grid)
    dir_x, dir_y = math.cos(angle), math.sin(angle)
    ray_x, ray_y = player.pos_x, player.pos_y
    distance = 0.0
    while distance < limit:
        ray_x += dir_x * RAY_STEP
        ray_y += dir_y * RAY_STEP
        distance += RAY_STEP
        map_x, map_y = int(ray_x), int(ray_y)
        if map_x < 0 or map_y < 0 or map_x >= width or map_y >= height:
            break
        if _cell(grid, map_x, map_y) in _RAY_STOPPERS:
            break
    return ray_x, ray_y


def draw_rays(canvas: Canvas, grid: Sequence[str], player: Player) -> None:
    """Draw the fan of view rays from the player to the nearest walls."""
    size = tile_size(*_dimensions(grid))
    x0 = _to_minimap(player.pos_x, size, MINIMAP_OFFSET_X)
    y0 = _to_minimap(player.pos_y, size, MINIMAP_OFFSET_Y)
    limit = RAY_LENGTH / size if size else 0.0
    step = FOV / RAY_COUNT
    base = player.angle() - FOV / 2
    for i in range(RAY_COUNT):
        ray_x, ray_y = _trace(grid, player, base + i * step, limit)
        x1 = _to_minimap(ray_x, size, MINIMAP_OFFSET_X)
        y1 = _to_minimap(ray_y, size, MINIMAP_OFFSET_Y)
        draw_line(canvas, x0, y0, x1, y1, RAY_COLOR)