"""Casting rays through the map grid and drawing wall columns."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from cubed.canvas import Canvas, Texture
from cubed.player import Player

SOLID = frozenset("1DX")
SPRITE_INTERVAL = 0.5


@dataclass
class Ray:
    """The result of casting one ray: where and how it hit."""

    dir_x: float
    dir_y: float
    map_x: int
    map_y: int
    step_x: int
    step_y: int
    side: int
    hit_type: str
    perp_wall_dist: float


def _cell(grid: Sequence[str], x: int, y: int) -> str:
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        return grid[y][x]
    # Leaving the map counts as hitting a wall.
    return "1"


def cast_ray(
    grid: Sequence[str], player: Player, x: int, screen_width: int
) -> Ray:
    """Cast the ray for screen column x and walk it to the first solid cell."""
    camera_x = 2.0 * x / screen_width - 1.0
    dir_x = player.dir_x + player.plane_x * camera_x
    dir_y = player.dir_y + player.plane_y * camera_x
    map_x = int(player.pos_x)
    map_y = int(player.pos_y)
    delta_x = abs(1.0 / dir_x) if dir_x else math.inf
    delta_y = abs(1.0 / dir_y) if dir_y else math.inf

    if dir_x < 0:
        step_x, side_x = -1, (player.pos_x - map_x) * delta_x
    else:
        step_x, side_x = 1, (map_x + 1.0 - player.pos_x) * delta_x
    if dir_y < 0:
        step_y, side_y = -1, (player.pos_y - map_y) * delta_y
    else:
        step_y, side_y = 1, (map_y + 1.0 - player.pos_y) * delta_y

    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        cell = _cell(grid, map_x, map_y)
        if cell in SOLID:
            break

    if side == 0:
        perp = (map_x - player.pos_x + (1 - step_x) / 2.0) / dir_x
    else:
        perp = (map_y - player.pos_y + (1 - step_y) / 2.0) / dir_y
    return Ray(dir_x, dir_y, map_x, map_y, step_x, step_y, side, cell, perp)


def cast_center_ray(
    grid: Sequence[str], player: Player, screen_width: int
) -> Ray:
    """Cast the ray through the middle of the screen."""
    return cast_ray(grid, player, screen_width // 2, screen_width)


def texture_x(ray: Ray, player: Player, tex_width: int) -> int:
    """Return the texture column that the ray's hit point falls on."""
    if ray.side == 0:
        wall_x = player.pos_y + ray.perp_wall_dist * ray.dir_y
    else:
        wall_x = player.pos_x + ray.perp_wall_dist * ray.dir_x
    wall_x -= math.floor(wall_x)
    tex_x = int(wall_x * tex_width)
    if (ray.side == 0 and ray.dir_x > 0) or (ray.side == 1 and ray.dir_y < 0):
        tex_x = tex_width - tex_x - 1
    return tex_x


@dataclass
class SpriteAnimator:
    """Cycles through animation frames, advancing every ``interval`` seconds."""

    frames: list[Any]
    interval: float = SPRITE_INTERVAL
    index: int = 0
    last_time: float = 0.0

    def __post_init__(self) -> None:
        if not self.frames:
            raise ValueError("an animation needs at least one frame")

    def frame(self, now: float) -> Any:
        """Return the frame to show at time ``now`` (seconds)."""
        if now - self.last_time >= self.interval:
            self.index = (self.index + 1) % len(self.frames)
            self.last_time = now
        return self.frames[self.index]


@dataclass
class Theme:
    """The textures of walls, doors and the animated sprite block."""

    north: Texture
    south: Texture
    east: Texture
    west: Texture
    door: Texture
    sprites: SpriteAnimator | None = field(default=None)

    def select(self, ray: Ray, now: float) -> Texture:
        """Pick the texture for what the ray hit."""
        if ray.hit_type == "D":
            return self.door
        if ray.hit_type == "X":
            if self.sprites is None:
                raise LookupError("theme has no sprite frames")
            return self.sprites.frame(now)
        if ray.side == 0:
            return self.west if ray.dir_x > 0 else self.east
        return self.north if ray.dir_y > 0 else self.south


def render_column(
    canvas: Canvas,
    grid: Sequence[str],
    player: Player,
    x: int,
    theme: Theme,
    ceiling: int,
    floor: int,
    now: float,
) -> Ray:
    """Draw ceiling, wall slice and floor of screen column x."""
    ray = cast_ray(grid, player, x, canvas.width)
    height = canvas.height
    perp = ray.perp_wall_dist if ray.perp_wall_dist > 1e-9 else 1e-9
    line_height = int(height / perp)
    draw_start = max(-(line_height // 2) + height // 2, 0)
    draw_end = min(line_height // 2 + height // 2, height)
    texture = theme.select(ray, now)
    tex_x = texture_x(ray, player, texture.width)
    canvas.draw_vertical_line(x, 0, draw_start, ceiling)
    canvas.draw_vertical_line(x, draw_end, height, floor)
    canvas.draw_textured_column(
        x, draw_start, draw_end, line_height, texture, tex_x
    )
    return ray