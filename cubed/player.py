"""The player: spawn, movement with wall collision, and rotation."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

BASE_MOVE_STEP = 3.0
BASE_ROT_STEP = 2.0

WALKABLE = frozenset("0NSEW")

# direction: (dir_x, dir_y, plane_x, plane_y)
_DIRECTIONS: dict[str, tuple[float, float, float, float]] = {
    "N": (0.0, -1.0, 0.6, 0.0),
    "S": (0.0, 1.0, -0.6, 0.0),
    "E": (1.0, 0.0, 0.0, 0.6),
    "W": (-1.0, 0.0, 0.0, -0.6),
}


def is_walkable(cell: str) -> bool:
    """Return True if the player may stand on this map cell."""
    return cell in WALKABLE


@dataclass
class Input:
    """Which movement keys are currently held."""

    key_up: bool = False
    key_down: bool = False
    key_left: bool = False
    key_right: bool = False
    rotate_left: bool = False
    rotate_right: bool = False


@dataclass
class Player:
    """Position, view direction and camera plane of the player."""

    pos_x: float
    pos_y: float
    dir_x: float = 0.0
    dir_y: float = -1.0
    plane_x: float = 0.6
    plane_y: float = 0.0
    move_speed: float = 0.05
    rot_speed: float = 0.05

    def set_direction(self, direction: str) -> None:
        """Face north, south, east or west ('N', 'S', 'E', 'W')."""
        try:
            values = _DIRECTIONS[direction]
        except KeyError:
            raise ValueError(f"unknown direction {direction!r}") from None
        self.dir_x, self.dir_y, self.plane_x, self.plane_y = values

    def _step(self, grid: Sequence[str], dx: float, dy: float) -> None:
        next_x = self.pos_x + dx
        next_y = self.pos_y + dy
        if is_walkable(grid[int(next_y)][int(self.pos_x)]):
            self.pos_y = next_y
        if is_walkable(grid[int(self.pos_y)][int(next_x)]):
            self.pos_x = next_x

    def move_forward(self, grid: Sequence[str], frame_time: float) -> None:
        """Walk along the view direction."""
        move = BASE_MOVE_STEP * frame_time
        self._step(grid, self.dir_x * move, self.dir_y * move)

    def move_backward(self, grid: Sequence[str], frame_time: float) -> None:
        """Walk against the view direction."""
        move = BASE_MOVE_STEP * frame_time
        self._step(grid, -self.dir_x * move, -self.dir_y * move)

    def strafe_left(self, grid: Sequence[str], frame_time: float) -> None:
        """Step sideways to the left."""
        move = BASE_MOVE_STEP * frame_time
        self._step(grid, -self.plane_x * move, -self.plane_y * move)

    def strafe_right(self, grid: Sequence[str], frame_time: float) -> None:
        """Step sideways to the right."""
        move = BASE_MOVE_STEP * frame_time
        self._step(grid, self.plane_x * move, self.plane_y * move)

    def _rotate(self, rot: float) -> None:
        cos_r, sin_r = math.cos(rot), math.sin(rot)
        self.dir_x, self.dir_y = (
            self.dir_x * cos_r - self.dir_y * sin_r,
            self.dir_x * sin_r + self.dir_y * cos_r,
        )
        self.plane_x, self.plane_y = (
            self.plane_x * cos_r - self.plane_y * sin_r,
            self.plane_x * sin_r + self.plane_y * cos_r,
        )

    def rotate_left(self, frame_time: float) -> None:
        """Turn counter-clockwise on screen."""
        self._rotate(-BASE_ROT_STEP * frame_time)

    def rotate_right(self, frame_time: float) -> None:
        """Turn clockwise on screen."""
        self._rotate(BASE_ROT_STEP * frame_time)

    def angle(self) -> float:
        """Return the view angle in radians."""
        return math.atan2(self.dir_y, self.dir_x)

    def update(self, keys: Input, grid: Sequence[str], frame_time: float) -> None:
        """Apply every held key for one frame."""
        if keys.key_up:
            self.move_forward(grid, frame_time)
        if keys.key_down:
            self.move_backward(grid, frame_time)
        if keys.key_left:
            self.strafe_left(grid, frame_time)
        if keys.key_right:
            self.strafe_right(grid, frame_time)
        if keys.rotate_left:
            self.rotate_left(frame_time)
        if keys.rotate_right:
            self.rotate_right(frame_time)


def spawn_player(x: int, y: int, direction: str) -> Player:
    """Place a player in the middle of cell (x, y) facing ``direction``."""
    player = Player(x + 0.5, y + 0.5)
    player.set_direction(direction)
    return player