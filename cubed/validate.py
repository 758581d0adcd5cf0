"""Checks that a scene map is well formed and closed."""

from __future__ import annotations

import os
from collections.abc import Sequence

PLAYER_CHARS = frozenset("NSEW")
MAP_CHARS = frozenset("01 NSEWDX")
BORDER_CHARS = frozenset("1 ")


class SceneError(ValueError):
    """Raised when a scene file or its map is invalid."""


def check_extension(filename: str | os.PathLike[str]) -> None:
    """Raise SceneError unless the file name ends with ``.cub``."""
    if not os.fspath(filename).endswith(".cub"):
        raise SceneError("File is not a .cub file")


def normalize_grid(grid: Sequence[str], width: int) -> list[str]:
    """Pad (or cut) every row to exactly ``width`` characters with spaces."""
    return [row[:width].ljust(width) for row in grid]


def count_players(grid: Sequence[str]) -> int:
    """Count the player start cells (N, S, E, W)."""
    return sum(cell in PLAYER_CHARS for row in grid for cell in row)


def check_characters(grid: Sequence[str]) -> bool:
    """Return True if every cell is a known map character."""
    return all(cell in MAP_CHARS for row in grid for cell in row)


def check_border_line(line: str) -> bool:
    """Return True if a first or last row is non-empty walls and spaces."""
    return bool(line) and all(cell in BORDER_CHARS for cell in line)


def check_middle_line(line: str) -> bool:
    """Return True if an inner row starts and ends with a wall."""
    stripped = line.lstrip(" ")
    return bool(stripped) and stripped[0] == "1" and line[-1] == "1"


def check_lines(grid: Sequence[str]) -> bool:
    """Return True if border rows, inner rows and characters are valid."""
    if not grid:
        return False
    if not check_border_line(grid[0]) or not check_border_line(grid[-1]):
        return False
    if not all(check_middle_line(row) for row in grid[1:-1]):
        return False
    return check_characters(grid)


def is_invalid_position(grid: Sequence[str], i: int, j: int) -> bool:
    """Return True if the open cell at row i, column j touches the outside."""
    if i == 0 or i + 1 >= len(grid) or j == 0:
        return True
    above, row, below = grid[i - 1], grid[i], grid[i + 1]
    if j + 1 >= len(row) or j >= len(above) or j >= len(below):
        return True
    return " " in (above[j], below[j], row[j - 1], row[j + 1])


def check_positions(grid: Sequence[str]) -> bool:
    """Return True if every open cell is enclosed by walls."""
    width = max(map(len, grid), default=0)
    rows = normalize_grid(grid, width)
    return not any(
        is_invalid_position(rows, i, j)
        for i, row in enumerate(rows)
        if i > 0
        for j, cell in enumerate(row)
        if cell not in BORDER_CHARS
    )


def validate_map(grid: Sequence[str]) -> list[str]:
    """Check a map and return it with every row padded to the map width."""
    rows = list(grid)
    width = max(map(len, rows), default=0)
    if not rows or width == 0:
        raise SceneError("Empty map")
    if not check_lines(rows):
        raise SceneError("Invalid line")
    if count_players(rows) != 1:
        raise SceneError("Invalid number of player positions")
    if not check_positions(rows):
        raise SceneError("Map not closed")
    return normalize_grid(rows, width)


def find_player(grid: Sequence[str]) -> tuple[int, int, str] | None:
    """Return (x, y, direction) of the first player start, or None."""
    for y, row in enumerate(grid):
        for x, cell in enumerate(row):
            if cell in PLAYER_CHARS:
                return x, y, cell
    return None