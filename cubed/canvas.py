"""An in-memory frame buffer with the drawing primitives of the renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

CROSSHAIR_SIZE = 10
CROSSHAIR_COLOR = 0xFF0000


class Texture(Protocol):
    """Anything with a size and readable pixels, such as an XPM image."""

    width: int
    height: int

    def get_pixel(self, x: int, y: int) -> int: ...


@dataclass
class Canvas:
    """A width x height grid of 0xAARRGGBB pixels stored row by row."""

    width: int
    height: int
    pixels: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("canvas dimensions must be positive")
        size = self.width * self.height
        if not self.pixels:
            self.pixels = [0] * size
        elif len(self.pixels) != size:
            raise ValueError(f"expected {size} pixels, got {len(self.pixels)}")

    def set_pixel(self, x: int, y: int, color: int) -> None:
        """Store a colour; points outside the canvas are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y * self.width + x] = color & 0xFFFFFFFF

    def get_pixel(self, x: int, y: int) -> int:
        """Return the colour at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the canvas")
        return self.pixels[y * self.width + x]

    def draw_crosshair(self) -> None:
        """Draw a red cross in the middle of the canvas."""
        center_x = self.width // 2
        center_y = self.height // 2
        for offset in range(-CROSSHAIR_SIZE, CROSSHAIR_SIZE + 1):
            self.set_pixel(center_x + offset, center_y, CROSSHAIR_COLOR)
        for offset in range(-CROSSHAIR_SIZE, CROSSHAIR_SIZE + 1):
            self.set_pixel(center_x, center_y + offset, CROSSHAIR_COLOR)

    def draw_vertical_line(self, x: int, y1: int, y2: int, color: int) -> None:
        """Fill column x from row y1 up to, not including, row y2."""
        for y in range(max(y1, 0), min(y2, self.height)):
            self.set_pixel(x, y, color)

    def draw_textured_column(
        self,
        x: int,
        draw_start: int,
        draw_end: int,
        line_height: int,
        texture: Texture,
        tex_x: int,
    ) -> None:
        """Draw one wall slice, stretching texture column tex_x over it."""
        if line_height <= 0:
            return
        step = texture.height / line_height
        tex_pos = (draw_start - self.height // 2 + line_height // 2) * step
        mask = texture.height - 1
        for y in range(draw_start, draw_end):
            tex_y = int(tex_pos) & mask
            tex_pos += step
            self.set_pixel(x, y, texture.get_pixel(tex_x, tex_y))