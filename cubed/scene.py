"""Reading scene description files: textures, colours and the map."""

from __future__ import annotations

import enum
import os
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from cubed.validate import SceneError, check_extension, find_player, validate_map

CONFIG_ENTRIES = 6

_INT_RE = re.compile(r"[+-]?\d+")
_TEXTURE_IDS = {"NO": "north", "SO": "south", "WE": "west", "EA": "east"}
_COLOR_IDS = {"F": "floor", "C": "ceiling"}


class SpecType(enum.Enum):
    """Kinds of configuration lines."""

    COLOR = "color"
    TEXTURE = "texture"
    BAD_COLOR_ID = "bad color id"
    BAD_TEXTURE_ID = "bad texture id"


@dataclass
class Color:
    """An RGB colour; components left at -1 have not been given."""

    red: int = -1
    green: int = -1
    blue: int = -1

    def is_set(self) -> bool:
        """Return True once any component has been given."""
        return self.red != -1 or self.green != -1 or self.blue != -1

    def is_valid(self) -> bool:
        """Return True if every component lies in 0..255."""
        return all(0 <= c <= 255 for c in (self.red, self.green, self.blue))

    def to_hex(self) -> int:
        """Return the colour as 0xRRGGBB, clamping each component."""
        red, green, blue = (
            min(max(c, 0), 255) for c in (self.red, self.green, self.blue)
        )
        return (red << 16) | (green << 8) | blue


def parse_color(text: str) -> Color:
    """Parse ``R,G,B``; missing components stay -1, extra ones are ignored."""
    pieces = [piece for piece in text.split(",") if piece]
    values = []
    for piece in pieces[:3]:
        word = piece.strip()
        if not _INT_RE.fullmatch(word):
            raise SceneError("Invalid texture/color")
        values.append(int(word))
    return Color(*values)


def spec_type(line: str) -> SpecType | None:
    """Classify a configuration line by its identifier.

    Returns None when the line holds no space, i.e. is not a specification.
    """
    text = line.lstrip()
    space = text.find(" ")
    if space == -1:
        return None
    ident = text[:space]
    if len(ident) == 1:
        return SpecType.COLOR if ident in _COLOR_IDS else SpecType.BAD_COLOR_ID
    if ident in _TEXTURE_IDS:
        return SpecType.TEXTURE
    return SpecType.BAD_TEXTURE_ID


@dataclass
class Scene:
    """Everything a scene file describes."""

    textures: dict[str, str] = field(default_factory=dict)
    floor: Color = field(default_factory=Color)
    ceiling: Color = field(default_factory=Color)
    grid: list[str] = field(default_factory=list)
    width: int = 0
    player: tuple[int, int, str] | None = None

    @property
    def height(self) -> int:
        """Number of map rows."""
        return len(self.grid)

    def apply_line(self, line: str) -> bool:
        """Apply one configuration line.

        Returns True if it set a texture or colour, False if the line is
        not a specification at all. Raises SceneError on a bad line.
        """
        text = line.lstrip()
        kind = spec_type(text)
        if kind is None:
            return False
        if kind in (SpecType.BAD_COLOR_ID, SpecType.BAD_TEXTURE_ID):
            raise SceneError("Invalid texture/color")
        if kind is SpecType.COLOR:
            self._apply_color(text)
        else:
            self._apply_texture(text)
        return True

    def _apply_color(self, text: str) -> None:
        attr = _COLOR_IDS[text[0]]
        if getattr(self, attr).is_set():
            raise SceneError("A duplicate texture or color was found")
        color = parse_color(text[2:])
        setattr(self, attr, color)
        if not color.is_valid():
            raise SceneError("Invalid texture/color")

    def _apply_texture(self, text: str) -> None:
        collapsed = " ".join(text.split())
        ident = collapsed[:2]
        if ident not in _TEXTURE_IDS or not collapsed.startswith(ident + " "):
            raise SceneError("Invalid texture/color")
        name = _TEXTURE_IDS[ident]
        if name in self.textures:
            raise SceneError("A duplicate texture or color was found")
        self.textures[name] = collapsed[3:]

    def add_map_line(self, line: str) -> None:
        """Append a map row, dropping its trailing newline."""
        row = line[:-1] if line.endswith("\n") else line
        self.grid.append(row)
        self.width = max(self.width, len(row))

    def check_complete(self, count: int) -> None:
        """Raise SceneError unless all textures and colours were given."""
        if any(name not in self.textures for name in _TEXTURE_IDS.values()):
            raise SceneError("Missing texture")
        if self.floor.red == -1 or self.ceiling.red == -1:
            raise SceneError("Missing color")
        if count == 0:
            raise SceneError("Empty map")


def parse_scene_lines(lines: Iterable[str]) -> Scene:
    """Build a scene from its lines, each ending with a newline but the last."""
    scene = Scene()
    rows = iter(lines)
    count = 0
    while count < CONFIG_ENTRIES:
        line = next(rows, None)
        if line is None:
            break
        if scene.apply_line(line):
            count += 1
    scene.check_complete(count)

    line = next(rows, None)
    while line is not None and line.startswith("\n"):
        line = next(rows, None)
    while line is not None and not line.startswith("\n"):
        scene.add_map_line(line)
        line = next(rows, None)
    if line is not None or not scene.grid:
        raise SceneError("Invalid map")

    scene.grid = validate_map(scene.grid)
    scene.width = max(map(len, scene.grid))
    scene.player = find_player(scene.grid)
    return scene


def parse_scene(path: str | os.PathLike[str]) -> Scene:
    """Read and check a ``.cub`` scene file."""
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except OSError as exc:
        raise SceneError(f"opening file: {exc}") from exc
    check_extension(path)
    return parse_scene_lines(text.splitlines(keepends=True))