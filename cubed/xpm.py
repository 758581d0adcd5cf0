"""Reading XPM pixmaps into in-memory images."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from cubed.colornames import lookup_color

TRANSPARENT = 0xFF000000

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_HEX_RE = re.compile(r"\s*([+-]?)(?:0[xX])?([0-9a-fA-F]+)")
_QUOTED_RE = re.compile(r'"([^"]*)"')
_WORD_SPLIT_RE = re.compile(r"[ \t]+")


class XpmError(ValueError):
    """Raised when XPM data cannot be turned into an image."""


@dataclass
class Image:
    """A width x height image of 0xAARRGGBB pixels stored row by row."""

    width: int
    height: int
    pixels: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        size = self.width * self.height
        if not self.pixels:
            self.pixels = [0] * size
        elif len(self.pixels) != size:
            raise ValueError(
                f"expected {size} pixels, got {len(self.pixels)}"
            )

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the image")
        return y * self.width + x

    def get_pixel(self, x: int, y: int) -> int:
        """Return the colour at column x, row y."""
        return self.pixels[self._index(x, y)]

    def set_pixel(self, x: int, y: int, color: int) -> None:
        """Store a colour at column x, row y."""
        self.pixels[self._index(x, y)] = color & 0xFFFFFFFF


def split_words(text: str) -> list[str]:
    """Split text on spaces and tabs, dropping empty words."""
    return [word for word in _WORD_SPLIT_RE.split(text) if word]


def _find_unquoted(text: str, token: str) -> int:
    quoted = False
    for pos in range(len(text) - len(token) + 1):
        if text[pos] == '"':
            quoted = not quoted
        if not quoted and text.startswith(token, pos):
            return pos
    return -1


def strip_comments(text: str) -> str:
    """Blank out C-style comments that are not inside double quotes.

    Comments are replaced by spaces so the text keeps its length.
    """
    for opener, closer in (("/*", "*/"), ("//", "\n")):
        while (start := _find_unquoted(text, opener)) != -1:
            end = text.find(closer, start + len(opener))
            stop = len(text) if end == -1 else end + len(closer)
            text = text[:start] + " " * (stop - start) + text[stop:]
    return text


def _atoi(word: str) -> int:
    match = _INT_RE.match(word)
    return int(match.group(1)) if match else 0


def text_color(name: str, end: str | None) -> int:
    """Resolve an XPM colour value to 0xRRGGBB.

    ``#hex`` values are read as hexadecimal; otherwise the name (joined with
    the following word when there is one) is looked up in the colour table.
    Unknown names give 0, ``none`` gives -1.
    """
    if name.startswith("#"):
        match = _HEX_RE.match(name[1:])
        if not match:
            return 0
        value = int(match.group(2), 16)
        return -value if match.group(1) == "-" else value
    if end is not None:
        name = f"{name} {end}"
    value = lookup_color(name)
    return 0 if value is None else value


def _next_line(rows: Iterator[str]) -> str:
    try:
        return next(rows)
    except StopIteration:
        raise XpmError("XPM data ends too early") from None


def parse_xpm(lines: Iterable[str]) -> Image:
    """Build an image from the strings of an XPM array."""
    rows = iter(lines)
    words = split_words(_next_line(rows))
    if len(words) < 4:
        raise XpmError("XPM header needs width, height, colours and cpp")
    width, height, ncolors, cpp = (_atoi(word) for word in words[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError("XPM header values must be positive")

    # One or two characters per pixel: later definitions override earlier
    # ones. Longer codes: the first definition is kept.
    override = cpp <= 2
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next_line(rows)
        key = line[:cpp]
        spec = split_words(line[cpp:])
        try:
            index = spec.index("c") + 1
        except ValueError:
            raise XpmError(f"colour line without 'c' key: {line!r}") from None
        if index >= len(spec):
            raise XpmError(f"colour line without a value: {line!r}")
        end = spec[index + 1] if index + 1 < len(spec) else None
        value = text_color(spec[index], end)
        if override:
            palette[key] = value
        else:
            palette.setdefault(key, value)

    pixels: list[int] = []
    for _ in range(height):
        line = _next_line(rows)
        for x in range(width):
            color = palette.get(line[x * cpp:(x + 1) * cpp], 0)
            pixels.append(TRANSPARENT if color == -1 else color & 0xFFFFFFFF)
    return Image(width, height, pixels)


def xpm_lines_from_text(text: str) -> list[str]:
    """Return the quoted strings of an XPM file, comments removed."""
    return _QUOTED_RE.findall(strip_comments(text))


def load_xpm(path: str | os.PathLike[str]) -> Image:
    """Read an XPM file and return its image."""
    try:
        with open(path, encoding="latin-1") as handle:
            text = handle.read()
    except OSError as exc:
        raise XpmError(f"cannot read {os.fspath(path)}: {exc}") from exc
    return parse_xpm(xpm_lines_from_text(text))