"""XPM wall textures and the choice of wall face for a ray hit."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

from .player import _map_cell

_STRINGS = re.compile(r'/\*.*?\*/|"((?:[^"\\]|\\.)*)"', re.DOTALL)
_COLOR_KEYS = ("c", "m", "g", "g4", "s")
_NAMED = {
    "black": 0x000000,
    "white": 0xFFFFFF,
    "red": 0xFF0000,
    "green": 0x00FF00,
    "blue": 0x0000FF,
    "yellow": 0xFFFF00,
    "cyan": 0x00FFFF,
    "magenta": 0xFF00FF,
}
_TRANSPARENT = 0xFF000000

FACE_SOUTH = 1
FACE_WEST = 2
FACE_NORTH = 3
FACE_EAST = 4


class XpmError(ValueError):
    """Raised when an XPM texture cannot be read."""


@dataclass(frozen=True)
class Texture:
    """A decoded image with its pixels stored row after row."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def pixel(self, x, y) -> int:
        """The colour at column ``x`` of row ``y``; outside the image, 0."""
        index = y * self.width + x
        if 0 <= index < len(self.pixels):
            return self.pixels[index]
        return 0


def _parse_color(spec: str) -> int:
    values: dict[str, list[str]] = {}
    current = None
    for token in spec.split():
        if token in _COLOR_KEYS:
            current = token
            values[current] = []
        elif current is None:
            raise XpmError(f"bad colour definition: {spec!r}")
        else:
            values[current].append(token)
    for key in ("c", "g", "g4", "m"):
        if key in values and values[key]:
            return _color_value(" ".join(values[key]))
    raise XpmError(f"colour definition has no colour: {spec!r}")


def _color_value(value: str) -> int:
    if value.lower() == "none":
        return _TRANSPARENT
    if value.startswith("#"):
        digits = value[1:]
        if not digits or len(digits) % 3 or len(digits) > 12:
            raise XpmError(f"bad hex colour: {value!r}")
        width = len(digits) // 3
        try:
            channels = [int(digits[k:k + width], 16) for k in range(0, len(digits), width)]
        except ValueError as exc:
            raise XpmError(f"bad hex colour: {value!r}") from exc
        if width == 1:
            channels = [c * 17 for c in channels]
        else:
            channels = [c >> (4 * (width - 2)) for c in channels]
        red, green, blue = channels
        return (red << 16) | (green << 8) | blue
    try:
        return _NAMED[value.lower()]
    except KeyError:
        raise XpmError(f"unknown colour name: {value!r}") from None


def parse_xpm(text) -> Texture:
    """Decode the text of an XPM image."""
    strings = [m.group(1) for m in _STRINGS.finditer(text) if m.group(1) is not None]
    if not strings:
        raise XpmError("no XPM data found")
    header = strings[0].split()
    if len(header) < 4:
        raise XpmError(f"bad XPM header: {strings[0]!r}")
    try:
        width, height, ncolors, cpp = (int(value) for value in header[:4])
    except ValueError as exc:
        raise XpmError(f"bad XPM header: {strings[0]!r}") from exc
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"bad XPM header: {strings[0]!r}")
    if len(strings) < 1 + ncolors + height:
        raise XpmError("XPM data is truncated")
    palette = {}
    for line in strings[1:1 + ncolors]:
        if len(line) < cpp:
            raise XpmError(f"bad colour line: {line!r}")
        palette[line[:cpp]] = _parse_color(line[cpp:])
    pixels = []
    for row in strings[1 + ncolors:1 + ncolors + height]:
        if len(row) < width * cpp:
            raise XpmError(f"pixel row is too short: {row!r}")
        for start in range(0, width * cpp, cpp):
            key = row[start:start + cpp]
            try:
                pixels.append(palette[key])
            except KeyError:
                raise XpmError(f"undefined pixel {key!r}") from None
    return Texture(width=width, height=height, pixels=tuple(pixels))


def load_xpm(path) -> Texture:
    """Read and decode the XPM file at ``path``."""
    try:
        with open(os.fspath(path), encoding="latin-1") as handle:
            text = handle.read()
    except OSError as exc:
        raise XpmError(f"cannot read {path!r}") from exc
    return parse_xpm(text)


def wall_face(rows, x, y, tile, previous) -> int:
    """Which face of a wall the hit point ``(x, y)`` lies on.

    Faces are 1 to 4, after the open cell below, right of, above or left
    of the hit; when several are open the last wins, and when none is,
    ``previous`` is kept.
    """
    ix, iy = int(x), int(y)
    face = previous
    if _map_cell(rows, x, iy + 1, tile) == "0":
        face = FACE_SOUTH
    if _map_cell(rows, ix + 1, y, tile) == "0":
        face = FACE_WEST
    if _map_cell(rows, x, iy - 1, tile) == "0":
        face = FACE_NORTH
    if _map_cell(rows, ix - 1, y, tile) == "0":
        face = FACE_EAST
    return face


_FACE_TEXTURE = {FACE_SOUTH: 1, FACE_EAST: 3, FACE_NORTH: 0}


@dataclass(frozen=True)
class TextureSet:
    """The four wall textures, in NO, SO, WE, EA order."""

    textures: tuple[Texture, ...]

    @classmethod
    def load(cls, paths) -> "TextureSet":
        """Load the four textures named by ``paths``."""
        textures = tuple(load_xpm(path) for path in paths)
        if len(textures) != 4:
            raise ValueError("exactly four wall textures are required")
        return cls(textures)

    def color_for(self, face, tex_x, tex_y) -> int:
        """The texel for a wall face; ``tex_x`` picks the row, ``tex_y`` the column."""
        texture = self.textures[_FACE_TEXTURE.get(face, 2)]
        return texture.pixel(tex_y, tex_x)