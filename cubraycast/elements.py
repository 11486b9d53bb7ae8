"""Parsing and validation of the element lines at the top of a scene file."""

from __future__ import annotations

import re
import string
from dataclasses import dataclass, field

TEXTURE_IDS = ("NO", "SO", "WE", "EA")
COLOR_IDS = ("F", "C")
ELEMENT_COUNT = len(TEXTURE_IDS) + len(COLOR_IDS)

_BLANKS = " \t"
_SPLIT_NUMBER = re.compile(r"\d[ \t]+\d")
_LONE_COMMA = re.compile(r"(?<!,),(?!,)")


class SceneError(ValueError):
    """Raised when a scene description is not valid."""


def _tagged(text: str, tag: str) -> bool:
    """Whether ``text`` starts with ``tag`` followed by a blank."""
    return text.startswith(tag) and len(text) > len(tag) and text[len(tag)] in _BLANKS


def normalize_color(text: str) -> str:
    """Strip blanks from a colour value, checking its commas and numbers.

    Blanks may not separate two digits, and exactly two commas must stand
    alone (not next to another comma).
    """
    if _SPLIT_NUMBER.search(text):
        raise SceneError(f"blank inside a colour component: {text!r}")
    if len(_LONE_COMMA.findall(text)) != 2:
        raise SceneError(f"a colour needs three comma-separated parts: {text!r}")
    return text.replace(" ", "").replace("\t", "")


def parse_color_line(line: str) -> tuple[str, list[str]]:
    """Parse an ``F`` or ``C`` line into its identifier and value parts."""
    stripped = line.lstrip(_BLANKS)
    ident = stripped[:1]
    if ident not in COLOR_IDS or not _tagged(stripped, ident):
        raise SceneError(f"not a colour line: {line!r}")
    value = stripped[1:].lstrip(_BLANKS)
    if len(value) < 2 or value[0] not in string.digits:
        raise SceneError(f"bad colour value: {line!r}")
    digits = normalize_color(value.rstrip(_BLANKS))
    return ident, [part for part in digits.split(",") if part]


def parse_texture_line(line: str) -> tuple[str, str]:
    """Parse a ``NO``/``SO``/``WE``/``EA`` line into its identifier and path.

    The path must begin with a dot and be more than the dot alone.
    """
    stripped = line.lstrip(_BLANKS)
    ident = stripped[:2]
    if ident not in TEXTURE_IDS or not _tagged(stripped, ident):
        raise SceneError(f"not a texture line: {line!r}")
    rest = stripped[2:].lstrip(_BLANKS)
    if not rest.startswith("."):
        raise SceneError(f"texture path must start with '.': {line!r}")
    if len(rest) < 2:
        raise SceneError(f"texture path is missing: {line!r}")
    return ident, rest.rstrip(_BLANKS)


@dataclass
class Elements:
    """The texture paths and colour values collected from a scene header."""

    textures: dict[str, str] = field(default_factory=dict)
    ceiling: list[str] | None = None
    floor: list[str] | None = None
    count: int = 0

    def add_line(self, line: str) -> bool:
        """Record ``line`` if it is an element line; return whether it was."""
        stripped = line.lstrip(_BLANKS)
        head = stripped[:1]
        if head in ("N", "S", "W", "E"):
            ident = stripped[:2]
            if ident not in TEXTURE_IDS or not _tagged(stripped, ident):
                return False
            ident, path = parse_texture_line(line)
            if ident in self.textures:
                raise SceneError(f"texture {ident} given twice")
            self.textures[ident] = path
        elif head in COLOR_IDS and _tagged(stripped, head):
            ident, parts = parse_color_line(line)
            if ident == "F":
                if self.floor is not None:
                    raise SceneError("floor colour given twice")
                self.floor = parts
            else:
                if self.ceiling is not None:
                    raise SceneError("ceiling colour given twice")
                self.ceiling = parts
        else:
            return False
        self.count += 1
        return True


def parse_elements(lines) -> Elements:
    """Collect the elements of every line; all six must appear exactly once."""
    elements = Elements()
    for line in lines:
        elements.add_line(line)
    if elements.count != ELEMENT_COUNT:
        raise SceneError("the scene must define NO, SO, WE, EA, F and C")
    return elements


def check_texture_files(paths) -> tuple[str, ...]:
    """Check that every path names a readable ``.xpm`` file."""
    checked = tuple(paths)
    for path in checked:
        if not path.endswith(".xpm"):
            raise SceneError(f"texture is not an .xpm file: {path!r}")
        try:
            with open(path, "rb"):
                pass
        except OSError as exc:
            raise SceneError(f"cannot open texture {path!r}") from exc
    return checked


def _is_channel(part: str) -> bool:
    return 0 < len(part) <= 3 and all(ch in string.digits for ch in part) and int(part) <= 255


def validate_colors(ceiling, floor) -> tuple[tuple[int, int, int], tuple[int, int, int]]:
    """Check both colours and return them as ``(r, g, b)`` tuples."""
    if ceiling is None or floor is None:
        raise SceneError("both the floor and the ceiling colour are required")
    if len(ceiling) < 3 or len(floor) < 3:
        raise SceneError("a colour needs three components")
    for up, down in zip(ceiling, floor):
        if not _is_channel(up) or not _is_channel(down):
            raise SceneError(f"colour component out of range: {up!r}, {down!r}")
    red, green, blue = (int(part) for part in ceiling[:3])
    f_red, f_green, f_blue = (int(part) for part in floor[:3])
    return (red, green, blue), (f_red, f_green, f_blue)