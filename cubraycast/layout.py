"""Reading a scene file and validating its map layout."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .elements import (
    ELEMENT_COUNT,
    TEXTURE_IDS,
    SceneError,
    check_texture_files,
    parse_elements,
    validate_colors,
)

_BLANKS = " \t"
_PLAYER_MARKS = "NSWE"
_OPEN_MARKS = "0" + _PLAYER_MARKS


@dataclass
class Scene:
    """A validated scene: map rows, wall textures and the two colours."""

    rows: list[str]
    textures: tuple[str, ...]
    ceiling: tuple[int, int, int]
    floor: tuple[int, int, int]


def _is_wall_row(line: str) -> bool:
    core = line.strip(" ")
    return core[:1] == "1" and core[-1:] == "1"


def split_scene_text(text: str) -> list[str]:
    """Split scene text into its non-empty lines.

    An empty line right after a row that begins and ends with a wall is an
    error, as is a text that is too short or ends with a newline.
    """
    pieces = text.split("\n")
    previous = None
    for piece in pieces[:-1]:
        if piece == "" and previous is not None and _is_wall_row(previous):
            raise SceneError("empty line inside the map")
        previous = piece
    if len(text) <= 2:
        raise SceneError("scene file is too short")
    if text.endswith("\n"):
        raise SceneError("scene file must not end with a newline")
    return [piece for piece in pieces if piece]


def check_player(rows) -> bool:
    """Whether the map holds exactly one player and no unknown cells."""
    marks = [ch for row in rows for ch in row if ch not in "10" + _BLANKS]
    return len(marks) == 1 and marks[0] in _PLAYER_MARKS


def _enclosed(rows, j: int, i: int) -> bool:
    if j == 0 or j == len(rows) - 1 or i == 0:
        return False
    row, above, below = rows[j], rows[j - 1], rows[j + 1]
    if len(above) <= i or len(below) <= i:
        return False
    if row[i - 1] == " " or (i + 1 < len(row) and row[i + 1] == " "):
        return False
    return above[i] != " " and below[i] != " "


def check_spaces(rows) -> bool:
    """Whether no open cell touches a space or the edge of a shorter row."""
    return all(
        _enclosed(rows, j, i)
        for j, row in enumerate(rows)
        for i, ch in enumerate(row)
        if ch in _OPEN_MARKS
    )


def _only_walls(row: str) -> bool:
    return all(ch in "1" + _BLANKS for ch in row)


def is_closed(rows) -> bool:
    """Whether the map is surrounded by walls."""
    if not rows:
        return False
    if not _only_walls(rows[0]):
        return False
    for row in rows:
        core = row.strip(_BLANKS)
        if not core or core[0] != "1" or core[-1] != "1":
            return False
    if not _only_walls(rows[-1]):
        return False
    return check_spaces(rows)


def check_walls(rows) -> bool:
    """Whether the map has one player and is closed."""
    return check_player(rows) and is_closed(rows)


def build_scene(lines) -> Scene:
    """Validate the lines of a scene and build it.

    The six element lines come first; every line after them is the map.
    """
    lines = list(lines)
    elements = parse_elements(lines)
    paths = check_texture_files(elements.textures[ident] for ident in TEXTURE_IDS)
    ceiling, floor = validate_colors(elements.ceiling, elements.floor)
    rows = lines[ELEMENT_COUNT:]
    if not check_walls(rows):
        raise SceneError("map is not valid")
    return Scene(rows=rows, textures=paths, ceiling=ceiling, floor=floor)


def load_scene(path) -> Scene:
    """Read and validate the scene file at ``path``."""
    try:
        with open(os.fspath(path), encoding="utf-8", newline="") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise SceneError(f"cannot read scene file {path!r}") from exc
    return build_scene(split_scene_text(text))