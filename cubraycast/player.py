"""Player state, wall collisions and movement on the map grid."""

from __future__ import annotations

import math
from dataclasses import dataclass

PI = 3.1415926535
PI2 = 1.5708
PI3 = 4.71239
WINDOW_WIDTH = 1600
WINDOW_HEIGHT = 900
TILE = 50
SIDE_OFFSET = 1.57

KEY_ESC = 53
KEY_LEFT = 123
KEY_RIGHT = 124
KEY_A = 0
KEY_S = 1
KEY_W = 13
KEY_D = 2

_START_ANGLES = {"N": PI3, "W": PI, "S": PI / 2, "E": 0.0}


def _trunc_div(value, tile: int) -> int:
    """Truncate ``value`` to an integer and divide it by ``tile`` towards zero."""
    number = int(value)
    quotient = abs(number) // tile
    return quotient if number >= 0 else -quotient


def _map_cell(rows, x, y, tile: int) -> str:
    """The map character under pixel ``(x, y)``, or ``""`` outside the map."""
    row = _trunc_div(y, tile)
    col = _trunc_div(x, tile)
    if 0 <= row < len(rows) and 0 <= col < len(rows[row]):
        return rows[row][col]
    return ""


def start_angle(rows) -> float:
    """The facing angle given by the first player marker in the map."""
    for row in rows:
        for ch in row:
            if ch in _START_ANGLES:
                return _START_ANGLES[ch]
    return 0.0


def hit_wall(rows, x, y, tile) -> bool:
    """Whether a ray at pixel ``(x, y)`` has reached a wall.

    A wall is reached when two neighbouring sides of the pixel, one
    horizontal and one vertical, both lie in wall cells.
    """
    ix, iy = int(x), int(y)
    left = _map_cell(rows, ix - 1, iy, tile) == "1"
    right = _map_cell(rows, ix + 1, iy, tile) == "1"
    up = _map_cell(rows, ix, iy - 1, tile) == "1"
    down = _map_cell(rows, ix, iy + 1, tile) == "1"
    return (left and up) or (up and right) or (down and right) or (left and down)


@dataclass
class Player:
    """Position and heading of the player, in map pixels and radians."""

    x: float
    y: float
    angle: float
    tile: int = TILE
    move_speed: float = 10.0
    rotation_speed: float = 3 * (PI / 180)
    walk: float = 0.0
    side: float = 0.0
    move_step: float = 0.0

    @classmethod
    def from_rows(cls, rows, tile=TILE) -> "Player":
        """Place a player at the marker in ``rows``.

        Every marker in the list ``rows`` is replaced by an open cell; the
        last one found gives the position.
        """
        angle = start_angle(rows)
        position = None
        for j, row in enumerate(rows):
            for i, ch in enumerate(row):
                if ch in _START_ANGLES:
                    position = (i * tile, j * tile)
            if any(ch in _START_ANGLES for ch in row):
                rows[j] = "".join("0" if ch in _START_ANGLES else ch for ch in row)
        if position is None:
            raise ValueError("the map holds no player marker")
        return cls(x=float(position[0]), y=float(position[1]), angle=angle, tile=tile)

    def _target(self, step: float, sideways: bool) -> tuple[float, float]:
        heading = self.angle + (SIDE_OFFSET if sideways else 0.0)
        return self.x + math.cos(heading) * step, self.y + math.sin(heading) * step

    def blocked(self, rows, step, sideways) -> bool:
        """Whether moving ``step`` pixels (sideways or ahead) meets a non-open cell."""
        tx, ty = self._target(step, sideways)
        i, j = int(tx), int(ty)
        probes = (
            (i, j - 1),
            (i + 1, j),
            (i, j + 1),
            (i - 1, j),
            (i + 1, j - 1),
            (i - 1, j + 1),
            (i, j - 1),
            (i, j),
        )
        return any(_map_cell(rows, px, py, self.tile) != "0" for px, py in probes)

    def side_clear(self, rows, step) -> bool:
        """Whether the cell ``step`` pixels to the side is open."""
        tx, ty = self._target(step, True)
        return _map_cell(rows, int(tx), int(ty), self.tile) == "0"

    def _advance(self, rows, walk: float, sideways: bool) -> bool:
        self.walk = walk
        self.move_step = self.walk * self.move_speed
        if self.blocked(rows, self.move_step, sideways):
            return False
        self.x, self.y = self._target(self.move_step, sideways)
        return True

    def move_forward(self, rows) -> bool:
        """Step ahead unless blocked; return whether the player moved."""
        return self._advance(rows, 1.0, False)

    def move_backward(self, rows) -> bool:
        """Step back unless blocked; return whether the player moved."""
        return self._advance(rows, -1.0, False)

    def strafe(self, rows, direction) -> bool:
        """Step right for a positive ``direction``, left otherwise."""
        return self._advance(rows, 1.0 if direction > 0 else -1.0, True)

    def rotate(self, side) -> None:
        """Turn by one rotation step; positive ``side`` turns right."""
        self.side = side
        self.angle += self.side * self.rotation_speed