"""Ray casting, wall projection and the minimap drawn into a frame buffer."""

from __future__ import annotations

import math
from array import array
from dataclasses import dataclass, field

from .player import PI, TILE, WINDOW_HEIGHT, WINDOW_WIDTH, Player, hit_wall
from .textures import FACE_EAST, FACE_NORTH, FACE_SOUTH, FACE_WEST, TextureSet, wall_face

FIELD_OF_VIEW = 64 * (PI / 180)
RAY_START = -32.0
RAY_LENGTH = 1000
TEXTURE_SCALE = 50
PLAYER_RADIUS = 3


def projection_plane() -> float:
    """Distance from the eye to the projection plane, in pixels."""
    return (WINDOW_WIDTH // 2) / math.tan(FIELD_OF_VIEW / 2)


def corrected_distance(hit_x, hit_y, player, angle) -> float:
    """Distance to a hit, corrected for the fish-eye effect."""
    return math.hypot(hit_x - player.x, hit_y - player.y) * math.cos(angle - player.angle)


def wall_height(tile, distance, plane) -> float:
    """Projected height of a wall slice at ``distance``."""
    if distance == 0:
        return math.inf
    return (tile / distance) * plane


def longest_side(rows) -> int:
    """The larger of the longest row length and the number of rows."""
    widest = max((len(row) for row in rows), default=0)
    return max(widest, len(rows))


def rgb_to_color(rgb) -> int:
    """Pack an ``(r, g, b)`` triple into a 0xRRGGBB integer."""
    red, green, blue = rgb
    return (red << 16) + (green << 8) + blue


@dataclass(frozen=True)
class RayHit:
    """Where a ray met a wall and how tall that wall appears."""

    x: float
    y: float
    distance: float
    height: float
    angle: float


@dataclass
class FrameBuffer:
    """A width by height image of 0xRRGGBB pixels."""

    width: int
    height: int
    pixels: array = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.pixels = array("I", [0]) * (self.width * self.height)

    def put(self, x, y, color) -> None:
        """Set a pixel; coordinates are truncated and writes outside are dropped."""
        x, y = int(x), int(y)
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y * self.width + x] = color & 0xFFFFFFFF

    def get(self, x, y) -> int:
        """The colour of a pixel."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the frame")
        return self.pixels[y * self.width + x]


@dataclass
class Renderer:
    """Draws the first-person view and the minimap of a map."""

    rows: list[str]
    player: Player
    textures: TextureSet
    ceiling: tuple[int, int, int]
    floor: tuple[int, int, int]
    width: int = WINDOW_WIDTH
    height: int = WINDOW_HEIGHT
    tile: int = TILE
    frame: FrameBuffer = field(init=False, repr=False)
    face: int = 0
    tex_x: int = 0

    def __post_init__(self) -> None:
        self.frame = FrameBuffer(self.width, self.height)

    def _march(self, angle: float) -> tuple[list[tuple[float, float]], tuple[float, float]]:
        """Step one pixel at a time along ``angle`` until a wall is hit."""
        px, py = self.player.x, self.player.y
        dx = (px + math.cos(angle) * RAY_LENGTH) - px
        dy = (py + math.sin(angle) * RAY_LENGTH) - py
        step = max(abs(dx), abs(dy))
        dx /= step
        dy /= step
        limit = 2 * (longest_side(self.rows) + 1) * self.tile
        path = []
        x, y = px, py
        while not hit_wall(self.rows, x, y, self.tile):
            path.append((x, y))
            if len(path) > limit:
                raise ValueError("ray left the map without hitting a wall")
            x += dx
            y += dy
        return path, (x, y)

    def cast_ray(self, angle) -> RayHit:
        """Cast one ray and measure the wall it meets."""
        _, (x, y) = self._march(angle)
        distance = corrected_distance(x, y, self.player, angle)
        height = wall_height(self.tile, distance, projection_plane())
        return RayHit(x=x, y=y, distance=distance, height=height, angle=angle)

    def draw_column(self, column, hit) -> None:
        """Fill one screen column with ceiling, wall texture and floor."""
        self.face = wall_face(self.rows, hit.x, hit.y, self.tile, self.face)
        if self.face in (FACE_SOUTH, FACE_NORTH):
            self.tex_x = int(math.fmod(hit.x / TEXTURE_SCALE, 1) * TEXTURE_SCALE)
        elif self.face in (FACE_WEST, FACE_EAST):
            self.tex_x = int(math.fmod(hit.y / TEXTURE_SCALE, 1) * TEXTURE_SCALE)
        top = (self.height - hit.height) / 2
        bottom = top + hit.height
        ceiling = rgb_to_color(self.ceiling)
        floor = rgb_to_color(self.floor)
        for j in range(self.height):
            if j < top:
                color = ceiling
            elif j < bottom:
                tex_y = int(((j - top) * TEXTURE_SCALE) / hit.height)
                color = self.textures.color_for(self.face, self.tex_x, tex_y)
            else:
                color = floor
            self.frame.put(column, j, color)

    def render(self) -> FrameBuffer:
        """Draw a whole frame and return the buffer."""
        ray_angle = RAY_START
        step = FIELD_OF_VIEW / self.width
        for column in range(self.width):
            hit = self.cast_ray(self.player.angle + ray_angle)
            self.draw_column(column, hit)
            ray_angle += step
        self.draw_minimap()
        return self.frame

    def draw_minimap(self) -> None:
        """Draw walls, the player and its line of sight in the top-left corner."""
        scale = self.width // (longest_side(self.rows) * 4)
        for j, row in enumerate(self.rows):
            for i, ch in enumerate(row):
                if ch == "1":
                    self._square(scale * i, scale * j, scale)
        cx = (self.player.x / self.tile) * scale
        cy = (self.player.y / self.tile) * scale
        dots = {
            (
                int(cx + PLAYER_RADIUS * math.cos(k * 0.01 * PI / 180)),
                int(cy + PLAYER_RADIUS * math.sin(k * 0.01 * PI / 180)),
            )
            for k in range(36000)
        }
        for x, y in dots:
            self.frame.put(x, y, 0x000000)
        path, _ = self._march(self.player.angle)
        for x, y in path:
            self.frame.put((x / self.tile) * scale, (y / self.tile) * scale, 0x000000)

    def _square(self, x: int, y: int, size: int) -> None:
        for i in range(1, size):
            for j in range(1, size):
                self.frame.put(x + j, y + i, 0x000000)