"""The game window, keyboard handling and the command-line entry point."""

from __future__ import annotations

import sys
from array import array

from .elements import SceneError
from .layout import Scene, load_scene
from .player import (
    KEY_A,
    KEY_D,
    KEY_ESC,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_S,
    KEY_W,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    Player,
)
from .raycaster import FrameBuffer, Renderer
from .textures import TextureSet, XpmError

WINDOW_TITLE = "Cub3d!"
SCENE_SUFFIX = ".cub"


def check_extension(path) -> bool:
    """Whether ``path`` names a scene file: a name before a ``.cub`` suffix."""
    return len(path) > len(SCENE_SUFFIX) and path.endswith(SCENE_SUFFIX)


def _frame_bytes(frame: FrameBuffer) -> bytes:
    """The frame as opaque ARGB bytes, most significant byte first."""
    opaque = array("I", (pixel | 0xFF000000 for pixel in frame.pixels))
    if sys.byteorder == "little":
        opaque.byteswap()
    return opaque.tobytes()


class Game:
    """A scene being played: the player, its map and the renderer."""

    def __init__(self, scene: Scene, textures: TextureSet | None = None) -> None:
        self.scene = scene
        self.textures = textures if textures is not None else TextureSet.load(scene.textures)
        self.rows = list(scene.rows)
        self.player = Player.from_rows(self.rows)
        self.renderer = Renderer(
            rows=self.rows,
            player=self.player,
            textures=self.textures,
            ceiling=scene.ceiling,
            floor=scene.floor,
        )
        self.dirty = True

    def handle_key(self, key) -> bool:
        """Act on a key code; return ``False`` when the game should end."""
        if key == KEY_ESC:
            print("EXIT")
            return False
        if key == KEY_W:
            moved = self.player.move_forward(self.rows)
        elif key == KEY_S:
            moved = self.player.move_backward(self.rows)
        elif key == KEY_D:
            moved = self.player.strafe(self.rows, 1)
        elif key == KEY_A:
            moved = self.player.strafe(self.rows, -1)
        elif key == KEY_RIGHT:
            self.player.rotate(1)
            moved = True
        elif key == KEY_LEFT:
            self.player.rotate(-1)
            moved = True
        else:
            moved = False
        if moved:
            self.dirty = True
        return True

    def _show(self, screen) -> None:
        import pygame

        frame = self.renderer.render()
        surface = pygame.image.frombuffer(
            _frame_bytes(frame), (frame.width, frame.height), "ARGB"
        )
        screen.blit(surface, (0, 0))
        pygame.display.flip()
        self.dirty = False

    def run(self) -> None:
        """Open the window and play until it is closed or Escape is pressed."""
        import pygame

        keymap = {
            pygame.K_ESCAPE: KEY_ESC,
            pygame.K_w: KEY_W,
            pygame.K_s: KEY_S,
            pygame.K_a: KEY_A,
            pygame.K_d: KEY_D,
            pygame.K_LEFT: KEY_LEFT,
            pygame.K_RIGHT: KEY_RIGHT,
        }
        pygame.init()
        try:
            screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
            pygame.display.set_caption(WINDOW_TITLE)
            pygame.key.set_repeat(200, 30)
            clock = pygame.time.Clock()
            self._show(screen)
            running = True
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        print("EXIT")
                        running = False
                        break
                    if event.type == pygame.KEYDOWN:
                        code = keymap.get(event.key)
                        if code is not None and not self.handle_key(code):
                            running = False
                            break
                if running and self.dirty:
                    self._show(screen)
                clock.tick(60)
        finally:
            pygame.quit()


def main(argv=None) -> int:
    """Load the scene named on the command line and play it."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("You should enter 2 arguments")
        return 1
    path = args[0]
    if not check_extension(path):
        print("File extenssion should be .cub")
        return 1
    try:
        scene = load_scene(path)
    except SceneError:
        print("Map not valid")
        return 1
    try:
        game = Game(scene)
    except XpmError:
        print("Xpm file not valid")
        return 1
    game.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())