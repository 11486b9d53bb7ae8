"""Ray-casting maze explorer for .cub scene files: scene validation, XPM textures, rendering and a pygame window."""

__version__ = "0.1.0"
__all__ = ["app", "elements", "layout", "player", "raycaster", "textures"]