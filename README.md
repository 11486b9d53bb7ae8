# cubraycast

A small first-person maze explorer. It reads a `.cub` scene file, checks
that the scene is valid, and shows it in a 1600×900 window with ray-cast,
textured walls, flat floor and ceiling colours, and a minimap in the
top-left corner.

## Installing

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Running

```
cubraycast path/to/scene.cub
```

`python -m cubraycast.app path/to/scene.cub` does the same.

The command takes exactly one argument. It prints a message and exits
with status 1 when:

| Problem                                   | Message                          |
|-------------------------------------------|----------------------------------|
| not exactly one argument                  | `You should enter 2 arguments`   |
| the name is not something ending in `.cub`| `File extenssion should be .cub` |
| the scene is not valid                    | `Map not valid`                  |
| a wall texture cannot be decoded          | `Xpm file not valid`             |

### Controls

| Key         | Action            |
|-------------|-------------------|
| W / S       | walk forward/back |
| A / D       | step left/right   |
| Left/Right  | turn              |
| Esc         | quit              |

Closing the window also quits; in both cases `EXIT` is printed. Moves
into a wall are refused.

## Scene files

A scene starts with six element lines, in any order, followed by the map:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0

111111
100101
1010N1
111111
```

- `NO`, `SO`, `WE`, `EA` name the wall textures. Each path must start
  with `.`, end in `.xpm`, and name a file that can be opened.
- `F` and `C` set the floor and ceiling colours as `R,G,B`; each part is
  one to three digits and at most 255. Blanks may surround the parts but
  may not split a number.
- Each element must appear exactly once, and the six element lines must
  be the first non-empty lines of the file.
- The map uses `1` for walls, `0` for open floor and exactly one of `N`,
  `S`, `E`, `W` for the player's start and facing direction. Spaces may
  stand outside the walls. The map has to be closed: the first and last
  rows hold only walls and blanks, every row starts and ends with a wall,
  and no open cell touches a space or the end of a shorter neighbouring
  row. There may be no empty line inside the map, and the file may not
  end with a newline.

Textures are XPM images. Colours may be given as `#RGB`, `#RRGGBB` (or
longer hex forms), `None`, or one of the names black, white, red, green,
blue, yellow, cyan and magenta.

## Using it as a library

- `cubraycast.layout.load_scene(path)` reads and checks a scene and
  returns a `Scene` (`rows`, `textures`, `ceiling`, `floor`); problems
  raise `cubraycast.elements.SceneError`. `build_scene(lines)` and
  `split_scene_text(text)` do the same from text already in memory, and
  `check_walls(rows)`, `check_player(rows)`, `is_closed(rows)` and
  `check_spaces(rows)` check a map on its own.
- `cubraycast.elements.parse_elements(lines)` collects the element lines
  into an `Elements`; `parse_texture_line`, `parse_color_line`,
  `validate_colors` and `check_texture_files` check single parts.
- `cubraycast.textures.load_xpm(path)` and `parse_xpm(text)` decode an XPM
  image into a `Texture`; bad images raise `XpmError`. `TextureSet.load`
  loads the four wall textures in NO, SO, WE, EA order.
- `cubraycast.player.Player` holds the position and view angle, and
  `move_forward`, `move_backward`, `strafe` and `rotate` move it with wall
  collisions. `Player.from_rows(rows)` places it at the map's marker.
- `cubraycast.raycaster.Renderer` casts the rays and draws a frame into a
  `FrameBuffer`; `render()` returns the finished buffer.
- `cubraycast.app.Game` ties these together; `Game.run()` opens the window.

## What it does not do

There are no sprites, doors, sound, or mouse look, and nothing is saved:
the game only shows the scene and lets the player walk around it.
Rendering is done in pure Python, so frames take a noticeable time to
draw.