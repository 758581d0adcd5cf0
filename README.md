# cubed

A small first-person maze explorer drawn with a raycaster. You walk around a
map described in a `.cub` scene file, with walls textured from XPM images,
doors that open on a click and close again after three seconds, animated
sprite blocks and a minimap in the top-left corner.

## Installing

```
pip install .
```

This installs `pygame`, which opens the window and reads the keyboard and
mouse.

## Running

```
cubed path/to/level.cub
```

The command takes exactly one argument; otherwise it prints a usage message
and exits with status 1. The file name must end in `.cub`. Any problem with
the scene or a texture is printed as `Error` followed by a reason, and the
command exits with status 1.

The window is 800 x 600 pixels and titled `Cub3D`.

### Controls

| Key                | Action        |
|--------------------|---------------|
| W / Z              | move forward  |
| S                  | move backward |
| A / Q              | strafe left   |
| D                  | strafe right  |
| Left / Right arrow | turn          |
| Mouse movement     | turn          |
| Left click         | open the door under the crosshair |
| Esc                | quit          |

Closing the window also quits.

## Scene files

A scene file holds six settings, then the map:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0

111111
100D01
10N0X1
111111
```

- `NO`, `SO`, `WE` and `EA` give the wall textures as XPM files.
- `F` and `C` give the floor and ceiling colours as `R,G,B`, each from 0 to 255.
- Each setting may appear only once; a repeated one is an error.
- Map cells: `1` wall, `0` floor, ` ` empty space, `N`/`S`/`E`/`W` the player's
  start and facing, `D` a door, `X` an animated sprite block.

The map must be closed by walls, hold exactly one player start, and contain no
blank lines inside or after it.

Texture paths, and the extra files below, are read relative to the current
directory. Besides the four wall textures, the game loads
`./textures/door.xpm` and the sprite frames `./sprites/1.xpm` to
`./sprites/7.xpm`; the sprite block changes frame every half second.

## Using it as a library

The parts work without a window:

```python
from cubed.scene import parse_scene
from cubed.xpm import load_xpm
from cubed.colornames import lookup_color

scene = parse_scene("level.cub")       # raises cubed.validate.SceneError
print(scene.floor.to_hex(), scene.player)

image = load_xpm("textures/north.xpm")  # raises cubed.xpm.XpmError
print(image.width, image.height, hex(image.get_pixel(0, 0)))

print(hex(lookup_color("steel blue")))  # 0x4682b4
```

A whole frame can be drawn into memory:

```python
import os
from cubed.game import Game, Key, load_theme

theme = load_theme(scene, os.getcwd())
game = Game(scene, theme)
game.key_press(Key.W)
canvas = game.render_frame(0.0)         # a cubed.canvas.Canvas
print(hex(canvas.get_pixel(400, 300)))
```

The other modules:

- `cubed.validate` checks map grids (`validate_map`, `find_player`, ...).
- `cubed.player` has `Player`, which moves with wall collision and turns.
- `cubed.raycast` casts rays (`cast_ray`, `cast_center_ray`) and draws wall
  columns (`render_column`) with a `Theme` of textures.
- `cubed.minimap` draws the overview map, the player and the view rays.
- `cubed.canvas` is the in-memory frame buffer all drawing goes to.

## What it does not do

There is no sound, no enemies and no saving: the game is a walk through the
map with doors to open. XPM is the only texture format it reads.