"""The running game: state, input handling, doors and the frame loop."""

from __future__ import annotations

import enum
import os
import sys
import time
from array import array
from dataclasses import dataclass

from cubed import minimap
from cubed.canvas import Canvas
from cubed.player import BASE_ROT_STEP, Input, spawn_player
from cubed.raycast import SpriteAnimator, Theme, cast_center_ray, render_column
from cubed.scene import Scene, parse_scene
from cubed.validate import SceneError
from cubed.xpm import Image, XpmError, load_xpm

WIN_W = 800
WIN_H = 600
TITLE = "Cub3D"
DOOR_OPEN_TIME = 3.0
MOUSE_SENSITIVITY = 0.03
SPRITE_PATHS = tuple(f"./sprites/{number}.xpm" for number in range(1, 8))
DOOR_TEXTURE = "./textures/door.xpm"
USAGE = "Error\nUsage: ./cub3d <map.cub>\n"

_C_WHITESPACE = " \t\n\v\f\r"


@dataclass
class Door:
    """A door cell; an open door closes again after DOOR_OPEN_TIME seconds."""

    x: int
    y: int
    is_open: bool = False
    open_timer: float = 0.0


class Key(enum.Enum):
    """Keys the game reacts to (QWERTY and AZERTY movement keys)."""

    W = enum.auto()
    Z = enum.auto()
    S = enum.auto()
    A = enum.auto()
    Q = enum.auto()
    D = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    ESC = enum.auto()


_KEY_FLAGS = {
    Key.W: "key_up",
    Key.Z: "key_up",
    Key.S: "key_down",
    Key.A: "key_left",
    Key.Q: "key_left",
    Key.D: "key_right",
    Key.LEFT: "rotate_left",
    Key.RIGHT: "rotate_right",
}


def sanitize_path(raw: str | None) -> str | None:
    """Strip leading and trailing whitespace from a texture path."""
    if raw is None:
        return None
    return raw.strip(_C_WHITESPACE)


def load_theme(scene: Scene, base_dir: str | os.PathLike[str]) -> Theme:
    """Load the wall, door and sprite textures, relative to ``base_dir``."""
    base = os.fspath(base_dir)

    def load(path: str) -> Image:
        clean = sanitize_path(path) or ""
        try:
            return load_xpm(os.path.join(base, clean))
        except XpmError as exc:
            raise XpmError(f"Failed to load texture : {clean}") from exc

    sprites = SpriteAnimator([load(path) for path in SPRITE_PATHS])
    try:
        north, south, east, west = (
            scene.textures[side] for side in ("north", "south", "east", "west")
        )
    except KeyError:
        raise SceneError("Missing texture") from None
    return Theme(
        north=load(north),
        south=load(south),
        east=load(east),
        west=load(west),
        door=load(DOOR_TEXTURE),
        sprites=sprites,
    )


class Game:
    """The whole game state: map, player, doors, input and frame buffer."""

    def __init__(
        self,
        scene: Scene,
        theme: Theme,
        width: int = WIN_W,
        height: int = WIN_H,
    ) -> None:
        if scene.player is None:
            raise SceneError("Invalid number of player positions")
        x, y, direction = scene.player
        self.scene = scene
        self.theme = theme
        self.canvas = Canvas(width, height)
        self.grid = list(scene.grid)
        self.player = spawn_player(x, y, direction)
        self.input = Input()
        self.doors = [
            Door(col, row)
            for row, line in enumerate(self.grid)
            for col, cell in enumerate(line)
            if cell == "D"
        ]
        self.frame_time = 0.0
        self.last_time: float | None = None
        self.running = True
        self._last_mouse_x: int | None = None

    def _set_cell(self, x: int, y: int, cell: str) -> None:
        row = self.grid[y]
        self.grid[y] = row[:x] + cell + row[x + 1:]

    def door_at(self, x: int, y: int) -> Door | None:
        """Return the door at cell (x, y), or None."""
        return next((d for d in self.doors if d.x == x and d.y == y), None)

    def key_press(self, key: Key) -> None:
        """Start the action bound to a key; ESC stops the game."""
        if key is Key.ESC:
            self.running = False
            return
        flag = _KEY_FLAGS.get(key)
        if flag is not None:
            setattr(self.input, flag, True)

    def key_release(self, key: Key) -> None:
        """Stop the action bound to a key."""
        flag = _KEY_FLAGS.get(key)
        if flag is not None:
            setattr(self.input, flag, False)

    def mouse_move(self, x: int) -> None:
        """Turn the view by the horizontal distance the mouse moved."""
        if self._last_mouse_x is None:
            self._last_mouse_x = x
        delta = x - self._last_mouse_x
        self._last_mouse_x = x
        if delta == 0:
            return
        self.frame_time = abs(delta) * MOUSE_SENSITIVITY / BASE_ROT_STEP
        if delta > 0:
            self.player.rotate_right(self.frame_time)
        else:
            self.player.rotate_left(self.frame_time)

    def mouse_click(self, button: int) -> Door | None:
        """On a left click, open the closed door under the crosshair.

        Returns the door that was opened, or None.
        """
        if button != 1:
            return None
        ray = cast_center_ray(self.grid, self.player, self.canvas.width)
        if ray.hit_type != "D":
            return None
        door = self.door_at(ray.map_x, ray.map_y)
        if door is None or door.is_open:
            return None
        door.is_open = True
        door.open_timer = 0.0
        self._set_cell(door.x, door.y, "0")
        return door

    def update_doors(self) -> None:
        """Advance open doors and close those whose time is up."""
        px, py = int(self.player.pos_x), int(self.player.pos_y)
        for door in self.doors:
            if not door.is_open:
                continue
            door.open_timer += self.frame_time
            if door.open_timer < DOOR_OPEN_TIME:
                continue
            if (px, py) == (door.x, door.y):
                door.open_timer = 0.0
            else:
                door.is_open = False
                self._set_cell(door.x, door.y, "D")

    def render_frame(self, now: float) -> Canvas:
        """Update the world for time ``now`` (seconds) and draw one frame."""
        self.frame_time = 0.0 if self.last_time is None else now - self.last_time
        self.last_time = now
        self.player.update(self.input, self.grid, self.frame_time)
        self.update_doors()
        ceiling = self.scene.ceiling.to_hex()
        floor = self.scene.floor.to_hex()
        for x in range(self.canvas.width):
            render_column(
                self.canvas, self.grid, self.player, x,
                self.theme, ceiling, floor, now,
            )
        self.canvas.draw_crosshair()
        minimap.draw_map(self.canvas, self.grid)
        minimap.draw_player(self.canvas, self.grid, self.player)
        minimap.draw_rays(self.canvas, self.grid, self.player)
        return self.canvas


def _to_rgb_bytes(canvas: Canvas) -> bytes:
    data = array("I", canvas.pixels)
    if sys.byteorder == "big":
        data.byteswap()
    raw = data.tobytes()
    rgb = bytearray(len(canvas.pixels) * 3)
    rgb[0::3] = raw[2::4]
    rgb[1::3] = raw[1::4]
    rgb[2::3] = raw[0::4]
    return bytes(rgb)


def _run(game: Game) -> None:
    import pygame

    pygame.init()
    try:
        size = (game.canvas.width, game.canvas.height)
        screen = pygame.display.set_mode(size)
        pygame.display.set_caption(TITLE)
        keys = {
            pygame.K_w: Key.W,
            pygame.K_z: Key.Z,
            pygame.K_s: Key.S,
            pygame.K_a: Key.A,
            pygame.K_q: Key.Q,
            pygame.K_d: Key.D,
            pygame.K_LEFT: Key.LEFT,
            pygame.K_RIGHT: Key.RIGHT,
            pygame.K_ESCAPE: Key.ESC,
        }
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.running = False
                elif event.type == pygame.KEYDOWN and event.key in keys:
                    game.key_press(keys[event.key])
                elif event.type == pygame.KEYUP and event.key in keys:
                    game.key_release(keys[event.key])
                elif event.type == pygame.MOUSEMOTION:
                    game.mouse_move(event.pos[0])
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    game.mouse_click(event.button)
            if not game.running:
                break
            canvas = game.render_frame(time.time())
            surface = pygame.image.frombuffer(_to_rgb_bytes(canvas), size, "RGB")
            screen.blit(surface, (0, 0))
            pygame.display.flip()
    finally:
        pygame.quit()


def main(argv: list[str] | None = None) -> int:
    """Start the game on the scene file named on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        sys.stderr.write(USAGE)
        return 1
    try:
        scene = parse_scene(args[0])
        theme = load_theme(scene, os.getcwd())
        game = Game(scene, theme)
    except (SceneError, XpmError) as exc:
        print(f"Error\n{exc}")
        return 1
    _run(game)
    return 0


if __name__ == "__main__":
    sys.exit(main())