import math

import pytest

from cubed.canvas import CROSSHAIR_COLOR
from cubed.game import (
    DOOR_OPEN_TIME,
    Door,
    Game,
    Key,
    _to_rgb_bytes,
    load_theme,
    main,
    sanitize_path,
)
from cubed.canvas import Canvas
from cubed.raycast import SpriteAnimator, Theme
from cubed.scene import Scene, parse_scene_lines
from cubed.xpm import Image, XpmError

NORTH, SOUTH, EAST, WEST, DOOR = 0x0000AA, 0x00AA00, 0xAA0000, 0xAAAA00, 0x00AAAA

SCENE_LINES = [
    "NO ./n.xpm\n",
    "SO ./s.xpm\n",
    "WE ./w.xpm\n",
    "EA ./e.xpm\n",
    "F 10,20,30\n",
    "C 40,50,60\n",
    "\n",
    "111111\n",
    "1N0D01\n",
    "111111",
]

XPM_RED = '/* XPM */\nstatic char *x[] = {\n"2 2 1 1",\n"a c #FF0000",\n"aa",\n"aa"\n};\n'


def _image(color):
    return Image(4, 4, [color] * 16)


def _theme():
    return Theme(
        north=_image(NORTH),
        south=_image(SOUTH),
        east=_image(EAST),
        west=_image(WEST),
        door=_image(DOOR),
        sprites=SpriteAnimator([_image(0x123456)]),
    )


@pytest.fixture
def game():
    return Game(parse_scene_lines(SCENE_LINES), _theme(), width=40, height=30)


def test_doors_found_from_map(game):
    assert game.doors == [Door(3, 1)]
    assert game.door_at(3, 1) is game.doors[0]
    assert game.door_at(0, 0) is None


def test_player_spawned_in_cell_center(game):
    assert (game.player.pos_x, game.player.pos_y) == (1.5, 1.5)
    assert game.player.angle() == pytest.approx(-math.pi / 2)


def test_key_press_and_release(game):
    game.key_press(Key.W)
    assert game.input.key_up is True
    game.key_release(Key.Z)
    assert game.input.key_up is False
    game.key_press(Key.Q)
    assert game.input.key_left is True
    game.key_press(Key.RIGHT)
    assert game.input.rotate_right is True


def test_escape_stops_game(game):
    game.key_press(Key.ESC)
    assert game.running is False


def test_mouse_move_first_event_does_not_turn(game):
    before = game.player.angle()
    game.mouse_move(100)
    assert game.player.angle() == pytest.approx(before)


def test_mouse_move_right_and_left(game):
    game.mouse_move(100)
    game.mouse_move(110)
    assert game.player.angle() == pytest.approx(-math.pi / 2 + 0.3)
    game.mouse_move(100)
    assert game.player.angle() == pytest.approx(-math.pi / 2)


def test_click_on_wall_opens_nothing(game):
    assert game.mouse_click(1) is None
    assert game.grid[1][3] == "D"


def test_click_opens_door(game):
    game.player.set_direction("E")
    assert game.mouse_click(3) is None
    door = game.mouse_click(1)
    assert door is game.doors[0]
    assert door.is_open is True
    assert game.grid[1][3] == "0"


def test_door_closes_after_timeout(game):
    game.player.set_direction("E")
    game.mouse_click(1)
    game.frame_time = DOOR_OPEN_TIME / 2
    game.update_doors()
    assert game.doors[0].is_open is True
    game.update_doors()
    assert game.doors[0].is_open is False
    assert game.grid[1][3] == "D"


def test_door_stays_open_while_player_inside(game):
    game.player.set_direction("E")
    game.mouse_click(1)
    game.player.pos_x = 3.5
    game.frame_time = DOOR_OPEN_TIME
    game.update_doors()
    assert game.doors[0].is_open is True
    assert game.doors[0].open_timer == 0.0
    assert game.grid[1][3] == "0"


def test_render_frame_draws_wall_and_crosshair(game):
    canvas = game.render_frame(100.0)
    assert canvas.get_pixel(0, 0) == SOUTH
    assert canvas.get_pixel(20, 15) == CROSSHAIR_COLOR
    assert game.frame_time == 0.0


def test_render_frame_measures_time(game):
    game.render_frame(100.0)
    game.render_frame(100.25)
    assert game.frame_time == pytest.approx(0.25)
    assert (game.player.pos_x, game.player.pos_y) == (1.5, 1.5)


def test_render_frame_moves_player_with_keys(game):
    game.key_press(Key.W)
    game.render_frame(0.0)
    game.render_frame(0.1)
    assert game.player.pos_y < 1.5
    assert game.player.pos_x == 1.5


def test_sanitize_path():
    assert sanitize_path("  ./a.xpm \n") == "./a.xpm"
    assert sanitize_path(None) is None


def _write_textures(root):
    (root / "sprites").mkdir()
    (root / "textures").mkdir()
    for number in range(1, 8):
        (root / "sprites" / f"{number}.xpm").write_text(XPM_RED)
    (root / "textures" / "door.xpm").write_text(XPM_RED)
    for name in ("n", "s", "w", "e"):
        (root / f"{name}.xpm").write_text(XPM_RED)


def test_load_theme(tmp_path):
    _write_textures(tmp_path)
    scene = parse_scene_lines(SCENE_LINES)
    theme = load_theme(scene, tmp_path)
    assert theme.north.get_pixel(0, 0) == 0xFF0000
    assert theme.door.width == 2
    assert len(theme.sprites.frames) == 7


def test_load_theme_missing_file(tmp_path):
    scene = parse_scene_lines(SCENE_LINES)
    with pytest.raises(XpmError, match="Failed to load texture"):
        load_theme(scene, tmp_path)


def test_game_requires_player():
    with pytest.raises(ValueError):
        Game(Scene(grid=["111"]), _theme(), width=10, height=10)


def test_rgb_bytes():
    canvas = Canvas(2, 1, [0x112233, 0xFF445566])
    assert _to_rgb_bytes(canvas) == bytes([0x11, 0x22, 0x33, 0x44, 0x55, 0x66])


def test_main_usage(capsys):
    assert main([]) == 1
    assert "Usage" in capsys.readouterr().err


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.cub")]) == 1
    assert capsys.readouterr().out.startswith("Error\n")


def test_main_bad_extension(tmp_path, capsys):
    path = tmp_path / "scene.txt"
    path.write_text("".join(SCENE_LINES))
    assert main([str(path)]) == 1
    assert "not a .cub file" in capsys.readouterr().out