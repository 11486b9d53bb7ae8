import pytest

from cubraycast.app import Game, check_extension, main
from cubraycast.layout import Scene
from cubraycast.player import KEY_A, KEY_D, KEY_ESC, KEY_LEFT, KEY_RIGHT, KEY_S, KEY_W
from cubraycast.textures import Texture, TextureSet, XpmError

ROWS = ["111111", "100001", "10N001", "111111"]


def _textures():
    texture = Texture(width=1, height=1, pixels=(0x123456,))
    return TextureSet((texture,) * 4)


def _scene():
    return Scene(
        rows=list(ROWS),
        textures=("./a.xpm",) * 4,
        ceiling=(1, 2, 3),
        floor=(4, 5, 6),
    )


@pytest.fixture
def game():
    return Game(_scene(), _textures())


@pytest.mark.parametrize(
    "path, expected",
    [
        ("map.cub", True),
        ("a.cub", True),
        ("maps/level.cub", True),
        (".cub", False),
        ("cub", False),
        ("map.txt", False),
        ("map.cub.txt", False),
        ("", False),
    ],
)
def test_check_extension(path, expected):
    assert check_extension(path) is expected


def test_main_without_arguments(capsys):
    assert main([]) == 1
    assert "You should enter 2 arguments" in capsys.readouterr().out


def test_main_with_too_many_arguments(capsys):
    assert main(["a.cub", "b.cub"]) == 1
    assert "You should enter 2 arguments" in capsys.readouterr().out


def test_main_rejects_wrong_extension(capsys):
    assert main(["map.txt"]) == 1
    assert "File extenssion should be .cub" in capsys.readouterr().out


def test_main_missing_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["missing.cub"]) == 1
    assert "Map not valid" in capsys.readouterr().out


def test_main_bad_texture(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "t.xpm").write_text("garbage", encoding="utf-8")
    text = "\n".join(
        [
            "NO ./t.xpm",
            "SO ./t.xpm",
            "WE ./t.xpm",
            "EA ./t.xpm",
            "F 220,100,0",
            "C 225,30,0",
            *ROWS,
        ]
    )
    (tmp_path / "level.cub").write_text(text, encoding="utf-8")
    assert main(["level.cub"]) == 1
    assert "Xpm file not valid" in capsys.readouterr().out


def test_game_loads_missing_textures_raises(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(XpmError):
        Game(_scene())


def test_game_keeps_scene_rows_untouched(game):
    assert game.scene.rows == ROWS
    assert "N" not in "".join(game.rows)
    assert game.player.x == 100.0
    assert game.player.y == 100.0


def test_escape_ends_game(game, capsys):
    assert game.handle_key(KEY_ESC) is False
    assert "EXIT" in capsys.readouterr().out


def test_forward_moves_up_the_map(game):
    game.dirty = False
    assert game.handle_key(KEY_W) is True
    assert game.player.y < 100.0
    assert game.player.x == pytest.approx(100.0, abs=0.1)
    assert game.dirty is True


def test_backward_then_forward_returns(game):
    game.handle_key(KEY_S)
    assert game.player.y > 100.0
    game.handle_key(KEY_W)
    assert game.player.y == pytest.approx(100.0, abs=1e-6)


def test_forward_stops_at_wall(game):
    for _ in range(20):
        game.handle_key(KEY_W)
    y = game.player.y
    game.dirty = False
    game.handle_key(KEY_W)
    assert game.player.y == y
    assert game.player.y >= 50.0
    assert game.dirty is False


def test_strafe_right_and_left(game):
    game.handle_key(KEY_D)
    assert game.player.x > 100.0
    game.handle_key(KEY_A)
    game.handle_key(KEY_A)
    assert game.player.x < 100.0


def test_rotation_round_trip(game):
    start = game.player.angle
    game.handle_key(KEY_RIGHT)
    assert game.player.angle > start
    game.handle_key(KEY_LEFT)
    assert game.player.angle == pytest.approx(start)


def test_unknown_key_changes_nothing(game):
    game.dirty = False
    before = (game.player.x, game.player.y, game.player.angle)
    assert game.handle_key(99) is True
    assert (game.player.x, game.player.y, game.player.angle) == before
    assert game.dirty is False