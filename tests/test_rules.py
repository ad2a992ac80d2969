import pytest

from envs.sokoban_engine.errors import InconsistentGridError, UnknownDirectionError
from envs.sokoban_engine.grid import clone_grid, parse_level
from envs.sokoban_engine.models import (
    BOX,
    BOX_ON_GOAL,
    FLOOR,
    GOAL,
    PLAYER,
    PLAYER_ON_GOAL,
    WALL,
)
from envs.sokoban_engine.rules import check_game_won, move_player, swap_tiles

ROOM = """
#####
#   #
# @ #
#   #
#####
"""


def row(text):
    return parse_level(text)


@pytest.mark.parametrize(
    "source, destination, new_source, new_destination",
    [
        (PLAYER, FLOOR, FLOOR, PLAYER),
        (PLAYER, GOAL, FLOOR, PLAYER_ON_GOAL),
        (PLAYER_ON_GOAL, FLOOR, GOAL, PLAYER),
        (PLAYER_ON_GOAL, GOAL, GOAL, PLAYER_ON_GOAL),
        (BOX, FLOOR, FLOOR, BOX),
        (BOX, GOAL, FLOOR, BOX_ON_GOAL),
        (BOX_ON_GOAL, FLOOR, GOAL, BOX),
        (BOX_ON_GOAL, GOAL, GOAL, BOX_ON_GOAL),
    ],
)
def test_swap_tiles_table(source, destination, new_source, new_destination):
    grid = [[source, destination]]
    swap_tiles(grid, (0, 0), (1, 0))
    assert grid == [[new_source, new_destination]]


@pytest.mark.parametrize(
    "source, destination",
    [
        (PLAYER, WALL),
        (PLAYER, BOX),
        (BOX, PLAYER_ON_GOAL),
        (FLOOR, GOAL),
        (WALL, FLOOR),
        ("x", FLOOR),
    ],
)
def test_swap_tiles_other_pairs_do_nothing(source, destination):
    grid = [[source, destination]]
    swap_tiles(grid, (0, 0), (1, 0))
    assert grid == [[source, destination]]


@pytest.mark.parametrize(
    "dx, dy, code, expected",
    [
        (0, -1, "u", (2, 1)),
        (0, 1, "d", (2, 3)),
        (-1, 0, "l", (1, 2)),
        (1, 0, "r", (3, 2)),
    ],
)
def test_step_in_each_direction(dx, dy, code, expected):
    grid = parse_level(ROOM)
    assert move_player(grid, dx, dy, True) == code
    x, y = expected
    assert grid[y][x] == PLAYER
    assert grid[2][2] == FLOOR


def test_step_onto_and_off_goal():
    grid = row("#@. #")
    assert move_player(grid, 1, 0, True) == "r"
    assert grid == row("# + #")
    assert move_player(grid, 1, 0, True) == "r"
    assert grid == row("# .@#")


def test_wall_rejects_without_change():
    grid = row("#@ #")
    assert move_player(grid, -1, 0, True) is None
    assert grid == row("#@ #")


def test_push_onto_goal():
    grid = row("#@$.#")
    assert move_player(grid, 1, 0, True) == "R"
    assert grid == row("# @*#")


def test_push_off_goal():
    grid = row("#@* #")
    assert move_player(grid, 1, 0, True) == "R"
    assert grid == row("# +$#")


def test_push_from_goal_onto_goal():
    grid = row("#+$.#")
    assert move_player(grid, 1, 0, True) == "R"
    assert grid == row("#.@*#")


@pytest.mark.parametrize("text", ["#@$#", "#@$$ #", "#@*$.#"])
def test_blocked_push_rejected(text):
    grid = row(text)
    assert move_player(grid, 1, 0, True) is None
    assert grid == row(text)


def test_push_disabled():
    grid = row("#@$ #")
    assert move_player(grid, 1, 0, True, can_push=False) is None
    assert grid == row("#@$ #")


def test_evaluate_without_apply():
    grid = row("#@$ #")
    before = clone_grid(grid)
    assert move_player(grid, 1, 0, False) == "R"
    assert move_player(grid, -1, 0, False) is None
    assert grid == before


@pytest.mark.parametrize("dx, dy", [(1, 1), (0, 0), (2, 0), (0, -2)])
def test_unknown_direction_raises(dx, dy):
    grid = parse_level(ROOM)
    with pytest.raises(UnknownDirectionError):
        move_player(grid, dx, dy, True)
    assert grid == parse_level(ROOM)


@pytest.mark.parametrize("text", ["#@@#", "#@x#", "@ "])
def test_inconsistent_target_raises(text):
    grid = row(text)
    dx = -1 if text == "@ " else 1
    with pytest.raises(InconsistentGridError):
        move_player(grid, dx, 0, True)


def test_no_player_raises():
    with pytest.raises(InconsistentGridError):
        move_player(row("#$.#"), 1, 0, True)


def test_check_game_won():
    assert check_game_won(row("# @*#")) is True
    assert check_game_won(row("#@$.#")) is False
    assert check_game_won(parse_level("#@*.#\n# $ #")) is False
