import pytest

from envs.sokoban_engine.errors import InconsistentGridError, InvalidLevelError
from envs.sokoban_engine.grid import (
    clone_grid,
    count_boxes,
    find_char,
    find_player,
    grid_to_array,
    grid_to_text,
    parse_level,
    validate_level,
)
from envs.sokoban_engine.models import GOAL

LVL = """
#####
#@$.#
#####
"""


def test_parse_drops_blank_lines():
    grid = parse_level(LVL)
    assert len(grid) == 3
    assert all(len(row) == 5 for row in grid)
    assert grid[1] == ["#", "@", "$", ".", "#"]


def test_parse_keeps_floor_rows():
    grid = parse_level("#####\n#   #\n#@$.#\n#####")
    assert grid[1] == ["#", " ", " ", " ", "#"]


def test_parse_keeps_jagged_rows_and_unknown_symbols():
    grid = parse_level("###\n#@x")
    assert grid == [["#", "#", "#"], ["#", "@", "x"]]


def test_find_char_row_major_order():
    grid = parse_level("#.#\n.@.")
    assert find_char(grid, GOAL) == [(1, 0), (0, 1), (2, 1)]
    assert find_char(grid, "$") == []


def test_find_player_prefers_plain_player():
    assert find_player(parse_level("+@")) == (1, 0)
    assert find_player(parse_level("# +")) == (2, 0)


def test_find_player_missing():
    with pytest.raises(InconsistentGridError):
        find_player(parse_level("#$.#"))


def test_clone_is_independent():
    grid = parse_level(LVL)
    clone = clone_grid(grid)
    assert clone == grid
    clone[1][1] = " "
    assert grid[1][1] == "@"
    assert all(a is not b for a, b in zip(grid, clone))


def test_count_boxes():
    assert count_boxes(parse_level("#@$*.#")) == 2


def test_validate_accepts_jagged_level():
    validate_level(parse_level("  ####\n###@ #\n#  $.#\n######"))


@pytest.mark.parametrize(
    "text",
    [
        "",
        "#@x.$#",
        "#@@$.#",
        "# $. #",
        "#@  .#",
        "#@$  #",
        "#@$$.#",
        "@$.#",
        "###\n#@$.#\n#####",
        "#####\n#@$. \n#####",
    ],
)
def test_validate_rejects_malformed_levels(text):
    with pytest.raises(InvalidLevelError):
        validate_level(parse_level(text))


def test_grid_to_text():
    assert grid_to_text(parse_level(LVL)) == "#####\n#@$.#\n#####"


def test_grid_to_array_pads_short_rows():
    board = grid_to_array(parse_level("###\n#@\n#*+"))
    assert board.shape == (3, 3)
    assert board.tolist() == [[1, 1, 1], [1, 4, 0], [1, 5, 6]]


def test_validate_ignores_open_cells_the_player_cannot_reach():
    validate_level(parse_level("#####   \n#@$.#   \n#####"))
