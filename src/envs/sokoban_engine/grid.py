# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Grid model for Sokoban levels.

Levels use the usual text notation:

    #  wall          @  player         +  player on goal
    $  box           *  box on goal    .  goal
       (space) floor

A grid is a list of rows, each a list of single-character symbols, indexed
``grid[y][x]``. Positions are ``(x, y)`` tuples.
"""

from typing import List

import numpy as np

from .errors import InconsistentGridError, InvalidLevelError
from .models import (
    BOARD_ENCODING,
    BOX,
    BOX_ON_GOAL,
    CELL_SYMBOLS,
    FLOOR,
    GOAL,
    PLAYER,
    PLAYER_ON_GOAL,
    WALL,
    Grid,
    Position,
)


def parse_level(level_text: str) -> Grid:
    """
    Parse level text into a grid.

    Zero-length lines (typically leading and trailing blank lines) are
    dropped. Nothing else is checked; see ``validate_level``.
    """
    return [list(line) for line in level_text.split("\n") if len(line) != 0]


def find_char(grid: Grid, char: str) -> List[Position]:
    """Return every position holding ``char``, top-to-bottom, left-to-right."""
    found = []
    for y, row in enumerate(grid):
        for x, cell in enumerate(row):
            if cell == char:
                found.append((x, y))
    return found


def find_player(grid: Grid) -> Position:
    """Locate the player, preferring a plain player cell over one on a goal."""
    found = find_char(grid, PLAYER) or find_char(grid, PLAYER_ON_GOAL)
    if not found:
        raise InconsistentGridError("No player on the grid")
    return found[0]


def clone_grid(grid: Grid) -> Grid:
    """Copy a grid; the copy shares no rows with ``grid``."""
    return [list(row) for row in grid]


def count_boxes(grid: Grid) -> int:
    """Number of box-bearing cells, on a goal or not."""
    return len(find_char(grid, BOX)) + len(find_char(grid, BOX_ON_GOAL))


def validate_level(grid: Grid) -> None:
    """
    Reject malformed levels.

    Jagged rows are accepted. Raises InvalidLevelError when the level is
    empty, holds unknown characters, does not have exactly one player, has
    no boxes, has a different number of boxes and goals, or lets the player
    walk past the edge of the grid or the end of a row.
    """
    if not grid:
        raise InvalidLevelError("Level is empty")

    for y, row in enumerate(grid):
        for x, cell in enumerate(row):
            if cell not in CELL_SYMBOLS:
                raise InvalidLevelError(f"Unknown cell symbol {cell!r} at ({x}, {y})")

    players = len(find_char(grid, PLAYER)) + len(find_char(grid, PLAYER_ON_GOAL))
    if players != 1:
        raise InvalidLevelError(f"Level must have exactly one player, found {players}")

    boxes = count_boxes(grid)
    if boxes == 0:
        raise InvalidLevelError("Level has no boxes")

    goals = (
        len(find_char(grid, GOAL))
        + len(find_char(grid, BOX_ON_GOAL))
        + len(find_char(grid, PLAYER_ON_GOAL))
    )
    if goals != boxes:
        raise InvalidLevelError(f"Level has {boxes} boxes but {goals} goals")

    if _player_can_leave(grid):
        raise InvalidLevelError("Level is not enclosed by walls around the player")


def _player_can_leave(grid: Grid) -> bool:
    """Flood fill from the player over non-wall cells, looking for a way off the grid."""
    seen = {find_player(grid)}
    stack = list(seen)
    while stack:
        x, y = stack.pop()
        for nx, ny in ((x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)):
            if ny < 0 or ny >= len(grid) or nx < 0 or nx >= len(grid[ny]):
                return True
            if grid[ny][nx] != WALL and (nx, ny) not in seen:
                seen.add((nx, ny))
                stack.append((nx, ny))
    return False


def grid_to_text(grid: Grid) -> str:
    """Join a grid back into level text."""
    return "\n".join("".join(row) for row in grid)


def grid_to_array(grid: Grid) -> np.ndarray:
    """
    Encode a grid as an integer array of shape (height, width).

    Uses ``BOARD_ENCODING``. Short rows are padded with floor so jagged
    levels still yield a rectangular board.
    """
    height = len(grid)
    width = max((len(row) for row in grid), default=0)
    board = np.full((height, width), BOARD_ENCODING[FLOOR], dtype=int)
    for y, row in enumerate(grid):
        for x, cell in enumerate(row):
            board[y, x] = BOARD_ENCODING.get(cell, BOARD_ENCODING[FLOOR])
    return board
