# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Movement rules for Sokoban.

The player moves in four directions. Walking into a box pushes it when the
cell behind the box is free; boxes are never pulled and only one box moves
at a time.

``move_player`` first decides whether a move is legal and only then, if
asked to, applies it to the grid. A rejected move returns None and leaves
the grid untouched. A corrupted grid or an unknown direction raises.
"""

from typing import Optional

from .errors import InconsistentGridError, UnknownDirectionError
from .grid import find_char, find_player
from .models import (
    BOX,
    BOX_ON_GOAL,
    DIRECTION_CODES,
    FLOOR,
    GOAL,
    WALL,
    Grid,
    Occupant,
    Position,
    join_symbol,
    split_symbol,
)

OPEN_CELLS = (FLOOR, GOAL)
BOX_CELLS = (BOX, BOX_ON_GOAL)


def direction_code(dx: int, dy: int) -> str:
    """Lowercase log letter for a unit direction."""
    try:
        return DIRECTION_CODES[(dx, dy)]
    except KeyError:
        raise UnknownDirectionError(f"Unknown direction ({dx}, {dy})") from None


def _cell_at(grid: Grid, x: int, y: int) -> Optional[str]:
    """Symbol at (x, y), or None outside the grid."""
    if y < 0 or y >= len(grid) or x < 0 or x >= len(grid[y]):
        return None
    return grid[y][x]


def swap_tiles(grid: Grid, source: Position, destination: Position) -> None:
    """
    Move the occupant of ``source`` onto ``destination``.

    Both cells keep their own goal flag. Only a player or box moving onto an
    unoccupied floor or goal cell changes anything; every other pairing
    leaves the grid as it is.
    """
    sx, sy = source
    tx, ty = destination
    source_fields = split_symbol(grid[sy][sx])
    destination_fields = split_symbol(grid[ty][tx])
    if source_fields is None or destination_fields is None:
        return

    occupant, source_is_goal = source_fields
    destination_occupant, destination_is_goal = destination_fields
    if occupant is Occupant.NONE or destination_occupant is not Occupant.NONE:
        return

    grid[sy][sx] = join_symbol(Occupant.NONE, source_is_goal)
    grid[ty][tx] = join_symbol(occupant, destination_is_goal)


def move_player(
    grid: Grid, dx: int, dy: int, apply: bool, can_push: bool = True
) -> Optional[str]:
    """
    Evaluate a move of the player by (dx, dy).

    Args:
        grid: Grid to evaluate against (mutated only when ``apply`` is set)
        dx: Column delta, one of -1, 0, 1
        dy: Row delta, one of -1, 0, 1
        apply: Whether to perform the move on ``grid``
        can_push: Whether pushing a box is allowed

    Returns:
        The direction code of the move, uppercase for a push, or None when
        the move is not allowed.

    Raises:
        UnknownDirectionError: (dx, dy) is not a unit direction
        InconsistentGridError: the grid has no player or the target cell
            holds something the player can never walk into
    """
    code = direction_code(dx, dy)
    player_x, player_y = find_player(grid)
    target_x, target_y = player_x + dx, player_y + dy
    target = _cell_at(grid, target_x, target_y)

    if target in OPEN_CELLS:
        if apply:
            swap_tiles(grid, (player_x, player_y), (target_x, target_y))
        return code

    if target == WALL:
        return None

    if target in BOX_CELLS:
        if not can_push:
            return None

        box_target_x, box_target_y = target_x + dx, target_y + dy
        if _cell_at(grid, box_target_x, box_target_y) in OPEN_CELLS:
            if apply:
                # The box must leave the target before the player enters it
                swap_tiles(grid, (target_x, target_y), (box_target_x, box_target_y))
                swap_tiles(grid, (player_x, player_y), (target_x, target_y))
            return code.upper()
        return None

    raise InconsistentGridError(
        f"Unexpected cell {target!r} at ({target_x}, {target_y})"
    )


def check_game_won(grid: Grid) -> bool:
    """A level is solved once no box stands off a goal."""
    return len(find_char(grid, BOX)) == 0
