# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Data models for the Sokoban rules engine.

A level is a grid of single-character cell symbols. Each symbol folds two
things together: what occupies the cell (nothing, the player or a box) and
whether the cell is a goal. ``split_symbol`` and ``join_symbol`` convert
between the symbol and that pair of fields.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Literal, NamedTuple, Optional, Tuple


# Cell symbols
WALL = "#"
FLOOR = " "
GOAL = "."
PLAYER = "@"
PLAYER_ON_GOAL = "+"
BOX = "$"
BOX_ON_GOAL = "*"

CELL_SYMBOLS = frozenset([WALL, FLOOR, GOAL, PLAYER, PLAYER_ON_GOAL, BOX, BOX_ON_GOAL])

Grid = List[List[str]]
Position = Tuple[int, int]  # (x, y)

# Direction names to (dx, dy) unit vectors
DIRECTIONS: Dict[str, Tuple[int, int]] = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}

DIRECTION_CODES: Dict[Tuple[int, int], str] = {
    (0, -1): "u",
    (0, 1): "d",
    (-1, 0): "l",
    (1, 0): "r",
}

# Integer encoding used in observations
BOARD_ENCODING: Dict[str, int] = {
    FLOOR: 0,
    WALL: 1,
    BOX: 2,
    GOAL: 3,
    PLAYER: 4,
    BOX_ON_GOAL: 5,
    PLAYER_ON_GOAL: 6,
}


class Occupant(Enum):
    """What stands on a cell."""

    NONE = "none"
    PLAYER = "player"
    BOX = "box"


_SYMBOL_FIELDS: Dict[str, Tuple[Occupant, bool]] = {
    FLOOR: (Occupant.NONE, False),
    GOAL: (Occupant.NONE, True),
    PLAYER: (Occupant.PLAYER, False),
    PLAYER_ON_GOAL: (Occupant.PLAYER, True),
    BOX: (Occupant.BOX, False),
    BOX_ON_GOAL: (Occupant.BOX, True),
}

_FIELDS_SYMBOL: Dict[Tuple[Occupant, bool], str] = {
    fields: symbol for symbol, fields in _SYMBOL_FIELDS.items()
}


def split_symbol(symbol: str) -> Optional[Tuple[Occupant, bool]]:
    """
    Decompose a cell symbol into ``(occupant, is_goal)``.

    Returns None for walls and for characters that are not cell symbols.
    """
    return _SYMBOL_FIELDS.get(symbol)


def join_symbol(occupant: Occupant, is_goal: bool) -> str:
    """Compose the cell symbol for an occupant standing on a (goal) cell."""
    return _FIELDS_SYMBOL[(occupant, is_goal)]


class Score(NamedTuple):
    """Move and push counters of a session."""

    moves: int
    pushes: int


@dataclass(kw_only=True)
class SokobanAction:
    """
    Action for the Sokoban environment.

    Attributes:
        direction: The direction to move ("up", "down", "left", "right")
    """

    direction: Literal["up", "down", "left", "right"]


@dataclass(kw_only=True)
class SokobanObservation:
    """
    Observation from the Sokoban environment.

    Attributes:
        board: Flattened representation of the game board.
                Each cell is encoded as:
                0 = empty floor
                1 = wall
                2 = box
                3 = goal
                4 = player
                5 = box on goal
                6 = player on goal
        board_shape: Shape of the board (height, width)
        num_boxes: Total number of boxes in the puzzle
        boxes_on_goals: Number of boxes currently on goal positions
        player_position: (row, col) position of the player
        moves_count: Number of moves taken so far
        pushes_count: Number of box pushes performed
        is_solved: Whether all boxes are on goals
        solution: Direction codes of the moves so far (uppercase = push)
        legal_moves: Directions the player can currently move in
    """

    board: List[int]
    board_shape: List[int]
    num_boxes: int
    boxes_on_goals: int
    player_position: List[int]
    moves_count: int = 0
    pushes_count: int = 0
    is_solved: bool = False
    solution: str = ""
    legal_moves: List[str] = field(default_factory=list)
    done: bool = False
    reward: Optional[float] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class EpisodeState:
    """Episode bookkeeping of the environment."""

    episode_id: Optional[str] = None
    step_count: int = 0
