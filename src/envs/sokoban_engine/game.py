# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Sokoban game session.

A session keeps every grid it has been through (the last one is the live
grid) together with the direction code of each applied move, which gives
undo, reset, scoring and a replayable solution string.
"""

import logging
from typing import List, Optional, Tuple, Union

from .errors import UnknownDirectionError
from .grid import clone_grid, parse_level, validate_level
from .models import DIRECTIONS, Grid, Score
from .rules import check_game_won, move_player

logger = logging.getLogger(__name__)

Direction = Union[str, Tuple[int, int]]


def _resolve_direction(direction: Direction) -> Tuple[int, int]:
    if isinstance(direction, str):
        try:
            return DIRECTIONS[direction]
        except KeyError:
            raise UnknownDirectionError(f"Unknown direction {direction!r}") from None
    try:
        dx, dy = direction
    except (TypeError, ValueError):
        raise UnknownDirectionError(f"Unknown direction {direction!r}") from None
    return dx, dy


class Game:
    """
    One play-through of a level.

    Example:
        >>> game = Game("#####\\n#@$.#\\n#####")
        >>> game.move("right")
        'R'
        >>> game.has_won()
        True
        >>> game.score()
        Score(moves=1, pushes=1)
    """

    def __init__(self, level_text: str, validate: bool = False):
        """
        Initialize a session.

        Args:
            level_text: Level in text notation
            validate: Reject malformed levels up front instead of failing
                during play
        """
        self._level_text = level_text
        self._history: List[Grid] = []
        self._path: List[str] = []

        self._init()
        if validate:
            validate_level(self.state())

        grid = self.state()
        logger.info(f"Game created with a {len(grid)}-row level")

    def _init(self) -> None:
        self._history = [parse_level(self._level_text)]
        self._path = []

    @property
    def level_text(self) -> str:
        return self._level_text

    def state(self) -> Grid:
        """The live grid. Callers must not mutate it."""
        return self._history[-1]

    def has_won(self) -> bool:
        return check_game_won(self.state())

    def move(self, direction: Direction) -> Optional[str]:
        """
        Try to move the player.

        Args:
            direction: "up", "down", "left", "right" or a (dx, dy) unit vector

        Returns:
            The direction code recorded for the move, or None if the move was
            rejected (in which case nothing changes).
        """
        dx, dy = _resolve_direction(direction)
        clone = clone_grid(self.state())
        code = move_player(clone, dx, dy, True)
        if code is None:
            logger.debug(f"Move ({dx}, {dy}) rejected")
            return None

        self._history.append(clone)
        self._path.append(code)
        logger.debug(f"Move {code} applied, {len(self._path)} moves so far")
        return code

    def can_move(self, direction: Direction, can_push: bool = True) -> bool:
        """Whether ``move(direction)`` would be applied. Does not change anything."""
        dx, dy = _resolve_direction(direction)
        return move_player(self.state(), dx, dy, False, can_push) is not None

    def legal_moves(self) -> List[str]:
        """Direction names the player can move in right now."""
        return [name for name in DIRECTIONS if self.can_move(name)]

    def undo(self) -> None:
        """Take back the last move. Does nothing at the start of the level."""
        if len(self._history) > 1:
            self._history.pop()
            code = self._path.pop()
            logger.debug(f"Move {code} undone")

    def reset(self) -> None:
        """Go back to the initial level and forget every move."""
        self._init()
        logger.info("Game reset")

    def score(self) -> Score:
        moves, pushes = 0, 0
        for code in self._path:
            moves += 1
            if code.isupper():
                pushes += 1
        return Score(moves, pushes)

    def solution(self) -> str:
        """Direction codes of all moves so far; uppercase letters are pushes."""
        return "".join(self._path)


def new_game(level_text: str, validate: bool = False) -> Game:
    """Start a session on ``level_text``."""
    return Game(level_text, validate=validate)
