# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Sokoban Engine - rules, move history and scoring for box-pushing puzzles."""

from .errors import (
    InconsistentGridError,
    InvalidLevelError,
    SokobanError,
    UnknownDirectionError,
)
from .game import Game, new_game
from .grid import clone_grid, find_char, parse_level, validate_level
from .models import Score, SokobanAction, SokobanObservation
from .rules import check_game_won, move_player

__all__ = [
    "Game",
    "new_game",
    "Score",
    "SokobanAction",
    "SokobanObservation",
    "SokobanError",
    "UnknownDirectionError",
    "InconsistentGridError",
    "InvalidLevelError",
    "parse_level",
    "find_char",
    "clone_grid",
    "validate_level",
    "move_player",
    "check_game_won",
]
