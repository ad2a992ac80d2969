# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Exceptions raised by the Sokoban rules engine.

A rejected move (wall, blocked push) is not an error and never raises.
These exceptions signal a caller bug or a corrupted grid.
"""


class SokobanError(Exception):
    """Base class for all engine errors."""


class UnknownDirectionError(SokobanError, ValueError):
    """Raised when a move is not one of the four unit directions."""


class InconsistentGridError(SokobanError):
    """Raised when the grid contradicts its invariants (no player, bad target)."""


class InvalidLevelError(SokobanError, ValueError):
    """Raised by strict level validation."""
