# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Sokoban Environment Implementation.

Wraps a Game session in the reset/step interface of a reinforcement learning
environment: every step returns an observation with the encoded board,
counters and a shaped reward.
"""

import logging
from typing import Optional
from uuid import uuid4

from ..game import Game
from ..grid import count_boxes, find_char, find_player, grid_to_array
from ..models import BOX_ON_GOAL, EpisodeState, SokobanAction, SokobanObservation

DEFAULT_LEVEL = """
    #####
    #   #
    #$  #
  ###  $##
  #  $ $ #
### # ## #   ######
#   # ## #####  ..#
# $  $          ..#
##### ### #@##  ..#
    #     #########
    #######
"""

logger = logging.getLogger(__name__)


class SokobanEnvironment:
    """
    Sokoban puzzle game environment.

    The goal is to push all boxes onto goal positions. The player can move
    in four directions. If there's a box in the direction of movement and
    an empty space behind it, the box will be pushed.

    Rewards:
        - +10 for placing a box on a goal
        - -10 for removing a box from a goal
        - +100 for solving the puzzle (all boxes on goals)
        - -0.1 for each move (to encourage efficiency)

    Example:
        >>> env = SokobanEnvironment()
        >>> obs = env.reset()
        >>> print(f"Board size: {obs.board_shape}")
        >>> print(f"Number of boxes: {obs.num_boxes}")
        >>>
        >>> obs = env.step(SokobanAction(direction="up"))
        >>> print(f"Boxes on goals: {obs.boxes_on_goals}/{obs.num_boxes}")
        >>> print(f"Reward: {obs.reward}")
    """

    def __init__(
        self,
        level_text: str = DEFAULT_LEVEL,
        max_steps: int = 200,
        validate: bool = True,
    ):
        """
        Initialize the Sokoban environment.

        Args:
            level_text: Level played after each reset without a level
            max_steps: Maximum steps before episode ends (default: 200)
            validate: Reject malformed levels on reset
        """
        self.level_text = level_text
        self.max_steps = max_steps
        self.validate = validate

        self._state = EpisodeState(episode_id=str(uuid4()), step_count=0)
        self._game = Game(level_text, validate=validate)
        self._previous_boxes_on_goals = self._count_boxes_on_goals()

        logger.info(f"SokobanEnvironment initialized with max_steps={max_steps}")

    def reset(self, level_text: Optional[str] = None) -> SokobanObservation:
        """
        Reset the environment and start the level over.

        Args:
            level_text: Optional new level; the current one is kept otherwise

        Returns:
            SokobanObservation with the initial board state
        """
        if level_text is not None:
            # Build the game first so a bad level leaves the environment as it was
            game = Game(level_text, validate=self.validate)
            self.level_text = level_text
            self._game = game
        else:
            self._game.reset()

        self._state = EpisodeState(episode_id=str(uuid4()), step_count=0)
        logger.info(f"Environment reset. New episode ID: {self._state.episode_id}")
        self._previous_boxes_on_goals = self._count_boxes_on_goals()

        return self._get_observation()

    def step(self, action: SokobanAction) -> SokobanObservation:
        """
        Execute a step in the environment by moving the player.

        Args:
            action: SokobanAction containing the direction to move

        Returns:
            SokobanObservation with the updated board state
        """
        code = self._game.move(action.direction)
        self._state.step_count += 1
        reward = -0.1  # Small penalty for each move

        if code is not None and code.isupper():
            current_boxes_on_goals = self._count_boxes_on_goals()
            if current_boxes_on_goals > self._previous_boxes_on_goals:
                reward += 10  # Placed a box on goal
            elif current_boxes_on_goals < self._previous_boxes_on_goals:
                reward -= 10  # Removed a box from goal
            self._previous_boxes_on_goals = current_boxes_on_goals

        observation = self._get_observation()

        if observation.is_solved:
            reward += 100  # Big reward for solving
            observation.done = True
            logger.info(
                f"Episode {self._state.episode_id} solved with {self._game.solution()!r}"
            )
        elif self._state.step_count >= self.max_steps:
            observation.done = True
            logger.warning(f"Episode {self._state.episode_id} ended due to max steps reached.")

        observation.reward = reward
        logger.debug(
            f"Step {self._state.step_count}: Action={action.direction}, "
            f"Move={code}, Reward={reward}, Done={observation.done}"
        )
        return observation

    def undo(self) -> SokobanObservation:
        """Take back the last applied move. The step counter keeps running."""
        self._game.undo()
        self._previous_boxes_on_goals = self._count_boxes_on_goals()
        return self._get_observation()

    @property
    def game(self) -> Game:
        return self._game

    def _count_boxes_on_goals(self) -> int:
        return len(find_char(self._game.state(), BOX_ON_GOAL))

    def _get_observation(self) -> SokobanObservation:
        """Create an observation from the current board state."""
        grid = self._game.state()
        board = grid_to_array(grid)
        player_x, player_y = find_player(grid)
        moves, pushes = self._game.score()

        return SokobanObservation(
            board=board.flatten().tolist(),
            board_shape=list(board.shape),
            num_boxes=count_boxes(grid),
            boxes_on_goals=self._count_boxes_on_goals(),
            player_position=[player_y, player_x],
            moves_count=moves,
            pushes_count=pushes,
            is_solved=self._game.has_won(),
            solution=self._game.solution(),
            legal_moves=self._game.legal_moves(),
            done=False,
            reward=0.0,
            metadata={
                "step": self._state.step_count,
                "max_steps": self.max_steps,
            },
        )

    @property
    def state(self) -> EpisodeState:
        """
        Get the current environment state.

        Returns:
            Current EpisodeState with episode_id and step_count
        """
        return self._state
