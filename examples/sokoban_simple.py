"""
Sokoban Engine Simple Example

This script demonstrates basic usage of the Sokoban engine.
It plays a small level, shows a rejected move, undoes a move and prints
the score and solution string.

Usage:
    python examples/sokoban_simple.py
"""

import sys
from pathlib import Path

# Add src directory to Python path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from envs.sokoban_engine import new_game
from envs.sokoban_engine.grid import grid_to_text

LEVEL = """
######
#    #
#.$@ #
#  $ #
#  . #
######
"""


def print_board(game):
    """Print the current board between two rulers."""
    text = grid_to_text(game.state())
    width = max(len(line) for line in text.split("\n"))
    print("─" * width)
    print(text)
    print("─" * width)


def main():
    print("Sokoban Engine Example")
    print("=" * 50)

    game = new_game(LEVEL, validate=True)
    print_board(game)
    print(f"Legal moves: {', '.join(game.legal_moves())}")

    # The second "left" runs the box into the wall and is rejected
    example_moves = ["left", "left", "right", "up", "down"]
    for i, direction in enumerate(example_moves, 1):
        code = game.move(direction)
        print(f"\n--- Move {i}: {direction.upper()} -> {code} ---")
        print_board(game)

    print("\nTaking back the last move...")
    game.undo()
    print_board(game)

    for direction in ["down", "down"]:
        game.move(direction)
    print_board(game)

    moves, pushes = game.score()
    print(f"\nSolved: {game.has_won()}")
    print(f"Moves: {moves}, pushes: {pushes}")
    print(f"Solution: {game.solution()}")


if __name__ == "__main__":
    main()
