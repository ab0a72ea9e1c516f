"""
evaluator.py - Static evaluation of Connect Four positions

Every window of four cells along the four directions is scored from the
counts of empty cells and of each player's pieces, and the window scores are
summed. A gapped three of the opponent weighs twice as much as one's own, so
the computer prefers blocking a threat over building one.
"""

from typing import Optional

import numpy as np

from dropfour.game.board import Board
from dropfour.utils import CONNECT_N, DIRECTIONS, Direction, Player

# Window scores
FOUR_SCORE = 100
OWN_THREE_SCORE = 16
OPPONENT_THREE_SCORE = 32
TWO_SCORE = 8


class HeuristicEvaluator:
    """Scores a board by summing the values of all four-cell windows."""

    def count(self, board: Board, row: int, column: int, direction: Direction) -> np.ndarray:
        """
        Count the cells of a window per owner.

        Returns:
            Array of length 3: empty cells, player one's pieces, player two's pieces
        """
        window = [board.grid[row + i * direction.vertical, column + i * direction.horizontal]
                  for i in range(CONNECT_N)]
        return np.bincount(window, minlength=3)

    def evaluate_window(self, board: Board, row: int, column: int,
                        direction: Direction, player: Player) -> int:
        """Score one window for a player."""
        counts = self.count(board, row, column, direction)
        own = counts[player.value]
        opponent = counts[player.other().value]
        empty = counts[Player.EMPTY.value]

        if own == 4:
            return FOUR_SCORE
        elif own == 3 and empty == 1:
            return OWN_THREE_SCORE
        elif own == 2 and empty == 2:
            return TWO_SCORE

        if opponent == 4:
            return -FOUR_SCORE
        elif opponent == 3 and empty == 1:
            return -OPPONENT_THREE_SCORE
        elif opponent == 2 and empty == 2:
            return -TWO_SCORE

        return 0

    def score(self, board: Board, player: Optional[Player] = None) -> int:
        """
        Total score of the position.

        Args:
            board: The board to evaluate
            player: Whose point of view to score from, defaults to the player
                whose turn it is

        Returns:
            Positive values favour the player, negative values the opponent
        """
        if player is None:
            player = board.current_player

        right, down, down_right, up_right = DIRECTIONS
        height, width = board.height, board.width
        span = CONNECT_N - 1
        score = 0

        # Row score
        for row in range(height):
            for column in range(width - span):
                score += self.evaluate_window(board, row, column, right, player)

        # Column score
        for row in range(height - span):
            for column in range(width):
                score += self.evaluate_window(board, row, column, down, player)

        # Diagonal score
        for row in range(height - span):
            for column in range(width - span):
                score += self.evaluate_window(board, row, column, down_right, player)

        for row in range(height - 1, span - 1, -1):
            for column in range(width - span):
                score += self.evaluate_window(board, row, column, up_right, player)

        return int(score)
