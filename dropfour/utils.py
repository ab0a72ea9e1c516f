"""
utils.py - Constants, enumerations and helper functions for the Connect Four engine

This module provides the board constants, player/result enumerations, the
direction vectors shared by the win scanner and the evaluator, and the
lightweight whole-board checks used during search.
"""

from enum import Enum, auto
from typing import NamedTuple, Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win
SEARCH_DEPTH = 1  # Plies searched by the computer player


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player, the computer in player vs computer mode

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return "."
        elif self == Player.ONE:
            return "X"
        else:
            return "0"


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @classmethod
    def from_winner(cls, winner: Player, finished: bool) -> 'GameResult':
        """Map a finished flag and winner to a result."""
        if not finished:
            return cls.IN_PROGRESS
        if winner == Player.ONE:
            return cls.PLAYER_ONE_WIN
        if winner == Player.TWO:
            return cls.PLAYER_TWO_WIN
        return cls.DRAW


class Direction(NamedTuple):
    """A step on the grid: horizontal is the column delta, vertical the row delta."""
    horizontal: int
    vertical: int


# Every axis along which four in a row can lie
RIGHT = Direction(1, 0)
DOWN = Direction(0, 1)
DOWN_RIGHT = Direction(1, 1)
UP_RIGHT = Direction(1, -1)

DIRECTIONS: Tuple[Direction, ...] = (RIGHT, DOWN, DOWN_RIGHT, UP_RIGHT)


def has_connect_four(grid: np.ndarray, player: Player) -> bool:
    """
    Check the whole board for four in a row belonging to a player.

    Works on shifted boolean masks, so it is cheap enough to call at every
    search node.

    Args:
        grid: The game board
        player: The player to check for

    Returns:
        True if the player owns a complete line anywhere on the board
    """
    rows, cols = grid.shape
    mask = grid == player.value

    if cols >= CONNECT_N:
        span = cols - CONNECT_N + 1
        line = mask[:, 0:span].copy()
        for i in range(1, CONNECT_N):
            line &= mask[:, i:i + span]
        if line.any():
            return True

    if rows >= CONNECT_N:
        span = rows - CONNECT_N + 1
        line = mask[0:span, :].copy()
        for i in range(1, CONNECT_N):
            line &= mask[i:i + span, :]
        if line.any():
            return True

    if rows >= CONNECT_N and cols >= CONNECT_N:
        row_span = rows - CONNECT_N + 1
        col_span = cols - CONNECT_N + 1

        # Diagonal down-right
        line = mask[0:row_span, 0:col_span].copy()
        for i in range(1, CONNECT_N):
            line &= mask[i:i + row_span, i:i + col_span]
        if line.any():
            return True

        # Diagonal up-right
        top = CONNECT_N - 1
        line = mask[top:rows, 0:col_span].copy()
        for i in range(1, CONNECT_N):
            line &= mask[top - i:rows - i, i:i + col_span]
        if line.any():
            return True

    return False


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the board as ASCII art with 1-based column numbers on top.

    Args:
        grid: The game board

    Returns:
        ASCII representation of the board
    """
    rows, cols = grid.shape
    border = "-" * (cols * 4 + 1)

    result = [border]
    result.append("| " + "".join(f"{col + 1} | " for col in range(cols)).rstrip())
    result.append(border)

    for row in range(rows):
        line = "| " + "".join(f"{Player(int(grid[row, col]))} | " for col in range(cols))
        result.append(line.rstrip())

    result.append(border)
    return "\n".join(result)
