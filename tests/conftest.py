"""Shared fixtures for the engine tests."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dropfour.game.board import Board
from dropfour.utils import Player


def load_grid(board: Board, grid: np.ndarray) -> Board:
    """Put cells on a board and keep its free space count consistent."""
    board.grid = np.array(grid, dtype=int)
    board.free_spaces = int(np.count_nonzero(board.grid == Player.EMPTY.value))
    return board


def drawn_grid(rows: int = 6, columns: int = 7) -> np.ndarray:
    """A full board without four in a row anywhere."""
    return np.array([[1 if (col // 2 + row) % 2 == 0 else 2 for col in range(columns)]
                     for row in range(rows)], dtype=int)


@pytest.fixture
def board():
    return Board()
