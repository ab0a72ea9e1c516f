"""
board.py - Board representation and core game mechanics for Connect Four

This module implements the Board class which holds the grid, the player whose
turn it is, the number of free cells and the winner. Moves are made with
drop/undo so the search can explore positions in place.
"""

from typing import List

import numpy as np

from dropfour.debug import debug
from dropfour.utils import ROWS, COLS, Player, render_board_ascii


class Board:
    """
    Represents a Connect Four game board.

    Row 0 is the top of the board, so the lowest free cell of a column is found
    by scanning upwards from the last row. A column is full when its top cell
    is occupied.
    """

    def __init__(self, columns: int = COLS, rows: int = ROWS,
                 computer_player: bool = False, player_turn: Player = Player.ONE):
        """
        Create an empty board.

        Args:
            columns: Number of columns in the board
            rows: Number of rows in the board
            computer_player: True for player vs computer, False for player vs player
            player_turn: The player who has the first move
        """
        debug.debug(f"Initializing {columns}x{rows} board", "board")
        self.computer_player = computer_player
        self._starting_player = player_turn
        self.grid = np.zeros((rows, columns), dtype=int)
        self.reset()

    def reset(self):
        """Reset the board to an empty state."""
        self.grid.fill(Player.EMPTY.value)
        self.current_player = self._starting_player
        self.free_spaces = self.grid.size
        self.winner = Player.EMPTY

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same state
        """
        new_board = Board(self.width, self.height, self.computer_player, self._starting_player)
        new_board.grid = self.grid.copy()
        new_board.current_player = self.current_player
        new_board.free_spaces = self.free_spaces
        new_board.winner = self.winner
        return new_board

    def get(self, row: int, column: int) -> Player:
        """Value of the cell at (row, column)."""
        return Player(int(self.grid[row, column]))

    @property
    def width(self) -> int:
        """Number of columns."""
        return self.grid.shape[1]

    @property
    def height(self) -> int:
        """Number of rows."""
        return self.grid.shape[0]

    @property
    def other_player(self) -> Player:
        """The player who will have the next turn."""
        return self.current_player.other()

    def set_winner(self, winner: Player):
        """Record the player who has won the game."""
        self.winner = winner

    def swap_player(self):
        """Switch the current player to the next player."""
        self.current_player = self.other_player

    def is_valid_move(self, column: int) -> bool:
        """
        Check if a move is valid without making it.

        Args:
            column: The column to place a piece (0-indexed)

        Returns:
            True if the column exists and is not full
        """
        if not (0 <= column < self.width):
            return False
        return self.grid[0, column] == Player.EMPTY.value

    def get_valid_moves(self) -> List[int]:
        return [col for col in range(self.width) if self.grid[0, col] == Player.EMPTY.value]

    def drop(self, column: int) -> bool:
        """
        Place a piece of the current player in the lowest free cell of a column.

        The turn does not advance; callers swap the player themselves.

        Args:
            column: The column to place a piece (0-indexed)

        Returns:
            True if the piece was placed, False if the column is full
        """
        if self.grid[0, column] != Player.EMPTY.value:
            debug.trace(f"Column {column} is full", "board")
            return False

        row = self.height - 1
        while row >= 0 and self.grid[row, column] != Player.EMPTY.value:
            row -= 1

        debug.trace(f"Placing {self.current_player.name} at ({row}, {column})", "board")
        self.grid[row, column] = self.current_player.value
        self.free_spaces -= 1
        return True

    def undo(self, column: int):
        """
        Remove the topmost piece of a column. Does nothing if the column is empty.

        Only meant to reverse a drop into the same column.

        Args:
            column: The column to remove a piece from (0-indexed)
        """
        if self.grid[self.height - 1, column] == Player.EMPTY.value:
            return

        row = self.height - 1
        while row >= 0 and self.grid[row, column] != Player.EMPTY.value:
            row -= 1

        debug.trace(f"Removing piece at ({row + 1}, {column})", "board")
        self.grid[row + 1, column] = Player.EMPTY.value
        self.free_spaces += 1

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            Copy of the grid
        """
        return self.grid.copy()

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()
