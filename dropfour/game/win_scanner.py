"""
win_scanner.py - Divide and conquer check for the end of a game

The scanner looks for four in a row belonging to the player who just moved,
starting from every row of every column in a range. The column range is split
in half recursively; one half is handed to a thread pool while the calling
thread works on the other, and the two results are joined with a logical OR.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import NamedTuple, Optional

from dropfour.debug import debug
from dropfour.game.board import Board
from dropfour.utils import CONNECT_N, DIRECTIONS, Direction, Player


class ScanResult(NamedTuple):
    """Outcome of scanning a column range."""
    finished: bool = False
    winner: Player = Player.EMPTY

    def merge(self, other: 'ScanResult') -> 'ScanResult':
        """Combine the results of two disjoint column ranges."""
        winner = self.winner if self.winner != Player.EMPTY else other.winner
        return ScanResult(self.finished or other.finished, winner)


def make_executor(board: Board) -> ThreadPoolExecutor:
    """
    Create a pool large enough for a full scan of the board.

    A task only ever blocks on its own left half, and at most width - 2 tasks
    can be blocked inside the pool, so width workers always leave one free.
    """
    return ThreadPoolExecutor(max_workers=max(1, board.width), thread_name_prefix="win-scan")


class WinScanner:
    """
    Checks whether the last move ended the game.

    Must run after the move has been made and the turn has been passed on, so
    the player who just moved is the board's other player. The board is only
    read during a scan; the winner is written once, after all halves have
    been joined.
    """

    def __init__(self, board: Board, executor: Optional[ThreadPoolExecutor] = None):
        """
        Args:
            board: The board to scan
            executor: Pool used to run halves concurrently, see make_executor.
                Without one the halves run one after the other.

        Raises:
            ValueError: If the pool has fewer workers than the board has columns
        """
        if executor is not None and executor._max_workers < board.width:
            raise ValueError(f"Scanning {board.width} columns needs a pool of at least "
                             f"{board.width} workers, got {executor._max_workers}")

        self.board = board
        self.executor = executor

    def has_won(self, row: int, column: int, direction: Direction) -> bool:
        """
        Check if the CONNECT_N cells starting at (row, column) and stepping in a
        direction are all on the board and occupied by the player who just moved.
        """
        board = self.board
        for _ in range(CONNECT_N):
            if not (0 <= row < board.height and 0 <= column < board.width):
                return False
            cell = board.grid[row, column]
            if cell == Player.EMPTY.value or cell == board.current_player.value:
                return False

            row += direction.vertical
            column += direction.horizontal
        return True

    def scan_column(self, column: int) -> ScanResult:
        """
        Look for a winning line starting in any row of a single column.

        A full board finishes the game without a winner.
        """
        if self.board.free_spaces == 0:
            return ScanResult(finished=True)

        for row in range(self.board.height):
            for direction in DIRECTIONS:
                if self.has_won(row, column, direction):
                    return ScanResult(finished=True, winner=self.board.other_player)

        return ScanResult()

    def compute(self, start_column: int, end_column: int) -> ScanResult:
        """
        Scan the closed column range [start_column, end_column].

        Has no side effects, so any split of the range gives the same result.
        """
        if start_column == end_column:
            return self.scan_column(start_column)

        middle = (start_column + end_column) // 2

        if self.executor is None:
            left = self.compute(start_column, middle)
            right = self.compute(middle + 1, end_column)
            return left.merge(right)

        left_future = self.executor.submit(self.compute, start_column, middle)
        right = self.compute(middle + 1, end_column)
        return left_future.result().merge(right)

    def scan(self, start_column: int = 0, end_column: Optional[int] = None) -> bool:
        """
        Check if the game is finished and record the winner on the board.

        Args:
            start_column: First column to scan
            end_column: Last column to scan, defaults to the last column

        Returns:
            True if the last move won the game or the board is full
        """
        if end_column is None:
            end_column = self.board.width - 1

        result = self.compute(start_column, end_column)
        if result.winner != Player.EMPTY:
            self.board.set_winner(result.winner)

        debug.debug(f"Scan [{start_column}, {end_column}]: finished={result.finished} "
                    f"winner={result.winner.name}", "scanner")
        return result.finished
