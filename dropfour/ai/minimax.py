"""
minimax.py - Minimax algorithm with alpha-beta pruning for Connect Four

The computer is always player TWO and maximizes; player ONE minimizes. The
search drops and undoes pieces on the live board, swapping the turn around
each child, and leaves the board exactly as it found it.
"""

import math
from typing import Optional

from dropfour.ai.evaluator import HeuristicEvaluator
from dropfour.debug import debug
from dropfour.game.board import Board
from dropfour.utils import SEARCH_DEPTH, Player, has_connect_four

WIN_SCORE = 1000
MAXIMIZING_PLAYER = Player.TWO


class ComputerPlayer:
    """
    The automated opponent.

    Searches a fixed number of plies and falls back to the heuristic
    evaluation when the depth runs out.
    """

    def __init__(self, board: Board, depth: int = SEARCH_DEPTH,
                 evaluator: Optional[HeuristicEvaluator] = None):
        """
        Args:
            board: The board the computer plays on
            depth: Number of plies to search
            evaluator: Leaf evaluation, defaults to HeuristicEvaluator
        """
        self.board = board
        self.depth = depth
        self.evaluator = evaluator or HeuristicEvaluator()
        self.best_column = board.width // 2

        # For performance tracking
        self.nodes_evaluated = 0
        self.cutoffs = 0

    def minimax(self, depth: int, alpha: float, beta: float, root: bool = False) -> float:
        """
        Value of the current position.

        Args:
            depth: Remaining plies before the heuristic is used
            alpha: Best score the maximizing player can already guarantee
            beta: Best score the minimizing player can already guarantee
            root: Record the column of the best value in best_column

        Returns:
            The best value found for the player to move
        """
        self.nodes_evaluated += 1
        board = self.board

        if has_connect_four(board.grid, Player.TWO):
            return WIN_SCORE

        if has_connect_four(board.grid, Player.ONE):
            return -WIN_SCORE

        if board.free_spaces == 0:
            return 0

        if depth == 0:
            return self.evaluator.score(board, MAXIMIZING_PLAYER)

        maximizing = board.current_player == MAXIMIZING_PLAYER
        best_value = -math.inf if maximizing else math.inf

        for column in range(board.width):
            if not board.drop(column):
                continue

            board.swap_player()
            value = self.minimax(depth - 1, alpha, beta)
            board.swap_player()
            board.undo(column)

            if (maximizing and value > best_value) or (not maximizing and value < best_value):
                best_value = value
                if root:
                    self.best_column = column

            if maximizing:
                if value >= beta:
                    self.cutoffs += 1
                    return value
                alpha = max(alpha, value)
            else:
                if value <= alpha:
                    self.cutoffs += 1
                    return value
                beta = min(beta, value)

        return best_value

    def best_move(self) -> int:
        """
        Search the current position and pick a column.

        If the position is already decided the search records no column, and
        the centre column is used when it is free, else the leftmost free one.

        Returns:
            Index of the column of the best move

        Raises:
            ValueError: If every column is full
        """
        valid_moves = self.board.get_valid_moves()
        if not valid_moves:
            raise ValueError("No valid moves: the board is full")

        self.nodes_evaluated = 0
        self.cutoffs = 0
        self.best_column = self.board.width // 2

        debug.start_timer("best_move")
        value = self.minimax(self.depth, -WIN_SCORE, WIN_SCORE, root=True)
        debug.end_timer("best_move", "search")

        if self.best_column not in valid_moves:
            self.best_column = valid_moves[0]

        debug.debug(f"Best move: column {self.best_column} (value {value}, "
                    f"{self.nodes_evaluated} nodes, {self.cutoffs} cutoffs)", "search")
        return self.best_column


if __name__ == "__main__":
    from dropfour.debug import DebugLevel

    debug.configure(level=DebugLevel.DEBUG)

    board = Board(computer_player=True, player_turn=Player.TWO)
    player = ComputerPlayer(board)
    print(board)
    print(f"Best move on an empty board: column {player.best_move()}")

    # Player one threatens the bottom row, the computer should block at column 3
    board = Board(computer_player=True)
    for column in [0, 0, 1, 1, 2]:
        board.drop(column)
        board.swap_player()
    print(board)
    print(f"Best move: column {ComputerPlayer(board).best_move()} (should be 3 to block)")
