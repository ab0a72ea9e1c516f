"""
cli.py - Command-line interface for Connect Four

This module provides the interactive game (player vs player or player vs
computer), analysis of a given board position and a small benchmark of the
win scanner and the search.
"""

import argparse
import random
import sys
from typing import Callable, List, Optional

import numpy as np

from dropfour.ai.evaluator import HeuristicEvaluator
from dropfour.ai.minimax import ComputerPlayer
from dropfour.debug import debug
from dropfour.game.board import Board
from dropfour.game.rules import GameSession
from dropfour.game.win_scanner import WinScanner, make_executor
from dropfour.utils import COLS, ROWS, GameResult, Player, has_connect_four

InputFn = Callable[[str], str]


def read_int(prompt: str, low: int, high: int, input_fn: InputFn = input,
             out_of_range: str = "The number you have entered is out of range. Try again.") -> int:
    """
    Read an integer in [low, high] from the user, asking again until one is given.

    Raises:
        EOFError: If the input is closed
    """
    while True:
        raw = input_fn(prompt)
        try:
            value = int(raw.strip())
        except ValueError:
            print("The input you entered is not a number. Try again.")
            continue

        if low <= value <= high:
            return value
        print(out_of_range)


def read_yes_no(prompt: str, input_fn: InputFn = input) -> bool:
    """Read Y or N from the user, asking again until one is given."""
    while True:
        answer = input_fn(prompt).strip().upper()
        if answer == "Y":
            return True
        elif answer == "N":
            return False
        print("Invalid response. Try again.")


def parse_position(position: str, rows: int = ROWS, columns: int = COLS) -> np.ndarray:
    """
    Parse a comma separated list of cell values, top row first.

    Raises:
        ValueError: If the string has the wrong length or unknown cell values
    """
    values = [int(c) for c in position.split(',')]
    if len(values) != rows * columns:
        raise ValueError(f"Position string must have {rows * columns} values")
    if any(v not in (0, 1, 2) for v in values):
        raise ValueError("Cell values must be 0, 1 or 2")
    return np.array(values, dtype=int).reshape(rows, columns)


def board_from_grid(grid: np.ndarray, player_turn: Player) -> Board:
    """Build a board holding the given cells with player_turn to move."""
    rows, columns = grid.shape
    board = Board(columns, rows, computer_player=True, player_turn=player_turn)
    board.grid = grid.copy()
    board.free_spaces = int(np.count_nonzero(grid == Player.EMPTY.value))
    return board


class SimpleCLI:
    """Command-line interface for Connect Four."""

    def __init__(self, input_fn: InputFn = input):
        self.input_fn = input_fn
        self.args = None

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(description='Connect Four')
        parser.add_argument('--debug-level', default='warning',
                            choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
                            help='Logging level')
        parser.add_argument('--log-file', type=str, default=None, help='Also log to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        subparsers.add_parser('play', help='Play a game interactively')

        analyze_parser = subparsers.add_parser('analyze', help='Analyze a board position')
        analyze_parser.add_argument('--position', type=str, required=True,
                                    help=f'{ROWS * COLS} comma separated cells (0, 1, 2), top row first')
        analyze_parser.add_argument('--player', type=int, choices=[1, 2], default=2,
                                    help='Player to move')

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark scan and search')
        benchmark_parser.add_argument('--iterations', type=int, default=200,
                                      help='Number of positions to benchmark')

        self.args = parser.parse_args(argv)

        debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'analyze':
            return self.analyze_position()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def show_mode_menu(self) -> None:
        print("Choose mode:")
        print("    1 - player vs player")
        print("    2 - player vs computer")

    def play_game(self) -> None:
        """Play games until the user does not want another one."""
        try:
            while True:
                self.show_mode_menu()
                mode = read_int("Choose a mode: ", 1, 2, self.input_fn,
                                "The mode you have selected does not exist. Try again.")

                with GameSession(computer_player=mode == 2) as session:
                    self.play_one(session)

                if not read_yes_no("Do you want to play again? Y/N\n", self.input_fn):
                    return
        except EOFError:
            print("\nInput closed, quitting.")

    def play_one(self, session: GameSession) -> GameResult:
        """Play a single game in a session and announce the result."""
        board = session.board

        while not session.check_finished():
            if session.is_computer_turn:
                column = session.computer_move()
                print(f"Computer plays column {column + 1}")
                continue

            print(board.render())
            column = read_int(f"Player {board.current_player.value}\nEnter column: ",
                              1, board.width, self.input_fn,
                              "The column you have selected does not exist. Try again.") - 1

            if not session.play(column):
                print("Column is full. Try again.")

        print(board.render())
        if board.winner == Player.EMPTY:
            print("It is a draw!")
        else:
            print(f"The winner is Player {board.winner.value}!")
        return session.result

    def analyze_position(self) -> int:
        """Report the scan result, evaluation and best move for a position."""
        try:
            grid = parse_position(self.args.position)
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return 1

        board = board_from_grid(grid, Player(self.args.player))
        print("Loaded position:")
        print(board.render())
        print(f"Player to move: {board.current_player.value}")
        print(f"Empty spaces: {board.free_spaces}")

        with make_executor(board) as executor:
            finished = WinScanner(board, executor).scan()

        # The scan only sees the player who just moved
        if not finished:
            for player in (Player.ONE, Player.TWO):
                if has_connect_four(board.grid, player):
                    board.set_winner(player)
                    finished = True
                    break

        if finished:
            if board.winner == Player.EMPTY:
                print("Game finished: draw")
            else:
                print(f"Game finished: Player {board.winner.value} has won")
            return 0

        score = HeuristicEvaluator().score(board)
        print(f"Evaluation for player {board.current_player.value}: {score}")

        column = ComputerPlayer(board).best_move()
        print(f"Best move: column {column + 1}")
        return 0

    def random_board(self, moves: int) -> Board:
        """Play random moves on a fresh board, stopping early if someone wins."""
        board = Board()
        scanner = WinScanner(board)
        for _ in range(moves):
            valid = board.get_valid_moves()
            if not valid:
                break
            board.drop(random.choice(valid))
            board.swap_player()
            if scanner.scan():
                break
        return board

    def benchmark(self) -> None:
        """Time sequential and parallel scans and the search."""
        iterations = self.args.iterations
        print(f"Running benchmark with {iterations} positions...")
        boards = [self.random_board(random.randint(7, 30)) for _ in range(iterations)]

        debug.start_timer("sequential_scan")
        for board in boards:
            WinScanner(board).compute(0, board.width - 1)
        sequential = debug.end_timer("sequential_scan", "cli")

        with make_executor(boards[0] if boards else Board()) as executor:
            debug.start_timer("parallel_scan")
            for board in boards:
                WinScanner(board, executor).compute(0, board.width - 1)
            parallel = debug.end_timer("parallel_scan", "cli")

        nodes = 0
        debug.start_timer("search")
        for board in boards:
            player = ComputerPlayer(board)
            player.best_move()
            nodes += player.nodes_evaluated
        search = debug.end_timer("search", "cli")

        count = max(1, len(boards))
        print(f"Sequential scan: {sequential:.6f} seconds total, {sequential / count * 1000:.4f} ms per scan")
        print(f"Parallel scan: {parallel:.6f} seconds total, {parallel / count * 1000:.4f} ms per scan")
        print(f"Search: {search:.6f} seconds total, {nodes} nodes, "
              f"{search / count * 1000:.4f} ms per move")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    return SimpleCLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
