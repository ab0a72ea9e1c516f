"""
rules.py - Game session management and Gymnasium environment for Connect Four

This module provides:
1. GameSession, which owns one game's board, computer player and scan pool
2. A gymnasium-compatible environment where an agent plays against the computer
"""

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from dropfour.ai.minimax import ComputerPlayer
from dropfour.debug import debug
from dropfour.game.board import Board
from dropfour.game.win_scanner import WinScanner, make_executor
from dropfour.utils import COLS, ROWS, SEARCH_DEPTH, GameResult, Player


class GameSession:
    """
    One game of Connect Four.

    Holds everything a game needs so that nothing lives at module level: the
    board, the computer player when playing against the computer, and the
    thread pool used by the win scanner. Use it as a context manager, or call
    close() when done, to shut the pool down.
    """

    def __init__(self, columns: int = COLS, rows: int = ROWS,
                 computer_player: bool = False, player_turn: Player = Player.ONE,
                 depth: int = SEARCH_DEPTH, parallel: bool = True):
        """
        Args:
            columns: Number of columns in the board
            rows: Number of rows in the board
            computer_player: True to play against the computer (player TWO)
            player_turn: The player who has the first move
            depth: Search depth of the computer player
            parallel: Run the win scan on a thread pool
        """
        self.columns = columns
        self.rows = rows
        self.computer_player = computer_player
        self.player_turn = player_turn
        self.depth = depth
        self.parallel = parallel
        self._executor = None
        self.new_game()

    def new_game(self):
        """Replace the board with an empty one."""
        debug.debug("Starting new game", "session")
        self.board = Board(self.columns, self.rows, self.computer_player, self.player_turn)
        self.computer = ComputerPlayer(self.board, self.depth) if self.computer_player else None

        if self.parallel and self._executor is None:
            self._executor = make_executor(self.board)
        self.scanner = WinScanner(self.board, self._executor)
        self.result = GameResult.IN_PROGRESS

    def close(self):
        """Shut down the scan pool."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
            self.scanner.executor = None

    def __enter__(self) -> 'GameSession':
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def check_finished(self) -> bool:
        """
        Check whether the last real move ended the game.

        Returns:
            True on a win or a draw; the board's winner is set on a win
        """
        finished = self.scanner.scan()
        self.result = GameResult.from_winner(self.board.winner, finished)
        if finished:
            debug.info(f"Game over: {self.result.name}", "session")
        return finished

    @property
    def is_game_over(self) -> bool:
        return self.result.is_game_over()

    @property
    def is_computer_turn(self) -> bool:
        return self.computer is not None and self.board.current_player == Player.TWO

    def play(self, column: int) -> bool:
        """
        Make a real move for the current player and pass the turn on.

        Args:
            column: The column to place a piece (0-indexed)

        Returns:
            True if the move was made, False if the column is full

        Raises:
            ValueError: If the column does not exist or the game is over
        """
        if not (0 <= column < self.board.width):
            raise ValueError(f"Column {column} is out of range")
        if self.is_game_over:
            raise ValueError("The game is over")

        if not self.board.drop(column):
            debug.debug(f"Column {column} is full", "session")
            return False

        debug.debug(f"Player {self.board.current_player.name} played column {column}", "session")
        self.board.swap_player()
        return True

    def computer_move(self) -> int:
        """
        Let the computer pick and play a column.

        Returns:
            The column the computer played

        Raises:
            ValueError: If it is not the computer's turn
        """
        if not self.is_computer_turn:
            raise ValueError("It is not the computer's turn")

        column = self.computer.best_move()
        if not self.play(column):
            raise ValueError(f"Computer chose full column {column}")
        return column

    def render(self) -> str:
        return self.board.render()


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    The agent plays player ONE; every agent move is answered by the computer
    player as player TWO within the same step.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, depth: int = SEARCH_DEPTH,
                 columns: int = COLS, rows: int = ROWS):
        """
        Args:
            render_mode: Mode for rendering the environment
            depth: Search depth of the computer opponent
            columns: Number of columns in the board
            rows: Number of rows in the board
        """
        debug.debug("Initializing ConnectFourEnv", "env")

        self.action_space = spaces.Discrete(columns)
        self.observation_space = spaces.Box(low=0, high=2, shape=(rows, columns), dtype=np.int8)

        # Scans are tiny and happen twice per step, so they run inline
        self.session = GameSession(columns, rows, computer_player=True,
                                   depth=depth, parallel=False)
        self.render_mode = render_mode

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    @property
    def board(self) -> Board:
        return self.session.board

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to an empty board with the agent to move.

        Returns:
            Initial observation and info dictionary
        """
        super().reset(seed=seed)
        self.session.new_game()

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play the agent's move, then the computer's reply.

        Args:
            action: Column to place a piece (0-indexed)

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        action = int(action)
        if self.session.is_game_over or not self.board.is_valid_move(action):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        self.session.play(action)
        if not self.session.check_finished():
            self.session.computer_move()
            self.session.check_finished()

        result = self.session.result
        reward = self.reward_step
        if result == GameResult.PLAYER_ONE_WIN:
            reward = self.reward_win
        elif result == GameResult.PLAYER_TWO_WIN:
            reward = self.reward_lose
        elif result == GameResult.DRAW:
            reward = self.reward_draw

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, result.is_game_over(), False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.session.render()
        if self.render_mode == "human":
            print(self.session.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.board.get_state().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        valid_moves = self.board.get_valid_moves()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.board.current_player.value,
            'game_result': self.session.result.name,
            'free_spaces': self.board.free_spaces,
            'winner': self.board.winner.value,
        }

    def close(self):
        self.session.close()
