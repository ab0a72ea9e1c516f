"""Tests for shared helpers and the logging facade."""

import numpy as np

from dropfour.debug import DebugLevel, DebugManager
from dropfour.utils import (DIRECTIONS, DOWN, RIGHT, GameResult, Player,
                            has_connect_four, render_board_ascii)


def grid_with(cells, player=Player.ONE, shape=(6, 7)):
    grid = np.zeros(shape, dtype=int)
    for row, column in cells:
        grid[row, column] = player.value
    return grid


def test_player_other():
    """Test switching players."""
    assert Player.ONE.other() == Player.TWO
    assert Player.TWO.other() == Player.ONE
    assert Player.EMPTY.other() == Player.EMPTY


def test_directions():
    """Test the direction vectors."""
    assert len(DIRECTIONS) == 4
    assert RIGHT.horizontal == 1 and RIGHT.vertical == 0
    assert DOWN == (0, 1)


def test_game_result_from_winner():
    """Test mapping a scan outcome to a result."""
    assert GameResult.from_winner(Player.EMPTY, False) == GameResult.IN_PROGRESS
    assert GameResult.from_winner(Player.EMPTY, True) == GameResult.DRAW
    assert GameResult.from_winner(Player.ONE, True) == GameResult.PLAYER_ONE_WIN
    assert GameResult.from_winner(Player.TWO, True) == GameResult.PLAYER_TWO_WIN
    assert not GameResult.IN_PROGRESS.is_game_over()


def test_has_connect_four_lines():
    """Test whole-board detection in every direction."""
    assert has_connect_four(grid_with([(5, 3), (5, 4), (5, 5), (5, 6)]), Player.ONE)
    assert has_connect_four(grid_with([(0, 0), (1, 0), (2, 0), (3, 0)]), Player.ONE)
    assert has_connect_four(grid_with([(1, 2), (2, 3), (3, 4), (4, 5)]), Player.ONE)
    assert has_connect_four(grid_with([(5, 3), (4, 4), (3, 5), (2, 6)]), Player.ONE)


def test_has_connect_four_negative():
    """Test broken lines and the wrong owner."""
    assert not has_connect_four(grid_with([(5, 0), (5, 1), (5, 2), (5, 4)]), Player.ONE)
    assert not has_connect_four(grid_with([(5, 0), (5, 1), (5, 2), (5, 3)]), Player.TWO)
    assert not has_connect_four(np.zeros((6, 7), dtype=int), Player.ONE)


def test_has_connect_four_small_board():
    """Test a board too small for some directions."""
    grid = grid_with([(0, 0), (0, 1), (0, 2), (0, 3)], shape=(2, 4))
    assert has_connect_four(grid, Player.ONE)
    assert not has_connect_four(np.zeros((3, 3), dtype=int), Player.ONE)


def test_render_board_ascii():
    """Test the board layout."""
    grid = grid_with([(5, 0)])
    lines = render_board_ascii(grid).splitlines()
    assert len(lines) == 6 + 4
    assert lines[0] == "-" * 29
    assert lines[-2].startswith("| X | . |")


def test_debug_levels():
    """Test level filtering and parsing."""
    manager = DebugManager("dropfour.test")
    manager.configure(level=DebugLevel.INFO, components=["search"])

    assert manager.is_enabled_for(DebugLevel.INFO, "search")
    assert not manager.is_enabled_for(DebugLevel.DEBUG, "search")
    assert not manager.is_enabled_for(DebugLevel.INFO, "board")

    assert manager.set_from_string("trace")
    assert manager.level == DebugLevel.TRACE
    assert not manager.set_from_string("loud")


def test_debug_timer():
    """Test the performance timers."""
    manager = DebugManager("dropfour.test")
    manager.start_timer("work")
    assert manager.end_timer("work") >= 0
    assert manager.end_timer("work") is None
