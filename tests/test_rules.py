"""Tests for GameSession and ConnectFourEnv."""

import numpy as np
import pytest

from conftest import drawn_grid, load_grid
from dropfour.game.rules import ConnectFourEnv, GameSession
from dropfour.utils import GameResult, Player


def test_session_player_vs_player_win():
    """Test a vertical win through real moves."""
    with GameSession() as session:
        assert not session.check_finished()
        for column in [0, 1, 0, 1, 0, 1]:
            assert session.play(column)
            assert not session.check_finished()

        assert session.play(0)
        assert session.check_finished()
        assert session.result == GameResult.PLAYER_ONE_WIN
        assert session.board.winner == Player.ONE
        assert session.is_game_over


def test_session_play_passes_turn():
    """Test that only successful moves pass the turn."""
    with GameSession(rows=2, columns=4) as session:
        assert session.play(0)
        assert session.board.current_player == Player.TWO
        assert session.play(0)
        assert session.board.current_player == Player.ONE

        assert not session.play(0)
        assert session.board.current_player == Player.ONE


def test_session_rejects_bad_moves():
    """Test precondition errors."""
    with GameSession() as session:
        with pytest.raises(ValueError):
            session.play(7)
        with pytest.raises(ValueError):
            session.play(-1)
        with pytest.raises(ValueError):
            session.computer_move()


def test_session_draw():
    """Test filling the last cell of the board."""
    with GameSession() as session:
        grid = drawn_grid()
        grid[0, 0] = Player.EMPTY.value
        load_grid(session.board, grid)

        assert session.play(0)
        assert session.check_finished()
        assert session.result == GameResult.DRAW
        assert session.board.winner == Player.EMPTY

        with pytest.raises(ValueError):
            session.play(1)


def test_session_against_computer():
    """Test that the computer answers as player two."""
    with GameSession(computer_player=True) as session:
        assert not session.is_computer_turn
        session.play(3)
        assert not session.check_finished()
        assert session.is_computer_turn

        column = session.computer_move()
        assert 0 <= column < 7
        assert session.board.free_spaces == 40
        assert session.board.current_player == Player.ONE
        assert not session.is_computer_turn


def test_session_sequential_scan():
    """Test a session that scans without a pool."""
    session = GameSession(parallel=False)
    assert session.scanner.executor is None
    for column in [2, 2, 3, 3, 4, 4, 5]:
        session.play(column)
    assert session.check_finished()
    assert session.result == GameResult.PLAYER_ONE_WIN
    session.close()


def test_session_new_game_and_close():
    """Test starting over and shutting the pool down."""
    session = GameSession(computer_player=True)
    session.play(0)
    old_board = session.board

    session.new_game()
    assert session.board is not old_board
    assert session.board.free_spaces == 42
    assert session.computer.board is session.board
    assert session.scanner.board is session.board
    assert session.result == GameResult.IN_PROGRESS

    session.close()
    assert session.scanner.executor is None


def test_env_reset():
    """Test environment reset."""
    env = ConnectFourEnv()
    obs, info = env.reset(seed=0)

    assert obs.shape == (6, 7)
    assert obs.dtype == np.int8
    assert np.all(obs == 0)
    assert info['valid_moves'] == list(range(7))
    assert info['current_player'] == 1
    assert info['game_result'] == 'IN_PROGRESS'
    env.close()


def test_env_step_gets_reply():
    """Test that each step includes the computer's answer."""
    env = ConnectFourEnv()
    env.reset()

    obs, reward, terminated, truncated, info = env.step(3)
    assert obs[5, 3] == Player.ONE.value
    assert np.count_nonzero(obs == Player.TWO.value) == 1
    assert reward == pytest.approx(-0.01)
    assert not terminated
    assert not truncated
    assert info['free_spaces'] == 40
    assert info['current_player'] == 1


def test_env_invalid_action():
    """Test an out of range action."""
    env = ConnectFourEnv()
    env.reset()

    obs, reward, terminated, truncated, info = env.step(7)
    assert reward == pytest.approx(-0.5)
    assert truncated
    assert not terminated
    assert info['invalid_move']
    assert np.all(obs == 0)


def test_env_agent_wins():
    """Test the agent completing a line."""
    env = ConnectFourEnv()
    env.reset()
    grid = np.zeros((6, 7), dtype=int)
    grid[5, 0:3] = Player.ONE.value
    grid[4, 0:2] = Player.TWO.value
    load_grid(env.board, grid)

    obs, reward, terminated, truncated, info = env.step(3)
    assert reward == pytest.approx(1.0)
    assert terminated
    assert info['game_result'] == 'PLAYER_ONE_WIN'
    assert info['winner'] == 1

    # No moves after the game is over
    _, reward, _, truncated, _ = env.step(4)
    assert truncated
    assert reward == pytest.approx(-0.5)


def test_env_computer_wins():
    """Test the computer completing its line."""
    env = ConnectFourEnv()
    env.reset()
    grid = np.zeros((6, 7), dtype=int)
    grid[5, 0:3] = Player.TWO.value
    grid[4, 0:2] = Player.ONE.value
    load_grid(env.board, grid)

    obs, reward, terminated, truncated, info = env.step(6)
    assert obs[5, 3] == Player.TWO.value
    assert reward == pytest.approx(-1.0)
    assert terminated
    assert info['game_result'] == 'PLAYER_TWO_WIN'


def test_env_render_ascii():
    """Test the ascii render mode."""
    env = ConnectFourEnv(render_mode="ascii")
    env.reset()
    assert "| 1 |" in env.render()
