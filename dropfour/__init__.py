"""
dropfour - Connect Four game engine

This package provides the board, a parallel check for the end of a game, a
heuristic evaluation and a minimax computer player, plus a command-line
interface and a Gymnasium environment built on top of them.
"""

__version__ = '0.1.0'
