"""
dropfour.game - Core game mechanics for Connect Four

This package contains the board representation and the win scanner.
Game sessions and the Gymnasium environment live in dropfour.game.rules,
which depends on dropfour.ai and is not imported here.
"""

from dropfour.game.board import Board
from dropfour.game.win_scanner import ScanResult, WinScanner

__all__ = ['Board', 'ScanResult', 'WinScanner']
