"""
dropfour.ai - Computer player for Connect Four

This package provides the heuristic position evaluation and the
minimax search with alpha-beta pruning.
"""

from dropfour.ai.evaluator import HeuristicEvaluator
from dropfour.ai.minimax import ComputerPlayer

__all__ = ['HeuristicEvaluator', 'ComputerPlayer']
