"""
Nonogram Solver Package

Line propagation with depth-first backtracking for nonogram (picross) puzzles.
"""

from .grid import Grid, UNKNOWN, BLANK, FILLED
from .puzzle import Hint, NonogramPuzzle, parse_hints
from .constraints import LineConstraint, ConstraintChecker, line_runs
from .line_solver import CachedLineSolver, BruteLineSolver, FastLineSolver, make_line_solver
from .solver import PuzzleSolver, SearchState, SolverResult
from .output import SolutionFormatter

__version__ = "1.0.0"
__all__ = [
    'Grid',
    'UNKNOWN',
    'BLANK',
    'FILLED',
    'Hint',
    'NonogramPuzzle',
    'parse_hints',
    'LineConstraint',
    'ConstraintChecker',
    'line_runs',
    'CachedLineSolver',
    'BruteLineSolver',
    'FastLineSolver',
    'make_line_solver',
    'PuzzleSolver',
    'SearchState',
    'SolverResult',
    'SolutionFormatter'
]
