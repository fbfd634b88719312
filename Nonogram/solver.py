"""
Nonogram solver: line propagation + depth-first backtracking

Strategy:
1. Propagation - run every row, then every column, through its line solver
   and write back the cells that became determined; repeat until a full
   round changes nothing
2. Branching - when propagation stalls, take the lowest row-major unknown
   cell, save a copy of the search state with that cell BLANK, and continue
   with the cell FILLED
3. Backtracking - a line with no fitting pattern restores the most recently
   saved state; an empty stack means the search space is exhausted

Repeated calls to find_solution() walk the rest of the search tree, so all
solutions come out in a fixed order (filled branch first).
"""

import time
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence

from .constraints import LineConstraint
from .grid import BLANK, FILLED, UNKNOWN, Grid
from .line_solver import LineSolver, make_line_solver
from .puzzle import HintLike, as_hint


PROPAGATING = "propagating"
SOLVED = "solved"
EXHAUSTED = "exhausted"
TIMEOUT = "timeout"
UNSOLVABLE = "unsolvable"


@dataclass
class SearchState:
    """Everything one branch of the search mutates."""
    board: Grid
    row_solvers: List[LineSolver]
    col_solvers: List[LineSolver]

    def clone(self) -> 'SearchState':
        return SearchState(
            board=self.board.clone(),
            row_solvers=[s.clone() for s in self.row_solvers],
            col_solvers=[s.clone() for s in self.col_solvers],
        )


@dataclass
class SolverResult:
    status: str
    solutions: List[Grid]
    duration_ms: int
    branch_points: int = 0
    message: str = ""
    partial: Optional[Grid] = None
    stats: dict = field(default_factory=dict)


class PuzzleSolver:
    def __init__(self, row_hints: Sequence[HintLike], col_hints: Sequence[HintLike],
                 verbose: bool = False, line_strategy: str = "cached"):
        self.row_hints = [as_hint(h) for h in row_hints]
        self.col_hints = [as_hint(h) for h in col_hints]
        self.verbose = verbose
        self.line_strategy = line_strategy
        self.stats = {
            'branch_points': 0,
            'backtracks': 0,
            'contradictions': 0,
            'propagation_rounds': 0,
            'line_solves': 0,
            'solutions': 0,
        }
        self.row_constraints = [LineConstraint(h) for h in self.row_hints]
        self.col_constraints = [LineConstraint(h) for h in self.col_hints]
        self.state = SearchState(
            board=Grid(self.width, self.height, UNKNOWN),
            row_solvers=[make_line_solver(line_strategy, c, self.width)
                         for c in self.row_constraints],
            col_solvers=[make_line_solver(line_strategy, c, self.height)
                         for c in self.col_constraints],
        )
        self.backtrack_stack: List[SearchState] = []
        self.status = PROPAGATING

    @classmethod
    def from_puzzle(cls, puzzle, **kwargs) -> 'PuzzleSolver':
        return cls(puzzle.row_hints, puzzle.col_hints, **kwargs)

    @property
    def width(self) -> int:
        return len(self.col_hints)

    @property
    def height(self) -> int:
        return len(self.row_hints)

    @property
    def board(self) -> Grid:
        """The live (possibly partial) board. Read-only observation."""
        return self.state.board

    @property
    def num_backtracks(self) -> int:
        """Branch points taken so far."""
        return self.stats['branch_points']

    @property
    def depth(self) -> int:
        return len(self.backtrack_stack)

    # -------------------------------------------------------------------------
    # Main search
    # -------------------------------------------------------------------------
    def find_solution(self, deadline: Optional[float] = None) -> Optional[Grid]:
        """
        Return the next solution as a bool Grid, or None when the search
        space is exhausted (or `deadline`, a time.time() value, has passed).
        """
        if self.status == EXHAUSTED:
            return None
        if self.status == SOLVED:
            # the live state is the solution already reported
            if not self._backtrack():
                return None

        self.status = PROPAGATING
        while True:
            if deadline is not None and time.time() > deadline:
                self.status = TIMEOUT
                if self.verbose:
                    print(f"  Timeout with {self.board.count(UNKNOWN)} unknown cells, "
                          f"depth {self.depth}")
                return None

            self.stats['propagation_rounds'] += 1
            progressed = self._propagate_round()

            if progressed is None:
                self.stats['contradictions'] += 1
                if not self._backtrack():
                    return None
                continue

            if progressed:
                continue

            index = self.board.first_unknown()
            if index is None:
                self.status = SOLVED
                self.stats['solutions'] += 1
                if self.verbose:
                    print(f"✓ Solution {self.stats['solutions']} found "
                          f"({self.stats['branch_points']} branch points)")
                return self.board.to_cells()

            self._branch(index)

    def iter_solutions(self, deadline: Optional[float] = None) -> Iterator[Grid]:
        while True:
            solution = self.find_solution(deadline)
            if solution is None:
                return
            yield solution

    def get_solutions(self, limit: Optional[int] = None,
                      deadline: Optional[float] = None) -> List[Grid]:
        solutions = []
        for solution in self.iter_solutions(deadline):
            solutions.append(solution)
            if limit is not None and len(solutions) >= limit:
                break
        return solutions

    def solve(self, timeout_seconds: Optional[float] = None,
              max_solutions: Optional[int] = None) -> SolverResult:
        """Run the search and package the outcome with timing and stats."""
        start = time.time()
        deadline = None if timeout_seconds is None else start + timeout_seconds

        if self.verbose:
            print(f"Starting solver: {self.width}x{self.height}, "
                  f"line strategy '{self.line_strategy}'")

        solutions = self.get_solutions(limit=max_solutions, deadline=deadline)
        result = self.make_result(solutions, int((time.time() - start) * 1000), timeout_seconds)

        if self.verbose:
            print(result.message)
            self.print_stats()
        return result

    def make_result(self, solutions: List[Grid], duration_ms: int,
                    timeout_seconds: Optional[float] = None) -> SolverResult:
        """Package solutions found so far with the current status and stats."""
        if self.status == TIMEOUT:
            status = TIMEOUT
            message = f"Timed out after {timeout_seconds}s with {len(solutions)} solution(s)"
        elif solutions:
            status = SOLVED
            message = f"Found {len(solutions)} solution(s)"
        else:
            status = UNSOLVABLE
            message = "No solution exists for these hints"

        return SolverResult(
            status=status,
            solutions=list(solutions),
            duration_ms=duration_ms,
            branch_points=self.stats['branch_points'],
            message=message,
            partial=None if solutions else self.board.clone(),
            stats=dict(self.stats),
        )

    # -------------------------------------------------------------------------
    # Propagation
    # -------------------------------------------------------------------------
    def _propagate_round(self) -> Optional[bool]:
        """
        One pass over all rows then all columns.

        Returns whether any cell changed, or None on a contradiction (the
        column pass is skipped if a row already failed).
        """
        board = self.board
        progressed = False

        for y, solver in enumerate(self.state.row_solvers):
            row = board.row_unchecked(y)
            self.stats['line_solves'] += 1
            new_row = solver.solve(row)
            if new_row is None:
                if self.verbose:
                    print(f"    contradiction in row {y}")
                return None
            if (new_row != row).any():
                board.set_row(y, new_row)
                progressed = True

        for x, solver in enumerate(self.state.col_solvers):
            col = board.column_unchecked(x)
            self.stats['line_solves'] += 1
            new_col = solver.solve(col)
            if new_col is None:
                if self.verbose:
                    print(f"    contradiction in column {x}")
                return None
            if (new_col != col).any():
                board.set_column(x, new_col)
                progressed = True

        return progressed

    # -------------------------------------------------------------------------
    # Branching / backtracking
    # -------------------------------------------------------------------------
    def _branch(self, index: int) -> None:
        alternate = self.state.clone()
        alternate.board.set_index(index, BLANK)
        self.board.set_index(index, FILLED)
        self.backtrack_stack.append(alternate)
        self.stats['branch_points'] += 1

        if self.verbose:
            y, x = divmod(index, self.width)
            print(f"  Stuck: guessing ({y}, {x}) filled "
                  f"[branch {self.stats['branch_points']}, depth {self.depth}]")

    def _backtrack(self) -> bool:
        if not self.backtrack_stack:
            self.status = EXHAUSTED
            if self.verbose:
                print("  Backtrack stack empty: search exhausted")
            return False
        self.state = self.backtrack_stack.pop()
        self.stats['backtracks'] += 1
        if self.verbose:
            print(f"  Backtracking [depth {self.depth}]")
        return True

    # -------------------------------------------------------------------------
    # Stats
    # -------------------------------------------------------------------------
    def print_stats(self) -> None:
        print("\nSolving Statistics:")
        print(f"  Propagation rounds: {self.stats['propagation_rounds']}")
        print(f"  Line solves: {self.stats['line_solves']}")
        print(f"  Branch points: {self.stats['branch_points']}")
        print(f"  Backtracks: {self.stats['backtracks']}")
        print(f"  Contradictions: {self.stats['contradictions']}")
        print(f"  Solutions: {self.stats['solutions']}")
