"""
Per-line solvers used by the puzzle solver

Each solver answers one question for its row/column: given the cells known
so far, which cells are forced? A None answer means no fill pattern fits
(a contradiction).

Strategies:
 - CachedLineSolver: keeps the surviving candidate patterns and narrows
   them on every pass (branch-local state, cloned with the board)
 - BruteLineSolver: regenerates every pattern each pass
 - FastLineSolver: reachability tables, no pattern list at all
"""

from typing import Optional, Sequence

import numpy as np

from .constraints import LineConstraint


class LineSolver:
    """Base class: one solver instance per row or column."""
    name: str = "line-solver"

    def __init__(self, constraint: LineConstraint, length: int):
        self.constraint = constraint
        self.length = length

    def solve(self, known_line: Sequence[int]) -> Optional[np.ndarray]:
        raise NotImplementedError

    def clone(self) -> 'LineSolver':
        # stateless solvers can be shared between search states
        return self


class CachedLineSolver(LineSolver):
    """Narrows a cached candidate set instead of regenerating it."""
    name = "cached"

    def __init__(self, constraint: LineConstraint, length: int):
        super().__init__(constraint, length)
        self.candidates: Optional[np.ndarray] = None
        self._last_count: Optional[int] = None

    @property
    def candidate_count(self) -> Optional[int]:
        return None if self.candidates is None else int(self.candidates.shape[0])

    def solve(self, known_line: Sequence[int]) -> Optional[np.ndarray]:
        """
        Filter the cached candidates against known_line.

        The merge is only recomputed when candidates were dropped (or on the
        first pass); otherwise there is nothing new and known_line comes back
        as-is.
        """
        if self.candidates is None:
            self.candidates = self.constraint.permutations(self.length)

        mask = LineConstraint.matching_mask(self.candidates, known_line)
        if not mask.all():
            self.candidates = self.candidates[mask]

        count = self.candidates.shape[0]
        if count == 0:
            return None
        if self._last_count is not None and count == self._last_count:
            return np.asarray(known_line, dtype=np.int8)
        self._last_count = count
        return LineConstraint.merge(self.candidates)

    def clone(self) -> 'CachedLineSolver':
        copy = CachedLineSolver(self.constraint, self.length)
        copy.candidates = None if self.candidates is None else self.candidates.copy()
        copy._last_count = self._last_count
        return copy


class BruteLineSolver(LineSolver):
    """Enumerate, filter and merge from scratch on every pass."""
    name = "brute"

    def solve(self, known_line: Sequence[int]) -> Optional[np.ndarray]:
        return self.constraint.solve_line(known_line)


class FastLineSolver(LineSolver):
    """Reachability-based line solving."""
    name = "fast"

    def solve(self, known_line: Sequence[int]) -> Optional[np.ndarray]:
        return self.constraint.solve_line_fast(known_line)


LINE_STRATEGIES = {
    CachedLineSolver.name: CachedLineSolver,
    BruteLineSolver.name: BruteLineSolver,
    FastLineSolver.name: FastLineSolver,
}


def make_line_solver(strategy: str, constraint: LineConstraint, length: int) -> LineSolver:
    try:
        cls = LINE_STRATEGIES[strategy]
    except KeyError:
        raise ValueError(
            f"Unknown line strategy {strategy!r}; expected one of {sorted(LINE_STRATEGIES)}"
        ) from None
    return cls(constraint, length)
