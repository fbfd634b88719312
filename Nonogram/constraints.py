"""
Line constraints for the nonogram solver

Key points:
 - Every fill pattern of a hint is enumerated recursively, right to left,
   and memoized per (blocks, length)
 - Patterns are bool matrices: one row per pattern
 - Overlaying compatible patterns gives the cells every pattern agrees on
 - A reachability-based line solver gives the same overlay without
   enumerating patterns
"""

from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .grid import BLANK, FILLED, UNKNOWN, Grid
from .puzzle import HintLike, NonogramPuzzle, as_hint


Pattern = Tuple[bool, ...]


# -----------------------------------------------------------------------------
# Pattern enumeration
# -----------------------------------------------------------------------------
@lru_cache(maxsize=None)
def _single_block_patterns(block: int, length: int) -> Tuple[Pattern, ...]:
    if block > length:
        return ()
    return tuple(
        (False,) * offset + (True,) * block + (False,) * (length - block - offset)
        for offset in range(length - block + 1)
    )


@lru_cache(maxsize=None)
def _enumerate_patterns(blocks: Tuple[int, ...], length: int) -> Tuple[Pattern, ...]:
    if not blocks:
        return ((False,) * length,)

    *prefix_blocks, last = blocks
    if not prefix_blocks:
        return _single_block_patterns(last, length)

    prefix_blocks = tuple(prefix_blocks)
    # dict keeps first-seen order; a pattern can come from several split points
    # because prefix patterns already carry trailing blanks
    seen: Dict[Pattern, None] = {}
    for split in range(1, length - last):
        suffixes = _single_block_patterns(last, length - split - 1)
        for prefix in _enumerate_patterns(prefix_blocks, split):
            for suffix in suffixes:
                seen.setdefault(prefix + (False,) + suffix, None)
    return tuple(seen)


def _as_known_line(known_line: Sequence[int]) -> np.ndarray:
    return np.asarray(known_line, dtype=np.int8)


# -----------------------------------------------------------------------------
# Line constraint
# -----------------------------------------------------------------------------
class LineConstraint:
    """The hint of one row or column and the operations derived from it."""

    def __init__(self, hint: HintLike):
        self.hint = as_hint(hint)

    @property
    def blocks(self) -> Tuple[int, ...]:
        return self.hint.blocks

    def permutations(self, length: int) -> np.ndarray:
        """
        Every fill pattern of exactly `length` cells that satisfies the hint.

        Returns a bool array of shape (n_patterns, length) in generation
        order with duplicates removed. An infeasible hint gives zero rows.
        """
        patterns = _enumerate_patterns(self.blocks, length)
        return np.array(patterns, dtype=bool).reshape(len(patterns), length)

    @staticmethod
    def pattern_matches(pattern: Sequence[bool], known_line: Sequence[int]) -> bool:
        """False iff a determined cell of known_line disagrees with pattern."""
        pattern = np.asarray(pattern, dtype=bool)
        known = _as_known_line(known_line)
        if pattern.shape != known.shape:
            raise ValueError(f"Pattern length {pattern.size} != line length {known.size}")
        determined = known != UNKNOWN
        return not np.any(determined & (pattern != (known == FILLED)))

    @staticmethod
    def matching_mask(patterns: np.ndarray, known_line: Sequence[int]) -> np.ndarray:
        """Vectorized pattern_matches over the rows of a pattern matrix."""
        known = _as_known_line(known_line)
        if patterns.shape[1] != known.size:
            raise ValueError(f"Pattern length {patterns.shape[1]} != line length {known.size}")
        determined = known != UNKNOWN
        conflicts = determined & (patterns != (known == FILLED))
        return ~conflicts.any(axis=1)

    @staticmethod
    def merge(patterns: np.ndarray) -> Optional[np.ndarray]:
        """
        Overlay patterns into one three-valued line.

        A cell is FILLED/BLANK iff every pattern agrees on it, UNKNOWN
        otherwise. No patterns means no result (a contradiction).
        """
        patterns = np.asarray(patterns, dtype=bool)
        if patterns.ndim != 2 or patterns.shape[0] == 0:
            return None
        merged = np.full(patterns.shape[1], UNKNOWN, dtype=np.int8)
        merged[patterns.all(axis=0)] = FILLED
        merged[~patterns.any(axis=0)] = BLANK
        return merged

    def solve_line(self, known_line: Sequence[int]) -> Optional[np.ndarray]:
        """Enumerate, filter against known_line, merge the survivors."""
        known = _as_known_line(known_line)
        patterns = self.permutations(known.size)
        return self.merge(patterns[self.matching_mask(patterns, known)])

    def solve_line_fast(self, known_line: Sequence[int]) -> Optional[np.ndarray]:
        """
        Same result as solve_line, computed from prefix/suffix reachability
        tables in O(blocks * length) instead of enumerating patterns.
        """
        known = _as_known_line(known_line)
        blocks = self.blocks
        n, k = known.size, len(blocks)

        fwd = _reachability(known, blocks)
        if not fwd[k][n]:
            return None
        rev = _reachability(known[::-1], blocks[::-1])

        def bwd(j: int, i: int) -> bool:
            # blocks[j:] fit into cells[i:]
            return rev[k - j][n - i]

        # blank_runs[i] = number of BLANK cells in known[:i]
        blank_runs = np.concatenate(([0], np.cumsum(known == BLANK)))

        can_blank = np.zeros(n, dtype=bool)
        for c in range(n):
            if known[c] == FILLED:
                continue
            can_blank[c] = any(fwd[j][c] and bwd(j, c + 1) for j in range(k + 1))

        fill_marks = np.zeros(n + 1, dtype=np.int32)
        for j, size in enumerate(blocks):
            for start in range(n - size + 1):
                end = start + size
                if blank_runs[end] - blank_runs[start]:
                    continue
                if j == 0:
                    left_ok = fwd[0][start]
                else:
                    left_ok = start >= 1 and known[start - 1] != FILLED and fwd[j][start - 1]
                if not left_ok:
                    continue
                if j == k - 1:
                    right_ok = bwd(k, end)
                else:
                    right_ok = end < n and known[end] != FILLED and bwd(j + 1, end + 1)
                if right_ok:
                    fill_marks[start] += 1
                    fill_marks[end] -= 1
        can_fill = np.cumsum(fill_marks[:n]) > 0

        merged = np.full(n, UNKNOWN, dtype=np.int8)
        merged[can_fill & ~can_blank] = FILLED
        merged[can_blank & ~can_fill] = BLANK
        return merged

    def __repr__(self):
        return f"LineConstraint({list(self.blocks)})"


def _reachability(known: np.ndarray, blocks: Sequence[int]) -> List[List[bool]]:
    """
    table[j][i] is True when blocks[:j] can be laid out in known[:i]
    consistently with every determined cell there.
    """
    n, k = known.size, len(blocks)
    blank_runs = np.concatenate(([0], np.cumsum(known == BLANK)))

    table = [[False] * (n + 1) for _ in range(k + 1)]
    table[0][0] = True
    for i in range(1, n + 1):
        table[0][i] = table[0][i - 1] and known[i - 1] != FILLED

    for j in range(1, k + 1):
        size = blocks[j - 1]
        row, prev = table[j], table[j - 1]
        for i in range(1, n + 1):
            if row[i - 1] and known[i - 1] != FILLED:
                row[i] = True
                continue
            start = i - size
            if start < 0 or blank_runs[i] - blank_runs[start]:
                continue
            if j == 1:
                row[i] = prev[start]
            else:
                row[i] = start >= 1 and known[start - 1] != FILLED and prev[start - 1]
    return table


def line_runs(line: Sequence) -> Tuple[int, ...]:
    """Run lengths of filled cells along a line, in order."""
    runs = []
    count = 0
    for cell in line:
        if cell == FILLED:
            count += 1
        elif count:
            runs.append(count)
            count = 0
    if count:
        runs.append(count)
    return tuple(runs)


# -----------------------------------------------------------------------------
# Solution checking
# -----------------------------------------------------------------------------
class ConstraintChecker:
    """Validates finished boards against puzzle hints."""

    @staticmethod
    def line_satisfied(hint: HintLike, line: Sequence) -> bool:
        return line_runs(line) == as_hint(hint).blocks

    @staticmethod
    def violations(row_hints: Sequence[HintLike], col_hints: Sequence[HintLike],
                   grid: Grid) -> List[Tuple[str, int]]:
        """('row', i) / ('column', x) for every line whose runs differ from its hint"""
        if grid.height != len(row_hints) or grid.width != len(col_hints):
            raise ValueError(
                f"Grid is {grid.width}x{grid.height}, hints describe "
                f"{len(col_hints)}x{len(row_hints)}"
            )
        bad = []
        for y, (hint, line) in enumerate(zip(row_hints, grid.rows())):
            if not ConstraintChecker.line_satisfied(hint, line):
                bad.append(('row', y))
        for x, (hint, line) in enumerate(zip(col_hints, grid.columns())):
            if not ConstraintChecker.line_satisfied(hint, line):
                bad.append(('column', x))
        return bad

    @staticmethod
    def is_valid_solution(puzzle: NonogramPuzzle, grid: Grid) -> bool:
        return not ConstraintChecker.violations(puzzle.row_hints, puzzle.col_hints, grid)

    @staticmethod
    def infeasible_lines(puzzle: NonogramPuzzle) -> List[Tuple[str, int]]:
        """Lines whose hint cannot fit at all (zero permutations)"""
        bad = [('row', y) for y, h in enumerate(puzzle.row_hints) if h.min_length > puzzle.width]
        bad += [('column', x) for x, h in enumerate(puzzle.col_hints) if h.min_length > puzzle.height]
        return bad

