"""
Diagnostics: why is a puzzle slow, ambiguous or unsolvable?

Reports what the solver is left with (partial board, branch counts) and
what the hints themselves say (pattern counts per line, lines that cannot
fit at all, mismatched totals).
"""

import json
import time
from pathlib import Path
from typing import Dict, Optional

from .constraints import ConstraintChecker, LineConstraint
from .grid import UNKNOWN
from .puzzle import NonogramPuzzle
from .solver import PuzzleSolver, TIMEOUT


class SolverDiagnostics:

    @staticmethod
    def summary(solver: PuzzleSolver) -> Dict:
        board = solver.board
        total = len(board)
        unknown = board.count(UNKNOWN)
        return {
            'status': solver.status,
            'completion': (total - unknown) / total if total else 1.0,
            'unknown_cells': unknown,
            'branch_points': solver.stats['branch_points'],
            'backtracks': solver.stats['backtracks'],
            'contradictions': solver.stats['contradictions'],
            'stack_depth': solver.depth,
            'partial_board': str(board).split("\n"),
        }

    @staticmethod
    def print_summary(solver: PuzzleSolver, puzzle: NonogramPuzzle,
                      output_dir: Optional[Path] = None) -> Dict:
        info = SolverDiagnostics.summary(solver)
        print(f"\n{'='*60}")
        print(f"DIAGNOSTICS: {puzzle.name or 'puzzle'}")
        print(f"{'='*60}")
        print(f"  Status: {info['status']}")
        print(f"  Completion: {info['completion']:.1%} ({info['unknown_cells']} unknown)")
        print(f"  Branch points: {info['branch_points']}")
        print(f"  Backtracks: {info['backtracks']}")
        print(f"  Stack depth: {info['stack_depth']}")

        if output_dir is not None:
            path = Path(output_dir) / "diagnostics.json"
            with open(path, 'w') as f:
                json.dump(info, f, indent=2)
            print(f"  Saved to: {path}")
        return info


def analyze_puzzle(puzzle: NonogramPuzzle) -> Dict:
    """Static look at the hints before solving."""
    print("\n" + "="*60)
    print("PUZZLE STRUCTURE ANALYSIS")
    print("="*60)
    print(f"\nSize: {puzzle.width}x{puzzle.height}")

    totals_ok = puzzle.totals_match()
    if not totals_ok:
        print("⚠ WARNING: row and column hints fill a different number of cells!")

    counts = {'rows': [], 'columns': []}
    for kind, hints, length in (('rows', puzzle.row_hints, puzzle.width),
                                ('columns', puzzle.col_hints, puzzle.height)):
        print(f"\n--- {kind.upper()} ---")
        for i, hint in enumerate(hints):
            n = LineConstraint(hint).permutations(length).shape[0]
            counts[kind].append(n)
            flag = " ⚠ IMPOSSIBLE!" if n == 0 else (" (fixed)" if n == 1 else "")
            print(f"  {i:3d}: [{hint}] -> {n} pattern(s){flag}")

    infeasible = ConstraintChecker.infeasible_lines(puzzle)
    if infeasible:
        print(f"\n⚠ {len(infeasible)} line(s) cannot fit their hint: {infeasible}")

    return {
        'totals_match': totals_ok,
        'pattern_counts': counts,
        'infeasible_lines': infeasible,
    }


def analyze_failure(puzzle: NonogramPuzzle, timeout: float = 60,
                    line_strategy: str = "cached") -> Dict:
    """Solve verbosely and classify the outcome."""
    solver = PuzzleSolver.from_puzzle(puzzle, verbose=True, line_strategy=line_strategy)

    print(f"\n{'='*60}")
    print(f"ANALYZING: {puzzle.name or 'puzzle'}")
    print(f"{'='*60}")

    start = time.time()
    solution = solver.find_solution(deadline=start + timeout)
    elapsed = time.time() - start

    info = SolverDiagnostics.summary(solver)
    info['solved'] = solution is not None
    info['elapsed'] = elapsed

    print(f"\n{'='*60}")
    if solution is not None:
        print(f"✓ SOLVED in {elapsed:.2f}s")
        info['failure_type'] = None
    else:
        print(f"✗ FAILED after {elapsed:.2f}s")
        print(f"\nCompletion when stopped: {info['completion']:.1%}")
        print(str(solver.board))
        if solver.status == TIMEOUT:
            info['failure_type'] = 'timeout'
            print("\n⚠️  TIMEOUT - Didn't exhaust search space")
        else:
            info['failure_type'] = 'exhausted'
            print("\n⚠️  SEARCH EXHAUSTED - The hints have no solution")
    print(f"{'='*60}\n")

    return info
