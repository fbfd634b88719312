#!/usr/bin/env python3
"""
Nonogram Solver - Main Entry Point

Usage:
    python -m Nonogram.main data/json/heart.json
    python -m Nonogram.main --compare data/json/heart.json
    python -m Nonogram.main --rows "1 1, 5, 5, 3, 1" --cols "2, 4, 4, 4, 2"
    python -m Nonogram.main  # Solves all puzzles in data/json/
"""

import sys
import time
import traceback
from pathlib import Path

from .diagnostics import SolverDiagnostics
from .grid import UNKNOWN
from .output import SolutionFormatter
from .puzzle import NonogramPuzzle
from .render import save_grid_image
from .solver import TIMEOUT, PuzzleSolver

# ============================================================================
# CONFIGURATION
# ============================================================================
PUZZLE_PATH = "data/json/heart.json"   # Puzzle to solve by default
OUTPUT_DIR = "data/debug"              # Base output directory
SOLVE_ALL = True                       # Set True to solve all JSON puzzles

LINE_STRATEGY = "cached"
# How each row/column is solved:
# - "cached": keep the surviving patterns per line and narrow them (default)
# - "brute": regenerate every pattern on every pass
# - "fast": reachability tables, no pattern enumeration

MAX_SOLUTIONS = 10
# Stop after this many solutions (None = enumerate all)

TIMEOUT_SECONDS = 300
# Maximum time to spend solving a single puzzle

SAVE_IMAGES = True
# Write solution.png next to solution.json / solution.txt
# ============================================================================

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def run_solver(puzzle: NonogramPuzzle, verbose: bool = True,
               line_strategy: str = LINE_STRATEGY,
               max_solutions=MAX_SOLUTIONS,
               timeout_seconds: float = TIMEOUT_SECONDS):
    """
    Find solutions one at a time, printing each with its timing, the way a
    person watching the solver would want to see them.
    """
    solver = PuzzleSolver.from_puzzle(puzzle, verbose=False, line_strategy=line_strategy)
    start = time.time()
    deadline = start + timeout_seconds if timeout_seconds else None
    solutions = []

    try:
        while max_solutions is None or len(solutions) < max_solutions:
            t0 = time.time()
            solution = solver.find_solution(deadline=deadline)
            elapsed_us = int((time.time() - t0) * 1_000_000)

            if solution is not None:
                solutions.append(solution)
                if verbose:
                    print(f"Found solution:\n{solution}")
                    print(SolutionFormatter.format_backtracks(solver.num_backtracks))
                    print(f"Time taken: {elapsed_us}μs")
                continue

            if verbose:
                if solver.status == TIMEOUT:
                    print(f"Timed out after {timeout_seconds}s - partial board:\n{solver.board}")
                elif solutions:
                    print("No more solutions found.")
                else:
                    print(f"Failed - found partial solution:\n{solver.board}")
                print(SolutionFormatter.format_backtracks(solver.num_backtracks))
                print(f"Time taken: {elapsed_us}μs")
            break
    except KeyboardInterrupt:
        print(f"\nProgress when stopped: {solver.board.count(UNKNOWN)} unknown cells")
        print(solver.board)
        solver.print_stats()
        raise

    result = solver.make_result(solutions, int((time.time() - start) * 1000), timeout_seconds)
    return result, solver


def solve_puzzle(puzzle: NonogramPuzzle, output_dir=None, verbose: bool = True,
                 line_strategy: str = LINE_STRATEGY,
                 max_solutions=MAX_SOLUTIONS,
                 timeout_seconds: float = TIMEOUT_SECONDS,
                 save_images: bool = SAVE_IMAGES):
    """
    Solve a single puzzle and save results.

    Args:
        puzzle: Puzzle to solve
        output_dir: Directory for output files (default: data/debug/<puzzle_name>/)
        verbose: Print every solution as it is found
        line_strategy: "cached", "brute" or "fast"
        max_solutions: Stop after this many solutions (None = all)
        timeout_seconds: Maximum solving time in seconds
        save_images: Also render solution.png
    """
    puzzle_name = puzzle.name or "puzzle"
    if output_dir is None:
        output_dir = PROJECT_ROOT / OUTPUT_DIR / puzzle_name
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Solving puzzle: {puzzle_name} ({puzzle.width}x{puzzle.height})")
    print(f"Output directory: {output_dir}")
    print(f"{'='*60}")

    if verbose:
        print("\nSolver Configuration:")
        print(f"  Line strategy: {line_strategy}")
        print(f"  Max solutions: {max_solutions if max_solutions is not None else 'all'}")
        print(f"  Timeout: {timeout_seconds}s")
        print("\nRunning...")

    result, solver = run_solver(puzzle, verbose=verbose, line_strategy=line_strategy,
                                max_solutions=max_solutions,
                                timeout_seconds=timeout_seconds)

    SolutionFormatter.save_solution(puzzle, result, str(output_dir / "solution.json"))
    SolutionFormatter.save_human_readable(puzzle, result, str(output_dir / "solution.txt"))
    if save_images:
        board = result.solutions[0] if result.solutions else result.partial
        save_grid_image(board, str(output_dir / "solution.png"))

    if result.solutions:
        print(f"\n{'='*60}")
        print(f"SUCCESS! {result.message} ✓")
        print(f"{'='*60}")
    else:
        print(f"\n{'='*60}")
        print(f"FAILED: {result.message} ✗")
        print(f"{'='*60}")
        SolverDiagnostics.print_summary(solver, puzzle, output_dir)

    return result


def _load(path: str) -> NonogramPuzzle:
    input_file = Path(path)
    if not input_file.is_absolute() and not input_file.exists():
        input_file = PROJECT_ROOT / input_file
    if not input_file.exists():
        print(f"Error: File not found: {input_file}")
        sys.exit(1)
    return NonogramPuzzle.from_json(input_file)


def solve_all_puzzles(data_dir=None, output_dir=None,
                      line_strategy: str = LINE_STRATEGY,
                      timeout_seconds: float = TIMEOUT_SECONDS):
    """
    Solve all puzzles in data/json/ (or a specified directory)
    """
    data_path = Path(data_dir) if data_dir else PROJECT_ROOT / "data" / "json"
    if not data_path.exists():
        print(f"Error: Directory not found: {data_path}")
        return []

    json_files = sorted(data_path.glob("*.json"))
    if not json_files:
        print(f"No JSON puzzles found in {data_path}")
        return []

    print(f"\nFound {len(json_files)} puzzle(s) to solve")
    results = []

    for i, json_file in enumerate(json_files, 1):
        print(f"\n[{i}/{len(json_files)}] Solving {json_file.name}...")
        try:
            puzzle = NonogramPuzzle.from_json(json_file)
            sub_dir = Path(output_dir) / puzzle.name if output_dir else None
            result = solve_puzzle(puzzle, output_dir=sub_dir, verbose=False,
                                  line_strategy=line_strategy,
                                  timeout_seconds=timeout_seconds)
        except Exception as e:
            print(f"\nError while solving {json_file}: {e}")
            traceback.print_exc()
            result = None

        results.append({
            'file': json_file.name,
            'solved': bool(result and result.solutions),
            'solutions': len(result.solutions) if result else 0,
            'branch_points': result.branch_points if result else None,
            'duration_ms': result.duration_ms if result else None,
        })

    print(f"\n{'='*60}")
    print("SUMMARY")
    print(f"{'='*60}")
    solved_count = sum(1 for r in results if r['solved'])
    print(f"Solved: {solved_count}/{len(results)} puzzles")
    for r in results:
        status = "✓" if r['solved'] else "✗"
        print(f"{status} {r['file']:30s}", end="")
        if r['solved']:
            print(f" - {r['solutions']} solution(s), {r['branch_points']} branch points, "
                  f"{r['duration_ms']} ms")
        else:
            print(" - Failed")
    return results


def run_comparison_test(puzzle: NonogramPuzzle, timeout_seconds: float = 60):
    """
    Solve the same puzzle with every line strategy and compare.
    """
    strategies = ["cached", "brute", "fast"]
    print(f"\n{'='*60}")
    print(f"COMPARISON TEST: {puzzle.name or 'puzzle'}")
    print(f"{'='*60}\n")

    rows = []
    for strategy in strategies:
        solver = PuzzleSolver.from_puzzle(puzzle, line_strategy=strategy)
        result = solver.solve(timeout_seconds=timeout_seconds, max_solutions=MAX_SOLUTIONS)
        rows.append((strategy, result))

    print(f"{'Strategy':<10} {'Result':<11} {'Sols':<6} {'Branches':<9} {'Line solves':<12} {'ms':<8}")
    print(f"{'-'*10} {'-'*11} {'-'*6} {'-'*9} {'-'*12} {'-'*8}")
    for strategy, r in rows:
        print(f"{strategy:<10} {r.status:<11} {len(r.solutions):<6} {r.branch_points:<9} "
              f"{r.stats['line_solves']:<12} {r.duration_ms:<8}")

    reference = [s.to_list() for s in rows[0][1].solutions]
    agree = all([s.to_list() for s in r.solutions] == reference for _, r in rows)
    print(f"\nStrategies agree: {'YES' if agree else 'NO'}")
    return rows


def main(argv=None):
    """Main entry point"""
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        if args and args[0] in ("--compare", "-c"):
            if len(args) < 2:
                print("Usage: python -m Nonogram.main --compare <puzzle.json>")
                sys.exit(1)
            run_comparison_test(_load(args[1]))

        elif args and args[0] == "--rows":
            if len(args) != 4 or args[2] != "--cols":
                print('Usage: python -m Nonogram.main --rows "<hints>" --cols "<hints>"')
                sys.exit(1)
            puzzle = NonogramPuzzle.from_strings(args[1], args[3], name="inline")
            solve_puzzle(puzzle, verbose=True)

        elif args:
            solve_puzzle(_load(args[0]), verbose=True)

        elif SOLVE_ALL:
            print("SOLVE_ALL mode enabled - solving all puzzles in data/json/")
            solve_all_puzzles()

        else:
            print(f"Using configured PUZZLE_PATH: {PUZZLE_PATH}")
            solve_puzzle(_load(PUZZLE_PATH), verbose=True)

    except KeyboardInterrupt:
        print(f"\n\n{'='*60}")
        print("⚠ Solving interrupted by user (Ctrl+C)")
        print(f"{'='*60}")


if __name__ == "__main__":
    main()
