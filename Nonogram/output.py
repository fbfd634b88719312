import json
from datetime import datetime
from typing import Dict, List, Optional

from .constraints import ConstraintChecker
from .grid import Grid
from .puzzle import NonogramPuzzle
from .solver import SolverResult


class SolutionFormatter:
    """Formats puzzle solutions for output"""

    @staticmethod
    def format_grid(grid: Grid) -> str:
        """X = filled, . = blank, ? = unknown"""
        return str(grid)

    @staticmethod
    def format_grid_with_hints(puzzle: NonogramPuzzle, grid: Optional[Grid] = None) -> str:
        """
        Board with row hints on the left and column hints stacked on top.
        Without a grid, every cell is drawn as unknown.
        """
        row_labels = [str(h) for h in puzzle.row_hints]
        label_width = max((len(s) for s in row_labels), default=0)
        col_depth = max((len(h) for h in puzzle.col_hints), default=0)
        cell_width = max([2] + [len(str(b)) + 1 for h in puzzle.col_hints for b in h])

        lines = []
        for i in range(col_depth):
            header = " " * (label_width + 2)
            for hint in puzzle.col_hints:
                offset = col_depth - len(hint)
                text = str(hint.blocks[i - offset]) if i >= offset else ""
                header += text.rjust(cell_width)
            lines.append(header.rstrip())

        rule = "-" * (label_width + 2 + cell_width * puzzle.width)
        board_rows = str(grid).split("\n") if grid is not None else ["?" * puzzle.width] * puzzle.height
        lines.append(rule)
        for label, cells in zip(row_labels, board_rows):
            body = "".join(c.rjust(cell_width) for c in cells)
            lines.append(f"{label.rjust(label_width)} |{body}")
        lines.append(rule)
        return "\n".join(lines)

    @staticmethod
    def format_solution_json(puzzle: NonogramPuzzle, result: SolverResult) -> Dict:
        """
        Format solving outcome as a JSON-able dict
        """
        solution = {
            'puzzle_info': {
                'name': puzzle.name,
                'width': puzzle.width,
                'height': puzzle.height,
                'solved': bool(result.solutions),
                'timestamp': datetime.now().isoformat()
            },
            'status': result.status,
            'message': result.message,
            'duration_ms': result.duration_ms,
            'solving_stats': result.stats,
            'solutions': [],
        }

        rows = SolutionFormatter.solutions_as_rows(result.solutions)
        for grid, grid_rows in zip(result.solutions, rows):
            solution['solutions'].append({
                'rows': grid_rows,
                'valid': ConstraintChecker.is_valid_solution(puzzle, grid),
            })

        if result.partial is not None:
            solution['partial'] = str(result.partial).split("\n")

        return solution

    @staticmethod
    def format_solution_human_readable(puzzle: NonogramPuzzle, result: SolverResult) -> str:
        """
        Format solutions as human-readable text
        """
        lines = []
        lines.append("=" * 60)
        lines.append(f"NONOGRAM SOLUTION{': ' + puzzle.name if puzzle.name else ''}")
        lines.append("=" * 60)
        lines.append(f"\nPuzzle is {puzzle.width}x{puzzle.height}")
        lines.append(f"Status: {result.status} ({result.message})")
        lines.append(f"Time taken: {result.duration_ms} ms\n")

        for i, grid in enumerate(result.solutions, 1):
            valid = "✓" if ConstraintChecker.is_valid_solution(puzzle, grid) else "✗"
            lines.append(f"SOLUTION {i} {valid}")
            lines.append("-" * 60)
            lines.append(SolutionFormatter.format_grid_with_hints(puzzle, grid))
            lines.append("")

        if not result.solutions and result.partial is not None:
            lines.append("PARTIAL BOARD:")
            lines.append("-" * 60)
            lines.append(SolutionFormatter.format_grid_with_hints(puzzle, result.partial))
            lines.append("")

        lines.append(SolutionFormatter.format_backtracks(result.branch_points))
        lines.append("=" * 60)

        return "\n".join(lines)

    @staticmethod
    def format_backtracks(branch_points: int) -> str:
        if branch_points > 0:
            return f"Required {branch_points} backtracks."
        return "No backtracking required."

    @staticmethod
    def solutions_as_rows(solutions: List[Grid]) -> List[List[List[int]]]:
        return [[[int(v) for v in row] for row in g.to_list()] for g in solutions]

    @staticmethod
    def save_solution(puzzle: NonogramPuzzle, result: SolverResult, output_path: str):
        """
        Save solution to JSON file
        """
        solution = SolutionFormatter.format_solution_json(puzzle, result)

        with open(output_path, 'w') as f:
            json.dump(solution, f, indent=2)

        print(f"\n✓ Solution saved to: {output_path}")

    @staticmethod
    def save_human_readable(puzzle: NonogramPuzzle, result: SolverResult, output_path: str):
        """
        Save human-readable solution to text file
        """
        text = SolutionFormatter.format_solution_human_readable(puzzle, result)

        with open(output_path, 'w') as f:
            f.write(text)
