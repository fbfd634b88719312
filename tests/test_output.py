# tests/test_output.py
import json

from Nonogram.diagnostics import SolverDiagnostics, analyze_failure, analyze_puzzle
from Nonogram.grid import BLANK, FILLED, UNKNOWN, Grid
from Nonogram.output import SolutionFormatter
from Nonogram.puzzle import NonogramPuzzle
from Nonogram.render import RenderConfig, draw_grid, save_grid_image
from Nonogram.solver import PuzzleSolver


def diagonal_puzzle():
    return NonogramPuzzle([[1], [1]], [[1], [1]], name="diag")


def diagonal_solution():
    return Grid.from_rows([[True, False], [False, True]], dtype=bool)


def test_format_grid():
    assert SolutionFormatter.format_grid(diagonal_solution()) == "X.\n.X"


def test_format_grid_with_hints():
    text = SolutionFormatter.format_grid_with_hints(diagonal_puzzle(), diagonal_solution())
    assert text.split("\n") == [
        "    1 1",
        "-------",
        "1 | X .",
        "1 | . X",
        "-------",
    ]


def test_format_grid_with_hints_without_board():
    text = SolutionFormatter.format_grid_with_hints(diagonal_puzzle())
    assert "1 | ? ?" in text


def test_format_backtracks():
    assert SolutionFormatter.format_backtracks(0) == "No backtracking required."
    assert SolutionFormatter.format_backtracks(3) == "Required 3 backtracks."


def test_solution_json_is_serializable(data_dir):
    puzzle = NonogramPuzzle.from_json(data_dir / "heart.json")
    result = PuzzleSolver.from_puzzle(puzzle).solve()
    data = SolutionFormatter.format_solution_json(puzzle, result)
    json.dumps(data)
    assert data['status'] == 'solved'
    assert data['puzzle_info']['solved']
    assert data['solutions'][0]['valid']
    assert data['solutions'][0]['rows'][0] == [0, 1, 0, 1, 0]
    assert 'partial' not in data


def test_failed_result_keeps_partial_board():
    puzzle = NonogramPuzzle([[3]], [[1]])
    result = PuzzleSolver.from_puzzle(puzzle).solve()
    data = SolutionFormatter.format_solution_json(puzzle, result)
    assert data['solutions'] == []
    assert data['partial'] == ["?"]
    text = SolutionFormatter.format_solution_human_readable(puzzle, result)
    assert "PARTIAL BOARD:" in text


def test_human_readable(data_dir):
    puzzle = NonogramPuzzle.from_json(data_dir / "heart.json")
    result = PuzzleSolver.from_puzzle(puzzle).solve()
    text = SolutionFormatter.format_solution_human_readable(puzzle, result)
    assert "SOLUTION 1 ✓" in text
    assert "No backtracking required." in text


def test_save_files(tmp_path):
    puzzle = diagonal_puzzle()
    result = PuzzleSolver.from_puzzle(puzzle).solve()
    json_path = tmp_path / "solution.json"
    txt_path = tmp_path / "solution.txt"
    SolutionFormatter.save_solution(puzzle, result, str(json_path))
    SolutionFormatter.save_human_readable(puzzle, result, str(txt_path))

    with open(json_path) as f:
        saved = json.load(f)
    assert len(saved['solutions']) == 2
    assert "Required 1 backtracks." in txt_path.read_text()
    assert SolutionFormatter.solutions_as_rows(result.solutions) == [
        [[1, 0], [0, 1]],
        [[0, 1], [1, 0]],
    ]


def test_draw_grid():
    board = Grid.from_rows([[FILLED, BLANK], [UNKNOWN, FILLED]])
    img = draw_grid(board)
    assert img.shape == (60, 60, 3)
    assert tuple(img[20, 20]) == (40, 40, 40)
    assert tuple(img[20, 40]) == (255, 255, 255)
    assert tuple(img[34, 14]) == (200, 200, 200)

    small = draw_grid(board, RenderConfig(cell_size=5, margin=0))
    assert small.shape == (10, 10, 3)


def test_draw_solution_grid():
    img = draw_grid(diagonal_solution())
    assert tuple(img[20, 20]) == (40, 40, 40)
    assert tuple(img[20, 40]) == (255, 255, 255)


def test_save_grid_image(tmp_path):
    path = tmp_path / "board.png"
    save_grid_image(diagonal_solution(), str(path))
    assert path.exists()


def test_diagnostics_summary(tmp_path):
    solver = PuzzleSolver([[3]], [[1]])
    solver.find_solution()
    info = SolverDiagnostics.summary(solver)
    assert info['status'] == 'exhausted'
    assert info['unknown_cells'] == 1
    assert info['completion'] == 0.0

    SolverDiagnostics.print_summary(solver, NonogramPuzzle([[3]], [[1]]), tmp_path)
    assert (tmp_path / "diagnostics.json").exists()


def test_analyze_puzzle():
    info = analyze_puzzle(NonogramPuzzle([[3], [1]], [[1], [2]]))
    assert info['totals_match'] is False
    assert info['pattern_counts'] == {'rows': [0, 2], 'columns': [2, 1]}
    assert info['infeasible_lines'] == [('row', 0)]


def test_analyze_failure():
    info = analyze_failure(NonogramPuzzle([[3]], [[1]]), timeout=5)
    assert not info['solved']
    assert info['failure_type'] == 'exhausted'

    info = analyze_failure(diagonal_puzzle(), timeout=5)
    assert info['solved']
    assert info['failure_type'] is None
