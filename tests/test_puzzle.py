# tests/test_puzzle.py
import json

import pytest

from Nonogram.puzzle import Hint, NonogramPuzzle, parse_hints


def test_parse_hints():
    hints = parse_hints("1 1, 5,3, 0,")
    assert [h.blocks for h in hints] == [(1, 1), (5,), (3,), (), ()]
    assert parse_hints("") == [Hint()]


def test_parse_hints_rejects_bad_tokens():
    with pytest.raises(ValueError):
        parse_hints("1 a, 2")
    with pytest.raises(ValueError):
        parse_hints("1, -2")


def test_hint_validation():
    with pytest.raises(ValueError):
        Hint((0,))
    with pytest.raises(ValueError):
        Hint((2, -1))
    with pytest.raises(ValueError):
        Hint((True,))


def test_hint_properties():
    h = Hint((2, 3))
    assert h.min_length == 6
    assert h.total == 5
    assert len(h) == 2
    assert list(h) == [2, 3]
    assert str(h) == "2 3"
    assert Hint().min_length == 0


def test_from_json_lists(data_dir):
    puzzle = NonogramPuzzle.from_json(data_dir / "heart.json")
    assert (puzzle.width, puzzle.height) == (5, 5)
    assert puzzle.row_hints[0].blocks == (1, 1)
    assert puzzle.totals_match()


def test_from_json_strings_and_default_name(tmp_path):
    path = tmp_path / "tiny.json"
    path.write_text(json.dumps({"rows": "1, 1", "columns": "1, 1", "author": "me"}))
    puzzle = NonogramPuzzle.from_json(path)
    assert puzzle.name == "tiny"
    assert puzzle.metadata == {"author": "me"}
    assert [h.blocks for h in puzzle.col_hints] == [(1,), (1,)]


def test_from_json_missing_key(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({"rows": [[1]]}))
    with pytest.raises(KeyError):
        NonogramPuzzle.from_json(path)


def test_totals_mismatch():
    puzzle = NonogramPuzzle.from_strings("2, 1", "1, 1")
    assert not puzzle.totals_match()


def test_to_dict_round_trip(tmp_path):
    puzzle = NonogramPuzzle.from_strings("1 1, 0, 3", "2, 0, 2", name="demo")
    data = puzzle.to_dict()
    assert data == {"name": "demo", "rows": [[1, 1], [], [3]], "columns": [[2], [], [2]]}

    path = tmp_path / "demo.json"
    path.write_text(json.dumps(data))
    loaded = NonogramPuzzle.from_json(path)
    assert loaded.row_hints == puzzle.row_hints
    assert loaded.col_hints == puzzle.col_hints
