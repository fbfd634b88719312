# tests/test_grid.py
import numpy as np
import pytest

from Nonogram.grid import BLANK, FILLED, UNKNOWN, Grid


def test_create_fills_default():
    g = Grid.create(3, 2, UNKNOWN)
    assert (g.width, g.height) == (3, 2)
    assert len(g) == 6
    assert g.count(UNKNOWN) == 6

    cells = Grid.create(2, 2, False)
    assert cells.dtype == bool
    assert cells.count(False) == 4


def test_row_is_view_and_column_is_copy():
    g = Grid(3, 2)
    g.row(0)[1] = FILLED
    assert g.pos(1, 0) == FILLED

    col = g.column(1)
    col[1] = BLANK
    assert g.pos(1, 1) == UNKNOWN
    assert col.tolist() == [FILLED, BLANK]


def test_set_row_and_column():
    g = Grid(3, 2)
    g.set_row(1, [FILLED, BLANK, FILLED])
    g.set_column(0, [BLANK, BLANK])
    assert g.to_list() == [[BLANK, UNKNOWN, UNKNOWN], [BLANK, BLANK, FILLED]]


def test_wrong_length_fails_fast():
    g = Grid(3, 2)
    with pytest.raises(ValueError):
        g.set_row(0, [FILLED, FILLED])
    with pytest.raises(ValueError):
        g.set_column(0, [FILLED, FILLED, FILLED])


def test_out_of_range_access():
    g = Grid(3, 2)
    with pytest.raises(IndexError):
        g.row(2)
    with pytest.raises(IndexError):
        g.row(-1)
    with pytest.raises(IndexError):
        g.column(3)
    with pytest.raises(IndexError):
        g.pos(3, 0)
    with pytest.raises(IndexError):
        g.set_index(6, FILLED)

    # checked variants report absence instead
    assert g.row_checked(2) is None
    assert g.column_checked(-1) is None
    assert g.pos_checked(0, 2) is None
    assert g.pos_checked(2, 1) == UNKNOWN


def test_clone_is_independent():
    g = Grid(2, 2)
    snapshot = g.clone()
    g.set_pos(0, 0, FILLED)
    assert snapshot.pos(0, 0) == UNKNOWN
    assert snapshot != g


def test_first_unknown_is_row_major():
    g = Grid(3, 2)
    assert g.first_unknown() == 0
    g.set_index(0, FILLED)
    g.set_index(1, BLANK)
    assert g.first_unknown() == 2
    g.set_row(0, [FILLED, BLANK, BLANK])
    assert g.first_unknown() == 3
    g.set_row(1, [BLANK, BLANK, BLANK])
    assert g.first_unknown() is None
    assert g.is_complete()


def test_to_cells():
    g = Grid(2, 1)
    with pytest.raises(ValueError):
        g.to_cells()
    g.set_row(0, [FILLED, BLANK])
    cells = g.to_cells()
    assert cells.dtype == bool
    assert cells.to_list() == [[True, False]]


def test_str_rendering():
    g = Grid.from_rows([[FILLED, BLANK, UNKNOWN], [BLANK, FILLED, FILLED]])
    assert str(g) == "X.?\n.XX"
    cells = Grid.from_rows([[True, False]], dtype=bool)
    assert str(cells) == "X."


def test_from_rows_and_equality():
    a = Grid.from_rows([[1, 0], [0, 1]])
    b = Grid.from_rows([[1, 0], [0, 1]])
    assert a == b
    assert a.as_array().shape == (2, 2)
    assert np.array_equal(a.row(1), [0, 1])


def test_unchecked_lines_match_checked_ones():
    g = Grid.from_rows([[FILLED, BLANK, UNKNOWN], [BLANK, FILLED, FILLED]])
    for i in range(g.height):
        assert np.array_equal(g.row_unchecked(i), g.row(i))
    for x in range(g.width):
        assert np.array_equal(g.column_unchecked(x), g.column(x))

    g.row_unchecked(0)[2] = BLANK
    assert g.pos(2, 0) == BLANK

    col = g.column_unchecked(1)
    col[0] = FILLED
    assert g.pos(1, 0) == BLANK


def test_rows_and_columns_iterate_in_order():
    g = Grid.from_rows([[FILLED, BLANK], [BLANK, BLANK], [FILLED, FILLED]])
    assert [r.tolist() for r in g.rows()] == g.to_list()
    assert [c.tolist() for c in g.columns()] == [
        [FILLED, BLANK, FILLED],
        [BLANK, BLANK, FILLED],
    ]
