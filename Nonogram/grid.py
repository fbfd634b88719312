"""
Dense row-major board storage for nonogram solving

The same class backs two kinds of boards:
 - the working board, with three-valued cells (UNKNOWN / BLANK / FILLED as int8)
 - a finished solution, with bool cells (True = filled)
"""
from typing import Iterable, List, Optional, Sequence

import numpy as np


UNKNOWN = -1
BLANK = 0
FILLED = 1

_SYMBOLS = {FILLED: 'X', BLANK: '.', UNKNOWN: '?'}


class Grid:
    """Fixed width x height array of cells stored row-major in a numpy array."""

    def __init__(self, width: int, height: int, default_value=UNKNOWN, dtype=np.int8):
        if width < 0 or height < 0:
            raise ValueError(f"Grid size must be non-negative, got {width}x{height}")
        self._data = np.full((height, width), default_value, dtype=dtype)

    @classmethod
    def create(cls, width: int, height: int, default_value=UNKNOWN, dtype=None) -> 'Grid':
        """Build a grid with every cell set to default_value."""
        if dtype is None:
            dtype = bool if isinstance(default_value, (bool, np.bool_)) else np.int8
        return cls(width, height, default_value, dtype=dtype)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence], dtype=np.int8) -> 'Grid':
        data = np.asarray(rows, dtype=dtype)
        if data.ndim != 2:
            if data.size == 0:
                data = data.reshape(len(rows), 0)
            else:
                raise ValueError("Rows must all have the same length")
        grid = cls(0, 0, dtype=dtype)
        grid._data = data.copy()
        return grid

    @classmethod
    def _wrap(cls, data: np.ndarray) -> 'Grid':
        grid = cls.__new__(cls)
        grid._data = data
        return grid

    # -------------------------------------------------------------------------
    # Shape
    # -------------------------------------------------------------------------
    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def dtype(self):
        return self._data.dtype

    def __len__(self) -> int:
        return self._data.size

    # -------------------------------------------------------------------------
    # Rows and columns
    # -------------------------------------------------------------------------
    def _check_row(self, i: int) -> None:
        if not 0 <= i < self.height:
            raise IndexError(f"Row {i} out of range for height {self.height}")

    def _check_column(self, x: int) -> None:
        if not 0 <= x < self.width:
            raise IndexError(f"Column {x} out of range for width {self.width}")

    def row(self, i: int) -> np.ndarray:
        """View of row i (writes through to the grid)."""
        self._check_row(i)
        return self._data[i]

    def row_checked(self, i: int) -> Optional[np.ndarray]:
        if 0 <= i < self.height:
            return self._data[i]
        return None

    def row_unchecked(self, i: int) -> np.ndarray:
        # Caller guarantees 0 <= i < height; a negative i would wrap around.
        return self._data[i]

    def column(self, x: int) -> np.ndarray:
        """Copy of column x (storage is row-major, so a column is materialized)."""
        self._check_column(x)
        return self._data[:, x].copy()

    def column_checked(self, x: int) -> Optional[np.ndarray]:
        if 0 <= x < self.width:
            return self._data[:, x].copy()
        return None

    def column_unchecked(self, x: int) -> np.ndarray:
        return self._data[:, x].copy()

    def set_row(self, i: int, values: Sequence) -> None:
        self._check_row(i)
        if len(values) != self.width:
            raise ValueError(f"Row {i} needs {self.width} values, got {len(values)}")
        self._data[i] = values

    def set_column(self, x: int, values: Sequence) -> None:
        self._check_column(x)
        if len(values) != self.height:
            raise ValueError(f"Column {x} needs {self.height} values, got {len(values)}")
        self._data[:, x] = values

    def rows(self) -> Iterable[np.ndarray]:
        return iter(self._data)

    def columns(self) -> Iterable[np.ndarray]:
        return (self._data[:, x].copy() for x in range(self.width))

    # -------------------------------------------------------------------------
    # Single cells
    # -------------------------------------------------------------------------
    def pos(self, x: int, y: int):
        self._check_column(x)
        self._check_row(y)
        return self._data[y, x].item()

    def pos_checked(self, x: int, y: int):
        if 0 <= x < self.width and 0 <= y < self.height:
            return self._data[y, x].item()
        return None

    def set_pos(self, x: int, y: int, value) -> None:
        self._check_column(x)
        self._check_row(y)
        self._data[y, x] = value

    def get_index(self, index: int):
        """Cell at a flat row-major index."""
        if not 0 <= index < self._data.size:
            raise IndexError(f"Index {index} out of range for {self.width}x{self.height} grid")
        return self._data.flat[index].item()

    def set_index(self, index: int, value) -> None:
        if not 0 <= index < self._data.size:
            raise IndexError(f"Index {index} out of range for {self.width}x{self.height} grid")
        self._data.flat[index] = value

    # -------------------------------------------------------------------------
    # Whole-board queries
    # -------------------------------------------------------------------------
    def clone(self) -> 'Grid':
        return Grid._wrap(self._data.copy())

    def as_array(self) -> np.ndarray:
        """The backing (height, width) array. Not a copy."""
        return self._data

    def to_list(self) -> List[List]:
        return self._data.tolist()

    def count(self, value) -> int:
        return int(np.count_nonzero(self._data == value))

    def first_unknown(self) -> Optional[int]:
        """Lowest row-major index still UNKNOWN, or None."""
        unknown = np.flatnonzero(self._data == UNKNOWN)
        return int(unknown[0]) if unknown.size else None

    def is_complete(self) -> bool:
        return not np.any(self._data == UNKNOWN)

    def to_cells(self) -> 'Grid':
        """Materialize a fully-determined board as a bool grid."""
        if self._data.dtype == bool:
            return self.clone()
        if not self.is_complete():
            raise ValueError("Cannot materialize a board that still has unknown cells")
        return Grid._wrap(self._data == FILLED)

    # -------------------------------------------------------------------------
    # Comparison and display
    # -------------------------------------------------------------------------
    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._data.shape == other._data.shape and bool(np.array_equal(self._data, other._data))

    def __str__(self) -> str:
        if self._data.dtype == bool:
            return "\n".join("".join('X' if v else '.' for v in row) for row in self._data)
        return "\n".join("".join(_SYMBOLS[int(v)] for v in row) for row in self._data)

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height}, dtype={self._data.dtype})"
