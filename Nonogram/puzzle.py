"""
Core data structures for nonogram puzzle representation
"""
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Sequence, Tuple, Union


@dataclass(frozen=True)
class Hint:
    """Ordered run lengths of filled cells for one row or column"""
    blocks: Tuple[int, ...] = ()

    def __post_init__(self):
        blocks = tuple(self.blocks)
        for b in blocks:
            if isinstance(b, bool) or not isinstance(b, int) or b <= 0:
                raise ValueError(f"Hint blocks must be positive integers, got {b!r}")
        object.__setattr__(self, 'blocks', blocks)

    @property
    def min_length(self) -> int:
        """Fewest cells that can hold every block with one blank between runs"""
        if not self.blocks:
            return 0
        return sum(self.blocks) + len(self.blocks) - 1

    @property
    def total(self) -> int:
        return sum(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def __iter__(self):
        return iter(self.blocks)

    def __str__(self) -> str:
        return " ".join(str(b) for b in self.blocks)


HintLike = Union[Hint, Sequence[int]]


def as_hint(value: HintLike) -> Hint:
    return value if isinstance(value, Hint) else Hint(tuple(value))


def parse_hints(text: str) -> List[Hint]:
    """
    Parse a hint string into one Hint per line.

    Lines are separated by commas, numbers within a line by whitespace.
    An empty entry or a lone 0 is the empty hint (an all-blank line).
    """
    hints = []
    for chunk in text.split(','):
        numbers = []
        for token in chunk.split():
            try:
                value = int(token)
            except ValueError:
                raise ValueError(f"Invalid hint number: {token!r}") from None
            if value < 0:
                raise ValueError(f"Invalid hint number: {token!r}")
            if value > 0:
                numbers.append(value)
        hints.append(Hint(tuple(numbers)))
    return hints


def _load_hint_list(raw) -> List[Hint]:
    if isinstance(raw, str):
        return parse_hints(raw)
    return [as_hint([int(n) for n in line]) for line in raw]


@dataclass
class NonogramPuzzle:
    """Row and column hints for a rectangular puzzle"""
    row_hints: List[Hint]
    col_hints: List[Hint]
    name: str = ""
    metadata: Dict = field(default_factory=dict)

    def __post_init__(self):
        self.row_hints = [as_hint(h) for h in self.row_hints]
        self.col_hints = [as_hint(h) for h in self.col_hints]

    @classmethod
    def from_strings(cls, rows: str, cols: str, name: str = "") -> 'NonogramPuzzle':
        return cls(parse_hints(rows), parse_hints(cols), name=name)

    @classmethod
    def from_json(cls, json_path: Union[str, Path]) -> 'NonogramPuzzle':
        """
        Load puzzle from JSON file.

        Expected keys: "rows" and "columns", each a list of int lists or a
        hint string. "name" is optional and defaults to the file stem.
        """
        with open(json_path, 'r') as f:
            data = json.load(f)

        if 'rows' not in data or 'columns' not in data:
            raise KeyError(f"{json_path}: puzzle JSON needs 'rows' and 'columns'")

        extra = {k: v for k, v in data.items() if k not in ('rows', 'columns', 'name')}
        return cls(
            _load_hint_list(data['rows']),
            _load_hint_list(data['columns']),
            name=data.get('name', Path(json_path).stem),
            metadata=extra,
        )

    @property
    def width(self) -> int:
        return len(self.col_hints)

    @property
    def height(self) -> int:
        return len(self.row_hints)

    def totals_match(self) -> bool:
        """Filled cells counted by rows must equal filled cells counted by columns"""
        return sum(h.total for h in self.row_hints) == sum(h.total for h in self.col_hints)

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'rows': [list(h.blocks) for h in self.row_hints],
            'columns': [list(h.blocks) for h in self.col_hints],
        }

    def __repr__(self):
        return f"NonogramPuzzle(name={self.name!r}, width={self.width}, height={self.height})"
