# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "Nonogram" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def data_dir():
    return ROOT / "data" / "json"
