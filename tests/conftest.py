from __future__ import annotations

import pytest

from sudoku_engine.grid import from_string

SOLVED = (
    "123456789"
    "456789123"
    "789123456"
    "214365897"
    "365897214"
    "897214365"
    "531642978"
    "642978531"
    "978531642"
)

# Same grid with the labels 1 and 7 swapped, so (0, 0) holds 7.
SOLVED_SEVEN_FIRST = (
    "723456189"
    "456189723"
    "189723456"
    "274365891"
    "365891274"
    "891274365"
    "537642918"
    "642918537"
    "918537642"
)


@pytest.fixture
def solved_grid():
    return from_string(SOLVED)


@pytest.fixture
def storage_dir(tmp_path, monkeypatch):
    root = tmp_path / "store"
    monkeypatch.setenv("SUDOKU_STORAGE_DIR", str(root))
    return root
