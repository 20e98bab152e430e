from __future__ import annotations

import json
import math

import pytest

from contracts.jsoncanon import canonical_dump, canonical_sha256, grid_digest
from sudoku_engine.grid import empty_grid


def test_canonical_order_and_numbers():
    payload_a = {"b": 2, "a": 1.0}
    payload_b = {"a": 1, "b": 2}
    assert canonical_dump(payload_a) == canonical_dump(payload_b) == b'{"a":1,"b":2}'
    assert canonical_sha256(payload_a) == canonical_sha256(payload_b)


def test_rejects_nan():
    with pytest.raises(ValueError):
        canonical_dump({"value": math.nan})


def test_grid_digest_survives_json_round_trip(solved_grid):
    grid = empty_grid()
    grid[0][0] = 5
    restored = json.loads(canonical_dump(grid))
    assert restored == grid
    assert grid_digest(restored) == grid_digest(grid)
    assert grid_digest(grid) != grid_digest(solved_grid)
    assert len(grid_digest(grid)) == len("sha256-") + 64
