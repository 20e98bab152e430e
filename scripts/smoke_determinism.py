#!/usr/bin/env python3
"""Smoke-test deterministic behaviour of seeded puzzle generation."""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from contracts.jsoncanon import grid_digest
from sudoku_engine import Difficulty, generate_puzzle, is_valid_sudoku, solved_copy


def _digests(seed: str, difficulty: Difficulty) -> tuple[str, str]:
    generated = generate_puzzle(difficulty, seed=seed)
    if not is_valid_sudoku(generated.solution) or solved_copy(generated.puzzle) is None:
        raise SystemExit(f"invalid output for seed={seed} difficulty={difficulty.value}")
    return grid_digest(generated.puzzle), grid_digest(generated.solution)


def main() -> int:
    for difficulty in Difficulty:
        first = _digests("deterministic-seed", difficulty)
        second = _digests("deterministic-seed", difficulty)
        if first != second:
            print(f"determinism failed for {difficulty.value}: {first} vs {second}")
            return 1

        third = _digests("different-seed", difficulty)
        if first == third:
            print(f"different seed produced identical {difficulty.value} puzzle: {first[0]}")
            return 1

    print("Determinism smoke-test passed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
