# sudoku_engine/generator.py
# Build a random complete solution (diagonal boxes seeded, rest solved), then
# carve a puzzle out of it by blanking a per-difficulty number of cells.

from __future__ import annotations

import enum
import logging
import random
import time
from dataclasses import dataclass
from typing import Dict, Optional

from contracts.errors import GridContractError
from project_config import get_section

from .grid import BOX, DIGITS, EMPTY, SIZE, Grid, copy_grid, empty_grid
from .solver import solve_sudoku

_LOGGER = logging.getLogger(__name__)


class Difficulty(str, enum.Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: "Difficulty | str") -> "Difficulty":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            choices = ", ".join(d.value for d in cls)
            raise GridContractError(f"unknown difficulty {value!r}; expected one of {choices}") from exc


DEFAULT_REMOVAL: Dict[Difficulty, int] = {
    Difficulty.EASY: 25,
    Difficulty.MEDIUM: 40,
    Difficulty.HARD: 55,
}


def removal_budget(difficulty: "Difficulty | str") -> int:
    """Number of cells blanked out of 81 for ``difficulty``.

    ``[generator.removal]`` in ``config.toml`` overrides the defaults.
    """
    level = Difficulty.parse(difficulty)
    configured = get_section("generator.removal", {})
    budget = int(configured.get(level.value, DEFAULT_REMOVAL[level]))
    if not 0 <= budget <= SIZE * SIZE:
        raise GridContractError(f"removal budget for {level.value} must be in [0, 81], got {budget}")
    return budget


@dataclass(frozen=True)
class GeneratedPuzzle:
    difficulty: Difficulty
    puzzle: Grid
    solution: Grid


def _fill_box(grid: Grid, row: int, col: int, rng: random.Random) -> None:
    nums = list(DIGITS)
    rng.shuffle(nums)
    for k, num in enumerate(nums):
        grid[row + k // BOX][col + k % BOX] = num


def generate_solution(rng: random.Random) -> Grid:
    """Return a complete valid grid.

    The three diagonal boxes share no row, column or box, so they are filled
    with independent permutations without any check; the solver completes the
    rest, which makes the solution vary with the seeding.
    """
    grid = empty_grid()
    for origin in range(0, SIZE, BOX):
        _fill_box(grid, origin, origin, rng)
    if not solve_sudoku(grid):  # pragma: no cover - diagonal seeding is always completable
        raise RuntimeError("diagonal seeding produced an unsolvable grid")
    return grid


def carve(solution: Grid, budget: int, rng: random.Random) -> Grid:
    """Blank exactly ``budget`` filled cells of a copy of ``solution``.

    Cells are drawn uniformly; draws that land on an already blank cell are
    skipped without counting.
    """
    filled = sum(1 for row in solution for v in row if v is not EMPTY)
    if not 0 <= budget <= filled:
        raise GridContractError(f"cannot remove {budget} cells from a grid with {filled} filled")
    puzzle = copy_grid(solution)
    removed = 0
    while removed < budget:
        row = rng.randrange(SIZE)
        col = rng.randrange(SIZE)
        if puzzle[row][col] is not EMPTY:
            puzzle[row][col] = EMPTY
            removed += 1
    return puzzle


def _resolve_rng(seed: Optional[int | str], rng: Optional[random.Random]) -> random.Random:
    if rng is not None:
        return rng
    return random.Random(seed)


def generate_puzzle(
    difficulty: "Difficulty | str",
    *,
    seed: Optional[int | str] = None,
    rng: Optional[random.Random] = None,
) -> GeneratedPuzzle:
    """Generate a puzzle together with the solution it was carved from.

    The puzzle is not checked for a unique solution; only the existence of the
    answer key is guaranteed.
    """
    level = Difficulty.parse(difficulty)
    budget = removal_budget(level)
    generator = _resolve_rng(seed, rng)
    t0 = time.perf_counter()
    solution = generate_solution(generator)
    puzzle = carve(solution, budget, generator)
    _LOGGER.debug(
        "generated %s puzzle removed=%d elapsed_ms=%.1f",
        level.value,
        budget,
        (time.perf_counter() - t0) * 1000.0,
    )
    return GeneratedPuzzle(difficulty=level, puzzle=puzzle, solution=solution)


def generate_sudoku(
    difficulty: "Difficulty | str",
    *,
    seed: Optional[int | str] = None,
    rng: Optional[random.Random] = None,
) -> Grid:
    """Return a fresh playable grid for ``difficulty``."""

    return generate_puzzle(difficulty, seed=seed, rng=rng).puzzle


__all__ = [
    "DEFAULT_REMOVAL",
    "Difficulty",
    "GeneratedPuzzle",
    "carve",
    "generate_puzzle",
    "generate_solution",
    "generate_sudoku",
    "removal_budget",
]
