"""Backtracking solver used both for generation and for hints."""

from __future__ import annotations

import logging
import time
from typing import Optional

from .checker import _conflicts_with_peers, is_valid_sudoku
from .grid import DIGITS, EMPTY, SIZE, Grid, copy_grid, ensure_grid

_LOGGER = logging.getLogger(__name__)

_CELLS = SIZE * SIZE


def _backtrack(grid: Grid, start: int = 0) -> bool:
    # Row-major scan from ``start``; every cell before it is already filled.
    for k in range(start, _CELLS):
        row, col = divmod(k, SIZE)
        if grid[row][col] is not EMPTY:
            continue
        for num in DIGITS:
            if _conflicts_with_peers(grid, row, col, num):
                continue
            grid[row][col] = num
            if _backtrack(grid, k + 1):
                return True
        grid[row][col] = EMPTY
        return False
    return True


def solve_sudoku(grid: Grid) -> bool:
    """Complete ``grid`` in place and return ``True``, or return ``False``.

    Cells are scanned row-major and digits tried 1 through 9, so the result is
    the lexicographically first completion. On failure every tentative
    placement is undone and ``grid`` is left exactly as it was passed in. A
    grid whose present digits already conflict has no valid completion.
    """
    ensure_grid(grid)
    if not is_valid_sudoku(grid):
        return False
    started = time.perf_counter()
    solved = _backtrack(grid)
    _LOGGER.debug(
        "solve finished solved=%s elapsed_ms=%.1f",
        solved,
        (time.perf_counter() - started) * 1000.0,
    )
    return solved


def solved_copy(grid: Grid) -> Optional[Grid]:
    """Return a solved clone of ``grid`` or ``None``; ``grid`` is never mutated."""

    clone = copy_grid(grid)
    return clone if solve_sudoku(clone) else None


# ---------- Uniqueness analysis (count up to ``limit``) ----------

def count_solutions(grid: Grid, limit: int = 2) -> int:
    ensure_grid(grid)
    if not is_valid_sudoku(grid):
        return 0
    g = copy_grid(grid)
    empties = [divmod(k, SIZE) for k in range(_CELLS) if g[k // SIZE][k % SIZE] is EMPTY]
    solutions = 0

    def backtrack(i: int) -> None:
        nonlocal solutions
        if solutions >= limit:
            return
        if i == len(empties):
            solutions += 1
            return
        r, c = empties[i]
        for d in DIGITS:
            if _conflicts_with_peers(g, r, c, d):
                continue
            g[r][c] = d
            backtrack(i + 1)
            g[r][c] = EMPTY
            if solutions >= limit:
                return

    backtrack(0)
    return solutions


def has_unique_solution(grid: Grid) -> bool:
    return count_solutions(grid, limit=2) == 1


__all__ = ["count_solutions", "has_unique_solution", "solve_sudoku", "solved_copy"]
