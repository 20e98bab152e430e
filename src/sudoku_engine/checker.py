"""Constraint checks over full or partial grids."""

from __future__ import annotations

from typing import List, Set, Tuple

from .grid import (
    BOX,
    EMPTY,
    SIZE,
    Grid,
    box_origin,
    ensure_cell,
    ensure_digit,
    ensure_grid,
    iter_regions,
    peers,
)


def _conflicts_with_peers(grid: Grid, row: int, col: int, num: int) -> bool:
    for i in range(SIZE):
        if i != col and grid[row][i] == num:
            return True
        if i != row and grid[i][col] == num:
            return True
    r0, c0 = box_origin(row, col)
    for r in range(r0, r0 + BOX):
        for c in range(c0, c0 + BOX):
            if (r, c) != (row, col) and grid[r][c] == num:
                return True
    return False


def is_valid_move(grid: Grid, row: int, col: int, num: int) -> bool:
    """Return ``True`` when ``num`` at ``(row, col)`` repeats in no row, column or box.

    The current value of the target cell is ignored, so the check treats
    ``num`` as a hypothetical placement over whatever the cell holds.
    """
    ensure_grid(grid)
    ensure_cell(row, col)
    ensure_digit(num)
    return not _conflicts_with_peers(grid, row, col, num)


def _has_duplicates(values) -> bool:
    seen: Set[int] = set()
    for value in values:
        if value is EMPTY:
            continue
        if value in seen:
            return True
        seen.add(value)
    return False


def is_valid_sudoku(grid: Grid) -> bool:
    """Return ``True`` when no region holds a repeated digit. Empty cells never conflict."""

    ensure_grid(grid)
    return not any(_has_duplicates(values) for _, _, values in iter_regions(grid))


def is_puzzle_complete(grid: Grid) -> bool:
    ensure_grid(grid)
    return all(value is not EMPTY for row in grid for value in row)


def find_conflicts(grid: Grid) -> List[Tuple[int, int]]:
    """Filled cells whose digit also appears in one of their peers."""

    ensure_grid(grid)
    out = []
    for r in range(SIZE):
        for c in range(SIZE):
            value = grid[r][c]
            if value is EMPTY:
                continue
            if any(grid[pr][pc] == value for pr, pc in peers(r, c)):
                out.append((r, c))
    return out


def region_completion(grid: Grid, row: int, col: int) -> Set[str]:
    """Which of the row, column and box through ``(row, col)`` are fully filled."""

    ensure_grid(grid)
    ensure_cell(row, col)
    done = set()
    if all(grid[row][c] is not EMPTY for c in range(SIZE)):
        done.add("row")
    if all(grid[r][col] is not EMPTY for r in range(SIZE)):
        done.add("column")
    r0, c0 = box_origin(row, col)
    if all(grid[r][c] is not EMPTY for r in range(r0, r0 + BOX) for c in range(c0, c0 + BOX)):
        done.add("box")
    return done


__all__ = [
    "find_conflicts",
    "is_puzzle_complete",
    "is_valid_move",
    "is_valid_sudoku",
    "region_completion",
]
