"""9x9 grid model: coordinates, regions and the text codec.

A grid is a plain ``list`` of nine rows of nine cells. A cell holds an ``int``
digit in ``1..9`` or ``None`` when empty, which keeps the structure identical
to the ``(number|null)[][]`` JSON shape persisted by the storage layer.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from contracts.errors import GridContractError

Cell = Optional[int]
Grid = List[List[Cell]]

SIZE = 9
BOX = 3
EMPTY: Cell = None
DIGITS = tuple(range(1, SIZE + 1))


# ---------- Preconditions ----------

def _is_digit(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= SIZE


def ensure_cell(row: int, col: int) -> None:
    for name, value in (("row", row), ("col", col)):
        if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value < SIZE:
            raise GridContractError(f"{name} must be an integer in [0, {SIZE}), got {value!r}")


def ensure_digit(num: int) -> None:
    if not _is_digit(num):
        raise GridContractError(f"digit must be an integer in 1..{SIZE}, got {num!r}")


def ensure_grid(grid: Grid) -> None:
    """Raise :class:`GridContractError` unless ``grid`` is a 9x9 grid of digits/None."""

    if not isinstance(grid, list) or len(grid) != SIZE:
        raise GridContractError(f"grid must be a list of {SIZE} rows")
    for r, row in enumerate(grid):
        if not isinstance(row, list) or len(row) != SIZE:
            raise GridContractError(f"row {r} must be a list of {SIZE} cells")
        for c, value in enumerate(row):
            if value is not EMPTY and not _is_digit(value):
                raise GridContractError(f"cell ({r}, {c}) holds invalid value {value!r}")


# ---------- Construction ----------

def empty_grid() -> Grid:
    return [[EMPTY] * SIZE for _ in range(SIZE)]


def copy_grid(grid: Grid) -> Grid:
    return [row[:] for row in grid]


# ---------- Regions ----------

def box_index(row: int, col: int) -> int:
    return (row // BOX) * BOX + col // BOX


def box_origin(row: int, col: int) -> Tuple[int, int]:
    return row - row % BOX, col - col % BOX


def row_values(grid: Grid, row: int) -> List[Cell]:
    return list(grid[row])


def column_values(grid: Grid, col: int) -> List[Cell]:
    return [grid[r][col] for r in range(SIZE)]


def box_cells(index: int) -> List[Tuple[int, int]]:
    """Coordinates of box ``index`` (0..8, row-major over the 3x3 boxes)."""

    r0, c0 = (index // BOX) * BOX, (index % BOX) * BOX
    return [(r0 + i, c0 + j) for i in range(BOX) for j in range(BOX)]


def box_values(grid: Grid, index: int) -> List[Cell]:
    return [grid[r][c] for r, c in box_cells(index)]


def iter_regions(grid: Grid) -> Iterator[Tuple[str, int, List[Cell]]]:
    """Yield ``(kind, index, values)`` for all 27 rows, columns and boxes."""

    for i in range(SIZE):
        yield "row", i, row_values(grid, i)
    for i in range(SIZE):
        yield "column", i, column_values(grid, i)
    for i in range(SIZE):
        yield "box", i, box_values(grid, i)


def peers(row: int, col: int) -> List[Tuple[int, int]]:
    """The 20 distinct cells sharing a row, column or box with ``(row, col)``."""

    seen = set()
    for i in range(SIZE):
        seen.add((row, i))
        seen.add((i, col))
    seen.update(box_cells(box_index(row, col)))
    seen.discard((row, col))
    return sorted(seen)


def empty_cells(grid: Grid) -> List[Tuple[int, int]]:
    return [(r, c) for r in range(SIZE) for c in range(SIZE) if grid[r][c] is EMPTY]


def count_filled(grid: Grid) -> int:
    return sum(1 for row in grid for value in row if value is not EMPTY)


# ---------- Text codec ----------

def to_string(grid: Grid) -> str:
    return "".join(str(grid[r][c] or 0) for r in range(SIZE) for c in range(SIZE))


def from_string(text: str) -> Grid:
    """Parse 81 cells; ``0`` and ``.`` are empty, whitespace is ignored."""

    chars = [ch for ch in text if not ch.isspace()]
    if len(chars) != SIZE * SIZE:
        raise GridContractError(f"expected {SIZE * SIZE} cells, got {len(chars)}")
    grid = empty_grid()
    for k, ch in enumerate(chars):
        if ch in "0.":
            continue
        if ch not in "123456789":
            raise GridContractError(f"invalid cell character {ch!r} at position {k}")
        grid[k // SIZE][k % SIZE] = int(ch)
    return grid


def format_grid(grid: Grid) -> str:
    lines = []
    for r in range(SIZE):
        if r % BOX == 0:
            lines.append("+-------+-------+-------+")
        row = []
        for c in range(SIZE):
            v = grid[r][c]
            row.append(str(v) if v is not EMPTY else ".")
            if c % BOX == BOX - 1:
                row.append("|")
        lines.append("| " + " ".join(row[:-1]) + " |")
    lines.append("+-------+-------+-------+")
    return "\n".join(lines)


__all__ = [
    "BOX",
    "Cell",
    "DIGITS",
    "EMPTY",
    "Grid",
    "SIZE",
    "box_cells",
    "box_index",
    "box_origin",
    "box_values",
    "column_values",
    "copy_grid",
    "count_filled",
    "empty_cells",
    "empty_grid",
    "ensure_cell",
    "ensure_digit",
    "ensure_grid",
    "format_grid",
    "from_string",
    "iter_regions",
    "peers",
    "row_values",
    "to_string",
]
