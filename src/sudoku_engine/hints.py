"""Hint derivation on top of the solver."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Optional

from .grid import Grid, empty_cells
from .solver import solved_copy


@dataclass(frozen=True)
class Hint:
    row: int
    col: int
    number: int

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def get_hint(grid: Grid) -> Optional[Hint]:
    """Correct digit for the first empty cell (row-major), read from a solved clone.

    Returns ``None`` when the grid is already full or has no valid completion.
    """
    solution = solved_copy(grid)
    if solution is None:
        return None
    for row, col in empty_cells(grid):
        return Hint(row=row, col=col, number=solution[row][col])
    return None


__all__ = ["Hint", "get_hint"]
