"""Offline 9x9 Sudoku engine: grid model, constraint checks, solver, generator."""

from __future__ import annotations

from .checker import (
    find_conflicts,
    is_puzzle_complete,
    is_valid_move,
    is_valid_sudoku,
    region_completion,
)
from .generator import (
    Difficulty,
    GeneratedPuzzle,
    generate_puzzle,
    generate_sudoku,
    removal_budget,
)
from .grid import EMPTY, Grid, copy_grid, empty_grid, format_grid, from_string, to_string
from .hints import Hint, get_hint
from .solver import count_solutions, has_unique_solution, solve_sudoku, solved_copy

__all__ = [
    "Difficulty",
    "EMPTY",
    "GeneratedPuzzle",
    "Grid",
    "Hint",
    "copy_grid",
    "count_solutions",
    "empty_grid",
    "find_conflicts",
    "format_grid",
    "from_string",
    "generate_puzzle",
    "generate_sudoku",
    "get_hint",
    "has_unique_solution",
    "is_puzzle_complete",
    "is_valid_move",
    "is_valid_sudoku",
    "region_completion",
    "removal_budget",
    "solve_sudoku",
    "solved_copy",
    "to_string",
]
