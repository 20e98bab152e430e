from __future__ import annotations

import random

import pytest

import project_config
from contracts.errors import GridContractError
from sudoku_engine.checker import is_puzzle_complete, is_valid_sudoku
from sudoku_engine.generator import (
    DEFAULT_REMOVAL,
    Difficulty,
    carve,
    generate_puzzle,
    generate_solution,
    generate_sudoku,
    removal_budget,
)
from sudoku_engine.grid import EMPTY, count_filled
from sudoku_engine.solver import solve_sudoku


def test_default_budgets() -> None:
    assert removal_budget("easy") == 25
    assert removal_budget(Difficulty.MEDIUM) == 40
    assert removal_budget("HARD") == 55
    assert DEFAULT_REMOVAL[Difficulty.EASY] == 25


def test_unknown_difficulty_is_rejected() -> None:
    with pytest.raises(GridContractError):
        Difficulty.parse("expert")
    with pytest.raises(GridContractError):
        generate_sudoku("expert")


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_given_count_matches_budget(difficulty: Difficulty) -> None:
    grid = generate_sudoku(difficulty, seed=7)
    assert count_filled(grid) == 81 - removal_budget(difficulty)
    assert is_valid_sudoku(grid)


@pytest.mark.parametrize("difficulty", list(Difficulty))
def test_generated_puzzle_is_solvable(difficulty: Difficulty) -> None:
    grid = generate_sudoku(difficulty, seed=11)
    assert solve_sudoku(grid) is True
    assert is_puzzle_complete(grid) and is_valid_sudoku(grid)


def test_puzzle_is_carved_from_its_solution() -> None:
    generated = generate_puzzle("medium", seed="carve")
    assert is_puzzle_complete(generated.solution)
    assert is_valid_sudoku(generated.solution)
    for r in range(9):
        for c in range(9):
            value = generated.puzzle[r][c]
            assert value is EMPTY or value == generated.solution[r][c]


def test_solution_keeps_diagonal_seeding() -> None:
    solution = generate_solution(random.Random(3))
    for origin in (0, 3, 6):
        box = {solution[origin + i][origin + j] for i in range(3) for j in range(3)}
        assert box == set(range(1, 10))
    assert is_valid_sudoku(solution) and is_puzzle_complete(solution)


def test_seed_determinism() -> None:
    assert generate_sudoku("hard", seed=99) == generate_sudoku("hard", seed=99)
    first = generate_puzzle("easy", seed=1).solution
    second = generate_puzzle("easy", seed=2).solution
    assert first != second


def test_carve_counts_only_successful_removals() -> None:
    solution = generate_solution(random.Random(5))
    puzzle = carve(solution, 81, random.Random(5))
    assert count_filled(puzzle) == 0
    assert count_filled(solution) == 81
    assert carve(solution, 0, random.Random(5)) == solution
    with pytest.raises(GridContractError):
        carve(puzzle, 1, random.Random(5))


def test_budget_from_config(tmp_path, monkeypatch) -> None:
    config = tmp_path / "config.toml"
    config.write_text("[generator.removal]\neasy = 30\n", encoding="utf-8")
    monkeypatch.setenv("SUDOKU_CONFIG", str(config))
    project_config.reload()
    try:
        assert removal_budget("easy") == 30
        assert removal_budget("medium") == 40
        assert count_filled(generate_sudoku("easy", seed=1)) == 51
    finally:
        monkeypatch.delenv("SUDOKU_CONFIG")
        project_config.reload()


def test_out_of_range_budget_from_config(tmp_path, monkeypatch) -> None:
    config = tmp_path / "config.toml"
    config.write_text("[generator.removal]\nhard = 90\n", encoding="utf-8")
    monkeypatch.setenv("SUDOKU_CONFIG", str(config))
    project_config.reload()
    try:
        with pytest.raises(GridContractError):
            removal_budget("hard")
    finally:
        monkeypatch.delenv("SUDOKU_CONFIG")
        project_config.reload()
