"""Per-game state: the working grid, mistakes, hints, notes and undo history.

A :class:`GameSession` is created explicitly by its owner (a UI layer, the
CLI, a test) and holds nothing global. The engine functions stay stateless;
the session only wires them to the bookkeeping a playable game needs.
"""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Tuple

from contracts.errors import CellLockedError, GameOverError, HintsExhaustedError
from contracts.jsoncanon import grid_digest
from project_config import get_section
from storage.game_storage import GameRecord, SavedGame, generate_game_id
from sudoku_engine.checker import (
    is_puzzle_complete,
    is_valid_move,
    is_valid_sudoku,
    region_completion,
)
from sudoku_engine.generator import Difficulty, generate_puzzle
from sudoku_engine.grid import (
    EMPTY,
    SIZE,
    Cell,
    Grid,
    copy_grid,
    count_filled,
    ensure_cell,
    ensure_digit,
    ensure_grid,
)
from sudoku_engine.hints import Hint, get_hint

_LOGGER = logging.getLogger(__name__)

EventSink = Callable[[str, Dict[str, Any]], Any]


class GameStatus(str, enum.Enum):
    PLAYING = "playing"
    WON = "won"
    FAILED = "failed"


@dataclass(frozen=True)
class MoveResult:
    accepted: bool
    row: int
    col: int
    number: Optional[int]
    mistakes: int
    status: GameStatus
    completed_regions: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class _Move:
    row: int
    col: int
    old: Cell
    new: Cell


def _limit(name: str, value: Optional[int], default: int) -> int:
    if value is None:
        value = int(get_section(f"session.{name}", default))
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


class GameSession:
    def __init__(
        self,
        *,
        game_id: str,
        difficulty: Difficulty | str,
        original_grid: Grid,
        current_grid: Optional[Grid] = None,
        time_started: Optional[float] = None,
        time_elapsed: int = 0,
        moves: int = 0,
        mistakes: int = 0,
        hints_used: int = 0,
        max_mistakes: Optional[int] = None,
        hints_per_game: Optional[int] = None,
        clock: Callable[[], float] = time.time,
        on_event: Optional[EventSink] = None,
    ) -> None:
        ensure_grid(original_grid)
        working = copy_grid(original_grid if current_grid is None else current_grid)
        ensure_grid(working)
        for r in range(SIZE):
            for c in range(SIZE):
                given = original_grid[r][c]
                if given is not EMPTY and working[r][c] != given:
                    raise ValueError(f"current grid changes given cell ({r}, {c})")

        self.game_id = game_id
        self.difficulty = Difficulty.parse(difficulty)
        self._original = copy_grid(original_grid)
        self._grid = working
        self._clock = clock
        self._on_event = on_event
        self.time_started = clock() if time_started is None else time_started
        self.time_elapsed = time_elapsed
        self.moves = moves
        self.max_mistakes = _limit("max_mistakes", max_mistakes, 3)
        self.hints_per_game = _limit("hints_per_game", hints_per_game, 3)
        self.mistakes = mistakes
        self.hints_used = hints_used
        self.status = GameStatus.PLAYING
        if self.max_mistakes and self.mistakes >= self.max_mistakes:
            self.status = GameStatus.FAILED
        self._history: List[_Move] = []
        self._notes: Dict[Tuple[int, int], List[int]] = {}
        self._check_win()

    # ---------- construction ----------

    @classmethod
    def new(
        cls,
        difficulty: Difficulty | str,
        *,
        seed: Optional[int | str] = None,
        game_id: Optional[str] = None,
        **kwargs: Any,
    ) -> "GameSession":
        generated = generate_puzzle(difficulty, seed=seed)
        session = cls(
            game_id=game_id or generate_game_id(),
            difficulty=generated.difficulty,
            original_grid=generated.puzzle,
            **kwargs,
        )
        session._emit(
            "game.started",
            difficulty=session.difficulty.value,
            givens=count_filled(generated.puzzle),
            puzzle_digest=grid_digest(generated.puzzle),
        )
        return session

    @classmethod
    def from_saved(cls, saved: SavedGame, **kwargs: Any) -> "GameSession":
        return cls(
            game_id=saved.id,
            difficulty=saved.difficulty,
            original_grid=saved.original_grid,
            current_grid=saved.current_grid,
            time_started=saved.time_started,
            time_elapsed=saved.time_elapsed,
            moves=saved.moves,
            mistakes=saved.mistakes,
            hints_used=saved.hints_used,
            **kwargs,
        )

    # ---------- views ----------

    @property
    def grid(self) -> Grid:
        return copy_grid(self._grid)

    @property
    def original_grid(self) -> Grid:
        return copy_grid(self._original)

    @property
    def hints_remaining(self) -> int:
        return max(0, self.hints_per_game - self.hints_used)

    def is_given(self, row: int, col: int) -> bool:
        ensure_cell(row, col)
        return self._original[row][col] is not EMPTY

    def notes(self, row: int, col: int) -> Tuple[int, ...]:
        return tuple(self._notes.get((row, col), ()))

    def progress(self) -> float:
        """Percentage of the 81 cells currently filled."""

        return count_filled(self._grid) / (SIZE * SIZE) * 100

    # ---------- play ----------

    def _emit(self, name: str, **payload: Any) -> None:
        if self._on_event is not None:
            self._on_event(name, {"game_id": self.game_id, **payload})

    def _require_playing(self) -> None:
        if self.status is not GameStatus.PLAYING:
            raise GameOverError(f"game {self.game_id} already ended ({self.status.value})")

    def _require_editable(self, row: int, col: int) -> None:
        self._require_playing()
        if self.is_given(row, col):
            raise CellLockedError(row, col)

    def _check_win(self) -> bool:
        if is_puzzle_complete(self._grid) and is_valid_sudoku(self._grid):
            self.status = GameStatus.WON
            return True
        return False

    def _set(self, row: int, col: int, value: Cell) -> None:
        self._history.append(_Move(row, col, self._grid[row][col], value))
        self._grid[row][col] = value
        self._notes.pop((row, col), None)

    def _finish_placement(self, row: int, col: int) -> FrozenSet[str]:
        regions = frozenset(region_completion(self._grid, row, col))
        if self._check_win():
            self._emit("game.won", moves=self.moves, duration=self.time_elapsed)
        return regions

    def place_number(self, row: int, col: int, num: int) -> MoveResult:
        """Place ``num`` if it breaks no constraint; otherwise count a mistake.

        A rejected placement leaves the grid untouched but still counts as a
        move. Reaching ``max_mistakes`` ends the game as failed. Placing the
        digit a cell already holds is accepted and changes nothing.
        """
        ensure_digit(num)
        self._require_editable(row, col)

        if not is_valid_move(self._grid, row, col, num):
            self.moves += 1
            self.mistakes += 1
            self._emit("move.rejected", row=row, col=col, number=num, mistakes=self.mistakes)
            if self.max_mistakes and self.mistakes >= self.max_mistakes:
                self.status = GameStatus.FAILED
                _LOGGER.info("game %s failed after %d mistakes", self.game_id, self.mistakes)
                self._emit("game.failed", moves=self.moves, duration=self.time_elapsed)
            return MoveResult(False, row, col, num, self.mistakes, self.status)

        if self._grid[row][col] == num:
            return MoveResult(True, row, col, num, self.mistakes, self.status)
        self._set(row, col, num)
        self.moves += 1
        self._emit("move.placed", row=row, col=col, number=num)
        regions = self._finish_placement(row, col)
        return MoveResult(True, row, col, num, self.mistakes, self.status, regions)

    def clear_cell(self, row: int, col: int) -> bool:
        self._require_editable(row, col)
        self._notes.pop((row, col), None)
        if self._grid[row][col] is EMPTY:
            return False
        self._set(row, col, EMPTY)
        self.moves += 1
        self._emit("move.cleared", row=row, col=col)
        return True

    def toggle_note(self, row: int, col: int, num: int) -> Tuple[int, ...]:
        ensure_digit(num)
        self._require_editable(row, col)
        current = self._notes.get((row, col), [])
        if num in current:
            updated = [n for n in current if n != num]
        else:
            updated = sorted(current + [num])
        if updated:
            self._notes[(row, col)] = updated
        else:
            self._notes.pop((row, col), None)
        return tuple(updated)

    def undo(self) -> bool:
        self._require_playing()
        if not self._history:
            return False
        move = self._history.pop()
        self._grid[move.row][move.col] = move.old
        self.moves = max(0, self.moves - 1)
        self._emit("move.undone", row=move.row, col=move.col)
        return True

    def use_hint(self) -> Optional[Hint]:
        """Fill the first empty cell with its solved value.

        Returns ``None`` (and keeps the hint) when the current grid has no valid
        completion.
        """
        self._require_playing()
        if self.hints_remaining <= 0:
            raise HintsExhaustedError(f"no hints left for game {self.game_id}")
        hint = get_hint(self._grid)
        if hint is None:
            return None
        self._set(hint.row, hint.col, hint.number)
        self.hints_used += 1
        self.moves += 1
        self._emit("hint.used", **hint.to_dict(), hints_remaining=self.hints_remaining)
        self._finish_placement(hint.row, hint.col)
        return hint

    def tick(self, seconds: int = 1) -> None:
        if self.status is GameStatus.PLAYING:
            self.time_elapsed += int(seconds)

    # ---------- persistence ----------

    def to_saved_game(self) -> SavedGame:
        return SavedGame(
            id=self.game_id,
            difficulty=self.difficulty,
            current_grid=self.grid,
            original_grid=self.original_grid,
            time_started=self.time_started,
            time_elapsed=self.time_elapsed,
            moves=self.moves,
            mistakes=self.mistakes,
            hints_used=self.hints_used,
            last_played=self._clock(),
            puzzle_digest=grid_digest(self._original),
        )

    def to_record(self) -> GameRecord:
        finished = self.status is not GameStatus.PLAYING
        return GameRecord(
            id=self.game_id,
            difficulty=self.difficulty,
            time_started=self.time_started,
            completed=self.status is GameStatus.WON,
            moves=self.moves,
            time_completed=self._clock() if finished else None,
            duration=self.time_elapsed,
            failed=True if self.status is GameStatus.FAILED else None,
        )


__all__ = ["EventSink", "GameSession", "GameStatus", "MoveResult"]
