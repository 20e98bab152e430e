"""Local persistence of the current game and of finished-game history.

Documents are stored as canonical JSON files inside a storage directory, one
file per key. Grids keep their ``(number|null)[][]`` shape so a saved game can
be loaded back without any conversion.
"""

from __future__ import annotations

import json
import logging
import os
import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from contracts import schema_validator
from contracts.jsoncanon import canonical_dump
from project_config import get_section
from sudoku_engine.generator import Difficulty
from sudoku_engine.grid import Grid, copy_grid

_LOGGER = logging.getLogger(__name__)

STORAGE_ENV = "SUDOKU_STORAGE_DIR"
CURRENT_GAME_KEY = "sudoku_current_game"
GAME_RECORDS_KEY = "sudoku_game_records"


@dataclass
class SavedGame:
    """An in-progress game: working grid, the grid as dealt, and counters."""

    id: str
    difficulty: Difficulty
    current_grid: Grid
    original_grid: Grid
    time_started: float
    time_elapsed: int = 0
    moves: int = 0
    last_played: float = 0.0
    puzzle_digest: Optional[str] = None
    mistakes: int = 0
    hints_used: int = 0

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "difficulty": Difficulty.parse(self.difficulty).value,
            "currentGrid": copy_grid(self.current_grid),
            "originalGrid": copy_grid(self.original_grid),
            "timeStarted": self.time_started,
            "timeElapsed": self.time_elapsed,
            "moves": self.moves,
            "lastPlayed": self.last_played,
            "mistakes": self.mistakes,
            "hintsUsed": self.hints_used,
        }
        if self.puzzle_digest is not None:
            payload["puzzleDigest"] = self.puzzle_digest
        return payload

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "SavedGame":
        schema_validator.assert_valid(payload, "SavedGame")
        return cls(
            id=payload["id"],
            difficulty=Difficulty.parse(payload["difficulty"]),
            current_grid=copy_grid(payload["currentGrid"]),
            original_grid=copy_grid(payload["originalGrid"]),
            time_started=payload["timeStarted"],
            time_elapsed=payload["timeElapsed"],
            moves=payload["moves"],
            last_played=payload["lastPlayed"],
            puzzle_digest=payload.get("puzzleDigest"),
            mistakes=payload.get("mistakes", 0),
            hints_used=payload.get("hintsUsed", 0),
        )


@dataclass
class GameRecord:
    """History entry for a finished (won or failed) game."""

    id: str
    difficulty: Difficulty
    time_started: float
    completed: bool
    moves: int
    time_completed: Optional[float] = None
    duration: Optional[int] = None
    failed: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "difficulty": Difficulty.parse(self.difficulty).value,
            "timeStarted": self.time_started,
            "completed": self.completed,
            "moves": self.moves,
        }
        if self.time_completed is not None:
            payload["timeCompleted"] = self.time_completed
        if self.duration is not None:
            payload["duration"] = self.duration
        if self.failed is not None:
            payload["failed"] = self.failed
        return payload

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "GameRecord":
        schema_validator.assert_valid(payload, "GameRecord")
        return cls(
            id=payload["id"],
            difficulty=Difficulty.parse(payload["difficulty"]),
            time_started=payload["timeStarted"],
            completed=payload["completed"],
            moves=payload["moves"],
            time_completed=payload.get("timeCompleted"),
            duration=payload.get("duration"),
            failed=payload.get("failed"),
        )


@dataclass(frozen=True)
class GameStats:
    total_games_played: int
    total_games_completed: int
    completion_rate: float
    best_times: Dict[str, int] = field(default_factory=dict)
    average_times: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalGamesPlayed": self.total_games_played,
            "totalGamesCompleted": self.total_games_completed,
            "completionRate": self.completion_rate,
            "bestTimes": dict(self.best_times),
            "averageTimes": dict(self.average_times),
        }


def compute_stats(records: List[GameRecord]) -> GameStats:
    completed = [r for r in records if r.completed]
    played = len(records)
    rate = (len(completed) / played) * 100 if played else 0.0

    best: Dict[str, int] = {}
    average: Dict[str, float] = {}
    for level in Difficulty:
        times = [r.duration for r in completed if r.difficulty == level and r.duration is not None]
        if times:
            best[level.value] = min(times)
            average[level.value] = sum(times) / len(times)
    return GameStats(
        total_games_played=played,
        total_games_completed=len(completed),
        completion_rate=rate,
        best_times=best,
        average_times=average,
    )


class GameStore:
    """Key-value JSON store rooted at a directory; one instance per owner."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    # ---------- raw key access ----------

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def _write(self, key: str, obj: Any) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        target = self._path(key)
        tmp = target.parent / f"{target.name}.tmp"
        tmp.write_bytes(canonical_dump(obj))
        os.replace(tmp, target)
        return target

    def _read(self, key: str) -> Any:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text("utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            _LOGGER.warning("unreadable storage document %s: %s", path, exc)
            return None

    def _remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    # ---------- current game ----------

    def save_current_game(self, game: SavedGame) -> None:
        payload = game.to_dict()
        schema_validator.assert_valid(payload, "SavedGame")
        self._write(CURRENT_GAME_KEY, payload)

    def load_current_game(self) -> Optional[SavedGame]:
        payload = self._read(CURRENT_GAME_KEY)
        if payload is None:
            return None
        report = schema_validator.validate(payload, "SavedGame")
        if not report.ok:
            _LOGGER.warning("discarding invalid saved game: %s", report.errors[0].msg)
            return None
        return SavedGame.from_dict(payload)

    def clear_current_game(self) -> None:
        self._remove(CURRENT_GAME_KEY)

    # ---------- history ----------

    def save_game_record(self, record: GameRecord) -> None:
        payload = record.to_dict()
        schema_validator.assert_valid(payload, "GameRecord")
        raw = self._read(GAME_RECORDS_KEY)
        records = raw if isinstance(raw, list) else []
        records.append(payload)
        self._write(GAME_RECORDS_KEY, records)

    def load_game_records(self) -> List[GameRecord]:
        raw = self._read(GAME_RECORDS_KEY)
        if raw is None:
            return []
        if not isinstance(raw, list):
            _LOGGER.warning("game records document is not a list; ignoring it")
            return []
        out = []
        for index, item in enumerate(raw):
            report = schema_validator.validate(item, "GameRecord")
            if not report.ok:
                _LOGGER.warning("skipping invalid game record #%d: %s", index, report.errors[0].msg)
                continue
            out.append(GameRecord.from_dict(item))
        return out

    def get_game_stats(self) -> GameStats:
        return compute_stats(self.load_game_records())


def default_store(env: Optional[Dict[str, str]] = None) -> GameStore:
    """Store rooted at ``$SUDOKU_STORAGE_DIR`` or ``[storage].root`` from config."""

    env_map = os.environ if env is None else env
    root = env_map.get(STORAGE_ENV) or get_section("storage.root", ".sudoku")
    return GameStore(root)


# ---------- helpers ----------

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_game_id() -> str:
    """Millisecond timestamp in base36 followed by random hex."""

    return _base36(int(time.time() * 1000)) + uuid.uuid4().hex[:10]


def format_time(seconds: int) -> str:
    mins, secs = divmod(int(seconds), 60)
    return f"{mins:02d}:{secs:02d}"


def format_duration(seconds: int) -> str:
    seconds = int(seconds)
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        mins, secs = divmod(seconds, 60)
        return f"{mins}m {secs}s" if secs > 0 else f"{mins}m"
    hours, rest = divmod(seconds, 3600)
    mins = rest // 60
    return f"{hours}h {mins}m" if mins > 0 else f"{hours}h"


__all__ = [
    "CURRENT_GAME_KEY",
    "GAME_RECORDS_KEY",
    "GameRecord",
    "GameStats",
    "GameStore",
    "SavedGame",
    "compute_stats",
    "default_store",
    "format_duration",
    "format_time",
    "generate_game_id",
]
