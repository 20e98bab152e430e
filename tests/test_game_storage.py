from __future__ import annotations

import json
import logging

import pytest

from contracts.errors import SchemaValidationError
from storage.game_storage import (
    CURRENT_GAME_KEY,
    GAME_RECORDS_KEY,
    GameRecord,
    GameStore,
    SavedGame,
    compute_stats,
    default_store,
    format_duration,
    format_time,
    generate_game_id,
)
from sudoku_engine.generator import Difficulty
from sudoku_engine.grid import EMPTY, from_string

from conftest import SOLVED


def _saved_game(game_id: str = "abc123") -> SavedGame:
    original = from_string(SOLVED)
    original[0][0] = EMPTY
    original[4][4] = EMPTY
    current = [row[:] for row in original]
    current[4][4] = 9
    return SavedGame(
        id=game_id,
        difficulty=Difficulty.EASY,
        current_grid=current,
        original_grid=original,
        time_started=1_700_000_000_000,
        time_elapsed=75,
        moves=4,
        last_played=1_700_000_075_000,
    )


def _record(difficulty: str, completed: bool, duration: int | None, **kwargs) -> GameRecord:
    return GameRecord(
        id=f"{difficulty}-{duration}",
        difficulty=Difficulty(difficulty),
        time_started=1,
        completed=completed,
        moves=10,
        duration=duration,
        **kwargs,
    )


def test_current_game_round_trip(tmp_path) -> None:
    store = GameStore(tmp_path)
    assert store.load_current_game() is None

    store.save_current_game(_saved_game())
    raw = json.loads((tmp_path / f"{CURRENT_GAME_KEY}.json").read_text("utf-8"))
    assert raw["currentGrid"][0][0] is None
    assert raw["currentGrid"][4][4] == 9
    assert raw["difficulty"] == "easy"

    loaded = store.load_current_game()
    assert loaded == _saved_game()

    store.clear_current_game()
    store.clear_current_game()
    assert store.load_current_game() is None


def test_saved_game_without_counters_loads(tmp_path) -> None:
    payload = _saved_game().to_dict()
    del payload["mistakes"]
    del payload["hintsUsed"]
    (tmp_path / f"{CURRENT_GAME_KEY}.json").write_text(json.dumps(payload), encoding="utf-8")
    loaded = GameStore(tmp_path).load_current_game()
    assert (loaded.mistakes, loaded.hints_used) == (0, 0)


def test_invalid_saved_game_is_refused(tmp_path) -> None:
    game = _saved_game()
    game.current_grid[0][0] = 12
    with pytest.raises(SchemaValidationError):
        GameStore(tmp_path).save_current_game(game)


def test_corrupt_document_is_treated_as_absent(tmp_path, caplog) -> None:
    (tmp_path / f"{CURRENT_GAME_KEY}.json").write_text("{not json", encoding="utf-8")
    (tmp_path / f"{GAME_RECORDS_KEY}.json").write_text(
        json.dumps([{"id": "x"}, _record("easy", True, 30).to_dict()]), encoding="utf-8"
    )
    store = GameStore(tmp_path)
    with caplog.at_level(logging.WARNING):
        assert store.load_current_game() is None
        records = store.load_game_records()
    assert [r.id for r in records] == ["easy-30"]
    assert "unreadable storage document" in caplog.text
    assert "skipping invalid game record" in caplog.text


def test_records_append(tmp_path) -> None:
    store = GameStore(tmp_path)
    assert store.load_game_records() == []
    store.save_game_record(_record("easy", True, 120, time_completed=200))
    store.save_game_record(_record("hard", False, 60, failed=True))
    records = store.load_game_records()
    assert [r.difficulty for r in records] == [Difficulty.EASY, Difficulty.HARD]
    assert records[1].failed is True
    assert records[0].time_completed == 200


def test_stats() -> None:
    records = [
        _record("easy", True, 100),
        _record("easy", True, 200),
        _record("medium", True, 300),
        _record("hard", False, 50, failed=True),
    ]
    stats = compute_stats(records)
    assert stats.total_games_played == 4
    assert stats.total_games_completed == 3
    assert stats.completion_rate == pytest.approx(75.0)
    assert stats.best_times == {"easy": 100, "medium": 300}
    assert stats.average_times == {"easy": 150.0, "medium": 300.0}
    assert stats.to_dict()["completionRate"] == pytest.approx(75.0)


def test_stats_without_games(tmp_path) -> None:
    stats = GameStore(tmp_path).get_game_stats()
    assert stats.total_games_played == 0
    assert stats.completion_rate == 0
    assert stats.best_times == {}


def test_default_store_uses_environment(storage_dir) -> None:
    assert default_store().root == storage_dir
    assert default_store({}).root.name == ".sudoku"


def test_game_ids_are_unique() -> None:
    ids = {generate_game_id() for _ in range(50)}
    assert len(ids) == 50
    assert all(i.isalnum() and i == i.lower() for i in ids)


@pytest.mark.parametrize(
    "seconds, clock, duration",
    [
        (0, "00:00", "0s"),
        (45, "00:45", "45s"),
        (60, "01:00", "1m"),
        (125, "02:05", "2m 5s"),
        (3600, "60:00", "1h"),
        (3780, "63:00", "1h 3m"),
    ],
)
def test_time_formatting(seconds: int, clock: str, duration: str) -> None:
    assert format_time(seconds) == clock
    assert format_duration(seconds) == duration
