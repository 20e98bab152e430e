"""Local persistence: saved games, game history and the event log."""

from __future__ import annotations

from .game_storage import (
    GameRecord,
    GameStats,
    GameStore,
    SavedGame,
    default_store,
    format_duration,
    format_time,
    generate_game_id,
)

__all__ = [
    "GameRecord",
    "GameStats",
    "GameStore",
    "SavedGame",
    "default_store",
    "format_duration",
    "format_time",
    "generate_game_id",
]
