"""Game session bookkeeping on top of the stateless engine."""

from __future__ import annotations

from .game_session import EventSink, GameSession, GameStatus, MoveResult

__all__ = ["EventSink", "GameSession", "GameStatus", "MoveResult"]
