"""Contracts shared by the engine, sessions and storage: errors, schemas, canonical JSON."""

from __future__ import annotations

from .errors import (
    CellLockedError,
    GameOverError,
    GridContractError,
    HintsExhaustedError,
    SchemaValidationError,
    SessionError,
    ValidationIssue,
    ValidationReport,
)

__all__ = [
    "CellLockedError",
    "GameOverError",
    "GridContractError",
    "HintsExhaustedError",
    "SchemaValidationError",
    "SessionError",
    "ValidationIssue",
    "ValidationReport",
]
