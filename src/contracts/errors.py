"""Shared error types for the Sudoku engine, sessions and storage."""

from __future__ import annotations


from dataclasses import dataclass
from typing import List

SEVERITY_ERROR = "ERROR"


class GridContractError(ValueError):
    """Raised when a grid, cell coordinate or digit violates the 9x9 contract."""


class SessionError(RuntimeError):
    """Base class for rule violations inside a :class:`GameSession`."""


class CellLockedError(SessionError):
    """The targeted cell is a given and cannot be edited."""

    def __init__(self, row: int, col: int) -> None:
        self.row = row
        self.col = col
        super().__init__(f"cell ({row}, {col}) is a given")


class GameOverError(SessionError):
    """The session already ended (won or failed)."""


class HintsExhaustedError(SessionError):
    """No hints remain for this session."""


class SchemaValidationError(RuntimeError):
    """Exception raised when a storage payload fails schema validation."""

    def __init__(self, code: str, detail: str | None = None) -> None:
        self.code = code
        self.detail = detail
        message = code if detail is None else f"{code}:{detail}"
        super().__init__(message)


@dataclass(frozen=True)
class ValidationIssue:
    """Single validation finding produced by a schema check."""

    code: str
    msg: str
    path: str
    severity: str


@dataclass(frozen=True)
class ValidationReport:
    """Aggregate result of validating one payload."""

    ok: bool
    kind: str
    errors: List[ValidationIssue]


def make_error(code: str, msg: str, path: str) -> ValidationIssue:
    """Construct an error-level :class:`ValidationIssue`."""

    return ValidationIssue(code=code, msg=msg, path=path, severity=SEVERITY_ERROR)


__all__ = [
    "SEVERITY_ERROR",
    "CellLockedError",
    "GameOverError",
    "GridContractError",
    "HintsExhaustedError",
    "SchemaValidationError",
    "SessionError",
    "ValidationIssue",
    "ValidationReport",
    "make_error",
]
