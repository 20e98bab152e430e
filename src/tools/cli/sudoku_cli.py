"""Command line front end for the Sudoku engine and the local game store."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List

from contracts.errors import GridContractError, SchemaValidationError
from session.game_session import GameSession
from storage import event_log
from storage.game_storage import GameStore, default_store
from sudoku_engine.checker import find_conflicts, is_puzzle_complete, is_valid_sudoku
from sudoku_engine.generator import Difficulty
from sudoku_engine.grid import format_grid, from_string, to_string
from sudoku_engine.hints import get_hint
from sudoku_engine.solver import solved_copy


def _store(args: argparse.Namespace) -> GameStore:
    if args.storage_dir:
        return GameStore(args.storage_dir)
    return default_store()


def _emit(payload: object) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def cmd_new(args: argparse.Namespace) -> int:
    sink = None
    if args.events_dir:
        event_log.configure(args.events_dir)
        sink = event_log.record
    session = GameSession.new(args.difficulty, seed=args.seed, on_event=sink)
    if args.save:
        _store(args).save_current_game(session.to_saved_game())
    if args.pretty:
        print(format_grid(session.grid), file=sys.stderr)
    _emit(
        {
            "id": session.game_id,
            "difficulty": session.difficulty.value,
            "puzzle": to_string(session.grid),
            "grid": session.grid,
            "saved": bool(args.save),
        }
    )
    return 0


def cmd_solve(args: argparse.Namespace) -> int:
    solution = solved_copy(from_string(args.grid))
    _emit({"solved": solution is not None, "grid": to_string(solution) if solution else None})
    return 0 if solution is not None else 1


def cmd_hint(args: argparse.Namespace) -> int:
    hint = get_hint(from_string(args.grid))
    _emit({"hint": hint.to_dict() if hint else None})
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    grid = from_string(args.grid)
    _emit(
        {
            "valid": is_valid_sudoku(grid),
            "complete": is_puzzle_complete(grid),
            "conflicts": [list(cell) for cell in find_conflicts(grid)],
        }
    )
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    _emit(_store(args).get_game_stats().to_dict())
    return 0


def cmd_history(args: argparse.Namespace) -> int:
    records = _store(args).load_game_records()
    if args.limit:
        records = records[-args.limit:]
    _emit([record.to_dict() for record in records])
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sudoku", description="Offline Sudoku engine helpers")
    parser.add_argument("--storage-dir", default=None, help="Directory holding saved games and history")
    parser.add_argument("--log-level", default="WARNING")
    sub = parser.add_subparsers(dest="command", required=True)

    new = sub.add_parser("new", help="Generate a new puzzle")
    new.add_argument("--difficulty", choices=[d.value for d in Difficulty], default="easy")
    new.add_argument("--seed", type=int, default=None)
    new.add_argument("--save", action="store_true", help="Store it as the current game")
    new.add_argument("--pretty", action="store_true", help="Also draw the grid on stderr")
    new.add_argument("--events-dir", default=None, help="Append game events as JSONL under this directory")
    new.set_defaults(func=cmd_new)

    for name, func, text in (
        ("solve", cmd_solve, "Solve an 81-character grid"),
        ("hint", cmd_hint, "Hint for the first empty cell of a grid"),
        ("check", cmd_check, "Report constraint violations of a grid"),
    ):
        cmd = sub.add_parser(name, help=text)
        cmd.add_argument("grid", help="81 characters, 0 or . for empty cells")
        cmd.set_defaults(func=func)

    stats = sub.add_parser("stats", help="Aggregate statistics over the game history")
    stats.set_defaults(func=cmd_stats)

    history = sub.add_parser("history", help="List finished games")
    history.add_argument("--limit", type=int, default=0)
    history.set_defaults(func=cmd_history)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.WARNING))
    try:
        return args.func(args)
    except (GridContractError, SchemaValidationError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
