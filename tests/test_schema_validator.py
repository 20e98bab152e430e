from __future__ import annotations

import dataclasses

import pytest

from contracts import schema_validator
from contracts.errors import SEVERITY_ERROR, SchemaValidationError
from sudoku_engine.grid import empty_grid


def test_catalog_lists_storage_kinds() -> None:
    assert schema_validator.known_kinds() == ["GameRecord", "Grid", "SavedGame"]
    descriptor = schema_validator.get_schema_descriptor("Grid")
    assert descriptor.schema_id == schema_validator.load_schema("Grid")["$id"]


def test_unknown_kind() -> None:
    with pytest.raises(SchemaValidationError) as info:
        schema_validator.validate([], "Nope")
    assert info.value.code == "schema-not-found"


def test_grid_schema(solved_grid) -> None:
    assert schema_validator.validate(empty_grid(), "Grid").ok
    assert schema_validator.validate(solved_grid, "Grid").ok

    bad = empty_grid()
    bad[2][3] = 0
    bad[7][1] = "5"
    report = schema_validator.validate(bad, "Grid")
    assert not report.ok
    assert {issue.path for issue in report.errors} == {"$[2][3]", "$[7][1]"}
    assert all(issue.severity == SEVERITY_ERROR for issue in report.errors)

    assert not schema_validator.validate(empty_grid()[:8], "Grid").ok


def test_game_record_schema() -> None:
    record = {"id": "a", "difficulty": "hard", "timeStarted": 1, "completed": False, "moves": 3, "failed": True}
    schema_validator.assert_valid(record, "GameRecord")
    with pytest.raises(SchemaValidationError):
        schema_validator.assert_valid({**record, "difficulty": "expert"}, "GameRecord")
    with pytest.raises(SchemaValidationError):
        schema_validator.assert_valid({**record, "extra": 1}, "GameRecord")


def test_loaded_schema_is_a_copy() -> None:
    schema = schema_validator.load_schema("SavedGame")
    schema["required"].clear()
    assert schema_validator.load_schema("SavedGame")["required"]


def test_report_carries_only_errors() -> None:
    report = schema_validator.validate({"id": ""}, "GameRecord")
    assert [field.name for field in dataclasses.fields(report)] == ["ok", "kind", "errors"]
    assert report.errors and not report.ok
