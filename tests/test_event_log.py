from __future__ import annotations

import json

from session.game_session import GameSession
from storage import event_log


def test_append_event_writes_jsonl(tmp_path) -> None:
    event_log.configure(tmp_path)
    path = event_log.append_event({"type": "game.started", "game_id": "g"})
    assert path.parent.parent == tmp_path
    assert event_log.current_log_path() == path
    line = json.loads(path.read_text("utf-8").splitlines()[0])
    assert line["type"] == "game.started"
    assert "ts" in line


def test_rotation_by_size(tmp_path) -> None:
    event_log.configure(tmp_path, max_bytes=10)
    first = event_log.append_event({"n": 1})
    second = event_log.append_event({"n": 2})
    assert first != second
    assert first.name == "events_00.jsonl"
    assert second.name == "events_01.jsonl"


def test_session_events_reach_the_log(tmp_path) -> None:
    event_log.configure(tmp_path)
    session = GameSession.new("easy", seed=5, on_event=event_log.record)
    session.use_hint()
    lines = [json.loads(line) for line in event_log.current_log_path().read_text("utf-8").splitlines()]
    assert [line["type"] for line in lines] == ["game.started", "hint.used"]
    assert all(line["game_id"] == session.game_id for line in lines)


def test_configure_keeps_configured_rotation_size(tmp_path, monkeypatch) -> None:
    import project_config

    config = tmp_path / "config.toml"
    config.write_text("[events]\nmax_bytes = 10\n", encoding="utf-8")
    monkeypatch.setenv("SUDOKU_CONFIG", str(config))
    project_config.reload()
    try:
        event_log.configure(tmp_path / "events")
        first = event_log.append_event({"n": 1})
        second = event_log.append_event({"n": 2})
    finally:
        monkeypatch.delenv("SUDOKU_CONFIG")
        project_config.reload()
    assert first.name == "events_00.jsonl"
    assert second.name == "events_01.jsonl"
