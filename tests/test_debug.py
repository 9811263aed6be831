import json
from pathlib import Path

from vault_commander.tui.debug import ENV_ENABLE, ENV_FILE, DebugLogger


def test_disabled_logger_records_nothing(monkeypatch):
    monkeypatch.delenv(ENV_ENABLE, raising=False)
    dbg = DebugLogger()
    dbg.log(event="key", data={"key": "enter"})
    assert dbg.debug_events == []


def test_enabled_logger_records_focused_view(monkeypatch):
    monkeypatch.setenv(ENV_ENABLE, "1")
    monkeypatch.delenv(ENV_FILE, raising=False)
    dbg = DebugLogger(focused=lambda: "main")
    dbg.log(event="key", data={"key": "enter"})
    (event,) = dbg.debug_events
    assert event["event"] == "key"
    assert event["view"] == "main"
    assert event["data"] == {"key": "enter"}


def test_events_stream_to_ndjson_file(monkeypatch, tmp_path: Path):
    out = tmp_path / "debug.ndjson"
    monkeypatch.setenv(ENV_ENABLE, "1")
    monkeypatch.setenv(ENV_FILE, str(out))
    dbg = DebugLogger()
    dbg.log(event="intent", data={"intent": "Home"})
    dbg.log(event="key")
    dbg.close_debug_file()
    lines = out.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["event"] for line in lines] == ["intent", "key"]


def test_memory_is_bounded(monkeypatch):
    monkeypatch.setenv(ENV_ENABLE, "1")
    monkeypatch.delenv(ENV_FILE, raising=False)
    dbg = DebugLogger()
    for i in range(600):
        dbg.log(event="key", data={"i": i})
    assert len(dbg.debug_events) <= 500
    assert dbg.debug_events[-1]["data"] == {"i": 599}


def test_broken_focus_callback_never_raises(monkeypatch):
    monkeypatch.setenv(ENV_ENABLE, "1")

    def boom():
        raise RuntimeError("no app")

    DebugLogger(focused=boom).log(event="key")
