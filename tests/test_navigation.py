import pytest

from vault_commander.core.errors import FatalError, TransportError
from vault_commander.tui.debug import ENV_ENABLE, DebugLogger
from vault_commander.tui.intents import Focus, OpenView, Quit
from vault_commander.tui.models import MAIN_LEGEND, SIDE_LEGEND
from vault_commander.tui.navigation import GLOBAL, NavigationController
from vault_commander.tui.views import (
    ADD_KEY_PROMPT,
    DELETE_KEY_PROMPT,
    EDIT_SECRET,
    LEGEND,
    MAIN,
    PERMANENT_VIEWS,
    SIDE,
)

from tests.store_harness import FakeStore, sample_store, started


def test_start_focuses_side_with_eligible_mounts():
    nav, _ = started()
    state = nav.state
    assert state.focused_name == SIDE
    assert state.legend == SIDE_LEGEND
    assert state.views.require(LEGEND).text() == SIDE_LEGEND
    assert state.views.require(SIDE).lines == ["cubbyhole/", "secret/"]
    assert sorted(state.views.names()) == sorted(PERMANENT_VIEWS)


@pytest.mark.parametrize("mount", ["secret", "secret/"])
def test_start_with_mount_jumps_into_listing(mount):
    nav, _ = started(mount=mount)
    state = nav.state
    assert state.focused_name == MAIN
    assert state.legend == MAIN_LEGEND
    assert state.views.require(SIDE).cursor_y == 1
    assert state.views.require(MAIN).lines == ["secret/app/db", "secret/app/api", "secret/top"]
    assert state.log.messages[-1] == "Viewing secrets on secret/ mount"


def test_start_with_unknown_mount_is_fatal():
    with pytest.raises(FatalError, match="Unable to find mount point nope"):
        started(mount="nope")


def test_start_when_mounts_cannot_be_listed_is_fatal():
    store = sample_store()
    store.fail[("list_mounts", "")] = TransportError("connection refused")
    with pytest.raises(FatalError):
        started(store)


def test_tab_toggles_between_anchor_views():
    nav, _ = started()
    seen = []
    for _ in range(4):
        nav.dispatch("tab")
        seen.append((nav.state.focused_name, nav.state.legend))
    assert seen == [(MAIN, MAIN_LEGEND), (SIDE, SIDE_LEGEND)] * 2


def test_cursor_down_stops_at_last_line_and_up_at_first():
    nav, _ = started()
    side = nav.state.views.require(SIDE)
    nav.dispatch("down")
    nav.dispatch("down")
    assert side.cursor_y == 1
    nav.dispatch("up")
    nav.dispatch("up")
    assert side.cursor_y == 0


def test_page_down_moves_by_view_height_and_clamps():
    store = FakeStore(mounts={"kv/": "kv"}, listings={"kv/": [f"k{i:02d}" for i in range(60)]})
    nav, _ = started(store, mount="kv")
    main = nav.state.views.require(MAIN)
    step = main.inner_height
    nav.dispatch("pagedown")
    assert main.cursor_y == step
    nav.dispatch("space", " ")
    assert main.cursor_y == 2 * step
    nav.dispatch("pagedown")
    assert main.cursor_y == 2 * step
    assert main.origin_y <= main.cursor_y < main.origin_y + step


def test_global_binding_fires_in_any_view():
    nav, _ = started(mount="secret")
    nav.dispatch("a")
    assert nav.state.focused_name == ADD_KEY_PROMPT
    assert nav.dispatch("ctrl+c") is True
    assert nav.state.quit_requested is True


def test_unbound_key_on_read_only_view_is_not_handled():
    nav, _ = started()
    assert nav.dispatch("z", "z") is False
    assert nav.dispatch("e", "e") is False


def test_bindings_are_per_view():
    nav, _ = started()
    assert nav.binding(GLOBAL, "ctrl+c") is not None
    assert nav.bound_keys(SIDE) == ["down", "enter", "pagedown", "tab", "up"]
    assert nav.bound_keys(DELETE_KEY_PROMPT) == ["n", "y"]
    assert nav.bound_keys(EDIT_SECRET) == ["ctrl+l", "ctrl+s", "ctrl+x"]
    assert nav.bound_keys(ADD_KEY_PROMPT) == ["ctrl+x", "enter", "escape"]


def test_apply_accepts_single_intent_or_sequence():
    nav, _ = started(mount="secret")
    nav.apply(Focus(SIDE, legend=SIDE_LEGEND))
    assert nav.state.focused_name == SIDE
    nav.apply([OpenView(DELETE_KEY_PROMPT, text="x", label="x"), Quit()])
    assert nav.state.focused_name == DELETE_KEY_PROMPT
    assert nav.state.quit_requested


def test_open_existing_view_keeps_its_buffer():
    nav, _ = started(mount="secret")
    nav.apply(OpenView(DELETE_KEY_PROMPT, text="first", label="a"))
    nav.apply(Focus(MAIN))
    nav.apply(OpenView(DELETE_KEY_PROMPT, text="second", label="a"))
    assert nav.state.views.require(DELETE_KEY_PROMPT).text() == "first"
    assert nav.state.focused_name == MAIN


def test_resize_moves_permanent_views_and_recenters_prompts():
    nav, _ = started(mount="secret")
    nav.dispatch("d")
    before = nav.state.views.require(DELETE_KEY_PROMPT).rect
    nav.resize(120, 50)
    views = nav.state.views
    assert views.require(MAIN).rect.x2 == 119
    after = views.require(DELETE_KEY_PROMPT).rect
    assert after.x2 - after.x1 == before.x2 - before.x1
    assert after.y1 == 25


def test_log_view_tracks_activity_log():
    nav, _ = started(mount="secret")
    log_view = nav.state.views.require("log")
    assert len(log_view.lines) == len(nav.state.log)
    assert log_view.lines[-1].endswith("Viewing secrets on secret/ mount")


def test_listing_errors_go_to_debug_log(monkeypatch):
    monkeypatch.setenv(ENV_ENABLE, "1")
    store = FakeStore(mounts={"kv/": "kv"}, listings={"kv/": ["ok", "bad/"]})
    store.fail[("list", "kv/bad/")] = TransportError("boom")
    debug = DebugLogger()
    nav = NavigationController(store, debug=debug)
    nav.start(100, 40, "kv/")
    assert nav.state.views.require(MAIN).lines == ["kv/ok"]
    events = [e for e in debug.debug_events if e["event"] == "listing_error"]
    assert events and events[0]["data"]["path"] == "kv/bad/"
