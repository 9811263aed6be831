from vault_commander.tui.editing import TAB_TEXT, edit_view, single_line_filter
from vault_commander.tui.views import ADD_KEY_PROMPT, EDIT_SECRET, Rect, ViewRegistry


def _view(name=EDIT_SECRET, text=""):
    view = ViewRegistry().create_or_focus(name, Rect(0, 0, 40, 10))
    view.set_text(text)
    return view


def test_typing_inserts_at_caret():
    view = _view(text="ac")
    view.set_cursor(1, 0)
    assert edit_view(view, "b", "b")
    assert view.text() == "abc"
    assert view.cursor_x == 2


def test_enter_splits_and_backspace_joins():
    view = _view(text="abcd")
    view.set_cursor(2, 0)
    edit_view(view, "enter")
    assert view.lines == ["ab", "cd"]
    assert (view.cursor_x, view.cursor_y) == (0, 1)
    edit_view(view, "backspace")
    assert view.lines == ["abcd"]
    assert view.cursor_x == 2


def test_delete_at_end_of_line_joins_next():
    view = _view(text="ab\ncd")
    view.set_cursor(2, 0)
    edit_view(view, "delete")
    assert view.lines == ["abcd"]


def test_backspace_at_origin_does_nothing():
    view = _view(text="x")
    assert edit_view(view, "backspace") is False
    assert view.text() == "x"


def test_tab_inserts_spaces_and_space_key_inserts_space():
    view = _view()
    edit_view(view, "tab")
    edit_view(view, "space", " ")
    assert view.text() == TAB_TEXT + " "


def test_unknown_control_keys_are_ignored():
    view = _view(text="x")
    assert edit_view(view, "f5") is False
    assert edit_view(view, "ctrl+q", None) is False


def test_vertical_moves_clamp_column():
    view = _view(text="long line\nab")
    view.set_cursor(8, 0)
    edit_view(view, "down")
    assert (view.cursor_x, view.cursor_y) == (2, 1)
    edit_view(view, "down")
    assert view.cursor_y == 1


def test_single_line_filter_blocks_vertical_moves():
    view = _view(ADD_KEY_PROMPT, text="kv/app/")
    view.set_cursor(7, 0)
    assert single_line_filter(view, "down") is True
    assert single_line_filter(view, "up") is True
    assert view.cursor_y == 0


def test_single_line_filter_blocks_right_past_text():
    view = _view(ADD_KEY_PROMPT, text="kv/")
    view.set_cursor(3, 0)
    assert single_line_filter(view, "right") is True
    view.set_cursor(1, 0)
    assert single_line_filter(view, "right") is False


def test_single_line_filter_home_end():
    view = _view(ADD_KEY_PROMPT, text="kv/name")
    view.set_cursor(3, 0)
    single_line_filter(view, "home")
    assert view.cursor_x == 0
    single_line_filter(view, "end")
    assert view.cursor_x == 7


def test_single_line_filter_passes_typing_through():
    view = _view(ADD_KEY_PROMPT, text="kv/")
    assert single_line_filter(view, "x", "x") is False
