"""
Text editing for editable views.

``edit_view`` is the default editor: it applies one key to a view's buffer
and caret. A view may carry an input filter that sees each key first and can
consume it; ``single_line_filter`` keeps a one-line prompt on its only line.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from vault_commander.tui.views import View


TAB_TEXT = "    "


def _ensure_line(view: "View") -> None:
    if not view.lines:
        view.lines.append("")
    view.cursor_y = min(view.cursor_y, len(view.lines) - 1)
    view.cursor_x = min(view.cursor_x, len(view.lines[view.cursor_y]))


def _insert(view: "View", text: str) -> None:
    line = view.lines[view.cursor_y]
    x = view.cursor_x
    view.lines[view.cursor_y] = line[:x] + text + line[x:]
    view.set_cursor(x + len(text), view.cursor_y)


def _printable(character: Optional[str]) -> bool:
    return bool(character) and len(character) == 1 and character.isprintable()


def edit_view(view: "View", key: str, character: Optional[str] = None) -> bool:
    """
    Apply ``key`` to an editable view.

    Returns True when the key changed the buffer or caret.
    """
    _ensure_line(view)
    y, x = view.cursor_y, view.cursor_x
    line = view.lines[y]

    if key == "enter":
        view.lines[y] = line[:x]
        view.lines.insert(y + 1, line[x:])
        view.set_cursor(0, y + 1)
        return True
    if key == "backspace":
        if x > 0:
            view.lines[y] = line[: x - 1] + line[x:]
            view.set_cursor(x - 1, y)
        elif y > 0:
            prev = view.lines[y - 1]
            view.lines[y - 1] = prev + line
            del view.lines[y]
            view.set_cursor(len(prev), y - 1)
        else:
            return False
        return True
    if key == "delete":
        if x < len(line):
            view.lines[y] = line[:x] + line[x + 1:]
        elif y + 1 < len(view.lines):
            view.lines[y] = line + view.lines[y + 1]
            del view.lines[y + 1]
        else:
            return False
        return True
    if key == "left":
        if x > 0:
            view.set_cursor(x - 1, y)
        elif y > 0:
            view.set_cursor(len(view.lines[y - 1]), y - 1)
        return True
    if key == "right":
        if x < len(line):
            view.set_cursor(x + 1, y)
        elif y + 1 < len(view.lines):
            view.set_cursor(0, y + 1)
        return True
    if key == "up":
        if y > 0:
            view.set_cursor(min(x, len(view.lines[y - 1])), y - 1)
        return True
    if key == "down":
        if y + 1 < len(view.lines):
            view.set_cursor(min(x, len(view.lines[y + 1])), y + 1)
        return True
    if key == "home":
        view.set_cursor(0, y)
        return True
    if key == "end":
        view.set_cursor(len(line), y)
        return True
    if key == "tab":
        _insert(view, TAB_TEXT)
        return True
    if key == "space":
        _insert(view, " ")
        return True
    if _printable(character):
        _insert(view, character or "")
        return True
    return False


def single_line_filter(view: "View", key: str, character: Optional[str] = None) -> bool:
    """
    Input filter for one-line prompts.

    Blocks vertical movement and moving right past the text, and maps
    home/end onto the start/end of the only line.
    """
    _ensure_line(view)
    if key in ("down", "up"):
        return True
    if key == "right":
        return view.cursor_x >= len(view.lines[view.cursor_y].rstrip())
    if key == "home":
        view.set_cursor(0, 0)
        return True
    if key == "end":
        view.set_cursor(len(view.lines[0].rstrip()), 0)
        return True
    return False


__all__ = ["edit_view", "single_line_filter", "TAB_TEXT"]
