"""
Compositor: draws the view table into one Rich ``Text`` frame.

Views are painted in creation order, so ephemeral views cover the permanent
panes beneath them. Each view first blanks its rectangle, then draws its
frame and title (if framed) and finally its visible rows.
"""

from __future__ import annotations

from typing import List, NamedTuple, Optional

from rich.text import Text

from vault_commander.tui.views import View, ViewRegistry


HIGHLIGHT_STYLE = "black on green"
CARET_STYLE = "reverse"
FRAME_STYLE = "dim"
FOCUSED_FRAME_STYLE = "bold green"
TITLE_STYLE = "bold"

_H, _V = "─", "│"
_TL, _TR, _BL, _BR = "┌", "┐", "└", "┘"


class Row(NamedTuple):
    line: int  # buffer line this row shows
    start: int  # column of the buffer line where the row begins
    text: str


class Canvas:
    """Fixed-size character grid with one style per cell."""

    def __init__(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self.chars = [[" "] * self.width for _ in range(self.height)]
        self.styles: List[List[str]] = [[""] * self.width for _ in range(self.height)]

    def put(self, x: int, y: int, ch: str, style: str = "") -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self.chars[y][x] = ch
            self.styles[y][x] = style

    def text(self, x: int, y: int, s: str, style: str = "", limit: Optional[int] = None) -> None:
        if limit is not None:
            s = s[: max(0, limit)]
        for i, ch in enumerate(s):
            self.put(x + i, y, ch, style)

    def fill(self, x1: int, y1: int, x2: int, y2: int) -> None:
        for y in range(max(0, y1), min(self.height, y2 + 1)):
            for x in range(max(0, x1), min(self.width, x2 + 1)):
                self.chars[y][x] = " "
                self.styles[y][x] = ""

    def style(self, x: int, y: int, style: str) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self.styles[y][x] = style

    def to_text(self) -> Text:
        out = Text(no_wrap=True, overflow="crop")
        for y in range(self.height):
            if y:
                out.append("\n")
            run, run_style = "", None
            for ch, st in zip(self.chars[y], self.styles[y]):
                if st != run_style and run:
                    out.append(run, style=run_style or None)
                    run = ""
                run_style = st
                run += ch
            if run:
                out.append(run, style=run_style or None)
        return out


def layout_rows(view: View) -> List[Row]:
    """Split the buffer into display rows, wrapping when the view wraps."""
    width = view.inner_width
    rows: List[Row] = []
    for y, line in enumerate(view.lines):
        if not view.properties.wrap or width <= 0 or len(line) <= width:
            rows.append(Row(y, 0, line))
            continue
        for start in range(0, len(line), width):
            rows.append(Row(y, start, line[start:start + width]))
    return rows


def _cursor_row(rows: List[Row], view: View) -> Optional[int]:
    match = None
    for i, row in enumerate(rows):
        if row.line != view.cursor_y:
            continue
        if match is None or row.start <= view.cursor_x:
            match = i
    return match


def _first_visible(rows: List[Row], view: View, cursor_index: Optional[int]) -> int:
    height = max(1, view.inner_height)
    if view.properties.autoscroll:
        return max(0, len(rows) - height)
    first = next((i for i, r in enumerate(rows) if r.line >= view.origin_y), len(rows))
    if cursor_index is not None:
        if cursor_index < first:
            first = cursor_index
        elif cursor_index >= first + height:
            first = cursor_index - height + 1
    return first


def draw_view(canvas: Canvas, view: View, *, focused: bool) -> None:
    x1, y1, x2, y2 = view.rect
    props = view.properties
    canvas.fill(x1, y1, x2, y2)

    if props.framed:
        style = FOCUSED_FRAME_STYLE if focused else FRAME_STYLE
        for x in range(x1 + 1, x2):
            canvas.put(x, y1, _H, style)
            canvas.put(x, y2, _H, style)
        for y in range(y1 + 1, y2):
            canvas.put(x1, y, _V, style)
            canvas.put(x2, y, _V, style)
        canvas.put(x1, y1, _TL, style)
        canvas.put(x2, y1, _TR, style)
        canvas.put(x1, y2, _BL, style)
        canvas.put(x2, y2, _BR, style)
        if props.title:
            canvas.text(x1 + 1, y1, props.title, TITLE_STYLE, limit=view.inner_width)

    rows = layout_rows(view)
    cursor_index = _cursor_row(rows, view)
    first = _first_visible(rows, view, cursor_index)
    width, height = view.inner_width, view.inner_height

    for offset in range(height):
        index = first + offset
        if index >= len(rows):
            break
        row = rows[index]
        y = y1 + 1 + offset
        highlighted = view.highlight and row.line == view.cursor_y
        style = HIGHLIGHT_STYLE if highlighted else ""
        if highlighted:
            canvas.text(x1 + 1, y, " " * width, style)
        canvas.text(x1 + 1, y, row.text, style, limit=width)

    if focused and props.editable and cursor_index is not None:
        offset = cursor_index - first
        if 0 <= offset < height:
            column = view.cursor_x - rows[cursor_index].start
            if 0 <= column < max(1, width):
                canvas.style(x1 + 1 + column, y1 + 1 + offset, CARET_STYLE)


def render(registry: ViewRegistry, width: int, height: int) -> Text:
    canvas = Canvas(width, height)
    for view in registry.views():
        draw_view(canvas, view, focused=view.name == registry.current)
    return canvas.to_text()


__all__ = ["Canvas", "Row", "layout_rows", "draw_view", "render"]
