"""
Named panes and the registry that owns them.

The set of names is fixed. ``side``, ``main``, ``legend`` and ``log`` are
permanent: created once at startup and never destroyed. The others are
ephemeral and live for a single workflow step.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, NamedTuple, Optional

from vault_commander.core.errors import FatalError
from vault_commander.tui.editing import single_line_filter


SIDE = "side"
MAIN = "main"
LEGEND = "legend"
LOG = "log"
SECRET = "secret"
EDIT_SECRET = "editsecret"
ADD_KEY_PROMPT = "addkeyprompt"
DELETE_KEY_PROMPT = "deletekeyprompt"
SAVE_PROMPT = "saveprompt"

PERMANENT_VIEWS = (SIDE, MAIN, LEGEND, LOG)
EPHEMERAL_VIEWS = (SECRET, EDIT_SECRET, ADD_KEY_PROMPT, DELETE_KEY_PROMPT, SAVE_PROMPT)
VIEW_NAMES = PERMANENT_VIEWS + EPHEMERAL_VIEWS

# Anchor views toggled by Tab.
ANCHOR_VIEWS = (SIDE, MAIN)


class Rect(NamedTuple):
    """Frame corners, inclusive; the interior is one cell inside each edge."""

    x1: int
    y1: int
    x2: int
    y2: int


# (view, key, character) -> True when the key was consumed by the filter
InputFilter = Callable[["View", str, Optional[str]], bool]


@dataclass(frozen=True)
class ViewProperties:
    autoscroll: bool = False
    editable: bool = False
    input_filter: Optional[InputFilter] = None
    framed: bool = True
    title: str = ""
    wrap: bool = False
    highlight: bool = False


VIEW_PROPERTIES: Dict[str, ViewProperties] = {
    SIDE: ViewProperties(framed=True, title="Mounts", highlight=True),
    MAIN: ViewProperties(framed=True, title="Keys", wrap=True),
    LEGEND: ViewProperties(framed=True, title="Legend"),
    LOG: ViewProperties(framed=True, title="Log", autoscroll=True),
    SECRET: ViewProperties(framed=False, wrap=True),
    EDIT_SECRET: ViewProperties(editable=True, framed=False, wrap=True),
    DELETE_KEY_PROMPT: ViewProperties(framed=True, title="WARNING"),
    ADD_KEY_PROMPT: ViewProperties(
        editable=True,
        input_filter=single_line_filter,
        framed=True,
        title="Insert Key Name",
    ),
    SAVE_PROMPT: ViewProperties(framed=True, title="Save Changes"),
}


@dataclass
class View:
    name: str
    rect: Rect
    properties: ViewProperties
    lines: List[str] = field(default_factory=list)
    cursor_x: int = 0
    cursor_y: int = 0
    origin_y: int = 0
    highlight: bool = False

    @property
    def inner_width(self) -> int:
        return max(0, self.rect.x2 - self.rect.x1 - 1)

    @property
    def inner_height(self) -> int:
        return max(0, self.rect.y2 - self.rect.y1 - 1)

    def line(self, y: int) -> str:
        """Buffer line ``y`` or ``""`` when out of range."""
        if 0 <= y < len(self.lines):
            return self.lines[y]
        return ""

    def cursor_line(self) -> str:
        return self.line(self.cursor_y)

    def text(self) -> str:
        return "\n".join(self.lines)

    def clear(self) -> None:
        self.lines = []
        self.cursor_x = self.cursor_y = 0
        self.origin_y = 0

    def write(self, text: str) -> None:
        """Append ``text`` as one or more lines."""
        self.lines.extend(str(text).split("\n"))

    def set_text(self, text: str) -> None:
        self.clear()
        self.write(text)

    def set_cursor(self, x: int, y: int) -> None:
        self.cursor_x = max(0, x)
        self.cursor_y = max(0, y)
        self.scroll_to_cursor()

    def scroll_to_cursor(self) -> None:
        height = max(1, self.inner_height)
        if self.cursor_y < self.origin_y:
            self.origin_y = self.cursor_y
        elif self.cursor_y >= self.origin_y + height:
            self.origin_y = self.cursor_y - height + 1


class ViewRegistry:
    """
    Creates, positions and destroys named views and tracks the focused one.

    Views are kept in creation order, which is also drawing order.
    """

    def __init__(self) -> None:
        self._views: Dict[str, View] = {}
        self.current: Optional[str] = None

    def create_or_focus(
        self,
        name: str,
        rect: Rect,
        properties: Optional[ViewProperties] = None,
    ) -> View:
        """
        Return the view called ``name``, creating it if needed.

        An existing view is returned untouched (no property changes, no focus
        change). A new view gets ``properties`` (or the defaults for its name)
        and becomes the focused view.
        """
        existing = self._views.get(name)
        if existing is not None:
            return existing
        if name not in VIEW_NAMES:
            raise FatalError(f"Unknown view: {name}")
        props = properties if properties is not None else VIEW_PROPERTIES[name]
        view = View(name=name, rect=Rect(*rect), properties=props, highlight=props.highlight)
        self._views[name] = view
        self.current = name
        return view

    def destroy(self, name: str) -> None:
        """Remove a view. Unknown names are ignored; focus is left unset."""
        if self._views.pop(name, None) is None:
            return
        if self.current == name:
            self.current = None

    def exists(self, name: str) -> bool:
        return name in self._views

    def get(self, name: str) -> Optional[View]:
        return self._views.get(name)

    def require(self, name: str) -> View:
        view = self._views.get(name)
        if view is None:
            raise FatalError(f"View {name} does not exist")
        return view

    def focus(self, name: str) -> View:
        view = self.require(name)
        self.current = name
        return view

    @property
    def focused(self) -> Optional[View]:
        if self.current is None:
            return None
        return self._views.get(self.current)

    def move(self, name: str, rect: Rect) -> None:
        view = self._views.get(name)
        if view is not None:
            view.rect = Rect(*rect)
            view.scroll_to_cursor()

    def names(self) -> List[str]:
        return list(self._views)

    def views(self) -> List[View]:
        return list(self._views.values())

    def ephemeral_names(self) -> List[str]:
        return [n for n in self._views if n not in PERMANENT_VIEWS]


__all__ = [
    "SIDE",
    "MAIN",
    "LEGEND",
    "LOG",
    "SECRET",
    "EDIT_SECRET",
    "ADD_KEY_PROMPT",
    "DELETE_KEY_PROMPT",
    "SAVE_PROMPT",
    "PERMANENT_VIEWS",
    "EPHEMERAL_VIEWS",
    "VIEW_NAMES",
    "ANCHOR_VIEWS",
    "Rect",
    "InputFilter",
    "View",
    "ViewProperties",
    "VIEW_PROPERTIES",
    "ViewRegistry",
]
