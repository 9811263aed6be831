"""
Focus, legend and key dispatch.

The controller owns the dispatch table: ``(view name, key) -> handler``.
Bindings registered under ``GLOBAL`` fire whatever view is focused. Handlers
receive the ``AppState`` and return intents; ``apply`` is the only place that
creates, focuses or destroys views.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional, Tuple

from vault_commander.core.errors import FatalError, StoreError
from vault_commander.core.store import SecretStore
from vault_commander.core.walker import eligible_mounts, expand_keys
from vault_commander.tui.activity_log import ActivityLog
from vault_commander.tui.debug import DebugLogger
from vault_commander.tui.editing import edit_view
from vault_commander.tui.intents import (
    CloseView,
    Focus,
    HandlerResult,
    Home,
    Intent,
    INTENT_TYPES,
    ListKeys,
    OpenView,
    Quit,
    ReplaceBuffer,
)
from vault_commander.tui.layout import ephemeral_rect, permanent_rects, prompt_rect
from vault_commander.tui.models import MAIN_LEGEND, MSG_VIEWING_MOUNT, SIDE_LEGEND
from vault_commander.tui.state import AppState
from vault_commander.tui.views import (
    ADD_KEY_PROMPT,
    ANCHOR_VIEWS,
    DELETE_KEY_PROMPT,
    LEGEND,
    LOG,
    MAIN,
    SAVE_PROMPT,
    SIDE,
    View,
)


GLOBAL = ""

Handler = Callable[[AppState], HandlerResult]

_PROMPTS = (ADD_KEY_PROMPT, DELETE_KEY_PROMPT, SAVE_PROMPT)


class NavigationController:
    """Owns the focused view, the legend and the keybinding table."""

    def __init__(
        self,
        store: SecretStore,
        *,
        state: Optional[AppState] = None,
        allowed_mount_types: Iterable[str] = ("generic", "kv", "cubbyhole"),
        debug: Optional[DebugLogger] = None,
    ) -> None:
        self.store = store
        self.state = state if state is not None else AppState()
        self.allowed_mount_types = tuple(allowed_mount_types)
        self.debug = debug
        self._bindings: Dict[Tuple[str, str], Handler] = {}
        # Prompt widths follow the path they were opened for.
        self._prompt_labels: Dict[str, str] = {}

    # -- dispatch table -------------------------------------------------

    def bind(self, view: str, key: str, handler: Handler) -> None:
        self._bindings[(view, key)] = handler

    def binding(self, view: str, key: str) -> Optional[Handler]:
        return self._bindings.get((view, key))

    def bound_keys(self, view: str) -> list:
        return sorted(k for v, k in self._bindings if v == view)

    def dispatch(self, key: str, character: Optional[str] = None) -> bool:
        """
        Route one key press.

        Global bindings win, then the focused view's binding, then (for
        editable views) the view's input filter and the buffer editor.

        Returns:
            True when the key was handled
        """
        state = self.state
        focused = state.focused_name
        self._debug("key", key=key, view=focused or "")

        handler = self._bindings.get((GLOBAL, key))
        if handler is None and focused is not None:
            handler = self._bindings.get((focused, key))
        if handler is not None:
            self.apply(handler(state))
            self.sync_log()
            return True

        view = state.views.focused
        if view is None or not view.properties.editable:
            return False
        input_filter = view.properties.input_filter
        if input_filter is not None and input_filter(view, key, character):
            return True
        return edit_view(view, key, character)

    # -- intents --------------------------------------------------------

    def apply(self, result: HandlerResult) -> None:
        if result is None:
            return
        intents = (result,) if isinstance(result, INTENT_TYPES) else result
        for intent in intents:
            self._debug("intent", intent=type(intent).__name__)
            self._apply_one(intent)

    def _apply_one(self, intent: Intent) -> None:
        views = self.state.views
        if isinstance(intent, Focus):
            views.focus(intent.view)
            if intent.legend is not None:
                self.set_legend(intent.legend)
        elif isinstance(intent, OpenView):
            self.open_view(intent)
        elif isinstance(intent, CloseView):
            views.destroy(intent.view)
            self._prompt_labels.pop(intent.view, None)
            if intent.focus is not None:
                views.focus(intent.focus)
            if intent.legend is not None:
                self.set_legend(intent.legend)
        elif isinstance(intent, ReplaceBuffer):
            view = views.require(intent.view)
            view.set_text(intent.text)
        elif isinstance(intent, ListKeys):
            self.list_keys(intent.mount)
        elif isinstance(intent, Home):
            self.home(refresh=intent.refresh)
        elif isinstance(intent, Quit):
            self.state.quit_requested = True
        else:  # pragma: no cover
            raise FatalError(f"Unknown intent: {intent!r}")

    def open_view(self, intent: OpenView) -> View:
        state = self.state
        rect = ephemeral_rect(intent.view, state.width, state.height, intent.label)
        existed = state.views.exists(intent.view)
        view = state.views.create_or_focus(intent.view, rect)
        if not existed:
            view.set_text(intent.text)
            view.set_cursor(*intent.cursor)
            if intent.view in _PROMPTS:
                self._prompt_labels[intent.view] = intent.label
        if intent.legend is not None:
            self.set_legend(intent.legend)
        return view

    # -- screen setup ---------------------------------------------------

    def start(self, width: int, height: int, mount: Optional[str] = None) -> None:
        """
        Create the permanent views and fill the mount list.

        With ``mount`` the key listing of that mount is opened directly, as if
        it had been selected in the side pane.

        Raises:
            FatalError: If the mounts cannot be listed or ``mount`` is unknown
        """
        state = self.state
        state.width, state.height = width, height
        for name, rect in permanent_rects(width, height).items():
            state.views.create_or_focus(name, rect)
        try:
            mounts = eligible_mounts(self.store, self.allowed_mount_types)
        except StoreError as e:
            raise FatalError(f"Unable to list mounts: {e}") from e

        side = state.views.require(SIDE)
        side.set_text("\n".join(mounts))
        side.set_cursor(0, 0)
        state.views.focus(SIDE)
        self.set_legend(SIDE_LEGEND)
        self.sync_log()

        if mount:
            self.jump_to_mount(mount, mounts)

    def jump_to_mount(self, mount: str, mounts: Optional[list] = None) -> None:
        side = self.state.views.require(SIDE)
        names = list(mounts) if mounts is not None else list(side.lines)
        wanted = mount if mount.endswith("/") else mount + "/"
        if wanted not in names:
            raise FatalError(f"Unable to find mount point {mount}")
        side.set_cursor(0, names.index(wanted))
        self.list_keys(wanted)
        self.sync_log()

    def resize(self, width: int, height: int) -> None:
        """Recompute every rectangle for a new terminal size."""
        state = self.state
        state.width, state.height = width, height
        for name, rect in permanent_rects(width, height).items():
            state.views.move(name, rect)
        for name in state.views.ephemeral_names():
            if name in _PROMPTS:
                rect = prompt_rect(name, width, height, self._prompt_labels.get(name, ""))
            else:
                rect = ephemeral_rect(name, width, height)
            state.views.move(name, rect)

    # -- shared transitions ---------------------------------------------

    def set_legend(self, text: str) -> None:
        self.state.legend = text
        legend = self.state.views.get(LEGEND)
        if legend is not None:
            legend.set_text(text)

    def log(self, message: str) -> None:
        self.state.log.append(message)
        self.sync_log()

    def sync_log(self) -> None:
        view = self.state.views.get(LOG)
        if view is None:
            return
        log: ActivityLog = self.state.log
        view.lines = log.lines()
        view.origin_y = max(0, len(view.lines) - view.inner_height)

    def list_keys(self, mount: str) -> None:
        """Fill ``main`` with every leaf below ``mount`` and focus it."""
        views = self.state.views
        main = views.require(MAIN)
        keys = expand_keys(self.store, mount, on_error=self._listing_failed)
        main.set_text("\n".join(keys))
        main.set_cursor(0, 0)
        main.highlight = True
        views.focus(MAIN)
        self.set_legend(MAIN_LEGEND)
        self.log(MSG_VIEWING_MOUNT.format(mount=mount))

    def home(self, *, refresh: bool = True) -> None:
        views = self.state.views
        for name in views.ephemeral_names():
            views.destroy(name)
        self._prompt_labels.clear()
        views.focus(MAIN)
        self.set_legend(MAIN_LEGEND)
        mount = self.state.selected_mount()
        if refresh and mount:
            self.list_keys(mount)

    def _listing_failed(self, path: str, error: StoreError) -> None:
        self._debug("listing_error", path=path, kind=error.kind, error=str(error))

    # -- cursor handlers --------------------------------------------------

    def next_view(self, state: AppState) -> HandlerResult:
        side, main = ANCHOR_VIEWS
        if state.focused_name == side:
            return Focus(main, legend=MAIN_LEGEND)
        return Focus(side, legend=SIDE_LEGEND)

    def cursor_down(self, state: AppState) -> HandlerResult:
        view = state.views.focused
        if view is not None:
            _move(view, 1)
        return None

    def cursor_up(self, state: AppState) -> HandlerResult:
        view = state.views.focused
        if view is not None and view.cursor_y > 0:
            view.set_cursor(view.cursor_x, view.cursor_y - 1)
        return None

    def page_down(self, state: AppState) -> HandlerResult:
        view = state.views.focused
        if view is not None:
            _move(view, max(1, view.inner_height))
        return None

    def quit(self, state: AppState) -> HandlerResult:
        return Quit()

    def _debug(self, event: str, **data: object) -> None:
        if self.debug is not None:
            self.debug.log(event=event, data=data)


def _move(view: View, step: int) -> None:
    """Move the cursor ``step`` rows down unless that lands on an empty line."""
    target = view.cursor_y + step
    if view.line(target) == "":
        return
    view.set_cursor(view.cursor_x, target)


__all__ = ["GLOBAL", "Handler", "NavigationController"]
