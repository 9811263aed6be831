"""
View, create, edit, delete and save.

Every handler takes the ``AppState`` and returns intents. Store failures are
recoverable: they are written to the activity log and the screen is left in
a navigable state. Only the external editor can end the process from here.

Flows:

  main Ret -> secret -e-> editsecret -C-s-> saveprompt -y-> write -> home
  main a -> addkeyprompt -Ret-> editsecret -C-s-> saveprompt -y-> write -> home
  main d -> deletekeyprompt -y-> delete -> home
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from vault_commander.core.edit_session import (
    CreatingNew,
    EditingExisting,
    new_key_seed,
    parent_collection,
    parse_buffer,
    render_value,
    values_equal,
)
from vault_commander.core.errors import NotFoundError, SecretParseError, StoreError
from vault_commander.core.store import SecretStore
from vault_commander.tui.editor import ExternalEditor
from vault_commander.tui.intents import (
    CloseView,
    HandlerResult,
    Home,
    ListKeys,
    OpenView,
    ReplaceBuffer,
)
from vault_commander.tui.models import (
    DELETE_PROMPT,
    EDIT_LEGEND,
    MSG_DELETE_CANCELED,
    MSG_DELETED,
    MSG_EDIT_CANCELED,
    MSG_EDIT_STARTED,
    MSG_EDITOR_RELOADED,
    MSG_STALE_WRITE,
    MSG_VIEWING_SECRET,
    MSG_WRITE_CANCELLED,
    MSG_WROTE,
    SAVE_PROMPT_TEXT,
    SECRET_LEGEND,
)
from vault_commander.tui.navigation import GLOBAL, NavigationController
from vault_commander.tui.state import AppState, ViewedSecret
from vault_commander.tui.views import (
    ADD_KEY_PROMPT,
    DELETE_KEY_PROMPT,
    EDIT_SECRET,
    MAIN,
    SAVE_PROMPT,
    SECRET,
    SIDE,
)


class Phase(str, Enum):
    """Where an edit stands, as read back from the view table and session.

    Nothing dispatches on it; it is derived for debugging and assertions.
    """

    IDLE = "idle"
    VIEWING = "viewing"
    PROMPTING_ADD = "prompting_add"
    EDITING_BUFFER = "editing_buffer"
    WRITING_BUFFER = "writing_buffer"
    PROMPTING_SAVE = "prompting_save"
    PROMPTING_DELETE = "prompting_delete"


def _back_to_buffer() -> CloseView:
    return CloseView(SAVE_PROMPT, focus=EDIT_SECRET, legend=EDIT_LEGEND)


class EditWorkflow:
    def __init__(self, store: SecretStore, *, editor: Optional[ExternalEditor] = None) -> None:
        self.store = store
        self.editor = editor

    @staticmethod
    def phase(state: AppState) -> Phase:
        views = state.views
        if views.exists(DELETE_KEY_PROMPT):
            return Phase.PROMPTING_DELETE
        if views.exists(SAVE_PROMPT):
            return Phase.PROMPTING_SAVE
        if state.session is not None:
            if isinstance(state.session, EditingExisting):
                return Phase.EDITING_BUFFER
            return Phase.WRITING_BUFFER
        if views.exists(ADD_KEY_PROMPT):
            return Phase.PROMPTING_ADD
        if views.exists(SECRET):
            return Phase.VIEWING
        return Phase.IDLE

    # -- browsing -------------------------------------------------------

    def select_mount(self, state: AppState) -> HandlerResult:
        mount = state.selected_mount()
        if not mount:
            return None
        return ListKeys(mount)

    def view_secret(self, state: AppState) -> HandlerResult:
        path = state.selected_key()
        if not path:
            return None
        try:
            value = self.store.read_value(path)
        except StoreError as e:
            state.log.append(f"ERROR: {e}")
            return None
        state.viewing = ViewedSecret(path=path, value=value)
        state.log.append(MSG_VIEWING_SECRET.format(path=path))
        return OpenView(SECRET, text=render_value(value), legend=SECRET_LEGEND)

    def close_secret(self, state: AppState) -> HandlerResult:
        state.viewing = None
        return Home(refresh=False)

    # -- editing --------------------------------------------------------

    def edit_secret(self, state: AppState) -> HandlerResult:
        viewing = state.viewing
        if viewing is None:
            return None
        session = EditingExisting.start(viewing.path, viewing.value)
        state.session = session
        state.log.append(MSG_EDIT_STARTED.format(mode=session.mode, path=session.path))
        return OpenView(EDIT_SECRET, text=render_value(session.snapshot), legend=EDIT_LEGEND)

    def add_key_prompt(self, state: AppState) -> HandlerResult:
        path = state.selected_key() or state.selected_mount()
        if not path:
            return None
        text, column = new_key_seed(path)
        return OpenView(ADD_KEY_PROMPT, text=text, cursor=(column, 0), label=parent_collection(path))

    def begin_create(self, state: AppState) -> HandlerResult:
        prompt = state.views.require(ADD_KEY_PROMPT)
        path = prompt.text().strip()
        if not path or path.endswith("/"):
            return None
        session = CreatingNew(path=path, parent=parent_collection(path))
        state.session = session
        state.log.append(MSG_EDIT_STARTED.format(mode=session.mode, path=path))
        return [CloseView(ADD_KEY_PROMPT), OpenView(EDIT_SECRET, legend=EDIT_LEGEND)]

    def cancel_add(self, state: AppState) -> HandlerResult:
        prompt = state.views.get(ADD_KEY_PROMPT)
        path = prompt.text().strip() if prompt is not None else ""
        state.log.append(MSG_EDIT_CANCELED.format(path=path))
        return Home()

    def open_editor(self, state: AppState) -> HandlerResult:
        """Hand the buffer to the external editor; ``EditorError`` propagates."""
        if self.editor is None or state.session is None:
            return None
        buffer = state.views.require(EDIT_SECRET).text()
        edited = self.editor.edit(buffer)
        state.log.append(MSG_EDITOR_RELOADED.format(path=state.session.path))
        return ReplaceBuffer(EDIT_SECRET, edited)

    def cancel_edit(self, state: AppState) -> HandlerResult:
        session = state.session
        path = session.path if session is not None else state.selected_key()
        state.log.append(MSG_EDIT_CANCELED.format(path=path))
        self._end(state)
        return Home()

    # -- saving ---------------------------------------------------------

    def save_prompt(self, state: AppState) -> HandlerResult:
        session = state.session
        if session is None:
            return None
        return OpenView(
            SAVE_PROMPT,
            text=SAVE_PROMPT_TEXT.format(path=session.path),
            label=session.path,
        )

    def save(self, state: AppState) -> HandlerResult:
        """
        Write the edit buffer back to the store.

        The buffer must hold a JSON object. When editing an existing secret
        the stored value is re-read first and the write is abandoned if it no
        longer matches the value seen when editing began.
        """
        session = state.session
        if session is None:
            return Home()
        log = state.log
        buffer = state.views.require(EDIT_SECRET).text()
        try:
            data = parse_buffer(buffer)
        except SecretParseError as e:
            log.append(str(e))
            log.append(MSG_WRITE_CANCELLED)
            return _back_to_buffer()

        if isinstance(session, EditingExisting):
            try:
                current = self.store.read_value(session.path)
            except NotFoundError:
                current = None
            except StoreError as e:
                log.append(f"ERROR: {e}")
                return _back_to_buffer()
            if current is None or not values_equal(current, session.snapshot):
                log.append(MSG_STALE_WRITE)
                self._end(state)
                return Home()

        try:
            self.store.write_value(session.path, data)
        except StoreError as e:
            log.append(f"ERROR: {e}")
            return _back_to_buffer()
        log.append(MSG_WROTE.format(path=session.path))
        self._end(state)
        return Home()

    # -- deleting -------------------------------------------------------

    def delete_prompt(self, state: AppState) -> HandlerResult:
        path = state.selected_key()
        if not path:
            return None
        return OpenView(DELETE_KEY_PROMPT, text=DELETE_PROMPT.format(path=path), label=path)

    def delete_key(self, state: AppState) -> HandlerResult:
        path = state.selected_key()
        try:
            self.store.delete_value(path)
        except StoreError as e:
            state.log.append(f"ERROR: {e}")
        else:
            state.log.append(MSG_DELETED.format(path=path))
        return Home()

    def decline_delete(self, state: AppState) -> HandlerResult:
        state.log.append(MSG_DELETE_CANCELED.format(path=state.selected_key()))
        return Home()

    @staticmethod
    def _end(state: AppState) -> None:
        state.session = None
        state.viewing = None


def install_bindings(nav: NavigationController, workflow: EditWorkflow) -> None:
    """Register the full keymap on ``nav``."""
    nav.bind(GLOBAL, "ctrl+c", nav.quit)

    for view in (SIDE, MAIN):
        nav.bind(view, "tab", nav.next_view)
        nav.bind(view, "up", nav.cursor_up)
        nav.bind(view, "down", nav.cursor_down)
        nav.bind(view, "pagedown", nav.page_down)
    nav.bind(SIDE, "enter", workflow.select_mount)

    nav.bind(MAIN, "enter", workflow.view_secret)
    nav.bind(MAIN, "a", workflow.add_key_prompt)
    nav.bind(MAIN, "d", workflow.delete_prompt)
    nav.bind(MAIN, "space", nav.page_down)

    nav.bind(SECRET, "q", workflow.close_secret)
    nav.bind(SECRET, "e", workflow.edit_secret)
    nav.bind(SECRET, "up", nav.cursor_up)
    nav.bind(SECRET, "down", nav.cursor_down)

    nav.bind(EDIT_SECRET, "ctrl+s", workflow.save_prompt)
    nav.bind(EDIT_SECRET, "ctrl+x", workflow.cancel_edit)
    nav.bind(EDIT_SECRET, "ctrl+l", workflow.open_editor)

    nav.bind(SAVE_PROMPT, "y", workflow.save)
    nav.bind(SAVE_PROMPT, "n", workflow.cancel_edit)

    nav.bind(DELETE_KEY_PROMPT, "y", workflow.delete_key)
    nav.bind(DELETE_KEY_PROMPT, "n", workflow.decline_delete)

    nav.bind(ADD_KEY_PROMPT, "enter", workflow.begin_create)
    nav.bind(ADD_KEY_PROMPT, "ctrl+x", workflow.cancel_add)
    nav.bind(ADD_KEY_PROMPT, "escape", workflow.cancel_add)


__all__ = ["EditWorkflow", "Phase", "install_bindings"]
