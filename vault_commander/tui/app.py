from __future__ import annotations

from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.css.query import NoMatches

from vault_commander.core.config import Settings
from vault_commander.core.errors import FatalError
from vault_commander.core.store import SecretStore
from vault_commander.tui.debug import DebugLogger
from vault_commander.tui.editor import ExternalEditor
from vault_commander.tui.navigation import NavigationController
from vault_commander.tui.state import AppState
from vault_commander.tui.widgets import Surface
from vault_commander.tui.workflow import EditWorkflow, install_bindings


class VaultCommanderApp(App):
    """
    Vault Commander - keyboard driven secret browser.

    One ``Surface`` widget paints the whole view table; every key press is
    routed through the navigation controller's dispatch table.
    """

    TITLE = "Vault Commander"
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        # Both keys go to the dispatch table before Textual's own handling.
        Binding("ctrl+c", "press('ctrl+c')", "Quit", show=False, priority=True),
        Binding("tab", "press('tab')", "Switch windows", show=False, priority=True),
    ]

    def __init__(
        self,
        store: SecretStore,
        *,
        settings: Optional[Settings] = None,
        mount: Optional[str] = None,
        editor: Optional[ExternalEditor] = None,
    ) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self.start_mount = mount
        self.fatal_message: Optional[str] = None
        self.state = AppState()
        self._debug_logger = DebugLogger(focused=lambda: self.state.focused_name)
        self.controller = NavigationController(
            store,
            state=self.state,
            allowed_mount_types=self.settings.allowed_mount_types,
            debug=self._debug_logger,
        )
        if editor is None:
            editor = ExternalEditor(self.settings.editor_command, suspend=self.suspend)
        self.workflow = EditWorkflow(store, editor=editor)
        install_bindings(self.controller, self.workflow)

    def compose(self) -> ComposeResult:
        yield Surface(self.state.views, id="surface")

    def on_mount(self) -> None:
        surface = self.query_one(Surface)
        surface.focus()
        size = self.size
        try:
            self.controller.start(size.width, size.height, self.start_mount)
        except FatalError as e:
            self._fatal(e)
            return
        surface.refresh()

    def on_resize(self, event: events.Resize) -> None:
        if not self.state.views.names():
            return
        self.controller.resize(event.size.width, event.size.height)
        self._repaint()

    def on_surface_pressed(self, message: Surface.Pressed) -> None:
        self.handle_key(message.key, message.character)

    def action_press(self, key: str) -> None:
        self.handle_key(key, None)

    def handle_key(self, key: str, character: Optional[str] = None) -> None:
        try:
            self.controller.dispatch(key, character)
        except FatalError as e:
            self._fatal(e)
            return
        if self.state.quit_requested:
            self._debug_logger.close_debug_file()
            self.exit(return_code=0)
            return
        self._repaint()

    def _repaint(self) -> None:
        try:
            self.query_one(Surface).refresh()
        except NoMatches:
            # Not mounted yet (or already torn down).
            return

    def _fatal(self, error: FatalError) -> None:
        self.fatal_message = str(error)
        self._debug_logger.log(event="fatal", data={"error": str(error)})
        self._debug_logger.close_debug_file()
        self.exit(return_code=1)

    def on_unmount(self) -> None:
        """Best-effort: flush/close debug file at app shutdown."""
        self._debug_logger.close_debug_file()


__all__ = ["VaultCommanderApp"]
