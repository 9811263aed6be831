"""Textual widgets for the browser."""

from __future__ import annotations

from typing import Optional

from rich.text import Text
from textual import events
from textual.message import Message
from textual.widget import Widget

from vault_commander.tui.render import render
from vault_commander.tui.views import ViewRegistry


class Surface(Widget, can_focus=True):
    """Draws every view in the registry and reports raw key presses.

    The surface holds no state of its own. It repaints from the registry on
    every refresh and turns each key into a ``Surface.Pressed`` message.
    """

    DEFAULT_CSS = """
    Surface {
        width: 1fr;
        height: 1fr;
    }
    """

    class Pressed(Message):
        """A key reached the surface."""

        def __init__(self, key: str, character: Optional[str]) -> None:
            super().__init__()
            self.key = key
            self.character = character

    def __init__(self, registry: ViewRegistry, **kwargs) -> None:
        # Accept standard Textual widget kwargs (id, classes, name, etc.).
        super().__init__(**kwargs)
        self.registry = registry

    def render(self) -> Text:
        return render(self.registry, self.size.width, self.size.height)

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self.post_message(self.Pressed(event.key, event.character))


__all__ = ["Surface"]
