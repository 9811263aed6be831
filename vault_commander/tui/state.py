"""Application state passed to every key handler.

One instance per process. Nothing here is module-level; the controller owns
the instance and hands it to the workflow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from vault_commander.core.edit_session import EditSession
from vault_commander.tui.activity_log import ActivityLog
from vault_commander.tui.views import MAIN, SIDE, ViewRegistry


@dataclass
class ViewedSecret:
    """Value shown in the ``secret`` view; seeds the edit snapshot."""

    path: str
    value: Dict[str, Any]


@dataclass
class AppState:
    views: ViewRegistry = field(default_factory=ViewRegistry)
    log: ActivityLog = field(default_factory=ActivityLog)
    legend: str = ""
    session: Optional[EditSession] = None
    viewing: Optional[ViewedSecret] = None
    width: int = 80
    height: int = 24
    quit_requested: bool = False

    @property
    def focused_name(self) -> Optional[str]:
        return self.views.current

    def selected_key(self) -> str:
        """Row under the cursor in ``main`` (``""`` when nothing is listed)."""
        view = self.views.get(MAIN)
        return view.cursor_line() if view is not None else ""

    def selected_mount(self) -> str:
        view = self.views.get(SIDE)
        return view.cursor_line() if view is not None else ""


__all__ = ["AppState", "ViewedSecret"]
