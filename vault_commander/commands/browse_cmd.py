"""
Full-screen browser entrypoint.

Exit status is 0 after a normal quit and 1 when startup or the session hits
an unrecoverable error.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from vault_commander.commands.shared import open_store, report_fatal
from vault_commander.core.errors import FatalError


def browse(mount: Optional[str] = None, config_path: Optional[Path] = None) -> None:
    """Launch the secret browser, optionally opening ``mount`` directly."""
    try:
        from vault_commander.tui.app import VaultCommanderApp
    except ImportError as e:  # pragma: no cover
        report_fatal(f"Failed to import TUI dependencies: {e}")
        raise typer.Exit(1)

    try:
        settings, store = open_store(config_path)
    except FatalError as e:
        report_fatal(str(e))
        raise typer.Exit(1)

    app = VaultCommanderApp(store, settings=settings, mount=mount)
    try:
        app.run()
    finally:
        store.close()

    if app.return_code:
        report_fatal(app.fatal_message or "Terminal session failed")
        raise typer.Exit(app.return_code)
