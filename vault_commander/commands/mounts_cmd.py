"""List the mounts the browser would offer."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from vault_commander.commands.shared import console, open_store, report_fatal
from vault_commander.core.errors import FatalError, StoreError
from vault_commander.core.walker import eligible_mounts


def mounts(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file to use"),
    show_all: bool = typer.Option(False, "--all", "-a", help="Include mounts that cannot be browsed"),
) -> None:
    """Show the mounts available for browsing."""
    try:
        settings, store = open_store(config_path)
    except FatalError as e:
        report_fatal(str(e))
        raise typer.Exit(1)

    try:
        raw = store.list_mounts()
        eligible = set(eligible_mounts(store, settings.allowed_mount_types))
    except StoreError as e:
        report_fatal(f"Unable to list mounts: {e}")
        raise typer.Exit(1)
    finally:
        store.close()

    table = Table(title="Mounts")
    table.add_column("Mount", style="cyan")
    table.add_column("Type")
    table.add_column("Browsable")
    for name in sorted(raw):
        ok = name in eligible
        if not ok and not show_all:
            continue
        table.add_row(name, raw[name], "[green]yes[/]" if ok else "[dim]no[/]")
    console.print(table)
