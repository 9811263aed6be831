#!/usr/bin/env python3
"""
vault-commander - terminal browser for a Vault secret store
Main CLI entry point
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from vault_commander.commands import browse_cmd, config_cmd, mounts_cmd

app = typer.Typer(
    name="vault-commander",
    help="Browse and edit secrets in a Vault server from the terminal",
    add_completion=True,
)

app.command(name="mounts", help="List browsable mounts")(mounts_cmd.mounts)

app.add_typer(config_cmd.app, name="config", help="Manage configuration settings")


@app.callback(invoke_without_command=True)
def callback(
    ctx: typer.Context,
    mount: Optional[str] = typer.Option(None, "--mount", "-m", help="Mount to open at startup (e.g. secret/)"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file to use"),
) -> None:
    """
    vault-commander - terminal browser for a Vault secret store

    With no command the full-screen browser starts.

    Utilities:
      mounts                  - List browsable mounts
      config                  - Manage configuration settings
    """
    if ctx.invoked_subcommand is None:
        browse_cmd.browse(mount=mount, config_path=config_path)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
