"""Startup helpers shared by the commands that talk to the store."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

from rich.console import Console

from vault_commander.core.config import Settings, load_settings, read_token
from vault_commander.core.store import HttpSecretStore


console = Console()
err_console = Console(stderr=True)


def open_store(config_path: Optional[Path] = None) -> Tuple[Settings, HttpSecretStore]:
    """
    Load settings, read the credential file and build the HTTP store.

    Raises:
        ConfigError: If the config file is invalid
        CredentialError: If the credential file is missing or empty
    """
    settings = load_settings(config_path)
    token = read_token(settings.token_file)
    return settings, HttpSecretStore.from_settings(settings, token)


def report_fatal(message: str) -> None:
    err_console.print(f"[bold red]❌ Error:[/] {message}")
