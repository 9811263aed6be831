"""vault-commander - terminal browser and editor for Vault secrets."""

__version__ = "0.1.0"
__description__ = "Browse and edit secrets in a Vault server from the terminal"

from vault_commander.cli import app, main

__all__ = ["app", "main", "__version__"]
