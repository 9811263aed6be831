"""Config command for the vault-commander CLI."""

from pathlib import Path
from typing import Optional

import typer

from vault_commander.commands.shared import console, report_fatal
from vault_commander.core.config import default_config_path, export_template, load_settings
from vault_commander.core.errors import ConfigError

app = typer.Typer()


@app.command("show")
def show(config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file to read")):
    """Show the effective configuration."""
    try:
        settings = load_settings(config_path)
    except ConfigError as e:
        report_fatal(str(e))
        raise typer.Exit(1)

    console.print("\n[bold]Current Configuration:[/]")
    console.print(f"  Config file: [cyan]{config_path or default_config_path()}[/]")
    console.print(f"  Address: [cyan]{settings.address}[/]")
    console.print(f"  Token file: [cyan]{settings.token_file}[/]")
    console.print(f"  Editor: [cyan]{settings.editor_command}[/]")
    console.print(f"  Mount types: [cyan]{', '.join(settings.allowed_mount_types)}[/]")
    console.print(f"  Timeout: [cyan]{settings.timeout:g}s[/]")
    console.print(f"  TLS verification: [cyan]{'Enabled' if settings.verify_tls else 'Disabled'}[/]")
    if settings.ca_cert:
        console.print(f"  CA certificate: [cyan]{settings.ca_cert}[/]")
    console.print()


@app.command("path")
def path():
    """Print the default config file location."""
    console.print(str(default_config_path()))


@app.command("export")
def export(output_path: Optional[Path] = typer.Argument(None, help="Where to write the template")):
    """Export a configuration template."""
    target = output_path or default_config_path()
    export_template(target)
    console.print(f"[bold green]✔[/] Configuration template exported to [underline]{target}[/]")
    console.print("[dim]Edit this file to point at your server and editor[/]")
