"""
Settings and credential loading for vault-commander.

Settings come from a small YAML file in the user's config directory, then
environment variables (``VAULT_ADDR``, ``VAULT_CACERT``, ``VAULT_SKIP_VERIFY``,
``EDITOR``) are layered on top. The credential is a single-line token file
read once at startup.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from vault_commander.core.errors import ConfigError, CredentialError


APP_NAME = "vault-commander"

DEFAULT_ADDRESS = "https://127.0.0.1:8200"
DEFAULT_TOKEN_PATH = "~/.vault-token"
DEFAULT_EDITOR = "vim"
DEFAULT_MOUNT_TYPES = ("generic", "kv", "cubbyhole")
DEFAULT_TIMEOUT = 30.0

_TRUTHY = {"1", "true", "yes", "y", "on"}


def _user_config_dir(app_name: str = APP_NAME) -> Path:
    """
    Return an OS-appropriate user config directory.

    - macOS: ~/Library/Application Support/<app_name>/
    - Linux/Unix: ~/.config/<app_name>/ (or $XDG_CONFIG_HOME/<app_name>/)
    - Windows: %APPDATA%\\<app_name>\\
    """
    home = Path.home()
    plat = sys.platform.lower()

    if plat == "darwin":
        return home / "Library" / "Application Support" / app_name

    if plat.startswith("win"):
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / app_name
        return home / app_name

    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else (home / ".config")
    return base / app_name


def default_config_path() -> Path:
    return _user_config_dir() / "config.yaml"


@dataclass
class Settings:
    address: str = DEFAULT_ADDRESS
    token_path: str = DEFAULT_TOKEN_PATH
    editor: Optional[str] = None
    allowed_mount_types: List[str] = field(default_factory=lambda: list(DEFAULT_MOUNT_TYPES))
    timeout: float = DEFAULT_TIMEOUT
    verify_tls: bool = True
    ca_cert: Optional[str] = None

    @property
    def token_file(self) -> Path:
        return Path(self.token_path).expanduser()

    @property
    def editor_command(self) -> str:
        return (self.editor or "").strip() or DEFAULT_EDITOR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "token_path": self.token_path,
            "editor": self.editor,
            "allowed_mount_types": list(self.allowed_mount_types),
            "timeout": float(self.timeout),
            "verify_tls": bool(self.verify_tls),
            "ca_cert": self.ca_cert,
        }

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> "Settings":
        s = Settings()
        if d.get("address"):
            s.address = str(d["address"]).rstrip("/")
        if d.get("token_path"):
            s.token_path = str(d["token_path"])
        if d.get("editor"):
            s.editor = str(d["editor"])
        types = d.get("allowed_mount_types")
        if types is not None:
            if not isinstance(types, (list, tuple)):
                raise ConfigError("allowed_mount_types must be a list")
            s.allowed_mount_types = [str(t) for t in types if t]
        if d.get("timeout") is not None:
            try:
                s.timeout = float(d["timeout"])
            except (TypeError, ValueError):
                raise ConfigError(f"Invalid timeout: {d['timeout']!r}")
        if d.get("verify_tls") is not None:
            s.verify_tls = bool(d["verify_tls"])
        if d.get("ca_cert"):
            s.ca_cert = str(d["ca_cert"])
        return s


def apply_environment(settings: Settings, environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Layer the standard Vault/editor environment variables over ``settings``."""
    env = os.environ if environ is None else environ
    addr = (env.get("VAULT_ADDR") or "").strip()
    if addr:
        settings.address = addr.rstrip("/")
    cacert = (env.get("VAULT_CACERT") or "").strip()
    if cacert:
        settings.ca_cert = cacert
    if (env.get("VAULT_SKIP_VERIFY") or "").strip().lower() in _TRUTHY:
        settings.verify_tls = False
    if not settings.editor:
        editor = (env.get("EDITOR") or "").strip()
        if editor:
            settings.editor = editor
    return settings


def load_settings(
    path: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Load settings from YAML (if present) and apply environment overrides.

    Args:
        path: Config file path (defaults to the user config directory)
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        Effective settings

    Raises:
        ConfigError: If the file exists but is not a valid YAML mapping
    """
    p = Path(path) if path is not None else default_config_path()
    data: Dict[str, Any] = {}
    if p.exists():
        try:
            with open(p, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except (yaml.YAMLError, OSError) as e:
            raise ConfigError(f"Could not load config {p}: {e}")
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigError(f"Config {p} must contain a mapping")
        data = raw
    return apply_environment(Settings.from_dict(data), environ)


def export_template(path: Path) -> None:
    """Write a YAML template holding the default settings."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    defaults = Settings().to_dict()
    defaults["editor"] = DEFAULT_EDITOR
    with open(p, "w", encoding="utf-8") as f:
        f.write("# vault-commander configuration\n")
        f.write("# Environment variables VAULT_ADDR, VAULT_CACERT, VAULT_SKIP_VERIFY and EDITOR\n")
        f.write("# override the values below.\n")
        yaml.dump(defaults, f, default_flow_style=False, sort_keys=False, allow_unicode=True)


def read_token(path: Path) -> str:
    """
    Read the single-line credential file.

    The last non-empty line wins.

    Raises:
        CredentialError: If the file is missing, unreadable or empty
    """
    p = Path(path).expanduser()
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as e:
        raise CredentialError(f"Unable to read credential file {p}: {e}")
    token = ""
    for line in raw.splitlines():
        if line.strip():
            token = line.strip()
    if not token:
        raise CredentialError(f"Credential file {p} is empty")
    return token


__all__ = [
    "APP_NAME",
    "DEFAULT_ADDRESS",
    "DEFAULT_EDITOR",
    "DEFAULT_MOUNT_TYPES",
    "Settings",
    "apply_environment",
    "default_config_path",
    "export_template",
    "load_settings",
    "read_token",
]
