"""
Error taxonomy for vault-commander.

Two families matter to callers:

- ``FatalError``: the process cannot continue (bad credential, broken config,
  external editor failure, handler invariant violated). The TUI exits with a
  non-zero status.
- ``StoreError``: a single store call failed. These are recoverable; handlers
  report them in the activity log and leave the UI navigable.
"""

from __future__ import annotations


class VaultCommanderError(Exception):
    """Base class for all vault-commander errors."""


class FatalError(VaultCommanderError):
    """Unrecoverable error; the process must exit."""


class CredentialError(FatalError):
    """The credential file is missing, unreadable or empty."""


class ConfigError(FatalError):
    """The configuration file exists but cannot be used."""


class EditorError(FatalError):
    """The external editor hand-off failed."""


STORE_NOT_FOUND = "not_found"
STORE_ACCESS_DENIED = "access_denied"
STORE_TRANSPORT = "transport"


class StoreError(VaultCommanderError):
    """A secret-store call failed (recoverable)."""

    kind: str = STORE_TRANSPORT

    def __init__(self, message: str, *, path: str = "", kind: str | None = None) -> None:
        super().__init__(message)
        self.path = path
        if kind is not None:
            self.kind = kind


class NotFoundError(StoreError):
    kind = STORE_NOT_FOUND


class AccessDeniedError(StoreError):
    kind = STORE_ACCESS_DENIED


class TransportError(StoreError):
    kind = STORE_TRANSPORT


class SecretParseError(ValueError):
    """An edit buffer does not hold a JSON object."""


__all__ = [
    "VaultCommanderError",
    "FatalError",
    "CredentialError",
    "ConfigError",
    "EditorError",
    "StoreError",
    "NotFoundError",
    "AccessDeniedError",
    "TransportError",
    "SecretParseError",
    "STORE_NOT_FOUND",
    "STORE_ACCESS_DENIED",
    "STORE_TRANSPORT",
]
