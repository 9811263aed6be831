"""
Secret-store collaborator.

``SecretStore`` is the boundary the browser depends on. ``HttpSecretStore``
talks to a Vault-compatible HTTP API with httpx; tests use an in-memory fake.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable
from urllib.parse import quote

import httpx

from vault_commander.core.config import Settings
from vault_commander.core.errors import (
    AccessDeniedError,
    NotFoundError,
    StoreError,
    TransportError,
)


@runtime_checkable
class SecretStore(Protocol):
    """Operations the browser needs from the backing store."""

    def list_mounts(self) -> Dict[str, str]:
        """Mount name (with trailing ``/``) -> backend type."""
        ...

    def list_children(self, path: str) -> List[str]:
        """Immediate children of ``path``; names ending in ``/`` are collections."""
        ...

    def read_value(self, path: str) -> Dict[str, Any]:
        ...

    def write_value(self, path: str, value: Dict[str, Any]) -> None:
        ...

    def delete_value(self, path: str) -> None:
        ...


def _error_detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list) and errors:
            return "; ".join(str(e) for e in errors)
    return resp.reason_phrase or f"HTTP {resp.status_code}"


class HttpSecretStore:
    """SecretStore over the Vault HTTP API (``/v1/...`` with ``X-Vault-Token``)."""

    def __init__(
        self,
        *,
        address: str,
        token: str,
        timeout: float = 30.0,
        verify: Any = True,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=f"{address.rstrip('/')}/v1/",
            headers={"X-Vault-Token": token},
            timeout=timeout,
            verify=verify,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings, token: str) -> "HttpSecretStore":
        verify: Any = settings.verify_tls
        if verify and settings.ca_cert:
            verify = settings.ca_cert
        return cls(address=settings.address, token=token, timeout=settings.timeout, verify=verify)

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            resp = self._client.request(method, quote(path.lstrip("/"), safe="/"), **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path}: {e}", path=path)
        if resp.status_code in (401, 403):
            raise AccessDeniedError(f"{method} {path}: {_error_detail(resp)}", path=path)
        return resp

    @staticmethod
    def _json(resp: httpx.Response, path: str) -> Dict[str, Any]:
        if resp.status_code == 204 or not resp.content:
            return {}
        try:
            body = resp.json()
        except ValueError as e:
            raise TransportError(f"Invalid response for {path}: {e}", path=path)
        if not isinstance(body, dict):
            raise TransportError(f"Invalid response for {path}: expected an object", path=path)
        return body

    def _check(self, method: str, path: str, resp: httpx.Response) -> None:
        if resp.is_success:
            return
        raise StoreError(f"{method} {path}: {_error_detail(resp)}", path=path)

    def list_mounts(self) -> Dict[str, str]:
        resp = self._request("GET", "sys/mounts")
        self._check("GET", "sys/mounts", resp)
        body = self._json(resp, "sys/mounts")
        table = body.get("data") if isinstance(body.get("data"), dict) else body
        mounts: Dict[str, str] = {}
        for name, info in table.items():
            if isinstance(info, dict) and "type" in info:
                mounts[str(name)] = str(info.get("type") or "")
        return mounts

    def list_children(self, path: str) -> List[str]:
        resp = self._request("LIST", path)
        if resp.status_code == 404:
            return []
        self._check("LIST", path, resp)
        data = self._json(resp, path).get("data") or {}
        keys = data.get("keys") if isinstance(data, dict) else None
        if not isinstance(keys, list):
            return []
        return [str(k) for k in keys]

    def read_value(self, path: str) -> Dict[str, Any]:
        resp = self._request("GET", path)
        if resp.status_code == 404:
            raise NotFoundError(f"No value at {path}", path=path)
        self._check("GET", path, resp)
        data = self._json(resp, path).get("data")
        if data is None:
            raise NotFoundError(f"No value at {path}", path=path)
        if not isinstance(data, dict):
            raise TransportError(f"Value at {path} is not a mapping", path=path)
        return data

    def write_value(self, path: str, value: Dict[str, Any]) -> None:
        resp = self._request("POST", path, json=value)
        self._check("POST", path, resp)

    def delete_value(self, path: str) -> None:
        resp = self._request("DELETE", path)
        self._check("DELETE", path, resp)


__all__ = ["SecretStore", "HttpSecretStore"]
