from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional, Tuple

from vault_commander.core.errors import NotFoundError, StoreError


class FakeStore:
    """
    In-memory secret store for tests.

    Leaves are kept as ``{full path: value}``; listings are derived from them
    in insertion order unless ``listings`` pins a path to an explicit answer.
    ``fail`` maps ``(operation, path)`` to the exception that call raises.
    Every call is recorded in ``calls``.
    """

    def __init__(
        self,
        secrets: Optional[Dict[str, Dict[str, Any]]] = None,
        *,
        mounts: Optional[Dict[str, str]] = None,
        listings: Optional[Dict[str, List[str]]] = None,
    ) -> None:
        self.secrets: Dict[str, Dict[str, Any]] = copy.deepcopy(secrets or {})
        self.mounts: Dict[str, str] = dict(mounts or {})
        self.listings: Dict[str, List[str]] = dict(listings or {})
        self.fail: Dict[Tuple[str, str], Exception] = {}
        self.calls: List[Tuple[str, str]] = []
        self.closed = False

    def _maybe_fail(self, op: str, path: str) -> None:
        self.calls.append((op, path))
        err = self.fail.get((op, path))
        if err is not None:
            raise err

    def close(self) -> None:
        self.closed = True

    def calls_to(self, op: str) -> List[str]:
        return [p for o, p in self.calls if o == op]

    def list_mounts(self) -> Dict[str, str]:
        self._maybe_fail("list_mounts", "")
        return dict(self.mounts)

    def list_children(self, path: str) -> List[str]:
        self._maybe_fail("list", path)
        if path in self.listings:
            return list(self.listings[path])
        children: List[str] = []
        for leaf in self.secrets:
            if not leaf.startswith(path) or leaf == path:
                continue
            rest = leaf[len(path):]
            head, sep, _ = rest.partition("/")
            child = head + sep
            if child not in children:
                children.append(child)
        return children

    def read_value(self, path: str) -> Dict[str, Any]:
        self._maybe_fail("read", path)
        if path not in self.secrets:
            raise NotFoundError(f"No secret at {path}", path=path)
        return copy.deepcopy(self.secrets[path])

    def write_value(self, path: str, value: Dict[str, Any]) -> None:
        self._maybe_fail("write", path)
        self.secrets[path] = copy.deepcopy(value)

    def delete_value(self, path: str) -> None:
        self._maybe_fail("delete", path)
        if path not in self.secrets:
            raise StoreError(f"Unable to delete {path}", path=path)
        del self.secrets[path]


def sample_store() -> FakeStore:
    return FakeStore(
        {
            "secret/app/db": {"user": "admin", "password": "hunter2"},
            "secret/app/api": {"token": "abc"},
            "secret/top": {"a": 1},
        },
        mounts={"secret/": "generic", "sys/": "system", "cubbyhole/": "cubbyhole"},
    )


class StaticEditor:
    """Stands in for ``ExternalEditor``: returns ``result`` or raises ``error``."""

    def __init__(self, result: str = "", error: Optional[Exception] = None) -> None:
        self.result = result
        self.error = error
        self.seen: List[str] = []

    def edit(self, text: str) -> str:
        self.seen.append(text)
        if self.error is not None:
            raise self.error
        return self.result


def started(store=None, *, width: int = 100, height: int = 40, mount: Optional[str] = None, editor=None):
    """Controller + workflow with the full keymap, already started."""
    from vault_commander.tui.navigation import NavigationController
    from vault_commander.tui.workflow import EditWorkflow, install_bindings

    store = store if store is not None else sample_store()
    nav = NavigationController(store)
    workflow = EditWorkflow(store, editor=editor)
    install_bindings(nav, workflow)
    nav.start(width, height, mount)
    return nav, workflow


def type_text(nav, text: str) -> None:
    for ch in text:
        nav.dispatch("space" if ch == " " else ch, ch)
