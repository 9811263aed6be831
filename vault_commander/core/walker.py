"""
Recursive key enumeration and mount filtering.

Paths are joined by plain concatenation (``parent + child``); nothing is
normalized, so a child listed as ``"/x"`` under ``"kv/"`` yields ``"kv//x"``
exactly as the listing API reports it.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, List, Optional

from vault_commander.core.errors import StoreError
from vault_commander.core.store import SecretStore


ListingErrorHook = Callable[[str, StoreError], None]


def is_collection(path: str) -> bool:
    return path.endswith("/")


def iter_leaf_paths(
    store: SecretStore,
    root: str,
    *,
    on_error: Optional[ListingErrorHook] = None,
) -> Iterator[str]:
    """
    Lazily yield every leaf path below ``root``, depth-first in listing order.

    A listing failure prunes that branch: it contributes no leaves and is only
    reported to ``on_error`` (if given), never raised.
    """
    try:
        children = store.list_children(root)
    except StoreError as e:
        if on_error is not None:
            on_error(root, e)
        return
    for child in children or ():
        full = root + child
        if is_collection(child):
            yield from iter_leaf_paths(store, full, on_error=on_error)
        else:
            yield full


def expand_keys(
    store: SecretStore,
    root: str,
    *,
    on_error: Optional[ListingErrorHook] = None,
) -> List[str]:
    """Materialize ``iter_leaf_paths`` into a list."""
    return list(iter_leaf_paths(store, root, on_error=on_error))


def mount_is_eligible(store: SecretStore, name: str, mount_type: str, allowed_types: Iterable[str]) -> bool:
    if mount_type not in set(allowed_types):
        return False
    try:
        store.list_children(name)
    except StoreError:
        return False
    return True


def eligible_mounts(store: SecretStore, allowed_types: Iterable[str]) -> List[str]:
    """
    Mounts to offer in the side pane, sorted by name.

    A mount is shown only when its type is allowed and listing its root
    succeeds. Errors from ``list_mounts`` itself propagate.
    """
    allowed = list(allowed_types)
    mounts = store.list_mounts()
    return sorted(
        name
        for name, mount_type in mounts.items()
        if mount_is_eligible(store, name, mount_type, allowed)
    )


__all__ = [
    "expand_keys",
    "iter_leaf_paths",
    "is_collection",
    "eligible_mounts",
    "mount_is_eligible",
]
