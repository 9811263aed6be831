"""
Edit sessions for the secret editor.

A session exists only while a create or edit is in flight. It is a tagged
variant:

  EditingExisting(path, snapshot)  -- editing a secret that was read from the
                                      store; ``snapshot`` is the value seen
                                      when editing began and guards the save
                                      against concurrent writers.
  CreatingNew(path, parent)        -- writing a brand-new key; no snapshot,
                                      no concurrency check.

Buffers are plain text holding a JSON object.
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple, Union

from vault_commander.core.errors import SecretParseError


MODE_EDITING = "Editing"
MODE_WRITING = "Writing"

INDENT = 4


@dataclass(frozen=True)
class EditingExisting:
    path: str
    snapshot: Dict[str, Any] = field(default_factory=dict)

    mode = MODE_EDITING

    @staticmethod
    def start(path: str, value: Dict[str, Any]) -> "EditingExisting":
        return EditingExisting(path=path, snapshot=copy.deepcopy(value))


@dataclass(frozen=True)
class CreatingNew:
    path: str
    parent: str = ""

    mode = MODE_WRITING


EditSession = Union[EditingExisting, CreatingNew]


def render_value(value: Dict[str, Any]) -> str:
    """Indented JSON dump used both for viewing and to seed the edit buffer."""
    return json.dumps(value, indent=INDENT, sort_keys=True, ensure_ascii=False)


def parse_buffer(text: str) -> Dict[str, Any]:
    """
    Parse an edit buffer into a string-keyed mapping.

    Raises:
        SecretParseError: If the text is not valid JSON or not a JSON object
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SecretParseError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SecretParseError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def values_equal(a: Any, b: Any) -> bool:
    """
    Deep comparison used by the stale-write guard.

    Mappings compare regardless of key order; everything else must match in
    both type and value (``1``, ``1.0`` and ``True`` are all different).
    """
    if type(a) is not type(b):
        return False
    if isinstance(a, dict):
        if a.keys() != b.keys():
            return False
        return all(values_equal(a[k], b[k]) for k in a)
    if isinstance(a, (list, tuple)):
        return len(a) == len(b) and all(values_equal(x, y) for x, y in zip(a, b))
    return a == b


def parent_collection(path: str) -> str:
    """
    Collection holding ``path``, without its trailing separator.

    ``"kv/app/db"`` -> ``"kv/app"``; a mount row such as ``"kv/"`` -> ``"kv"``.
    """
    head, sep, _ = path.rpartition("/")
    return head if sep else path


def new_key_seed(path: str) -> Tuple[str, int]:
    """Prompt text and caret column for adding a key next to ``path``."""
    parent = parent_collection(path)
    text = parent + "/"
    return text, len(text)


__all__ = [
    "MODE_EDITING",
    "MODE_WRITING",
    "EditingExisting",
    "CreatingNew",
    "EditSession",
    "render_value",
    "parse_buffer",
    "values_equal",
    "parent_collection",
    "new_key_seed",
]
