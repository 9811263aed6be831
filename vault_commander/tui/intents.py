"""
Handler results.

Key handlers never touch the view table themselves; they return one or more
intents and ``NavigationController.apply`` performs them in order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class Focus:
    """Focus an existing view and (optionally) swap the legend."""

    view: str
    legend: Optional[str] = None


@dataclass(frozen=True)
class OpenView:
    """Create an ephemeral view, fill it and focus it."""

    view: str
    text: str = ""
    cursor: Tuple[int, int] = (0, 0)
    label: str = ""
    legend: Optional[str] = None


@dataclass(frozen=True)
class CloseView:
    """Destroy an ephemeral view, then focus ``focus`` (if given)."""

    view: str
    focus: Optional[str] = None
    legend: Optional[str] = None


@dataclass(frozen=True)
class ReplaceBuffer:
    view: str
    text: str


@dataclass(frozen=True)
class ListKeys:
    """Fill ``main`` with every leaf below ``mount`` and focus it."""

    mount: str


@dataclass(frozen=True)
class Home:
    """
    Destroy every ephemeral view and focus ``main``.

    With ``refresh`` the key listing of the mount highlighted in ``side`` is
    rebuilt as well.
    """

    refresh: bool = True


@dataclass(frozen=True)
class Quit:
    pass


INTENT_TYPES = (Focus, OpenView, CloseView, ReplaceBuffer, ListKeys, Home, Quit)
Intent = Union[Focus, OpenView, CloseView, ReplaceBuffer, ListKeys, Home, Quit]
HandlerResult = Union[None, Intent, Sequence[Intent]]


__all__ = [
    "Focus",
    "OpenView",
    "CloseView",
    "ReplaceBuffer",
    "ListKeys",
    "Home",
    "Quit",
    "Intent",
    "INTENT_TYPES",
    "HandlerResult",
]
