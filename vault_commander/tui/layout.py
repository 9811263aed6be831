"""Screen geometry for permanent panes and ephemeral prompts."""

from __future__ import annotations

from typing import Dict

from vault_commander.tui.views import (
    ADD_KEY_PROMPT,
    EDIT_SECRET,
    LEGEND,
    LOG,
    MAIN,
    SECRET,
    SIDE,
    Rect,
)


SIDE_WIDTH = 30
LEGEND_WIDTH = 24
BOTTOM_HEIGHT = 9

# Prompt frames are sized around the path they mention.
PROMPT_PADDING = 19
ADD_PROMPT_EXTRA = 5


def permanent_rects(width: int, height: int) -> Dict[str, Rect]:
    max_x, max_y = width, height
    return {
        SIDE: Rect(1, 1, SIDE_WIDTH, max_y - BOTTOM_HEIGHT - 1),
        MAIN: Rect(SIDE_WIDTH, 1, max_x - 1, max_y - BOTTOM_HEIGHT - 1),
        LEGEND: Rect(max_x - LEGEND_WIDTH, max_y - BOTTOM_HEIGHT, max_x - 1, max_y - 1),
        LOG: Rect(1, max_y - BOTTOM_HEIGHT, max_x - LEGEND_WIDTH - 1, max_y - 1),
    }


def content_rect(width: int, height: int) -> Rect:
    """Frameless overlay covering side and main (``secret`` / ``editsecret``)."""
    return Rect(-1, -1, width, height - BOTTOM_HEIGHT)


def prompt_rect(name: str, width: int, height: int, path: str) -> Rect:
    """Centered three-row frame sized around ``path``."""
    span = len(path) + PROMPT_PADDING
    if name == ADD_KEY_PROMPT:
        span += ADD_PROMPT_EXTRA
    half = span // 2
    mid_x, mid_y = width // 2, height // 2
    return Rect(mid_x - half, mid_y, mid_x + half, mid_y + 2)


def ephemeral_rect(name: str, width: int, height: int, path: str = "") -> Rect:
    if name in (SECRET, EDIT_SECRET):
        return content_rect(width, height)
    return prompt_rect(name, width, height, path)


__all__ = [
    "permanent_rects",
    "content_rect",
    "prompt_rect",
    "ephemeral_rect",
    "SIDE_WIDTH",
    "LEGEND_WIDTH",
    "BOTTOM_HEIGHT",
]
