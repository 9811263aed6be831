"""Append-only, timestamped record of user-visible events (the Log pane)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional


def _now() -> datetime:
    return datetime.now().astimezone()


def format_timestamp(t: datetime) -> str:
    """``2006-01-02 3:04:05pm (MST)``."""
    hour = t.hour % 12 or 12
    ampm = "am" if t.hour < 12 else "pm"
    tz = t.tzname() or "UTC"
    return f"{t:%Y-%m-%d} {hour}:{t:%M:%S}{ampm} ({tz})"


@dataclass(frozen=True)
class LogEntry:
    at: datetime
    message: str

    def render(self) -> str:
        return f"{format_timestamp(self.at)} {self.message}"


class ActivityLog:
    """Unbounded log; rendered oldest first so the newest entry is last."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._clock = clock or _now
        self._entries: List[LogEntry] = []

    def append(self, message: str) -> LogEntry:
        entry = LogEntry(at=self._clock(), message=str(message))
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> List[LogEntry]:
        return list(self._entries)

    @property
    def messages(self) -> List[str]:
        return [e.message for e in self._entries]

    def lines(self) -> List[str]:
        return [e.render() for e in self._entries]

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["ActivityLog", "LogEntry", "format_timestamp"]
