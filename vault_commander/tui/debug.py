"""Debug event sink for the browser.

Enabled by ``VAULT_COMMANDER_TUI_DEBUG``. Events are kept in memory and, when
``VAULT_COMMANDER_TUI_DEBUG_FILE`` names a file, appended to it as NDJSON.
"""

import json
import os
import threading
import time
from typing import Callable, Optional, TextIO


ENV_ENABLE = "VAULT_COMMANDER_TUI_DEBUG"
ENV_FILE = "VAULT_COMMANDER_TUI_DEBUG_FILE"


class DebugLogger:
    """Thread-safe debug event logger with optional file streaming.

    Best-effort throughout: nothing here ever raises into the UI.
    """

    def __init__(self, focused: Optional[Callable[[], Optional[str]]] = None) -> None:
        """Initialize debug logger.

        Args:
            focused: Returns the name of the focused view, recorded with each event
        """
        self._focused = focused
        self._debug_events: list[dict[str, object]] = []
        self._debug_file_path: Optional[str] = None
        self._debug_file: Optional[TextIO] = None
        self._debug_file_lock = threading.Lock()

    @staticmethod
    def enabled() -> bool:
        return bool(os.getenv(ENV_ENABLE))

    def log(self, *, event: str, data: Optional[dict[str, object]] = None) -> None:
        """Record a debug event.

        Args:
            event: Event name/type
            data: Optional event data dictionary
        """
        try:
            if not self.enabled():
                return
            view = self._focused() if self._focused is not None else None
            payload: dict[str, object] = {
                "t": float(time.time()),
                "event": str(event),
                "view": str(view or ""),
                "data": data or {},
            }
            self._debug_events.append(payload)
            # Keep memory bounded during long sessions.
            if len(self._debug_events) > 500:
                self._debug_events = self._debug_events[-250:]

            debug_file_path = os.getenv(ENV_FILE)
            if debug_file_path:
                with self._debug_file_lock:
                    try:
                        if self._debug_file is None or self._debug_file_path != debug_file_path:
                            self._close_locked()
                            self._debug_file_path = debug_file_path
                            self._debug_file = open(debug_file_path, "a", encoding="utf-8", buffering=1)
                        line = json.dumps(payload, ensure_ascii=False, separators=(",", ":"), default=str)
                        self._debug_file.write(line + "\n")
                        self._debug_file.flush()
                    except Exception:
                        return
        except Exception:
            return

    def _close_locked(self) -> None:
        try:
            if self._debug_file is not None:
                self._debug_file.flush()
                self._debug_file.close()
        except Exception:
            pass
        finally:
            self._debug_file = None
            self._debug_file_path = None

    def close_debug_file(self) -> None:
        """Best-effort: flush/close debug file handle (if open)."""
        try:
            with self._debug_file_lock:
                self._close_locked()
        except Exception:
            return

    @property
    def debug_events(self) -> list[dict[str, object]]:
        """Get the list of debug events (read-only)."""
        return self._debug_events.copy()


__all__ = ["DebugLogger", "ENV_ENABLE", "ENV_FILE"]
