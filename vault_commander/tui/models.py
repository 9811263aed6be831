"""Legend texts and log message templates shared by the TUI modules."""

from __future__ import annotations


SIDE_LEGEND = "↑ - cursor up\n↓ - cursor down\nTab - switch windows\nRet - select mount"
MAIN_LEGEND = "Tab - switch windows\nRet - view secret\na - add secret\nd - delete secret\nSpace - page down"
SECRET_LEGEND = "e - edit secret\nq - quit view"
EDIT_LEGEND = "C-l - Open in $EDITOR\nC-x - quit don't save\nC-s - save"

MSG_VIEWING_MOUNT = "Viewing secrets on {mount} mount"
MSG_VIEWING_SECRET = "Viewing secret contents of {path}"
MSG_EDIT_STARTED = "{mode} secret contents of {path}"
MSG_EDIT_CANCELED = "Canceled edit of {path}."
MSG_DELETE_CANCELED = "Canceled delete of {path}."
MSG_DELETED = "Deleted secret {path}"
MSG_WROTE = "Wrote secret contents to {path}"
MSG_WRITE_CANCELLED = "ERROR: Write cancelled"
MSG_STALE_WRITE = "ERROR: Value of secret changed while editing. Write cancelled."
MSG_EDITOR_RELOADED = "Reloaded {path} from external editor"

DELETE_PROMPT = "Delete {path}? (y/n)"
SAVE_PROMPT_TEXT = "Overwrite {path}? (y/n)"


__all__ = [
    "SIDE_LEGEND",
    "MAIN_LEGEND",
    "SECRET_LEGEND",
    "EDIT_LEGEND",
    "MSG_VIEWING_MOUNT",
    "MSG_VIEWING_SECRET",
    "MSG_EDIT_STARTED",
    "MSG_EDIT_CANCELED",
    "MSG_DELETE_CANCELED",
    "MSG_DELETED",
    "MSG_WROTE",
    "MSG_WRITE_CANCELLED",
    "MSG_STALE_WRITE",
    "MSG_EDITOR_RELOADED",
    "DELETE_PROMPT",
    "SAVE_PROMPT_TEXT",
]
