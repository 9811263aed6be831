"""External editor hand-off for the edit buffer.

The buffer is written to a temporary file and the configured editor runs on
it while the terminal is released. Any failure here ends the session: a
non-zero exit, a launch error, or an unmodified file raise ``EditorError``.
"""

from __future__ import annotations

import contextlib
import os
import shlex
import subprocess
import tempfile
from typing import Callable, ContextManager, List, Optional

from vault_commander.core.errors import EditorError


TEMP_PREFIX = "vault-commander-"

Runner = Callable[[List[str]], "subprocess.CompletedProcess"]


def _run(argv: List[str]) -> "subprocess.CompletedProcess":
    return subprocess.run(argv, check=False)


class ExternalEditor:
    def __init__(
        self,
        command: str,
        *,
        suspend: Optional[Callable[[], ContextManager]] = None,
        runner: Optional[Runner] = None,
    ) -> None:
        self.command = command
        self.suspend = suspend or contextlib.nullcontext
        self.runner = runner or _run

    def argv(self, path: str) -> List[str]:
        cmd = shlex.split(self.command)
        if not cmd:
            raise EditorError("No editor configured")
        return [*cmd, path]

    def edit(self, text: str) -> str:
        """Round-trip ``text`` through the editor.

        Args:
            text: Current buffer contents

        Returns:
            The edited file contents with surrounding whitespace removed

        Raises:
            EditorError: If the editor fails or leaves the file unmodified
        """
        fd, path = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            before = os.stat(path).st_mtime_ns
            argv = self.argv(path)
            with self.suspend():
                try:
                    result = self.runner(argv)
                except OSError as e:
                    raise EditorError(f"Failed to launch editor: {e}") from e
            if result.returncode != 0:
                raise EditorError(f"Editor exited with status {result.returncode}")
            if os.stat(path).st_mtime_ns <= before:
                raise EditorError(f"{path} was not modified")
            with open(path, "r", encoding="utf-8") as f:
                return f.read().strip()
        finally:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(path)


__all__ = ["ExternalEditor", "TEMP_PREFIX"]
