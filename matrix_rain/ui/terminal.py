# matrix_rain/ui/terminal.py
"""
Keyboard input and terminal size.

KeyReader puts stdin into cbreak mode for the lifetime of a ``with`` block
and restores the saved settings on the way out, whatever the exit path.
"""

from __future__ import annotations

import os
import select
import sys
import time
from shutil import get_terminal_size
from typing import Optional, TextIO, Tuple

from ..errors import TerminalError

if os.name == "nt":
    import msvcrt
else:
    import termios
    import tty


def terminal_size() -> Tuple[int, int]:
    """Return ``(width, height)`` in character cells."""
    size = get_terminal_size(fallback=(80, 24))
    return size.columns, size.lines


class KeyReader:
    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream or sys.stdin
        self._fd: Optional[int] = None
        self._saved = None

    def __enter__(self) -> "KeyReader":
        if not self.stream.isatty():
            raise TerminalError("standard input is not a terminal")
        if os.name != "nt":
            self._fd = self.stream.fileno()
            try:
                self._saved = termios.tcgetattr(self._fd)
                tty.setcbreak(self._fd)
            except termios.error as exc:
                raise TerminalError(f"cannot switch terminal to cbreak mode: {exc}") from exc
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._saved is not None and self._fd is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)
            self._saved = None

    def poll(self, timeout: float) -> Optional[str]:
        """
        Wait at most ``timeout`` seconds for a key press.
        Returns the key, or None if nothing was pressed in time.
        """
        timeout = max(0.0, timeout)
        if os.name == "nt":
            return self._poll_windows(timeout)

        if self._fd is None:
            raise TerminalError("KeyReader used outside of its context")
        ready, _, _ = select.select([self._fd], [], [], timeout)
        if not ready:
            return None
        data = os.read(self._fd, 1)
        if not data:
            raise TerminalError("standard input was closed")
        return data.decode("utf-8", errors="replace")

    def _poll_windows(self, timeout: float) -> Optional[str]:
        deadline = time.monotonic() + timeout
        while True:
            if msvcrt.kbhit():
                return msvcrt.getwch()
            if time.monotonic() >= deadline:
                return None
            time.sleep(0.01)
