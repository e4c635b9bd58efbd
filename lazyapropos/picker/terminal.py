"""Terminal control for picker sessions.

The picker draws on the alternate screen with the cursor hidden; the caller's
tty settings are captured up front and put back when the session ends.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

ENTER_SCREEN = b"\x1b[?1049h\x1b[?25l"
LEAVE_SCREEN = b"\x1b[?25h\x1b[?1049l"
HOME = "\x1b[H"
CLEAR_EOL = "\x1b[K"
CLEAR_BELOW = "\x1b[J"


class TerminalController:
    """Raw-mode and screen switching for one stdin/stdout pair."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_attrs = termios.tcgetattr(stdin_fd)

    def _write(self, data: bytes) -> None:
        os.write(self.stdout_fd, data)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        self._write(ENTER_SCREEN)

    def disable_tui_mode(self) -> None:
        self._write(LEAVE_SCREEN)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_attrs)

    def write_frame(self, rows: list[str]) -> None:
        """Repaint from the top-left; each row clears its own tail."""
        body = "\r\n".join(row + CLEAR_EOL for row in rows)
        self._write(f"{HOME}{body}{CLEAR_BELOW}".encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self):
        self.enable_tui_mode()
        try:
            yield self
        finally:
            self.disable_tui_mode()


__all__ = ["TerminalController"]
