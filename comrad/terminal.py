"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle and alternate-screen switching.
Also brackets external full-screen programs (pager, tldr) with a handover
that gives the caller's terminal state back and takes it again afterwards.
"""

from __future__ import annotations

import contextlib
import logging
import os
import termios
import tty

logger = logging.getLogger(__name__)

ENTER_TUI_SEQUENCE = b"\x1b[?1049h\x1b[?25l\x1b[H\x1b[2J"
LEAVE_TUI_SEQUENCE = b"\x1b[0m\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Manage terminal mode transitions for one interactive session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._tui_active = False

    @property
    def tui_active(self) -> bool:
        return self._tui_active

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_TUI_SEQUENCE)
        self._tui_active = True

    def disable_tui_mode(self) -> None:
        """Restore the caller's terminal state and main screen buffer."""
        os.write(self.stdout_fd, LEAVE_TUI_SEQUENCE)
        self._tui_active = False
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()

    @contextlib.contextmanager
    def suspended(self):
        """Temporarily hand the terminal to an external program.

        TUI mode is restored on the way out even when the body raises.
        """
        logger.debug("suspending tui mode")
        self.disable_tui_mode()
        try:
            yield
        finally:
            self.enable_tui_mode()
            logger.debug("resumed tui mode")
