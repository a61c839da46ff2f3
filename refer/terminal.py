"""Terminal session lifecycle and the draw/poll loop.

Owns raw-mode acquisition, alternate-screen switching, and mouse capture.
Release runs exactly once on every exit path; a failing cleanup step is
logged and the remaining steps still run.
"""

from __future__ import annotations

import logging
import os
import termios
import tty
from collections.abc import Callable

from .input import InputEvent, read_event
from .resources import Resources, ResourcesView

logger = logging.getLogger(__name__)

DEFAULT_TICK_MS = 16

ENTER_ALTERNATE_SCREEN = b"\x1b[?1049h"
LEAVE_ALTERNATE_SCREEN = b"\x1b[?1049l"
HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
ENABLE_MOUSE_CAPTURE = b"\x1b[?1000h\x1b[?1002h\x1b[?1006h"
DISABLE_MOUSE_CAPTURE = b"\x1b[?1000l\x1b[?1002l\x1b[?1006l"


class TerminalError(RuntimeError):
    """Terminal control state could not be acquired."""


class TerminalSession:
    """Raw-mode terminal session; use as a context manager."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Save tty attributes and switch stdin to raw mode."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._released = False
        self._alternate_screen = False
        self._mouse_capture = False
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
            tty.setraw(stdin_fd, termios.TCSAFLUSH)
        except (termios.error, OSError) as exc:
            raise TerminalError(f"cannot enable raw mode: {exc}") from exc
        logger.debug("raw mode enabled on fd %d", stdin_fd)

    def __enter__(self) -> TerminalSession:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()

    def _enter_screen(self) -> None:
        try:
            os.write(self.stdout_fd, ENTER_ALTERNATE_SCREEN + HIDE_CURSOR)
            self._alternate_screen = True
            os.write(self.stdout_fd, ENABLE_MOUSE_CAPTURE)
            self._mouse_capture = True
        except OSError as exc:
            raise TerminalError(f"cannot enter alternate screen: {exc}") from exc

    def run(
        self,
        resources: Resources,
        dispatch: Callable[[InputEvent], bool],
        render: Callable[[ResourcesView], None],
        tick_ms: int = DEFAULT_TICK_MS,
    ) -> None:
        """Poll, dispatch, and redraw until ``dispatch`` asks to quit.

        ``render`` runs once per tick whether or not an event arrived.
        """
        self._enter_screen()
        view = resources.view()
        logger.debug("session loop started (tick=%dms)", tick_ms)
        while True:
            event = read_event(self.stdin_fd, timeout_ms=tick_ms)
            if event is not None and dispatch(event):
                logger.debug("quit requested")
                return
            render(view)

    def restore(self) -> None:
        """Return the terminal to its original state; safe to call repeatedly."""
        if self._released:
            return
        self._released = True
        steps: list[tuple[str, Callable[[], None]]] = []
        if self._alternate_screen:
            steps.append(("leave alternate screen", lambda: os.write(self.stdout_fd, LEAVE_ALTERNATE_SCREEN)))
        if self._mouse_capture:
            steps.append(("disable mouse capture", lambda: os.write(self.stdout_fd, DISABLE_MOUSE_CAPTURE)))
        steps.append(
            (
                "disable raw mode",
                lambda: termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state),
            )
        )
        steps.append(("show cursor", lambda: os.write(self.stdout_fd, SHOW_CURSOR)))
        for label, step in steps:
            try:
                step()
            except (termios.error, OSError) as exc:
                logger.warning("terminal cleanup step %r failed: %s", label, exc)
        self._alternate_screen = False
        self._mouse_capture = False
        logger.debug("terminal restored")
