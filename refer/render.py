"""Frame renderer for the file list, view panel, and entry prompt.

Reads state through a ``ResourcesView`` only and writes one fully composed
ANSI frame per call.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial

from .ansi import display_width, fit_ansi_line
from .resources import ResourcesView
from .state import FileListState, FocusState, TextEntryState
from .ui_theme import DEFAULT_THEME, UITheme

ENTRY_PROMPT = "open: "
KEY_HINTS: tuple[tuple[str, str], ...] = (
    ("Ctrl+N", "open file"),
    ("←/→", "focus"),
    ("Ctrl+Q", "quit"),
)
MIN_LEFT_WIDTH = 12


@dataclass(frozen=True)
class FrameSize:
    columns: int
    lines: int


def terminal_frame_size(fd: int) -> FrameSize:
    """Size of the terminal behind ``fd``, or 80x24 when it is not a tty."""
    try:
        term = os.get_terminal_size(fd)
    except OSError:
        return FrameSize(columns=80, lines=24)
    return FrameSize(columns=max(1, term.columns), lines=max(2, term.lines))


def left_panel_width(columns: int) -> int:
    """Width of the file list column, leaving room for a divider and the view."""
    if columns < MIN_LEFT_WIDTH + 2:
        return max(1, columns // 2)
    return max(MIN_LEFT_WIDTH, min(columns // 3, columns - MIN_LEFT_WIDTH - 1))


def _hint_line(hints: tuple[tuple[str, str], ...], theme: UITheme) -> str:
    return "  ".join(
        f"{theme.hint_key}{key}{theme.reset} {theme.hint_dim}{label}{theme.reset}" for key, label in hints
    )


def _entry_line(text: str, width: int, theme: UITheme) -> str:
    # Keep the tail of long input visible next to the cursor.
    room = max(0, width - len(ENTRY_PROMPT) - 1)
    while text and display_width(text) > room:
        text = text[1:]
    return f"{theme.entry_prompt}{ENTRY_PROMPT}{theme.reset}{text}{theme.entry_cursor} {theme.reset}"


def _title_bar(focus, theme: UITheme) -> str:
    parts: list[str] = []
    for region in focus.navigation:
        label = f" {region.capitalize()} "
        if focus.is_focused(region):
            parts.append(f"{theme.reverse}{label}{theme.reset}")
        else:
            parts.append(f"{theme.panel_title}{label}{theme.reset}")
    return "".join(parts)


def compose_frame(resources: ResourcesView, size: FrameSize, theme: UITheme = DEFAULT_THEME) -> list[str]:
    """Return the frame rows for ``size`` without writing anything."""
    focus = resources.get(FocusState)
    entry = resources.get(TextEntryState)
    files = resources.get(FileListState)
    names = files.names
    width = size.columns
    body_rows = max(0, size.lines - 2)
    left_width = left_panel_width(width)
    right_width = max(0, width - left_width - 1)

    visible = names[-body_rows:] if body_rows else ()
    view_lines: list[str] = []
    latest = files.last
    if latest is not None:
        view_lines.append(f"{theme.view_heading}{latest}{theme.reset}")
        count = len(names)
        view_lines.append(f"{theme.hint_dim}{count} file{'s' if count != 1 else ''} open{theme.reset}")
    else:
        view_lines.append(f"{theme.hint_dim}no files open{theme.reset}")

    rows = [fit_ansi_line(_title_bar(focus, theme), width)]
    for row in range(body_rows):
        if row < len(visible):
            name = visible[row]
            style = theme.file_latest if row == len(visible) - 1 else theme.file_name
            left = f"{style}{name}{theme.reset}"
        else:
            left = ""
        right = view_lines[row] if row < len(view_lines) else ""
        if right_width:
            rows.append(
                f"{fit_ansi_line(left, left_width)}{theme.divider}│{theme.reset}"
                f"{fit_ansi_line(right, right_width)}"
            )
        else:
            rows.append(fit_ansi_line(left, width))

    if entry:
        rows.append(fit_ansi_line(_entry_line(entry.text, width, theme), width))
    else:
        rows.append(fit_ansi_line(_hint_line(KEY_HINTS, theme), width))
    return rows


class FrameRenderer:
    """Render callback handed to ``TerminalSession.run``."""

    def __init__(
        self,
        stdout_fd: int,
        theme: UITheme = DEFAULT_THEME,
        size_provider: Callable[[], FrameSize] | None = None,
    ) -> None:
        self.stdout_fd = stdout_fd
        self.theme = theme
        self.size_provider = size_provider or partial(terminal_frame_size, stdout_fd)

    def __call__(self, resources: ResourcesView) -> None:
        rows = compose_frame(resources, self.size_provider(), self.theme)
        frame = "\033[H" + "\r\n".join(rows) + "\033[J"
        os.write(self.stdout_fd, frame.encode("utf-8", errors="replace"))
