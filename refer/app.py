"""Runtime composition for refer.

Builds the resource registry, wires the dispatcher and renderer into a
terminal session, and runs it under the crash reporter.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from .config import FocusLayout, load_config, load_focus_layout, load_theme_name, load_tick_ms
from .crash import run_guarded
from .input import InputDispatcher
from .render import FrameRenderer
from .resources import MissingResourceError, Resources
from .state import FileListState, FocusState, LaunchArgs, TextEntryState
from .terminal import TerminalSession
from .ui_theme import resolve_theme

logger = logging.getLogger(__name__)

REQUIRED_RESOURCES: tuple[type, ...] = (LaunchArgs, FocusState, TextEntryState, FileListState)


def build_resources(files: Sequence[str], layout: FocusLayout | None = None) -> Resources:
    """Populate every resource the dispatcher and renderer may look up."""
    layout = layout if layout is not None else FocusLayout()
    resources = Resources()
    resources.insert(LaunchArgs(tuple(files)))
    resources.insert(FocusState(navigation=layout.navigation, entry=layout.entry))
    resources.insert(TextEntryState())
    resources.insert(FileListState.from_names(files))
    missing = [cls.__name__ for cls in REQUIRED_RESOURCES if cls not in resources]
    if missing:
        raise MissingResourceError(f"resources not initialized: {', '.join(missing)}")
    return resources


def run_app(
    files: Sequence[str],
    *,
    theme_name: str | None = None,
    tick_ms: int | None = None,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> None:
    """Run the interactive session for ``files``.

    Returns immediately when ``files`` is empty. Raises ``CrashReport`` after
    the terminal has been restored if the session failed.
    """
    if not files:
        return
    stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd

    config = load_config()
    layout = load_focus_layout(config)
    tick = load_tick_ms(config) if tick_ms is None else tick_ms
    theme = resolve_theme(theme_name if theme_name is not None else load_theme_name(config))
    resources = build_resources(files, layout)
    dispatcher = InputDispatcher(resources, layout.focus_keys)
    renderer = FrameRenderer(stdout_fd, theme)
    logger.debug("starting session with %d file(s), theme=%s", len(files), theme.name)

    def session_body() -> None:
        with TerminalSession(stdin_fd, stdout_fd) as session:
            session.run(resources, dispatcher.dispatch, renderer, tick_ms=tick)

    run_guarded(session_body)
