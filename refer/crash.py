"""Deferred failure reporting for the interactive session.

While the terminal is in raw/alternate-screen mode nothing can be printed
usefully, so failures are captured into a process-wide buffer and surfaced
only after the session has restored the terminal.
"""

from __future__ import annotations

import contextlib
import logging
import threading
from collections.abc import Callable, Iterator

logger = logging.getLogger(__name__)

UNKNOWN_FAILURE = "unknown failure payload"

_CAPTURED_MESSAGES: list[str] = []
_CAPTURED_LOCK = threading.Lock()


class CrashReport(Exception):
    """Consolidated failure message from a guarded session."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def failure_message(payload: object) -> str:
    """Render a failure payload as human-readable text.

    Text payloads are returned as-is, exceptions as ``Type: message``, and any
    other payload as ``UNKNOWN_FAILURE``.
    """
    if isinstance(payload, str):
        return payload
    if isinstance(payload, BaseException):
        try:
            detail = str(payload)
        except Exception:
            return UNKNOWN_FAILURE
        name = type(payload).__name__
        return f"{name}: {detail}" if detail else name
    return UNKNOWN_FAILURE


def record_failure(payload: object) -> None:
    message = failure_message(payload)
    with _CAPTURED_LOCK:
        _CAPTURED_MESSAGES.append(message)


def drain_failures() -> list[str]:
    """Return and clear every captured message."""
    with _CAPTURED_LOCK:
        messages = list(_CAPTURED_MESSAGES)
        _CAPTURED_MESSAGES.clear()
    return messages


def _thread_failure_hook(args: threading.ExceptHookArgs) -> None:
    thread_name = args.thread.name if args.thread is not None else "<unknown>"
    logger.error(
        "unhandled failure in thread %s",
        thread_name,
        exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
    )
    record_failure(args.exc_value if args.exc_value is not None else args.exc_type)


@contextlib.contextmanager
def failure_hook() -> Iterator[None]:
    """Capture failures from other threads for the duration of the block.

    The previously installed ``threading.excepthook`` is restored on exit.
    """
    previous = threading.excepthook
    threading.excepthook = _thread_failure_hook
    try:
        yield
    finally:
        threading.excepthook = previous


def run_guarded(body: Callable[[], None]) -> None:
    """Run ``body`` and raise ``CrashReport`` afterwards if it failed.

    Cleanup owned by ``body`` (the terminal session's context manager) has
    already run by the time the report is raised.
    """
    drain_failures()
    failed = False
    with failure_hook():
        try:
            body()
        except (Exception, KeyboardInterrupt) as exc:
            logger.error("session aborted", exc_info=exc)
            record_failure(exc)
            failed = True
    messages = drain_failures()
    if failed:
        raise CrashReport(_report_text(messages))


def _report_text(messages: list[str]) -> str:
    """Main-session failure first; background thread failures follow in parentheses."""
    if not messages:
        return UNKNOWN_FAILURE
    *background, main = messages
    main = main or UNKNOWN_FAILURE
    if not background:
        return main
    return f"{main} (also failed in background: {'; '.join(background)})"
