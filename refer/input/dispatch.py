"""Keyboard dispatch for normal (navigation) and entry (text prompt) modes.

Quit keys are checked before anything else. Otherwise the mode is chosen by
``TextEntryState.active`` and the event is matched against that mode's
table; the first match wins and unmatched events are ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import partial

from ..resources import Resources
from ..state import FileListState, FocusState, TextEntryState
from .events import InputEvent, KeyEvent
from .key_registry import KeyComboBinding, KeyComboRegistry

logger = logging.getLogger(__name__)

QUIT_KEYS: tuple[str, ...] = ("CTRL_Q", "CTRL_C")
ENTRY_TOGGLE_KEYS: tuple[str, ...] = ("CTRL_N",)
# Focus bindings may never shadow these.
RESERVED_KEYS: frozenset[str] = frozenset(QUIT_KEYS + ENTRY_TOGGLE_KEYS)
DEFAULT_FOCUS_KEYS: Mapping[str, str] = {"LEFT": "files", "RIGHT": "view"}


class InputDispatcher:
    """Apply one input event to the registry and report whether to quit."""

    def __init__(self, resources: Resources, focus_keys: Mapping[str, str] | None = None) -> None:
        self.resources = resources
        focus_keys = DEFAULT_FOCUS_KEYS if focus_keys is None else focus_keys
        self._quit = KeyComboRegistry().register_binding(KeyComboBinding(QUIT_KEYS, lambda: True))
        self._normal = KeyComboRegistry()
        for token, region in focus_keys.items():
            if token in RESERVED_KEYS:
                logger.warning("ignoring focus binding for reserved key %s", token)
                continue
            self._normal.register_binding(KeyComboBinding((token,), partial(self._focus, region)))
        self._normal.register_binding(KeyComboBinding(ENTRY_TOGGLE_KEYS, self._begin_entry))
        self._entry = KeyComboRegistry().register_bindings(
            KeyComboBinding(ENTRY_TOGGLE_KEYS, self._cancel_entry),
            KeyComboBinding(("ENTER",), self._commit_entry),
            KeyComboBinding(("BACKSPACE",), self._pop_char),
        )

    def dispatch(self, event: InputEvent) -> bool:
        # Mouse events are captured by the terminal but carry no bindings.
        if not isinstance(event, KeyEvent):
            return False
        if self._quit.dispatch(event):
            return True

        entry = self.resources.get_mut(TextEntryState)
        if not entry:
            self._normal.dispatch(event)
            return False

        if self._entry.dispatch(event) is None:
            ch = event.printable_char()
            if ch is not None:
                entry.push(ch)
        return False

    def _toggle_entry(self) -> None:
        self.resources.get_mut(FocusState).toggle()
        self.resources.get_mut(TextEntryState).toggle()

    def _begin_entry(self) -> bool:
        self._toggle_entry()
        return False

    def _cancel_entry(self) -> bool:
        self.resources.get_mut(TextEntryState).clear()
        self._toggle_entry()
        return False

    def _commit_entry(self) -> bool:
        name = self.resources.get_mut(TextEntryState).take()
        self.resources.get_mut(FileListState).insert(name)
        self._toggle_entry()
        return False

    def _pop_char(self) -> bool:
        self.resources.get_mut(TextEntryState).pop()
        return False

    def _focus(self, region: str) -> bool:
        self.resources.get_mut(FocusState).set_cursor(region)
        return False
