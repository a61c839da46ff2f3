"""Decoded terminal input events.

Keys carry a code plus a modifier mask; ``token`` renders them in the
``CTRL_N`` / ``ALT_LEFT`` / ``a`` vocabulary used by dispatch tables.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

NAMED_KEYS: frozenset[str] = frozenset(
    {"ENTER", "BACKSPACE", "TAB", "ESC", "UP", "DOWN", "LEFT", "RIGHT", "HOME", "END", "DELETE"}
)


class KeyModifiers(enum.IntFlag):
    NONE = 0
    SHIFT = 1
    CONTROL = 2
    ALT = 4


@dataclass(frozen=True)
class KeyEvent:
    code: str
    modifiers: KeyModifiers = KeyModifiers.NONE

    @property
    def is_char(self) -> bool:
        return len(self.code) == 1

    @property
    def token(self) -> str:
        """Return the dispatch token, e.g. ``CTRL_N``, ``SHIFT_LEFT`` or ``a``."""
        parts: list[str] = []
        if self.modifiers & KeyModifiers.CONTROL:
            parts.append("CTRL")
        if self.modifiers & KeyModifiers.ALT:
            parts.append("ALT")
        # Shift is already folded into the case of printable characters.
        if self.modifiers & KeyModifiers.SHIFT and not self.is_char:
            parts.append("SHIFT")
        code = self.code.upper() if self.is_char and parts else self.code
        parts.append(code)
        return "_".join(parts)

    def printable_char(self) -> str | None:
        """Return the typed character for plain text input, else ``None``."""
        if not self.is_char:
            return None
        if self.modifiers & (KeyModifiers.CONTROL | KeyModifiers.ALT):
            return None
        return self.code if self.code.isprintable() else None


@dataclass(frozen=True)
class MouseEvent:
    """SGR mouse report; ``kind`` is e.g. ``LEFT_DOWN`` or ``WHEEL_UP``."""

    kind: str
    column: int
    row: int


InputEvent = KeyEvent | MouseEvent


def ctrl(letter: str) -> KeyEvent:
    return KeyEvent(letter.lower(), KeyModifiers.CONTROL)
