"""Key-combo dispatch tables keyed by ``KeyEvent.token``."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .events import KeyEvent

KeyHandler = Callable[[], bool | None]


@dataclass(frozen=True)
class KeyComboBinding:
    """One or more key tokens bound to a single action callback."""

    combos: tuple[str, ...]
    handler: KeyHandler


class KeyComboRegistry:
    """Exact-token dispatch table; later bindings overwrite earlier ones."""

    def __init__(self) -> None:
        self._handlers: dict[str, KeyHandler] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, event: KeyEvent) -> bool | None:
        """Invoke the handler bound to ``event`` and return its result.

        Returns ``None`` when no binding matches.
        """
        handler = self._handlers.get(event.token)
        if handler is None:
            return None
        return handler()
