"""Input-layer public API for event decoding and key dispatch.

``read_event`` is the low-level terminal decoder; ``InputDispatcher`` maps a
decoded event onto registry mutations.
"""

from .dispatch import DEFAULT_FOCUS_KEYS, QUIT_KEYS, RESERVED_KEYS, InputDispatcher
from .events import InputEvent, KeyEvent, KeyModifiers, MouseEvent
from .key_registry import KeyComboBinding, KeyComboRegistry
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_event

__all__ = [
    "read_event",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "InputEvent",
    "KeyEvent",
    "KeyModifiers",
    "MouseEvent",
    "KeyComboBinding",
    "KeyComboRegistry",
    "InputDispatcher",
    "DEFAULT_FOCUS_KEYS",
    "QUIT_KEYS",
    "RESERVED_KEYS",
]
