"""Low-level terminal input decoding.

Reads raw bytes from a raw-mode tty and translates them into ``KeyEvent`` and
``MouseEvent`` values. Handles ESC-sequence timing, modifier parameters,
SGR mouse reports, and UTF-8 multi-byte characters.
"""

from __future__ import annotations

import os
import select

from .events import InputEvent, KeyEvent, KeyModifiers, MouseEvent, ctrl

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_BYTES: dict[bytes, KeyEvent] = {
    b"\t": KeyEvent("TAB"),
    b"\r": KeyEvent("ENTER"),
    b"\n": KeyEvent("ENTER"),
    b"\x08": KeyEvent("BACKSPACE"),
    b"\x7f": KeyEvent("BACKSPACE"),
}
_CSI_FINALS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}
_TILDE_KEYS: dict[bytes, str] = {
    b"1": "HOME",
    b"3": "DELETE",
    b"4": "END",
    b"7": "HOME",
    b"8": "END",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _modifiers_from_param(param: int) -> KeyModifiers:
    """Decode xterm modifier parameter (``1 + bitmask``) into ``KeyModifiers``."""
    mask = max(0, param - 1)
    modifiers = KeyModifiers.NONE
    if mask & 0b001:
        modifiers |= KeyModifiers.SHIFT
    if mask & 0b010:
        modifiers |= KeyModifiers.ALT
    if mask & 0b100:
        modifiers |= KeyModifiers.CONTROL
    if mask & 0b1000:
        # Meta is reported separately by some terminals; treat it as Alt.
        modifiers |= KeyModifiers.ALT
    return modifiers


def _utf8_length(lead: int) -> int:
    if lead >> 5 == 0b110:
        return 2
    if lead >> 4 == 0b1110:
        return 3
    if lead >> 3 == 0b11110:
        return 4
    return 1


def _decode_char(fd: int, first: bytes) -> KeyEvent:
    data = first
    for _ in range(_utf8_length(first[0]) - 1):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            break
        data += part
    return KeyEvent(data.decode("utf-8", errors="replace"))


def _decode_sgr_mouse(fd: int) -> InputEvent:
    # SGR mouse: ESC [ < btn ; col ; row (M/m)
    payload: list[bytes] = []
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return KeyEvent("ESC")
        if part in {b"M", b"m"}:
            break
        payload.append(part)
        if len(payload) > 64:
            return KeyEvent("ESC")
    try:
        btn_s, col_s, row_s = b"".join(payload).decode("ascii").split(";")
        btn = int(btn_s)
        col = int(col_s)
        row = int(row_s)
    except ValueError:
        return KeyEvent("ESC")
    button = btn & 0b11
    if btn & 0b0100_0000:
        kind = ("WHEEL_UP", "WHEEL_DOWN", "WHEEL_LEFT", "WHEEL_RIGHT")[button]
    elif btn & 0b0010_0000:
        kind = "DRAG"
    elif button == 3:
        kind = "RELEASE"
    else:
        name = ("LEFT", "MIDDLE", "RIGHT")[button]
        kind = f"{name}_{'DOWN' if part == b'M' else 'UP'}"
    return MouseEvent(kind=kind, column=col, row=row)


def _decode_csi(fd: int) -> InputEvent:
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return KeyEvent("ESC")
    if seq == b"<":
        return _decode_sgr_mouse(fd)
    if seq in _CSI_FINALS:
        return KeyEvent(_CSI_FINALS[seq])
    if not seq.isdigit():
        return KeyEvent("ESC")

    params = seq
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return KeyEvent("ESC")
        if part.isdigit() or part == b";":
            params += part
            if len(params) > 16:
                return KeyEvent("ESC")
            continue
        final = part
        break

    fields = params.split(b";")
    modifiers = KeyModifiers.NONE
    if len(fields) >= 2 and fields[1].isdigit():
        modifiers = _modifiers_from_param(int(fields[1]))
    if final in _CSI_FINALS:
        return KeyEvent(_CSI_FINALS[final], modifiers)
    if final == b"~" and fields[0] in _TILDE_KEYS:
        return KeyEvent(_TILDE_KEYS[fields[0]], modifiers)
    return KeyEvent("ESC")


def read_event(fd: int, timeout_ms: int | None = None) -> InputEvent | None:
    """Read one input event, or return ``None`` if none arrives in time.

    ``timeout_ms=None`` blocks until a byte is available.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return None

        ch = os.read(fd, 1)
        if not ch:
            return None

    if ch in _CONTROL_BYTES:
        return _CONTROL_BYTES[ch]
    if ch == b"\x00":
        return KeyEvent(" ", KeyModifiers.CONTROL)
    if b"\x01" <= ch <= b"\x1a":
        return ctrl(chr(ch[0] + 0x60))

    if ch != b"\x1b":
        return _decode_char(fd, ch)

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return KeyEvent("ESC")
    if seq == b"[":
        return _decode_csi(fd)
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final in _CSI_FINALS:
            return KeyEvent(_CSI_FINALS[final])
        return KeyEvent("ESC")
    _PENDING_BYTES.append(seq)
    return KeyEvent("ESC")
