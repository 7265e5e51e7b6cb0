"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into ``KeyBinding`` values.
Handles ESC-sequence timing, CSI/SS3 modifier parameters, and Alt prefixes.
"""

from __future__ import annotations

import os
import select

from .binding import FKey, Key, KeyBinding, KeyCode, KeyModifiers

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CSI_LETTER_KEYS: dict[str, Key] = {
    "A": KeyCode.UP,
    "B": KeyCode.DOWN,
    "C": KeyCode.RIGHT,
    "D": KeyCode.LEFT,
    "H": KeyCode.HOME,
    "F": KeyCode.END,
    "P": FKey(1),
    "Q": FKey(2),
    "R": FKey(3),
    "S": FKey(4),
}
_CSI_TILDE_KEYS: dict[int, Key] = {
    1: KeyCode.HOME,
    2: KeyCode.INSERT,
    3: KeyCode.DELETE,
    4: KeyCode.END,
    5: KeyCode.PAGE_UP,
    6: KeyCode.PAGE_DOWN,
    7: KeyCode.HOME,
    8: KeyCode.END,
    11: FKey(1),
    12: FKey(2),
    13: FKey(3),
    14: FKey(4),
    15: FKey(5),
    17: FKey(6),
    18: FKey(7),
    19: FKey(8),
    20: FKey(9),
    21: FKey(10),
    23: FKey(11),
    24: FKey(12),
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    if _PENDING_BYTES:
        return _PENDING_BYTES.pop(0)
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _decode_char(fd: int, first: bytes) -> str:
    raw = first
    for _ in range(_utf8_length(first[0]) - 1):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        raw += nxt
    return raw.decode("utf-8", errors="replace")[:1]


def _modifiers_from_param(param: str) -> KeyModifiers:
    """Decode the xterm ``1;<n>`` modifier parameter (n - 1 is a bitmask)."""
    try:
        mask = int(param) - 1
    except ValueError:
        return KeyModifiers()
    if mask <= 0:
        return KeyModifiers()
    return KeyModifiers(ctrl=bool(mask & 4), alt=bool(mask & 2), shift=bool(mask & 1))


def _decode_control_byte(code: int) -> KeyBinding | None:
    if code in {0x0D, 0x0A}:
        return KeyBinding(KeyCode.ENTER)
    if code == 0x09:
        return KeyBinding(KeyCode.TAB)
    if code in {0x08, 0x7F}:
        return KeyBinding(KeyCode.BACKSPACE)
    if code == 0x00:
        return KeyBinding(" ", KeyModifiers(ctrl=True))
    if 0x01 <= code <= 0x1A:
        return KeyBinding(chr(code + 0x60), KeyModifiers(ctrl=True))
    if 0x1C <= code <= 0x1F:
        return KeyBinding(chr(code + 0x40), KeyModifiers(ctrl=True))
    return None


def _read_csi(fd: int) -> KeyBinding | None:
    params: list[str] = []
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return KeyBinding(KeyCode.ESCAPE)
        ch = part.decode("latin-1")
        if "@" <= ch <= "~" and ch not in "[":
            final = ch
            break
        params.append(ch)
        if len(params) > 32:
            return None

    fields = "".join(params).split(";")
    if fields and fields[0].startswith("<"):
        # SGR mouse report; mouse tracking is never enabled, so drop it.
        return None
    modifiers = _modifiers_from_param(fields[1]) if len(fields) > 1 else KeyModifiers()

    if final == "Z":
        return KeyBinding(KeyCode.TAB, KeyModifiers(shift=True))
    if final == "~":
        try:
            number = int(fields[0])
        except ValueError:
            return None
        key = _CSI_TILDE_KEYS.get(number)
        return None if key is None else KeyBinding(key, modifiers)
    key = _CSI_LETTER_KEYS.get(final)
    if key is None:
        return None
    return KeyBinding(key, modifiers)


def _read_ss3(fd: int) -> KeyBinding | None:
    part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if part is None:
        return KeyBinding("O", KeyModifiers(alt=True))
    key = _CSI_LETTER_KEYS.get(part.decode("latin-1"))
    if key is None:
        return None
    return KeyBinding(key)


def read_key(fd: int, timeout_ms: int | None = None) -> KeyBinding | None:
    """Read one key press from ``fd``.

    Returns ``None`` when ``timeout_ms`` elapses without input, at EOF, or for
    sequences that do not correspond to a bindable key.
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

    if ch != b"\x1b":
        control = _decode_control_byte(ch[0])
        if control is not None:
            return control
        return KeyBinding(_decode_char(fd, ch))

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return KeyBinding(KeyCode.ESCAPE)
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        return _read_ss3(fd)
    if seq == b"\x1b":
        _PENDING_BYTES.append(seq)
        return KeyBinding(KeyCode.ESCAPE)

    # ESC followed by a plain key is how terminals report Alt.
    inner = _decode_control_byte(seq[0])
    if inner is None:
        inner = KeyBinding(_decode_char(fd, seq))
    return KeyBinding(inner.key, inner.modifiers | KeyModifiers(alt=True))
