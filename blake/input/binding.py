"""Key bindings: a physical key plus modifier flags, with a textual form.

The canonical text is ``Ctrl+Alt+Shift+Key``. Parsing accepts modifier and
named-key tokens case-insensitively, single characters literally, and
``F<n>`` for function keys. Uppercase ASCII letters always carry shift.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

from ..errors import KeyParseError


class KeyCode(Enum):
    ENTER = "Enter"
    ESCAPE = "Escape"
    BACKSPACE = "Backspace"
    TAB = "Tab"
    UP = "Up"
    DOWN = "Down"
    LEFT = "Left"
    RIGHT = "Right"
    PAGE_UP = "PageUp"
    PAGE_DOWN = "PageDown"
    HOME = "Home"
    END = "End"
    DELETE = "Delete"
    INSERT = "Insert"


@dataclass(frozen=True)
class FKey:
    """Function key ``F<number>``."""

    number: int

    def __post_init__(self) -> None:
        if self.number < 1:
            raise ValueError(f"function key index must be >= 1, got {self.number}")


Key = Union[KeyCode, FKey, str]


@dataclass(frozen=True)
class KeyModifiers:
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    def __or__(self, other: KeyModifiers) -> KeyModifiers:
        return KeyModifiers(
            ctrl=self.ctrl or other.ctrl,
            alt=self.alt or other.alt,
            shift=self.shift or other.shift,
        )


NO_MODIFIERS = KeyModifiers()
CTRL = KeyModifiers(ctrl=True)
ALT = KeyModifiers(alt=True)
SHIFT = KeyModifiers(shift=True)

_NAMED_KEYS: dict[str, Key] = {code.value.lower(): code for code in KeyCode}
_NAMED_KEYS.update(
    {
        "esc": KeyCode.ESCAPE,
        "return": KeyCode.ENTER,
        "del": KeyCode.DELETE,
        "space": " ",
        "plus": "+",
    }
)
_CHAR_TOKENS = {" ": "Space", "+": "Plus"}


@dataclass(frozen=True)
class KeyBinding:
    key: Key
    modifiers: KeyModifiers = NO_MODIFIERS

    def __post_init__(self) -> None:
        if isinstance(self.key, str):
            if len(self.key) != 1:
                raise ValueError(f"character keys must be exactly one character, got {self.key!r}")
            if "A" <= self.key <= "Z" and not self.modifiers.shift:
                object.__setattr__(self, "modifiers", replace(self.modifiers, shift=True))
        elif not isinstance(self.key, (KeyCode, FKey)):
            raise TypeError(f"unsupported key type: {type(self.key).__name__}")

    @classmethod
    def of(cls, key: Key, *, ctrl: bool = False, alt: bool = False, shift: bool = False) -> KeyBinding:
        """Build a binding from keyword modifier flags."""
        return cls(key, KeyModifiers(ctrl=ctrl, alt=alt, shift=shift))

    def __str__(self) -> str:
        return key_binding_to_string(self)


def _key_token(key: Key) -> str:
    if isinstance(key, KeyCode):
        return key.value
    if isinstance(key, FKey):
        return f"F{key.number}"
    return _CHAR_TOKENS.get(key, key)


def key_binding_to_string(binding: KeyBinding) -> str:
    """Render ``binding`` in canonical ``Ctrl+Alt+Shift+Key`` order."""
    parts: list[str] = []
    if binding.modifiers.ctrl:
        parts.append("Ctrl")
    if binding.modifiers.alt:
        parts.append("Alt")
    if binding.modifiers.shift:
        parts.append("Shift")
    parts.append(_key_token(binding.key))
    return "+".join(parts)


def _split_tokens(text: str) -> list[str]:
    # A trailing "++" means the literal plus key after the modifiers.
    if text == "+":
        return ["+"]
    if text.endswith("++"):
        head = text[:-2]
        return (head.split("+") if head else []) + ["+"]
    return text.split("+")


def _parse_key_token(text: str, token: str) -> Key:
    if len(token) == 1:
        return token
    lowered = token.lower()
    named = _NAMED_KEYS.get(lowered)
    if named is not None:
        return named
    if lowered.startswith("f"):
        digits = lowered[1:]
        if not (digits.isascii() and digits.isdigit()):
            raise KeyParseError(text, f"malformed function key {token!r}")
        number = int(digits)
        if number < 1:
            raise KeyParseError(text, f"function key index out of range in {token!r}")
        return FKey(number)
    raise KeyParseError(text, f"unknown key {token!r}")


def parse_key_binding(text: str) -> KeyBinding:
    """Parse a textual binding such as ``"Ctrl+d"``, ``"Shift+Tab"`` or ``"F5"``.

    Raises ``KeyParseError`` for empty input, a missing or repeated key
    token, an unknown key name, or a malformed function-key index.
    """
    if not isinstance(text, str):
        raise KeyParseError(repr(text), "binding must be a string")
    if not text:
        raise KeyParseError(text, "empty binding")

    ctrl = alt = shift = False
    key_token: str | None = None
    for part in _split_tokens(text):
        lowered = part.lower()
        if lowered in {"ctrl", "control"}:
            ctrl = True
        elif lowered == "alt":
            alt = True
        elif lowered == "shift":
            shift = True
        elif key_token is not None:
            raise KeyParseError(text, "more than one key")
        else:
            key_token = part

    if not key_token:
        raise KeyParseError(text, "missing key")
    key = _parse_key_token(text, key_token)
    return KeyBinding(key, KeyModifiers(ctrl=ctrl, alt=alt, shift=shift))
