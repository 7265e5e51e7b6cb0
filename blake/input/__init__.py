"""Input-layer public API: key bindings, keymaps, resolution, and decoding.

`read_key` turns raw tty bytes into `KeyBinding` values; `resolve_action`
maps a binding to an action for the current mode.
"""

from .binding import FKey, KeyBinding, KeyCode, KeyModifiers, key_binding_to_string, parse_key_binding
from .keymap import Keymap, dump_keymap, load_keymap
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key
from .resolver import resolve_action

__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "FKey",
    "KeyBinding",
    "KeyCode",
    "KeyModifiers",
    "Keymap",
    "dump_keymap",
    "key_binding_to_string",
    "load_keymap",
    "parse_key_binding",
    "read_key",
    "resolve_action",
]
