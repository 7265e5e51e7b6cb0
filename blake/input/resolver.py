"""Map a key binding to an action for the active mode.

The mode's own table wins over the global table; a key bound in neither
resolves to ``None``. Resolution is pure and never raises.
"""

from __future__ import annotations

from ..actions import Action, DiffAction, GlobalAction, HelpAction, HistoryAction, Mode
from .binding import KeyBinding
from .keymap import Keymap


def _global_action(binding: KeyBinding, keymap: Keymap) -> GlobalAction | None:
    return keymap.global_.get(binding)


def _resolve_history(binding: KeyBinding, keymap: Keymap) -> HistoryAction | GlobalAction | None:
    action = keymap.history.get(binding)
    if action is not None:
        return action
    return _global_action(binding, keymap)


def _resolve_diff(binding: KeyBinding, keymap: Keymap) -> DiffAction | GlobalAction | None:
    action = keymap.diff.get(binding)
    if action is not None:
        return action
    return _global_action(binding, keymap)


def _resolve_help(binding: KeyBinding, keymap: Keymap) -> HelpAction | GlobalAction | None:
    action = keymap.help.get(binding)
    if action is not None:
        return action
    return _global_action(binding, keymap)


def resolve_action(binding: KeyBinding, mode: Mode, keymap: Keymap) -> Action | None:
    """Return the action ``binding`` triggers in ``mode``, or ``None`` when unbound."""
    if mode is Mode.HISTORY:
        return _resolve_history(binding, keymap)
    if mode is Mode.DIFF:
        return _resolve_diff(binding, keymap)
    if mode is Mode.HELP:
        return _resolve_help(binding, keymap)
    return None
