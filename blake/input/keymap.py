"""Per-mode binding tables plus the global fallback table.

Each table maps a ``KeyBinding`` to an action of that table's type.
``load_keymap`` layers user config over the built-in defaults.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from ..actions import Action, DiffAction, GlobalAction, HelpAction, HistoryAction, Mode
from ..errors import KeyParseError
from .binding import KeyBinding, KeyCode, parse_key_binding

logger = logging.getLogger(__name__)

TABLE_ACTION_TYPES: dict[str, type[Enum]] = {
    "global": GlobalAction,
    "history": HistoryAction,
    "diff": DiffAction,
    "help": HelpAction,
}
TABLE_ALIASES = {"blame": "history"}


@dataclass
class Keymap:
    global_: dict[KeyBinding, GlobalAction] = field(default_factory=dict)
    history: dict[KeyBinding, HistoryAction] = field(default_factory=dict)
    diff: dict[KeyBinding, DiffAction] = field(default_factory=dict)
    help: dict[KeyBinding, HelpAction] = field(default_factory=dict)

    def table(self, name: str) -> dict:
        """Return the table registered under config section ``name``."""
        name = TABLE_ALIASES.get(name, name)
        if name == "global":
            return self.global_
        if name not in TABLE_ACTION_TYPES:
            raise KeyError(name)
        return getattr(self, name)

    def table_for_mode(self, mode: Mode) -> dict:
        return self.table(mode.value)

    def _table_for_action(self, action: Action) -> dict:
        for name, action_type in TABLE_ACTION_TYPES.items():
            if isinstance(action, action_type):
                return self.table(name)
        raise TypeError(f"not an action: {action!r}")

    def bind(self, binding: KeyBinding, action: Action) -> Keymap:
        """Bind ``binding`` to ``action`` in the table owning that action type."""
        self._table_for_action(action)[binding] = action
        return self

    def keys_for(self, action: Action) -> list[KeyBinding]:
        """Return every binding mapped to ``action``, ordered by textual form."""
        table = self._table_for_action(action)
        return sorted((binding for binding, bound in table.items() if bound is action), key=str)

    def copy(self) -> Keymap:
        return Keymap(
            global_=dict(self.global_),
            history=dict(self.history),
            diff=dict(self.diff),
            help=dict(self.help),
        )

    @classmethod
    def with_defaults(cls) -> Keymap:
        keymap = cls()
        k = KeyBinding.of

        keymap.bind(k("q"), GlobalAction.QUIT)
        keymap.bind(k("c", ctrl=True), GlobalAction.QUIT)
        keymap.bind(k("?"), GlobalAction.SHOW_HELP)

        for binding, action in (
            (k("j"), HistoryAction.CURSOR_DOWN),
            (k(KeyCode.DOWN), HistoryAction.CURSOR_DOWN),
            (k("k"), HistoryAction.CURSOR_UP),
            (k(KeyCode.UP), HistoryAction.CURSOR_UP),
            (k("J"), HistoryAction.CURSOR_10_DOWN),
            (k("K"), HistoryAction.CURSOR_10_UP),
            (k("d", ctrl=True), HistoryAction.CURSOR_PAGE_DOWN),
            (k(KeyCode.PAGE_DOWN), HistoryAction.CURSOR_PAGE_DOWN),
            (k("u", ctrl=True), HistoryAction.CURSOR_PAGE_UP),
            (k(KeyCode.PAGE_UP), HistoryAction.CURSOR_PAGE_UP),
            (k("g"), HistoryAction.CURSOR_TOP),
            (k(KeyCode.HOME), HistoryAction.CURSOR_TOP),
            (k("G"), HistoryAction.CURSOR_BOTTOM),
            (k(KeyCode.END), HistoryAction.CURSOR_BOTTOM),
            (k(","), HistoryAction.DRILL_DOWN),
            (k("u"), HistoryAction.GO_BACK),
            (k(KeyCode.BACKSPACE), HistoryAction.GO_BACK),
            (k(KeyCode.ENTER), HistoryAction.SHOW_DIFF),
            (k("d"), HistoryAction.SHOW_DIFF),
        ):
            keymap.bind(binding, action)

        for binding, action in (
            (k("j"), DiffAction.SCROLL_DOWN),
            (k(KeyCode.DOWN), DiffAction.SCROLL_DOWN),
            (k("k"), DiffAction.SCROLL_UP),
            (k(KeyCode.UP), DiffAction.SCROLL_UP),
            (k("J"), DiffAction.SCROLL_10_DOWN),
            (k("K"), DiffAction.SCROLL_10_UP),
            (k("d", ctrl=True), DiffAction.SCROLL_PAGE_DOWN),
            (k(KeyCode.PAGE_DOWN), DiffAction.SCROLL_PAGE_DOWN),
            (k("u", ctrl=True), DiffAction.SCROLL_PAGE_UP),
            (k(KeyCode.PAGE_UP), DiffAction.SCROLL_PAGE_UP),
            (k("g"), DiffAction.SCROLL_TOP),
            (k(KeyCode.HOME), DiffAction.SCROLL_TOP),
            (k("G"), DiffAction.SCROLL_BOTTOM),
            (k(KeyCode.END), DiffAction.SCROLL_BOTTOM),
            (k("h"), DiffAction.SCROLL_LEFT),
            (k(KeyCode.LEFT), DiffAction.SCROLL_LEFT),
            (k("l"), DiffAction.SCROLL_RIGHT),
            (k(KeyCode.RIGHT), DiffAction.SCROLL_RIGHT),
            (k("<"), DiffAction.SPLIT_NARROWER),
            (k(">"), DiffAction.SPLIT_WIDER),
            (k("o"), DiffAction.OPEN_IN_BROWSER),
            (k("q"), DiffAction.CLOSE),
            (k(KeyCode.ESCAPE), DiffAction.CLOSE),
        ):
            keymap.bind(binding, action)

        for binding, action in (
            (k("j"), HelpAction.SCROLL_DOWN),
            (k(KeyCode.DOWN), HelpAction.SCROLL_DOWN),
            (k("k"), HelpAction.SCROLL_UP),
            (k(KeyCode.UP), HelpAction.SCROLL_UP),
            (k("J"), HelpAction.SCROLL_10_DOWN),
            (k("K"), HelpAction.SCROLL_10_UP),
            (k("g"), HelpAction.SCROLL_TOP),
            (k("G"), HelpAction.SCROLL_BOTTOM),
            (k("q"), HelpAction.CLOSE),
            (k(KeyCode.ESCAPE), HelpAction.CLOSE),
        ):
            keymap.bind(binding, action)

        return keymap


def _normalize_action_name(name: str) -> str:
    return name.replace("_", "").replace("-", "").lower()


def parse_action_name(table_name: str, name: str) -> Action:
    """Resolve a config action name (``"CursorDown"``, ``"cursor_down"``) for a table."""
    action_type = TABLE_ACTION_TYPES[TABLE_ALIASES.get(table_name, table_name)]
    wanted = _normalize_action_name(name)
    for member in action_type:
        if _normalize_action_name(member.value) == wanted:
            return member
    raise ValueError(f"unknown {table_name} action {name!r}")


def load_keymap(raw: object, defaults: Keymap | None = None) -> tuple[Keymap, list[str]]:
    """Layer a config ``keymap`` section over ``defaults``.

    ``raw`` maps table names to ``{binding text: action name}``. A ``null``
    action removes that binding. Malformed bindings, unknown tables, and
    unknown actions are skipped; a warning string is returned for each.
    """
    keymap = (defaults if defaults is not None else Keymap.with_defaults()).copy()
    warnings: list[str] = []
    if raw is None:
        return keymap, warnings
    if not isinstance(raw, Mapping):
        warnings.append("keymap: expected an object of tables")
        logger.warning("skipping config entry: %s", warnings[0])
        return keymap, warnings

    for table_name, entries in raw.items():
        if not isinstance(table_name, str) or TABLE_ALIASES.get(table_name, table_name) not in TABLE_ACTION_TYPES:
            warnings.append(f"keymap: unknown table {table_name!r}")
            continue
        if not isinstance(entries, Mapping):
            warnings.append(f"keymap.{table_name}: expected an object of bindings")
            continue
        table = keymap.table(table_name)
        for binding_text, action_name in entries.items():
            try:
                binding = parse_key_binding(binding_text)
            except KeyParseError as exc:
                warnings.append(f"keymap.{table_name}: {exc}")
                continue
            if action_name is None:
                table.pop(binding, None)
                continue
            if not isinstance(action_name, str):
                warnings.append(f"keymap.{table_name}: action for {binding_text!r} must be a string")
                continue
            try:
                table[binding] = parse_action_name(table_name, action_name)
            except ValueError as exc:
                warnings.append(f"keymap.{table_name}: {exc}")

    for warning in warnings:
        logger.warning("skipping config entry: %s", warning)
    return keymap, warnings


def dump_keymap(keymap: Keymap) -> dict[str, dict[str, str]]:
    """Serialize ``keymap`` into the config-file shape accepted by ``load_keymap``."""
    dumped: dict[str, dict[str, str]] = {}
    for name in TABLE_ACTION_TYPES:
        table = keymap.table(name)
        dumped[name] = {str(binding): table[binding].value for binding in sorted(table, key=str)}
    return dumped
