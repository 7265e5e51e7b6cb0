"""Reusable action-dispatch registry primitives."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..actions import Action


@dataclass(frozen=True)
class ActionBinding:
    """Mapping from one or more actions to a single handler callback."""

    actions: tuple[Action, ...]
    handler: Callable[[], None]


class ActionRegistry:
    """Small action-dispatch table keyed by enum member."""

    def __init__(self) -> None:
        self._handlers: dict[Action, Callable[[], None]] = {}

    def register_binding(self, binding: ActionBinding) -> ActionRegistry:
        """Register one binding, overwriting existing handlers for the same actions."""
        for action in binding.actions:
            self._handlers[action] = binding.handler
        return self

    def register_bindings(self, *bindings: ActionBinding) -> ActionRegistry:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, action: Action) -> bool:
        """Invoke the handler bound to ``action``; return whether one existed."""
        handler = self._handlers.get(action)
        if handler is None:
            return False
        handler()
        return True
