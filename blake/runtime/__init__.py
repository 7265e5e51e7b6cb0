"""Public runtime orchestration entry points.

This package groups the interactive bootstrap (`run_app`), the navigator
state machine, and the lower-level event loop contracts used by tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming
    from .navigator import Navigator


def run_app(*args, **kwargs):
    """Lazily import the app entrypoint to avoid runtime bootstrap on import."""
    from .app import run_app as _run_app

    return _run_app(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


def __getattr__(name: str):
    if name in {"RuntimeLoopCallbacks", "RuntimeLoopTiming"}:
        from . import loop as _loop

        return getattr(_loop, name)
    if name == "Navigator":
        from .navigator import Navigator as _Navigator

        return _Navigator
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Navigator",
    "run_app",
    "RuntimeLoopCallbacks",
    "RuntimeLoopTiming",
    "run_main_loop",
]
