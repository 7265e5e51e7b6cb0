"""Main interactive event loop for the terminal UI.

Renders when something changed, reads one key with a tick timeout, resolves
it against the current mode, and dispatches it to the navigator. Backend
failures raised by a dispatch become status messages; the session goes on.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..domain import BlameFrame
from ..errors import FormatterError, GatewayError
from ..input.reader import read_key
from ..input.resolver import resolve_action
from ..render import ScreenContext, follow_selection, render_screen
from .navigator import DiffSession, Navigator, Split
from .terminal import TerminalController

logger = logging.getLogger(__name__)

# The diff pane spends one row on the commit header.
DIFF_HEADER_ROWS = 1


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_timeout_ms: int = 100
    status_message_seconds: float = 4.0


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    save_split_ratio: Callable[[int], None]


@dataclass
class ViewportState:
    """Scroll offsets and redraw bookkeeping owned by the loop, not the navigator."""

    blame_start: int = 0
    diff_start: int = 0
    frame: BlameFrame | None = None
    diff_session: DiffSession | None = None
    size: tuple[int, int] = (0, 0)
    status_generation: int = 0
    status_message_until: float = 0.0
    dirty: bool = True


def build_screen_context(navigator: Navigator, view: ViewportState, columns: int, lines: int) -> ScreenContext:
    """Snapshot navigator state for one frame, updating scroll offsets in ``view``."""
    content_rows = max(1, lines - 1)
    frame = navigator.current_frame()
    if frame is not view.frame:
        view.frame = frame
        view.blame_start = 0
    if frame is not None:
        view.blame_start = follow_selection(view.blame_start, frame.selected_line, content_rows, len(frame))

    session = navigator.diff_session
    if session is not view.diff_session:
        view.diff_session = session
        view.diff_start = 0
    diff_rows = max(1, content_rows - DIFF_HEADER_ROWS)
    if session is not None:
        view.diff_start = follow_selection(view.diff_start, session.selected_line, diff_rows, len(session.lines))

    layout = navigator.layout
    return ScreenContext(
        width=columns,
        height=lines,
        mode=navigator.mode,
        frame=frame,
        blame_start=view.blame_start,
        depth=navigator.blame_stack.depth(),
        hash_chain=navigator.blame_stack.hash_chain(),
        status_message=navigator.status_message,
        split_ratio=layout.ratio if isinstance(layout, Split) and session is not None else None,
        diff_lines=session.lines if session is not None else (),
        diff_selected=session.selected_line if session is not None else 0,
        diff_start=view.diff_start,
        diff_scroll_x=session.scroll_x if session is not None else 0,
        diff_commit=session.commit if session is not None else None,
        help_lines=navigator.help_lines,
        help_scroll=navigator.help_scroll,
    )


def _expire_status_message(navigator: Navigator, view: ViewportState, timing: RuntimeLoopTiming, now: float) -> None:
    if navigator.status_generation != view.status_generation:
        view.status_generation = navigator.status_generation
        view.status_message_until = now + timing.status_message_seconds
        view.dirty = True
    elif navigator.status_message and now >= view.status_message_until:
        navigator.status_message = ""
        view.status_generation = navigator.status_generation
        view.dirty = True


def run_main_loop(
    navigator: Navigator,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
    callbacks: RuntimeLoopCallbacks,
) -> None:
    """Run until the navigator's ``should_quit`` flag is set."""
    view = ViewportState()

    with terminal.raw_mode():
        while not navigator.should_quit:
            columns, lines = terminal.size()
            if (columns, lines) != view.size:
                view.size = (columns, lines)
                view.dirty = True
            _expire_status_message(navigator, view, timing, time.monotonic())

            if view.dirty:
                terminal.write(render_screen(build_screen_context(navigator, view, columns, lines)))
                view.dirty = False

            try:
                key = read_key(stdin_fd, timeout_ms=timing.key_timeout_ms)
            except KeyboardInterrupt:
                continue
            if key is None:
                continue

            action = resolve_action(key, navigator.mode, navigator.keymap)
            if action is None:
                logger.debug("unbound key %s in %s mode", key, navigator.mode.value)
                continue

            split_ratio = navigator.split_ratio
            try:
                navigator.dispatch(action)
            except (GatewayError, FormatterError) as exc:
                logger.warning("%s failed: %s", action.value, exc)
                navigator.status_message = str(exc)
            if navigator.split_ratio != split_ratio:
                callbacks.save_split_ratio(navigator.split_ratio)
            view.dirty = True
