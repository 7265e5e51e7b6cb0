"""Navigator: owns blame history, the active mode, and the diff session.

``dispatch`` consumes one resolved action and mutates state. Backend calls
happen before any mutation, so a raised ``GatewayError`` or
``FormatterError`` leaves the navigator exactly as it was.
"""

from __future__ import annotations

import logging
import webbrowser
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from ..actions import Action, DiffAction, GlobalAction, HelpAction, HistoryAction, Mode
from ..domain import BlameEntry, BlameFrame, BlameStack, CommitHash, CommitInfo, DiffFormatter, GitGateway
from ..errors import FormatterError
from ..input.keymap import Keymap
from ..render.help import build_help_lines
from .dispatch import ActionBinding, ActionRegistry

logger = logging.getLogger(__name__)

STEP = 1
BIG_STEP = 10
PAGE_STEP = 20
HORIZONTAL_STEP = 8
DEFAULT_SPLIT_RATIO = 50
MIN_SPLIT_RATIO = 20
MAX_SPLIT_RATIO = 80
SPLIT_RATIO_STEP = 5


def clamp_split_ratio(ratio: int) -> int:
    return max(MIN_SPLIT_RATIO, min(MAX_SPLIT_RATIO, int(ratio)))


@dataclass(frozen=True)
class FullScreen:
    pass


@dataclass(frozen=True)
class Split:
    """Blame pane on the left taking ``ratio`` percent, diff on the right."""

    ratio: int = DEFAULT_SPLIT_RATIO


Layout = Union[FullScreen, Split]
FULL_SCREEN = FullScreen()


@dataclass
class DiffSession:
    lines: list[str] = field(default_factory=list)
    commit: CommitInfo | None = None
    selected_line: int = 0
    scroll_x: int = 0
    split_ratio: int = DEFAULT_SPLIT_RATIO

    def select(self, index: int) -> int:
        if not self.lines:
            self.selected_line = 0
        else:
            self.selected_line = max(0, min(index, len(self.lines) - 1))
        return self.selected_line

    def move(self, delta: int) -> int:
        return self.select(self.selected_line + delta)


def _parent_path(entry: BlameEntry, frame: BlameFrame) -> Path:
    """Path of the selected line's file in the parent revision.

    A line last touched by a rename commit only exists under its old name in
    the parent, so the reported previous path wins over the current name.
    """
    if entry.parent_path is not None:
        return entry.parent_path
    if entry.source_path is not None:
        return entry.source_path
    return frame.file_path


class Navigator:
    """Mode/action state machine over a ``BlameStack``.

    ``gateway`` and ``formatter`` are injected capabilities; tests pass
    in-memory fakes. ``open_url`` is called for ``OpenInBrowser``.
    """

    def __init__(
        self,
        gateway: GitGateway,
        formatter: DiffFormatter,
        keymap: Keymap,
        *,
        split_ratio: int = DEFAULT_SPLIT_RATIO,
        open_url: Callable[[str], object] = webbrowser.open,
    ) -> None:
        self.gateway = gateway
        self.formatter = formatter
        self.keymap = keymap
        self.open_url = open_url

        self.mode = Mode.HISTORY
        self.blame_stack = BlameStack()
        self.diff_session: DiffSession | None = None
        self.layout: Layout = FULL_SCREEN
        self.split_ratio = clamp_split_ratio(split_ratio)
        self.help_lines = build_help_lines(keymap)
        self.help_scroll = 0
        self.status_generation = 0
        self._status_message = ""
        self.should_quit = False

        self._registry = ActionRegistry().register_bindings(
            ActionBinding((GlobalAction.QUIT,), self._quit),
            ActionBinding((GlobalAction.SHOW_HELP,), self._show_help),
            ActionBinding((HistoryAction.CURSOR_UP,), lambda: self._move_cursor(-STEP)),
            ActionBinding((HistoryAction.CURSOR_DOWN,), lambda: self._move_cursor(STEP)),
            ActionBinding((HistoryAction.CURSOR_10_UP,), lambda: self._move_cursor(-BIG_STEP)),
            ActionBinding((HistoryAction.CURSOR_10_DOWN,), lambda: self._move_cursor(BIG_STEP)),
            ActionBinding((HistoryAction.CURSOR_PAGE_UP,), lambda: self._move_cursor(-PAGE_STEP)),
            ActionBinding((HistoryAction.CURSOR_PAGE_DOWN,), lambda: self._move_cursor(PAGE_STEP)),
            ActionBinding((HistoryAction.CURSOR_TOP,), self._cursor_top),
            ActionBinding((HistoryAction.CURSOR_BOTTOM,), self._cursor_bottom),
            ActionBinding((HistoryAction.DRILL_DOWN,), self.drill_down),
            ActionBinding((HistoryAction.GO_BACK,), self.go_back),
            ActionBinding((HistoryAction.SHOW_DIFF,), self.show_diff),
            ActionBinding((DiffAction.SCROLL_UP,), lambda: self._move_diff(-STEP)),
            ActionBinding((DiffAction.SCROLL_DOWN,), lambda: self._move_diff(STEP)),
            ActionBinding((DiffAction.SCROLL_10_UP,), lambda: self._move_diff(-BIG_STEP)),
            ActionBinding((DiffAction.SCROLL_10_DOWN,), lambda: self._move_diff(BIG_STEP)),
            ActionBinding((DiffAction.SCROLL_PAGE_UP,), lambda: self._move_diff(-PAGE_STEP)),
            ActionBinding((DiffAction.SCROLL_PAGE_DOWN,), lambda: self._move_diff(PAGE_STEP)),
            ActionBinding((DiffAction.SCROLL_TOP,), self._diff_top),
            ActionBinding((DiffAction.SCROLL_BOTTOM,), self._diff_bottom),
            ActionBinding((DiffAction.SCROLL_LEFT,), lambda: self._scroll_diff_x(-HORIZONTAL_STEP)),
            ActionBinding((DiffAction.SCROLL_RIGHT,), lambda: self._scroll_diff_x(HORIZONTAL_STEP)),
            ActionBinding((DiffAction.SPLIT_NARROWER,), lambda: self._resize_split(-SPLIT_RATIO_STEP)),
            ActionBinding((DiffAction.SPLIT_WIDER,), lambda: self._resize_split(SPLIT_RATIO_STEP)),
            ActionBinding((DiffAction.OPEN_IN_BROWSER,), self._open_in_browser),
            ActionBinding((DiffAction.CLOSE,), self.close_diff),
            ActionBinding((HelpAction.SCROLL_UP,), lambda: self._scroll_help(-STEP)),
            ActionBinding((HelpAction.SCROLL_DOWN,), lambda: self._scroll_help(STEP)),
            ActionBinding((HelpAction.SCROLL_10_UP,), lambda: self._scroll_help(-BIG_STEP)),
            ActionBinding((HelpAction.SCROLL_10_DOWN,), lambda: self._scroll_help(BIG_STEP)),
            ActionBinding((HelpAction.SCROLL_TOP,), lambda: self._scroll_help_to(0)),
            ActionBinding((HelpAction.SCROLL_BOTTOM,), lambda: self._scroll_help_to(len(self.help_lines) - 1)),
            ActionBinding((HelpAction.CLOSE,), self._close_help),
        )

    @property
    def status_message(self) -> str:
        return self._status_message

    @status_message.setter
    def status_message(self, message: str) -> None:
        # Bumped on every set so repeating the same text restarts its display time.
        self._status_message = message
        self.status_generation += 1

    @classmethod
    def start(
        cls,
        gateway: GitGateway,
        formatter: DiffFormatter,
        keymap: Keymap,
        file_path: Path,
        **kwargs,
    ) -> Navigator:
        """Create a navigator whose root frame is ``file_path`` blamed at ``HEAD``.

        Raises ``FormatterError`` when the formatter cannot run; backend
        errors from the initial blame propagate unchanged.
        """
        if not formatter.is_available():
            raise FormatterError(f"diff formatter {type(formatter).__name__} is not available")
        navigator = cls(gateway, formatter, keymap, **kwargs)
        navigator.blame_stack.push(gateway.blame(file_path, CommitHash.HEAD))
        return navigator

    def current_frame(self) -> BlameFrame | None:
        return self.blame_stack.current()

    def dispatch(self, action: Action | None) -> None:
        """Apply one action; ``None`` (an unbound key) is a no-op."""
        if action is None:
            return
        self.status_message = ""
        if not self._registry.dispatch(action):
            logger.debug("no handler for %r", action)

    def _quit(self) -> None:
        self.should_quit = True

    def _show_help(self) -> None:
        self.mode = Mode.HELP
        self.help_scroll = 0

    def _close_help(self) -> None:
        self.mode = Mode.HISTORY

    def _scroll_help_to(self, index: int) -> None:
        self.help_scroll = max(0, min(index, len(self.help_lines) - 1))

    def _scroll_help(self, delta: int) -> None:
        self._scroll_help_to(self.help_scroll + delta)

    def _move_cursor(self, delta: int) -> None:
        frame = self.blame_stack.current()
        if frame is not None:
            frame.move(delta)

    def _cursor_top(self) -> None:
        frame = self.blame_stack.current()
        if frame is not None:
            frame.select(0)

    def _cursor_bottom(self) -> None:
        frame = self.blame_stack.current()
        if frame is not None:
            frame.select_last()

    def _selected_commit(self) -> CommitHash | None:
        frame = self.blame_stack.current()
        if frame is None:
            return None
        entry = frame.selected_entry()
        return None if entry is None else entry.commit_hash

    def drill_down(self) -> None:
        """Push the blame of the selected line's file at its commit's parent."""
        frame = self.blame_stack.current()
        entry = None if frame is None else frame.selected_entry()
        if frame is None or entry is None:
            return

        info = self.gateway.commit_info(entry.commit_hash)
        if info.is_root:
            self.status_message = f"{info.hash.short()} is a root commit"
            return

        source_path = _parent_path(entry, frame)
        parent_frame = self.gateway.blame(source_path, info.parent)
        parent_frame.select(frame.selected_line)
        self.blame_stack.push(parent_frame)
        logger.debug(
            "drilled into %s at %s (depth %d)",
            source_path,
            info.parent.short(),
            self.blame_stack.depth(),
        )

    def go_back(self) -> None:
        if self.blame_stack.depth() <= 1:
            self.status_message = "Already at the newest revision"
            return
        self.blame_stack.pop()

    def show_diff(self) -> None:
        """Open the split diff view for the selected line's commit."""
        commit = self._selected_commit()
        if commit is None:
            return

        diff = self.gateway.diff(commit)
        lines = self.formatter.format(diff)
        info = self.gateway.commit_info(commit)

        self.diff_session = DiffSession(
            lines=list(lines),
            commit=info,
            selected_line=0,
            split_ratio=self.split_ratio,
        )
        self.layout = Split(self.split_ratio)
        self.mode = Mode.DIFF

    def close_diff(self) -> None:
        self.diff_session = None
        self.layout = FULL_SCREEN
        self.mode = Mode.HISTORY

    def _move_diff(self, delta: int) -> None:
        if self.diff_session is not None:
            self.diff_session.move(delta)

    def _diff_top(self) -> None:
        if self.diff_session is not None:
            self.diff_session.select(0)

    def _diff_bottom(self) -> None:
        if self.diff_session is not None:
            self.diff_session.select(len(self.diff_session.lines) - 1)

    def _scroll_diff_x(self, delta: int) -> None:
        if self.diff_session is not None:
            self.diff_session.scroll_x = max(0, self.diff_session.scroll_x + delta)

    def _resize_split(self, delta: int) -> None:
        self.split_ratio = clamp_split_ratio(self.split_ratio + delta)
        if self.diff_session is not None:
            self.diff_session.split_ratio = self.split_ratio
        if isinstance(self.layout, Split):
            self.layout = Split(self.split_ratio)

    def _open_in_browser(self) -> None:
        session = self.diff_session
        if session is None or session.commit is None:
            return
        url = self.gateway.remote_commit_url(session.commit.hash)
        if url is None:
            self.status_message = "No browsable remote for this repository"
            return
        self.open_url(url)
        self.status_message = f"Opened {url}"
