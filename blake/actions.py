"""Interaction modes and the per-mode action vocabularies.

Enum values double as the action names used in the keymap config file.
An unbound key resolves to ``None``, which dispatch treats as a no-op.
"""

from __future__ import annotations

from enum import Enum
from typing import Union


class Mode(Enum):
    HISTORY = "history"
    DIFF = "diff"
    HELP = "help"

    @property
    def label(self) -> str:
        """Short upper-case name shown in the status bar."""
        return self.name


class GlobalAction(Enum):
    QUIT = "Quit"
    SHOW_HELP = "ShowHelp"


class HistoryAction(Enum):
    CURSOR_UP = "CursorUp"
    CURSOR_DOWN = "CursorDown"
    CURSOR_10_UP = "Cursor10Up"
    CURSOR_10_DOWN = "Cursor10Down"
    CURSOR_PAGE_UP = "CursorPageUp"
    CURSOR_PAGE_DOWN = "CursorPageDown"
    CURSOR_TOP = "CursorTop"
    CURSOR_BOTTOM = "CursorBottom"
    DRILL_DOWN = "DrillDown"
    GO_BACK = "GoBack"
    SHOW_DIFF = "ShowDiff"


class DiffAction(Enum):
    SCROLL_UP = "ScrollUp"
    SCROLL_DOWN = "ScrollDown"
    SCROLL_10_UP = "Scroll10Up"
    SCROLL_10_DOWN = "Scroll10Down"
    SCROLL_PAGE_UP = "ScrollPageUp"
    SCROLL_PAGE_DOWN = "ScrollPageDown"
    SCROLL_TOP = "ScrollTop"
    SCROLL_BOTTOM = "ScrollBottom"
    SCROLL_LEFT = "ScrollLeft"
    SCROLL_RIGHT = "ScrollRight"
    SPLIT_NARROWER = "SplitNarrower"
    SPLIT_WIDER = "SplitWider"
    OPEN_IN_BROWSER = "OpenInBrowser"
    CLOSE = "Close"


class HelpAction(Enum):
    SCROLL_UP = "ScrollUp"
    SCROLL_DOWN = "ScrollDown"
    SCROLL_10_UP = "Scroll10Up"
    SCROLL_10_DOWN = "Scroll10Down"
    SCROLL_TOP = "ScrollTop"
    SCROLL_BOTTOM = "ScrollBottom"
    CLOSE = "Close"


Action = Union[GlobalAction, HistoryAction, DiffAction, HelpAction]

ACTION_DESCRIPTIONS: dict[Action, str] = {
    GlobalAction.QUIT: "Quit",
    GlobalAction.SHOW_HELP: "Show this help",
    HistoryAction.CURSOR_DOWN: "Cursor down",
    HistoryAction.CURSOR_UP: "Cursor up",
    HistoryAction.CURSOR_10_DOWN: "Cursor 10 down",
    HistoryAction.CURSOR_10_UP: "Cursor 10 up",
    HistoryAction.CURSOR_PAGE_DOWN: "Page down",
    HistoryAction.CURSOR_PAGE_UP: "Page up",
    HistoryAction.CURSOR_TOP: "Go to top",
    HistoryAction.CURSOR_BOTTOM: "Go to bottom",
    HistoryAction.DRILL_DOWN: "Drill down (blame at parent commit)",
    HistoryAction.GO_BACK: "Go back",
    HistoryAction.SHOW_DIFF: "Show diff of line's commit",
    DiffAction.SCROLL_DOWN: "Scroll down",
    DiffAction.SCROLL_UP: "Scroll up",
    DiffAction.SCROLL_10_DOWN: "Scroll 10 down",
    DiffAction.SCROLL_10_UP: "Scroll 10 up",
    DiffAction.SCROLL_PAGE_DOWN: "Page down",
    DiffAction.SCROLL_PAGE_UP: "Page up",
    DiffAction.SCROLL_TOP: "Scroll to top",
    DiffAction.SCROLL_BOTTOM: "Scroll to bottom",
    DiffAction.SCROLL_LEFT: "Scroll left",
    DiffAction.SCROLL_RIGHT: "Scroll right",
    DiffAction.SPLIT_NARROWER: "Narrow blame pane",
    DiffAction.SPLIT_WIDER: "Widen blame pane",
    DiffAction.OPEN_IN_BROWSER: "Open commit in browser",
    DiffAction.CLOSE: "Close diff",
    HelpAction.SCROLL_DOWN: "Scroll down",
    HelpAction.SCROLL_UP: "Scroll up",
    HelpAction.SCROLL_10_DOWN: "Scroll 10 down",
    HelpAction.SCROLL_10_UP: "Scroll 10 up",
    HelpAction.SCROLL_TOP: "Scroll to top",
    HelpAction.SCROLL_BOTTOM: "Scroll to bottom",
    HelpAction.CLOSE: "Close help",
}
