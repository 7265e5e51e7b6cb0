"""Help overlay content and modal rendering.

Help rows are derived from the active keymap so remapped keys show up.
Rendering helpers here are presentation-only and side-effect free.
"""

from __future__ import annotations

from ..actions import ACTION_DESCRIPTIONS, DiffAction, GlobalAction, HelpAction, HistoryAction
from ..ansi import ansi_display_width, clip_ansi_line
from ..input.keymap import Keymap

HELP_TITLE = "blake help"
HELP_KEY_COLUMN = 18
_SECTION_SGR = "\033[1;38;5;81m"
_KEY_SGR = "\033[38;5;229m"
_FRAME_SGR = "\033[38;5;45m"
_RESET = "\033[0m"

HELP_SECTIONS = (
    ("History", HistoryAction),
    ("Diff", DiffAction),
    ("Help", HelpAction),
    ("Global", GlobalAction),
)


def _keys_label(keymap: Keymap, action) -> str:
    return " / ".join(str(binding) for binding in keymap.keys_for(action))


def build_help_lines(keymap: Keymap) -> tuple[str, ...]:
    """Return styled help rows: one section per mode, one row per bound action."""
    lines: list[str] = []
    for title, action_type in HELP_SECTIONS:
        rows: list[str] = []
        for action in action_type:
            keys = _keys_label(keymap, action)
            if not keys:
                continue
            padding = " " * max(1, HELP_KEY_COLUMN - len(keys))
            rows.append(f"  {_KEY_SGR}{keys}{_RESET}{padding}{ACTION_DESCRIPTIONS[action]}")
        if not rows:
            continue
        if lines:
            lines.append("")
        lines.append(f"{_SECTION_SGR}{title}{_RESET}")
        lines.extend(rows)
    return tuple(lines)


def render_help_overlay(lines: tuple[str, ...], scroll: int, width: int, height: int) -> str:
    """Return escape sequences drawing a centered help modal over the screen.

    ``scroll`` is the first help row shown; the caller keeps it in range.
    """
    out: list[str] = []
    modal_w = min(64, max(20, width - 4))
    modal_h = min(max(6, len(lines) + 3), max(6, height - 2))
    x = max(0, (width - modal_w) // 2)
    y = max(0, (height - modal_h) // 2)
    inner_w = max(1, modal_w - 2)
    inner_h = max(1, modal_h - 2)

    out.append(f"\033[{y + 1};{x + 1}H{_FRAME_SGR}╭")
    out.append("─" * inner_w)
    out.append(f"╮{_RESET}")
    for i in range(inner_h):
        out.append(f"\033[{y + 2 + i};{x + 1}H{_FRAME_SGR}│{_RESET}")
        out.append(" " * inner_w)
        out.append(f"{_FRAME_SGR}│{_RESET}")
    out.append(f"\033[{y + modal_h};{x + 1}H{_FRAME_SGR}╰")
    out.append("─" * inner_w)
    out.append(f"╯{_RESET}")

    title = f" {HELP_TITLE} (q to close) "
    title_x = x + max(1, (modal_w - ansi_display_width(title)) // 2)
    out.append(f"\033[{y + 1};{title_x + 1}H\033[1m{clip_ansi_line(title, inner_w)}{_RESET}")

    body_rows = inner_h
    start = max(0, min(scroll, max(0, len(lines) - 1)))
    for i, text in enumerate(lines[start : start + body_rows]):
        out.append(f"\033[{y + 2 + i};{x + 3}H")
        out.append(clip_ansi_line(text, max(1, inner_w - 2)))
        out.append(_RESET)

    return "".join(out)
