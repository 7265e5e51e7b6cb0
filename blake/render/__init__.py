"""Rendering engine for the blame view, split diff pane, and status bar.

Defines render context data and composes fully rendered ANSI frames.
Nothing here reads or mutates navigator state; the loop builds a
``ScreenContext`` snapshot for every frame.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

from ..actions import Mode
from ..ansi import fit_ansi_line, selected_with_ansi, slice_ansi_line
from ..domain import BlameEntry, BlameFrame, CommitInfo
from .help import render_help_overlay

AUTHOR_WIDTH = 12
LINE_NUMBER_WIDTH = 5
# Oldest to newest quartile of the frame's timestamp range.
AGE_COLOR_SGR: tuple[str, ...] = ("\033[90m", "\033[37m", "\033[97m", "\033[33m")
AUTHOR_SGR = "\033[34m"
DATE_SGR = "\033[32m"
LINE_NUMBER_SGR = "\033[90m"
DIFF_HEADER_SGR = "\033[1;38;5;81m"
DIVIDER = "\033[2m│\033[0m"
RESET = "\033[0m"


@dataclass
class ScreenContext:
    width: int
    height: int
    mode: Mode
    frame: BlameFrame | None
    blame_start: int = 0
    depth: int = 0
    hash_chain: str | None = None
    status_message: str = ""
    split_ratio: int | None = None
    diff_lines: Sequence[str] = ()
    diff_selected: int = 0
    diff_start: int = 0
    diff_scroll_x: int = 0
    diff_commit: CommitInfo | None = None
    help_lines: tuple[str, ...] = ()
    help_scroll: int = 0


def follow_selection(start: int, selected: int, rows: int, total: int) -> int:
    """Return the smallest scroll change that keeps ``selected`` inside the viewport."""
    rows = max(1, rows)
    if selected < start:
        start = selected
    elif selected >= start + rows:
        start = selected - rows + 1
    return max(0, min(start, max(0, total - rows)))


def age_color(timestamp: int, oldest: int, newest: int) -> str:
    span = newest - oldest
    ratio = 1.0 if span <= 0 else (timestamp - oldest) / span
    index = max(0, min(len(AGE_COLOR_SGR) - 1, int(ratio * len(AGE_COLOR_SGR))))
    return AGE_COLOR_SGR[index]


def format_date(timestamp: int) -> str:
    try:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d")
    except (OverflowError, OSError, ValueError):
        return "----------"


def truncate_author(author: str, width: int = AUTHOR_WIDTH) -> str:
    if len(author) <= width:
        return author
    return author[: width - 2] + ".."


def format_blame_row(entry: BlameEntry, hash_sgr: str) -> str:
    return (
        f"{hash_sgr}{entry.commit_hash.short()}{RESET} "
        f"{AUTHOR_SGR}{truncate_author(entry.author):>{AUTHOR_WIDTH}}{RESET} "
        f"{DATE_SGR}{format_date(entry.timestamp)}{RESET} "
        f"{LINE_NUMBER_SGR}{entry.line_number:>{LINE_NUMBER_WIDTH}}{RESET} "
        f"{entry.content}"
    )


def blame_view_rows(frame: BlameFrame | None, start: int, rows: int, width: int) -> list[str]:
    """Return exactly ``rows`` rows of ``width`` columns for the blame table."""
    out: list[str] = []
    entries = frame.entries if frame is not None else ()
    if entries:
        oldest = min(entry.timestamp for entry in entries)
        newest = max(entry.timestamp for entry in entries)
    for row in range(rows):
        index = start + row
        if index >= len(entries):
            out.append(" " * width)
            continue
        entry = entries[index]
        text = fit_ansi_line(format_blame_row(entry, age_color(entry.timestamp, oldest, newest)), width)
        if index == frame.selected_line:
            text = selected_with_ansi(text)
        out.append(text)
    return out


def diff_header(commit: CommitInfo | None) -> str:
    if commit is None:
        return f"{DIFF_HEADER_SGR}Diff{RESET}"
    return (
        f"{DIFF_HEADER_SGR}{commit.hash.short()}{RESET} "
        f"{AUTHOR_SGR}{commit.author}{RESET} "
        f"{DATE_SGR}{format_date(commit.timestamp)}{RESET} "
        f"{commit.summary}"
    )


def diff_view_rows(context: ScreenContext, rows: int, width: int) -> list[str]:
    """Return the diff pane: one commit header row followed by the patch viewport."""
    out = [fit_ansi_line(diff_header(context.diff_commit), width)]
    lines = context.diff_lines
    for row in range(max(0, rows - 1)):
        index = context.diff_start + row
        if index >= len(lines):
            out.append(" " * width)
            continue
        text = slice_ansi_line(lines[index].rstrip("\r\n"), context.diff_scroll_x, width)
        text = fit_ansi_line(text, width)
        if index == context.diff_selected:
            text = selected_with_ansi(text)
        out.append(text)
    return out[:rows]


def build_status_line(left_text: str, width: int, right_text: str = "│ ? Help") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def status_text(context: ScreenContext) -> tuple[str, str]:
    """Return the left and right halves of the status bar."""
    parts = [f" {context.mode.label} "]
    if context.depth > 1:
        parts.append(f"[depth: {context.depth}]")
    frame = context.frame
    if frame is not None:
        parts.append(frame.file_path.as_posix())
    if context.hash_chain:
        parts.append(context.hash_chain)
    if context.status_message:
        parts.append(f"│ {context.status_message}")
    left = " ".join(parts)

    if frame is not None and len(frame):
        position = f"{frame.selected_line + 1}/{len(frame)}"
    else:
        position = "0/0"
    return left, f"{position} │ ? Help"


def render_screen(context: ScreenContext) -> str:
    """Compose one full frame, starting with a home/clear sequence."""
    out: list[str] = ["\033[H\033[J"]
    line_width = max(2, context.width - 1)
    content_rows = max(1, context.height - 1)

    if context.split_ratio is None:
        rows = blame_view_rows(context.frame, context.blame_start, content_rows, line_width)
    else:
        left_width = max(1, (line_width * context.split_ratio) // 100)
        right_width = max(1, line_width - left_width - 1)
        left_rows = blame_view_rows(context.frame, context.blame_start, content_rows, left_width)
        right_rows = diff_view_rows(context, content_rows, right_width)
        rows = [f"{left}{DIVIDER}{right}" for left, right in zip(left_rows, right_rows)]

    for row in rows:
        out.append(row)
        out.append("\r\n")

    left, right = status_text(context)
    out.append("\033[7m")
    out.append(build_status_line(left, context.width, right))
    out.append(RESET)

    if context.mode is Mode.HELP:
        out.append(render_help_overlay(context.help_lines, context.help_scroll, context.width, context.height))
    return "".join(out)
