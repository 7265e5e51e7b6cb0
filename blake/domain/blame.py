"""Blame frames and the LIFO history of visited revisions.

A frame is one file's line attribution at one commit plus a cursor.
The stack holds frames oldest first; only the top frame is ever edited.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from .commit import CommitHash

HASH_CHAIN_SEPARATOR = " -> "


@dataclass(frozen=True)
class BlameEntry:
    """One attributed line.

    ``source_path`` is the file's path in ``commit_hash``; ``parent_path`` is
    its path in the parent commit the line came from, when git reports one.
    """

    line_number: int
    commit_hash: CommitHash
    author: str
    timestamp: int
    content: str
    source_path: Path | None = None
    parent_path: Path | None = None


@dataclass
class BlameFrame:
    """Attribution of ``file_path`` at ``commit_hash`` with a selection cursor.

    ``entries`` is stored as a tuple in ascending line order and never
    reordered. ``selected_line`` is clamped into range by every mutation.
    """

    file_path: Path
    commit_hash: CommitHash
    entries: Sequence[BlameEntry] = ()
    selected_line: int = 0

    def __post_init__(self) -> None:
        self.entries = tuple(self.entries)
        self.selected_line = self._clamp(self.selected_line)

    def __len__(self) -> int:
        return len(self.entries)

    def _clamp(self, index: int) -> int:
        if not self.entries:
            return 0
        return max(0, min(index, len(self.entries) - 1))

    def select(self, index: int) -> int:
        """Move the cursor to ``index`` (clamped) and return the new position."""
        self.selected_line = self._clamp(index)
        return self.selected_line

    def move(self, delta: int) -> int:
        """Shift the cursor by ``delta`` lines, clamped to the entry range."""
        return self.select(self.selected_line + delta)

    def select_last(self) -> int:
        return self.select(len(self.entries) - 1)

    def selected_entry(self) -> BlameEntry | None:
        if not self.entries:
            return None
        return self.entries[self.selected_line]


class BlameStack:
    """History of visited frames, newest on top.

    ``pop`` refuses to remove the bottom frame, so once a frame has been
    pushed the depth never drops back to zero.
    """

    def __init__(self) -> None:
        self._frames: list[BlameFrame] = []

    def push(self, frame: BlameFrame) -> None:
        self._frames.append(frame)

    def pop(self) -> BlameFrame | None:
        """Remove and return the top frame, or ``None`` when only the root remains."""
        if len(self._frames) <= 1:
            return None
        return self._frames.pop()

    def current(self) -> BlameFrame | None:
        if not self._frames:
            return None
        return self._frames[-1]

    def depth(self) -> int:
        return len(self._frames)

    def is_empty(self) -> bool:
        return not self._frames

    def frames(self) -> Iterator[BlameFrame]:
        """Iterate frames from oldest to newest."""
        return iter(self._frames)

    def hash_chain(self) -> str | None:
        """Return ``"abc1234 -> def5678 -> ..."`` for two or more frames."""
        if len(self._frames) <= 1:
            return None
        return HASH_CHAIN_SEPARATOR.join(frame.commit_hash.short() for frame in self._frames)
