"""Commit identifiers, commit metadata, and raw diff payloads."""

from __future__ import annotations

from dataclasses import dataclass

SHORT_HASH_LENGTH = 7


class CommitHash(str):
    """Commit identifier (full object id or any revision expression)."""

    HEAD: CommitHash

    def short(self) -> str:
        """Return the abbreviated identifier used in status lines."""
        return self[:SHORT_HASH_LENGTH]

    def __repr__(self) -> str:
        return f"CommitHash({str(self)!r})"


CommitHash.HEAD = CommitHash("HEAD")


@dataclass(frozen=True)
class CommitInfo:
    hash: CommitHash
    parent: CommitHash | None
    author: str
    timestamp: int
    message: str

    @property
    def summary(self) -> str:
        """First line of the commit message."""
        for line in self.message.splitlines():
            stripped = line.strip()
            if stripped:
                return stripped
        return ""

    @property
    def is_root(self) -> bool:
        return self.parent is None


@dataclass(frozen=True)
class Diff:
    """Unified patch text as produced by the backend."""

    text: str

    def is_empty(self) -> bool:
        return not self.text.strip()
