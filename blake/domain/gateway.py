"""Capabilities the navigator consumes: a git backend and a diff formatter.

Both are abstract so the navigator can run against in-memory fakes.
Implementations raise ``GatewayError`` / ``FormatterError`` on failure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from .blame import BlameFrame
from .commit import CommitHash, CommitInfo, Diff


class GitGateway(ABC):
    @abstractmethod
    def blame(self, file_path: Path, commit: CommitHash) -> BlameFrame:
        """Return line attribution of ``file_path`` as of ``commit``."""

    @abstractmethod
    def diff(self, commit: CommitHash) -> Diff:
        """Return the patch introduced by ``commit`` against its first parent."""

    @abstractmethod
    def commit_info(self, commit: CommitHash) -> CommitInfo:
        """Return metadata for ``commit`` including its first parent, if any."""

    def remote_commit_url(self, commit: CommitHash) -> str | None:
        """Return a browsable URL for ``commit`` when the remote host is known."""
        return None


class DiffFormatter(ABC):
    @abstractmethod
    def format(self, diff: Diff) -> list[str]:
        """Turn a raw patch into display-ready (possibly ANSI-styled) lines."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return whether the formatter can run in this environment."""
