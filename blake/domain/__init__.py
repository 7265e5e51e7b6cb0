"""Domain model: commits, blame frames, and backend capabilities."""

from .blame import BlameEntry, BlameFrame, BlameStack
from .commit import CommitHash, CommitInfo, Diff
from .gateway import DiffFormatter, GitGateway

__all__ = [
    "BlameEntry",
    "BlameFrame",
    "BlameStack",
    "CommitHash",
    "CommitInfo",
    "Diff",
    "DiffFormatter",
    "GitGateway",
]
