"""Git backend implemented on top of the ``git`` command line.

Blame uses ``--line-porcelain`` so every line carries its own metadata.
Diffs come from ``git diff-tree`` (plumbing) so user color/pager config
never leaks into the patch text handed to formatters.
"""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path

from .domain import BlameEntry, BlameFrame, CommitHash, CommitInfo, Diff, GitGateway
from .errors import GatewayError

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 30.0
_PORCELAIN_HEADER_RE = re.compile(r"^([0-9a-f]{40}|[0-9a-f]{64}) (\d+) (\d+)(?: (\d+))?$")
_COMMIT_FORMAT = "%H%x00%P%x00%an%x00%at%x00%B"
_SCP_REMOTE_RE = re.compile(r"^(?:[\w.-]+@)?(?P<host>[\w.-]+):(?P<path>[^/].*)$")
_URL_REMOTE_RE = re.compile(r"^(?:https?|ssh|git)://(?:[^@/]+@)?(?P<host>[\w.-]+)(?::\d+)?/(?P<path>.+)$")
_COMMIT_URL_TEMPLATES = {
    "github.com": "https://github.com/{path}/commit/{commit}",
    "gitlab.com": "https://gitlab.com/{path}/-/commit/{commit}",
    "bitbucket.org": "https://bitbucket.org/{path}/commits/{commit}",
}


def _run_git(repo_root: Path, args: list[str], timeout_seconds: float) -> str:
    command = ["git", "-C", str(repo_root), *args]
    logger.debug("running %s", " ".join(command))
    try:
        proc = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        raise GatewayError(f"git {args[0]} failed: {exc}") from exc
    if proc.returncode != 0:
        detail = proc.stderr.strip().splitlines()
        message = detail[-1] if detail else f"exit status {proc.returncode}"
        logger.info("git %s failed: %s", args[0], message)
        raise GatewayError(f"git {args[0]}: {message}")
    return proc.stdout


_C_ESCAPES = {
    "a": b"\a",
    "b": b"\b",
    "f": b"\f",
    "n": b"\n",
    "r": b"\r",
    "t": b"\t",
    "v": b"\v",
    '"': b'"',
    "\\": b"\\",
}


def unquote_git_path(value: str) -> str:
    """Decode a path git printed in C-quoted form (``"caf\\303\\251.py"``).

    Unquoted values are returned unchanged. Octal escapes are raw bytes of
    the UTF-8 encoded name.
    """
    if len(value) < 2 or not (value.startswith('"') and value.endswith('"')):
        return value
    body = value[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        if ch != "\\" or i + 1 == len(body):
            out += ch.encode("utf-8")
            i += 1
            continue
        nxt = body[i + 1]
        octal = body[i + 1 : i + 4]
        if len(octal) == 3 and all(c in "01234567" for c in octal):
            out.append(int(octal, 8) & 0xFF)
            i += 4
        elif nxt in _C_ESCAPES:
            out += _C_ESCAPES[nxt]
            i += 2
        else:
            out += nxt.encode("utf-8")
            i += 2
    return out.decode("utf-8", errors="surrogateescape")


def _previous_path(value: str | None) -> Path | None:
    # "previous <sha> <path>"; the path may itself contain spaces.
    if not value:
        return None
    _sha, _, path = value.partition(" ")
    return Path(unquote_git_path(path)) if path else None


def parse_line_porcelain(output: str, file_path: Path) -> list[BlameEntry]:
    """Parse ``git blame --line-porcelain`` output into entries ordered by line."""
    entries: list[BlameEntry] = []
    header: re.Match[str] | None = None
    fields: dict[str, str] = {}

    for raw_line in output.split("\n"):
        if header is None:
            header = _PORCELAIN_HEADER_RE.match(raw_line)
            fields = {}
            continue
        if raw_line.startswith("\t"):
            filename = unquote_git_path(fields.get("filename", ""))
            try:
                timestamp = int(fields.get("author-time", "0"))
            except ValueError:
                timestamp = 0
            entries.append(
                BlameEntry(
                    line_number=int(header.group(3)),
                    commit_hash=CommitHash(header.group(1)),
                    author=fields.get("author", "Unknown"),
                    timestamp=timestamp,
                    content=raw_line[1:],
                    source_path=Path(filename) if filename else file_path,
                    parent_path=_previous_path(fields.get("previous")),
                )
            )
            header = None
            continue
        key, _, value = raw_line.partition(" ")
        fields[key] = value

    entries.sort(key=lambda entry: entry.line_number)
    return entries


def parse_commit_record(output: str) -> CommitInfo:
    """Parse the NUL-separated ``%H %P %an %at %B`` record used by ``commit_info``."""
    parts = output.split("\x00", 4)
    if len(parts) < 5:
        raise GatewayError("unexpected git show output")
    commit, parents, author, timestamp, message = parts
    parent_list = parents.split()
    try:
        when = int(timestamp.strip())
    except ValueError:
        when = 0
    return CommitInfo(
        hash=CommitHash(commit.strip()),
        parent=CommitHash(parent_list[0]) if parent_list else None,
        author=author,
        timestamp=when,
        message=message.rstrip("\n"),
    )


def commit_url_for_remote(remote_url: str, commit: str) -> str | None:
    """Build a web URL for ``commit`` from an ssh/https remote on a known host."""
    remote_url = remote_url.strip()
    match = _URL_REMOTE_RE.match(remote_url) or _SCP_REMOTE_RE.match(remote_url)
    if match is None:
        return None
    template = _COMMIT_URL_TEMPLATES.get(match.group("host").lower())
    if template is None:
        return None
    path = match.group("path").strip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")]
    if not path:
        return None
    return template.format(path=path, commit=commit)


class SubprocessGitGateway(GitGateway):
    """``GitGateway`` that shells out to ``git`` inside one repository."""

    def __init__(self, repo_root: Path, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> None:
        self.repo_root = repo_root
        self.timeout_seconds = timeout_seconds

    @classmethod
    def discover(cls, path: Path, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> SubprocessGitGateway:
        """Open the repository containing ``path`` (a file or directory)."""
        start = path if path.is_dir() else path.parent
        output = _run_git(start.resolve(), ["rev-parse", "--show-toplevel"], timeout_seconds)
        top = output.strip()
        if not top:
            raise GatewayError(f"not inside a git repository: {path}")
        return cls(Path(top).resolve(), timeout_seconds)

    def _git(self, *args: str) -> str:
        return _run_git(self.repo_root, list(args), self.timeout_seconds)

    def relative_path(self, path: Path) -> Path:
        """Return ``path`` relative to the repository root."""
        resolved = path.resolve()
        try:
            return resolved.relative_to(self.repo_root)
        except ValueError as exc:
            raise GatewayError(f"{path} is outside repository {self.repo_root}") from exc

    def resolve(self, commit: CommitHash) -> CommitHash:
        output = self._git("rev-parse", "--verify", "--quiet", f"{commit}^{{commit}}")
        return CommitHash(output.strip())

    def blame(self, file_path: Path, commit: CommitHash) -> BlameFrame:
        resolved = self.resolve(commit)
        output = self._git("blame", "--line-porcelain", str(resolved), "--", file_path.as_posix())
        entries = parse_line_porcelain(output, file_path)
        logger.debug("blamed %s at %s: %d lines", file_path, resolved.short(), len(entries))
        return BlameFrame(file_path=file_path, commit_hash=resolved, entries=entries)

    def commit_info(self, commit: CommitHash) -> CommitInfo:
        return parse_commit_record(self._git("show", "-s", f"--format={_COMMIT_FORMAT}", str(commit), "--"))

    def diff(self, commit: CommitHash) -> Diff:
        info = self.commit_info(commit)
        if info.parent is None:
            output = self._git("diff-tree", "-p", "-M", "--root", "--no-color", str(info.hash))
        else:
            output = self._git("diff-tree", "-p", "-M", "--no-color", str(info.parent), str(info.hash))
        return Diff(output)

    def remote_commit_url(self, commit: CommitHash) -> str | None:
        try:
            remote = self._git("remote", "get-url", "origin")
        except GatewayError:
            return None
        return commit_url_for_remote(remote, str(commit))
