"""Diff formatters that turn patch text into styled terminal lines."""

from __future__ import annotations

import logging
import shutil
import subprocess

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import DiffLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .domain import Diff, DiffFormatter
from .errors import ConfigError, FormatterError

logger = logging.getLogger(__name__)

DELTA_TIMEOUT_SECONDS = 30.0
DEFAULT_PYGMENTS_STYLE = "monokai"


class DeltaFormatter(DiffFormatter):
    """Pipe the patch through ``delta`` in color-only mode."""

    def __init__(self, executable: str = "delta", timeout_seconds: float = DELTA_TIMEOUT_SECONDS) -> None:
        self.executable = executable
        self.timeout_seconds = timeout_seconds

    def is_available(self) -> bool:
        return shutil.which(self.executable) is not None

    def format(self, diff: Diff) -> list[str]:
        if diff.is_empty():
            return []
        command = [self.executable, "--color-only", "--paging=never"]
        try:
            proc = subprocess.run(
                command,
                input=diff.text,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=self.timeout_seconds,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            raise FormatterError(f"{self.executable} failed: {exc}") from exc
        if proc.returncode != 0:
            detail = proc.stderr.strip() or f"exit status {proc.returncode}"
            raise FormatterError(f"{self.executable}: {detail}")
        return proc.stdout.splitlines()


class PygmentsFormatter(DiffFormatter):
    """Highlight the patch in-process with Pygments' diff lexer."""

    def __init__(self, style: str = DEFAULT_PYGMENTS_STYLE) -> None:
        try:
            get_style_by_name(style)
        except ClassNotFound:
            logger.warning("unknown pygments style %r, using %s", style, DEFAULT_PYGMENTS_STYLE)
            style = DEFAULT_PYGMENTS_STYLE
        self.style = style
        self._formatter = TerminalFormatter(style=style)

    def is_available(self) -> bool:
        return True

    def format(self, diff: Diff) -> list[str]:
        if diff.is_empty():
            return []
        try:
            rendered = pygments_highlight(diff.text, DiffLexer(), self._formatter)
        except Exception as exc:
            raise FormatterError(f"pygments failed: {exc}") from exc
        return rendered.splitlines()


FORMATTER_NAMES = ("delta", "pygments")


def build_formatter(name: str, pygments_style: str = DEFAULT_PYGMENTS_STYLE) -> DiffFormatter:
    """Return the formatter registered under ``name``."""
    key = name.strip().lower()
    if key == "delta":
        formatter: DiffFormatter = DeltaFormatter()
    elif key == "pygments":
        formatter = PygmentsFormatter(pygments_style)
    else:
        raise ConfigError(f"unknown diff formatter {name!r} (choose from {', '.join(FORMATTER_NAMES)})")
    logger.info("using diff formatter %s", key)
    return formatter
