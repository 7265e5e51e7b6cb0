"""Runtime composition layer for blake.

Loads config, opens the repository, picks the diff formatter, and starts
the loop. This is the only module where git, rendering, and config meet.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from ..formatters import build_formatter
from ..git_gateway import SubprocessGitGateway
from .config import load_app_config, save_split_ratio
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from .navigator import Navigator
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def _config_warning_message(warnings: list[str]) -> str:
    if len(warnings) == 1:
        return f"config: {warnings[0]}"
    return f"config: {warnings[0]} (+{len(warnings) - 1} more)"


def build_navigator(
    file_path: Path,
    *,
    config_path: Path | None = None,
    formatter_name: str | None = None,
) -> Navigator:
    """Create a navigator rooted at ``file_path`` blamed at ``HEAD``.

    Raises ``GatewayError`` when the file is not inside a repository or cannot
    be blamed, ``ConfigError`` for an unknown formatter name, and
    ``FormatterError`` when the formatter is not installed.
    """
    config = load_app_config(config_path)
    gateway = SubprocessGitGateway.discover(file_path)
    relative_path = gateway.relative_path(file_path)
    formatter = build_formatter(
        formatter_name or config.general.diff_formatter,
        config.general.pygments_style,
    )
    navigator = Navigator.start(
        gateway,
        formatter,
        config.keymap,
        relative_path,
        split_ratio=config.general.split_ratio,
    )
    if config.warnings:
        navigator.status_message = _config_warning_message(config.warnings)
    logger.info("opened %s in %s", relative_path, gateway.repo_root)
    return navigator


def run_app(
    file_path: Path,
    *,
    config_path: Path | None = None,
    formatter_name: str | None = None,
) -> None:
    """Run the interactive navigator on the controlling terminal."""
    navigator = build_navigator(file_path, config_path=config_path, formatter_name=formatter_name)
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    callbacks = RuntimeLoopCallbacks(
        save_split_ratio=lambda split_ratio: save_split_ratio(split_ratio, config_path),
    )
    run_main_loop(navigator, terminal, stdin_fd, RuntimeLoopTiming(), callbacks)
    logger.info("session ended")
