"""Exception hierarchy shared by the navigator, adapters, and config layer.

Backend failures carry a human-readable message suitable for the status bar.
"""

from __future__ import annotations


class BlakeError(Exception):
    """Base class for every error raised by blake itself."""


class KeyParseError(BlakeError, ValueError):
    """Raised when a textual key binding cannot be parsed."""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"invalid key binding {text!r}: {reason}")
        self.text = text
        self.reason = reason


class GatewayError(BlakeError):
    """Raised when the version-control backend fails to answer a query."""


class FormatterError(BlakeError):
    """Raised when a diff formatter is missing or fails to run."""


class ConfigError(BlakeError):
    """Raised for configuration values that cannot be interpreted."""
