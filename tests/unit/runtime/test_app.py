"""Startup composition tests for ``build_navigator``.

The git backend is replaced by the in-memory fake so only config loading,
formatter selection, and the initial blame are exercised.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from blake.errors import ConfigError, FormatterError
from blake.formatters import DeltaFormatter, PygmentsFormatter
from blake.runtime.app import build_navigator

from tests.fakes import C3, FILE, FakeGateway


class _RepoGateway(FakeGateway):
    repo_root = Path("/repo")

    def relative_path(self, path: Path) -> Path:
        return FILE


class BuildNavigatorTests(unittest.TestCase):
    def _build(self, config: dict | None = None, **kwargs):
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            if config is not None:
                config_path.write_text(json.dumps(config), encoding="utf-8")
            with mock.patch(
                "blake.runtime.app.SubprocessGitGateway.discover",
                return_value=_RepoGateway(),
            ):
                return build_navigator(Path("/repo/src/lib.py"), config_path=config_path, **kwargs)

    def test_root_frame_is_head_blame_of_relative_path(self) -> None:
        navigator = self._build(formatter_name="pygments")
        frame = navigator.current_frame()
        self.assertEqual(frame.file_path, FILE)
        self.assertEqual(frame.commit_hash, C3)
        self.assertEqual(navigator.blame_stack.depth(), 1)
        self.assertIsInstance(navigator.formatter, PygmentsFormatter)
        self.assertEqual(navigator.status_message, "")

    def test_config_supplies_formatter_and_split_ratio(self) -> None:
        navigator = self._build({"general": {"diff_formatter": "pygments", "split_ratio": 70}})
        self.assertIsInstance(navigator.formatter, PygmentsFormatter)
        self.assertEqual(navigator.split_ratio, 70)

    def test_cli_formatter_overrides_config(self) -> None:
        with mock.patch("blake.formatters.shutil.which", return_value="/usr/bin/delta"):
            navigator = self._build({"general": {"diff_formatter": "pygments"}}, formatter_name="delta")
        self.assertIsInstance(navigator.formatter, DeltaFormatter)

    def test_missing_delta_fails_startup(self) -> None:
        with mock.patch("blake.formatters.shutil.which", return_value=None):
            with self.assertRaises(FormatterError):
                self._build()

    def test_unknown_formatter_name_fails_startup(self) -> None:
        with self.assertRaises(ConfigError):
            self._build(formatter_name="bat")

    def test_config_warnings_are_shown_in_status(self) -> None:
        navigator = self._build(
            {"general": {"diff_formatter": "pygments", "split_ratio": "wide"}, "keymap": {"nope": {}}}
        )
        self.assertTrue(navigator.status_message.startswith("config: general.split_ratio"))
        self.assertIn("(+1 more)", navigator.status_message)


if __name__ == "__main__":
    unittest.main()
