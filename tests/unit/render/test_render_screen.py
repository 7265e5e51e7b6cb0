"""Screen composition tests for the blame table, diff pane, and status bar.

Frames are built from plain ``ScreenContext`` snapshots, so these tests
need no terminal. ANSI codes are stripped where only text matters.
"""

from __future__ import annotations

import unittest
from pathlib import Path

from blake.actions import Mode
from blake.ansi import ansi_display_width, strip_ansi
from blake.domain import BlameEntry, BlameFrame, CommitHash, CommitInfo
from blake.input.keymap import Keymap
from blake.render import (
    AGE_COLOR_SGR,
    ScreenContext,
    age_color,
    blame_view_rows,
    build_status_line,
    follow_selection,
    format_date,
    render_screen,
    status_text,
    truncate_author,
)
from blake.render.help import build_help_lines, render_help_overlay


def _frame(lines: int = 5) -> BlameFrame:
    commit = CommitHash("abcdef0123456789" * 2 + "abcdef01")
    entries = [
        BlameEntry(
            line_number=i + 1,
            commit_hash=commit,
            author="Grace Hopper",
            timestamp=86_400 * (i + 1),
            content=f"content {i + 1}",
        )
        for i in range(lines)
    ]
    return BlameFrame(Path("src/app.py"), commit, entries)


class BlameRowTests(unittest.TestCase):
    def test_row_shows_hash_author_date_line_and_content(self) -> None:
        row = strip_ansi(blame_view_rows(_frame(), 0, 1, 80)[0])
        self.assertTrue(row.startswith("abcdef0 "))
        self.assertIn("Grace Hopper", row)
        self.assertIn("1970-01-02", row)
        self.assertIn("    1 content 1", row)

    def test_rows_are_padded_to_requested_count_and_width(self) -> None:
        rows = blame_view_rows(_frame(2), 0, 4, 60)
        self.assertEqual(len(rows), 4)
        for row in rows:
            self.assertEqual(ansi_display_width(row), 60)

    def test_selected_row_is_reverse_video(self) -> None:
        frame = _frame()
        frame.select(1)
        rows = blame_view_rows(frame, 0, 3, 80)
        self.assertTrue(rows[1].startswith("\033[7m"))
        self.assertFalse(rows[0].startswith("\033[7m"))

    def test_long_author_is_truncated(self) -> None:
        self.assertEqual(truncate_author("Bartholomew Jones"), "Bartholome..")
        self.assertEqual(truncate_author("Ada"), "Ada")

    def test_dates_are_utc(self) -> None:
        self.assertEqual(format_date(0), "1970-01-01")
        self.assertEqual(format_date(1_700_000_000), "2023-11-14")


class AgeColorTests(unittest.TestCase):
    def test_quartiles_map_oldest_to_newest(self) -> None:
        cases = [(0, 0), (24, 0), (25, 1), (49, 1), (50, 2), (74, 2), (75, 3), (100, 3)]
        for timestamp, index in cases:
            with self.subTest(timestamp=timestamp):
                self.assertEqual(age_color(timestamp, 0, 100), AGE_COLOR_SGR[index])

    def test_single_timestamp_counts_as_newest(self) -> None:
        self.assertEqual(age_color(5, 5, 5), AGE_COLOR_SGR[-1])


class FollowSelectionTests(unittest.TestCase):
    def test_scrolls_minimally(self) -> None:
        self.assertEqual(follow_selection(0, 3, 10, 100), 0)
        self.assertEqual(follow_selection(0, 10, 10, 100), 1)
        self.assertEqual(follow_selection(20, 5, 10, 100), 5)

    def test_start_is_clamped_to_content(self) -> None:
        self.assertEqual(follow_selection(50, 8, 10, 9), 0)
        self.assertEqual(follow_selection(0, 0, 10, 0), 0)


class StatusLineTests(unittest.TestCase):
    def test_status_line_fills_width_minus_one(self) -> None:
        line = build_status_line("left", 40, "right")
        self.assertEqual(len(line), 39)
        self.assertTrue(line.startswith("left"))
        self.assertTrue(line.endswith("right"))

    def test_status_text_shows_depth_chain_and_position(self) -> None:
        frame = _frame()
        frame.select(2)
        context = ScreenContext(
            width=120,
            height=10,
            mode=Mode.HISTORY,
            frame=frame,
            depth=3,
            hash_chain="1111111 -> 2222222 -> 3333333",
            status_message="hello",
        )
        left, right = status_text(context)
        self.assertIn("HISTORY", left)
        self.assertIn("[depth: 3]", left)
        self.assertIn("src/app.py", left)
        self.assertIn("1111111 -> 2222222 -> 3333333", left)
        self.assertIn("hello", left)
        self.assertTrue(right.startswith("3/5"))

    def test_depth_hidden_at_root(self) -> None:
        context = ScreenContext(width=80, height=10, mode=Mode.HISTORY, frame=_frame(), depth=1)
        left, _right = status_text(context)
        self.assertNotIn("depth", left)


class RenderScreenTests(unittest.TestCase):
    def test_full_screen_frame_has_one_row_per_line(self) -> None:
        context = ScreenContext(width=80, height=8, mode=Mode.HISTORY, frame=_frame(), depth=1)
        frame = render_screen(context)

        self.assertTrue(frame.startswith("\033[H\033[J"))
        rows = strip_ansi(frame[len("\033[H\033[J"):]).split("\r\n")
        self.assertEqual(len(rows), 8)
        self.assertIn("content 1", rows[0])
        self.assertIn("HISTORY", rows[-1])

    def test_split_frame_shows_divider_and_commit_header(self) -> None:
        commit = CommitInfo(CommitHash("f" * 40), CommitHash("e" * 40), "Linus", 0, "Fix the thing\n")
        context = ScreenContext(
            width=100,
            height=6,
            mode=Mode.DIFF,
            frame=_frame(),
            depth=1,
            split_ratio=50,
            diff_lines=["\x1b[32m+added\x1b[0m", "-removed"],
            diff_commit=commit,
        )
        rows = strip_ansi(render_screen(context)[len("\033[H\033[J"):]).split("\r\n")

        self.assertIn("│", rows[0])
        left, right = rows[0].split("│", 1)
        self.assertIn("content 1", left)
        self.assertIn("fffffff", right)
        self.assertIn("Fix the thing", right)
        self.assertIn("+added", rows[1].split("│", 1)[1])

    def test_diff_pane_honors_horizontal_scroll(self) -> None:
        context = ScreenContext(
            width=100,
            height=4,
            mode=Mode.DIFF,
            frame=_frame(),
            split_ratio=50,
            diff_lines=["0123456789abcdef"],
            diff_scroll_x=10,
        )
        rows = strip_ansi(render_screen(context)[len("\033[H\033[J"):]).split("\r\n")
        right = rows[1].split("│", 1)[1]
        self.assertTrue(right.startswith("abcdef"))

    def test_help_overlay_is_appended_in_help_mode(self) -> None:
        help_lines = build_help_lines(Keymap.with_defaults())
        context = ScreenContext(
            width=100,
            height=30,
            mode=Mode.HELP,
            frame=_frame(),
            help_lines=help_lines,
        )
        self.assertIn("blake help", render_screen(context))

    def test_empty_frame_renders_without_entries(self) -> None:
        context = ScreenContext(width=40, height=5, mode=Mode.HISTORY, frame=_frame(0))
        frame = strip_ansi(render_screen(context))
        self.assertIn("0/0", frame)


class HelpContentTests(unittest.TestCase):
    def test_help_lines_list_sections_and_remapped_keys(self) -> None:
        keymap = Keymap.with_defaults()
        text = strip_ansi("\n".join(build_help_lines(keymap)))
        for section in ("History", "Diff", "Help", "Global"):
            self.assertIn(section, text)
        self.assertIn(",", text)
        self.assertIn("Drill down", text)

    def test_unbound_actions_are_omitted(self) -> None:
        keymap = Keymap.with_defaults()
        keymap.diff.clear()
        text = strip_ansi("\n".join(build_help_lines(keymap)))
        self.assertNotIn("Narrow blame pane", text)

    def test_overlay_fits_small_terminal(self) -> None:
        overlay = render_help_overlay(build_help_lines(Keymap.with_defaults()), 0, 30, 10)
        self.assertIn("╭", overlay)
        self.assertIn("╯", overlay)


if __name__ == "__main__":
    unittest.main()
