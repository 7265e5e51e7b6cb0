"""Regression tests for ANSI width and line-shaping primitives.

Styled diff output is sliced horizontally and padded into panes, so these
cases pin down width math, SGR carry-over, and reset handling.
"""

import unittest

from blake import ansi as ansi_mod


class DisplayWidthTests(unittest.TestCase):
    def test_escape_sequences_have_no_width(self) -> None:
        self.assertEqual(ansi_mod.ansi_display_width("\x1b[31mab\x1b[0m"), 2)

    def test_wide_and_combining_characters(self) -> None:
        self.assertEqual(ansi_mod.ansi_display_width("漢字"), 4)
        self.assertEqual(ansi_mod.ansi_display_width("é"), 1)

    def test_tabs_expand_to_next_stop(self) -> None:
        self.assertEqual(ansi_mod.ansi_display_width("\t"), 8)
        self.assertEqual(ansi_mod.ansi_display_width("abc\t"), 8)


class SliceAnsiLineTests(unittest.TestCase):
    def test_viewport_reemits_active_style(self) -> None:
        self.assertEqual(ansi_mod.slice_ansi_line("\x1b[31mabcdef\x1b[0m", 2, 3), "\x1b[31mcde")

    def test_slice_past_end_is_empty(self) -> None:
        self.assertEqual(ansi_mod.slice_ansi_line("abc", 10, 5), "")

    def test_wide_character_never_split(self) -> None:
        self.assertEqual(ansi_mod.slice_ansi_line("a漢b", 0, 2), "a")

    def test_tab_becomes_spaces(self) -> None:
        self.assertEqual(ansi_mod.slice_ansi_line("\tx", 0, 10), " " * 8 + "x")


class FitAnsiLineTests(unittest.TestCase):
    def test_plain_text_is_padded(self) -> None:
        self.assertEqual(ansi_mod.fit_ansi_line("abc", 5), "abc  ")

    def test_styled_text_is_clipped_and_reset(self) -> None:
        self.assertEqual(ansi_mod.fit_ansi_line("\x1b[1mabcdef", 3), "\x1b[1mabc\x1b[0m")

    def test_fitted_width_is_exact(self) -> None:
        for text in ("", "x", "\x1b[32m+added line\x1b[0m", "漢字漢字", "a\tb"):
            for width in (1, 4, 9, 20):
                with self.subTest(text=text, width=width):
                    self.assertEqual(ansi_mod.ansi_display_width(ansi_mod.fit_ansi_line(text, width)), width)


class SelectedWithAnsiTests(unittest.TestCase):
    def test_reverse_video_survives_inner_resets(self) -> None:
        self.assertEqual(
            ansi_mod.selected_with_ansi("a\x1b[0mb"),
            "\x1b[7ma\x1b[0;7mb\x1b[0m",
        )


if __name__ == "__main__":
    unittest.main()
