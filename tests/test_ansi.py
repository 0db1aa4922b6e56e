"""Regression tests for ANSI line-shaping primitives.

Pane rows, overlays, and the status line all rely on these helpers keeping
escape sequences intact while measuring display columns.
"""

import unittest

from kura import ansi as ansi_mod


class DisplayWidthTests(unittest.TestCase):
    def test_escape_sequences_take_no_columns(self) -> None:
        self.assertEqual(ansi_mod.display_width("\033[34mabc\033[0m"), 3)

    def test_wide_characters_take_two_columns(self) -> None:
        self.assertEqual(ansi_mod.display_width("蔵 kura"), 7)


class FitAnsiLineTests(unittest.TestCase):
    def test_plain_text_is_padded_to_width(self) -> None:
        self.assertEqual(ansi_mod.fit_ansi_line("ab", 5), "ab   ")

    def test_styled_text_is_clipped_and_reset_before_padding(self) -> None:
        fitted = ansi_mod.fit_ansi_line("\033[31mabcdef", 4)
        self.assertEqual(fitted, "\033[31mabcd\033[0m")
        fitted = ansi_mod.fit_ansi_line("\033[31mab", 4)
        self.assertEqual(fitted, "\033[31mab\033[0m  ")

    def test_wide_character_is_not_split(self) -> None:
        self.assertEqual(ansi_mod.fit_ansi_line("a蔵", 2), "a ")


class SliceAnsiLineTests(unittest.TestCase):
    def test_slice_reinjects_active_style(self) -> None:
        sliced = ansi_mod.slice_ansi_line("\033[32mhello", 2, 2)
        self.assertEqual(sliced, "\033[32mll")


class SelectedWithAnsiTests(unittest.TestCase):
    def test_reverse_video_survives_internal_resets(self) -> None:
        selected = ansi_mod.selected_with_ansi("\033[34mdir\033[0m x")
        self.assertEqual(selected, "\033[7m\033[34mdir\033[0;7m x\033[0m")


if __name__ == "__main__":
    unittest.main()
