"""Regression tests for ANSI-aware width helpers used by picker rows."""

import unittest

from lazyapropos import ansi as ansi_mod

RED = "\x1b[31m"
RESET = "\x1b[0m"


class AnsiWidthTests(unittest.TestCase):
    def test_strip_and_width_ignore_escape_sequences(self) -> None:
        styled = f"{RED}reduce{RESET}"
        self.assertEqual(ansi_mod.strip_ansi(styled), "reduce")
        self.assertEqual(ansi_mod.display_width(styled), 6)

    def test_wide_and_combining_characters(self) -> None:
        self.assertEqual(ansi_mod.display_width("日本"), 4)
        self.assertEqual(ansi_mod.display_width("é"), 1)

    def test_tabs_expand_to_next_stop(self) -> None:
        self.assertEqual(ansi_mod.char_display_width("\t", 3), 5)
        self.assertEqual(ansi_mod.clip_ansi_line("a\tb", 10), "a       b")
        self.assertEqual(ansi_mod.clip_ansi_line("a\tb", 4), "a")

    def test_clip_keeps_escapes_and_trims_columns(self) -> None:
        clipped = ansi_mod.clip_ansi_line(f"{RED}abcdef{RESET}", 3)
        self.assertEqual(clipped, f"{RED}abc")
        self.assertEqual(ansi_mod.clip_ansi_line("abc", 0), "")

    def test_clip_does_not_split_wide_character(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("a日", 2), "a")

    def test_pad_fills_to_width(self) -> None:
        self.assertEqual(ansi_mod.pad_ansi_line(f"{RED}ab{RESET}", 4), f"{RED}ab{RESET}  ")
        self.assertEqual(ansi_mod.pad_ansi_line("abcdef", 3), "abc")


if __name__ == "__main__":
    unittest.main()
