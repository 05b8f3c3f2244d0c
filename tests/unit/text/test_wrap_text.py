"""Tests for fixed-width wrapping of raw pager text."""

from __future__ import annotations

import math
import re
import unittest

from livepager.search import find_matches
from livepager.text import format_text, number_width, wrap_line, wrap_text

COLS = 80


class WrapLineTests(unittest.TestCase):
    def test_long_line_splits_into_full_width_chunks_plus_remainder(self) -> None:
        result = wrap_line("#" * 200, COLS)

        self.assertEqual(len(result), 3)
        self.assertEqual([len(part) for part in result], [COLS, COLS, 200 - COLS * 2])

    def test_short_line_stays_whole(self) -> None:
        result = wrap_line("#" * 50, COLS)

        self.assertEqual(result, ["#" * 50])

    def test_exact_multiple_has_no_trailing_empty_segment(self) -> None:
        self.assertEqual(wrap_line("abcdef", 3), ["abc", "def"])

    def test_empty_line_yields_one_empty_display_line(self) -> None:
        self.assertEqual(wrap_line("", COLS), [""])

    def test_slices_on_code_points_not_bytes(self) -> None:
        self.assertEqual(wrap_line("ééééé", 2), ["éé", "éé", "é"])

    def test_non_positive_width_is_treated_as_one(self) -> None:
        self.assertEqual(wrap_line("ab", 0), ["a", "b"])


class WrapTextTests(unittest.TestCase):
    def test_two_short_lines(self) -> None:
        self.assertEqual(wrap_text("A line\nAnother line", COLS), ["A line", "Another line"])

    def test_display_line_count_matches_ceiling_formula(self) -> None:
        samples = [
            ("", 5),
            ("abc", 5),
            ("abcdefghij\n\nxy", 3),
            ("one\ntwo\n", 2),
            ("x" * 17 + "\n" + "y" * 4, 4),
        ]
        for text, cols in samples:
            with self.subTest(text=text, cols=cols):
                expected = sum(math.ceil(max(1, len(line)) / cols) for line in text.split("\n"))
                self.assertEqual(len(wrap_text(text, cols)), expected)

    def test_display_lines_reconstruct_each_logical_line(self) -> None:
        text = "alpha beta gamma\n\ndelta"
        out = wrap_text(text, 4)

        rebuilt: list[str] = []
        cursor = 0
        for logical in text.split("\n"):
            count = len(wrap_line(logical, 4))
            rebuilt.append("".join(out[cursor : cursor + count]))
            cursor += count
        self.assertEqual(rebuilt, text.split("\n"))
        self.assertEqual(cursor, len(out))

    def test_trailing_newline_adds_empty_display_line(self) -> None:
        self.assertEqual(wrap_text("foo\n", COLS), ["foo", ""])

    def test_crlf_line_endings_are_stripped(self) -> None:
        lines = wrap_text("foo\r\nbar\r\n", COLS)

        self.assertEqual(lines, ["foo", "bar", ""])
        self.assertEqual(find_matches(lines, re.compile("foo$")), [0])

    def test_lone_carriage_return_inside_a_line_is_kept(self) -> None:
        self.assertEqual(wrap_text("a\rb", COLS), ["a\rb"])


class FormatTextTests(unittest.TestCase):
    def test_plain_text_uses_full_width(self) -> None:
        self.assertEqual(format_text("x" * 10, 10), ["x" * 10])

    def test_numbered_rows_leave_room_for_prefix(self) -> None:
        lines = format_text("x" * 10, 10, numbered=True)

        self.assertEqual(lines, ["x" * 7, "x" * 3])
        for idx, line in enumerate(lines, start=1):
            self.assertLessEqual(len(f"{idx}. {line}"), 10)

    def test_prefix_width_follows_wrapped_line_count(self) -> None:
        # Nine logical lines wrap into more than nine rows, so two digits are needed.
        text = "\n".join(["abcdefgh"] * 9)

        lines = format_text(text, 8, numbered=True)

        width = number_width(len(lines))
        self.assertEqual(width, 2)
        self.assertTrue(all(len(line) <= 8 - width - 2 for line in lines))

    def test_tiny_screen_still_makes_progress(self) -> None:
        self.assertEqual(format_text("abc", 2, numbered=True), ["a", "b", "c"])


class NumberWidthTests(unittest.TestCase):
    def test_width_is_digit_count_of_line_total(self) -> None:
        self.assertEqual(number_width(9), 1)
        self.assertEqual(number_width(10), 2)
        self.assertEqual(number_width(110), 3)

    def test_empty_document_still_reserves_one_digit(self) -> None:
        self.assertEqual(number_width(0), 1)


if __name__ == "__main__":
    unittest.main()
