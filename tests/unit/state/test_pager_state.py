"""Tests for the pager state model and its enums."""

from __future__ import annotations

import re
import unittest

from livepager.errors import PagerStateError
from livepager.input import DefaultInputClassifier
from livepager.state import DEFAULT_PROMPT, PagerFeatures, PagerState
from livepager.types import LineNumbers, SearchMode


class LineNumbersTests(unittest.TestCase):
    def test_negation_flips_only_non_sticky_modes(self) -> None:
        self.assertEqual(~LineNumbers.ALWAYS_ON, LineNumbers.ALWAYS_ON)
        self.assertEqual(~LineNumbers.ALWAYS_OFF, LineNumbers.ALWAYS_OFF)
        self.assertEqual(~LineNumbers.DISABLED, LineNumbers.ENABLED)
        self.assertEqual(~LineNumbers.ENABLED, LineNumbers.DISABLED)

    def test_is_on(self) -> None:
        self.assertTrue(LineNumbers.ENABLED.is_on())
        self.assertTrue(LineNumbers.ALWAYS_ON.is_on())
        self.assertFalse(LineNumbers.DISABLED.is_on())
        self.assertFalse(LineNumbers.ALWAYS_OFF.is_on())


class PagerStateTests(unittest.TestCase):
    def test_defaults(self) -> None:
        state = PagerState()

        self.assertEqual(state.prompt, DEFAULT_PROMPT)
        self.assertIsNone(state.message)
        self.assertEqual(state.upper_mark, 0)
        self.assertFalse(state.running)
        self.assertIsInstance(state.input_classifier, DefaultInputClassifier)
        self.assertEqual(state.exit_callbacks, [])

    def test_features_select_optional_sub_structs(self) -> None:
        both = PagerState.with_features(PagerFeatures(search=True, static_output=True))
        neither = PagerState.with_features(PagerFeatures(search=False, static_output=False))

        self.assertIsNotNone(both.search)
        self.assertIsNotNone(both.static)
        self.assertFalse(both.static.run_no_overflow)
        self.assertIsNone(neither.search)
        self.assertIsNone(neither.static)

    def test_text_is_not_wrapped_before_prepare(self) -> None:
        state = PagerState()
        state.append_str("foo\n")
        state.append_str("bar")

        self.assertEqual(state.raw_lines, "foo\nbar")
        self.assertEqual(state.formatted_lines, [])

    def test_prepare_wraps_pending_text(self) -> None:
        state = PagerState(raw_lines="#" * 200)

        state.prepare(cols=80, rows=24)

        self.assertTrue(state.running)
        self.assertEqual((state.cols, state.rows), (80, 24))
        self.assertEqual([len(line) for line in state.formatted_lines], [80, 80, 40])

    def test_prepare_twice_is_a_precondition_violation(self) -> None:
        state = PagerState()
        state.prepare(cols=80, rows=24)

        with self.assertRaises(PagerStateError):
            state.prepare(cols=80, rows=24)

    def test_append_after_start_rewraps(self) -> None:
        state = PagerState()
        state.prepare(cols=80, rows=24)

        state.append_str("foo\n")
        state.append_str("bar")

        self.assertEqual(state.formatted_lines, ["foo", "bar"])

    def test_format_lines_refreshes_search_hits(self) -> None:
        state = PagerState.with_features(PagerFeatures(search=True))
        state.raw_lines = "x\nhit\ny"
        state.prepare(cols=80, rows=24)
        state.search.pattern = re.compile("hit")
        state.format_lines()
        self.assertEqual(state.search.match_index, [1])

        state.append_str("\nanother hit")

        self.assertEqual(state.search.match_index, [1, 3])

    def test_bottom_bar_prefers_message(self) -> None:
        state = PagerState(prompt="prompt")
        self.assertEqual(state.bottom_bar_text(), "prompt")

        state.message = "note"
        self.assertEqual(state.bottom_bar_text(), "note")

    def test_input_context_snapshot(self) -> None:
        state = PagerState.with_features(PagerFeatures(search=True))
        state.upper_mark = 4
        state.rows = 12
        state.message = "m"
        state.search.mode = SearchMode.REVERSE

        context = state.input_context()

        self.assertEqual(context.upper_mark, 4)
        self.assertEqual(context.rows, 12)
        self.assertTrue(context.has_message)
        self.assertIs(context.search_mode, SearchMode.REVERSE)

    def test_exit_callbacks_run_once_in_order(self) -> None:
        calls: list[int] = []
        state = PagerState()
        state.exit_callbacks.extend([lambda: calls.append(1), lambda: calls.append(2)])

        state.run_exit_callbacks()
        state.run_exit_callbacks()

        self.assertEqual(calls, [1, 2])


if __name__ == "__main__":
    unittest.main()
