"""Tests for match indexing and match-to-match scrolling."""

from __future__ import annotations

import io
import re
import unittest

from livepager.search import (
    INVALID_REGEX_MESSAGE,
    advance_match,
    apply_query,
    compile_query,
    fetch_input,
    find_matches,
    next_match,
    retreat_match,
)
from livepager.state import PagerFeatures, PagerState
from livepager.types import SearchMode


def _searching_state(query: str, *, lines: int = 20, rows: int = 5) -> PagerState:
    state = PagerState.with_features(PagerFeatures(search=True))
    state.raw_lines = "\n".join(f"L{i}" for i in range(lines))
    state.prepare(cols=80, rows=rows)
    apply_query(state, query)
    return state


class FindMatchesTests(unittest.TestCase):
    def test_indices_are_strictly_ascending_and_unique(self) -> None:
        lines = ["aa aa", "b", "a", "", "xa ya"]

        result = find_matches(lines, re.compile("a"))

        self.assertEqual(result, [0, 2, 4])
        self.assertEqual(result, sorted(set(result)))

    def test_no_hits(self) -> None:
        self.assertEqual(find_matches(["x", "y"], re.compile("z")), [])


class CompileQueryTests(unittest.TestCase):
    def test_valid_expression(self) -> None:
        self.assertEqual(compile_query("L[0-9]+").pattern, "L[0-9]+")

    def test_invalid_expression_returns_none(self) -> None:
        with self.assertLogs("livepager.search", level="WARNING"):
            self.assertIsNone(compile_query("[unclosed"))


class ApplyQueryTests(unittest.TestCase):
    def test_jumps_to_first_match_at_or_after_upper_mark(self) -> None:
        state = PagerState.with_features(PagerFeatures(search=True))
        state.raw_lines = "\n".join(f"L{i}" for i in range(20))
        state.prepare(cols=80, rows=5)
        state.upper_mark = 5

        apply_query(state, "L1")

        self.assertEqual(state.upper_mark, 10)
        self.assertEqual(state.search.match_index[state.search.cursor], 10)

    def test_invalid_query_reports_message(self) -> None:
        state = _searching_state("L1")

        with self.assertLogs("livepager.search", level="WARNING"):
            apply_query(state, "(")

        self.assertEqual(state.message, INVALID_REGEX_MESSAGE)
        self.assertIsNone(state.search.pattern)

    def test_empty_query_changes_nothing(self) -> None:
        state = _searching_state("L1")
        before = (state.search.pattern, list(state.search.match_index), state.upper_mark)

        apply_query(state, "")

        self.assertEqual((state.search.pattern, state.search.match_index, state.upper_mark), before)


class MatchNavigationTests(unittest.TestCase):
    def test_next_match_stops_advancing_near_the_end(self) -> None:
        state = _searching_state("L1")
        for _ in range(20):
            advance_match(state)

        # The cursor stops once upper_mark + rows reaches the last line.
        self.assertEqual(state.upper_mark, 15)
        self.assertEqual(state.search.match_index[state.search.cursor], 15)

    def test_next_match_saturates_at_last_match(self) -> None:
        state = _searching_state("^L(1|2)$", lines=200, rows=5)
        for _ in range(5):
            advance_match(state)

        self.assertEqual(state.search.match_index, [1, 2])
        self.assertEqual(state.search.cursor, 1)
        self.assertEqual(state.upper_mark, 2)

    def test_previous_match_scrolls_only_above_upper_mark(self) -> None:
        state = _searching_state("L1")
        advance_match(state)
        advance_match(state)
        self.assertEqual(state.upper_mark, 11)

        retreat_match(state)
        self.assertEqual(state.upper_mark, 10)

        # Target already below the view's top: the cursor moves, the view does not.
        state.upper_mark = 0
        retreat_match(state)
        self.assertEqual(state.search.cursor, 0)
        self.assertEqual(state.upper_mark, 0)

    def test_previous_match_saturates_at_zero(self) -> None:
        state = _searching_state("L1")
        retreat_match(state)
        retreat_match(state)
        self.assertEqual(state.search.cursor, 0)

    def test_previous_match_without_hits_is_a_no_op(self) -> None:
        state = _searching_state("nothing-matches")
        state.upper_mark = 3

        retreat_match(state)

        self.assertEqual(state.upper_mark, 3)
        self.assertEqual(state.search.cursor, 0)

    def test_next_match_past_last_hit_keeps_view(self) -> None:
        state = _searching_state("L1[0-5]?$")
        state.upper_mark = 19
        state.search.cursor = 0

        next_match(state)

        self.assertEqual(state.upper_mark, 19)
        self.assertEqual(state.search.cursor, len(state.search.match_index) - 1)


class FetchInputTests(unittest.TestCase):
    def test_reads_until_enter_and_ignores_control_tokens(self) -> None:
        keys = ["a", "UP", "b", "ENTER"]
        out = io.StringIO()

        query = fetch_input(out, lambda: keys.pop(0), SearchMode.FORWARD, rows=10)

        self.assertEqual(query, "ab")
        self.assertIn("\x1b[10;1H", out.getvalue())

    def test_ctrl_c_cancels(self) -> None:
        keys = ["a", "CTRL_C"]
        self.assertEqual(fetch_input(io.StringIO(), lambda: keys.pop(0), SearchMode.REVERSE, rows=3), "")


if __name__ == "__main__":
    unittest.main()
