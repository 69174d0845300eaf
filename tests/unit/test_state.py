"""Tests for selection state clamping and snapshots."""

from __future__ import annotations

import unittest

from lazypicker.search.types import MatchResult
from lazypicker.state import SelectionState, StateSnapshot


def _results(count: int) -> list[MatchResult]:
    return [MatchResult.empty(f"item{idx}", idx) for idx in range(count)]


class SelectionStateTests(unittest.TestCase):
    def test_cursor_is_minus_one_without_results(self) -> None:
        state = SelectionState(results=[])
        self.assertEqual(state.cursor_item, -1)
        self.assertIsNone(state.cursor_result())

    def test_initial_cursor_is_clamped(self) -> None:
        state = SelectionState(results=_results(2), cursor_item=5, query="ab", cursor_position=9)
        self.assertEqual(state.cursor_item, 1)
        self.assertEqual(state.cursor_position, 2)

    def test_set_results_keeps_row_when_possible(self) -> None:
        state = SelectionState(results=_results(5), cursor_item=2)
        state.set_results(_results(4))
        self.assertEqual(state.cursor_item, 2)

    def test_set_results_clamps_to_new_length(self) -> None:
        state = SelectionState(results=_results(5), cursor_item=4)
        state.set_results(_results(2))
        self.assertEqual(state.cursor_item, 1)

    def test_set_results_recovers_from_empty(self) -> None:
        state = SelectionState(results=_results(3), cursor_item=1)
        state.set_results([])
        self.assertEqual(state.cursor_item, -1)
        state.set_results(_results(2))
        self.assertEqual(state.cursor_item, 0)

    def test_cursor_invariant_holds_across_result_changes(self) -> None:
        for before in range(0, 5):
            for cursor in range(-1, 6):
                for after in range(0, 5):
                    with self.subTest(before=before, cursor=cursor, after=after):
                        state = SelectionState(results=_results(before), cursor_item=cursor)
                        state.set_results(_results(after))
                        if after == 0:
                            self.assertEqual(state.cursor_item, -1)
                        else:
                            self.assertTrue(0 <= state.cursor_item < after)

    def test_snapshot_is_detached_from_state(self) -> None:
        state = SelectionState(results=_results(3), total_count=3, query="q", cursor_position=1)
        state.selected_items.add(2)
        snapshot = state.snapshot()

        state.selected_items.add(0)
        state.set_results([])
        state.query = "changed"

        self.assertIsInstance(snapshot, StateSnapshot)
        self.assertEqual(snapshot.selected_items, frozenset({2}))
        self.assertEqual(len(snapshot.results), 3)
        self.assertEqual(snapshot.query, "q")
        self.assertEqual(snapshot.total_count, 3)


if __name__ == "__main__":
    unittest.main()
