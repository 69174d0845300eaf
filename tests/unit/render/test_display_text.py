"""Tests for terminal display-width layout of text."""

from __future__ import annotations

import unittest

from lazypicker.render.text import (
    CONTROL_REPLACEMENT,
    WIDE_CONTINUATION,
    char_display_width,
    display_cells,
    display_width,
)


class CharDisplayWidthTests(unittest.TestCase):
    def test_widths(self) -> None:
        self.assertEqual(char_display_width("a", 0), 1)
        self.assertEqual(char_display_width("漢", 0), 2)
        self.assertEqual(char_display_width("\u0301", 3), 0)
        self.assertEqual(char_display_width("\x1b", 0), 1)

    def test_tab_width_depends_on_column(self) -> None:
        self.assertEqual(char_display_width("\t", 0), 8)
        self.assertEqual(char_display_width("\t", 5), 3)
        self.assertEqual(char_display_width("\t", 8), 8)


class DisplayCellsTests(unittest.TestCase):
    def test_display_width_sums_columns(self) -> None:
        self.assertEqual(display_width("ab\t漢"), 10)
        self.assertEqual(display_width(""), 0)

    def test_wide_character_gets_continuation_cell(self) -> None:
        self.assertEqual(
            display_cells("a漢b", 10),
            [(0, 0, "a"), (1, 1, "漢"), (2, 1, WIDE_CONTINUATION), (3, 2, "b")],
        )

    def test_wide_character_never_straddles_edge(self) -> None:
        self.assertEqual(display_cells("a漢", 2), [(0, 0, "a")])

    def test_tab_cells_keep_source_offset(self) -> None:
        cells = display_cells("\tx", 20)
        self.assertEqual([cell[0] for cell in cells], list(range(9)))
        self.assertEqual({cell[1] for cell in cells[:8]}, {0})
        self.assertEqual(cells[-1], (8, 1, "x"))

    def test_tab_is_dropped_when_it_would_cross_edge(self) -> None:
        self.assertEqual(display_cells("ab\tc", 5), [(0, 0, "a"), (1, 1, "b")])

    def test_control_character_is_replaced(self) -> None:
        self.assertEqual(display_cells("\x00", 4), [(0, 0, CONTROL_REPLACEMENT)])

    def test_leading_combining_mark_is_dropped(self) -> None:
        self.assertEqual(display_cells("\u0301a", 4), [(0, 1, "a")])

    def test_no_columns_yields_nothing(self) -> None:
        self.assertEqual(display_cells("abc", 0), [])
        self.assertEqual(display_cells("abc", -3), [])


if __name__ == "__main__":
    unittest.main()
