"""Tests for frame building and the stateful renderer."""

from __future__ import annotations

import unittest

from lazypicker.render import Cell, InputCursor, Renderer, build_frame
from lazypicker.search.types import MatchResult
from lazypicker.state import StateSnapshot
from lazypicker.ui_theme import DEFAULT_THEME, PLAIN_THEME


def _snapshot(**overrides) -> StateSnapshot:
    values = dict(
        query="oBz",
        cursor_position=3,
        results=(
            MatchResult("fooBarbaz", 0, 2, 9, 49, (2, 3, 8)),
            MatchResult("qux", 1, 0, 0),
        ),
        cursor_item=0,
        selected_items=frozenset({1}),
        total_count=5,
    )
    values.update(overrides)
    return StateSnapshot(**values)


def _cells(frame) -> dict[tuple[int, int], Cell]:
    cells: dict[tuple[int, int], Cell] = {}
    for instruction in frame.instructions:
        if isinstance(instruction, Cell):
            cells[(instruction.row, instruction.col)] = instruction
    return cells


def _row_text(cells: dict[tuple[int, int], Cell], row: int, cols: int) -> str:
    return "".join(cells[(row, col)].char if (row, col) in cells else " " for col in range(cols)).rstrip()


def _input_cursor(frame) -> InputCursor:
    cursors = [instruction for instruction in frame.instructions if isinstance(instruction, InputCursor)]
    assert len(cursors) == 1
    return cursors[0]


class BuildFrameTests(unittest.TestCase):
    def test_layout_top_down(self) -> None:
        frame = build_frame(_snapshot(), (6, 20))
        cells = _cells(frame)

        self.assertEqual(_row_text(cells, 0, 20), "> fooBarbaz")
        self.assertEqual(_row_text(cells, 1, 20), " >qux")
        self.assertEqual(_row_text(cells, 2, 20), "")
        self.assertEqual(_row_text(cells, 4, 20), "  2/5")
        self.assertEqual(_row_text(cells, 5, 20), "> oBz")
        self.assertEqual(_input_cursor(frame), InputCursor(5, 5))

    def test_highlighted_row_styles(self) -> None:
        cells = _cells(build_frame(_snapshot(), (6, 20)))

        marker = cells[(0, 0)]
        self.assertEqual((marker.char, marker.fg, marker.bg), (">", DEFAULT_THEME.marker, DEFAULT_THEME.marker_background))
        self.assertTrue(cells[(0, 2)].bold)
        self.assertEqual(cells[(0, 2)].bg, DEFAULT_THEME.marker_background)
        self.assertIsNone(cells[(0, 2)].fg)
        for col in (4, 5, 10):
            self.assertEqual(cells[(0, col)].fg, DEFAULT_THEME.matched)
        self.assertIsNone(cells[(0, 6)].fg)

    def test_selected_row_styles(self) -> None:
        cells = _cells(build_frame(_snapshot(), (6, 20)))
        glyph = cells[(1, 1)]
        self.assertEqual((glyph.char, glyph.fg), (">", DEFAULT_THEME.selected))
        self.assertFalse(cells[(1, 2)].bold)
        self.assertIsNone(cells[(1, 2)].bg)

    def test_reverse_draws_results_bottom_up(self) -> None:
        frame = build_frame(_snapshot(), (6, 20), reverse=True)
        cells = _cells(frame)
        self.assertEqual(_row_text(cells, 3, 20), "> fooBarbaz")
        self.assertEqual(_row_text(cells, 2, 20), " >qux")
        self.assertEqual(_row_text(cells, 0, 20), "")
        self.assertEqual(_row_text(cells, 4, 20), "  2/5")

    def test_narrow_terminal_clips_text_and_cursor(self) -> None:
        frame = build_frame(_snapshot(), (6, 5))
        cells = _cells(frame)
        self.assertEqual(_row_text(cells, 0, 10), "> foo")
        self.assertNotIn((0, 5), cells)
        self.assertEqual(_input_cursor(frame), InputCursor(5, 4))

    def test_single_row_terminal_only_draws_query(self) -> None:
        frame = build_frame(_snapshot(), (1, 20))
        cells = _cells(frame)
        self.assertEqual({row for row, _col in cells}, {0})
        self.assertEqual(_row_text(cells, 0, 20), "> oBz")

    def test_empty_results_show_zero_count(self) -> None:
        frame = build_frame(_snapshot(results=(), cursor_item=-1, selected_items=frozenset()), (6, 20))
        cells = _cells(frame)
        self.assertEqual(_row_text(cells, 4, 20), "  0/5")
        self.assertEqual({row for row, _col in cells}, {4, 5})

    def test_highlights_outside_text_are_skipped(self) -> None:
        snapshot = _snapshot(results=(MatchResult("ab", 0, 0, 4, 10, (0, 3)),), selected_items=frozenset())
        cells = _cells(build_frame(snapshot, (6, 20)))
        self.assertEqual(cells[(0, 2)].fg, DEFAULT_THEME.matched)
        self.assertIsNone(cells[(0, 3)].fg)
        self.assertNotIn((0, 5), cells)

    def _single_row(self, text: str, positions: tuple[int, ...] = ()) -> StateSnapshot:
        result = MatchResult(text, 0, 0, 0, 0, positions)
        return _snapshot(results=(result,), selected_items=frozenset())

    def test_wide_characters_take_two_columns_and_clip_at_edge(self) -> None:
        cells = _cells(build_frame(self._single_row("漢字漢字漢字漢字"), (4, 10)))
        self.assertEqual(_row_text(cells, 0, 10), "> 漢字漢字")
        self.assertEqual(max(col for row, col in cells if row == 0), 9)

        cells = _cells(build_frame(self._single_row("漢字漢字漢字漢字"), (4, 9)))
        self.assertEqual(_row_text(cells, 0, 9), "> 漢字漢")
        self.assertNotIn((0, 8), cells)

    def test_highlight_covers_both_halves_of_wide_character(self) -> None:
        cells = _cells(build_frame(self._single_row("漢a", (0,)), (4, 10)))
        self.assertEqual((cells[(0, 2)].char, cells[(0, 3)].char), ("漢", ""))
        self.assertEqual(cells[(0, 2)].fg, DEFAULT_THEME.matched)
        self.assertEqual(cells[(0, 3)].fg, DEFAULT_THEME.matched)
        self.assertEqual(cells[(0, 4)].char, "a")

    def test_tab_expands_to_next_stop(self) -> None:
        cells = _cells(build_frame(self._single_row("a\tb"), (4, 20)))
        self.assertNotIn("\t", {cell.char for cell in cells.values()})
        self.assertEqual(_row_text(cells, 0, 20), "> a       b")
        self.assertEqual(cells[(0, 10)].char, "b")

    def test_control_characters_are_replaced(self) -> None:
        cells = _cells(build_frame(self._single_row("a\x1bb\x07"), (4, 20)))
        self.assertEqual(_row_text(cells, 0, 20), "> a?b?")

    def test_combining_mark_shares_base_cell(self) -> None:
        cells = _cells(build_frame(self._single_row("e\u0301x"), (4, 20)))
        self.assertEqual(cells[(0, 2)].char, "e\u0301")
        self.assertEqual(cells[(0, 3)].char, "x")

    def test_input_cursor_follows_query_display_width(self) -> None:
        frame = build_frame(_snapshot(query="漢x", cursor_position=1), (6, 20))
        self.assertEqual(_input_cursor(frame), InputCursor(5, 4))
        self.assertEqual(_row_text(_cells(frame), 5, 20), "> 漢x")

    def test_plain_theme_has_no_colors(self) -> None:
        frame = build_frame(_snapshot(), (6, 20), theme=PLAIN_THEME)
        for cell in _cells(frame).values():
            self.assertIsNone(cell.fg)
            self.assertIsNone(cell.bg)


class RecordingSurface:
    def __init__(self, rows: int, cols: int) -> None:
        self.rows = rows
        self.cols = cols
        self.cells: dict[tuple[int, int], str] = {}
        self.input_cursor: tuple[int, int] | None = None
        self.flushes = 0
        self.clears = 0

    def size(self) -> tuple[int, int]:
        return self.rows, self.cols

    def read_key(self, timeout_ms: int | None = None) -> str:
        return "EOF"

    def set_cell(self, row, col, char, fg=None, bg=None, bold=False) -> None:
        self.cells[(row, col)] = char

    def clear(self) -> None:
        self.clears += 1
        self.cells = {}

    def flush(self) -> None:
        self.flushes += 1

    def set_input_cursor(self, row: int, col: int) -> None:
        self.input_cursor = (row, col)

    def poll_resize(self) -> bool:
        return False


class RendererTests(unittest.TestCase):
    def _long_snapshot(self, cursor_item: int) -> StateSnapshot:
        results = tuple(MatchResult.empty(f"line {idx}", idx) for idx in range(20))
        return _snapshot(query="", cursor_position=0, results=results, cursor_item=cursor_item, total_count=20)

    def test_render_applies_frame_to_surface(self) -> None:
        surface = RecordingSurface(6, 20)
        Renderer(surface).render(_snapshot())
        self.assertEqual((surface.clears, surface.flushes), (1, 1))
        self.assertEqual(surface.cells[(0, 0)], ">")
        self.assertEqual(surface.input_cursor, (5, 5))

    def test_render_remembers_scroll_offset(self) -> None:
        surface = RecordingSurface(7, 20)
        renderer = Renderer(surface)

        renderer.render(self._long_snapshot(10))
        self.assertEqual(renderer.draw_start, 6)
        renderer.render(self._long_snapshot(8))
        self.assertEqual(renderer.draw_start, 6)
        self.assertEqual(renderer.last_viewport.local_cursor, 2)

    def test_page_size_tracks_terminal_height(self) -> None:
        surface = RecordingSurface(7, 20)
        renderer = Renderer(surface)
        self.assertEqual(renderer.page_size(), 5)
        surface.rows = 2
        self.assertEqual(renderer.page_size(), 1)


if __name__ == "__main__":
    unittest.main()
