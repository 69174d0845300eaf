"""Pure scroll math for the result list.

The window is sticky: it only moves when the highlighted row would leave it,
and then by the smallest amount that brings the row back into view.
"""

from __future__ import annotations

from dataclasses import dataclass

RESERVED_ROWS = 2


@dataclass(frozen=True)
class Viewport:
    draw_start: int
    visible_count: int
    local_cursor: int
    item_rows: int


def item_rows_for(terminal_rows: int) -> int:
    """Rows available for results after the status and query lines."""
    return max(0, terminal_rows - RESERVED_ROWS)


def compute_viewport(
    result_count: int,
    cursor_item: int,
    previous_draw_start: int,
    item_rows: int,
) -> Viewport:
    """Compute the visible window for ``cursor_item``.

    ``draw_start`` is always clamped into ``[0, max(result_count - visible_count, 0)]``.
    """
    item_rows = max(0, item_rows)
    visible_count = min(item_rows, result_count)
    draw_start = previous_draw_start

    if result_count < item_rows:
        draw_start = 0
    elif cursor_item < draw_start:
        draw_start = cursor_item
    elif cursor_item >= draw_start + visible_count:
        draw_start = (cursor_item - visible_count + 1) % result_count

    draw_start = max(min(draw_start, result_count - visible_count), 0)
    return Viewport(
        draw_start=draw_start,
        visible_count=visible_count,
        local_cursor=cursor_item - draw_start,
        item_rows=item_rows,
    )


def window_index_for_row(row: int, item_rows: int, reverse: bool) -> int:
    """Map a physical result row to an index within the visible window."""
    if reverse:
        return item_rows - 1 - row
    return row


__all__ = [
    "RESERVED_ROWS",
    "Viewport",
    "item_rows_for",
    "compute_viewport",
    "window_index_for_row",
]
