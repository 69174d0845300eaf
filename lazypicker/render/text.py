"""Terminal display width of candidate and query text.

Lays text out into screen cells: tabs expand to spaces, control characters
are replaced, combining marks join the preceding cell, and East Asian wide
characters take two cells, the second an empty continuation.
"""

from __future__ import annotations

import unicodedata

TAB_STOP = 8
CONTROL_REPLACEMENT = "?"
WIDE_CONTINUATION = ""


def _is_control(ch: str) -> bool:
    return unicodedata.category(ch) == "Cc"


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    control characters are drawn as one replacement column, and East Asian
    wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if _is_control(ch):
        return 1
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    col = 0
    for ch in text:
        col += char_display_width(ch, col)
    return col


def display_cells(text: str, max_cols: int) -> list[tuple[int, int, str]]:
    """Lay ``text`` out as ``(column, char_offset, glyph)`` cells.

    Columns are relative to the start of the text and stay below ``max_cols``;
    a character that would cross that edge is dropped along with everything
    after it. ``char_offset`` indexes ``text``, so highlighted positions map
    onto every cell their character produced.
    """
    cells: list[tuple[int, int, str]] = []
    if max_cols <= 0:
        return cells
    col = 0
    base_index = -1
    for offset, ch in enumerate(text):
        width = char_display_width(ch, col)
        if width == 0:
            if base_index >= 0:
                base_col, base_offset, glyph = cells[base_index]
                cells[base_index] = (base_col, base_offset, glyph + ch)
            continue
        if col + width > max_cols:
            break
        if ch == "\t":
            cells.extend((col + step, offset, " ") for step in range(width))
            base_index = -1
        elif _is_control(ch):
            cells.append((col, offset, CONTROL_REPLACEMENT))
            base_index = -1
        else:
            base_index = len(cells)
            cells.append((col, offset, ch))
            if width == 2:
                cells.append((col + 1, offset, WIDE_CONTINUATION))
        col += width
    return cells


__all__ = [
    "TAB_STOP",
    "CONTROL_REPLACEMENT",
    "WIDE_CONTINUATION",
    "char_display_width",
    "display_width",
    "display_cells",
]
