"""Frame building for the picker screen.

``build_frame`` is a pure function from a state snapshot and terminal
geometry to a list of draw instructions. ``Renderer`` adds the one piece of
cross-frame memory (the previous scroll offset) and replays frames onto a
Terminal Surface.

Screen layout, top to bottom: result rows, status line, query line. With
``reverse`` the result rows are drawn bottom-up so the best match sits right
above the status line.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, Union

from ..state import StateSnapshot
from ..ui_theme import DEFAULT_THEME, UITheme
from .text import display_cells, display_width
from .viewport import Viewport, compute_viewport, item_rows_for, window_index_for_row

if TYPE_CHECKING:
    from ..runtime.resize import SnapshotSlot

MARKER_GLYPH = ">"
SELECTED_GLYPH = ">"
PROMPT = "> "
TEXT_COLUMN = 2


@dataclass(frozen=True)
class Cell:
    row: int
    col: int
    char: str
    fg: int | None = None
    bg: int | None = None
    bold: bool = False


@dataclass(frozen=True)
class InputCursor:
    row: int
    col: int


DrawInstruction = Union[Cell, InputCursor]


@dataclass(frozen=True)
class Frame:
    instructions: list[DrawInstruction]
    viewport: Viewport


class TerminalSurface(Protocol):
    def size(self) -> tuple[int, int]: ...

    def read_key(self, timeout_ms: int | None = None) -> str: ...

    def set_cell(
        self,
        row: int,
        col: int,
        char: str,
        fg: int | None = None,
        bg: int | None = None,
        bold: bool = False,
    ) -> None: ...

    def clear(self) -> None: ...

    def flush(self) -> None: ...

    def set_input_cursor(self, row: int, col: int) -> None: ...

    def poll_resize(self) -> bool: ...


def _text_cells(row: int, col: int, text: str, cols: int, fg: int | None = None) -> list[Cell]:
    return [Cell(row, col + text_col, glyph, fg=fg) for text_col, _offset, glyph in display_cells(text, cols - col)]


def _result_row_cells(
    row: int,
    cols: int,
    text: str,
    positions: frozenset[int],
    *,
    highlighted: bool,
    selected: bool,
    theme: UITheme,
) -> list[Cell]:
    cells: list[Cell] = []
    background = theme.marker_background if highlighted else None
    if highlighted:
        cells.append(Cell(row, 0, MARKER_GLYPH, fg=theme.marker, bg=background))
        cells.append(Cell(row, 1, " ", fg=theme.marker, bg=background))
    else:
        cells.append(Cell(row, 0, " "))
    if selected:
        cells.append(Cell(row, 1, SELECTED_GLYPH, fg=theme.selected, bg=background))

    for col, offset, glyph in display_cells(text, cols - TEXT_COLUMN):
        fg = theme.matched if offset in positions else None
        cells.append(Cell(row, TEXT_COLUMN + col, glyph, fg=fg, bg=background, bold=highlighted))
    return cells


def build_frame(
    snapshot: StateSnapshot,
    terminal_size: tuple[int, int],
    *,
    reverse: bool = False,
    previous_draw_start: int = 0,
    theme: UITheme = DEFAULT_THEME,
) -> Frame:
    """Compute draw instructions for one full screen.

    ``positions`` are normalized-text offsets; only offsets that fall inside
    the displayed text are highlighted.
    """
    rows, cols = terminal_size
    item_rows = item_rows_for(rows)
    results = snapshot.results
    viewport = compute_viewport(len(results), snapshot.cursor_item, previous_draw_start, item_rows)
    visible = results[viewport.draw_start : viewport.draw_start + viewport.visible_count]

    instructions: list[DrawInstruction] = []
    for row in range(item_rows):
        window_idx = window_index_for_row(row, item_rows, reverse)
        if not (0 <= window_idx < len(visible)):
            continue
        result = visible[window_idx]
        instructions.extend(
            _result_row_cells(
                row,
                cols,
                result.text,
                frozenset(result.positions),
                highlighted=window_idx == viewport.local_cursor,
                selected=result.item_index in snapshot.selected_items,
                theme=theme,
            )
        )

    status_row = rows - 2
    if status_row >= 0:
        status = f"  {len(results)}/{snapshot.total_count}"
        instructions.extend(_text_cells(status_row, 0, status, cols, fg=theme.status))

    query_row = rows - 1
    if query_row >= 0:
        instructions.extend(_text_cells(query_row, 0, PROMPT, cols, fg=theme.prompt))
        instructions.extend(_text_cells(query_row, len(PROMPT), snapshot.query, cols))
        cursor_col = len(PROMPT) + display_width(snapshot.query[: snapshot.cursor_position])
        instructions.append(InputCursor(query_row, min(cursor_col, max(0, cols - 1))))
    return Frame(instructions=instructions, viewport=viewport)


def apply_frame(surface: TerminalSurface, frame: Frame) -> None:
    surface.clear()
    for instruction in frame.instructions:
        if isinstance(instruction, InputCursor):
            surface.set_input_cursor(instruction.row, instruction.col)
            continue
        surface.set_cell(
            instruction.row,
            instruction.col,
            instruction.char,
            instruction.fg,
            instruction.bg,
            instruction.bold,
        )
    surface.flush()


class Renderer:
    """Draw snapshots onto a surface, remembering the scroll offset.

    ``render`` may be called from the input loop and ``render_latest`` from
    the resize watcher; the lock keeps the two from interleaving frames.
    """

    def __init__(self, surface: TerminalSurface, *, reverse: bool = False, theme: UITheme = DEFAULT_THEME) -> None:
        self.surface = surface
        self.reverse = reverse
        self.theme = theme
        self.draw_start = 0
        self.last_viewport: Viewport | None = None
        self._lock = threading.Lock()

    def page_size(self) -> int:
        """Rows moved by page-up/page-down: the result rows of the current terminal."""
        rows, _cols = self.surface.size()
        return max(1, item_rows_for(rows))

    def render(self, snapshot: StateSnapshot) -> Frame:
        with self._lock:
            return self._render_locked(snapshot)

    def render_latest(self, slot: SnapshotSlot) -> Frame | None:
        """Redraw the newest snapshot in ``slot``, read while holding the lock."""
        with self._lock:
            snapshot = slot.latest
            if snapshot is None:
                return None
            return self._render_locked(snapshot)

    def _render_locked(self, snapshot: StateSnapshot) -> Frame:
        frame = build_frame(
            snapshot,
            self.surface.size(),
            reverse=self.reverse,
            previous_draw_start=self.draw_start,
            theme=self.theme,
        )
        self.draw_start = frame.viewport.draw_start
        self.last_viewport = frame.viewport
        apply_frame(self.surface, frame)
        return frame


__all__ = [
    "MARKER_GLYPH",
    "SELECTED_GLYPH",
    "PROMPT",
    "TEXT_COLUMN",
    "Cell",
    "InputCursor",
    "DrawInstruction",
    "Frame",
    "TerminalSurface",
    "build_frame",
    "apply_frame",
    "Renderer",
]
