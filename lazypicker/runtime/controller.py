"""Key-driven state machine for a picker session.

``SelectionController.handle_key`` applies one decoded key to a
``SelectionState`` and reports whether the session is still active. It never
touches the terminal, so the loop stays a thin read/handle/render cycle.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from ..errors import EmptyResultError
from ..search.matcher import Matcher
from ..state import SelectionState

CONFIRM_KEYS = frozenset({"ENTER"})
CANCEL_KEYS = frozenset({"ESC", "CTRL_C", "EOF"})


class SessionStatus(Enum):
    ACTIVE = "active"
    CONFIRMED = "confirmed"
    ABORTED = "aborted"


class SelectionController:
    """Apply key events to selection state and re-run matching on edits."""

    def __init__(
        self,
        state: SelectionState,
        matcher: Matcher,
        *,
        page_size: Callable[[], int],
        reverse: bool = False,
        multi_select: bool = False,
        max_selected: int | None = None,
    ) -> None:
        self.state = state
        self.matcher = matcher
        self.page_size = page_size
        self.reverse = reverse
        self.multi_select = multi_select
        self.max_selected = max_selected
        self.status = SessionStatus.ACTIVE

    # cursor over results
    def move_cursor_item(self, delta: int) -> None:
        """Move the highlighted row by ``delta`` with wraparound."""
        count = len(self.state.results)
        if count == 0:
            return
        self.state.cursor_item = (self.state.cursor_item + delta) % count

    def page_cursor_item(self, direction: int) -> None:
        """Move the highlighted row by one page, clamped to the list."""
        count = len(self.state.results)
        if count == 0:
            return
        target = self.state.cursor_item + direction * max(1, self.page_size())
        self.state.cursor_item = max(0, min(target, count - 1))

    # cursor within query
    def move_cursor_position(self, delta: int) -> None:
        self.state.cursor_position = max(0, min(self.state.cursor_position + delta, len(self.state.query)))

    def set_cursor_position(self, position: int) -> None:
        self.state.cursor_position = max(0, min(position, len(self.state.query)))

    # query edits
    def requery(self) -> None:
        self.state.set_results(self.matcher.match(self.state.query))

    def insert_text(self, text: str) -> None:
        pos = self.state.cursor_position
        self.state.query = self.state.query[:pos] + text + self.state.query[pos:]
        self.state.cursor_position = pos + len(text)
        self.requery()

    def delete_backward(self) -> bool:
        pos = self.state.cursor_position
        if pos <= 0:
            return False
        self.state.query = self.state.query[: pos - 1] + self.state.query[pos:]
        self.state.cursor_position = pos - 1
        self.requery()
        return True

    def delete_forward(self) -> bool:
        pos = self.state.cursor_position
        if pos >= len(self.state.query):
            return False
        self.state.query = self.state.query[:pos] + self.state.query[pos + 1 :]
        self.requery()
        return True

    # multi-select
    def toggle_selection(self) -> bool:
        """Toggle the highlighted item in the global selection set.

        Adding respects ``max_selected``; removing always succeeds.
        """
        if not self.multi_select:
            return False
        result = self.state.cursor_result()
        if result is None:
            return False
        selected = self.state.selected_items
        if result.item_index in selected:
            selected.remove(result.item_index)
            return True
        if self.max_selected is None or len(selected) < self.max_selected:
            selected.add(result.item_index)
            return True
        return False

    def handle_key(self, key: str) -> SessionStatus:
        """Apply one key token and return the resulting session status."""
        if self.status is not SessionStatus.ACTIVE:
            return self.status

        if key in CONFIRM_KEYS:
            self.status = SessionStatus.CONFIRMED
            return self.status
        if key in CANCEL_KEYS:
            self.status = SessionStatus.ABORTED
            return self.status

        step = -1 if self.reverse else 1
        if key == "DOWN":
            self.move_cursor_item(step)
        elif key == "UP":
            self.move_cursor_item(-step)
        elif key == "PAGE_DOWN":
            self.page_cursor_item(step)
        elif key == "PAGE_UP":
            self.page_cursor_item(-step)
        elif key == "LEFT":
            self.move_cursor_position(-1)
        elif key == "RIGHT":
            self.move_cursor_position(1)
        elif key in {"CTRL_A", "HOME"}:
            self.set_cursor_position(0)
        elif key in {"CTRL_E", "END"}:
            self.set_cursor_position(len(self.state.query))
        elif key == "TAB":
            self.toggle_selection()
        elif key == "BACKSPACE":
            self.delete_backward()
        elif key == "DELETE":
            self.delete_forward()
        elif len(key) == 1 and key.isprintable():
            self.insert_text(key)
        return self.status


def resolve_single(state: SelectionState) -> int:
    """Return the item index under the cursor or raise ``EmptyResultError``."""
    result = state.cursor_result()
    if result is None:
        raise EmptyResultError()
    return result.item_index


def resolve_multi(state: SelectionState) -> list[int]:
    """Return selected item indexes in input order.

    Falls back to the highlighted item when nothing was toggled.
    """
    if state.selected_items:
        return sorted(state.selected_items)
    return [resolve_single(state)]


__all__ = [
    "CONFIRM_KEYS",
    "CANCEL_KEYS",
    "SessionStatus",
    "SelectionController",
    "resolve_single",
    "resolve_multi",
]
