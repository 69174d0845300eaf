from __future__ import annotations

from dataclasses import dataclass, field

from .search.types import MatchResult


@dataclass(frozen=True)
class StateSnapshot:
    """Immutable view of ``SelectionState`` handed to renderers."""

    query: str
    cursor_position: int
    results: tuple[MatchResult, ...]
    cursor_item: int
    selected_items: frozenset[int]
    total_count: int


@dataclass
class SelectionState:
    results: list[MatchResult]
    total_count: int = 0
    query: str = ""
    cursor_position: int = 0
    cursor_item: int = 0
    selected_items: set[int] = field(default_factory=set)

    def __post_init__(self) -> None:
        self.cursor_item = self._clamped_cursor_item(self.cursor_item)
        self.cursor_position = max(0, min(self.cursor_position, len(self.query)))

    def _clamped_cursor_item(self, cursor_item: int) -> int:
        if not self.results:
            return -1
        return max(0, min(cursor_item, len(self.results) - 1))

    def set_results(self, results: list[MatchResult]) -> None:
        """Replace results and re-clamp the highlighted row.

        The row index is kept where possible rather than reset to the top, so
        after narrowing the highlighted row may point at a different item.
        """
        self.results = results
        self.cursor_item = -1 if not results else min(self.cursor_item, len(results) - 1)
        if results and self.cursor_item < 0:
            self.cursor_item = 0

    def cursor_result(self) -> MatchResult | None:
        if not (0 <= self.cursor_item < len(self.results)):
            return None
        return self.results[self.cursor_item]

    def snapshot(self) -> StateSnapshot:
        return StateSnapshot(
            query=self.query,
            cursor_position=self.cursor_position,
            results=tuple(self.results),
            cursor_item=self.cursor_item,
            selected_items=frozenset(self.selected_items),
            total_count=self.total_count,
        )
