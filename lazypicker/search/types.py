"""Value types shared by matching, ranking, and rendering."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OrderBy(Enum):
    """Result ordering applied after matching."""

    SCORE = "score"
    LENGTH = "length"

    @classmethod
    def parse(cls, value: OrderBy | str) -> OrderBy:
        """Accept an ``OrderBy`` member or its case-insensitive string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            names = ", ".join(member.value for member in cls)
            raise ValueError(f"unknown order {value!r} (expected one of: {names})") from exc


@dataclass(frozen=True)
class Candidate:
    text: str
    item_index: int


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching one candidate against one query.

    ``start``/``end`` bound the matched span in normalized-text offsets and are
    both ``-1`` for a non-match. ``positions`` lists the consumed offsets in
    increasing order, one per query character.
    """

    text: str
    item_index: int
    start: int = -1
    end: int = -1
    score: int = 0
    positions: tuple[int, ...] = ()

    @property
    def matched(self) -> bool:
        return self.start != -1 and self.end != -1

    @property
    def span(self) -> tuple[int, int] | None:
        if not self.matched:
            return None
        return self.start, self.end

    @classmethod
    def empty(cls, text: str, item_index: int) -> MatchResult:
        """Match produced by an empty query: zero-width span, score ``0``."""
        return cls(text=text, item_index=item_index, start=0, end=0)

    @classmethod
    def no_match(cls, text: str, item_index: int) -> MatchResult:
        return cls(text=text, item_index=item_index)


__all__ = ["OrderBy", "Candidate", "MatchResult"]
