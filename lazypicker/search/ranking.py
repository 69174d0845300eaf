"""Stable ordering of matched results."""

from __future__ import annotations

from collections.abc import Iterable

from .types import MatchResult, OrderBy


def trimmed_length(result: MatchResult) -> int:
    return len(result.text.strip())


def rank(results: Iterable[MatchResult], order_by: OrderBy = OrderBy.SCORE) -> list[MatchResult]:
    """Drop non-matches and sort the rest.

    ``sorted`` is stable, so ties keep their incoming relative order. Callers
    pass results in original-list order, which makes the output independent
    of how evaluation was scheduled.
    """
    matched = [result for result in results if result.matched]
    if order_by is OrderBy.LENGTH:
        return sorted(matched, key=trimmed_length)
    return sorted(matched, key=lambda result: -result.score)


__all__ = ["rank", "trimmed_length"]
