"""Fuzzy matching engine.

A query matches a candidate when its characters occur, in order, in the
candidate's normalized text. The span is located with a greedy forward scan
and then tightened with a backward scan, giving the shortest span that ends
at the earliest possible offset. Scoring walks that span once and rewards
matches on word boundaries, camelCase humps, and consecutive runs while
penalizing gaps.

Scoring is pure Python, so on a GIL build evaluation threads take turns
rather than run side by side. ``Matcher`` therefore defaults to a single
worker there and only fans out to ``os.cpu_count()`` threads on a
free-threaded interpreter; passing ``workers`` explicitly overrides this.
"""

from __future__ import annotations

import logging
import os
import sys
import time
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor

from .charclass import CharClass, char_class
from .normalize import Normalizer, is_length_preserving, normalize_all, normalize_text
from .ranking import rank
from .types import Candidate, MatchResult, OrderBy

logger = logging.getLogger(__name__)

SCORE_MATCH = 16
SCORE_GAP_START = -3
SCORE_GAP_EXTENSION = -1

BONUS_BOUNDARY = SCORE_MATCH // 2
BONUS_NON_WORD = SCORE_MATCH // 2
BONUS_CAMEL_123 = BONUS_BOUNDARY + SCORE_GAP_EXTENSION
BONUS_CONSECUTIVE = -(SCORE_GAP_START + SCORE_GAP_EXTENSION)
BONUS_FIRST_CHAR_MULTIPLIER = 2

PARALLEL_MIN_CANDIDATES = 5_000


def default_workers() -> int:
    """Evaluation threads to use when the caller does not choose."""
    is_gil_enabled = getattr(sys, "_is_gil_enabled", None)
    if is_gil_enabled is None or is_gil_enabled():
        return 1
    return os.cpu_count() or 1


def bonus_for(prev_class: CharClass, current_class: CharClass) -> int:
    """Return the transition bonus for landing on ``current_class`` after ``prev_class``."""
    if prev_class is CharClass.NON_WORD and current_class is not CharClass.NON_WORD:
        return BONUS_BOUNDARY
    if (prev_class is CharClass.LOWER and current_class is CharClass.UPPER) or (
        prev_class is not CharClass.NUMBER and current_class is CharClass.NUMBER
    ):
        return BONUS_CAMEL_123
    if current_class is CharClass.NON_WORD:
        return BONUS_NON_WORD
    return 0


def find_span(normalized_text: str, normalized_query: str) -> tuple[int, int] | None:
    """Locate the tightest ``[start, end)`` span containing the query as a subsequence.

    Returns ``None`` when the query cannot be fully consumed.
    """
    if not normalized_query:
        return None

    start = -1
    pos = 0
    for ch in normalized_query:
        idx = normalized_text.find(ch, pos)
        if idx < 0:
            return None
        if start < 0:
            start = idx
        pos = idx + 1
    end = pos

    # Walk back from the end; the last query character is the one at end - 1.
    for query_idx in range(len(normalized_query) - 1, -1, -1):
        idx = normalized_text.rfind(normalized_query[query_idx], start + 1, pos)
        if idx < 0:
            break
        pos = idx
    else:
        start = pos
    return start, end


def score_span(
    normalized_text: str,
    normalized_query: str,
    start: int,
    end: int,
) -> tuple[int, tuple[int, ...]]:
    """Score the span ``[start, end)`` and return ``(score, positions)``."""
    query_len = len(normalized_query)
    pattern_idx = 0
    score = 0
    consecutive = 0
    first_bonus = 0
    in_gap = False
    positions: list[int] = []

    prev_class = char_class(normalized_text[start - 1]) if start > 0 else CharClass.NON_WORD
    for idx in range(start, end):
        ch = normalized_text[idx]
        current_class = char_class(ch)
        if pattern_idx < query_len and ch == normalized_query[pattern_idx]:
            positions.append(idx)
            score += SCORE_MATCH
            bonus = bonus_for(prev_class, current_class)
            if consecutive == 0:
                first_bonus = bonus
            else:
                # A fresh boundary inside a run replaces the bonus carried from its head.
                if bonus == BONUS_BOUNDARY:
                    first_bonus = bonus
                bonus = max(bonus, first_bonus, BONUS_CONSECUTIVE)
            if pattern_idx == 0:
                score += bonus * BONUS_FIRST_CHAR_MULTIPLIER
            else:
                score += bonus
            in_gap = False
            consecutive += 1
            pattern_idx += 1
        else:
            score += SCORE_GAP_EXTENSION if in_gap else SCORE_GAP_START
            in_gap = True
            consecutive = 0
            first_bonus = 0
        prev_class = current_class
    return score, tuple(positions)


def evaluate(
    text: str,
    normalized_text: str,
    normalized_query: str,
    item_index: int = 0,
) -> MatchResult:
    """Match one candidate. Non-matches are returned, never raised."""
    span = find_span(normalized_text, normalized_query)
    if span is None:
        return MatchResult.no_match(text, item_index)
    start, end = span
    score, positions = score_span(normalized_text, normalized_query, start, end)
    return MatchResult(
        text=text,
        item_index=item_index,
        start=start,
        end=end,
        score=score,
        positions=positions,
    )


def match_all(
    candidates: Iterable[Candidate],
    query: str,
    normalize: bool = False,
    normalizer: Normalizer | None = None,
) -> list[MatchResult]:
    """Evaluate every candidate against ``query`` without ranking.

    An empty query matches everything with score ``0`` in input order.
    Non-matches are kept so callers see one result per candidate.
    """
    if not query:
        return [MatchResult.empty(candidate.text, candidate.item_index) for candidate in candidates]
    fold = normalizer or normalize_text
    normalized_query = fold(query) if normalize else query
    return [
        evaluate(
            candidate.text,
            fold(candidate.text) if normalize else candidate.text,
            normalized_query,
            candidate.item_index,
        )
        for candidate in candidates
    ]


class Matcher:
    """Match and rank a fixed candidate list for successive queries.

    Candidates are normalized once up front. With more than one worker, large
    lists are split into contiguous chunks evaluated on a thread pool; chunks
    are gathered in order and ranked with a stable sort, so the pool only
    affects latency.
    """

    def __init__(
        self,
        items: Sequence[str],
        order_by: OrderBy | str = OrderBy.SCORE,
        normalize: bool = False,
        normalizer: Normalizer | None = None,
        *,
        workers: int | None = None,
        parallel_min_candidates: int = PARALLEL_MIN_CANDIDATES,
    ) -> None:
        self.items: tuple[str, ...] = tuple(items)
        self.order_by = OrderBy.parse(order_by)
        self.normalize = normalize
        self._normalizer: Normalizer = normalizer or normalize_text
        if normalize:
            self.normalized_items: tuple[str, ...] = tuple(normalize_all(self.items, self._normalizer))
            resized = sum(
                1
                for text, folded in zip(self.items, self.normalized_items)
                if not is_length_preserving(text, folded)
            )
            if resized:
                logger.debug("normalizer changed the length of %d candidate(s); highlights may shift", resized)
        else:
            self.normalized_items = self.items
        self.workers = max(1, workers if workers is not None else default_workers())
        self.parallel_min_candidates = max(1, parallel_min_candidates)
        self._executor: ThreadPoolExecutor | None = None

    def __len__(self) -> int:
        return len(self.items)

    def __enter__(self) -> Matcher:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def normalize_query(self, query: str) -> str:
        return self._normalizer(query) if self.normalize else query

    def _evaluate_range(self, normalized_query: str, lo: int, hi: int) -> list[MatchResult]:
        items = self.items
        normalized_items = self.normalized_items
        return [evaluate(items[idx], normalized_items[idx], normalized_query, idx) for idx in range(lo, hi)]

    def evaluate_all(self, normalized_query: str) -> list[MatchResult]:
        """Evaluate every candidate, returning results in original order."""
        count = len(self.items)
        if count < self.parallel_min_candidates or self.workers <= 1:
            return self._evaluate_range(normalized_query, 0, count)

        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="lazypicker-match")
        chunk_size = -(-count // self.workers)
        futures = [
            self._executor.submit(self._evaluate_range, normalized_query, lo, min(count, lo + chunk_size))
            for lo in range(0, count, chunk_size)
        ]
        results: list[MatchResult] = []
        for future in futures:
            results.extend(future.result())
        return results

    def match(self, query: str) -> list[MatchResult]:
        """Return ranked matches for ``query``; an empty query returns every item in order."""
        if not query:
            return [MatchResult.empty(text, idx) for idx, text in enumerate(self.items)]
        started = time.monotonic()
        ranked = rank(self.evaluate_all(self.normalize_query(query)), self.order_by)
        logger.debug(
            "query %r matched %d/%d in %.1fms",
            query,
            len(ranked),
            len(self.items),
            (time.monotonic() - started) * 1000.0,
        )
        return ranked


__all__ = [
    "SCORE_MATCH",
    "SCORE_GAP_START",
    "SCORE_GAP_EXTENSION",
    "BONUS_BOUNDARY",
    "BONUS_NON_WORD",
    "BONUS_CAMEL_123",
    "BONUS_CONSECUTIVE",
    "BONUS_FIRST_CHAR_MULTIPLIER",
    "PARALLEL_MIN_CANDIDATES",
    "default_workers",
    "Matcher",
    "bonus_for",
    "evaluate",
    "find_span",
    "match_all",
    "score_span",
]
