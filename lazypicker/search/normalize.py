"""Diacritic folding applied to candidates and queries before matching.

The default normalizer folds one character at a time and keeps any character
whose folded form is not exactly one character, so the output always has the
same length as the input and match offsets map 1:1 onto the original text.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Callable, Sequence
from functools import lru_cache

Normalizer = Callable[[str], str]


@lru_cache(maxsize=4096)
def fold_char(ch: str) -> str:
    """Return ``ch`` without combining marks, or ``ch`` itself when folding is not 1:1."""
    if ch.isascii():
        return ch
    decomposed = unicodedata.normalize("NFKD", ch)
    folded = "".join(part for part in decomposed if not unicodedata.combining(part))
    if len(folded) != 1:
        return ch
    return folded


def normalize_text(text: str) -> str:
    if text.isascii():
        return text
    return "".join(fold_char(ch) for ch in text)


def normalize_all(items: Sequence[str], normalizer: Normalizer | None = None) -> list[str]:
    fold = normalizer or normalize_text
    return [fold(item) for item in items]


def is_length_preserving(text: str, normalized: str) -> bool:
    return len(text) == len(normalized)


__all__ = [
    "Normalizer",
    "fold_char",
    "normalize_text",
    "normalize_all",
    "is_length_preserving",
]
