"""Search-layer public API: character classes, matching, normalization, ranking."""

from .charclass import CharClass, char_class
from .matcher import (
    BONUS_BOUNDARY,
    BONUS_CAMEL_123,
    BONUS_CONSECUTIVE,
    BONUS_FIRST_CHAR_MULTIPLIER,
    BONUS_NON_WORD,
    SCORE_GAP_EXTENSION,
    SCORE_GAP_START,
    SCORE_MATCH,
    Matcher,
    evaluate,
    find_span,
    match_all,
)
from .normalize import Normalizer, normalize_text
from .ranking import rank
from .types import Candidate, MatchResult, OrderBy

__all__ = [
    "CharClass",
    "char_class",
    "BONUS_BOUNDARY",
    "BONUS_CAMEL_123",
    "BONUS_CONSECUTIVE",
    "BONUS_FIRST_CHAR_MULTIPLIER",
    "BONUS_NON_WORD",
    "SCORE_GAP_EXTENSION",
    "SCORE_GAP_START",
    "SCORE_MATCH",
    "Matcher",
    "evaluate",
    "find_span",
    "match_all",
    "Normalizer",
    "normalize_text",
    "rank",
    "Candidate",
    "MatchResult",
    "OrderBy",
]
