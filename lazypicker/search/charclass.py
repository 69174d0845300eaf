"""Character classes used to score match boundaries."""

from __future__ import annotations

from enum import Enum


class CharClass(Enum):
    LOWER = "lower"
    UPPER = "upper"
    LETTER = "letter"
    NUMBER = "number"
    NON_WORD = "non_word"


def char_class(ch: str) -> CharClass:
    """Classify one character.

    Checks run in priority order: lowercase, uppercase, decimal digit, any
    other letter (e.g. CJK), and finally everything else as non-word.
    """
    if ch.islower():
        return CharClass.LOWER
    if ch.isupper():
        return CharClass.UPPER
    if ch.isdecimal():
        return CharClass.NUMBER
    if ch.isalpha():
        return CharClass.LETTER
    return CharClass.NON_WORD


def is_word_class(value: CharClass) -> bool:
    return value is not CharClass.NON_WORD
