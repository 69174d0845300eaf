"""Interactive fuzzy selection for terminal programs."""

from .errors import AbortedByUserError, EmptyInputError, EmptyResultError, PickerError
from .runtime.app import Picker, multi_select, select
from .runtime.config import PickerConfig, load_picker_config
from .search import Candidate, Matcher, MatchResult, OrderBy, match_all, normalize_text, rank

__version__ = "0.1.0"

__all__ = [
    "AbortedByUserError",
    "EmptyInputError",
    "EmptyResultError",
    "PickerError",
    "Picker",
    "PickerConfig",
    "load_picker_config",
    "select",
    "multi_select",
    "Candidate",
    "Matcher",
    "MatchResult",
    "OrderBy",
    "match_all",
    "normalize_text",
    "rank",
]
