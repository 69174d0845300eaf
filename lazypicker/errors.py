"""Session outcomes other than a successful selection."""

from __future__ import annotations


class PickerError(Exception):
    """Base class for non-success picker session endings."""

    default_message = "picker session failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class EmptyInputError(PickerError):
    """Raised before any terminal interaction when there is nothing to pick from."""

    default_message = "No candidates to select from"


class EmptyResultError(PickerError):
    """Raised when the user confirms but no item can be resolved."""

    default_message = "Select result is empty"


class AbortedByUserError(PickerError):
    default_message = "Interaction aborted by user"


__all__ = ["PickerError", "EmptyInputError", "EmptyResultError", "AbortedByUserError"]
