"""
Draft mutation exceptions.
"""

from typing import Any

from .booking import BookingFlowError


class DraftError(BookingFlowError):
    """Base exception for draft updates."""
    pass


class InvalidFieldPath(DraftError):
    """Raised when an update targets a field that does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Unknown draft field '{path}'")
        self.path = path


class InvalidFieldValue(DraftError):
    """Raised when a value cannot be stored in the targeted field."""

    def __init__(self, path: str, value: Any, reason: str = "") -> None:
        message = f"Invalid value for '{path}': {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.path = path
        self.value = value


class FieldNotApplicable(DraftError):
    """Raised when a field group does not belong to the selected service type."""
    pass
