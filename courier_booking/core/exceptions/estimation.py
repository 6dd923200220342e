"""
Price estimation exceptions.
"""

from typing import Any

from .booking import BookingFlowError


class InvalidQuantity(BookingFlowError):
    """Raised when the estimator receives a negative amount."""

    def __init__(self, field: str, value: Any) -> None:
        super().__init__(f"'{field}' must not be negative (got {value})")
        self.field = field
        self.value = value
