"""
Semantic outcomes emitted to the presentation layer.
"""

from enum import Enum


class BookingOutcome(str, Enum):
    """Outcome of a submission attempt."""

    VALIDATION_FAILED = "validation_failed"
    SUBMISSION_SUCCEEDED = "submission_succeeded"
    SUBMISSION_FAILED = "submission_failed"
    SUBMISSION_TIMED_OUT = "submission_timed_out"
    SUBMISSION_IN_PROGRESS = "submission_in_progress"


class FieldErrorCode(str, Enum):
    """Machine-readable reasons a draft field failed validation."""

    REQUIRED = "required"
    NEGATIVE = "negative"
    INVALID_EMAIL = "invalid_email"
    INVALID_PHONE = "invalid_phone"
    UNKNOWN_CONTAINER = "unknown_container"
    NOT_SELECTED = "not_selected"
