"""
Wizard session exceptions.
"""

from .booking import BookingFlowError


class SessionNotFound(BookingFlowError):
    """Raised when a wizard session id is unknown or has expired."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Booking session '{session_id}' not found")
        self.session_id = session_id
