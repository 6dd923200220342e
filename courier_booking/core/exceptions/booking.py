"""
Base exception for the booking flow.
"""


class BookingFlowError(Exception):
    """Base exception for booking flow errors."""
    pass
