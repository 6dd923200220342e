"""
API route handlers.
"""

from .health import HealthHandler
from .booking import BookingHandler, booking_error_handler, get_account, status_for_error

__all__ = [
    "HealthHandler",
    "BookingHandler",
    "booking_error_handler",
    "get_account",
    "status_for_error",
]
