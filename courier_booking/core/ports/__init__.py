"""
Ports for the collaborators the booking engine depends on.
"""

from .booking_backend import BookingBackend
from .distance import DistanceEstimator
from .notifier import OutcomeNotifier

__all__ = [
    "BookingBackend",
    "DistanceEstimator",
    "OutcomeNotifier",
]
