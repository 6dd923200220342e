"""
External service adapters.
"""

from .service import BackendAPIService
from .in_memory import InMemoryBookingBackend, generate_tracking_id
from .distance import FixedDistanceEstimator, GeoapifyDistanceEstimator, haversine_distance

__all__ = [
    "BackendAPIService",
    "InMemoryBookingBackend",
    "generate_tracking_id",
    "FixedDistanceEstimator",
    "GeoapifyDistanceEstimator",
    "haversine_distance",
]
