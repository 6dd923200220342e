"""
API layer for the courier booking engine.
"""

from .app import create_app
from .handlers import BookingHandler, HealthHandler
from .middleware import SecurityHeaders, LoggingMiddleware

__all__ = [
    "create_app",
    "BookingHandler",
    "HealthHandler",
    "SecurityHeaders",
    "LoggingMiddleware",
]
