"""
Service layer for the courier booking engine.
"""

from .booking import BookingWizard, PriceEstimator, ServiceCatalog
from .external import BackendAPIService, InMemoryBookingBackend
from .memory import WizardSessionStore

__all__ = [
    "BookingWizard",
    "PriceEstimator",
    "ServiceCatalog",
    "BackendAPIService",
    "InMemoryBookingBackend",
    "WizardSessionStore",
]
