"""
Service catalog exceptions.
"""

from .booking import BookingFlowError


class CatalogError(BookingFlowError):
    """Base exception for service catalog lookups."""

    def __init__(self, service_type: str, message: str) -> None:
        super().__init__(message)
        self.service_type = service_type


class UnknownServiceType(CatalogError):
    """Raised when a service type id is not registered in the catalog."""

    def __init__(self, service_type: str) -> None:
        super().__init__(service_type, f"Unknown service type '{service_type}'")


class ServiceUnavailable(CatalogError):
    """Raised when a registered service type is disabled for new bookings."""

    def __init__(self, service_type: str) -> None:
        super().__init__(service_type, f"Service type '{service_type}' is not available")
