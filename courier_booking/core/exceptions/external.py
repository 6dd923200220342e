"""
External API-related exceptions.
"""


class ExternalAPIError(Exception):
    """Base exception for external API errors."""
    pass


class BackendAPIError(ExternalAPIError):
    """Exception raised when the booking backend rejects or fails a call."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DistanceLookupError(ExternalAPIError):
    """Exception raised when a distance cannot be resolved for two locations."""
    pass
