"""
External API configuration.
"""

from typing import Dict, Optional

from pydantic import BaseModel


class BackendAPIConfig(BaseModel):
    """Booking backend and geocoding API settings."""

    # Booking backend
    backend_url: Optional[str] = None
    backend_api_key: Optional[str] = None
    backend_table: str = "deliveries"
    backend_timeout: float = 10.0

    # Geoapify
    geoapify_api_key: Optional[str] = None
    geoapify_geocode_url: str = "https://api.geoapify.com/v1/geocode/search"
    geoapify_routing_url: str = "https://api.geoapify.com/v1/routing"
    geoapify_timeout: float = 10.0

    @classmethod
    def from_settings(cls, settings) -> "BackendAPIConfig":
        """Build the API config from application settings."""
        return cls(
            backend_url=settings.backend_url,
            backend_api_key=settings.backend_api_key,
            backend_table=settings.backend_table,
            backend_timeout=settings.backend_timeout,
            geoapify_api_key=settings.geoapify_api_key,
        )

    def get_bookings_url(self) -> Optional[str]:
        """Get the REST endpoint for booking rows if configured."""
        if not self.backend_url:
            return None
        return f"{self.backend_url.rstrip('/')}/rest/v1/{self.backend_table}"

    def get_backend_headers(self) -> Dict[str, str]:
        """Headers required by the booking backend."""
        headers = {
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        }
        if self.backend_api_key:
            headers["apikey"] = self.backend_api_key
            headers["Authorization"] = f"Bearer {self.backend_api_key}"
        return headers

    def is_backend_configured(self) -> bool:
        """Check if the booking backend is configured."""
        return bool(self.backend_url)

    def is_geoapify_configured(self) -> bool:
        """Check if Geoapify is configured."""
        return bool(self.geoapify_api_key)
