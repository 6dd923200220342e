"""
Application settings and configuration.
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .pricing import PricingConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Courier Booking Engine"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8001

    # Booking backend (PostgREST-style REST endpoint)
    backend_url: Optional[str] = None
    backend_api_key: Optional[str] = None
    backend_table: str = "deliveries"
    backend_timeout: float = 10.0

    # Submission
    submission_timeout_seconds: float = 30.0

    # Distance lookup
    geoapify_api_key: Optional[str] = None
    placeholder_distance_km: Decimal = Decimal("12.5")

    # Wizard behaviour
    disabled_service_types: List[str] = Field(default_factory=list)
    enforce_step_requirements: bool = True
    currency: str = "AUD"

    # Pricing
    pricing: PricingConfig = Field(default_factory=PricingConfig)

    # Logging
    log_level: str = "INFO"
    event_log_path: Optional[str] = None


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()
