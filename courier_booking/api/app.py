"""
FastAPI application factory and configuration.
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import BackendAPIConfig, Settings, get_settings
from ..core.exceptions import BookingFlowError
from ..core.models import AccountContext
from ..core.ports import BookingBackend, DistanceEstimator
from ..services.booking import BookingWizard, ServiceCatalog
from ..services.external import (
    BackendAPIService,
    FixedDistanceEstimator,
    GeoapifyDistanceEstimator,
    InMemoryBookingBackend,
)
from ..services.memory import WizardSessionStore
from ..utils.event_log import EventLog
from ..utils.logging import configure_logging, get_logger
from .handlers import BookingHandler, HealthHandler, booking_error_handler
from .middleware import LoggingMiddleware, SecurityHeaders

logger = get_logger("courier.app")


def create_app(
    settings: Optional[Settings] = None,
    backend: Optional[BookingBackend] = None,
    distance_estimator: Optional[DistanceEstimator] = None,
) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    api_config = BackendAPIConfig.from_settings(settings)

    if backend is None:
        if api_config.is_backend_configured():
            backend = BackendAPIService(api_config)
        else:
            logger.warning("No booking backend configured; bookings are kept in memory")
            backend = InMemoryBookingBackend()

    if distance_estimator is None:
        if api_config.is_geoapify_configured():
            distance_estimator = GeoapifyDistanceEstimator(api_config)
        else:
            distance_estimator = FixedDistanceEstimator(settings.placeholder_distance_km)

    notifier = EventLog(settings.event_log_path) if settings.event_log_path else None
    catalog = ServiceCatalog.default(disabled=settings.disabled_service_types)

    def build_wizard(account: AccountContext) -> BookingWizard:
        return BookingWizard.from_settings(
            settings,
            backend,
            distance_estimator,
            catalog=catalog,
            account=account,
            notifier=notifier,
        )

    sessions = WizardSessionStore(build_wizard)

    app = FastAPI(
        title=settings.app_name,
        description="Courier booking wizard: service selection, pricing and submission",
        version=settings.app_version,
        debug=settings.debug,
    )
    app.state.sessions = sessions
    app.state.backend = backend

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add custom middleware
    app.add_middleware(SecurityHeaders)
    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(BookingFlowError, booking_error_handler)

    # Initialize handlers
    health_handler = HealthHandler(settings, catalog, type(backend).__name__)
    booking_handler = BookingHandler(sessions, catalog, settings.currency)

    # Register routes
    app.include_router(health_handler.router, prefix="/health", tags=["health"])
    app.include_router(booking_handler.router, prefix="/api", tags=["bookings"])

    return app
