"""
Main application entry point for the courier booking engine.
"""

import uvicorn

from .api.app import create_app
from .config import get_settings

settings = get_settings()

# Create the FastAPI application
app = create_app(settings)


def run() -> None:
    """Serve the booking API with uvicorn."""
    uvicorn.run(
        "courier_booking.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
