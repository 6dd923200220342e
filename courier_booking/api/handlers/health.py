"""
Health check handler.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ...config import Settings
from ...services.booking import ServiceCatalog


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: str
    version: str
    uptime: float


class HealthHandler:
    """Handler for health check endpoints."""

    def __init__(self, settings: Settings, catalog: ServiceCatalog, backend_name: str):
        self.settings = settings
        self.catalog = catalog
        self.backend_name = backend_name
        self.started_at = datetime.now(timezone.utc)
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):
        """Setup health check routes."""

        @self.router.get("/", response_model=HealthResponse)
        async def health_check():
            now = datetime.now(timezone.utc)
            return HealthResponse(
                status="healthy",
                timestamp=now.isoformat(),
                version=self.settings.app_version,
                uptime=(now - self.started_at).total_seconds(),
            )

        @self.router.get("/ready")
        async def readiness_check():
            """Ready once at least one service type can be booked."""
            available = len(self.catalog.list_available_service_types())
            body = {
                "status": "ready" if available else "unavailable",
                "backend": self.backend_name,
                "service_types": available,
            }
            code = status.HTTP_200_OK if available else status.HTTP_503_SERVICE_UNAVAILABLE
            return JSONResponse(status_code=code, content=body)

        @self.router.get("/live")
        async def liveness_check():
            return {"status": "alive"}
