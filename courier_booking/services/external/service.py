"""
Booking backend client for the PostgREST-style deliveries endpoint.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

import httpx

from ...config import BackendAPIConfig
from ...core.exceptions import BackendAPIError
from ...core.models import BookingConfirmation, BookingRequest
from ...utils.logging import get_logger

logger = get_logger("courier.backend")


class BackendAPIService:
    """Create bookings through the backend's REST interface."""

    def __init__(
        self,
        config: BackendAPIConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self.timeout = config.backend_timeout
        self.transport = transport

    async def _make_request(
        self,
        method: str,
        url: str,
        json: Optional[Any] = None,
        params: Optional[Dict] = None,
        headers: Optional[Dict] = None,
    ) -> Any:
        """Make HTTP request with error handling."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    json=json,
                    params=params,
                    headers=headers or {},
                )
                response.raise_for_status()
                return response.json()
        except httpx.TimeoutException:
            raise BackendAPIError("Request timed out")
        except httpx.HTTPStatusError as e:
            raise BackendAPIError(
                f"HTTP error {e.response.status_code}", status_code=e.response.status_code
            )
        except httpx.HTTPError as e:
            raise BackendAPIError(f"Request failed: {str(e)}")
        except ValueError:
            raise BackendAPIError("Backend returned a non-JSON response")

    @staticmethod
    def build_row(request: BookingRequest) -> Dict[str, Any]:
        """Map a booking request onto a ``deliveries`` row."""
        details = request.service_details
        return {
            "tenant_id": request.tenant_id,
            "customer_id": request.customer_id,
            "service_type": request.service_type.value,
            "service_level": request.service_level.value,
            "status": "pending",
            "pickup_address_text": request.pickup.as_address_text(),
            "dropoff_address_text": request.dropoff.as_address_text(),
            "pickup_notes": request.pickup.notes or None,
            "dropoff_notes": request.dropoff.notes or None,
            "distance_km": float(request.distance_km),
            "package_description": request.package_description or None,
            "package_weight_kg": (
                float(request.package_weight) if request.package_weight is not None else None
            ),
            "special_instructions": request.special_instructions or None,
            "freight_protection_enabled": request.declared_value is not None,
            "freight_value": (
                float(request.declared_value) if request.declared_value is not None else None
            ),
            "booking_fee": float(request.estimate.base_fee),
            "total_cost": float(request.estimate.total),
            "service_details": details.model_dump(mode="json") if details is not None else None,
            "idempotency_key": request.idempotency_key,
        }

    async def create_booking(self, request: BookingRequest) -> BookingConfirmation:
        """
        Insert a booking row and return its tracking id.

        Raises:
            BackendAPIError: If the backend is not configured, rejects the
                row or answers without a tracking id
        """
        url = self.config.get_bookings_url()
        if not url:
            raise BackendAPIError("Booking backend is not configured")

        headers = self.config.get_backend_headers()
        headers["Idempotency-Key"] = request.idempotency_key

        data = await self._make_request("POST", url, json=self.build_row(request), headers=headers)

        # return=representation yields the inserted rows
        record = data[0] if isinstance(data, list) and data else data
        if not isinstance(record, dict) or not record.get("tracking_id"):
            raise BackendAPIError("Backend response did not include a tracking id")

        total_cost = record.get("total_cost")
        if total_cost is None:
            total_cost = request.estimate.total
        try:
            total = Decimal(str(total_cost))
        except InvalidOperation:
            total = None
        if total is None or not total.is_finite():
            raise BackendAPIError(f"Backend returned an invalid total_cost: {total_cost!r}")

        logger.info("Backend created booking %s", record["tracking_id"])
        return BookingConfirmation(tracking_id=record["tracking_id"], total_cost=total)
