"""
Tests for external service adapters.
"""

import json
import re
from decimal import Decimal

import httpx
import pytest

from courier_booking.config import BackendAPIConfig
from courier_booking.core.exceptions import BackendAPIError, DistanceLookupError
from courier_booking.core.models import LocationDetails
from courier_booking.services.external import (
    BackendAPIService,
    GeoapifyDistanceEstimator,
    InMemoryBookingBackend,
    generate_tracking_id,
    haversine_distance,
)

SYDNEY = (-33.8688, 151.2093)
MELBOURNE = (-37.8136, 144.9631)


@pytest.fixture
def api_config():
    return BackendAPIConfig(
        backend_url="https://db.example.com/",
        backend_api_key="anon-key",
        geoapify_api_key="geo-key",
    )


class TestBackendAPIService:
    """Test the REST booking backend client."""

    @pytest.mark.asyncio
    async def test_create_booking(self, api_config, booking_request):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(201, json=[{"tracking_id": "Z2U-ABCD2345", "total_cost": 32.4}])

        service = BackendAPIService(api_config, transport=httpx.MockTransport(handler))
        confirmation = await service.create_booking(booking_request)

        assert confirmation.tracking_id == "Z2U-ABCD2345"
        assert confirmation.total_cost == Decimal("32.4")

        request = seen["request"]
        assert request.method == "POST"
        assert request.url.path == "/rest/v1/deliveries"
        assert request.headers["Idempotency-Key"] == "key-1"
        assert request.headers["apikey"] == "anon-key"
        assert request.headers["Authorization"] == "Bearer anon-key"
        assert request.headers["Prefer"] == "return=representation"

        row = json.loads(request.content)
        assert row["service_type"] == "standard"
        assert row["status"] == "pending"
        assert row["pickup_address_text"] == "1 George St, Sydney, NSW 2000"
        assert row["total_cost"] == 32.4
        assert row["idempotency_key"] == "key-1"
        assert row["freight_protection_enabled"] is False

    @pytest.mark.asyncio
    async def test_single_object_response(self, api_config, booking_request):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(201, json={"tracking_id": "Z2U-WXYZ2345"})
        )
        service = BackendAPIService(api_config, transport=transport)

        confirmation = await service.create_booking(booking_request)

        assert confirmation.tracking_id == "Z2U-WXYZ2345"
        assert confirmation.total_cost == Decimal("32.40")

    @pytest.mark.asyncio
    async def test_http_error(self, api_config, booking_request):
        transport = httpx.MockTransport(lambda request: httpx.Response(500, json={"message": "boom"}))
        service = BackendAPIService(api_config, transport=transport)

        with pytest.raises(BackendAPIError) as exc_info:
            await service.create_booking(booking_request)
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_missing_tracking_id(self, api_config, booking_request):
        transport = httpx.MockTransport(lambda request: httpx.Response(201, json=[]))
        service = BackendAPIService(api_config, transport=transport)

        with pytest.raises(BackendAPIError, match="tracking id"):
            await service.create_booking(booking_request)

    @pytest.mark.asyncio
    async def test_null_total_cost_uses_estimate(self, api_config, booking_request):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(
                201, json=[{"tracking_id": "Z2U-ABCD2345", "total_cost": None}]
            )
        )
        service = BackendAPIService(api_config, transport=transport)

        confirmation = await service.create_booking(booking_request)

        assert confirmation.total_cost == Decimal("32.40")

    @pytest.mark.asyncio
    async def test_invalid_total_cost(self, api_config, booking_request):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(
                201, json=[{"tracking_id": "Z2U-ABCD2345", "total_cost": "abc"}]
            )
        )
        service = BackendAPIService(api_config, transport=transport)

        with pytest.raises(BackendAPIError, match="invalid total_cost"):
            await service.create_booking(booking_request)

    @pytest.mark.asyncio
    async def test_timeout(self, api_config, booking_request):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        service = BackendAPIService(api_config, transport=httpx.MockTransport(handler))

        with pytest.raises(BackendAPIError, match="timed out"):
            await service.create_booking(booking_request)

    @pytest.mark.asyncio
    async def test_not_configured(self, booking_request):
        service = BackendAPIService(BackendAPIConfig())

        with pytest.raises(BackendAPIError, match="not configured"):
            await service.create_booking(booking_request)

    def test_declared_value_enables_protection(self, booking_request):
        request = booking_request.model_copy(update={"declared_value": Decimal("500")})
        row = BackendAPIService.build_row(request)
        assert row["freight_protection_enabled"] is True
        assert row["freight_value"] == 500.0


class TestInMemoryBookingBackend:
    def test_tracking_id_format(self):
        for _ in range(20):
            assert re.match(r"^Z2U-[A-HJ-NP-Z2-9]{8}$", generate_tracking_id())

    @pytest.mark.asyncio
    async def test_same_key_returns_same_booking(self, booking_request):
        backend = InMemoryBookingBackend()

        first = await backend.create_booking(booking_request)
        second = await backend.create_booking(booking_request)
        other = await backend.create_booking(
            booking_request.model_copy(update={"idempotency_key": "key-2"})
        )

        assert first == second
        assert other.tracking_id != first.tracking_id
        assert len(backend.bookings) == 2
        assert len(backend.requests) == 3


def _geoapify_handler(calls, route_status=200, distance_m=15230):
    coords = {"Sydney": SYDNEY, "Melbourne": MELBOURNE}

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/geocode/search"):
            calls.append("geocode")
            text = request.url.params["text"]
            for name, (lat, lon) in coords.items():
                if name in text:
                    return httpx.Response(200, json={"features": [{"properties": {"lat": lat, "lon": lon}}]})
            return httpx.Response(200, json={"features": []})
        calls.append("route")
        if route_status != 200:
            return httpx.Response(route_status)
        return httpx.Response(200, json={"features": [{"properties": {"distance": distance_m}}]})

    return handler


class TestGeoapifyDistanceEstimator:
    """Test geocoding and routing."""

    @pytest.mark.asyncio
    async def test_route_distance(self, api_config, pickup, dropoff):
        calls = []
        estimator = GeoapifyDistanceEstimator(
            api_config, transport=httpx.MockTransport(_geoapify_handler(calls))
        )

        assert await estimator.estimate_distance(pickup, dropoff) == Decimal("15.23")
        assert calls == ["geocode", "geocode", "route"]

    @pytest.mark.asyncio
    async def test_geocodes_are_cached(self, api_config, pickup, dropoff):
        calls = []
        estimator = GeoapifyDistanceEstimator(
            api_config, transport=httpx.MockTransport(_geoapify_handler(calls))
        )

        await estimator.estimate_distance(pickup, dropoff)
        await estimator.estimate_distance(pickup, dropoff)

        assert calls.count("geocode") == 2
        assert calls.count("route") == 2

    @pytest.mark.asyncio
    async def test_falls_back_to_haversine(self, api_config, pickup, dropoff):
        calls = []
        estimator = GeoapifyDistanceEstimator(
            api_config, transport=httpx.MockTransport(_geoapify_handler(calls, route_status=503))
        )

        distance = await estimator.estimate_distance(pickup, dropoff)

        assert distance == Decimal(str(haversine_distance(*SYDNEY, *MELBOURNE)))

    @pytest.mark.asyncio
    async def test_no_geocoding_match(self, api_config, pickup):
        estimator = GeoapifyDistanceEstimator(
            api_config, transport=httpx.MockTransport(_geoapify_handler([]))
        )

        with pytest.raises(DistanceLookupError, match="No geocoding match"):
            await estimator.estimate_distance(pickup, LocationDetails(street_address="1 Nowhere Rd"))

    @pytest.mark.asyncio
    async def test_empty_location(self, api_config, pickup):
        calls = []
        estimator = GeoapifyDistanceEstimator(
            api_config, transport=httpx.MockTransport(_geoapify_handler(calls))
        )

        with pytest.raises(DistanceLookupError):
            await estimator.estimate_distance(LocationDetails(), pickup)
        assert calls == []

    def test_requires_api_key(self):
        with pytest.raises(ValueError):
            GeoapifyDistanceEstimator(BackendAPIConfig())


def test_haversine_sydney_melbourne():
    # ~714 km straight line times the road factor
    assert 950 < haversine_distance(*SYDNEY, *MELBOURNE) < 1050
