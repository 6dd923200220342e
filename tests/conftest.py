"""
Pytest configuration and fixtures.
"""

from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

from courier_booking.config import PricingConfig
from courier_booking.core.enums import ServiceLevel, ServiceTypeId
from courier_booking.core.models import (
    BookingConfirmation,
    BookingRequest,
    LocationDetails,
    PriceEstimate,
)
from courier_booking.services.booking import (
    DraftStore,
    PriceEstimator,
    ServiceCatalog,
    StepSequencer,
    SubmissionCoordinator,
)
from courier_booking.services.external import InMemoryBookingBackend


@pytest.fixture
def catalog():
    """Catalog with every built-in service type available."""
    return ServiceCatalog.default()


@pytest.fixture
def pricing():
    return PricingConfig()


@pytest.fixture
def store(catalog):
    return DraftStore(catalog)


@pytest.fixture
def sequencer(catalog, store):
    return StepSequencer(catalog, store)


@pytest.fixture
def estimator(catalog, pricing):
    return PriceEstimator(catalog, pricing)


@pytest.fixture
def confirmation():
    return BookingConfirmation(tracking_id="Z2U-TEST2345", total_cost=Decimal("32.40"))


@pytest.fixture
def mock_backend(confirmation):
    """Mock booking backend."""
    backend = Mock(spec=InMemoryBookingBackend)
    backend.create_booking = AsyncMock(return_value=confirmation)
    return backend


@pytest.fixture
def mock_notifier():
    """Mock outcome notifier."""
    return Mock(spec=["notify"])


@pytest.fixture
def coordinator(store, estimator, mock_backend, mock_notifier):
    return SubmissionCoordinator(
        store,
        estimator,
        mock_backend,
        notifier=mock_notifier,
        timeout_seconds=1.0,
    )


@pytest.fixture
def pickup():
    return LocationDetails(
        street_address="1 George St",
        suburb="Sydney",
        state="NSW",
        postcode="2000",
        contact_name="Alex Chen",
        phone="0412 345 678",
        email="alex@example.com",
    )


@pytest.fixture
def dropoff():
    return LocationDetails(
        street_address="200 Bourke St",
        suburb="Melbourne",
        state="VIC",
        postcode="3000",
        contact_name="Sam Lee",
    )


@pytest.fixture
def ready_standard_store(store, pickup, dropoff):
    """Store holding a standard booking that passes validation."""
    store.select_service_type("standard")
    store.update_field("pickup_details", pickup)
    store.update_field("dropoff_details", dropoff)
    store.update_field("package_description", "Contract documents")
    return store


@pytest.fixture
def booking_request(pickup, dropoff):
    """A finalized standard booking request."""
    return BookingRequest(
        idempotency_key="key-1",
        tenant_id="tenant-1",
        customer_id="user-1",
        service_type=ServiceTypeId.STANDARD,
        service_level=ServiceLevel.STANDARD,
        pickup=pickup,
        dropoff=dropoff,
        package_description="Contract documents",
        distance_km=Decimal("12.5"),
        estimate=PriceEstimate(
            service_type=ServiceTypeId.STANDARD,
            distance_km=Decimal("12.5"),
            base_fee=Decimal("9.90"),
            distance_component=Decimal("22.50"),
            service_surcharges=Decimal("0"),
            total=Decimal("32.40"),
        ),
    )
