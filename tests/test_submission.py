"""
Tests for the submission coordinator.
"""

import asyncio
from decimal import Decimal

import pytest

from courier_booking.core.enums import BookingOutcome, FieldErrorCode, ServiceTypeId
from courier_booking.core.exceptions import BackendAPIError
from courier_booking.core.models import (
    AccountContext,
    BookingConfirmation,
    BookingDraft,
    LocationDetails,
)
from courier_booking.services.booking import SubmissionCoordinator


class SlowBackend:
    """Backend that answers only once released."""

    def __init__(self):
        self.release = asyncio.Event()
        self.calls = 0

    async def create_booking(self, request):
        self.calls += 1
        await self.release.wait()
        return BookingConfirmation(tracking_id="Z2U-LATE2345", total_cost=request.estimate.total)


def _codes(result):
    return {(error.field, error.code) for error in result.errors}


class TestValidation:
    """Test validation before any backend call."""

    @pytest.mark.asyncio
    async def test_empty_street_fails_without_backend_call(
        self, ready_standard_store, coordinator, mock_backend
    ):
        ready_standard_store.update_field("pickup_details.street_address", "")
        before = ready_standard_store.draft

        result = await coordinator.submit(Decimal("12.5"))

        assert result.outcome == BookingOutcome.VALIDATION_FAILED
        assert ("pickup_details.street_address", FieldErrorCode.REQUIRED) in _codes(result)
        mock_backend.create_booking.assert_not_awaited()
        assert ready_standard_store.draft == before

    @pytest.mark.asyncio
    async def test_nothing_selected(self, coordinator, mock_backend):
        result = await coordinator.submit(Decimal("12.5"))

        assert result.outcome == BookingOutcome.VALIDATION_FAILED
        assert result.error_fields() == ["selected_service_type"]
        assert result.errors[0].code == FieldErrorCode.NOT_SELECTED
        mock_backend.create_booking.assert_not_awaited()

    def test_standard_requires_both_addresses(self, store, coordinator):
        store.select_service_type("standard")
        errors = coordinator.validate(store.draft)
        assert {e.field for e in errors} == {
            "pickup_details.street_address",
            "pickup_details.suburb",
            "dropoff_details.street_address",
            "dropoff_details.suburb",
            "package_description",
        }

    @pytest.mark.asyncio
    async def test_negative_weight(self, ready_standard_store, coordinator, mock_backend):
        ready_standard_store.update_field("package_weight", -2)

        result = await coordinator.submit(Decimal("12.5"))

        assert result.outcome == BookingOutcome.VALIDATION_FAILED
        assert _codes(result) == {("package_weight", FieldErrorCode.NEGATIVE)}
        mock_backend.create_booking.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_negative_distance_is_a_field_error(self, ready_standard_store, coordinator):
        result = await coordinator.submit(Decimal("-1"))

        assert result.outcome == BookingOutcome.VALIDATION_FAILED
        assert _codes(result) == {("distance_km", FieldErrorCode.NEGATIVE)}

    def test_malformed_contact_details(self, ready_standard_store, coordinator):
        ready_standard_store.update_field("pickup_details.email", "not-an-email")
        ready_standard_store.update_field("dropoff_details.phone", "12345")

        errors = coordinator.validate(ready_standard_store.draft)

        assert {(e.field, e.code) for e in errors} == {
            ("pickup_details.email", FieldErrorCode.INVALID_EMAIL),
            ("dropoff_details.phone", FieldErrorCode.INVALID_PHONE),
        }

    def test_multi_stop_needs_stops_with_addresses(self, store, coordinator, pickup):
        store.select_service_type("multi_stop")
        store.update_field("pickup_details", pickup)

        errors = coordinator.validate(store.draft)
        assert [e.field for e in errors] == ["service_details.additional_stops"]

        store.add_stop(LocationDetails(suburb="Parramatta"))
        errors = coordinator.validate(store.draft)
        assert [e.field for e in errors] == ["service_details.additional_stops.0.street_address"]

    def test_multi_stop_contact_checked_per_stop(self, store, coordinator, pickup):
        store.select_service_type("multi_stop")
        store.update_field("pickup_details", pickup)
        store.add_stop(LocationDetails(street_address="5 Church St", email="bad@"))

        errors = coordinator.validate(store.draft)

        assert [(e.field, e.code) for e in errors] == [
            ("service_details.additional_stops.0.email", FieldErrorCode.INVALID_EMAIL)
        ]

    @pytest.mark.asyncio
    async def test_cleared_service_details(self, store, coordinator, mock_backend, pickup):
        store.select_service_type("multi_stop")
        store.update_field("pickup_details", pickup)
        store.update_field("service_details", None)

        result = await coordinator.submit(Decimal("12.5"))

        assert result.outcome == BookingOutcome.VALIDATION_FAILED
        assert result.error_fields() == ["service_details.additional_stops"]
        mock_backend.create_booking.assert_not_awaited()

    def test_cleared_signature_details_need_return_destination(self, store, coordinator, pickup):
        store.select_service_type("signature_service")
        store.update_field("pickup_details", pickup)
        store.update_field("service_details", None)

        fields = {e.field for e in coordinator.validate(store.draft)}

        assert "service_details.document_type" in fields
        assert "service_details.return_destination.street_address" in fields

    def test_unknown_container(self, store, coordinator, pickup):
        store.select_service_type("document_destruction")
        store.update_field("pickup_details", pickup)
        store.set_container_quantity("shred_bag", 1)
        store.update_field("service_details.container_quantities.mystery_bin", 2)

        errors = coordinator.validate(store.draft)

        assert [(e.field, e.code) for e in errors] == [
            ("service_details.container_quantities.mystery_bin", FieldErrorCode.UNKNOWN_CONTAINER)
        ]

    def test_containers_must_add_up_to_something(self, store, coordinator, pickup):
        store.select_service_type("document_destruction")
        store.update_field("pickup_details", pickup)
        store.update_field("service_details.container_quantities", {"shred_bag": 0})

        errors = coordinator.validate(store.draft)

        assert [e.field for e in errors] == ["service_details.container_quantities"]

    def test_ewaste_item_type_required(self, store, coordinator, pickup):
        store.select_service_type("electronic_recycling")
        store.update_field("pickup_details", pickup)
        store.add_ewaste_item("", 2)

        errors = coordinator.validate(store.draft)

        assert [e.field for e in errors] == ["service_details.items.0.type"]

    def test_signature_return_destination(self, store, coordinator, pickup):
        store.select_service_type("signature_service")
        store.update_field("pickup_details", pickup)
        store.update_field("service_details.document_type", "Contract")

        errors = coordinator.validate(store.draft)
        assert {e.field for e in errors} == {
            "service_details.return_destination.street_address",
            "service_details.return_destination.suburb",
        }

        store.copy_pickup_to_return()
        assert coordinator.validate(store.draft) == []

    def test_signature_return_to_pickup_skips_destination(self, store, coordinator, pickup):
        store.select_service_type("signature_service")
        store.update_field("pickup_details", pickup)
        store.update_field("service_details.document_type", "Contract")
        store.update_field("service_details.return_to_pickup", True)

        assert coordinator.validate(store.draft) == []

    def test_ready_draft_has_no_errors(self, ready_standard_store, coordinator):
        assert coordinator.validate(ready_standard_store.draft) == []


class TestSubmit:
    """Test backend submission outcomes."""

    @pytest.mark.asyncio
    async def test_success_resets_draft(
        self, ready_standard_store, coordinator, mock_backend, mock_notifier, confirmation
    ):
        result = await coordinator.submit(Decimal("12.5"))

        assert result.outcome == BookingOutcome.SUBMISSION_SUCCEEDED
        assert result.ok
        assert result.confirmation == confirmation
        assert ready_standard_store.draft == BookingDraft()

        request = mock_backend.create_booking.await_args.args[0]
        assert request.service_type == ServiceTypeId.STANDARD
        assert request.estimate.total == Decimal("32.40")
        assert request.idempotency_key == result.idempotency_key

        event = mock_notifier.notify.call_args.args[0]
        assert event.outcome == BookingOutcome.SUBMISSION_SUCCEEDED
        assert event.tracking_id == "Z2U-TEST2345"
        assert event.service_type == ServiceTypeId.STANDARD

    @pytest.mark.asyncio
    async def test_account_is_attached(self, ready_standard_store, estimator, mock_backend):
        coordinator = SubmissionCoordinator(
            ready_standard_store,
            estimator,
            mock_backend,
            account=AccountContext(user_id="user-9", tenant_id="tenant-9"),
        )
        await coordinator.submit(Decimal("12.5"))

        request = mock_backend.create_booking.await_args.args[0]
        assert request.customer_id == "user-9"
        assert request.tenant_id == "tenant-9"

    @pytest.mark.asyncio
    async def test_failure_keeps_draft_and_reuses_key(
        self, ready_standard_store, coordinator, mock_backend, confirmation
    ):
        mock_backend.create_booking.side_effect = [
            BackendAPIError("HTTP error 503", status_code=503),
            confirmation,
        ]
        before = ready_standard_store.draft

        failed = await coordinator.submit(Decimal("12.5"))

        assert failed.outcome == BookingOutcome.SUBMISSION_FAILED
        assert "503" in failed.detail
        assert ready_standard_store.draft == before

        retried = await coordinator.submit(Decimal("12.5"))

        assert retried.outcome == BookingOutcome.SUBMISSION_SUCCEEDED
        assert retried.idempotency_key == failed.idempotency_key
        keys = [call.args[0].idempotency_key for call in mock_backend.create_booking.await_args_list]
        assert keys[0] == keys[1]

    @pytest.mark.asyncio
    async def test_changed_draft_gets_new_key(
        self, ready_standard_store, coordinator, mock_backend, confirmation
    ):
        mock_backend.create_booking.side_effect = [BackendAPIError("Request failed"), confirmation]

        failed = await coordinator.submit(Decimal("12.5"))
        ready_standard_store.update_field("package_description", "Signed lease")
        retried = await coordinator.submit(Decimal("12.5"))

        assert retried.ok
        assert retried.idempotency_key != failed.idempotency_key

    @pytest.mark.asyncio
    async def test_successful_submissions_use_fresh_keys(
        self, ready_standard_store, coordinator, pickup, dropoff
    ):
        first = await coordinator.submit(Decimal("12.5"))

        ready_standard_store.select_service_type("standard")
        ready_standard_store.update_field("pickup_details", pickup)
        ready_standard_store.update_field("dropoff_details", dropoff)
        ready_standard_store.update_field("package_description", "Contract documents")
        second = await coordinator.submit(Decimal("12.5"))

        assert first.ok and second.ok
        assert first.idempotency_key != second.idempotency_key

    @pytest.mark.asyncio
    async def test_timeout_keeps_draft_and_drops_late_result(
        self, ready_standard_store, estimator, mock_notifier
    ):
        backend = SlowBackend()
        coordinator = SubmissionCoordinator(
            ready_standard_store, estimator, backend, notifier=mock_notifier, timeout_seconds=0.05
        )

        result = await coordinator.submit(Decimal("12.5"))

        assert result.outcome == BookingOutcome.SUBMISSION_TIMED_OUT
        assert result.idempotency_key
        assert ready_standard_store.draft.selected_service_type == ServiceTypeId.STANDARD
        assert coordinator.in_flight

        backend.release.set()
        await asyncio.sleep(0.01)

        assert not coordinator.in_flight
        assert ready_standard_store.draft.selected_service_type == ServiceTypeId.STANDARD
        assert mock_notifier.notify.call_count == 1

    @pytest.mark.asyncio
    async def test_retry_after_timeout_reuses_key(self, ready_standard_store, estimator):
        backend = SlowBackend()
        coordinator = SubmissionCoordinator(
            ready_standard_store, estimator, backend, timeout_seconds=0.05
        )

        timed_out = await coordinator.submit(Decimal("12.5"))
        backend.release.set()
        await asyncio.sleep(0.01)
        retried = await coordinator.submit(Decimal("12.5"))

        assert retried.ok
        assert retried.idempotency_key == timed_out.idempotency_key
        assert backend.calls == 2

    @pytest.mark.asyncio
    async def test_resubmit_while_timed_out_call_is_outstanding(self, ready_standard_store, estimator):
        backend = SlowBackend()
        coordinator = SubmissionCoordinator(
            ready_standard_store, estimator, backend, timeout_seconds=0.05
        )

        timed_out = await coordinator.submit(Decimal("12.5"))
        again = await coordinator.submit(Decimal("12.5"))

        assert timed_out.outcome == BookingOutcome.SUBMISSION_TIMED_OUT
        assert again.outcome == BookingOutcome.SUBMISSION_IN_PROGRESS
        assert backend.calls == 1

        backend.release.set()
        await asyncio.sleep(0.01)
        retried = await coordinator.submit(Decimal("12.5"))

        assert retried.ok
        assert backend.calls == 2

    @pytest.mark.asyncio
    async def test_unexpected_backend_error_is_a_failed_submission(
        self, ready_standard_store, coordinator, mock_backend, confirmation
    ):
        mock_backend.create_booking.side_effect = [RuntimeError("connection reset"), confirmation]
        before = ready_standard_store.draft

        failed = await coordinator.submit(Decimal("12.5"))

        assert failed.outcome == BookingOutcome.SUBMISSION_FAILED
        assert "RuntimeError" in failed.detail
        assert ready_standard_store.draft == before
        assert not coordinator.in_flight

        retried = await coordinator.submit(Decimal("12.5"))
        assert retried.ok
        assert retried.idempotency_key == failed.idempotency_key

    @pytest.mark.asyncio
    async def test_concurrent_submit_is_rejected(self, ready_standard_store, estimator):
        backend = SlowBackend()
        coordinator = SubmissionCoordinator(ready_standard_store, estimator, backend, timeout_seconds=1.0)

        first = asyncio.create_task(coordinator.submit(Decimal("12.5")))
        await asyncio.sleep(0)
        assert coordinator.in_flight

        second = await coordinator.submit(Decimal("12.5"))
        assert second.outcome == BookingOutcome.SUBMISSION_IN_PROGRESS

        backend.release.set()
        result = await first
        assert result.ok
        assert backend.calls == 1

    @pytest.mark.asyncio
    async def test_notifier_failure_does_not_break_submission(
        self, ready_standard_store, coordinator, mock_notifier, caplog
    ):
        mock_notifier.notify.side_effect = RuntimeError("display gone")

        result = await coordinator.submit(Decimal("12.5"))

        assert result.ok
        assert "Outcome notifier failed" in caplog.text


def test_custom_key_factory(ready_standard_store, estimator, mock_backend):
    coordinator = SubmissionCoordinator(
        ready_standard_store, estimator, mock_backend, key_factory=lambda: "fixed-key"
    )
    estimate = estimator.estimate(ready_standard_store.draft, Decimal("12.5"))
    request = coordinator.build_request(ready_standard_store.draft, estimate)
    assert request.idempotency_key == "fixed-key"
    assert request.pickup.street_address == "1 George St"
    assert request.distance_km == Decimal("12.5")
