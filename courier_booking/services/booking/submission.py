"""
Submission coordinator: validate the draft, build the booking request and
hand it to the booking backend.
"""

import asyncio
import uuid
from decimal import Decimal
from typing import Callable, Dict, Iterator, List, Optional, Tuple, Union

from ...core.enums import BookingOutcome, FieldErrorCode, ServiceTypeId
from ...core.exceptions import ExternalAPIError, InvalidQuantity
from ...core.models import (
    AccountContext,
    BookingConfirmation,
    BookingDraft,
    BookingEvent,
    BookingRequest,
    FieldError,
    LocationDetails,
    PriceEstimate,
    SubmissionResult,
    empty_details_for,
)
from ...core.ports import BookingBackend, OutcomeNotifier
from ...utils.logging import get_logger
from ...utils.validation import ValidationUtils
from .draft_store import DraftStore, read_field
from .pricing import PriceEstimator

logger = get_logger("courier.submission")

_ADDRESS = ("street_address", "suburb")

_PICKUP = tuple(f"pickup_details.{name}" for name in _ADDRESS)
_DROPOFF = tuple(f"dropoff_details.{name}" for name in _ADDRESS)

# Paths that must be non-empty before a booking can be submitted.
# Service types with a single "location" step use the pickup location.
REQUIRED_FIELDS: Dict[ServiceTypeId, Tuple[str, ...]] = {
    ServiceTypeId.STANDARD: _PICKUP + _DROPOFF + ("package_description",),
    ServiceTypeId.LARGE_FREIGHT: _PICKUP + _DROPOFF + ("service_details.vehicle_type",),
    ServiceTypeId.RECURRING: _PICKUP + _DROPOFF + ("service_details.start_date",),
    ServiceTypeId.MULTI_STOP: _PICKUP + ("service_details.additional_stops",),
    ServiceTypeId.WHITE_GLOVE: _PICKUP + _DROPOFF,
    ServiceTypeId.SIGNATURE_SERVICE: _PICKUP + ("service_details.document_type",),
    ServiceTypeId.DOCUMENT_DESTRUCTION: _PICKUP + ("service_details.container_quantities",),
    ServiceTypeId.RUBBISH_REMOVAL: _PICKUP,
    ServiceTypeId.ELECTRONIC_RECYCLING: _PICKUP + ("service_details.items",),
}

_NON_NEGATIVE_FIELDS = (
    "package_weight",
    "declared_value",
    "service_details.length_cm",
    "service_details.width_cm",
    "service_details.height_cm",
    "service_details.estimated_volume_m3",
)


def _active_details(draft: BookingDraft):
    """Details of the selected service; an emptied group reads as the empty variant."""
    return draft.active_details() or empty_details_for(draft.selected_service_type)


class SubmissionCoordinator:
    """Turn a complete draft into a booking with the backend.

    One backend call per attempt, never retried here. A retry by the
    caller with unchanged draft content reuses the idempotency key of the
    failed attempt so the backend can drop duplicates.
    """

    def __init__(
        self,
        store: DraftStore,
        estimator: PriceEstimator,
        backend: BookingBackend,
        *,
        account: Optional[AccountContext] = None,
        notifier: Optional[OutcomeNotifier] = None,
        timeout_seconds: float = 30.0,
        key_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ) -> None:
        self.store = store
        self.estimator = estimator
        self.backend = backend
        self.account = account or AccountContext()
        self.notifier = notifier
        self.timeout_seconds = timeout_seconds
        self.key_factory = key_factory

        self._in_flight = False
        # Backend call of the latest attempt; outlives a timed-out submit
        self._pending: Optional["asyncio.Future[BookingConfirmation]"] = None
        # (fingerprint, idempotency key) of the last attempt that did not succeed
        self._last_failed: Optional[Tuple[str, str]] = None

    @property
    def in_flight(self) -> bool:
        """True while a submit runs or its backend call is still outstanding."""
        return self._in_flight or self._pending is not None

    async def submit(self, distance_km: Union[Decimal, int, float, str]) -> SubmissionResult:
        """
        Validate and submit the current draft.

        Args:
            distance_km: Route distance used for the final price

        Returns:
            Result describing the outcome; never raises for validation or backend errors
        """
        if self.in_flight:
            return self._finish(
                SubmissionResult(
                    outcome=BookingOutcome.SUBMISSION_IN_PROGRESS,
                    detail="A submission is already in progress",
                ),
                None,
            )

        self._in_flight = True
        try:
            return await self._submit(distance_km)
        finally:
            self._in_flight = False

    async def _submit(self, distance_km) -> SubmissionResult:
        draft = self.store.get_snapshot()
        service_type = draft.selected_service_type

        errors = self.validate(draft)
        estimate: Optional[PriceEstimate] = None
        if not errors:
            try:
                estimate = self.estimator.estimate(draft, distance_km)
            except InvalidQuantity as exc:
                errors = [FieldError(field=exc.field, code=FieldErrorCode.NEGATIVE)]
        if errors:
            return self._finish(
                SubmissionResult(outcome=BookingOutcome.VALIDATION_FAILED, errors=errors),
                service_type,
            )

        request = self.build_request(draft, estimate)
        key = request.idempotency_key

        try:
            confirmation = await self._call_backend(request)
        except asyncio.TimeoutError:
            self._last_failed = (request.fingerprint(), key)
            logger.debug("Booking submission timed out after %ss (key=%s)", self.timeout_seconds, key)
            result = SubmissionResult(
                outcome=BookingOutcome.SUBMISSION_TIMED_OUT,
                detail=f"No response from the booking backend within {self.timeout_seconds}s",
                idempotency_key=key,
            )
        except ExternalAPIError as exc:
            self._last_failed = (request.fingerprint(), key)
            logger.debug("Booking submission failed (key=%s): %s", key, exc)
            result = SubmissionResult(
                outcome=BookingOutcome.SUBMISSION_FAILED,
                detail=str(exc),
                idempotency_key=key,
            )
        except Exception as exc:
            self._last_failed = (request.fingerprint(), key)
            logger.exception("Booking backend raised %s (key=%s)", type(exc).__name__, key)
            result = SubmissionResult(
                outcome=BookingOutcome.SUBMISSION_FAILED,
                detail=f"Booking backend error: {type(exc).__name__}",
                idempotency_key=key,
            )
        else:
            self._last_failed = None
            self.store.reset()
            logger.debug("Booking %s created (key=%s)", confirmation.tracking_id, key)
            result = SubmissionResult(
                outcome=BookingOutcome.SUBMISSION_SUCCEEDED,
                confirmation=confirmation,
                idempotency_key=key,
            )
        return self._finish(result, service_type)

    def validate(self, draft: BookingDraft) -> List[FieldError]:
        """Collect every field error of a draft, in a stable order."""
        if draft.selected_service_type is None:
            return [FieldError(field="selected_service_type", code=FieldErrorCode.NOT_SELECTED)]

        service_type = draft.selected_service_type
        details = _active_details(draft)
        errors: List[FieldError] = []

        for path in REQUIRED_FIELDS.get(service_type, ()):
            if ValidationUtils.is_blank(read_field(draft, path)):
                errors.append(FieldError(field=path, code=FieldErrorCode.REQUIRED))
        errors.extend(self._validate_details(draft))

        for path in _NON_NEGATIVE_FIELDS:
            error = ValidationUtils.check_non_negative(read_field(draft, path), path)
            if error:
                errors.append(error)
        if service_type == ServiceTypeId.DOCUMENT_DESTRUCTION:
            for container_id, quantity in details.container_quantities.items():
                error = ValidationUtils.check_non_negative(
                    quantity, f"service_details.container_quantities.{container_id}"
                )
                if error:
                    errors.append(error)
        if service_type == ServiceTypeId.ELECTRONIC_RECYCLING:
            for index, item in enumerate(details.items):
                error = ValidationUtils.check_non_negative(
                    item.quantity, f"service_details.items.{index}.quantity"
                )
                if error:
                    errors.append(error)

        for prefix, location in self._contact_locations(draft):
            errors.extend(ValidationUtils.validate_contact(location, prefix))
        return errors

    def _validate_details(self, draft: BookingDraft) -> List[FieldError]:
        """Required fields inside service-specific collections."""
        details = _active_details(draft)
        errors: List[FieldError] = []
        service_type = draft.selected_service_type

        if service_type == ServiceTypeId.MULTI_STOP:
            for index, stop in enumerate(details.additional_stops):
                errors.extend(
                    ValidationUtils.require_location(
                        stop, f"service_details.additional_stops.{index}", ("street_address",)
                    )
                )
        elif service_type == ServiceTypeId.SIGNATURE_SERVICE and not details.return_to_pickup:
            errors.extend(
                ValidationUtils.require_location(
                    details.return_destination,
                    "service_details.return_destination",
                    _ADDRESS,
                )
            )
        elif service_type == ServiceTypeId.DOCUMENT_DESTRUCTION:
            containers = self.estimator.pricing.active_containers()
            for container_id in details.container_quantities:
                if container_id not in containers:
                    errors.append(
                        FieldError(
                            field=f"service_details.container_quantities.{container_id}",
                            code=FieldErrorCode.UNKNOWN_CONTAINER,
                        )
                    )
            if details.container_quantities and details.total_containers() <= 0:
                errors.append(
                    FieldError(
                        field="service_details.container_quantities",
                        code=FieldErrorCode.REQUIRED,
                    )
                )
        elif service_type == ServiceTypeId.ELECTRONIC_RECYCLING:
            for index, item in enumerate(details.items):
                if ValidationUtils.is_blank(item.type):
                    errors.append(
                        FieldError(
                            field=f"service_details.items.{index}.type",
                            code=FieldErrorCode.REQUIRED,
                        )
                    )
        return errors

    @staticmethod
    def _contact_locations(draft: BookingDraft) -> Iterator[Tuple[str, LocationDetails]]:
        yield "pickup_details", draft.pickup_details
        yield "dropoff_details", draft.dropoff_details
        details = _active_details(draft)
        if draft.selected_service_type == ServiceTypeId.MULTI_STOP:
            for index, stop in enumerate(details.additional_stops):
                yield f"service_details.additional_stops.{index}", stop
        elif draft.selected_service_type == ServiceTypeId.SIGNATURE_SERVICE:
            yield "service_details.return_destination", details.return_destination

    def build_request(self, draft: BookingDraft, estimate: PriceEstimate) -> BookingRequest:
        """
        Build the frozen booking request for a validated draft.

        The idempotency key is fresh unless the same content failed before.
        """
        request = BookingRequest(
            idempotency_key="",
            tenant_id=self.account.tenant_id,
            customer_id=self.account.user_id,
            service_type=draft.selected_service_type,
            service_level=draft.service_level,
            pickup=draft.pickup_details,
            dropoff=draft.dropoff_details,
            package_description=draft.package_description,
            package_weight=draft.package_weight,
            special_instructions=draft.special_instructions,
            declared_value=draft.declared_value,
            service_details=draft.service_details,
            distance_km=estimate.distance_km,
            estimate=estimate,
        )
        fingerprint = request.fingerprint()
        if self._last_failed and self._last_failed[0] == fingerprint:
            key = self._last_failed[1]
        else:
            key = self.key_factory()
        return request.model_copy(update={"idempotency_key": key})

    async def _call_backend(self, request: BookingRequest) -> BookingConfirmation:
        """One backend call, bounded by the submission timeout.

        On timeout the call keeps running in the background; its result is
        dropped.
        """
        task = asyncio.ensure_future(self.backend.create_booking(request))
        self._pending = task
        task.add_done_callback(self._backend_call_done)
        return await asyncio.wait_for(asyncio.shield(task), timeout=self.timeout_seconds)

    def _backend_call_done(self, task: "asyncio.Future[BookingConfirmation]") -> None:
        """Release the submission guard; a late result is dropped."""
        if self._pending is task:
            self._pending = None
        if task.cancelled():
            return
        # Mark the exception as retrieved; a waiting submit has already reported it
        exc = task.exception()
        if exc is not None:
            logger.debug("Booking backend call ended with %s", type(exc).__name__)

    def _finish(self, result: SubmissionResult, service_type: Optional[ServiceTypeId]) -> SubmissionResult:
        if self.notifier is not None:
            event = BookingEvent(
                outcome=result.outcome,
                service_type=service_type,
                tracking_id=result.confirmation.tracking_id if result.confirmation else None,
                idempotency_key=result.idempotency_key,
                error_fields=result.error_fields(),
                detail=result.detail,
            )
            try:
                self.notifier.notify(event)
            except Exception:
                logger.warning("Outcome notifier failed for %s", result.outcome.value, exc_info=True)
        return result
