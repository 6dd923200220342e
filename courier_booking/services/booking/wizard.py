"""
Booking wizard: one session's draft, step position, running price and
submission, behind a single object.
"""

from decimal import Decimal
from typing import Any, Optional, Tuple

from ...config import Settings
from ...core.enums import StepId
from ...core.exceptions import DistanceLookupError, InvalidQuantity
from ...core.models import (
    AccountContext,
    BookingDraft,
    LocationDetails,
    PriceEstimate,
    SubmissionResult,
)
from ...core.ports import BookingBackend, DistanceEstimator, OutcomeNotifier
from ...utils.logging import get_logger
from ...utils.money import to_decimal
from .catalog import ServiceCatalog
from .draft_store import DraftStore
from .pricing import PriceEstimator
from .step_sequencer import (
    DEFAULT_STEP_REQUIREMENTS,
    NO_STEP_REQUIREMENTS,
    SequencerState,
    StepRequirements,
    StepSequencer,
)
from .submission import SubmissionCoordinator

logger = get_logger("courier.wizard")


class BookingWizard:
    """Drive one booking session from service selection to submission."""

    def __init__(
        self,
        catalog: ServiceCatalog,
        estimator: PriceEstimator,
        backend: BookingBackend,
        distance_estimator: DistanceEstimator,
        *,
        account: Optional[AccountContext] = None,
        notifier: Optional[OutcomeNotifier] = None,
        requirements: StepRequirements = DEFAULT_STEP_REQUIREMENTS,
        submission_timeout: float = 30.0,
        initial_distance_km: Decimal = Decimal("12.5"),
    ) -> None:
        self.catalog = catalog
        self.estimator = estimator
        self.distance_estimator = distance_estimator
        self.store = DraftStore(catalog)
        self.sequencer = StepSequencer(catalog, self.store, requirements)
        self.coordinator = SubmissionCoordinator(
            self.store,
            estimator,
            backend,
            account=account,
            notifier=notifier,
            timeout_seconds=submission_timeout,
        )
        self.distance_km = to_decimal(initial_distance_km)
        self._estimate: Optional[PriceEstimate] = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        backend: BookingBackend,
        distance_estimator: DistanceEstimator,
        *,
        catalog: Optional[ServiceCatalog] = None,
        account: Optional[AccountContext] = None,
        notifier: Optional[OutcomeNotifier] = None,
    ) -> "BookingWizard":
        """Build a wizard wired from application settings."""
        catalog = catalog or ServiceCatalog.default(disabled=settings.disabled_service_types)
        return cls(
            catalog,
            PriceEstimator(catalog, settings.pricing),
            backend,
            distance_estimator,
            account=account,
            notifier=notifier,
            requirements=(
                DEFAULT_STEP_REQUIREMENTS if settings.enforce_step_requirements else NO_STEP_REQUIREMENTS
            ),
            submission_timeout=settings.submission_timeout_seconds,
            initial_distance_km=settings.placeholder_distance_km,
        )

    @property
    def state(self) -> SequencerState:
        return self.sequencer.state

    @property
    def steps(self) -> Tuple[StepId, ...]:
        return self.sequencer.steps

    @property
    def estimate(self) -> Optional[PriceEstimate]:
        """Latest price estimate; None without a service or with negative amounts."""
        return self._estimate

    def snapshot(self) -> BookingDraft:
        return self.store.get_snapshot()

    # Navigation

    def select_service(self, service_type_id: str) -> SequencerState:
        state = self.sequencer.select_service(service_type_id)
        self._refresh_estimate()
        return state

    def advance(self) -> SequencerState:
        return self.sequencer.advance()

    def retreat(self) -> SequencerState:
        state = self.sequencer.retreat()
        self._refresh_estimate()
        return state

    def jump_to(self, index: int) -> SequencerState:
        return self.sequencer.jump_to(index)

    def cancel(self) -> SequencerState:
        """Abandon the booking and start over."""
        self.store.reset()
        self._refresh_estimate()
        return self.sequencer.state

    # Draft mutations

    def update_field(self, path: str, value: Any) -> BookingDraft:
        draft = self.store.update_field(path, value)
        self._refresh_estimate()
        return draft

    def add_stop(self, location: Optional[LocationDetails] = None) -> int:
        index = self.store.add_stop(location)
        self._refresh_estimate()
        return index

    def remove_stop(self, index: int) -> BookingDraft:
        draft = self.store.remove_stop(index)
        self._refresh_estimate()
        return draft

    def add_ewaste_item(self, item_type: str = "", quantity: int = 1) -> int:
        index = self.store.add_ewaste_item(item_type, quantity)
        self._refresh_estimate()
        return index

    def remove_ewaste_item(self, index: int) -> BookingDraft:
        draft = self.store.remove_ewaste_item(index)
        self._refresh_estimate()
        return draft

    def set_container_quantity(self, container_id: str, quantity: int) -> BookingDraft:
        draft = self.store.set_container_quantity(container_id, quantity)
        self._refresh_estimate()
        return draft

    def copy_pickup_to_return(self) -> BookingDraft:
        return self.store.copy_pickup_to_return()

    # Pricing and submission

    async def refresh_distance(self) -> Decimal:
        """
        Ask the distance estimator for the pickup to drop-off distance.

        A failed lookup keeps the previous distance.
        """
        draft = self.store.draft
        try:
            distance = await self.distance_estimator.estimate_distance(
                draft.pickup_details, draft.dropoff_details
            )
        except DistanceLookupError as exc:
            logger.debug("Distance lookup failed, keeping %s km: %s", self.distance_km, exc)
            return self.distance_km

        self.distance_km = to_decimal(distance)
        self._refresh_estimate()
        return self.distance_km

    async def submit(self) -> SubmissionResult:
        result = await self.coordinator.submit(self.distance_km)
        self._refresh_estimate()
        return result

    def _refresh_estimate(self) -> None:
        draft = self.store.draft
        if draft.selected_service_type is None:
            self._estimate = None
            return
        try:
            self._estimate = self.estimator.estimate(draft, self.distance_km)
        except InvalidQuantity as exc:
            logger.debug("No estimate while %s is negative", exc.field)
            self._estimate = None
