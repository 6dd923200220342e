"""
Step sequencer for moving through the wizard steps of a service type.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from ...core.enums import ServiceTypeId, StepId
from ...core.exceptions import (
    AtTerminalStep,
    CannotSkipAhead,
    InvalidStepIndex,
    NoServiceSelected,
    ServiceAlreadySelected,
    StepRequirementsNotMet,
)
from ...utils.logging import get_logger
from ...utils.validation import ValidationUtils
from .catalog import ServiceCatalog
from .draft_store import DraftStore, read_field

logger = get_logger("courier.sequencer")

StepRequirements = Mapping[StepId, Tuple[str, ...]]

# Field paths that must be filled in before leaving a step
DEFAULT_STEP_REQUIREMENTS: StepRequirements = MappingProxyType(
    {
        StepId.PICKUP: ("pickup_details.street_address",),
        StepId.DROPOFF: ("dropoff_details.street_address",),
    }
)

NO_STEP_REQUIREMENTS: StepRequirements = MappingProxyType({})


@dataclass(frozen=True)
class SequencerState:
    """Wizard position; ``service_type`` is None while no service is selected."""

    service_type: Optional[ServiceTypeId]
    step_index: int
    step_id: Optional[StepId]

    @property
    def has_selection(self) -> bool:
        return self.service_type is not None


class StepSequencer:
    """Manage transitions between the steps of the selected service type.

    Every transition is checked in full before the draft store is touched,
    so a rejected transition leaves the position unchanged.
    """

    def __init__(
        self,
        catalog: ServiceCatalog,
        store: DraftStore,
        requirements: StepRequirements = DEFAULT_STEP_REQUIREMENTS,
    ) -> None:
        self.catalog = catalog
        self.store = store
        self.requirements = requirements

    @property
    def steps(self) -> Tuple[StepId, ...]:
        """Step ids of the selected service type (empty when none is selected)."""
        service_type = self.store.draft.selected_service_type
        if service_type is None:
            return ()
        return self.catalog.get_steps(service_type)

    @property
    def state(self) -> SequencerState:
        draft = self.store.draft
        if draft.selected_service_type is None:
            return SequencerState(service_type=None, step_index=0, step_id=None)
        index = draft.current_step_index
        return SequencerState(
            service_type=draft.selected_service_type,
            step_index=index,
            step_id=self.steps[index],
        )

    @property
    def current_step(self) -> Optional[StepId]:
        return self.state.step_id

    @property
    def is_terminal(self) -> bool:
        steps = self.steps
        return bool(steps) and self.store.draft.current_step_index == len(steps) - 1

    def select_service(self, service_type_id: str) -> SequencerState:
        """
        Select a service type and enter its first step.

        Raises:
            ServiceAlreadySelected: If a service type is already selected
            UnknownServiceType: If the id is not in the catalog
            ServiceUnavailable: If the service type is disabled
        """
        previous = self.state
        if previous.has_selection:
            raise ServiceAlreadySelected(
                f"Service type '{previous.service_type.value}' is already selected; go back first"
            )
        self.store.select_service_type(service_type_id)
        return self._transitioned(previous)

    def advance(self) -> SequencerState:
        """
        Move to the next step.

        Raises:
            NoServiceSelected: If no service type is selected
            AtTerminalStep: If the current step is the review step
            StepRequirementsNotMet: If the current step has empty required fields
        """
        previous = self._require_selection()
        steps = self.steps
        if previous.step_index >= len(steps) - 1:
            raise AtTerminalStep(f"'{previous.step_id.value}' is the last step")

        missing = self.missing_requirements(previous.step_id)
        if missing:
            raise StepRequirementsNotMet(previous.step_id.value, missing)

        self.store.set_step_index(previous.step_index + 1)
        return self._transitioned(previous)

    def retreat(self) -> SequencerState:
        """Move to the previous step; from the first step this deselects the service."""
        previous = self.state
        if not previous.has_selection:
            return previous
        if previous.step_index == 0:
            self.store.clear_selection()
        else:
            self.store.set_step_index(previous.step_index - 1)
        return self._transitioned(previous)

    def jump_to(self, index: int) -> SequencerState:
        """
        Jump back to an already visited step.

        Raises:
            NoServiceSelected: If no service type is selected
            InvalidStepIndex: If the index is negative
            CannotSkipAhead: If the index is past the current step
        """
        previous = self._require_selection()
        if index < 0:
            raise InvalidStepIndex(f"Step index must not be negative (got {index})")
        if index > previous.step_index:
            raise CannotSkipAhead(index, previous.step_index)
        if index == previous.step_index:
            return previous

        self.store.set_step_index(index)
        return self._transitioned(previous)

    def missing_requirements(self, step: StepId) -> List[str]:
        """Required field paths of ``step`` that are still empty."""
        draft = self.store.draft
        return [
            path
            for path in self.requirements.get(step, ())
            if ValidationUtils.is_blank(read_field(draft, path))
        ]

    def _require_selection(self) -> SequencerState:
        state = self.state
        if not state.has_selection:
            raise NoServiceSelected("Select a service type first")
        return state

    def _transitioned(self, previous: SequencerState) -> SequencerState:
        current = self.state
        if current != previous:
            self._log_step_transition(previous, current)
        return current

    def _log_step_transition(self, from_state: SequencerState, to_state: SequencerState) -> None:
        """Log step transition for debugging."""
        logger.debug(
            "step %s[%s] -> %s[%s]",
            from_state.service_type.value if from_state.service_type else "-",
            from_state.step_id.value if from_state.step_id else "-",
            to_state.service_type.value if to_state.service_type else "-",
            to_state.step_id.value if to_state.step_id else "-",
        )
