"""
Booking service module.
"""

from .catalog import DEFAULT_SERVICE_TYPES, ServiceCatalog
from .draft_store import DraftStore, read_field
from .pricing import PriceEstimator
from .step_sequencer import (
    DEFAULT_STEP_REQUIREMENTS,
    NO_STEP_REQUIREMENTS,
    SequencerState,
    StepRequirements,
    StepSequencer,
)
from .submission import REQUIRED_FIELDS, SubmissionCoordinator
from .wizard import BookingWizard

__all__ = [
    "DEFAULT_SERVICE_TYPES",
    "ServiceCatalog",
    "DraftStore",
    "read_field",
    "PriceEstimator",
    "DEFAULT_STEP_REQUIREMENTS",
    "NO_STEP_REQUIREMENTS",
    "SequencerState",
    "StepRequirements",
    "StepSequencer",
    "REQUIRED_FIELDS",
    "SubmissionCoordinator",
    "BookingWizard",
]
