"""
Core data models for the courier booking engine.
"""

from .location import LocationDetails
from .services import (
    DETAILS_BY_SERVICE,
    DocumentDestructionDetails,
    EwasteDetails,
    EwasteItem,
    LargeFreightDetails,
    MultiStopDetails,
    RecurringDetails,
    RubbishDetails,
    ServiceDetails,
    SignatureDetails,
    StandardDetails,
    WhiteGloveDetails,
    WhiteGloveOptions,
    empty_details_for,
)
from .booking import BookingDraft
from .catalog import PricingRule, ServiceTypeDefinition, StepDefinition
from .pricing import PriceEstimate
from .submission import BookingConfirmation, BookingRequest, FieldError, SubmissionResult
from .user import AccountContext
from .events import BookingEvent

__all__ = [
    "LocationDetails",
    "DETAILS_BY_SERVICE",
    "DocumentDestructionDetails",
    "EwasteDetails",
    "EwasteItem",
    "LargeFreightDetails",
    "MultiStopDetails",
    "RecurringDetails",
    "RubbishDetails",
    "ServiceDetails",
    "SignatureDetails",
    "StandardDetails",
    "WhiteGloveDetails",
    "WhiteGloveOptions",
    "empty_details_for",
    "BookingDraft",
    "PricingRule",
    "ServiceTypeDefinition",
    "StepDefinition",
    "PriceEstimate",
    "BookingConfirmation",
    "BookingRequest",
    "FieldError",
    "SubmissionResult",
    "AccountContext",
    "BookingEvent",
]
