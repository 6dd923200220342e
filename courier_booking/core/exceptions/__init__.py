"""
Custom exceptions for the courier booking engine.
"""

from .booking import BookingFlowError
from .catalog import CatalogError, ServiceUnavailable, UnknownServiceType
from .navigation import (
    AtTerminalStep,
    CannotSkipAhead,
    InvalidStepIndex,
    NavigationError,
    NoServiceSelected,
    ServiceAlreadySelected,
    StepRequirementsNotMet,
)
from .draft import DraftError, FieldNotApplicable, InvalidFieldPath, InvalidFieldValue
from .estimation import InvalidQuantity
from .external import BackendAPIError, DistanceLookupError, ExternalAPIError
from .session import SessionNotFound

__all__ = [
    "BookingFlowError",
    "CatalogError",
    "ServiceUnavailable",
    "UnknownServiceType",
    "AtTerminalStep",
    "CannotSkipAhead",
    "InvalidStepIndex",
    "NavigationError",
    "NoServiceSelected",
    "ServiceAlreadySelected",
    "StepRequirementsNotMet",
    "DraftError",
    "FieldNotApplicable",
    "InvalidFieldPath",
    "InvalidFieldValue",
    "InvalidQuantity",
    "BackendAPIError",
    "DistanceLookupError",
    "ExternalAPIError",
    "SessionNotFound",
]
