"""
Enums for the courier booking engine.
"""

from .booking import (
    FreightVehicle,
    MultiStopType,
    RecurringFrequency,
    RubbishType,
    ServiceLevel,
    ServiceTypeId,
    StepId,
)
from .outcome import BookingOutcome, FieldErrorCode

__all__ = [
    "FreightVehicle",
    "MultiStopType",
    "RecurringFrequency",
    "RubbishType",
    "ServiceLevel",
    "ServiceTypeId",
    "StepId",
    "BookingOutcome",
    "FieldErrorCode",
]
