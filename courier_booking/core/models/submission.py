"""
Submission request and result models.
"""

import hashlib
import json
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..enums import BookingOutcome, FieldErrorCode, ServiceLevel, ServiceTypeId
from .location import LocationDetails
from .pricing import PriceEstimate
from .services import ServiceDetails


class FieldError(BaseModel):
    """A single invalid draft field, addressed by its dotted path."""

    model_config = ConfigDict(frozen=True)

    field: str
    code: FieldErrorCode


class BookingRequest(BaseModel):
    """Finalized booking handed to the booking backend."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    idempotency_key: str
    tenant_id: Optional[str] = None
    customer_id: Optional[str] = None

    service_type: ServiceTypeId
    service_level: ServiceLevel
    pickup: LocationDetails
    dropoff: LocationDetails
    package_description: str = ""
    package_weight: Optional[Decimal] = None
    special_instructions: str = ""
    declared_value: Optional[Decimal] = None
    service_details: Optional[ServiceDetails] = None

    distance_km: Decimal
    estimate: PriceEstimate

    def fingerprint(self) -> str:
        """Stable hash of the request content, ignoring the idempotency key."""
        raw = self.model_dump(mode="json", exclude={"idempotency_key"})
        return hashlib.sha256(
            json.dumps(raw, ensure_ascii=False, sort_keys=True).encode("utf-8")
        ).hexdigest()


class BookingConfirmation(BaseModel):
    """What the backend returns for a created booking."""

    model_config = ConfigDict(frozen=True)

    tracking_id: str
    total_cost: Decimal


class SubmissionResult(BaseModel):
    """Outcome of ``SubmissionCoordinator.submit``."""

    outcome: BookingOutcome
    confirmation: Optional[BookingConfirmation] = None
    errors: List[FieldError] = Field(default_factory=list)
    detail: Optional[str] = None
    idempotency_key: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome == BookingOutcome.SUBMISSION_SUCCEEDED

    def error_fields(self) -> List[str]:
        return [error.field for error in self.errors]
