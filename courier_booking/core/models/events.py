"""
Booking events forwarded to the notification collaborator.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from ..enums import BookingOutcome, ServiceTypeId


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BookingEvent(BaseModel):
    """Semantic outcome of a submission attempt."""

    outcome: BookingOutcome
    occurred_at: datetime = Field(default_factory=_utcnow)
    service_type: Optional[ServiceTypeId] = None
    tracking_id: Optional[str] = None
    idempotency_key: Optional[str] = None
    error_fields: List[str] = Field(default_factory=list)
    detail: Optional[str] = None
