"""
Booking draft aggregate.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..enums import ServiceLevel, ServiceTypeId
from .location import LocationDetails
from .services import ServiceDetails


class BookingDraft(BaseModel):
    """In-progress booking for one wizard session.

    The model is frozen; the draft store swaps in a new instance on every
    update so snapshots handed out earlier never change.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Wizard position
    selected_service_type: Optional[ServiceTypeId] = None
    current_step_index: int = 0

    # Common fields, kept when the service type changes
    service_level: ServiceLevel = ServiceLevel.STANDARD
    pickup_details: LocationDetails = Field(default_factory=LocationDetails)
    dropoff_details: LocationDetails = Field(default_factory=LocationDetails)
    package_description: str = ""
    package_weight: Optional[Decimal] = None  # kg
    special_instructions: str = ""
    declared_value: Optional[Decimal] = None

    # Service-type-specific variant
    service_details: Optional[ServiceDetails] = None

    def details_for(self, service_type: ServiceTypeId):
        """Return the service details if they belong to ``service_type``."""
        if self.service_details is None:
            return None
        if self.service_details.service_type != ServiceTypeId(service_type).value:
            return None
        return self.service_details

    def active_details(self):
        """Service details for the selected service type, if any."""
        if self.selected_service_type is None:
            return None
        return self.details_for(self.selected_service_type)
