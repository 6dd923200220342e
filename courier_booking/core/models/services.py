"""
Service-type-specific field groups.

Each service type carries exactly one variant, discriminated by
``service_type``. Fields that do not belong to the selected service simply
do not exist on the draft.
"""

from datetime import date
from decimal import Decimal
from typing import Annotated, Dict, List, Literal, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field

from ..enums import FreightVehicle, MultiStopType, RecurringFrequency, RubbishType, ServiceTypeId
from .location import LocationDetails

_DETAILS_CONFIG = ConfigDict(extra="forbid", frozen=True)


class StandardDetails(BaseModel):
    """Standard delivery has no fields beyond the common ones."""

    model_config = _DETAILS_CONFIG

    service_type: Literal["standard"] = "standard"


class LargeFreightDetails(BaseModel):
    model_config = _DETAILS_CONFIG

    service_type: Literal["large_freight"] = "large_freight"
    length_cm: Optional[Decimal] = None
    width_cm: Optional[Decimal] = None
    height_cm: Optional[Decimal] = None
    vehicle_type: Optional[FreightVehicle] = None
    requires_tailgate: bool = False
    requires_forklift: bool = False


class RecurringDetails(BaseModel):
    model_config = _DETAILS_CONFIG

    service_type: Literal["recurring"] = "recurring"
    frequency: RecurringFrequency = RecurringFrequency.WEEKLY
    days: List[str] = Field(default_factory=list)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    time: Optional[str] = None  # HH:MM


class MultiStopDetails(BaseModel):
    model_config = _DETAILS_CONFIG

    service_type: Literal["multi_stop"] = "multi_stop"
    stop_type: MultiStopType = MultiStopType.MULTI_DROPOFF
    additional_stops: List[LocationDetails] = Field(default_factory=list)


class WhiteGloveOptions(BaseModel):
    """Optional white glove extras; each selected one adds a surcharge."""

    model_config = _DETAILS_CONFIG

    assembly: bool = False
    disassembly: bool = False
    packaging: bool = False
    unpacking: bool = False
    room_placement: bool = False
    debris_removal: bool = False
    two_person_lift: bool = False
    wait_and_return: bool = False

    def selected(self) -> List[str]:
        return [name for name, enabled in self.model_dump().items() if enabled]


class WhiteGloveDetails(BaseModel):
    model_config = _DETAILS_CONFIG

    service_type: Literal["white_glove"] = "white_glove"
    options: WhiteGloveOptions = Field(default_factory=WhiteGloveOptions)


class SignatureDetails(BaseModel):
    model_config = _DETAILS_CONFIG

    service_type: Literal["signature_service"] = "signature_service"
    document_type: str = ""
    requires_witness: bool = False
    return_to_pickup: bool = False
    return_destination: LocationDetails = Field(default_factory=LocationDetails)


class DocumentDestructionDetails(BaseModel):
    model_config = _DETAILS_CONFIG

    service_type: Literal["document_destruction"] = "document_destruction"
    container_quantities: Dict[str, int] = Field(default_factory=dict)
    requires_delivery: bool = True
    pickup_only: bool = False
    certificate: bool = True
    collection_date: Optional[date] = None

    def total_containers(self) -> int:
        return sum(self.container_quantities.values())


class RubbishDetails(BaseModel):
    model_config = _DETAILS_CONFIG

    service_type: Literal["rubbish_removal"] = "rubbish_removal"
    rubbish_type: RubbishType = RubbishType.GENERAL
    estimated_volume_m3: Optional[Decimal] = None


class EwasteItem(BaseModel):
    model_config = _DETAILS_CONFIG

    type: str = ""
    quantity: int = 1


class EwasteDetails(BaseModel):
    model_config = _DETAILS_CONFIG

    service_type: Literal["electronic_recycling"] = "electronic_recycling"
    items: List[EwasteItem] = Field(default_factory=list)
    requires_data_destruction: bool = False
    requires_certificate: bool = False


ServiceDetails = Annotated[
    Union[
        StandardDetails,
        LargeFreightDetails,
        RecurringDetails,
        MultiStopDetails,
        WhiteGloveDetails,
        SignatureDetails,
        DocumentDestructionDetails,
        RubbishDetails,
        EwasteDetails,
    ],
    Field(discriminator="service_type"),
]


DETAILS_BY_SERVICE: Dict[ServiceTypeId, Type[BaseModel]] = {
    ServiceTypeId.STANDARD: StandardDetails,
    ServiceTypeId.LARGE_FREIGHT: LargeFreightDetails,
    ServiceTypeId.RECURRING: RecurringDetails,
    ServiceTypeId.MULTI_STOP: MultiStopDetails,
    ServiceTypeId.WHITE_GLOVE: WhiteGloveDetails,
    ServiceTypeId.SIGNATURE_SERVICE: SignatureDetails,
    ServiceTypeId.DOCUMENT_DESTRUCTION: DocumentDestructionDetails,
    ServiceTypeId.RUBBISH_REMOVAL: RubbishDetails,
    ServiceTypeId.ELECTRONIC_RECYCLING: EwasteDetails,
}


def empty_details_for(service_type: ServiceTypeId) -> BaseModel:
    """Empty field group for a service type."""
    return DETAILS_BY_SERVICE[ServiceTypeId(service_type)]()
