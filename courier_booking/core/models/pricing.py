"""
Price estimate model.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from ..enums import ServiceTypeId


class PriceEstimate(BaseModel):
    """Price derived from a draft; only ``total`` is rounded."""

    model_config = ConfigDict(frozen=True)

    service_type: ServiceTypeId
    distance_km: Decimal
    base_fee: Decimal
    distance_component: Decimal
    service_surcharges: Decimal
    total: Decimal
