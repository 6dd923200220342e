"""
Pricing configuration: per-service rates and surcharge tables.
"""

from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..core.enums import ServiceLevel, ServiceTypeId


class ServiceRate(BaseModel):
    """Flat base fee and per-kilometre rate for one service type."""

    base_fee: Decimal
    km_rate: Decimal


class ShredContainerType(BaseModel):
    """A shredding container that can be ordered for document destruction."""

    id: str
    name: str
    description: Optional[str] = None
    capacity: Optional[str] = None
    price: Decimal
    is_popular: bool = False
    is_active: bool = True
    sort_order: int = 0


class RubbishTier(BaseModel):
    """Per-m3 rate applied to the volume up to ``up_to_m3`` (open-ended when None)."""

    up_to_m3: Optional[Decimal] = None
    rate_per_m3: Decimal


def _default_rates() -> Dict[ServiceTypeId, ServiceRate]:
    return {
        ServiceTypeId.STANDARD: ServiceRate(base_fee=Decimal("9.90"), km_rate=Decimal("1.80")),
        ServiceTypeId.LARGE_FREIGHT: ServiceRate(base_fee=Decimal("89.00"), km_rate=Decimal("3.50")),
        ServiceTypeId.RECURRING: ServiceRate(base_fee=Decimal("7.50"), km_rate=Decimal("1.80")),
        ServiceTypeId.MULTI_STOP: ServiceRate(base_fee=Decimal("14.90"), km_rate=Decimal("1.80")),
        ServiceTypeId.WHITE_GLOVE: ServiceRate(base_fee=Decimal("49.00"), km_rate=Decimal("1.80")),
        ServiceTypeId.SIGNATURE_SERVICE: ServiceRate(base_fee=Decimal("29.00"), km_rate=Decimal("1.80")),
        ServiceTypeId.DOCUMENT_DESTRUCTION: ServiceRate(base_fee=Decimal("0.00"), km_rate=Decimal("0.00")),
        ServiceTypeId.RUBBISH_REMOVAL: ServiceRate(base_fee=Decimal("75.00"), km_rate=Decimal("1.80")),
        ServiceTypeId.ELECTRONIC_RECYCLING: ServiceRate(base_fee=Decimal("45.00"), km_rate=Decimal("1.80")),
    }


def _default_shred_containers() -> List[ShredContainerType]:
    return [
        ShredContainerType(
            id="shred_bag",
            name="Shred Bag",
            description="Holds up to 16kg (~2-3 archive boxes or 45L of paper)",
            capacity="16kg / 45L",
            price=Decimal("33.00"),
            is_popular=True,
            sort_order=0,
        ),
        ShredContainerType(
            id="secure_bin_240",
            name="Secure 240L Bin",
            description="Large lockable bin for ongoing shredding needs",
            capacity="240 litres",
            price=Decimal("55.00"),
            sort_order=1,
        ),
        ShredContainerType(
            id="secure_bin_120",
            name="Secure 120L Bin",
            description="Medium lockable bin for regular shredding",
            capacity="120 litres",
            price=Decimal("45.00"),
            sort_order=2,
        ),
        ShredContainerType(
            id="archive_box",
            name="Archive Box",
            description="Standard archive box - great for bulk clearouts",
            capacity="Standard box",
            price=Decimal("8.80"),
            sort_order=3,
        ),
        ShredContainerType(
            id="banker_box",
            name="Banker Box",
            description="Standard banker box with lid",
            capacity="Standard box",
            price=Decimal("8.80"),
            sort_order=4,
        ),
    ]


class PricingConfig(BaseModel):
    """Pricing tables used by the per-service pricing rules."""

    rates: Dict[ServiceTypeId, ServiceRate] = Field(default_factory=_default_rates)

    service_level_multipliers: Dict[ServiceLevel, Decimal] = Field(
        default_factory=lambda: {
            ServiceLevel.STANDARD: Decimal("1.0"),
            ServiceLevel.SAME_DAY: Decimal("1.2"),
            ServiceLevel.VIP: Decimal("1.8"),
        }
    )

    multi_stop_fee_per_stop: Decimal = Decimal("5.00")
    white_glove_fee_per_option: Decimal = Decimal("25.00")

    shred_containers: List[ShredContainerType] = Field(default_factory=_default_shred_containers)
    shred_delivery_fee: Decimal = Decimal("15.00")

    rubbish_tiers: List[RubbishTier] = Field(
        default_factory=lambda: [RubbishTier(up_to_m3=None, rate_per_m3=Decimal("50.00"))]
    )
    rubbish_default_volume_m3: Decimal = Decimal("1")

    ewaste_fee_per_item: Decimal = Decimal("10.00")

    def rate_for(self, service_type: ServiceTypeId) -> ServiceRate:
        """Get the rate for a service type."""
        return self.rates[service_type]

    def multiplier_for(self, level: ServiceLevel) -> Decimal:
        """Get the distance multiplier for a service level (1.0 when unset)."""
        return self.service_level_multipliers.get(level, Decimal("1.0"))

    def active_containers(self) -> Dict[str, ShredContainerType]:
        """Active shred containers keyed by id, in display order."""
        ordered = sorted(self.shred_containers, key=lambda c: c.sort_order)
        return {c.id: c for c in ordered if c.is_active}
