"""
Per-service pricing rules.

Every rule has the signature ``(draft, distance_km, pricing) -> PriceEstimate``
and is a pure function of its inputs. Amounts stay exact until the total is
rounded to cents.
"""

from decimal import Decimal
from typing import Optional

from ...config.pricing import PricingConfig
from ...core.enums import ServiceTypeId
from ...core.exceptions import InvalidQuantity
from ...core.models import (
    BookingDraft,
    DocumentDestructionDetails,
    EwasteDetails,
    LargeFreightDetails,
    MultiStopDetails,
    PriceEstimate,
    RubbishDetails,
    WhiteGloveDetails,
    empty_details_for,
)
from ...utils.money import ZERO, round_money, to_decimal


def _details(draft: BookingDraft, service_type: ServiceTypeId):
    return draft.details_for(service_type) or empty_details_for(service_type)


def _non_negative(value: Optional[Decimal | int], field: str) -> None:
    if value is not None and value < 0:
        raise InvalidQuantity(field, value)


def _build_estimate(
    service_type: ServiceTypeId,
    draft: BookingDraft,
    distance_km: Decimal,
    pricing: PricingConfig,
    surcharges: Decimal = ZERO,
) -> PriceEstimate:
    rate = pricing.rate_for(service_type)
    distance_component = distance_km * rate.km_rate * pricing.multiplier_for(draft.service_level)
    total = rate.base_fee + distance_component + surcharges
    return PriceEstimate(
        service_type=service_type,
        distance_km=distance_km,
        base_fee=rate.base_fee,
        distance_component=distance_component,
        service_surcharges=surcharges,
        total=round_money(total),
    )


def price_standard(draft: BookingDraft, distance_km: Decimal, pricing: PricingConfig) -> PriceEstimate:
    return _build_estimate(ServiceTypeId.STANDARD, draft, distance_km, pricing)


def price_large_freight(
    draft: BookingDraft, distance_km: Decimal, pricing: PricingConfig
) -> PriceEstimate:
    details: LargeFreightDetails = _details(draft, ServiceTypeId.LARGE_FREIGHT)
    for name in ("length_cm", "width_cm", "height_cm"):
        _non_negative(getattr(details, name), f"service_details.{name}")
    return _build_estimate(ServiceTypeId.LARGE_FREIGHT, draft, distance_km, pricing)


def price_recurring(draft: BookingDraft, distance_km: Decimal, pricing: PricingConfig) -> PriceEstimate:
    return _build_estimate(ServiceTypeId.RECURRING, draft, distance_km, pricing)


def price_multi_stop(draft: BookingDraft, distance_km: Decimal, pricing: PricingConfig) -> PriceEstimate:
    """Flat fee per additional stop."""
    details: MultiStopDetails = _details(draft, ServiceTypeId.MULTI_STOP)
    surcharges = pricing.multi_stop_fee_per_stop * len(details.additional_stops)
    return _build_estimate(ServiceTypeId.MULTI_STOP, draft, distance_km, pricing, surcharges)


def price_white_glove(draft: BookingDraft, distance_km: Decimal, pricing: PricingConfig) -> PriceEstimate:
    """Flat fee per selected option."""
    details: WhiteGloveDetails = _details(draft, ServiceTypeId.WHITE_GLOVE)
    surcharges = pricing.white_glove_fee_per_option * len(details.options.selected())
    return _build_estimate(ServiceTypeId.WHITE_GLOVE, draft, distance_km, pricing, surcharges)


def price_signature(draft: BookingDraft, distance_km: Decimal, pricing: PricingConfig) -> PriceEstimate:
    return _build_estimate(ServiceTypeId.SIGNATURE_SERVICE, draft, distance_km, pricing)


def price_document_destruction(
    draft: BookingDraft, distance_km: Decimal, pricing: PricingConfig
) -> PriceEstimate:
    """
    Containers priced per unit plus the bin/bag delivery fee.

    Unknown or inactive container ids are ignored. The delivery fee applies
    whenever delivery is requested, even before any container is chosen.
    """
    details: DocumentDestructionDetails = _details(draft, ServiceTypeId.DOCUMENT_DESTRUCTION)
    containers = pricing.active_containers()

    surcharges = ZERO
    for container_id, quantity in details.container_quantities.items():
        _non_negative(quantity, f"service_details.container_quantities.{container_id}")
        container = containers.get(container_id)
        if container is None:
            continue
        surcharges += container.price * quantity

    if details.requires_delivery:
        surcharges += pricing.shred_delivery_fee

    return _build_estimate(
        ServiceTypeId.DOCUMENT_DESTRUCTION, draft, distance_km, pricing, surcharges
    )


def rubbish_volume_fee(volume_m3: Decimal, pricing: PricingConfig) -> Decimal:
    """Walk the volume tiers; volume past a bounded last tier uses its rate."""
    fee = ZERO
    remaining = volume_m3
    lower = ZERO
    last_rate = ZERO
    for tier in pricing.rubbish_tiers:
        last_rate = tier.rate_per_m3
        if tier.up_to_m3 is None:
            portion = remaining
        else:
            portion = min(remaining, max(tier.up_to_m3 - lower, ZERO))
            lower = tier.up_to_m3
        fee += portion * tier.rate_per_m3
        remaining -= portion
        if remaining <= 0:
            return fee
    return fee + remaining * last_rate


def price_rubbish_removal(
    draft: BookingDraft, distance_km: Decimal, pricing: PricingConfig
) -> PriceEstimate:
    details: RubbishDetails = _details(draft, ServiceTypeId.RUBBISH_REMOVAL)
    _non_negative(details.estimated_volume_m3, "service_details.estimated_volume_m3")
    # Unknown (or zero) volume is charged as the minimum load
    volume = to_decimal(details.estimated_volume_m3 or pricing.rubbish_default_volume_m3)
    surcharges = rubbish_volume_fee(volume, pricing)
    return _build_estimate(ServiceTypeId.RUBBISH_REMOVAL, draft, distance_km, pricing, surcharges)


def price_electronic_recycling(
    draft: BookingDraft, distance_km: Decimal, pricing: PricingConfig
) -> PriceEstimate:
    """Per-unit handling fee across all listed items."""
    details: EwasteDetails = _details(draft, ServiceTypeId.ELECTRONIC_RECYCLING)
    units = 0
    for index, item in enumerate(details.items):
        _non_negative(item.quantity, f"service_details.items.{index}.quantity")
        units += item.quantity
    surcharges = pricing.ewaste_fee_per_item * units
    return _build_estimate(
        ServiceTypeId.ELECTRONIC_RECYCLING, draft, distance_km, pricing, surcharges
    )
