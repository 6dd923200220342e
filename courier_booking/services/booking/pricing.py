"""
Price estimator.
"""

from decimal import Decimal
from typing import Optional, Union

from ...config.pricing import PricingConfig
from ...core.exceptions import InvalidQuantity, NoServiceSelected
from ...core.models import BookingDraft, PriceEstimate
from ...utils.money import to_decimal
from .catalog import ServiceCatalog


class PriceEstimator:
    """Compute running price estimates from a draft and a route distance."""

    _COMMON_AMOUNTS = ("package_weight", "declared_value")

    def __init__(self, catalog: ServiceCatalog, pricing: Optional[PricingConfig] = None) -> None:
        self.catalog = catalog
        self.pricing = pricing or PricingConfig()

    def estimate(
        self,
        draft: BookingDraft,
        distance_km: Union[Decimal, int, float, str],
        service_type_id: Optional[str] = None,
    ) -> PriceEstimate:
        """
        Estimate the price of a draft.

        Args:
            draft: Draft snapshot to price
            distance_km: Route distance in kilometres
            service_type_id: Price as this service type instead of the selected one

        Returns:
            Price breakdown with the total rounded half-up to cents

        Raises:
            NoServiceSelected: If no service type is given or selected
            UnknownServiceType: If the service type is not in the catalog
            InvalidQuantity: If the distance or any priced amount is negative
        """
        service_type = service_type_id or draft.selected_service_type
        if service_type is None:
            raise NoServiceSelected("Select a service type before estimating a price")

        rule = self.catalog.get_pricing_rule(service_type)

        distance = to_decimal(distance_km)
        if distance < 0:
            raise InvalidQuantity("distance_km", distance)
        for name in self._COMMON_AMOUNTS:
            value = getattr(draft, name)
            if value is not None and value < 0:
                raise InvalidQuantity(name, value)

        return rule(draft, distance, self.pricing)
