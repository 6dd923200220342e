"""
Service catalog definitions.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Tuple

from ..enums import ServiceTypeId, StepId

if TYPE_CHECKING:
    from ...config.pricing import PricingConfig
    from .booking import BookingDraft
    from .pricing import PriceEstimate

PricingRule = Callable[["BookingDraft", Decimal, "PricingConfig"], "PriceEstimate"]


@dataclass(frozen=True)
class StepDefinition:
    """One screen of the wizard."""

    id: StepId
    title: str


@dataclass(frozen=True)
class ServiceTypeDefinition:
    """Static description of one service type."""

    id: ServiceTypeId
    name: str
    description: str
    priority: int
    steps: Tuple[StepDefinition, ...]
    pricing_rule: PricingRule
    available: bool = True

    @property
    def step_ids(self) -> Tuple[StepId, ...]:
        return tuple(step.id for step in self.steps)
