"""
Service catalog: the static registry of service types and their wizard steps.
"""

from dataclasses import replace
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ...core.enums import ServiceTypeId, StepId
from ...core.exceptions import UnknownServiceType
from ...core.models import PricingRule, ServiceTypeDefinition, StepDefinition
from . import pricing_rules

_SERVICE = StepDefinition(StepId.SERVICE, "Service")
_PICKUP = StepDefinition(StepId.PICKUP, "Pickup")
_DROPOFF = StepDefinition(StepId.DROPOFF, "Drop-off")
_LOCATION = StepDefinition(StepId.LOCATION, "Location")
_SCHEDULE = StepDefinition(StepId.SCHEDULE, "Schedule")
_REVIEW = StepDefinition(StepId.REVIEW, "Review")


def _definition(
    service_type: ServiceTypeId,
    name: str,
    description: str,
    priority: int,
    steps: Iterable[StepDefinition],
    pricing_rule: PricingRule,
) -> ServiceTypeDefinition:
    return ServiceTypeDefinition(
        id=service_type,
        name=name,
        description=description,
        priority=priority,
        steps=tuple(steps),
        pricing_rule=pricing_rule,
    )


DEFAULT_SERVICE_TYPES: Tuple[ServiceTypeDefinition, ...] = (
    _definition(
        ServiceTypeId.STANDARD,
        "Standard Delivery",
        "Standard immediate delivery network service",
        1,
        (_SERVICE, _PICKUP, _DROPOFF, StepDefinition(StepId.PACKAGE, "Package"), _REVIEW),
        pricing_rules.price_standard,
    ),
    _definition(
        ServiceTypeId.LARGE_FREIGHT,
        "Large Freight",
        "For large/oversized items requiring specialized handling",
        2,
        (_SERVICE, StepDefinition(StepId.FREIGHT, "Freight Details"), _PICKUP, _DROPOFF, _REVIEW),
        pricing_rules.price_large_freight,
    ),
    _definition(
        ServiceTypeId.RECURRING,
        "Recurring Booking",
        "Schedule repeated, periodic delivery services",
        3,
        (_SERVICE, _SCHEDULE, _PICKUP, _DROPOFF, _REVIEW),
        pricing_rules.price_recurring,
    ),
    _definition(
        ServiceTypeId.MULTI_STOP,
        "Multi-Pickup / Multi-Delivery",
        "Single booking with multiple pickup or dropoff stops",
        4,
        (_SERVICE, StepDefinition(StepId.STOPS, "Stops"), _REVIEW),
        pricing_rules.price_multi_stop,
    ),
    _definition(
        ServiceTypeId.WHITE_GLOVE,
        "White Glove Service",
        "Premium service with assembly, specific placement & more",
        5,
        (_SERVICE, StepDefinition(StepId.OPTIONS, "Options"), _PICKUP, _DROPOFF, _REVIEW),
        pricing_rules.price_white_glove,
    ),
    _definition(
        ServiceTypeId.SIGNATURE_SERVICE,
        "Signature Service",
        "Pick up, get signature, and return to destination",
        6,
        (
            _SERVICE,
            StepDefinition(StepId.DOCUMENT, "Document"),
            _PICKUP,
            StepDefinition(StepId.SIGNATURE, "Signature"),
            StepDefinition(StepId.RETURN, "Return"),
            _REVIEW,
        ),
        pricing_rules.price_signature,
    ),
    _definition(
        ServiceTypeId.DOCUMENT_DESTRUCTION,
        "Document Destruction",
        "Secure shredding service with bins & bags delivery",
        7,
        (_SERVICE, StepDefinition(StepId.CONTAINERS, "Containers"), _LOCATION, _SCHEDULE, _REVIEW),
        pricing_rules.price_document_destruction,
    ),
    _definition(
        ServiceTypeId.RUBBISH_REMOVAL,
        "Rubbish Removal",
        "Collection and disposal of general rubbish",
        8,
        (_SERVICE, StepDefinition(StepId.RUBBISH, "Details"), _LOCATION, _REVIEW),
        pricing_rules.price_rubbish_removal,
    ),
    _definition(
        ServiceTypeId.ELECTRONIC_RECYCLING,
        "Electronic Recycling",
        "Collection and recycling of electronic goods",
        9,
        (_SERVICE, StepDefinition(StepId.ITEMS, "Items"), _LOCATION, _REVIEW),
        pricing_rules.price_electronic_recycling,
    ),
)


class ServiceCatalog:
    """Read-only registry of service type definitions."""

    def __init__(self, definitions: Iterable[ServiceTypeDefinition]) -> None:
        registry: Dict[ServiceTypeId, ServiceTypeDefinition] = {}
        for definition in definitions:
            self._validate_definition(definition)
            if definition.id in registry:
                raise ValueError(f"Duplicate service type '{definition.id.value}'")
            registry[definition.id] = definition
        self._definitions: Mapping[ServiceTypeId, ServiceTypeDefinition] = MappingProxyType(registry)

    @classmethod
    def default(cls, disabled: Optional[Iterable[str]] = None) -> "ServiceCatalog":
        """Build the catalog of built-in service types.

        Args:
            disabled: Service type ids to mark unavailable ("coming soon")
        """
        disabled_ids = {ServiceTypeId(value) for value in (disabled or [])}
        definitions = []
        for definition in DEFAULT_SERVICE_TYPES:
            if definition.id in disabled_ids:
                definition = replace(definition, available=False)
            definitions.append(definition)
        return cls(definitions)

    @staticmethod
    def _validate_definition(definition: ServiceTypeDefinition) -> None:
        step_ids = definition.step_ids
        if not step_ids:
            raise ValueError(f"Service type '{definition.id.value}' has no steps")
        if step_ids[0] != StepId.SERVICE or step_ids[-1] != StepId.REVIEW:
            raise ValueError(
                f"Service type '{definition.id.value}' must start with "
                f"'{StepId.SERVICE.value}' and end with '{StepId.REVIEW.value}'"
            )
        if step_ids.count(StepId.REVIEW) != 1:
            raise ValueError(f"Service type '{definition.id.value}' has more than one review step")

    def get_definition(self, service_type_id: str) -> ServiceTypeDefinition:
        """Get the definition for a service type id.

        Raises:
            UnknownServiceType: If the id is not registered
        """
        try:
            key = ServiceTypeId(service_type_id)
        except ValueError:
            raise UnknownServiceType(str(service_type_id)) from None
        definition = self._definitions.get(key)
        if definition is None:
            raise UnknownServiceType(key.value)
        return definition

    def get_steps(self, service_type_id: str) -> Tuple[StepId, ...]:
        """Ordered step ids for a service type."""
        return self.get_definition(service_type_id).step_ids

    def get_pricing_rule(self, service_type_id: str) -> PricingRule:
        """Pricing rule for a service type."""
        return self.get_definition(service_type_id).pricing_rule

    def list_available_service_types(self) -> List[ServiceTypeDefinition]:
        """Available service types in display order."""
        available = [d for d in self._definitions.values() if d.available]
        return sorted(available, key=lambda d: d.priority)

    def __contains__(self, service_type_id: object) -> bool:
        try:
            return ServiceTypeId(service_type_id) in self._definitions
        except ValueError:
            return False

    def __len__(self) -> int:
        return len(self._definitions)
