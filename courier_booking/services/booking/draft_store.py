"""
Draft store for the in-progress booking of one wizard session.
"""

import re
from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ...core.exceptions import (
    FieldNotApplicable,
    InvalidFieldPath,
    InvalidFieldValue,
    ServiceUnavailable,
)
from ...core.models import (
    BookingDraft,
    DocumentDestructionDetails,
    EwasteDetails,
    EwasteItem,
    LocationDetails,
    MultiStopDetails,
    SignatureDetails,
    empty_details_for,
)
from ...utils.validation import ValidationUtils
from .catalog import ServiceCatalog

DetailsT = TypeVar("DetailsT", bound=BaseModel)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class DraftStore:
    """Hold one BookingDraft and apply updates to it.

    The draft is an immutable pydantic model. Every mutation validates a
    complete new draft first and only then swaps it in, so a failed update
    leaves the previous draft untouched.
    """

    # Owned by the step sequencer
    _PROTECTED_FIELDS = {"selected_service_type", "current_step_index"}

    def __init__(self, catalog: ServiceCatalog) -> None:
        self.catalog = catalog
        self._draft = BookingDraft()

    @property
    def draft(self) -> BookingDraft:
        return self._draft

    def get_snapshot(self) -> BookingDraft:
        """Independent copy of the current draft."""
        return self._draft.model_copy(deep=True)

    def reset(self) -> BookingDraft:
        """Discard everything and start from an empty draft."""
        self._draft = BookingDraft()
        return self._draft

    def select_service_type(self, service_type_id: str) -> BookingDraft:
        """
        Select a service type and go back to the first step.

        Common fields are kept. Service details are replaced with the empty
        variant of the new type unless the held details already belong to it.

        Raises:
            UnknownServiceType: If the id is not in the catalog
            ServiceUnavailable: If the service type is disabled
        """
        definition = self.catalog.get_definition(service_type_id)
        if not definition.available:
            raise ServiceUnavailable(definition.id.value)

        details = self._draft.details_for(definition.id) or empty_details_for(definition.id)
        self._draft = self._draft.model_copy(
            update={
                "selected_service_type": definition.id,
                "current_step_index": 0,
                "service_details": details,
            }
        )
        return self._draft

    def clear_selection(self) -> BookingDraft:
        """Deselect the service type, keeping every entered field."""
        self._draft = self._draft.model_copy(
            update={"selected_service_type": None, "current_step_index": 0}
        )
        return self._draft

    def set_step_index(self, index: int) -> BookingDraft:
        """Record the wizard position. Bounds are checked by the sequencer."""
        if index < 0:
            raise ValueError(f"Step index must not be negative (got {index})")
        self._draft = self._draft.model_copy(update={"current_step_index": index})
        return self._draft

    def update_field(self, path: str, value: Any) -> BookingDraft:
        """
        Set or merge a value at a dotted field path.

        Examples of paths: ``pickup_details.suburb``,
        ``service_details.additional_stops.0.phone``,
        ``service_details.container_quantities.shred_bag``. camelCase
        segments are accepted. A dict value is merged into an existing
        nested object instead of replacing it.

        Only structural checks are made here; business rules such as
        non-negative quantities are applied at estimation and submission.

        Raises:
            InvalidFieldPath: If the path does not exist on the draft
            InvalidFieldValue: If the value cannot be stored in the field
        """
        segments = self._resolve_path(path)
        canonical = ".".join(segments)

        data = self._draft.model_dump()
        parent = data
        for segment in segments[:-1]:
            parent = parent[int(segment)] if isinstance(parent, list) else parent[segment]

        leaf = segments[-1]
        if isinstance(parent, list):
            leaf = int(leaf)

        if isinstance(value, BaseModel):
            value = value.model_dump()
        elif isinstance(value, str):
            value = ValidationUtils.sanitize_text(value)

        current = parent[leaf] if isinstance(parent, list) else parent.get(leaf)
        if isinstance(current, dict) and isinstance(value, dict):
            value = {**current, **value}
        parent[leaf] = value

        try:
            self._draft = BookingDraft.model_validate(data)
        except ValidationError as exc:
            raise self._translate_error(canonical, value, exc) from None
        return self._draft

    def add_stop(self, location: Optional[LocationDetails] = None) -> int:
        """Append an additional stop and return its index."""
        details = self._require_details(MultiStopDetails)
        stops = [*details.additional_stops, location or LocationDetails()]
        self._replace_details(details.model_copy(update={"additional_stops": stops}))
        return len(stops) - 1

    def remove_stop(self, index: int) -> BookingDraft:
        details = self._require_details(MultiStopDetails)
        stops = self._without(details.additional_stops, index, "service_details.additional_stops")
        return self._replace_details(details.model_copy(update={"additional_stops": stops}))

    def add_ewaste_item(self, item_type: str = "", quantity: int = 1) -> int:
        """Append an e-waste line item and return its index."""
        details = self._require_details(EwasteDetails)
        items = [*details.items, EwasteItem(type=item_type, quantity=quantity)]
        self._replace_details(details.model_copy(update={"items": items}))
        return len(items) - 1

    def remove_ewaste_item(self, index: int) -> BookingDraft:
        details = self._require_details(EwasteDetails)
        items = self._without(details.items, index, "service_details.items")
        return self._replace_details(details.model_copy(update={"items": items}))

    def set_container_quantity(self, container_id: str, quantity: int) -> BookingDraft:
        """Set how many of a shred container to deliver; zero removes the line."""
        details = self._require_details(DocumentDestructionDetails)
        quantities = dict(details.container_quantities)
        if quantity == 0:
            quantities.pop(container_id, None)
        else:
            quantities[container_id] = quantity
        return self._replace_details(details.model_copy(update={"container_quantities": quantities}))

    def copy_pickup_to_return(self) -> BookingDraft:
        """Use the pickup location as the signature return destination."""
        details = self._require_details(SignatureDetails)
        return self._replace_details(
            details.model_copy(update={"return_destination": self._draft.pickup_details})
        )

    def _require_details(self, details_type: Type[DetailsT]) -> DetailsT:
        details = self._draft.active_details()
        if not isinstance(details, details_type):
            selected = self._draft.selected_service_type
            raise FieldNotApplicable(
                f"{details_type.__name__} does not apply to "
                f"'{selected.value if selected else 'no service'}'"
            )
        return details

    def _replace_details(self, details: BaseModel) -> BookingDraft:
        self._draft = self._draft.model_copy(update={"service_details": details})
        return self._draft

    @staticmethod
    def _without(values: List[Any], index: int, path: str) -> List[Any]:
        if not 0 <= index < len(values):
            raise InvalidFieldPath(f"{path}.{index}")
        return [v for i, v in enumerate(values) if i != index]

    def _resolve_path(self, path: str) -> List[str]:
        """Check a dotted path against the current draft and normalise it."""
        raw = (path or "").split(".")
        if any(not segment for segment in raw):
            raise InvalidFieldPath(path)

        resolved: List[str] = []
        node: Any = self._draft
        for position, segment in enumerate(raw):
            is_last = position == len(raw) - 1
            if isinstance(node, BaseModel):
                name = _CAMEL_BOUNDARY.sub("_", segment).lower()
                if name not in type(node).model_fields:
                    raise InvalidFieldPath(path)
                node = getattr(node, name)
                resolved.append(name)
            elif isinstance(node, list):
                if not segment.isdigit() or int(segment) >= len(node):
                    raise InvalidFieldPath(path)
                node = node[int(segment)]
                resolved.append(segment)
            elif isinstance(node, dict):
                if segment not in node and not is_last:
                    raise InvalidFieldPath(path)
                node = node.get(segment)
                resolved.append(segment)
            else:
                raise InvalidFieldPath(path)

        if resolved[0] in self._PROTECTED_FIELDS or resolved[-2:] == ["service_details", "service_type"]:
            raise InvalidFieldPath(path)
        return resolved

    @staticmethod
    def _translate_error(path: str, value: Any, exc: ValidationError) -> Exception:
        for error in exc.errors():
            if error.get("type") == "extra_forbidden":
                return InvalidFieldPath(f"{path}.{error['loc'][-1]}")
        first = exc.errors()[0] if exc.errors() else {}
        return InvalidFieldValue(path, value, first.get("msg", ""))


def read_field(draft: BookingDraft, path: str) -> Any:
    """Read a dotted path from a draft; missing segments read as None."""
    node: Any = draft
    for segment in path.split("."):
        if node is None:
            return None
        if isinstance(node, (list, tuple)):
            index = int(segment) if segment.isdigit() else -1
            node = node[index] if 0 <= index < len(node) else None
        elif isinstance(node, dict):
            node = node.get(segment)
        else:
            node = getattr(node, segment, None)
    return node
