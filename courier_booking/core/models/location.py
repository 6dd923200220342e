"""
Location value object shared by pickup, drop-off and additional stops.
"""

from pydantic import BaseModel, ConfigDict


class LocationDetails(BaseModel):
    """Address and on-site contact for one stop."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    street_address: str = ""
    suburb: str = ""
    state: str = ""
    postcode: str = ""
    contact_name: str = ""
    phone: str = ""
    email: str = ""
    notes: str = ""

    def is_empty(self) -> bool:
        """True when no field has been filled in."""
        return not any(value.strip() for value in self.model_dump().values())

    def as_address_text(self) -> str:
        """Single-line address, e.g. ``1 Main St, Sydney, NSW 2000``."""
        region = " ".join(p for p in (self.state.strip(), self.postcode.strip()) if p)
        parts = [self.street_address.strip(), self.suburb.strip(), region]
        return ", ".join(p for p in parts if p)
