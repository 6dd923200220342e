from __future__ import annotations

from typing import Protocol

from ..models import BookingConfirmation, BookingRequest


class BookingBackend(Protocol):
    """Persists a finalized booking and assigns its tracking id.

    Implementations raise ``ExternalAPIError`` on network or backend failure.
    """

    async def create_booking(self, request: BookingRequest) -> BookingConfirmation: ...
