"""
In-process booking backend for development and tests.
"""

import asyncio
import secrets
from typing import Dict, List

from ...core.models import BookingConfirmation, BookingRequest

TRACKING_PREFIX = "Z2U-"
# No 0/O or 1/I, easy to read out over the phone
TRACKING_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
TRACKING_LENGTH = 8


def generate_tracking_id() -> str:
    """Random tracking id such as ``Z2U-7KQ4M2XA``."""
    return TRACKING_PREFIX + "".join(
        secrets.choice(TRACKING_ALPHABET) for _ in range(TRACKING_LENGTH)
    )


class InMemoryBookingBackend:
    """Keep bookings in a dict, keyed by idempotency key."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._by_key: Dict[str, BookingConfirmation] = {}
        self.requests: List[BookingRequest] = []

    async def create_booking(self, request: BookingRequest) -> BookingConfirmation:
        async with self._lock:
            self.requests.append(request)
            existing = self._by_key.get(request.idempotency_key)
            if existing is not None:
                return existing

            confirmation = BookingConfirmation(
                tracking_id=generate_tracking_id(),
                total_cost=request.estimate.total,
            )
            self._by_key[request.idempotency_key] = confirmation
            return confirmation

    @property
    def bookings(self) -> List[BookingConfirmation]:
        """Distinct bookings created so far."""
        return list(self._by_key.values())
