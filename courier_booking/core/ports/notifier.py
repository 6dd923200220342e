from __future__ import annotations

from typing import Protocol

from ..models import BookingEvent


class OutcomeNotifier(Protocol):
    """Receives semantic booking outcomes for the presentation layer."""

    def notify(self, event: BookingEvent) -> None: ...
