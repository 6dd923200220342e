from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from ..models import LocationDetails


class DistanceEstimator(Protocol):
    """Road distance in kilometres between two locations.

    Implementations raise ``DistanceLookupError`` when a location cannot be resolved.
    """

    async def estimate_distance(
        self, pickup: LocationDetails, dropoff: LocationDetails
    ) -> Decimal: ...
