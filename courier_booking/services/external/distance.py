"""
Distance estimators: a fixed placeholder and a Geoapify-backed lookup.
"""

import hashlib
import math
from decimal import Decimal
from typing import Dict, Optional, Tuple

import httpx

from ...config import BackendAPIConfig
from ...core.exceptions import DistanceLookupError
from ...core.models import LocationDetails
from ...utils.logging import get_logger
from ...utils.money import to_decimal

logger = get_logger("courier.distance")

# Straight-line to road distance approximation
ROAD_FACTOR = 1.4
EARTH_RADIUS_KM = 6371

LatLng = Tuple[float, float]


class FixedDistanceEstimator:
    """Returns the same distance for every route.

    Stands in until a real routing provider is configured.
    """

    def __init__(self, distance_km: Decimal = Decimal("12.5")) -> None:
        self.distance_km = to_decimal(distance_km)

    async def estimate_distance(self, pickup: LocationDetails, dropoff: LocationDetails) -> Decimal:
        return self.distance_km


def haversine_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Calculate straight-line distance in km using Haversine formula.
    Multiply by the road factor to approximate actual road distance.
    """
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(dlng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round(EARTH_RADIUS_KM * c * ROAD_FACTOR, 2)


def _address_hash(address: str) -> str:
    """Normalize and hash an address for cache key."""
    normalized = " ".join(address.strip().lower().split())
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


class GeoapifyDistanceEstimator:
    """Geocode both locations and ask Geoapify for the driving distance.

    Geocodes are cached per address for the lifetime of the estimator. When
    routing fails the haversine distance with a road factor is used instead.
    """

    def __init__(
        self,
        config: BackendAPIConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not config.is_geoapify_configured():
            raise ValueError("Geoapify API key is not configured")
        self.config = config
        self.transport = transport
        self._geocode_cache: Dict[str, LatLng] = {}

    async def estimate_distance(self, pickup: LocationDetails, dropoff: LocationDetails) -> Decimal:
        """
        Driving distance in km, rounded to 2 places.

        Raises:
            DistanceLookupError: If either location cannot be geocoded
        """
        async with httpx.AsyncClient(
            timeout=self.config.geoapify_timeout, transport=self.transport
        ) as client:
            origin = await self._geocode(client, pickup)
            destination = await self._geocode(client, dropoff)
            distance_km = await self._route(client, origin, destination)

        if distance_km is None:
            distance_km = haversine_distance(*origin, *destination)
            logger.info("Routing unavailable, using haversine distance %.2f km", distance_km)
        return to_decimal(round(distance_km, 2))

    async def _geocode(self, client: httpx.AsyncClient, location: LocationDetails) -> LatLng:
        address = location.as_address_text()
        if not address:
            raise DistanceLookupError("Location has no address to geocode")

        cache_key = _address_hash(address)
        cached = self._geocode_cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            response = await client.get(
                self.config.geoapify_geocode_url,
                params={"text": address, "apiKey": self.config.geoapify_api_key},
            )
            response.raise_for_status()
            features = response.json().get("features") or []
        except (httpx.HTTPError, ValueError) as e:
            raise DistanceLookupError(f"Geocoding failed for '{address}': {e}")

        if not features:
            raise DistanceLookupError(f"No geocoding match for '{address}'")
        props = features[0].get("properties", {}) or {}
        lat, lon = props.get("lat"), props.get("lon")
        if lat is None or lon is None:
            raise DistanceLookupError(f"No coordinates for '{address}'")

        coords = (float(lat), float(lon))
        self._geocode_cache[cache_key] = coords
        return coords

    async def _route(
        self, client: httpx.AsyncClient, origin: LatLng, destination: LatLng
    ) -> Optional[float]:
        """Driving distance in km, or None when routing is unavailable."""
        try:
            response = await client.get(
                self.config.geoapify_routing_url,
                params={
                    "waypoints": f"{origin[0]},{origin[1]}|{destination[0]},{destination[1]}",
                    "mode": "drive",
                    "apiKey": self.config.geoapify_api_key,
                },
            )
            response.raise_for_status()
            features = response.json().get("features") or []
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Geoapify routing failed: %s", e)
            return None

        if not features:
            return None
        distance_m = (features[0].get("properties", {}) or {}).get("distance")
        if not isinstance(distance_m, (int, float)):
            return None
        return distance_m / 1000.0
