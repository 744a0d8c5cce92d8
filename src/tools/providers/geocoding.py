"""Nominatim geocoding shared by the POI and weather collaborators."""

from __future__ import annotations

import logging
from typing import Any
from dataclasses import dataclass

import httpx

from src.state.settings import ProviderSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BoundingBox:
    south: float
    west: float
    north: float
    east: float


@dataclass(frozen=True, slots=True)
class Coordinates:
    lat: float
    lon: float


class Geocoder:
    """Resolves destination names, caching results for the life of the process."""

    def __init__(self, client: httpx.AsyncClient, settings: ProviderSettings) -> None:
        self._client = client
        self._settings = settings
        self._places: dict[str, dict[str, Any]] = {}

    async def _lookup(self, destination: str) -> dict[str, Any]:
        key = destination.strip().lower()
        cached = self._places.get(key)
        if cached is not None:
            return cached

        response = await self._client.get(
            self._settings.nominatim_url,
            params={"q": destination, "format": "json", "limit": 1},
            headers={"User-Agent": self._settings.user_agent},
            timeout=self._settings.timeout_s,
        )
        response.raise_for_status()
        results = response.json()
        if not isinstance(results, list) or not results:
            raise LookupError(f"Could not geocode destination: {destination}")

        place = results[0]
        self._places[key] = place
        logger.debug("geocoded destination=%s lat=%s lon=%s", destination, place.get("lat"), place.get("lon"))
        return place

    async def bounding_box(self, destination: str) -> BoundingBox:
        place = await self._lookup(destination)
        # Nominatim orders the box as [south, north, west, east].
        south, north, west, east = (float(v) for v in place["boundingbox"])
        return BoundingBox(south=south, west=west, north=north, east=east)

    async def coordinates(self, destination: str) -> Coordinates:
        place = await self._lookup(destination)
        return Coordinates(lat=float(place["lat"]), lon=float(place["lon"]))


__all__ = ["BoundingBox", "Coordinates", "Geocoder"]
