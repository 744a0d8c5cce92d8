"""Point-of-interest search over OpenStreetMap (Overpass)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from src.state.settings import ProviderSettings

from .geocoding import Geocoder, BoundingBox

logger = logging.getLogger(__name__)

CATEGORY_TAGS: dict[str, tuple[str, ...]] = {
    "restaurant": ("amenity=restaurant", "amenity=cafe", "amenity=fast_food"),
    "attraction": (
        "tourism=attraction",
        "tourism=viewpoint",
        "historic=monument",
        "historic=castle",
        "historic=palace",
    ),
    "temple": (
        "amenity=place_of_worship",
        "building=temple",
        "building=church",
        "building=mosque",
        "building=synagogue",
    ),
    "market": ("shop=market", "amenity=marketplace", "shop=mall", "shop=department_store"),
    "museum": ("tourism=museum", "tourism=gallery"),
    "park": ("leisure=park", "leisure=garden", "leisure=nature_reserve"),
    "hotel": ("tourism=hotel", "tourism=guest_house", "tourism=hostel"),
}


def build_overpass_query(tags: tuple[str, ...], bbox: BoundingBox) -> str:
    area = f"({bbox.south},{bbox.west},{bbox.north},{bbox.east})"
    clauses = []
    for tag in tags:
        key, _, value = tag.partition("=")
        clauses.append(f'node["{key}"="{value}"]{area};')
        clauses.append(f'way["{key}"="{value}"]{area};')
    body = "\n  ".join(clauses)
    return f"[out:json][timeout:10];\n(\n  {body}\n);\nout center;"


def _element_to_poi(element: dict[str, Any], category: str) -> dict[str, Any]:
    tags = element.get("tags") or {}
    center = element.get("center") or {}
    return {
        "id": f"osm_{element.get('id')}",
        "name": tags.get("name") or "Unknown",
        "category": category,
        "lat": element.get("lat", center.get("lat")),
        "lon": element.get("lon", center.get("lon")),
        "address": tags.get("addr:full") or tags.get("addr:street") or tags.get("addr:city"),
        "tags": tags,
        "source": "osm",
    }


def filter_by_interests(pois: list[dict[str, Any]], interests: list[str]) -> list[dict[str, Any]]:
    wanted = [i.lower() for i in interests if isinstance(i, str) and i]
    if not wanted:
        return pois

    def _matches(poi: dict[str, Any]) -> bool:
        text = " ".join([poi.get("name") or "", poi.get("category") or "", *map(str, (poi.get("tags") or {}).values())])
        text = text.lower()
        return any(interest in text for interest in wanted)

    return [poi for poi in pois if _matches(poi)]


class PoiSearch:
    def __init__(self, client: httpx.AsyncClient, settings: ProviderSettings, geocoder: Geocoder) -> None:
        self._client = client
        self._settings = settings
        self._geocoder = geocoder

    async def search(
        self,
        destination: str,
        category: str,
        interests: list[str] | None = None,
        limit: int = 5,
    ) -> list[dict[str, Any]]:
        bbox = await self._geocoder.bounding_box(destination)
        tags = CATEGORY_TAGS.get(category, (f"tourism={category}",))

        response = await self._client.post(
            self._settings.overpass_url,
            content=build_overpass_query(tags, bbox),
            headers={"Content-Type": "text/plain", "User-Agent": self._settings.user_agent},
            timeout=self._settings.timeout_s,
        )
        response.raise_for_status()
        elements = response.json().get("elements") or []

        pois = [_element_to_poi(el, category) for el in elements if isinstance(el, dict)]
        pois = [poi for poi in pois if poi["name"] != "Unknown"]
        if interests:
            pois = filter_by_interests(pois, interests)

        logger.info("poi search destination=%s category=%s found=%s", destination, category, len(pois))
        return pois[: max(0, int(limit))]


__all__ = ["CATEGORY_TAGS", "PoiSearch", "build_overpass_query", "filter_by_interests"]
