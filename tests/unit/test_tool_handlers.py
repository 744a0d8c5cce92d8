from __future__ import annotations

import json
from typing import Any

import pytest

from src.tools.context import ToolContext
from src.tools.handlers import TOOL_HANDLERS
from src.tools.providers import ToolProviders


class _FakePoiSearch:
    def __init__(self, pois: list[dict[str, Any]]) -> None:
        self.pois = pois
        self.calls: list[tuple[Any, ...]] = []

    async def search(self, destination: str, category: str, interests: Any, limit: int) -> list[dict[str, Any]]:
        self.calls.append((destination, category, interests, limit))
        return self.pois[:limit]


class _FakeWeather:
    async def forecast(self, destination: str, date: str) -> dict[str, Any]:
        return {"destination": destination, "date": date, "condition": "Clear sky", "available": True}


class _FakeCityGuide:
    async def lookup(self, destination: str, topic: str) -> dict[str, str]:
        return {"content": f"{topic} in {destination}", "source": f"Wikivoyage - {destination}"}


class _FakeDestinationSearch:
    async def search(self, destination: str, query_type: str) -> dict[str, Any]:
        return {"destination": destination, "query_type": query_type, "content": "...", "sources": []}


JAIPUR_POIS = [
    {"id": "osm_1", "name": "Amber Fort", "category": "attraction", "lat": 26.9855, "lon": 75.8513},
    {"id": "osm_2", "name": "Hawa Mahal", "category": "attraction", "lat": 26.9239, "lon": 75.8267},
]


def _providers(pois: list[dict[str, Any]] | None = None) -> ToolProviders:
    return ToolProviders(
        poi=_FakePoiSearch(pois if pois is not None else JAIPUR_POIS),
        weather=_FakeWeather(),
        city_guide=_FakeCityGuide(),
        destination_search=_FakeDestinationSearch(),
    )


async def _call(name: str, args: dict[str, Any], context: ToolContext, providers: ToolProviders | None = None) -> Any:
    return await TOOL_HANDLERS[name](args, context, providers or _providers())


@pytest.mark.asyncio
async def test_poi_search_remembers_coordinates() -> None:
    context = ToolContext()
    providers = _providers()
    result = await _call(
        "poi_search",
        {"destination": "Jaipur", "category": "attraction", "interests": ["historical"], "limit": "1"},
        context,
        providers,
    )

    assert result["success"] is True
    assert result["count"] == 1
    assert result["source"] == "OpenStreetMap"
    assert providers.poi.calls == [("Jaipur", "attraction", ["historical"], 1)]
    assert context.lookup_poi("AMBER FORT") == (26.9855, 75.8513)


@pytest.mark.asyncio
async def test_calculate_travel_time_after_search() -> None:
    context = ToolContext()
    await _call("poi_search", {"destination": "Jaipur", "category": "attraction"}, context)

    result = await _call(
        "calculate_travel_time",
        {"destination": "Jaipur", "from_poi": "Amber Fort", "to_poi": "Hawa Mahal"},
        context,
    )
    assert result["success"] is True
    assert result["mode"] == "taxi"
    assert result["distance_km"] == pytest.approx(7.2, abs=0.2)
    assert result["travel_time_minutes"] >= 10


@pytest.mark.asyncio
async def test_calculate_travel_time_unknown_places_and_mode() -> None:
    context = ToolContext()
    args = {"destination": "Jaipur", "from_poi": "Amber Fort", "to_poi": "Hawa Mahal"}
    missing = await _call("calculate_travel_time", args, context)
    assert missing == {"success": False, "error": "Location coordinates not found. Please search for POIs first."}

    bad_mode = await _call("calculate_travel_time", {**args, "mode": "rocket"}, context)
    assert bad_mode["success"] is False


@pytest.mark.asyncio
async def test_update_itinerary_add_fills_known_coordinates() -> None:
    context = ToolContext()
    context.remember_poi("Amber Fort", 26.9855, 75.8513)

    result = await _call(
        "update_itinerary",
        {
            "action": "add_activity",
            "day_number": 1,
            "time_slot": "Morning",
            "poi_name": "Amber Fort",
            "destination": "Jaipur",
            "name": "Pink City Adventure",
        },
        context,
    )
    assert result["success"] is True
    itinerary = result["itinerary"]
    assert itinerary["name"] == "Pink City Adventure"
    assert itinerary["destination"] == "Jaipur"
    activity = itinerary["days"][0]["activities"][0]
    assert (activity["lat"], activity["lon"]) == (26.9855, 75.8513)
    assert activity["duration_minutes"] == 60
    assert context.itinerary == itinerary


@pytest.mark.asyncio
async def test_update_itinerary_set_from_json() -> None:
    context = ToolContext()
    payload = {"destination": "Rome", "days": [{"day_number": 1, "activities": []}]}
    result = await _call("update_itinerary", {"action": "set", "itinerary_json": json.dumps(payload)}, context)

    assert result["success"] is True
    assert result["message"] == "Itinerary set successfully"
    assert context.itinerary is not None
    assert context.itinerary["name"] == "Rome Adventure"


@pytest.mark.asyncio
async def test_update_itinerary_set_invalid_json() -> None:
    context = ToolContext()
    result = await _call("update_itinerary", {"action": "set", "itinerary_json": "{not json"}, context)
    assert result == {"success": False, "error": "Invalid itinerary_json format"}
    assert context.itinerary is None


@pytest.mark.asyncio
async def test_update_itinerary_unknown_action() -> None:
    result = await _call("update_itinerary", {"action": "shuffle"}, ToolContext())
    assert result["success"] is False


@pytest.mark.asyncio
async def test_update_itinerary_warns_when_day_is_packed() -> None:
    context = ToolContext()
    for index in range(5):
        result = await _call(
            "update_itinerary",
            {"action": "add_activity", "day_number": 1, "poi_name": f"Stop {index}", "duration_minutes": 30},
            context,
        )
    assert result["warnings"] == ["Day 1 has 5 activities (max 4 recommended)"]


@pytest.mark.asyncio
async def test_info_tools_wrap_providers() -> None:
    context = ToolContext()
    weather = await _call("get_weather", {"destination": "Rome", "date": "2026-10-20"}, context)
    assert weather == {
        "success": True,
        "weather": {"destination": "Rome", "date": "2026-10-20", "condition": "Clear sky", "available": True},
    }

    info = await _call("get_city_info", {"destination": "Rome", "topic": "food"}, context)
    assert info["content"] == "food in Rome"
    assert info["source"] == "Wikivoyage - Rome"

    search = await _call("search_destination_info", {"destination": "Rome", "query_type": "tips"}, context)
    assert search["success"] is True
    assert search["query_type"] == "tips"
