from __future__ import annotations

from typing import Any
from collections.abc import Callable

import httpx
import pytest

from src.tools.providers.poi import PoiSearch, build_overpass_query, filter_by_interests
from src.tools.providers.weather import WeatherService, recommendations_for
from src.tools.providers.city_info import CityGuide, extract_topic
from src.tools.providers.web_search import DestinationSearch, extract_section
from src.tools.providers.geocoding import Geocoder, BoundingBox

JAIPUR_PLACE = {
    "lat": "26.9124",
    "lon": "75.7873",
    "boundingbox": ["26.77", "27.02", "75.65", "75.92"],
}


def _client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _extract_page(extract: str) -> dict[str, Any]:
    return {"query": {"pages": {"123": {"pageid": 123, "extract": extract}}}}


MISSING_PAGE = {"query": {"pages": {"-1": {"missing": ""}}}}


def test_build_overpass_query() -> None:
    query = build_overpass_query(("tourism=museum",), BoundingBox(south=1.0, west=2.0, north=3.0, east=4.0))
    assert query.startswith("[out:json][timeout:10];")
    assert 'node["tourism"="museum"](1.0,2.0,3.0,4.0);' in query
    assert 'way["tourism"="museum"](1.0,2.0,3.0,4.0);' in query
    assert query.endswith("out center;")


def test_filter_by_interests() -> None:
    pois = [
        {"name": "Spice Garden", "category": "restaurant", "tags": {"cuisine": "vegetarian"}},
        {"name": "Steak House", "category": "restaurant", "tags": {"cuisine": "steak"}},
    ]
    assert [p["name"] for p in filter_by_interests(pois, ["Vegetarian"])] == ["Spice Garden"]
    assert filter_by_interests(pois, []) == pois


@pytest.mark.asyncio
async def test_poi_search(provider_settings: Any) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.host == "geo.test":
            return httpx.Response(200, json=[JAIPUR_PLACE])
        return httpx.Response(
            200,
            json={
                "elements": [
                    {"id": 1, "lat": 26.98, "lon": 75.85, "tags": {"name": "Amber Fort", "historic": "castle"}},
                    {"id": 2, "center": {"lat": 26.92, "lon": 75.82}, "tags": {"name": "Hawa Mahal"}},
                    {"id": 3, "lat": 26.9, "lon": 75.8, "tags": {}},
                ]
            },
        )

    async with _client(handler) as client:
        geocoder = Geocoder(client, provider_settings)
        search = PoiSearch(client, provider_settings, geocoder)
        pois = await search.search("Jaipur, India", "attraction", limit=5)
        again = await search.search("jaipur, india", "attraction", limit=1)

    assert [p["name"] for p in pois] == ["Amber Fort", "Hawa Mahal"]
    assert pois[0]["id"] == "osm_1"
    assert pois[0]["source"] == "osm"
    assert (pois[1]["lat"], pois[1]["lon"]) == (26.92, 75.82)
    assert len(again) == 1
    # Geocoding is cached across searches.
    assert [r.url.host for r in seen] == ["geo.test", "overpass.test", "overpass.test"]
    assert seen[1].headers["content-type"] == "text/plain"
    assert "(26.77,75.65,27.02,75.92)" in seen[1].content.decode()


@pytest.mark.asyncio
async def test_poi_search_unknown_destination(provider_settings: Any) -> None:
    async with _client(lambda request: httpx.Response(200, json=[])) as client:
        search = PoiSearch(client, provider_settings, Geocoder(client, provider_settings))
        with pytest.raises(LookupError):
            await search.search("Atlantis", "museum")


def test_recommendations() -> None:
    assert recommendations_for(42, "Clear sky", 10) == [
        "Extreme heat expected - stay hydrated and avoid midday sun",
        "Plan indoor activities (museums, galleries) for afternoon",
        "Great visibility for photography",
    ]
    assert recommendations_for(2, "Overcast", 0)[0] == "Cold weather expected - dress warmly in layers"
    assert recommendations_for(20, "Overcast", 40) == ["Some chance of rain - umbrella recommended"]
    assert recommendations_for(20, "Overcast", 0) == ["Weather looks suitable for sightseeing"]


@pytest.mark.asyncio
async def test_weather_forecast(provider_settings: Any) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "geo.test":
            return httpx.Response(200, json=[JAIPUR_PLACE])
        assert request.url.params["start_date"] == "2026-10-20"
        assert request.url.params["timezone"] == "auto"
        return httpx.Response(
            200,
            json={
                "daily": {
                    "temperature_2m_max": [33.0],
                    "temperature_2m_min": [21.0],
                    "precipitation_probability_max": [5],
                    "weathercode": [0],
                    "relative_humidity_2m_max": [40],
                    "windspeed_10m_max": [12.5],
                }
            },
        )

    async with _client(handler) as client:
        weather = await WeatherService(client, provider_settings, Geocoder(client, provider_settings)).forecast(
            "Jaipur", "2026-10-20"
        )

    assert weather["available"] is True
    assert weather["condition"] == "Clear sky"
    assert weather["temperature"] == {"min": 21.0, "max": 33.0, "unit": "°C"}
    assert weather["recommendations"] == ["Pleasant weather for sightseeing", "Great visibility for photography"]


@pytest.mark.asyncio
async def test_weather_degrades_when_unavailable(provider_settings: Any) -> None:
    async with _client(lambda request: httpx.Response(503)) as client:
        weather = await WeatherService(client, provider_settings, Geocoder(client, provider_settings)).forecast(
            "Jaipur", "2026-10-20"
        )
    assert weather["available"] is False
    assert weather["condition"] == "Unknown"
    assert weather["recommendations"][0] == "Weather data temporarily unavailable"


def test_extract_topic() -> None:
    content = "Jaipur is the Pink City.\n== Stay safe ==\nWatch for touts.\nUse prepaid taxis.\n== Eat ==\nDal baati."
    assert extract_topic(content, "safety", "Jaipur") == "Watch for touts.\nUse prepaid taxis."
    assert extract_topic(content, "shopping", "Jaipur").startswith("General information about shopping in Jaipur")
    assert extract_topic(content, "overview", "Jaipur").startswith("Jaipur is the Pink City.")


@pytest.mark.asyncio
async def test_city_guide_caches_hits_only(provider_settings: Any) -> None:
    replies = [httpx.Response(200, json=MISSING_PAGE), httpx.Response(200, json=_extract_page("== Eat ==\nKachori."))]
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return replies.pop(0)

    async with _client(handler) as client:
        guide = CityGuide(client, provider_settings)
        missing = await guide.lookup("Jaipur, India", "food")
        found = await guide.lookup("Jaipur, India", "food")
        cached = await guide.lookup("Jaipur, India", "FOOD")

    assert missing["source"] == "System"
    assert found == {"content": "Kachori.", "source": "Wikivoyage - Jaipur, India"}
    assert cached == found
    assert len(calls) == 2
    assert calls[0].url.params["titles"] == "Jaipur"


def test_extract_section() -> None:
    content = "Intro.\n== See ==\nForts and palaces.\n== Eat ==\nStreet food."
    assert extract_section(content, ("see",)) == "Forts and palaces."
    assert extract_section(content, ("sleep",)) == content


@pytest.mark.asyncio
async def test_destination_search_combines_sources(provider_settings: Any) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "voyage.test":
            return httpx.Response(200, json=_extract_page("== Understand ==\n" + "Rome is ancient. " * 10))
        if request.url.params.get("list") == "search":
            return httpx.Response(200, json={"query": {"search": [{"title": "Rome"}]}})
        return httpx.Response(200, json=_extract_page("Rome is the capital of Italy."))

    async with _client(handler) as client:
        result = await DestinationSearch(client, provider_settings).search("Rome, Italy", "overview")

    assert result["destination"] == "Rome, Italy"
    assert result["content"].startswith("Rome is ancient.")
    assert "--- Additional Information ---" in result["content"]
    assert [s["title"] for s in result["sources"]] == ["Wikivoyage - Rome", "Wikipedia - Rome"]


@pytest.mark.asyncio
async def test_destination_search_when_everything_fails(provider_settings: Any) -> None:
    async with _client(lambda request: httpx.Response(500)) as client:
        result = await DestinationSearch(client, provider_settings).search("Atlantis", "food")
    assert result["sources"] == []
    assert result["content"].startswith("Unable to fetch detailed information for Atlantis.")
