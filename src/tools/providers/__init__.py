"""HTTP-backed collaborators used by the tool handlers."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from src.state.settings import ProviderSettings

from .poi import PoiSearch
from .geocoding import Geocoder
from .weather import WeatherService
from .city_info import CityGuide
from .web_search import DestinationSearch


@dataclass(frozen=True, slots=True)
class ToolProviders:
    poi: PoiSearch
    weather: WeatherService
    city_guide: CityGuide
    destination_search: DestinationSearch


def build_providers(client: httpx.AsyncClient, settings: ProviderSettings) -> ToolProviders:
    geocoder = Geocoder(client, settings)
    return ToolProviders(
        poi=PoiSearch(client, settings, geocoder),
        weather=WeatherService(client, settings, geocoder),
        city_guide=CityGuide(client, settings),
        destination_search=DestinationSearch(client, settings),
    )


__all__ = [
    "CityGuide",
    "DestinationSearch",
    "Geocoder",
    "PoiSearch",
    "ToolProviders",
    "WeatherService",
    "build_providers",
]
