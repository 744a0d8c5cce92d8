"""Daily forecasts from Open-Meteo with trip-planning recommendations."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from src.state.settings import ProviderSettings

from .geocoding import Geocoder

logger = logging.getLogger(__name__)

WEATHER_CODES: dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Foggy",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    71: "Slight snow",
    73: "Moderate snow",
    75: "Heavy snow",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}

DAILY_FIELDS = (
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_probability_max",
    "weathercode",
    "relative_humidity_2m_max",
    "windspeed_10m_max",
)

MAX_RECOMMENDATIONS = 3


def recommendations_for(temp_max: float, condition: str, precip_probability: float) -> list[str]:
    tips: list[str] = []

    if temp_max > 40:
        tips += [
            "Extreme heat expected - stay hydrated and avoid midday sun",
            "Plan indoor activities (museums, galleries) for afternoon",
        ]
    elif temp_max > 35:
        tips += [
            "Hot day expected - carry water and sun protection",
            "Best to visit outdoor sites in early morning or evening",
        ]
    elif temp_max > 25:
        tips.append("Pleasant weather for sightseeing")
    elif temp_max < 5:
        tips += [
            "Cold weather expected - dress warmly in layers",
            "Consider indoor attractions during coldest hours",
        ]
    elif temp_max < 15:
        tips += ["Cool weather - bring a light jacket", "Great weather for walking tours"]

    if precip_probability > 60:
        tips += ["High chance of rain - carry an umbrella", "Consider flexible itinerary with indoor backup plans"]
    elif precip_probability > 30:
        tips.append("Some chance of rain - umbrella recommended")

    lowered = condition.lower()
    if "fog" in lowered:
        tips.append("Foggy conditions may affect visibility at viewpoints")
    if "clear" in lowered:
        tips.append("Great visibility for photography")
    if "snow" in lowered:
        tips.append("Snowy conditions - wear appropriate footwear")

    if not tips:
        tips.append("Weather looks suitable for sightseeing")
    return tips[:MAX_RECOMMENDATIONS]


def unavailable_forecast(destination: str, date: str) -> dict[str, Any]:
    return {
        "date": date,
        "destination": destination,
        "temperature": {"min": None, "max": None, "unit": "°C"},
        "condition": "Unknown",
        "precipitation_probability": None,
        "humidity": None,
        "wind_speed": None,
        "available": False,
        "recommendations": [
            "Weather data temporarily unavailable",
            "Check local weather sources for accurate information",
            "Be prepared for varying conditions",
        ],
    }


class WeatherService:
    def __init__(self, client: httpx.AsyncClient, settings: ProviderSettings, geocoder: Geocoder) -> None:
        self._client = client
        self._settings = settings
        self._geocoder = geocoder

    async def forecast(self, destination: str, date: str) -> dict[str, Any]:
        """Forecast for one day; degrades to a placeholder when lookups fail."""
        try:
            coords = await self._geocoder.coordinates(destination)
            response = await self._client.get(
                self._settings.open_meteo_url,
                params={
                    "latitude": coords.lat,
                    "longitude": coords.lon,
                    "daily": ",".join(DAILY_FIELDS),
                    "timezone": "auto",
                    "start_date": date,
                    "end_date": date,
                },
                timeout=self._settings.timeout_s,
            )
            response.raise_for_status()
            daily = response.json()["daily"]
            day = {name: daily[name][0] for name in DAILY_FIELDS}
            code = int(day["weathercode"])
            temp_max = float(day["temperature_2m_max"])
            precip = float(day["precipitation_probability_max"] or 0)
        except (httpx.HTTPError, LookupError, TypeError, ValueError):
            logger.warning("weather lookup failed destination=%s date=%s", destination, date, exc_info=True)
            return unavailable_forecast(destination, date)

        condition = WEATHER_CODES.get(code, "Unknown")
        return {
            "date": date,
            "destination": destination,
            "temperature": {"min": day["temperature_2m_min"], "max": temp_max, "unit": "°C"},
            "condition": condition,
            "precipitation_probability": precip,
            "humidity": day["relative_humidity_2m_max"],
            "wind_speed": day["windspeed_10m_max"],
            "available": True,
            "recommendations": recommendations_for(temp_max, condition, precip),
        }


__all__ = ["WEATHER_CODES", "WeatherService", "recommendations_for", "unavailable_forecast"]
