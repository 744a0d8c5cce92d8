"""Distance and travel-time estimates between points of interest."""

from __future__ import annotations

import math

EARTH_RADIUS_KM = 6371.0

# Average city speeds in km/h.
TRAVEL_SPEEDS_KMH: dict[str, float] = {
    "auto": 20.0,
    "taxi": 25.0,
    "walking": 4.0,
}

# Added to every estimate for traffic and stops.
TRAVEL_BUFFER_MINUTES = 5
MIN_TRAVEL_MINUTES = 10


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def estimate_travel_minutes(distance_km: float, mode: str = "auto") -> int:
    speed = TRAVEL_SPEEDS_KMH.get(mode)
    if speed is None:
        raise ValueError(f"unknown travel mode: {mode}")
    minutes = math.ceil(distance_km / speed * 60)
    return max(MIN_TRAVEL_MINUTES, minutes + TRAVEL_BUFFER_MINUTES)


__all__ = [
    "EARTH_RADIUS_KM",
    "TRAVEL_SPEEDS_KMH",
    "estimate_travel_minutes",
    "haversine_km",
]
