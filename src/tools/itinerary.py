"""Itinerary mutation, construction and sanity checks.

Itineraries are plain JSON-shaped dicts because they travel verbatim to the
client and may be replaced wholesale by the model (``set``)::

    {"name": str, "destination": str, "sources": [...],
     "days": [{"day_number": int, "activities": [{"time_slot", "poi_name",
               "duration_minutes", "notes", "lat"?, "lon"?,
               "travel_time_to_next"?}]}]}

Every function returns a new dict; inputs are never mutated.
"""

from __future__ import annotations

import copy
from typing import Any

from .geo import haversine_km, estimate_travel_minutes

TIME_SLOTS = ("Morning", "Afternoon", "Evening")

ACTIVITIES_PER_DAY = {"relaxed": 2, "moderate": 3, "active": 4}

DEFAULT_DURATIONS = {
    "attraction": 90,
    "temple": 60,
    "museum": 120,
    "restaurant": 60,
    "market": 90,
    "park": 60,
    "hotel": 0,
}
DEFAULT_DURATION_MINUTES = 60

CATEGORY_NOTES = {
    "attraction": "Best visited in the morning for fewer crowds",
    "temple": "Dress modestly and remove shoes before entering",
    "museum": "Allow 2+ hours to see everything",
    "restaurant": "Try the local specialties",
    "market": "Bargaining is expected",
    "park": "Best visited early morning or evening",
}

MAX_ACTIVITIES_PER_DAY = 4
MAX_DAY_MINUTES = 600

UPDATE_ACTIONS = frozenset({"add_activity", "remove_activity", "update_activity", "clear_day"})


def new_itinerary(destination: str | None = None, name: str | None = None) -> dict[str, Any]:
    dest = destination or "Unknown"
    return {"name": name or f"{dest} Trip", "destination": dest, "days": [], "sources": []}


def _find_day(itinerary: dict[str, Any], day_number: int) -> dict[str, Any] | None:
    for day in itinerary.get("days") or []:
        if day.get("day_number") == day_number:
            return day
    return None


def _has_coords(activity: dict[str, Any]) -> bool:
    return activity.get("lat") is not None and activity.get("lon") is not None


def recalculate_travel_times(itinerary: dict[str, Any]) -> dict[str, Any]:
    updated = copy.deepcopy(itinerary)
    for day in updated.get("days") or []:
        activities = day.get("activities") or []
        for current, following in zip(activities, activities[1:]):
            if _has_coords(current) and _has_coords(following):
                distance = haversine_km(current["lat"], current["lon"], following["lat"], following["lon"])
                current["travel_time_to_next"] = estimate_travel_minutes(distance)
    return updated


def apply_update(
    itinerary: dict[str, Any],
    action: str,
    day_number: int | None = None,
    activity: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Apply one edit action and refresh travel times.

    Actions missing the inputs they need (day number, activity name) leave the
    itinerary unchanged rather than failing.
    """
    if action not in UPDATE_ACTIONS:
        raise ValueError(f"unknown itinerary action: {action}")

    updated = copy.deepcopy(itinerary)
    updated.setdefault("days", [])
    poi_name = (activity or {}).get("poi_name")

    if action == "add_activity" and day_number and activity:
        day = _find_day(updated, day_number)
        if day is None:
            day = {"day_number": day_number, "activities": []}
            updated["days"].append(day)
            updated["days"].sort(key=lambda d: d.get("day_number", 0))
        day.setdefault("activities", []).append(dict(activity))
    elif action == "remove_activity" and day_number and poi_name:
        day = _find_day(updated, day_number)
        if day is not None:
            day["activities"] = [a for a in day.get("activities") or [] if a.get("poi_name") != poi_name]
    elif action == "update_activity" and day_number and poi_name:
        day = _find_day(updated, day_number)
        if day is not None:
            for index, existing in enumerate(day.get("activities") or []):
                if existing.get("poi_name") == poi_name:
                    day["activities"][index] = {**existing, **activity}
                    break
    elif action == "clear_day" and day_number:
        day = _find_day(updated, day_number)
        if day is not None:
            day["activities"] = []

    return recalculate_travel_times(updated)


def build_itinerary(
    pois: list[dict[str, Any]],
    num_days: int,
    *,
    pace: str = "moderate",
    destination: str | None = None,
    name: str | None = None,
) -> dict[str, Any]:
    """Lay POIs out across days in order, filling time slots at the given pace."""
    per_day = ACTIVITIES_PER_DAY.get(pace, ACTIVITIES_PER_DAY["moderate"])
    itinerary = new_itinerary(destination, name or (f"{destination} Adventure" if destination else None))
    seen_sources: set[str] = set()
    remaining = list(pois)

    for day_number in range(1, max(0, int(num_days)) + 1):
        activities = []
        for slot_index in range(per_day):
            if not remaining:
                break
            poi = remaining.pop(0)
            category = poi.get("category") or ""
            activities.append(
                {
                    "time_slot": TIME_SLOTS[slot_index % len(TIME_SLOTS)],
                    "poi_name": poi.get("name") or "Unknown",
                    "poi_id": poi.get("id"),
                    "duration_minutes": DEFAULT_DURATIONS.get(category) or DEFAULT_DURATION_MINUTES,
                    "notes": CATEGORY_NOTES.get(category, CATEGORY_NOTES["attraction"]),
                    "source": "OpenStreetMap" if poi.get("source") == "osm" else "Local Guide",
                    "lat": poi.get("lat"),
                    "lon": poi.get("lon"),
                }
            )
            poi_id = poi.get("id")
            if poi_id and poi_id not in seen_sources:
                seen_sources.add(poi_id)
                itinerary["sources"].append(_poi_source(poi))
        itinerary["days"].append({"day_number": day_number, "activities": activities})

    return recalculate_travel_times(itinerary)


def _poi_source(poi: dict[str, Any]) -> dict[str, Any]:
    poi_id = str(poi.get("id"))
    is_osm = poi.get("source") == "osm"
    source: dict[str, Any] = {"id": poi_id, "type": "osm" if is_osm else "wikivoyage", "title": poi.get("name")}
    if is_osm:
        source["url"] = f"https://www.openstreetmap.org/node/{poi_id.removeprefix('osm_')}"
    return source


def validate_itinerary(itinerary: dict[str, Any]) -> tuple[bool, list[str]]:
    issues: list[str] = []
    for day in itinerary.get("days") or []:
        activities = day.get("activities") or []
        number = day.get("day_number")
        if len(activities) > MAX_ACTIVITIES_PER_DAY:
            issues.append(
                f"Day {number} has {len(activities)} activities (max {MAX_ACTIVITIES_PER_DAY} recommended)"
            )
        total = sum(int(a.get("duration_minutes") or 0) + int(a.get("travel_time_to_next") or 0) for a in activities)
        if total > MAX_DAY_MINUTES:
            issues.append(f"Day {number} is too packed ({round(total / 60)} hours)")
    return not issues, issues


__all__ = [
    "TIME_SLOTS",
    "UPDATE_ACTIONS",
    "apply_update",
    "build_itinerary",
    "new_itinerary",
    "recalculate_travel_times",
    "validate_itinerary",
]
