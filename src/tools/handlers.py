"""Per-tool handlers.

Each handler receives the model-supplied arguments, the connection's
``ToolContext`` and the shared collaborators, and returns a JSON-shaped result
that is sent back upstream verbatim. Handlers return ``success: False`` results
for conditions the model can recover from (unknown POI, bad itinerary JSON);
anything raised is turned into a dispatch error by the dispatcher.
"""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Callable, Awaitable

import orjson

from src.config.providers import POI_DEFAULT_LIMIT

from .context import ToolContext
from .providers import ToolProviders
from .geo import TRAVEL_SPEEDS_KMH, haversine_km, estimate_travel_minutes
from .itinerary import (
    UPDATE_ACTIONS,
    apply_update,
    new_itinerary,
    build_itinerary,
    validate_itinerary,
    recalculate_travel_times,
)

logger = logging.getLogger(__name__)

ToolHandler = Callable[[dict[str, Any], ToolContext, ToolProviders], Awaitable[dict[str, Any]]]

DEFAULT_TRAVEL_MODE = "taxi"


async def _poi_search(args: dict[str, Any], context: ToolContext, providers: ToolProviders) -> dict[str, Any]:
    destination = str(args["destination"])
    interests = args.get("interests")
    if not isinstance(interests, list):
        interests = None
    try:
        limit = int(args.get("limit") or POI_DEFAULT_LIMIT)
    except (TypeError, ValueError):
        limit = POI_DEFAULT_LIMIT

    pois = await providers.poi.search(destination, str(args["category"]), interests, limit)
    for poi in pois:
        context.remember_poi(poi["name"], poi.get("lat"), poi.get("lon"))

    return {
        "success": True,
        "destination": destination,
        "results": pois,
        "count": len(pois),
        "source": "OpenStreetMap",
    }


def _itinerary_result(itinerary: dict[str, Any], message: str) -> dict[str, Any]:
    valid, issues = validate_itinerary(itinerary)
    result: dict[str, Any] = {"success": True, "itinerary": itinerary, "message": message}
    if not valid:
        result["warnings"] = issues
    return result


def _parse_full_itinerary(args: dict[str, Any]) -> dict[str, Any] | None:
    raw = args.get("itinerary_json")
    if raw:
        parsed = orjson.loads(raw) if isinstance(raw, (str, bytes)) else raw
    else:
        parsed = args.get("full_itinerary")
    if isinstance(parsed, dict) and isinstance(parsed.get("days"), list):
        return parsed
    return None


def _activity_from_args(args: dict[str, Any], context: ToolContext) -> dict[str, Any] | None:
    activity = args.get("activity")
    if isinstance(activity, dict):
        activity = dict(activity)
    elif args.get("poi_name") or args.get("time_slot"):
        activity = {
            "time_slot": args.get("time_slot") or "Morning",
            "poi_name": args.get("poi_name"),
            "duration_minutes": args.get("duration_minutes") or 60,
            "notes": args.get("notes") or "",
        }
    else:
        return None

    # Only fill coordinates on new activities; update_activity keeps what it had.
    if args.get("action") == "add_activity" and "lat" not in activity:
        coords = context.lookup_poi(activity.get("poi_name") or "")
        if coords is not None:
            activity["lat"], activity["lon"] = coords
    return activity


async def _update_itinerary(args: dict[str, Any], context: ToolContext, _providers: ToolProviders) -> dict[str, Any]:
    action = str(args["action"])
    name = args.get("name")
    destination = args.get("destination")

    if action == "set":
        try:
            full = _parse_full_itinerary(args)
        except orjson.JSONDecodeError:
            return {"success": False, "error": "Invalid itinerary_json format"}
        if full is not None:
            if name:
                full["name"] = name
            elif not full.get("name") and full.get("destination"):
                full["name"] = f"{full['destination']} Adventure"
            context.itinerary = recalculate_travel_times(full)
            return _itinerary_result(context.itinerary, "Itinerary set successfully")

    if action == "build":
        try:
            num_days = int(args.get("num_days") or 0)
        except (TypeError, ValueError):
            num_days = 0
        if num_days > 0:
            preferences = args.get("preferences") if isinstance(args.get("preferences"), dict) else {}
            context.itinerary = build_itinerary(
                [p for p in args.get("pois") or [] if isinstance(p, dict)],
                num_days,
                pace=str(preferences.get("pace") or "moderate"),
                destination=destination,
                name=name,
            )
            return _itinerary_result(context.itinerary, f"Built {num_days}-day itinerary")

    if context.itinerary is None:
        context.itinerary = new_itinerary(destination, name)
    else:
        if destination:
            context.itinerary["destination"] = destination
        if name:
            context.itinerary["name"] = name
        if not context.itinerary.get("name") and context.itinerary.get("destination"):
            context.itinerary["name"] = f"{context.itinerary['destination']} Adventure"

    if action in UPDATE_ACTIONS:
        try:
            day_number = int(args["day_number"]) if args.get("day_number") is not None else None
        except (TypeError, ValueError):
            day_number = None
        context.itinerary = apply_update(context.itinerary, action, day_number, _activity_from_args(args, context))
    elif action not in {"set", "build"}:
        return {"success": False, "error": f"Unknown itinerary action: {action}"}

    logger.debug("itinerary updated action=%s days=%s", action, len(context.itinerary.get("days") or []))
    return _itinerary_result(context.itinerary, f"Itinerary updated: {action}")


async def _get_city_info(args: dict[str, Any], _context: ToolContext, providers: ToolProviders) -> dict[str, Any]:
    destination = str(args["destination"])
    topic = str(args["topic"])
    info = await providers.city_guide.lookup(destination, topic)
    return {
        "success": True,
        "destination": destination,
        "topic": topic,
        "content": info["content"],
        "source": info["source"],
    }


async def _get_weather(args: dict[str, Any], _context: ToolContext, providers: ToolProviders) -> dict[str, Any]:
    weather = await providers.weather.forecast(str(args["destination"]), str(args["date"]))
    return {"success": True, "weather": weather}


async def _calculate_travel_time(
    args: dict[str, Any],
    context: ToolContext,
    _providers: ToolProviders,
) -> dict[str, Any]:
    mode = str(args.get("mode") or DEFAULT_TRAVEL_MODE)
    if mode not in TRAVEL_SPEEDS_KMH:
        return {"success": False, "error": f"Unsupported travel mode: {mode}"}

    origin = context.lookup_poi(str(args["from_poi"]))
    target = context.lookup_poi(str(args["to_poi"]))
    if origin is None or target is None:
        return {"success": False, "error": "Location coordinates not found. Please search for POIs first."}

    distance = haversine_km(origin[0], origin[1], target[0], target[1])
    return {
        "success": True,
        "from": args["from_poi"],
        "to": args["to_poi"],
        "distance_km": round(distance, 1),
        "travel_time_minutes": estimate_travel_minutes(distance, mode),
        "mode": mode,
    }


async def _search_destination_info(
    args: dict[str, Any],
    _context: ToolContext,
    providers: ToolProviders,
) -> dict[str, Any]:
    info = await providers.destination_search.search(str(args["destination"]), str(args["query_type"]))
    return {"success": True, **info}


TOOL_HANDLERS: dict[str, ToolHandler] = {
    "poi_search": _poi_search,
    "update_itinerary": _update_itinerary,
    "get_city_info": _get_city_info,
    "get_weather": _get_weather,
    "calculate_travel_time": _calculate_travel_time,
    "search_destination_info": _search_destination_info,
}


__all__ = ["TOOL_HANDLERS", "ToolHandler"]
