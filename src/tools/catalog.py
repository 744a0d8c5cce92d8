"""Tool catalog advertised to the upstream model.

The catalog is declared once and rendered two ways: the live session wants
upper-cased JSON-schema type names (``STRING``, ``ARRAY``...) while the REST
fallback takes them as written.
"""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ToolParameter:
    name: str
    type: str
    description: str
    enum: tuple[str, ...] = ()
    items_type: str | None = None

    def to_schema(self, *, upper_types: bool) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": _type_name(self.type, upper_types), "description": self.description}
        if self.enum:
            schema["enum"] = list(self.enum)
        if self.items_type is not None:
            schema["items"] = {"type": _type_name(self.items_type, upper_types)}
        return schema


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    name: str
    description: str
    parameters: tuple[ToolParameter, ...]
    required: tuple[str, ...] = ()

    def to_declaration(self, *, upper_types: bool) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": {
                "type": _type_name("object", upper_types),
                "properties": {p.name: p.to_schema(upper_types=upper_types) for p in self.parameters},
                "required": list(self.required),
            },
        }


def _type_name(value: str, upper: bool) -> str:
    return value.upper() if upper else value


POI_SEARCH = ToolDefinition(
    name="poi_search",
    description=(
        "Search for points of interest at a destination. Use this to find restaurants, attractions, temples, "
        "markets, and other places based on category and user interests."
    ),
    parameters=(
        ToolParameter(
            "destination", "string", 'The city/destination to search in (e.g., "Jaipur, India", "Paris, France")'
        ),
        ToolParameter(
            "category",
            "string",
            "The category of POI to search for",
            enum=("restaurant", "attraction", "temple", "market", "museum", "park", "hotel"),
        ),
        ToolParameter(
            "interests",
            "array",
            'User interests to filter results (e.g., ["vegetarian", "historical", "photography"])',
            items_type="string",
        ),
        ToolParameter("limit", "number", "Maximum number of results to return (default: 5)"),
    ),
    required=("destination", "category"),
)

UPDATE_ITINERARY = ToolDefinition(
    name="update_itinerary",
    description=(
        "Update the travel itinerary. Use this to add, modify, or remove activities from specific days. "
        "Always call this when the user asks to change their trip plan."
    ),
    parameters=(
        ToolParameter(
            "action",
            "string",
            "The type of update to perform",
            enum=("set", "add_activity", "remove_activity", "update_activity", "clear_day"),
        ),
        ToolParameter("day_number", "integer", "The day number to update (1-indexed)"),
        ToolParameter(
            "time_slot", "string", "Time slot for the activity", enum=("Morning", "Afternoon", "Evening")
        ),
        ToolParameter("poi_name", "string", "Name of the place/activity"),
        ToolParameter("duration_minutes", "integer", "Expected duration in minutes"),
        ToolParameter("notes", "string", "Additional notes or tips"),
        ToolParameter("destination", "string", "Destination city (for set action)"),
        ToolParameter(
            "name",
            "string",
            'A creative, memorable name for the trip itinerary (e.g., "Pink City Adventure", "Roman Holiday", '
            '"Tokyo Food Trail"). Generate this based on the destination and trip theme.',
        ),
        ToolParameter("itinerary_json", "string", 'JSON string of full itinerary when action is "set"'),
    ),
    required=("action",),
)

GET_CITY_INFO = ToolDefinition(
    name="get_city_info",
    description=(
        "Get general information about a destination including travel tips, safety info, best times to visit, "
        "local customs, and etiquette. Use this for background context."
    ),
    parameters=(
        ToolParameter(
            "destination", "string", 'The city/destination to get information about (e.g., "Jaipur", "Paris")'
        ),
        ToolParameter(
            "topic",
            "string",
            "The topic to get information about",
            enum=("overview", "safety", "weather", "customs", "transport", "food", "shopping", "history"),
        ),
    ),
    required=("destination", "topic"),
)

GET_WEATHER = ToolDefinition(
    name="get_weather",
    description=(
        "Get weather forecast for a destination for trip planning. "
        "Returns temperature, conditions, and recommendations."
    ),
    parameters=(
        ToolParameter(
            "destination",
            "string",
            'The city/destination to get weather for (e.g., "Jaipur, India", "Paris, France")',
        ),
        ToolParameter("date", "string", "Date in YYYY-MM-DD format (within next 7 days)"),
    ),
    required=("destination", "date"),
)

CALCULATE_TRAVEL_TIME = ToolDefinition(
    name="calculate_travel_time",
    description="Calculate estimated travel time between two locations at a destination.",
    parameters=(
        ToolParameter(
            "destination", "string", 'The city/destination where the locations are (e.g., "Jaipur", "Paris")'
        ),
        ToolParameter("from_poi", "string", "Starting location name"),
        ToolParameter("to_poi", "string", "Destination location name"),
        ToolParameter(
            "mode", "string", "Mode of transport (default: taxi)", enum=("auto", "taxi", "walking")
        ),
    ),
    required=("destination", "from_poi", "to_poi"),
)

SEARCH_DESTINATION_INFO = ToolDefinition(
    name="search_destination_info",
    description=(
        "Search the web for detailed information about a destination. Use this to get up-to-date travel "
        "information, top attractions, local tips, and cultural insights for any destination worldwide. "
        "Always use this before planning a trip to a new destination."
    ),
    parameters=(
        ToolParameter(
            "destination",
            "string",
            'The city or destination to search for (e.g., "Tokyo, Japan", "Barcelona, Spain")',
        ),
        ToolParameter(
            "query_type",
            "string",
            "Type of information to search for",
            enum=("overview", "attractions", "food", "culture", "tips", "neighborhoods"),
        ),
    ),
    required=("destination", "query_type"),
)

TOOL_CATALOG: tuple[ToolDefinition, ...] = (
    POI_SEARCH,
    UPDATE_ITINERARY,
    GET_CITY_INFO,
    GET_WEATHER,
    CALCULATE_TRAVEL_TIME,
    SEARCH_DESTINATION_INFO,
)


def live_declarations(catalog: tuple[ToolDefinition, ...] = TOOL_CATALOG) -> list[dict[str, Any]]:
    """Function declarations for the live setup frame (upper-cased types)."""
    return [tool.to_declaration(upper_types=True) for tool in catalog]


def fallback_declarations(catalog: tuple[ToolDefinition, ...] = TOOL_CATALOG) -> list[dict[str, Any]]:
    return [tool.to_declaration(upper_types=False) for tool in catalog]


__all__ = [
    "TOOL_CATALOG",
    "ToolDefinition",
    "ToolParameter",
    "fallback_declarations",
    "live_declarations",
]
