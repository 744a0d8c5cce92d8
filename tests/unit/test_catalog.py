from __future__ import annotations

from src.tools.catalog import TOOL_CATALOG, live_declarations, fallback_declarations


def test_catalog_names() -> None:
    assert [tool.name for tool in TOOL_CATALOG] == [
        "poi_search",
        "update_itinerary",
        "get_city_info",
        "get_weather",
        "calculate_travel_time",
        "search_destination_info",
    ]


def test_live_declarations_upper_case_types() -> None:
    poi = live_declarations()[0]
    assert poi["name"] == "poi_search"
    assert poi["parameters"]["type"] == "OBJECT"
    assert poi["parameters"]["properties"]["interests"] == {
        "type": "ARRAY",
        "description": 'User interests to filter results (e.g., ["vegetarian", "historical", "photography"])',
        "items": {"type": "STRING"},
    }
    assert poi["parameters"]["required"] == ["destination", "category"]


def test_fallback_declarations_keep_types() -> None:
    update = fallback_declarations()[1]
    props = update["parameters"]["properties"]
    assert update["parameters"]["type"] == "object"
    assert props["day_number"]["type"] == "integer"
    assert props["action"]["enum"] == ["set", "add_activity", "remove_activity", "update_activity", "clear_day"]

