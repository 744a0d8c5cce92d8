"""Per-connection state shared by tool calls."""

from __future__ import annotations

from typing import Any
from dataclasses import field, dataclass


@dataclass(slots=True)
class ToolContext:
    """Lives as long as the client connection, across upstream resets."""

    itinerary: dict[str, Any] | None = None
    # Lower-cased POI name -> (lat, lon), filled by poi_search results.
    poi_coordinates: dict[str, tuple[float, float]] = field(default_factory=dict)

    def remember_poi(self, name: str, lat: float | None, lon: float | None) -> None:
        if not name or lat is None or lon is None:
            return
        self.poi_coordinates[name.strip().lower()] = (float(lat), float(lon))

    def lookup_poi(self, name: str) -> tuple[float, float] | None:
        return self.poi_coordinates.get((name or "").strip().lower())


__all__ = ["ToolContext"]
