from __future__ import annotations

import pytest

from src.tools.geo import haversine_km, estimate_travel_minutes


def test_haversine_known_distance() -> None:
    # Paris -> London is roughly 344 km.
    assert haversine_km(48.8566, 2.3522, 51.5074, -0.1278) == pytest.approx(344, abs=2)
    assert haversine_km(10.0, 10.0, 10.0, 10.0) == 0


@pytest.mark.parametrize(
    ("distance", "mode", "expected"),
    [
        (0.0, "auto", 10),
        (10.0, "auto", 35),
        (12.5, "taxi", 35),
        (1.0, "walking", 20),
    ],
)
def test_estimate_travel_minutes(distance: float, mode: str, expected: int) -> None:
    assert estimate_travel_minutes(distance, mode) == expected


def test_estimate_travel_minutes_unknown_mode() -> None:
    with pytest.raises(ValueError):
        estimate_travel_minutes(1.0, "teleport")
