"""Destination background from Wikivoyage, sliced by topic."""

from __future__ import annotations

import logging

import httpx

from src.state.settings import ProviderSettings

from .wiki import city_name, fetch_extract

logger = logging.getLogger(__name__)

TOPIC_HEADERS: dict[str, tuple[str, ...]] = {
    "overview": ("understand", "introduction"),
    "safety": ("stay safe", "safety", "crime"),
    "weather": ("climate", "weather", "when to visit"),
    "customs": ("respect", "customs", "culture", "etiquette"),
    "transport": ("get around", "transport", "getting around", "by taxi", "by bus"),
    "food": ("eat", "food", "cuisine", "restaurants"),
    "shopping": ("buy", "shopping", "markets"),
    "history": ("history", "background"),
}

MAX_SECTION_LINES = 20
MAX_OVERVIEW_LINES = 15


def _is_section_header(line: str) -> bool:
    return line.startswith("==") or (0 < len(line) < 50 and line == line.upper() and line.strip() != "")


def extract_topic(content: str, topic: str, destination: str) -> str:
    headers = TOPIC_HEADERS.get(topic, (topic,))
    lines = content.split("\n")
    captured: list[str] = []
    capturing = False

    for line in lines:
        if not capturing:
            lowered = line.lower()
            if any(header in lowered for header in headers):
                capturing = True
            continue
        if _is_section_header(line):
            break
        if line.strip():
            captured.append(line)

    if captured:
        return "\n".join(captured[:MAX_SECTION_LINES])
    if topic == "overview":
        return "\n".join(lines[:MAX_OVERVIEW_LINES])
    return (
        f"General information about {topic} in {destination}. For more detailed information, "
        "please search for specific places or use web resources."
    )


class CityGuide:
    def __init__(self, client: httpx.AsyncClient, settings: ProviderSettings) -> None:
        self._client = client
        self._settings = settings
        self._cache: dict[str, dict[str, str]] = {}

    async def lookup(self, destination: str, topic: str) -> dict[str, str]:
        topic = topic.lower()
        key = f"{destination.strip().lower()}:{topic}"
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        try:
            content = await fetch_extract(
                self._client,
                self._settings.wikivoyage_url,
                city_name(destination),
                user_agent=self._settings.user_agent,
                timeout_s=self._settings.timeout_s,
            )
        except httpx.HTTPError:
            logger.warning("wikivoyage lookup failed destination=%s", destination, exc_info=True)
            content = None

        if content is None:
            # Not cached so a later call can retry.
            return {
                "content": (
                    f"Information about {topic} in {destination} is not currently available. "
                    "Please try searching for specific places or attractions."
                ),
                "source": "System",
            }

        result = {"content": extract_topic(content, topic, destination), "source": f"Wikivoyage - {destination}"}
        self._cache[key] = result
        return result


__all__ = ["CityGuide", "TOPIC_HEADERS", "extract_topic"]
