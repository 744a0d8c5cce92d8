"""Destination research combining Wikivoyage sections with Wikipedia extracts."""

from __future__ import annotations

import re
import logging
from typing import Any
from urllib.parse import quote

import httpx

from src.state.settings import ProviderSettings
from src.config.providers import CONTENT_MAX_CHARS

from .wiki import truncate, city_name, search_title, fetch_extract

logger = logging.getLogger(__name__)

QUERY_SECTIONS: dict[str, tuple[str, ...]] = {
    "overview": ("understand",),
    "attractions": ("see", "do", "attractions"),
    "food": ("eat", "drink", "food"),
    "culture": ("understand", "respect", "culture"),
    "tips": ("stay safe", "cope", "get around"),
    "neighborhoods": ("districts", "areas", "neighborhoods"),
}

# Wikivoyage text shorter than this is treated as a stub.
MIN_USEFUL_CHARS = 100
# Below this, Wikipedia content is appended to the Wikivoyage text.
SUPPLEMENT_BELOW_CHARS = 500


def extract_section(content: str, sections: tuple[str, ...]) -> str:
    for section in sections:
        pattern = re.compile(
            rf"(?:^|\n)(?:==+\s*)?{re.escape(section)}(?:\s*==+)?\n([\s\S]*?)(?=\n==|\Z)",
            re.IGNORECASE,
        )
        match = pattern.search(content)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return content


class DestinationSearch:
    def __init__(self, client: httpx.AsyncClient, settings: ProviderSettings) -> None:
        self._client = client
        self._settings = settings

    async def _wikivoyage(self, destination: str, query_type: str) -> str:
        content = await fetch_extract(
            self._client,
            self._settings.wikivoyage_url,
            city_name(destination),
            user_agent=self._settings.user_agent,
            timeout_s=self._settings.timeout_s,
        )
        if not content:
            return ""
        return truncate(extract_section(content, QUERY_SECTIONS.get(query_type, ())), CONTENT_MAX_CHARS)

    async def _wikipedia(self, destination: str, query_type: str) -> str:
        city = city_name(destination)
        query = city if query_type == "overview" else f"{city} {query_type}"
        title = await search_title(
            self._client,
            self._settings.wikipedia_url,
            query,
            user_agent=self._settings.user_agent,
            timeout_s=self._settings.timeout_s,
        )
        content = await fetch_extract(
            self._client,
            self._settings.wikipedia_url,
            title or city,
            user_agent=self._settings.user_agent,
            timeout_s=self._settings.timeout_s,
            intro_only=query_type == "overview",
        )
        return truncate(content or "", CONTENT_MAX_CHARS)

    async def search(self, destination: str, query_type: str) -> dict[str, Any]:
        city = city_name(destination)
        sources: list[dict[str, str]] = []
        content = ""

        try:
            voyage = await self._wikivoyage(destination, query_type)
        except httpx.HTTPError:
            logger.warning("wikivoyage search failed destination=%s", destination, exc_info=True)
            voyage = ""
        if len(voyage) > MIN_USEFUL_CHARS:
            content = voyage
            sources.append({"title": f"Wikivoyage - {city}", "url": f"https://en.wikivoyage.org/wiki/{quote(city)}"})

        try:
            encyclopedia = await self._wikipedia(destination, query_type)
        except httpx.HTTPError:
            logger.warning("wikipedia search failed destination=%s", destination, exc_info=True)
            encyclopedia = ""
        if encyclopedia:
            if not content:
                content = encyclopedia
            elif len(content) < SUPPLEMENT_BELOW_CHARS:
                content += "\n\n--- Additional Information ---\n\n" + encyclopedia
            sources.append({"title": f"Wikipedia - {city}", "url": f"https://en.wikipedia.org/wiki/{quote(city)}"})

        if not content:
            content = (
                f"Unable to fetch detailed information for {destination}. The assistant will use general "
                "knowledge to help plan your trip. Please verify details through official tourism websites."
            )

        return {"destination": destination, "query_type": query_type, "content": content, "sources": sources}


__all__ = ["DestinationSearch", "QUERY_SECTIONS", "extract_section"]
