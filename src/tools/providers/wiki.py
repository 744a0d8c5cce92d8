"""MediaWiki API helpers for Wikivoyage and Wikipedia lookups."""

from __future__ import annotations

from typing import Any

import httpx


def city_name(destination: str) -> str:
    """``"Jaipur, India"`` -> ``"Jaipur"``."""
    return destination.split(",")[0].strip()


def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


async def fetch_extract(
    client: httpx.AsyncClient,
    url: str,
    title: str,
    *,
    user_agent: str,
    timeout_s: float,
    intro_only: bool = False,
) -> str | None:
    """Plain-text extract of a page, or None when the page does not exist."""
    params: dict[str, Any] = {
        "action": "query",
        "titles": title,
        "prop": "extracts",
        "explaintext": 1,
        "format": "json",
    }
    if intro_only:
        params["exintro"] = 1
    response = await client.get(url, params=params, headers={"User-Agent": user_agent}, timeout=timeout_s)
    response.raise_for_status()
    pages = (response.json().get("query") or {}).get("pages") or {}
    for page_id, page in pages.items():
        if page_id == "-1" or "missing" in page:
            return None
        return page.get("extract") or ""
    return None


async def search_title(
    client: httpx.AsyncClient,
    url: str,
    query: str,
    *,
    user_agent: str,
    timeout_s: float,
) -> str | None:
    params = {"action": "query", "list": "search", "srsearch": query, "format": "json", "srlimit": 1}
    response = await client.get(url, params=params, headers={"User-Agent": user_agent}, timeout=timeout_s)
    response.raise_for_status()
    results = (response.json().get("query") or {}).get("search") or []
    if not results:
        return None
    return results[0].get("title")


__all__ = ["city_name", "fetch_extract", "search_title", "truncate"]
