"""Load runtime settings.

Configuration values are resolved from the environment in `src/config/*` and
exposed here as structured dataclasses for the rest of the server.
"""

from __future__ import annotations

import logging
from pathlib import Path

from src.config.secrets import get_google_api_key
from src.config.limits import MAX_CONCURRENT_CONNECTIONS
from src.config.prompts import SYSTEM_INSTRUCTION_PATH, DEFAULT_SYSTEM_INSTRUCTION
from src.state.settings import AppSettings, LimitsSettings, ProviderSettings, UpstreamSettings
from src.config.providers import (
    OVERPASS_URL,
    NOMINATIM_URL,
    WIKIPEDIA_URL,
    HTTP_TIMEOUT_S,
    OPEN_METEO_URL,
    WIKIVOYAGE_URL,
    HTTP_USER_AGENT,
)
from src.config.upstream import (
    UPSTREAM_REST_URL,
    UPSTREAM_LIVE_URL,
    UPSTREAM_WIRE_CASE,
    UPSTREAM_LIVE_MODEL,
    FALLBACK_TEMPERATURE,
    UPSTREAM_FALLBACK_MODEL,
    UPSTREAM_AUDIO_MIME_TYPE,
    FALLBACK_MAX_OUTPUT_TOKENS,
    FALLBACK_REQUEST_TIMEOUT_S,
    UPSTREAM_CONNECT_TIMEOUT_S,
)

logger = logging.getLogger(__name__)


def load_system_instruction(path: Path = SYSTEM_INSTRUCTION_PATH) -> str:
    try:
        text = path.read_text(encoding="utf-8").strip()
    except OSError:
        logger.info("system instruction file not found at %s; using built-in prompt", path)
        return DEFAULT_SYSTEM_INSTRUCTION
    return text or DEFAULT_SYSTEM_INSTRUCTION


def load_settings() -> AppSettings:
    return AppSettings(
        limits=LimitsSettings(
            max_concurrent_connections=MAX_CONCURRENT_CONNECTIONS,
        ),
        upstream=UpstreamSettings(
            api_key=get_google_api_key(),
            live_url=UPSTREAM_LIVE_URL,
            live_model=UPSTREAM_LIVE_MODEL,
            rest_url=UPSTREAM_REST_URL,
            fallback_model=UPSTREAM_FALLBACK_MODEL,
            connect_timeout_s=UPSTREAM_CONNECT_TIMEOUT_S,
            wire_case=UPSTREAM_WIRE_CASE,
            audio_mime_type=UPSTREAM_AUDIO_MIME_TYPE,
            temperature=FALLBACK_TEMPERATURE,
            max_output_tokens=FALLBACK_MAX_OUTPUT_TOKENS,
            request_timeout_s=FALLBACK_REQUEST_TIMEOUT_S,
        ),
        providers=ProviderSettings(
            nominatim_url=NOMINATIM_URL,
            overpass_url=OVERPASS_URL,
            open_meteo_url=OPEN_METEO_URL,
            wikivoyage_url=WIKIVOYAGE_URL,
            wikipedia_url=WIKIPEDIA_URL,
            user_agent=HTTP_USER_AGENT,
            timeout_s=HTTP_TIMEOUT_S,
        ),
        system_instruction=load_system_instruction(),
    )


__all__ = ["load_settings", "load_system_instruction"]
