"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_concurrent_connections: int


@dataclass(frozen=True, slots=True)
class UpstreamSettings:
    api_key: str
    live_url: str
    live_model: str
    rest_url: str
    fallback_model: str
    connect_timeout_s: float
    wire_case: str
    audio_mime_type: str
    temperature: float
    max_output_tokens: int
    request_timeout_s: float


@dataclass(frozen=True, slots=True)
class ProviderSettings:
    nominatim_url: str
    overpass_url: str
    open_meteo_url: str
    wikivoyage_url: str
    wikipedia_url: str
    user_agent: str
    timeout_s: float


@dataclass(frozen=True, slots=True)
class AppSettings:
    limits: LimitsSettings
    upstream: UpstreamSettings
    providers: ProviderSettings
    system_instruction: str


__all__ = [
    "AppSettings",
    "LimitsSettings",
    "ProviderSettings",
    "UpstreamSettings",
]
