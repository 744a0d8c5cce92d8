from __future__ import annotations

import pytest

from src.state.settings import ProviderSettings, UpstreamSettings


@pytest.fixture
def upstream_settings() -> UpstreamSettings:
    return UpstreamSettings(
        api_key="test-key",
        live_url="wss://upstream.test/live",
        live_model="models/live-test",
        rest_url="https://upstream.test/v1beta/models",
        fallback_model="rest-test",
        connect_timeout_s=1.0,
        wire_case="snake",
        audio_mime_type="audio/pcm;rate=16000",
        temperature=0.7,
        max_output_tokens=2048,
        request_timeout_s=5.0,
    )


@pytest.fixture
def provider_settings() -> ProviderSettings:
    return ProviderSettings(
        nominatim_url="https://geo.test/search",
        overpass_url="https://overpass.test/api",
        open_meteo_url="https://weather.test/forecast",
        wikivoyage_url="https://voyage.test/api.php",
        wikipedia_url="https://pedia.test/api.php",
        user_agent="travel-live-bridge-tests",
        timeout_s=1.0,
    )
