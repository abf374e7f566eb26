from __future__ import annotations

import pytest

from pricing_helper.utils.config import DEFAULT_API_BASE_URL, get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch):
    monkeypatch.delenv("PRICING_API_BASE_URL", raising=False)
    monkeypatch.delenv("PRICING_REQUEST_TIMEOUT_SECONDS", raising=False)
    settings = get_settings()
    assert settings.api_base_url == DEFAULT_API_BASE_URL
    assert settings.request_timeout_seconds == 10.0
    assert "Entire home/apt" in settings.room_type_choices


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PRICING_API_BASE_URL", "http://pricing.internal:9000")
    monkeypatch.setenv("PRICING_REQUEST_TIMEOUT_SECONDS", "2.5")
    settings = get_settings()
    assert settings.api_base_url == "http://pricing.internal:9000"
    assert settings.request_timeout_seconds == 2.5


def test_invalid_timeout_is_rejected(monkeypatch):
    monkeypatch.setenv("PRICING_REQUEST_TIMEOUT_SECONDS", "soon")
    with pytest.raises(ValueError):
        get_settings()
