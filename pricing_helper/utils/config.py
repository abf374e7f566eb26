"""Environment-driven settings for the pricing helper client."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


DEFAULT_API_BASE_URL = "http://localhost:8000"


@dataclass(frozen=True)
class Settings:
    app_name: str = "Pricing Helper"
    log_level: str = "INFO"

    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout_seconds: float = 10.0
    health_timeout_seconds: float = 5.0

    room_type_choices: tuple[str, ...] = (
        "Entire home/apt",
        "Private room",
        "Shared room",
        "Hotel room",
    )

    dashboard_host: str = "127.0.0.1"
    dashboard_port: int = 8501


def _float_env(key: str, default: float) -> float:
    value = os.getenv(key)
    if not value:
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {value!r}") from exc


def _int_env(key: str, default: int) -> int:
    value = os.getenv(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {value!r}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process; call ``get_settings.cache_clear()`` to reload."""
    return Settings(
        app_name=os.getenv("PRICING_APP_NAME", Settings.app_name),
        log_level=os.getenv("LOG_LEVEL", Settings.log_level),
        api_base_url=os.getenv("PRICING_API_BASE_URL", DEFAULT_API_BASE_URL),
        request_timeout_seconds=_float_env(
            "PRICING_REQUEST_TIMEOUT_SECONDS",
            Settings.request_timeout_seconds,
        ),
        health_timeout_seconds=_float_env(
            "PRICING_HEALTH_TIMEOUT_SECONDS",
            Settings.health_timeout_seconds,
        ),
        dashboard_host=os.getenv("PRICING_DASHBOARD_HOST", Settings.dashboard_host),
        dashboard_port=_int_env("PRICING_DASHBOARD_PORT", Settings.dashboard_port),
    )
