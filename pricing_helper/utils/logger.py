"""Logging setup shared by the dashboard, the launcher and the controllers."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from pricing_helper.utils.config import get_settings


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_HANDLER_INSTALLED = False
_APPLIED_LEVEL: Optional[str] = None


def _resolve_level(level: Optional[str]) -> str:
    name = (level or get_settings().log_level).strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ValueError(f"unknown log level: {name!r}")
    return name


def configure_logging(level: Optional[str] = None) -> str:
    """Install the stdout handler once, then (re)apply the log level.

    Streamlit reruns the dashboard script on every interaction, so the handler
    is only installed on the first call. The level is resolved on every call:
    after ``get_settings.cache_clear()`` a new ``LOG_LEVEL`` takes effect on
    the next rerun without restarting the process.
    """

    global _HANDLER_INSTALLED, _APPLIED_LEVEL
    resolved_level = _resolve_level(level)

    if not _HANDLER_INSTALLED:
        logging.basicConfig(level=resolved_level, format=LOG_FORMAT, stream=sys.stdout)
        _HANDLER_INSTALLED = True

    if resolved_level != _APPLIED_LEVEL:
        logging.getLogger().setLevel(resolved_level)
        _APPLIED_LEVEL = resolved_level
    return resolved_level


def get_logger(name: str) -> logging.Logger:
    """Return a module logger, configuring logging on first use."""
    if not _HANDLER_INSTALLED:
        configure_logging()
    return logging.getLogger(name)
