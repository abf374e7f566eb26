"""Pipeline mode transitions for a pricing session."""

from __future__ import annotations

from typing import Union

from pricing_helper.domain.coercion import InputValidationError
from pricing_helper.domain.models import FeatureInput, IdentifierInput, PipelineMode
from pricing_helper.domain.session import PricingSession
from pricing_helper.utils.logger import get_logger


logger = get_logger(__name__)


def parse_mode(value: Union[PipelineMode, str]) -> PipelineMode:
    if isinstance(value, PipelineMode):
        return value
    try:
        return PipelineMode(str(value).strip().lower())
    except ValueError as exc:
        choices = ", ".join(mode.value for mode in PipelineMode)
        raise InputValidationError("mode", f"mode must be one of: {choices}") from exc


class ModeController:
    """Single source of truth for which input pipeline is active."""

    def __init__(self, session: PricingSession) -> None:
        self._session = session

    @property
    def mode(self) -> PipelineMode:
        return self._session.mode

    @property
    def active_input(self) -> Union[IdentifierInput, FeatureInput]:
        return self._session.active_input

    def select_mode(self, mode: Union[PipelineMode, str]) -> PipelineMode:
        """Switch pipelines on operator request.

        Sends nothing and keeps the stored recommendation and booking week.
        """
        resolved = parse_mode(mode)
        with self._session.lock:
            previous = self._session.mode
            self._session.mode = resolved
        if previous is not resolved:
            logger.info("Pipeline mode selected | from=%s to=%s", previous.value, resolved.value)
        return resolved

    def pin(self, mode: PipelineMode) -> None:
        """Record the pipeline that produced the current recommendation."""
        with self._session.lock:
            self._session.mode = mode
