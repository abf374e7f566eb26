"""Connectivity check against the prediction service."""

from __future__ import annotations

from typing import Optional

from pricing_helper.domain.schemas import HealthStatus
from pricing_helper.domain.session import PricingSession
from pricing_helper.services.prediction_client import (
    PredictionServiceClient,
    PredictionServiceError,
)
from pricing_helper.utils.logger import get_logger


logger = get_logger(__name__)


class HealthController:
    def __init__(self, session: PricingSession, client: PredictionServiceClient) -> None:
        self._session = session
        self._client = client

    def check_health(self) -> Optional[HealthStatus]:
        state = self._session.health_state
        with self._session.lock:
            ticket = state.begin()

        try:
            health = self._client.health()
        except PredictionServiceError as exc:
            with self._session.lock:
                if state.is_current(ticket):
                    self._session.health = None
                    state.fail(str(exc))
            return None

        with self._session.lock:
            if not state.is_current(ticket):
                logger.info("Discarding superseded health response | ticket=%s", ticket)
                return None
            self._session.health = health
            state.succeed()
        logger.info(
            "Health check passed | status=%s n_rows=%s booking_model_loaded=%s",
            health.status,
            health.n_rows,
            health.booking_model_loaded,
        )
        return health
