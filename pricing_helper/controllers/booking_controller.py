"""Seven-day booking simulation dispatched per pinned pipeline mode."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Optional

from pydantic import BaseModel

from pricing_helper.domain.coercion import InputValidationError
from pricing_helper.domain.models import PipelineMode
from pricing_helper.domain.payloads import (
    build_booking_week_by_index,
    build_booking_week_from_features,
)
from pricing_helper.domain.schemas import BookingWeek
from pricing_helper.domain.session import PricingSession
from pricing_helper.services.prediction_client import (
    PredictionServiceClient,
    PredictionServiceError,
)
from pricing_helper.utils.logger import get_logger


logger = get_logger(__name__)


class BookingSimulationController:
    """Simulates booking probability for the session's base price and start date.

    Only ``base_price`` and ``start_date`` are required; the pinned mode picks
    whether the listing is identified by row index or by its full feature set.
    Booked/vacant probabilities are stored as returned and never recomputed.
    """

    def __init__(self, session: PricingSession, client: PredictionServiceClient) -> None:
        self._session = session
        self._client = client

    def _prepare(self) -> tuple[PipelineMode, BaseModel, Callable[[BaseModel], BookingWeek]]:
        session = self._session
        with session.lock:
            mode = session.mode
            base_price = session.base_price
            start_date = session.start_date
            identifier = replace(session.identifier_input)
            features = replace(session.feature_input)
            flags = replace(session.flags)

        if mode is PipelineMode.BY_IDENTIFIER:
            body = build_booking_week_by_index(identifier, base_price, start_date)
            return mode, body, self._client.booking_week_by_index
        if mode is PipelineMode.BY_FEATURE_SET:
            body = build_booking_week_from_features(features, flags, base_price, start_date)
            return mode, body, self._client.booking_week_from_features
        raise InputValidationError("mode", f"unsupported pipeline mode: {mode!r}")

    def simulate_week(self) -> Optional[BookingWeek]:
        state = self._session.booking_state
        try:
            mode, body, send = self._prepare()
        except InputValidationError as exc:
            logger.info("Booking simulation rejected locally | field=%s", exc.field)
            with self._session.lock:
                # An older request still in flight must not clear this error.
                state.invalidate()
                state.fail(str(exc))
            return None

        with self._session.lock:
            ticket = state.begin()

        try:
            booking_week = send(body)
        except PredictionServiceError as exc:
            with self._session.lock:
                if state.is_current(ticket):
                    state.fail(str(exc))
            return None

        with self._session.lock:
            if not state.is_current(ticket):
                logger.info(
                    "Discarding superseded booking week | mode=%s ticket=%s",
                    mode.value,
                    ticket,
                )
                return None
            self._session.booking_week = booking_week
            state.succeed()

        logger.info(
            "Booking week stored | mode=%s base_price=%.2f days=%s",
            mode.value,
            booking_week.base_price,
            len(booking_week.results),
        )
        return booking_week
