"""Recommendation pipelines: lookup by dataset row, or by listing features."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Optional, Union

from pydantic import BaseModel

from pricing_helper.controllers.mode_controller import ModeController
from pricing_helper.domain.coercion import InputValidationError
from pricing_helper.domain.models import FeatureInput, PipelineMode
from pricing_helper.domain.payloads import (
    build_recommend_by_index,
    build_recommend_from_features,
)
from pricing_helper.domain.schemas import Recommendation
from pricing_helper.domain.session import PricingSession
from pricing_helper.services.prediction_client import (
    PredictionServiceClient,
    PredictionServiceError,
)
from pricing_helper.utils.logger import get_logger


logger = get_logger(__name__)


class RecommendationController:
    """Runs one recommendation pipeline per call and seeds the booking stage.

    On success the recommendation is stored, the mode is pinned to the
    pipeline that produced it, the base price is re-seeded and any booking
    week is cleared. On failure only the error slot changes.
    """

    def __init__(
        self,
        session: PricingSession,
        client: PredictionServiceClient,
        mode_controller: Optional[ModeController] = None,
    ) -> None:
        self._session = session
        self._client = client
        self._mode_controller = mode_controller or ModeController(session)

    def recommend(self) -> Optional[Recommendation]:
        if self._session.mode is PipelineMode.BY_IDENTIFIER:
            return self.recommend_by_identifier()
        return self.recommend_by_feature_set()

    def recommend_by_identifier(
        self,
        row_index: Union[str, int, None] = None,
        weekend_flag: Optional[bool] = None,
        holiday_flag: Optional[bool] = None,
    ) -> Optional[Recommendation]:
        with self._session.lock:
            if row_index is not None:
                self._session.identifier_input.row_index = str(row_index)
            self._update_flags(weekend_flag, holiday_flag)
            identifier = replace(self._session.identifier_input)
            flags = replace(self._session.flags)

        return self._run(
            mode=PipelineMode.BY_IDENTIFIER,
            build=lambda: build_recommend_by_index(identifier, flags),
            send=self._client.recommend_by_index,
        )

    def recommend_by_feature_set(
        self,
        feature_input: Optional[FeatureInput] = None,
        weekend_flag: Optional[bool] = None,
        holiday_flag: Optional[bool] = None,
    ) -> Optional[Recommendation]:
        with self._session.lock:
            if feature_input is not None:
                self._session.feature_input = replace(feature_input)
            self._update_flags(weekend_flag, holiday_flag)
            features = replace(self._session.feature_input)
            flags = replace(self._session.flags)

        return self._run(
            mode=PipelineMode.BY_FEATURE_SET,
            build=lambda: build_recommend_from_features(features, flags),
            send=self._client.recommend_from_features,
        )

    def _update_flags(self, weekend_flag: Optional[bool], holiday_flag: Optional[bool]) -> None:
        if weekend_flag is not None:
            self._session.flags.weekend = bool(weekend_flag)
        if holiday_flag is not None:
            self._session.flags.holiday = bool(holiday_flag)

    def _run(
        self,
        *,
        mode: PipelineMode,
        build: Callable[[], BaseModel],
        send: Callable[[BaseModel], Recommendation],
    ) -> Optional[Recommendation]:
        state = self._session.recommendation_state
        try:
            body = build()
        except InputValidationError as exc:
            logger.info("Recommendation rejected locally | mode=%s field=%s", mode.value, exc.field)
            with self._session.lock:
                # An older request still in flight must not clear this error.
                state.invalidate()
                state.fail(str(exc))
            return None

        with self._session.lock:
            ticket = state.begin()

        try:
            recommendation = send(body)
        except PredictionServiceError as exc:
            with self._session.lock:
                if state.is_current(ticket):
                    state.fail(str(exc))
            return None

        with self._session.lock:
            if not state.is_current(ticket):
                logger.info(
                    "Discarding superseded recommendation | mode=%s ticket=%s",
                    mode.value,
                    ticket,
                )
                return None
            self._session.apply_recommendation(recommendation)
            self._mode_controller.pin(mode)
            state.succeed()

        logger.info(
            "Recommendation stored | mode=%s final_price=%.2f base_price=%s",
            mode.value,
            recommendation.final_price,
            self._session.base_price,
        )
        return recommendation
