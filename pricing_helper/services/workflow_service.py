"""Pricing workflow orchestration: recommend -> adjust base price -> simulate week."""

from __future__ import annotations

from typing import Optional, Union

import pandas as pd

from pricing_helper.controllers.booking_controller import BookingSimulationController
from pricing_helper.controllers.health_controller import HealthController
from pricing_helper.controllers.mode_controller import ModeController
from pricing_helper.controllers.recommendation_controller import RecommendationController
from pricing_helper.domain.models import FeatureInput, PipelineMode
from pricing_helper.domain.schemas import BookingWeek, HealthStatus, Recommendation
from pricing_helper.domain.session import PricingSession
from pricing_helper.services.prediction_client import PredictionServiceClient
from pricing_helper.utils.config import Settings, get_settings
from pricing_helper.utils.logger import get_logger


logger = get_logger(__name__)

BOOKING_WEEK_COLUMNS = ["date", "effective_price", "prob_booked_pct", "prob_vacant_pct"]


class PricingWorkflowService:
    """Wires one session to its transport and controllers.

    Every collaborator can be injected; anything omitted is built from
    ``settings`` so the dashboard needs a single constructor call.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[PricingSession] = None,
        client: Optional[PredictionServiceClient] = None,
    ) -> None:
        self._settings = settings or get_settings()
        if session is None:
            api_base = client.base_url if client is not None else self._settings.api_base_url
            session = PricingSession(api_base=api_base)
        self._session = session
        self._client = client or PredictionServiceClient(settings=self._settings)
        # The session owns the base URL; the client follows it.
        self._client.base_url = self._session.api_base

        self.modes = ModeController(self._session)
        self.health = HealthController(self._session, self._client)
        self.recommendations = RecommendationController(
            self._session,
            self._client,
            mode_controller=self.modes,
        )
        self.bookings = BookingSimulationController(self._session, self._client)

    @property
    def session(self) -> PricingSession:
        return self._session

    def set_api_base(self, api_base: str) -> None:
        cleaned = api_base.strip()
        with self._session.lock:
            self._session.api_base = cleaned
            self._client.base_url = cleaned
        logger.info("API base updated | api_base=%s", cleaned)

    def select_mode(self, mode: Union[PipelineMode, str]) -> PipelineMode:
        return self.modes.select_mode(mode)

    def set_flags(self, *, weekend: Optional[bool] = None, holiday: Optional[bool] = None) -> None:
        with self._session.lock:
            if weekend is not None:
                self._session.flags.weekend = bool(weekend)
            if holiday is not None:
                self._session.flags.holiday = bool(holiday)

    def set_row_index(self, row_index: str) -> None:
        with self._session.lock:
            self._session.identifier_input.row_index = row_index

    def set_feature_input(self, feature_input: FeatureInput) -> None:
        with self._session.lock:
            self._session.feature_input = feature_input

    def edit_base_price(self, value: str) -> None:
        self._session.edit_base_price(value)

    def edit_start_date(self, value: str) -> None:
        with self._session.lock:
            self._session.start_date = value

    def check_health(self) -> Optional[HealthStatus]:
        return self.health.check_health()

    def recommend(self) -> Optional[Recommendation]:
        return self.recommendations.recommend()

    def recommend_by_identifier(
        self,
        row_index: Union[str, int, None] = None,
        weekend_flag: Optional[bool] = None,
        holiday_flag: Optional[bool] = None,
    ) -> Optional[Recommendation]:
        return self.recommendations.recommend_by_identifier(row_index, weekend_flag, holiday_flag)

    def recommend_by_feature_set(
        self,
        feature_input: Optional[FeatureInput] = None,
        weekend_flag: Optional[bool] = None,
        holiday_flag: Optional[bool] = None,
    ) -> Optional[Recommendation]:
        return self.recommendations.recommend_by_feature_set(
            feature_input,
            weekend_flag,
            holiday_flag,
        )

    def simulate_week(self) -> Optional[BookingWeek]:
        return self.bookings.simulate_week()

    def booking_week_frame(self) -> pd.DataFrame:
        with self._session.lock:
            booking_week = self._session.booking_week
        if booking_week is None:
            return pd.DataFrame(columns=BOOKING_WEEK_COLUMNS)
        return pd.DataFrame(
            [day.model_dump() for day in booking_week.results],
            columns=BOOKING_WEEK_COLUMNS,
        )
