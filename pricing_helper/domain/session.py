"""Per-interaction pricing session state."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from threading import RLock
from typing import Optional, Union

from pricing_helper.domain.coercion import round_half_up
from pricing_helper.domain.models import (
    FeatureInput,
    IdentifierInput,
    OperationState,
    PipelineMode,
    PriceSource,
    SharedFlags,
)
from pricing_helper.domain.schemas import BookingWeek, HealthStatus, Recommendation
from pricing_helper.utils.config import DEFAULT_API_BASE_URL


def _today_iso() -> str:
    return date.today().isoformat()


@dataclass
class PricingSession:
    """Single mutable state object for one operator session.

    Mutate only while holding ``lock``; controllers release it around network
    calls and re-acquire it to apply a completed response in one step.
    """

    api_base: str = DEFAULT_API_BASE_URL
    mode: PipelineMode = PipelineMode.BY_IDENTIFIER
    flags: SharedFlags = field(default_factory=SharedFlags)
    identifier_input: IdentifierInput = field(default_factory=IdentifierInput)
    feature_input: FeatureInput = field(default_factory=FeatureInput)

    recommendation: Optional[Recommendation] = None
    base_price: str = ""
    base_price_source: PriceSource = PriceSource.EMPTY
    start_date: str = field(default_factory=_today_iso)
    booking_week: Optional[BookingWeek] = None
    health: Optional[HealthStatus] = None

    health_state: OperationState = field(default_factory=OperationState)
    recommendation_state: OperationState = field(default_factory=OperationState)
    booking_state: OperationState = field(default_factory=OperationState)

    lock: RLock = field(default_factory=RLock, repr=False, compare=False)

    @property
    def active_input(self) -> Union[IdentifierInput, FeatureInput]:
        if self.mode is PipelineMode.BY_IDENTIFIER:
            return self.identifier_input
        if self.mode is PipelineMode.BY_FEATURE_SET:
            return self.feature_input
        raise ValueError(f"unsupported pipeline mode: {self.mode!r}")

    @property
    def recommended_price(self) -> str:
        if self.recommendation is None:
            return ""
        return str(round_half_up(self.recommendation.final_price))

    def apply_recommendation(self, recommendation: Recommendation) -> None:
        """Store a new recommendation and reset everything derived from the old one."""
        with self.lock:
            self.recommendation = recommendation
            self.base_price = str(round_half_up(recommendation.final_price))
            self.base_price_source = PriceSource.SEEDED
            self.booking_week = None
            self.booking_state.error = ""
            self.booking_state.invalidate()

    def edit_base_price(self, value: str) -> None:
        with self.lock:
            self.base_price = value
            self.base_price_source = PriceSource.EDITED if value.strip() else PriceSource.EMPTY
