"""Wire schemas for the external prediction service."""

from __future__ import annotations

import datetime
from typing import Optional

from pydantic import BaseModel, Field


class RecommendByIndexRequest(BaseModel):
    row_index: int = Field(ge=0)
    weekend_flag: bool
    holiday_flag: bool


class RecommendFromFeaturesRequest(BaseModel):
    room_type: str
    property_type: Optional[str] = None
    accommodates: int = Field(ge=1)
    bathrooms: Optional[float] = None
    amenities: Optional[str] = None
    minimum_nights: int = Field(default=1, ge=1)
    instant_bookable: bool = False
    review_scores_rating: Optional[float] = None
    number_of_reviews: Optional[int] = None
    host_is_superhost: bool = False
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    weekend_flag: bool = False
    holiday_flag: bool = False


class BookingWeekByIndexRequest(BaseModel):
    row_index: int = Field(ge=0)
    start_date: datetime.date
    base_price: float


class BookingWeekFromFeaturesRequest(RecommendFromFeaturesRequest):
    start_date: datetime.date
    base_price: float


class HealthStatus(BaseModel):
    status: str
    n_rows: int
    booking_model_loaded: bool


class Recommendation(BaseModel):
    row_index: Optional[int] = None
    listing_id: Optional[int] = None
    city: Optional[str] = None
    neighbourhood: Optional[str] = None
    peer_median_price: float
    regression_price: float
    final_price: float
    price_bucket_static: Optional[str] = None


class BookingDay(BaseModel):
    date: datetime.date
    effective_price: float
    prob_booked_pct: float
    prob_vacant_pct: float


class BookingWeek(BaseModel):
    row_index: Optional[int] = None
    base_price: float
    results: list[BookingDay]
