"""Request body assembly from raw session input.

Required fields are enforced here, at submission time, so a rejected body
never reaches the transport.
"""

from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel, ValidationError

from pricing_helper.domain.coercion import (
    InputValidationError,
    coerce_bool,
    coerce_optional_float,
    coerce_optional_int,
    coerce_optional_str,
    coerce_required_date,
    coerce_required_float,
    coerce_required_int,
    is_blank,
)
from pricing_helper.domain.models import FeatureInput, IdentifierInput, SharedFlags
from pricing_helper.domain.schemas import (
    BookingWeekByIndexRequest,
    BookingWeekFromFeaturesRequest,
    RecommendByIndexRequest,
    RecommendFromFeaturesRequest,
)


BASE_PRICE_EMPTY_MESSAGE = "Base price is empty. Fill it first."
START_DATE_EMPTY_MESSAGE = "Start date is empty."

RequestModel = TypeVar("RequestModel", bound=BaseModel)


def _feature_fields(features: FeatureInput, flags: SharedFlags) -> dict[str, object]:
    minimum_nights = (
        1
        if is_blank(features.minimum_nights)
        else coerce_required_int(features.minimum_nights, "minimum_nights", minimum=1)
    )
    return {
        "room_type": features.room_type,
        "property_type": coerce_optional_str(features.property_type),
        "accommodates": coerce_required_int(features.accommodates, "accommodates", minimum=1),
        "bathrooms": coerce_optional_float(features.bathrooms, "bathrooms"),
        "amenities": coerce_optional_str(features.amenities),
        "minimum_nights": minimum_nights,
        "instant_bookable": coerce_bool(features.instant_bookable, "instant_bookable"),
        "review_scores_rating": coerce_optional_float(features.rating, "review_scores_rating"),
        "number_of_reviews": coerce_optional_int(features.reviews, "number_of_reviews", minimum=0),
        "host_is_superhost": coerce_bool(features.superhost, "host_is_superhost"),
        "latitude": coerce_optional_float(features.latitude, "latitude"),
        "longitude": coerce_optional_float(features.longitude, "longitude"),
        "weekend_flag": coerce_bool(flags.weekend, "weekend_flag"),
        "holiday_flag": coerce_bool(flags.holiday, "holiday_flag"),
    }


def _validated(model_cls: type[RequestModel], fields: dict[str, object]) -> RequestModel:
    try:
        return model_cls(**fields)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ())) or model_cls.__name__
        raise InputValidationError(location, f"{location}: {first.get('msg', 'invalid value')}") from exc


def build_recommend_by_index(
    identifier: IdentifierInput,
    flags: SharedFlags,
) -> RecommendByIndexRequest:
    fields = {
        "row_index": coerce_required_int(identifier.row_index, "row_index", minimum=0),
        "weekend_flag": coerce_bool(flags.weekend, "weekend_flag"),
        "holiday_flag": coerce_bool(flags.holiday, "holiday_flag"),
    }
    return _validated(RecommendByIndexRequest, fields)


def build_recommend_from_features(
    features: FeatureInput,
    flags: SharedFlags,
) -> RecommendFromFeaturesRequest:
    return _validated(RecommendFromFeaturesRequest, _feature_fields(features, flags))


def _booking_params(base_price: str, start_date: str) -> dict[str, object]:
    # Emptiness is checked for both fields before either is parsed.
    if is_blank(base_price):
        raise InputValidationError("base_price", BASE_PRICE_EMPTY_MESSAGE)
    if is_blank(start_date):
        raise InputValidationError("start_date", START_DATE_EMPTY_MESSAGE)
    return {
        "start_date": coerce_required_date(start_date, "start_date"),
        "base_price": coerce_required_float(base_price, "base_price"),
    }


def build_booking_week_by_index(
    identifier: IdentifierInput,
    base_price: str,
    start_date: str,
) -> BookingWeekByIndexRequest:
    params = _booking_params(base_price, start_date)
    fields = {
        "row_index": coerce_required_int(identifier.row_index, "row_index", minimum=0),
        **params,
    }
    return _validated(BookingWeekByIndexRequest, fields)


def build_booking_week_from_features(
    features: FeatureInput,
    flags: SharedFlags,
    base_price: str,
    start_date: str,
) -> BookingWeekFromFeaturesRequest:
    params = _booking_params(base_price, start_date)
    fields = {**params, **_feature_fields(features, flags)}
    return _validated(BookingWeekFromFeaturesRequest, fields)
